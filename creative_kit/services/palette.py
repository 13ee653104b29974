"""Dominant color extraction for brand assets (logos, product shots)."""

from io import BytesIO

import numpy as np
from PIL import Image

KMEANS_ITERATIONS = 8
MIN_ALPHA = 200
NEAR_WHITE_SUM = 740  # r+g+b at or above this is treated as background white
SAME_COLOR_DIST2 = 10


def rgb_to_hex(rgb) -> str:
    r, g, b = (int(v) for v in np.clip(np.floor(np.asarray(rgb, dtype=float) + 0.5), 0, 255))
    return f"#{r:02x}{g:02x}{b:02x}"


def _initial_centroids(pixels: np.ndarray, k: int) -> np.ndarray:
    """First k distinct colors in pixel order, so results are stable."""
    centroids = []
    for px in pixels:
        if any(((c - px) ** 2).sum() < SAME_COLOR_DIST2 for c in centroids):
            continue
        centroids.append(px.copy())
        if len(centroids) >= k:
            break
    while len(centroids) < k:
        centroids.append(pixels[len(centroids) % len(pixels)].copy())
    return np.array(centroids, dtype=float)


def extract_dominant_colors(rgba_pixels, k: int = 3, max_samples: int = 2400) -> list[str]:
    """
    K-means over opaque, non-white pixels.

    Args:
        rgba_pixels: Flat RGBA bytes / sequence, or an (..., 4) uint8 array
        k: Number of colors (clamped to 1..6)
        max_samples: Pixel sample cap (clamped to 200..20000)

    Returns:
        Hex colors, most common first; empty when nothing usable remains
    """
    k = min(max(k, 1), 6)
    max_samples = min(max(max_samples, 200), 20_000)

    if isinstance(rgba_pixels, (bytes, bytearray, memoryview)):
        data = np.frombuffer(rgba_pixels, dtype=np.uint8)
    else:
        data = np.asarray(rgba_pixels, dtype=np.uint8)
    data = data.reshape(-1, 4)

    step = max(len(data) // max_samples, 1)
    sampled = data[::step].astype(float)
    opaque = sampled[:, 3] >= MIN_ALPHA
    not_white = sampled[:, :3].sum(axis=1) < NEAR_WHITE_SUM
    pixels = sampled[opaque & not_white][:max_samples, :3]
    if len(pixels) == 0:
        return []

    centroids = _initial_centroids(pixels, k)
    counts = np.zeros(k, dtype=int)
    for _ in range(KMEANS_ITERATIONS):
        distances = ((pixels[:, None, :] - centroids[None, :, :]) ** 2).sum(axis=2)
        assignments = distances.argmin(axis=1)
        counts = np.bincount(assignments, minlength=k)
        for c in range(k):
            if counts[c] > 0:
                centroids[c] = pixels[assignments == c].mean(axis=0)

    out = []
    for idx in np.argsort(-counts, kind="stable"):
        hex_color = rgb_to_hex(centroids[idx])
        if hex_color not in out:
            out.append(hex_color)
    return out[:k]


def extract_dominant_colors_from_image(image_bytes: bytes, k: int = 3, sample_size_px: int = 96) -> list[str]:
    """Decode an image, fit it into a small square (contain) and extract its colors."""
    sample_size = min(max(sample_size_px, 24), 256)
    image = Image.open(BytesIO(image_bytes)).convert("RGBA")

    scale = min(sample_size / image.width, sample_size / image.height)
    draw_w = max(1, round(image.width * scale))
    draw_h = max(1, round(image.height * scale))
    canvas = Image.new("RGBA", (sample_size, sample_size), (0, 0, 0, 0))
    canvas.paste(image.resize((draw_w, draw_h)), ((sample_size - draw_w) // 2, (sample_size - draw_h) // 2))

    return extract_dominant_colors(np.asarray(canvas), k=k)
