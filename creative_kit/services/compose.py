"""Deterministic creative composition - background, hero, logo and autofit copy drawn into layout slots."""

import logging
from io import BytesIO

import numpy as np
from PIL import Image, ImageDraw, ImageOps

from ..config import OVERLAY_FONT_PATH
from ..errors import InvalidInputError
from ..layouts.geometry import denormalize_box
from ..models.image import ComposeInput, PngImage
from ..models.layout import Layout, PixelBox
from ..models.slot import CtaSlot, MediaSlot, TextSlot
from ..utils import round_half_up
from .autofit import autofit_text_to_box, load_font, pillow_measure_for_font
from .overlay import hex_to_rgba

logger = logging.getLogger(__name__)

HEADLINE_LINE_HEIGHT = 1.15
LEGAL_LINE_HEIGHT = 1.1
DARK_BACKGROUND = 0.42                    # mean luminance below this gets light text
BUSY_BACKGROUND_STDEV = 0.19
MIN_CONTRAST = 4.0
PANEL_RADIUS = 26

TEXT_ON_DARK = "#ffffff"
TEXT_ON_LIGHT = "#0b1220"
PANEL_ON_DARK = (0, 0, 0, round_half_up(0.35 * 255))
PANEL_ON_LIGHT = (255, 255, 255, round_half_up(0.55 * 255))
CTA_FILL = "#0f766e"
CTA_BORDER = (2, 6, 23, round_half_up(0.18 * 255))
BADGE_ON_DARK = (255, 255, 255, round_half_up(0.82 * 255))
BADGE_ON_LIGHT = (0, 0, 0, round_half_up(0.35 * 255))

# sRGB luma weights for relative luminance
_LUMA = np.array([0.2126, 0.7152, 0.0722])
_TOP_ANCHORS = {"left": "la", "center": "ma", "right": "ra"}
_MIDDLE_ANCHORS = {"left": "lm", "center": "mm", "right": "rm"}


def relative_luminance(rgb: np.ndarray) -> np.ndarray:
    """WCAG relative luminance of 8-bit sRGB values, shape (..., 3) -> (...)."""
    c = np.asarray(rgb, dtype=float) / 255
    linear = np.where(c <= 0.04045, c / 12.92, ((c + 0.055) / 1.055) ** 2.4)
    return linear @ _LUMA


def contrast_ratio(l1: float, l2: float) -> float:
    hi, lo = max(l1, l2), min(l1, l2)
    return (hi + 0.05) / (lo + 0.05)


def _box_rect(box: PixelBox, image: Image.Image) -> tuple[int, int, int, int]:
    """Integer (x0, y0, x1, y1) inside the image, at least 1px each way."""
    x0 = min(max(round_half_up(box.x), 0), image.width - 1)
    y0 = min(max(round_half_up(box.y), 0), image.height - 1)
    x1 = min(max(round_half_up(box.x + box.w), x0 + 1), image.width)
    y1 = min(max(round_half_up(box.y + box.h), y0 + 1), image.height)
    return x0, y0, x1, y1


def region_luminance(image: Image.Image, box: PixelBox) -> tuple[float, float]:
    """(mean, stdev) luminance of the pixels under box."""
    region = np.asarray(image.crop(_box_rect(box, image)).convert("RGB"))
    lum = relative_luminance(region)
    return float(lum.mean()), float(lum.std())


def _decode(data: bytes) -> Image.Image:
    image = Image.open(BytesIO(data))
    image.load()
    return image.convert("RGBA")


def _composite(image: Image.Image, paint) -> Image.Image:
    """Run paint(draw) on a transparent layer and alpha-blend it over image."""
    layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
    paint(ImageDraw.Draw(layer))
    return Image.alpha_composite(image, layer)


def _rounded(image: Image.Image, box: PixelBox, radius: float, fill, outline=None, width: int = 0) -> Image.Image:
    x0, y0, x1, y1 = _box_rect(box, image)
    radius = min(max(radius, 0), min(x1 - x0, y1 - y0) / 2)
    return _composite(
        image,
        lambda draw: draw.rounded_rectangle(
            (x0, y0, x1 - 1, y1 - 1), radius=int(radius), fill=fill, outline=outline, width=width,
        ),
    )


def _draw_image_into_box(image: Image.Image, picture: Image.Image, box: PixelBox, slot: MediaSlot) -> Image.Image:
    inner_x = box.x + slot.padding_px
    inner_y = box.y + slot.padding_px
    inner_w = max(box.w - slot.padding_px * 2, 1)
    inner_h = max(box.h - slot.padding_px * 2, 1)

    if slot.fit == "cover":
        scale = max(inner_w / picture.width, inner_h / picture.height)
    else:
        scale = min(inner_w / picture.width, inner_h / picture.height)
    draw_w = max(1, round_half_up(picture.width * scale))
    draw_h = max(1, round_half_up(picture.height * scale))
    dx = round_half_up(inner_x + (inner_w - draw_w) / 2)
    dy = round_half_up(inner_y + (inner_h - draw_h) / 2)

    layer = Image.new("RGBA", image.size, (0, 0, 0, 0))
    layer.paste(picture.resize((draw_w, draw_h), Image.Resampling.LANCZOS), (dx, dy))
    return Image.alpha_composite(image, layer)


def _draw_media(image: Image.Image, data: bytes | None, slot: MediaSlot, layout: Layout, name: str) -> Image.Image:
    if not data:
        return image
    try:
        picture = _decode(data)
    except (OSError, ValueError) as e:
        logger.warning(f"Skipping {name} image: {e}")
        return image
    return _draw_image_into_box(image, picture, denormalize_box(slot.box, layout.canvas), slot)


def _draw_text_in_box(
    image: Image.Image,
    box: PixelBox,
    slot: TextSlot,
    text: str,
    font_path: str | None,
    line_height: float,
    auto_panel: bool,
) -> Image.Image:
    avg, stdev = region_luminance(image, box)
    dark = avg < DARK_BACKGROUND
    text_color = TEXT_ON_DARK if dark else TEXT_ON_LIGHT

    if auto_panel:
        best = contrast_ratio(avg, 1.0 if dark else 0.0)
        if stdev > BUSY_BACKGROUND_STDEV or best < MIN_CONTRAST:
            image = _rounded(image, box, PANEL_RADIUS, PANEL_ON_DARK if dark else PANEL_ON_LIGHT)

    fit = autofit_text_to_box(
        text=text,
        box_width_px=box.w,
        box_height_px=box.h,
        padding_px=slot.padding_px,
        max_lines=slot.max_lines,
        min_font_size_px=slot.min_font_px,
        measure_for_font=pillow_measure_for_font(font_path),
        line_height=line_height,
    )

    inner_x = box.x + slot.padding_px
    inner_y = box.y + slot.padding_px
    inner_w = max(box.w - slot.padding_px * 2, 1)
    inner_h = max(box.h - slot.padding_px * 2, 1)
    anchor_x = {"left": inner_x, "center": inner_x + inner_w / 2, "right": inner_x + inner_w}[slot.align]

    draw = ImageDraw.Draw(image)
    font = load_font(font_path, fit.font_size_px)
    cursor_y = inner_y
    for line in fit.lines:
        draw.text((anchor_x, cursor_y), line, font=font, fill=text_color, anchor=_TOP_ANCHORS[slot.align])
        cursor_y += fit.line_height_px
        if cursor_y > inner_y + inner_h + 1:
            break
    return image


def _draw_cta(image: Image.Image, box: PixelBox, slot: CtaSlot, text: str, font_path: str | None) -> Image.Image:
    image = _rounded(image, box, slot.radius_px, hex_to_rgba(CTA_FILL), outline=CTA_BORDER, width=2)
    fit = autofit_text_to_box(
        text=text,
        box_width_px=box.w,
        box_height_px=box.h,
        padding_px=slot.padding_px,
        max_lines=1,
        min_font_size_px=slot.min_font_px,
        measure_for_font=pillow_measure_for_font(font_path),
        line_height=1,
    )
    draw = ImageDraw.Draw(image)
    draw.text(
        (box.x + box.w / 2, box.y + box.h / 2),
        text,
        font=load_font(font_path, fit.font_size_px),
        fill=TEXT_ON_DARK,
        anchor="mm",
    )
    return image


def _draw_badge(image: Image.Image, box: PixelBox, slot: TextSlot, text: str, font_path: str | None) -> Image.Image:
    avg, _ = region_luminance(image, box)
    dark = avg < DARK_BACKGROUND
    image = _rounded(image, box, round_half_up(box.h / 2), BADGE_ON_DARK if dark else BADGE_ON_LIGHT)

    fit = autofit_text_to_box(
        text=text,
        box_width_px=box.w,
        box_height_px=box.h,
        padding_px=slot.padding_px,
        max_lines=slot.max_lines,
        min_font_size_px=slot.min_font_px,
        measure_for_font=pillow_measure_for_font(font_path),
        line_height=1,
    )
    inner_x = box.x + slot.padding_px
    inner_w = max(box.w - slot.padding_px * 2, 1)
    anchor_x = {"left": inner_x, "center": inner_x + inner_w / 2, "right": inner_x + inner_w}[slot.align]

    draw = ImageDraw.Draw(image)
    draw.text(
        (anchor_x, box.y + box.h / 2),
        " ".join(fit.lines),
        font=load_font(font_path, fit.font_size_px),
        fill=TEXT_ON_LIGHT if dark else TEXT_ON_DARK,
        anchor=_MIDDLE_ANCHORS[slot.align],
    )
    return image


def compose_creative(layout: Layout, content: ComposeInput, font_path: str | None = None) -> PngImage:
    """
    Render a finished creative.

    The background is cover-fit to the canvas; hero and logo are fit into
    their slots (contain or cover); headline, subtext and legal are
    autofit into their boxes with a text color picked from the background
    luminance; the CTA is a rounded button; the badge is a pill.

    Args:
        layout: Layout to fill
        content: Background, images and copy
        font_path: TrueType font (defaults to OVERLAY_FONT_PATH, then Pillow's default font)

    Returns:
        PngImage of exactly canvas width x height

    Raises:
        InvalidInputError: If the background cannot be decoded
    """
    size = (layout.canvas.width, layout.canvas.height)
    font_path = font_path or OVERLAY_FONT_PATH
    try:
        background = _decode(content.background)
    except (OSError, ValueError) as e:
        raise InvalidInputError(f"Background image could not be decoded: {e}") from e
    image = ImageOps.fit(background, size, method=Image.Resampling.LANCZOS)

    image = _draw_media(image, content.hero_image, layout.hero, layout, "hero")
    image = _draw_media(image, content.logo_image, layout.logo, layout, "logo")

    def box_of(slot):
        return denormalize_box(slot.box, layout.canvas)

    headline = content.headline.strip()
    sub_text = content.sub_text.strip()
    cta = content.cta_text.strip()
    badge = content.badge_text.strip()
    legal = content.legal_text.strip()
    auto_panel = content.auto_readability_panel

    if headline:
        image = _draw_text_in_box(
            image, box_of(layout.headline), layout.headline, headline, font_path, HEADLINE_LINE_HEIGHT, auto_panel,
        )
    if sub_text:
        image = _draw_text_in_box(
            image, box_of(layout.subtext), layout.subtext, sub_text, font_path, HEADLINE_LINE_HEIGHT, auto_panel,
        )
    if cta:
        image = _draw_cta(image, box_of(layout.cta), layout.cta, cta, font_path)
    if badge and layout.badge is not None:
        image = _draw_badge(image, box_of(layout.badge), layout.badge, badge, font_path)
    if legal and layout.legal is not None:
        image = _draw_text_in_box(
            image, box_of(layout.legal), layout.legal, legal, font_path, LEGAL_LINE_HEIGHT, False,
        )

    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return PngImage(png_bytes=buffer.getvalue())
