"""Text autofit - pick font size and line breaks so copy fits a slot box."""

import math
import re
from dataclasses import dataclass
from typing import Callable

from PIL import ImageFont

from ..config import OVERLAY_FONT_PATH
from ..layouts.geometry import denormalize_box
from ..models.layout import Layout

MeasureText = Callable[[str], float]
MeasureForFont = Callable[[int], MeasureText]

DEFAULT_LINE_HEIGHT = 1.15
MIN_FONT_HARD = 10  # below this the search only continues to avoid overflow


@dataclass(frozen=True)
class FitResult:
    """Autofit outcome. fits=False means best-effort and may overflow."""
    lines: list[str]
    font_size_px: int
    line_height_px: float
    below_min: bool
    fits: bool


def normalize_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", str(text or "")).strip()


def _wrap_tokens(tokens: list[str], max_width_px: float, measure: MeasureText, joiner: str) -> list[str]:
    lines = []
    current = ""
    for token in tokens:
        if not current:
            current = token
            continue
        candidate = f"{current}{joiner}{token}"
        if measure(candidate) <= max_width_px:
            current = candidate
            continue
        lines.append(current)
        current = token
    if current:
        lines.append(current)
    return lines


def wrap_text(text: str, max_width_px: float, measure: MeasureText) -> list[str]:
    """
    Greedy line wrapping.

    Word boundaries first; a line that is still too wide (one long token) is
    re-wrapped per character. Text without spaces (typical Korean copy)
    wraps per character.
    """
    normalized = normalize_whitespace(text)
    if not normalized:
        return [""]

    if " " not in normalized:
        return _wrap_tokens(list(normalized), max_width_px, measure, "")

    lines = []
    for line in _wrap_tokens(normalized.split(" "), max_width_px, measure, " "):
        if measure(line) <= max_width_px:
            lines.append(line)
        else:
            lines.extend(_wrap_tokens(list(line), max_width_px, measure, ""))
    return lines or [normalized]


def _try_size(text, font_size, inner_w, inner_h, max_lines, line_height, measure_for_font):
    measure = measure_for_font(font_size)
    lines = wrap_text(text, inner_w, measure)
    ok = (
        len(lines) <= max_lines
        and len(lines) * font_size * line_height <= inner_h
        and all(measure(line) <= inner_w for line in lines)
    )
    return lines, ok


def autofit_text_to_box(
    text: str,
    box_width_px: float,
    box_height_px: float,
    padding_px: float,
    max_lines: int,
    min_font_size_px: float,
    measure_for_font: MeasureForFont,
    max_font_size_px: int | None = None,
    line_height: float = DEFAULT_LINE_HEIGHT,
) -> FitResult:
    """
    Find the largest font size at which text fits the padded box.

    Args:
        text: Copy to fit (whitespace is normalized)
        box_width_px, box_height_px: Slot box in pixels
        padding_px: Inner padding on every side
        max_lines: Line limit
        min_font_size_px: Soft minimum; smaller sizes set below_min
        measure_for_font: font size -> (candidate text -> width in px)
        max_font_size_px: Start of the search (defaults to the height bound)
        line_height: Line height multiplier

    Returns:
        FitResult; fits=False when no size down to 1px satisfies the box
    """
    text = normalize_whitespace(text)
    inner_w = max(box_width_px - padding_px * 2, 1)
    inner_h = max(box_height_px - padding_px * 2, 1)

    height_bound = math.floor(inner_h / max(1, max_lines) / line_height)
    start = max_font_size_px if max_font_size_px is not None else height_bound
    max_font = int(min(max(start, 8), max(8, height_bound)))
    min_font_soft = min(max(min_font_size_px, 8), 999)

    for font_size in range(max_font, 0, -1):
        lines, ok = _try_size(text, font_size, inner_w, inner_h, max_lines, line_height, measure_for_font)
        if ok:
            return FitResult(
                lines=lines,
                font_size_px=font_size,
                line_height_px=font_size * line_height,
                below_min=font_size < min_font_soft or font_size < MIN_FONT_HARD,
                fits=True,
            )

    lines = wrap_text(text, inner_w, measure_for_font(1))
    return FitResult(
        lines=lines,
        font_size_px=1,
        line_height_px=line_height,
        below_min=True,
        fits=False,
    )


_font_cache: dict[tuple[str | None, int], ImageFont.FreeTypeFont] = {}


def load_font(font_path: str | None, size: int):
    key = (font_path, size)
    if key not in _font_cache:
        if font_path:
            _font_cache[key] = ImageFont.truetype(font_path, size)
        else:
            _font_cache[key] = ImageFont.load_default(size=size)
    return _font_cache[key]


def pillow_measure_for_font(font_path: str | None = None) -> MeasureForFont:
    """Measurement backend using Pillow font metrics (OVERLAY_FONT_PATH by default)."""
    path = font_path or OVERLAY_FONT_PATH

    def measure_for_font(font_size_px: int) -> MeasureText:
        font = load_font(path, font_size_px)
        return lambda candidate: font.getlength(candidate)

    return measure_for_font


def autofit_layout(
    layout: Layout,
    texts: dict[str, str],
    measure_for_font: MeasureForFont | None = None,
    line_height: float = DEFAULT_LINE_HEIGHT,
) -> dict[str, FitResult]:
    """Autofit copy into every text slot of a layout that has text supplied."""
    measure_for_font = measure_for_font or pillow_measure_for_font()
    results = {}
    for name, slot in layout.text_slots():
        if name not in texts:
            continue
        px = denormalize_box(slot.box, layout.canvas)
        results[name] = autofit_text_to_box(
            text=texts[name],
            box_width_px=px.w,
            box_height_px=px.h,
            padding_px=slot.padding_px,
            max_lines=slot.max_lines,
            min_font_size_px=slot.min_font_px,
            measure_for_font=measure_for_font,
            line_height=line_height,
        )
    return results
