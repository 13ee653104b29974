"""Box conversion between normalized and pixel coordinates."""

from ..models.layout import Canvas, PixelBox
from ..models.slot import NormalizedBox
from ..utils import round_half_up


def clamp_box_px(box: PixelBox, canvas: Canvas, min_w: float = 24, min_h: float = 24) -> PixelBox:
    """Force a pixel box inside the canvas, keeping at least min_w x min_h."""
    w = min(max(box.w, min_w), canvas.width)
    h = min(max(box.h, min_h), canvas.height)
    x = min(max(box.x, 0), canvas.width - w)
    y = min(max(box.y, 0), canvas.height - h)
    return PixelBox(x=x, y=y, w=w, h=h)


def normalize_box(box: PixelBox, canvas: Canvas) -> NormalizedBox:
    """Pixel box -> (x, y, w, h) fractions of the canvas."""
    safe = clamp_box_px(box, canvas, min_w=1, min_h=1)
    return (
        safe.x / canvas.width,
        safe.y / canvas.height,
        safe.w / canvas.width,
        safe.h / canvas.height,
    )


def denormalize_box(box: NormalizedBox, canvas: Canvas) -> PixelBox:
    x, y, w, h = box
    return PixelBox(
        x=x * canvas.width,
        y=y * canvas.height,
        w=w * canvas.width,
        h=h * canvas.height,
    )


def layout_safe_zone_px(canvas: Canvas) -> PixelBox:
    """Canvas inset by round(dim * safe_margin_ratio) on every side."""
    margin_x = round_half_up(canvas.width * canvas.safe_margin_ratio)
    margin_y = round_half_up(canvas.height * canvas.safe_margin_ratio)
    return PixelBox(
        x=margin_x,
        y=margin_y,
        w=canvas.width - margin_x * 2,
        h=canvas.height - margin_y * 2,
    )
