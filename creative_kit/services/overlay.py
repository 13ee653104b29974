"""Guide overlay - transparent PNG showing where each layout slot sits."""

from io import BytesIO

from PIL import Image, ImageDraw, ImageFont

from ..config import OVERLAY_FONT_PATH
from ..layouts.geometry import denormalize_box, layout_safe_zone_px
from ..models.image import PngImage
from ..models.layout import Layout, PixelBox
from ..utils import round_half_up

# slot name -> (stroke color, fill alpha)
SLOT_STYLES = {
    "hero": ("#fb923c", 0.08),
    "logo": ("#a855f7", 0.08),
    "headline": ("#ff2bd6", 0.1),
    "subtext": ("#22d3ee", 0.1),
    "cta": ("#84cc16", 0.1),
    "badge": ("#facc15", 0.08),
    "legal": ("#94a3b8", 0.06),
}
STROKE_WIDTH = 4
LABEL_SIZE = 14
SAFE_ZONE_COLOR = (255, 255, 255, round_half_up(0.65 * 255))
SAFE_ZONE_DASH = (10, 8)


def hex_to_rgba(hex_color: str, alpha: float = 1.0) -> tuple[int, int, int, int]:
    """'#fb923c' (or '#fff') -> (r, g, b, a) with a in 0..255."""
    value = hex_color.lstrip("#")
    if len(value) == 3:
        value = "".join(ch * 2 for ch in value)
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return r, g, b, round_half_up(alpha * 255)


def _label_font():
    if OVERLAY_FONT_PATH:
        return ImageFont.truetype(OVERLAY_FONT_PATH, LABEL_SIZE)
    return ImageFont.load_default(size=LABEL_SIZE)


def _rect(box: PixelBox) -> tuple[int, int, int, int]:
    x, y = round_half_up(box.x), round_half_up(box.y)
    return x, y, x + max(round_half_up(box.w), 1) - 1, y + max(round_half_up(box.h), 1) - 1


def _draw_dashed_rect(draw: ImageDraw.ImageDraw, rect: tuple[int, int, int, int], color, width: int) -> None:
    x0, y0, x1, y1 = rect
    on, off = SAFE_ZONE_DASH
    for start in range(x0, x1, on + off):
        end = min(start + on, x1)
        draw.line([(start, y0), (end, y0)], fill=color, width=width)
        draw.line([(start, y1), (end, y1)], fill=color, width=width)
    for start in range(y0, y1, on + off):
        end = min(start + on, y1)
        draw.line([(x0, start), (x0, end)], fill=color, width=width)
        draw.line([(x1, start), (x1, end)], fill=color, width=width)


def _slot_boxes(layout: Layout) -> list[tuple[str, PixelBox]]:
    slots = list(layout.media_slots()) + list(layout.text_slots())
    return [(name, denormalize_box(slot.box, layout.canvas)) for name, slot in slots]


def render_guide_overlay(layout: Layout, show_safe_zone: bool = False) -> PngImage:
    """
    Render slot guides for a layout.

    Args:
        layout: Layout to visualize
        show_safe_zone: Also draw the dashed safe-zone inset

    Returns:
        PngImage (RGBA PNG, exactly canvas width x height, transparent background)
    """
    size = (layout.canvas.width, layout.canvas.height)
    image = Image.new("RGBA", size, (0, 0, 0, 0))
    font = _label_font()

    if show_safe_zone:
        layer = Image.new("RGBA", size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        zone = layout_safe_zone_px(layout.canvas)
        _draw_dashed_rect(draw, _rect(zone), SAFE_ZONE_COLOR, 2)
        draw.text((zone.x + 8, zone.y + 18), "SAFE_ZONE", font=font, fill=SAFE_ZONE_COLOR, anchor="ls")
        image = Image.alpha_composite(image, layer)

    # one layer per slot so overlapping translucent fills blend
    for name, box in _slot_boxes(layout):
        color, fill_alpha = SLOT_STYLES[name]
        layer = Image.new("RGBA", size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(layer)
        rect = _rect(box)
        draw.rectangle(rect, fill=hex_to_rgba(color, fill_alpha), outline=hex_to_rgba(color), width=STROKE_WIDTH)
        draw.text(
            (round_half_up(box.x + 8), round_half_up(box.y + 18)),
            f"{name.upper()}_BOX",
            font=font,
            fill=hex_to_rgba(color),
            anchor="ls",
        )
        image = Image.alpha_composite(image, layer)

    buffer = BytesIO()
    image.save(buffer, format="PNG")
    return PngImage(png_bytes=buffer.getvalue())
