"""1:1 feed layout (1080x1080)."""

from ..models.layout import Canvas, Layout
from ..models.slot import CtaSlot, MediaSlot, TextSlot

SQUARE_LAYOUT = Layout(
    canvas=Canvas(width=1080, height=1080, aspect_ratio="1:1"),
    hero=MediaSlot(box=(0.08, 0.5, 0.84, 0.26), padding_px=8),
    logo=MediaSlot(box=(0.08, 0.05, 0.22, 0.1), padding_px=6),
    headline=TextSlot(box=(0.08, 0.1, 0.84, 0.22), max_lines=2, padding_px=24, min_font_px=28),
    subtext=TextSlot(box=(0.08, 0.34, 0.84, 0.16), max_lines=3, padding_px=24, min_font_px=24),
    cta=CtaSlot(box=(0.08, 0.8, 0.5, 0.12), align="center", max_lines=1, padding_px=22, min_font_px=24),
)
