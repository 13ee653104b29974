"""4:5 portrait feed layout (1080x1350)."""

from ..models.layout import Canvas, Layout
from ..models.slot import CtaSlot, MediaSlot, TextSlot

PORTRAIT_LAYOUT = Layout(
    canvas=Canvas(width=1080, height=1350, aspect_ratio="4:5"),
    hero=MediaSlot(box=(0.08, 0.46, 0.84, 0.3), padding_px=8),
    logo=MediaSlot(box=(0.08, 0.05, 0.22, 0.08), padding_px=6),
    headline=TextSlot(box=(0.08, 0.1, 0.84, 0.18), max_lines=2, padding_px=24, min_font_px=28),
    subtext=TextSlot(box=(0.08, 0.3, 0.84, 0.14), max_lines=3, padding_px=24, min_font_px=24),
    cta=CtaSlot(box=(0.08, 0.82, 0.5, 0.1), align="center", max_lines=1, padding_px=22, min_font_px=24),
)
