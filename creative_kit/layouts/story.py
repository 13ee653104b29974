"""9:16 story/reels layout (1080x1920)."""

from ..models.layout import Canvas, Layout
from ..models.slot import CtaSlot, MediaSlot, TextSlot

STORY_LAYOUT = Layout(
    canvas=Canvas(width=1080, height=1920, aspect_ratio="9:16"),
    hero=MediaSlot(box=(0.08, 0.42, 0.84, 0.38), padding_px=8),
    logo=MediaSlot(box=(0.08, 0.035, 0.22, 0.08), padding_px=6),
    headline=TextSlot(box=(0.08, 0.08, 0.84, 0.16), max_lines=2, padding_px=24, min_font_px=28),
    subtext=TextSlot(box=(0.08, 0.25, 0.84, 0.12), max_lines=3, padding_px=24, min_font_px=24),
    cta=CtaSlot(box=(0.08, 0.84, 0.5, 0.08), align="center", max_lines=1, padding_px=22, min_font_px=24),
)
