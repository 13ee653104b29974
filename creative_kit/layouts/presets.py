"""Default layout per aspect ratio."""

from ..errors import InvalidAspectRatio
from ..models.layout import Layout
from .portrait import PORTRAIT_LAYOUT
from .square import SQUARE_LAYOUT
from .story import STORY_LAYOUT

LAYOUT_PRESETS: dict[str, Layout] = {
    "1:1": SQUARE_LAYOUT,
    "4:5": PORTRAIT_LAYOUT,
    "9:16": STORY_LAYOUT,
}


def create_default_layout(aspect_ratio: str) -> Layout:
    """Get the default layout for an aspect ratio."""
    if aspect_ratio not in LAYOUT_PRESETS:
        raise InvalidAspectRatio(aspect_ratio)
    return LAYOUT_PRESETS[aspect_ratio]


def get_canvas_preset(aspect_ratio: str) -> tuple[int, int]:
    """Get (width, height) in pixels for an aspect ratio."""
    canvas = create_default_layout(aspect_ratio).canvas
    return canvas.width, canvas.height


def list_aspect_ratios() -> list[str]:
    """List all supported aspect ratios."""
    return list(LAYOUT_PRESETS.keys())
