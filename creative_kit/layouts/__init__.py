"""Layout presets registry and layout JSON helpers."""

from .geometry import clamp_box_px, denormalize_box, layout_safe_zone_px, normalize_box
from .presets import LAYOUT_PRESETS, create_default_layout, get_canvas_preset, list_aspect_ratios
from .schema import layout_to_dict, parse_layout

__all__ = [
    "LAYOUT_PRESETS",
    "clamp_box_px",
    "create_default_layout",
    "denormalize_box",
    "get_canvas_preset",
    "layout_safe_zone_px",
    "layout_to_dict",
    "list_aspect_ratios",
    "normalize_box",
    "parse_layout",
]
