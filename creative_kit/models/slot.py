"""Slot definitions for creative layouts."""

from dataclasses import dataclass

# (x, y, w, h) relative to the canvas, each in [0, 1]
NormalizedBox = tuple[float, float, float, float]


@dataclass(frozen=True)
class TextSlot:
    """A named text region of a layout (headline, subtext, badge, legal)."""
    box: NormalizedBox
    align: str = "left"          # "left" | "center" | "right"
    max_lines: int = 2
    padding_px: int = 24
    min_font_px: int = 28


@dataclass(frozen=True)
class CtaSlot(TextSlot):
    """Call-to-action button slot."""
    radius_px: int = 999


@dataclass(frozen=True)
class MediaSlot:
    """Image region of a layout (hero image, logo)."""
    box: NormalizedBox
    padding_px: int = 8
    fit: str = "contain"         # "contain" | "cover"
