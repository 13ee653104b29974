"""Layout model - canvas plus named slots."""

from dataclasses import dataclass
from typing import Iterator

from .slot import CtaSlot, MediaSlot, TextSlot


@dataclass(frozen=True)
class Canvas:
    """Output canvas in pixels."""
    width: int
    height: int
    aspect_ratio: str = "1:1"
    safe_margin_ratio: float = 0.1
    grid_px: int = 8


@dataclass(frozen=True)
class PixelBox:
    """A box in canvas pixels."""
    x: float
    y: float
    w: float
    h: float


@dataclass(frozen=True)
class Layout:
    """A creative layout. Built once per request, never mutated."""
    canvas: Canvas
    hero: MediaSlot
    logo: MediaSlot
    headline: TextSlot
    subtext: TextSlot
    cta: CtaSlot
    badge: TextSlot | None = None
    legal: TextSlot | None = None
    version: int = 2

    def text_slots(self) -> Iterator[tuple[str, TextSlot]]:
        """Yield (name, slot) for every defined text slot, in drawing order."""
        for name in ("headline", "subtext", "cta", "badge", "legal"):
            slot = getattr(self, name)
            if slot is not None:
                yield name, slot

    def media_slots(self) -> Iterator[tuple[str, MediaSlot]]:
        yield "hero", self.hero
        yield "logo", self.logo
