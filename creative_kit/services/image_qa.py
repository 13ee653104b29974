"""Reserved-zone QA - is the background calm where copy and logos will go?"""

from dataclasses import dataclass, field
from io import BytesIO

import numpy as np
from PIL import Image

from ..layouts.geometry import denormalize_box
from ..models.layout import Canvas, Layout
from ..utils import round_half_up

# stdev (0..1 gray) above this counts as busy; clean areas sit around 0.06-0.14
BUSY_STDEV = 0.16
PENALTY_WEIGHT = 220


@dataclass(frozen=True)
class ZoneStat:
    mean: float                               # 0..1 gray level
    stdev: float                              # 0..1
    area_px: int

    def to_dict(self) -> dict:
        return {"mean": self.mean, "stdev": self.stdev, "areaPx": self.area_px}


@dataclass
class ZoneQaReport:
    score: int                                # 0..100, higher is cleaner
    width: int
    height: int
    stats: dict[str, ZoneStat] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "width": self.width,
            "height": self.height,
            "stats": {name: stat.to_dict() for name, stat in self.stats.items()},
        }


def gray_stats(gray: np.ndarray) -> ZoneStat:
    """Population mean / stdev of an 8-bit gray region, scaled to 0..1."""
    n = gray.size
    if n == 0:
        return ZoneStat(mean=0.0, stdev=0.0, area_px=0)
    values = gray.astype(float)
    return ZoneStat(
        mean=float(values.mean()) / 255,
        stdev=float(values.std()) / 255,
        area_px=int(n),
    )


def _clamp_int(value: float, lo: int, hi: int) -> int:
    return min(max(round_half_up(value), lo), hi)


def score_reserved_zones(image_bytes: bytes, layout: Layout) -> ZoneQaReport:
    """
    Measure detail inside every layout slot of a generated background.

    Slot boxes are mapped onto the image's own size, so a background
    rendered at a different resolution than the canvas still lines up.

    Args:
        image_bytes: Encoded background image (PNG, JPEG, WebP...)
        layout: Layout whose slots must stay readable

    Returns:
        ZoneQaReport; score = 100 - 220 * sum(max(0, stdev - 0.16)), floored at 0
    """
    image = Image.open(BytesIO(image_bytes))
    width, height = image.size
    gray = np.asarray(image.convert("L"))
    frame = Canvas(width=width, height=height, aspect_ratio=layout.canvas.aspect_ratio)

    stats = {}
    for name, slot in [*layout.media_slots(), *layout.text_slots()]:
        box = denormalize_box(slot.box, frame)
        x = _clamp_int(box.x, 0, max(0, width - 1))
        y = _clamp_int(box.y, 0, max(0, height - 1))
        w = _clamp_int(box.w, 1, max(1, width - x))
        h = _clamp_int(box.h, 1, max(1, height - y))
        stats[name] = gray_stats(gray[y:y + h, x:x + w])

    penalty = sum(max(0.0, s.stdev - BUSY_STDEV) for s in stats.values())
    score = max(0, round_half_up(100 - penalty * PENALTY_WEIGHT))
    return ZoneQaReport(score=score, width=width, height=height, stats=stats)
