import math
import re
from datetime import datetime, timezone


def compact(text: str) -> str:
    """Remove all whitespace.

    Example: "성수동 맛집" -> "성수동맛집"
    """
    return re.sub(r"\s+", "", str(text or "")).strip()


def uniq_keep_order(items: list[str]) -> list[str]:
    """Trim, drop empties and duplicates, keep first-seen order."""
    seen = set()
    out = []
    for item in items:
        value = item.strip()
        if not value or value in seen:
            continue
        seen.add(value)
        out.append(value)
    return out


def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (browser Math.round semantics)."""
    return math.floor(value + 0.5)
