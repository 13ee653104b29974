"""Layout JSON validation and serialization.

Layouts arrive from the web editor as camelCase JSON:

    {"version": 2,
     "canvas": {"width": 1080, "height": 1350, "aspectRatio": "4:5",
                "safeMarginRatio": 0.1, "gridPx": 8},
     "hero": {"box": [x, y, w, h], "paddingPx": 8, "fit": "contain"},
     "logo": {...},
     "headline": {"box": [...], "align": "left", "maxLines": 2,
                  "paddingPx": 24, "minFontPx": 28},
     "subtext": {...},
     "cta": {..., "radiusPx": 999},
     "badge": {...}, "legal": {...}}     # optional

Version 1 documents have no hero/logo; those are filled from the default
layout of the same aspect ratio.
"""

from typing import Any

from ..errors import InvalidLayoutError
from ..models.layout import Canvas, Layout
from ..models.slot import CtaSlot, MediaSlot, TextSlot
from .presets import LAYOUT_PRESETS

ALIGNS = ("left", "center", "right")
FITS = ("contain", "cover")


class _Validator:
    """Collects every problem instead of stopping at the first."""

    def __init__(self):
        self.problems: list[str] = []

    def fail(self, path: str, message: str) -> None:
        self.problems.append(f"{path}: {message}")

    def obj(self, data: Any, path: str) -> dict | None:
        if not isinstance(data, dict):
            self.fail(path, "expected an object")
            return None
        return data

    def number(self, data: dict, key: str, path: str, lo: float | None = None,
               hi: float | None = None, integer: bool = False) -> Any:
        value = data.get(key)
        where = f"{path}.{key}"
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            self.fail(where, "expected a number")
            return None
        if integer and value != int(value):
            self.fail(where, "expected an integer")
            return None
        if lo is not None and value < lo:
            self.fail(where, f"must be >= {lo}")
        if hi is not None and value > hi:
            self.fail(where, f"must be <= {hi}")
        return int(value) if integer else value

    def choice(self, data: dict, key: str, path: str, options: tuple[str, ...]) -> Any:
        value = data.get(key)
        if value not in options:
            self.fail(f"{path}.{key}", f"expected one of {', '.join(options)}")
            return None
        return value

    def box(self, data: dict, path: str) -> tuple | None:
        value = data.get("box")
        where = f"{path}.box"
        if not isinstance(value, (list, tuple)) or len(value) != 4:
            self.fail(where, "expected [x, y, w, h]")
            return None
        for i, part in enumerate(value):
            if isinstance(part, bool) or not isinstance(part, (int, float)):
                self.fail(f"{where}[{i}]", "expected a number")
                return None
            if not 0 <= part <= 1:
                self.fail(f"{where}[{i}]", "must be within [0, 1]")
        return tuple(float(part) for part in value)


def _parse_canvas(v: _Validator, data: Any) -> Canvas | None:
    raw = v.obj(data, "canvas")
    if raw is None:
        return None
    width = v.number(raw, "width", "canvas", lo=64, integer=True)
    height = v.number(raw, "height", "canvas", lo=64, integer=True)
    aspect_ratio = v.choice(raw, "aspectRatio", "canvas", tuple(LAYOUT_PRESETS))
    safe_margin_ratio = v.number(raw, "safeMarginRatio", "canvas", lo=0, hi=0.3)
    grid_px = v.number(raw, "gridPx", "canvas", lo=1, hi=64, integer=True)
    if None in (width, height, aspect_ratio, safe_margin_ratio, grid_px):
        return None
    return Canvas(
        width=width,
        height=height,
        aspect_ratio=aspect_ratio,
        safe_margin_ratio=safe_margin_ratio,
        grid_px=grid_px,
    )


def _parse_text(v: _Validator, data: Any, path: str, cta: bool = False) -> TextSlot | None:
    raw = v.obj(data, path)
    if raw is None:
        return None
    fields = {
        "box": v.box(raw, path),
        "align": v.choice(raw, "align", path, ALIGNS),
        "max_lines": v.number(raw, "maxLines", path, lo=1, hi=10, integer=True),
        "padding_px": v.number(raw, "paddingPx", path, lo=0, hi=200, integer=True),
        "min_font_px": v.number(raw, "minFontPx", path, lo=8, hi=200, integer=True),
    }
    if cta:
        fields["radius_px"] = v.number(raw, "radiusPx", path, lo=0, hi=9999, integer=True)
    if any(value is None for value in fields.values()):
        return None
    return CtaSlot(**fields) if cta else TextSlot(**fields)


def _parse_media(v: _Validator, data: Any, path: str) -> MediaSlot | None:
    raw = v.obj(data, path)
    if raw is None:
        return None
    box = v.box(raw, path)
    padding_px = v.number(raw, "paddingPx", path, lo=0, hi=200, integer=True)
    fit = v.choice(raw, "fit", path, FITS)
    if None in (box, padding_px, fit):
        return None
    return MediaSlot(box=box, padding_px=padding_px, fit=fit)


def parse_layout(data: Any) -> Layout:
    """
    Validate layout JSON and build a Layout.

    Args:
        data: Decoded JSON document (version 1 or 2)

    Returns:
        Layout (version 2)

    Raises:
        InvalidLayoutError: listing every field that failed validation
    """
    v = _Validator()
    raw = v.obj(data, "layout")
    if raw is None:
        raise InvalidLayoutError(v.problems)

    version = raw.get("version")
    if version not in (1, 2) or isinstance(version, bool):
        v.fail("layout.version", "expected 1 or 2")
        raise InvalidLayoutError(v.problems)

    canvas = _parse_canvas(v, raw.get("canvas"))
    headline = _parse_text(v, raw.get("headline"), "headline")
    subtext = _parse_text(v, raw.get("subtext"), "subtext")
    cta = _parse_text(v, raw.get("cta"), "cta", cta=True)

    if version == 2:
        hero = _parse_media(v, raw.get("hero"), "hero")
        logo = _parse_media(v, raw.get("logo"), "logo")
        badge = _parse_text(v, raw["badge"], "badge") if raw.get("badge") is not None else None
        legal = _parse_text(v, raw["legal"], "legal") if raw.get("legal") is not None else None
    else:
        hero = logo = badge = legal = None

    if v.problems:
        raise InvalidLayoutError(v.problems)

    if version == 1:
        fallback = LAYOUT_PRESETS[canvas.aspect_ratio]
        hero, logo = fallback.hero, fallback.logo

    return Layout(
        canvas=canvas,
        hero=hero,
        logo=logo,
        headline=headline,
        subtext=subtext,
        cta=cta,
        badge=badge,
        legal=legal,
    )


def _text_to_dict(slot: TextSlot) -> dict[str, Any]:
    out = {
        "box": list(slot.box),
        "align": slot.align,
        "maxLines": slot.max_lines,
        "paddingPx": slot.padding_px,
        "minFontPx": slot.min_font_px,
    }
    if isinstance(slot, CtaSlot):
        out["radiusPx"] = slot.radius_px
    return out


def _media_to_dict(slot: MediaSlot) -> dict[str, Any]:
    return {"box": list(slot.box), "paddingPx": slot.padding_px, "fit": slot.fit}


def layout_to_dict(layout: Layout) -> dict[str, Any]:
    """Serialize a Layout to the camelCase version 2 JSON document."""
    out = {
        "version": 2,
        "canvas": {
            "width": layout.canvas.width,
            "height": layout.canvas.height,
            "aspectRatio": layout.canvas.aspect_ratio,
            "safeMarginRatio": layout.canvas.safe_margin_ratio,
            "gridPx": layout.canvas.grid_px,
        },
        "hero": _media_to_dict(layout.hero),
        "logo": _media_to_dict(layout.logo),
    }
    for name, slot in layout.text_slots():
        out[name] = _text_to_dict(slot)
    return out
