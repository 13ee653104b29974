"""Data models."""

from .copy import BriefInput, BriefReport, CopyConstraints, CopyInput, CopyVariants
from .image import ComposeInput, PngImage
from .keyword import (
    KeywordClusteredRow,
    KeywordNetInputs,
    KeywordNetParams,
    KeywordNetResult,
    KeywordNetRow,
    KeywordNetSummary,
    PlaceCandidate,
)
from .layout import Canvas, Layout, PixelBox
from .slot import CtaSlot, MediaSlot, NormalizedBox, TextSlot

__all__ = [
    "BriefInput",
    "BriefReport",
    "Canvas",
    "ComposeInput",
    "CopyConstraints",
    "CopyInput",
    "CopyVariants",
    "CtaSlot",
    "KeywordClusteredRow",
    "KeywordNetInputs",
    "KeywordNetParams",
    "KeywordNetResult",
    "KeywordNetRow",
    "KeywordNetSummary",
    "Layout",
    "MediaSlot",
    "NormalizedBox",
    "PixelBox",
    "PngImage",
    "PlaceCandidate",
    "TextSlot",
]
