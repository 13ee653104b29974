"""Copy generator and brief doctor models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CopyConstraints:
    """Max characters per copy element for an aspect ratio."""
    headline_max_chars: int
    sub_max_chars: int
    cta_max_chars: int


@dataclass
class CopyInput:
    """Business inputs for copy generation."""
    aspect_ratio: str
    objective: str = ""
    audience: str = ""
    usp: str = ""
    offer: str = ""
    proof: str = ""
    preferred_cta: str = ""
    brand_voice_keywords: list[str] = field(default_factory=list)


@dataclass
class CopyVariants:
    """Generated copy. Lists are never empty."""
    headlines: list[str]
    subs: list[str]
    ctas: list[str]
    confidence: float = 1.0                   # 0..1, from the brief score
    warnings: list[str] = field(default_factory=list)
    brief: "BriefReport | None" = None        # report the confidence came from


@dataclass
class BriefInput:
    """Brief fields checked for completeness."""
    objective: str = ""
    audience: str = ""
    usp: str = ""
    offer: str = ""
    proof: str = ""
    cta: str = ""
    brand_voice_keywords: list[str] = field(default_factory=list)


@dataclass
class BriefReport:
    score: int                                # 0..100
    warnings: list[str] = field(default_factory=list)
    questions_to_ask: list[str] = field(default_factory=list)
    suggested_improvements: list[str] = field(default_factory=list)
