"""Ad copy variants for a layout's headline, subtext and CTA slots."""

import re

from ..errors import InvalidAspectRatio
from ..models.copy import BriefInput, CopyConstraints, CopyInput, CopyVariants
from ..utils import uniq_keep_order
from .brief_doctor import run_brief_doctor
from .intent import classify_intent

# Tight ko-KR limits per aspect ratio to keep autofit sizes readable
COPY_CONSTRAINTS = {
    "1:1": CopyConstraints(headline_max_chars=18, sub_max_chars=32, cta_max_chars=9),
    "4:5": CopyConstraints(headline_max_chars=20, sub_max_chars=36, cta_max_chars=10),
    "9:16": CopyConstraints(headline_max_chars=22, sub_max_chars=40, cta_max_chars=10),
}

CTAS_BY_INTENT = {
    "buy": ["지금 구매", "혜택 받기", "장바구니 담기"],
    "lead": ["상담 신청", "문의하기", "예약하기"],
    "traffic": ["자세히 보기", "더 알아보기", "지금 확인"],
    "app_install": ["지금 설치", "다운로드", "앱 열기"],
    "unknown": ["자세히 보기", "지금 확인", "더 알아보기"],
}

USP_FALLBACK = "핵심 혜택을 한 문장으로"
SUB_FALLBACK = "핵심 포인트를 확인하세요."
CTA_FALLBACK = "자세히 보기"

MAX_HEADLINES = 5
MAX_SUBS = 3
MAX_CTAS = 3

_FILLER_URGENCY = re.compile(r"(지금|바로|즉시)\s*")
_FILLER_HYPE = re.compile(r"(최고|완벽|대박)\s*")


def constraints_for_aspect_ratio(aspect_ratio: str) -> CopyConstraints:
    if aspect_ratio not in COPY_CONSTRAINTS:
        raise InvalidAspectRatio(aspect_ratio)
    return COPY_CONSTRAINTS[aspect_ratio]


def compact_korean(text: str) -> str:
    """Collapse whitespace and drop urgency/hype filler words."""
    text = re.sub(r"\s+", " ", text)
    text = _FILLER_URGENCY.sub("", text)
    text = _FILLER_HYPE.sub("", text)
    return text.strip()


def cut_to_max_chars(text: str, max_chars: int) -> str:
    text = text.strip()
    if len(text) <= max_chars:
        return text
    return text[:max_chars].strip()


def _finalize(candidates: list[str], max_chars: int, limit: int, fallback: str) -> list[str]:
    shaped = [cut_to_max_chars(compact_korean(c), max_chars) for c in uniq_keep_order(candidates)]
    out = uniq_keep_order(shaped)[:limit]
    return out or [cut_to_max_chars(fallback, max_chars)]


def generate_copy_variants(copy_input: CopyInput) -> CopyVariants:
    """
    Build headline / sub / CTA variants within the aspect ratio's limits.

    Args:
        copy_input: Business inputs (empty fields fall back to generic copy)

    Returns:
        CopyVariants with at least one entry per list; confidence and
        warnings come from the brief doctor so weak input stays visible.

    Raises:
        InvalidAspectRatio: if the aspect ratio has no constraints
    """
    c = constraints_for_aspect_ratio(copy_input.aspect_ratio)

    objective = copy_input.objective.strip()
    audience = copy_input.audience.strip()
    usp = copy_input.usp.strip()
    offer = copy_input.offer.strip()
    proof = copy_input.proof.strip()
    preferred_cta = copy_input.preferred_cta.strip()
    voice = [v.strip() for v in copy_input.brand_voice_keywords if v.strip()]

    tone = " · ".join(voice[:2])
    tone_prefix = f"{tone} " if tone else ""
    usp_core = usp or USP_FALLBACK

    intent = classify_intent(objective)
    if intent == "unknown":
        intent = classify_intent(preferred_cta)

    headlines = _finalize(
        [
            f"{tone_prefix}{usp_core}",
            f"{usp_core} ({offer})" if offer else usp_core,
            f"{audience}를 위한 {usp_core}" if audience else usp_core,
            f"{offer} | {usp_core}" if offer else usp_core,
            f"{usp_core} 지금 확인",
            f"{usp_core} 빠르게 해결",
        ],
        c.headline_max_chars,
        MAX_HEADLINES,
        USP_FALLBACK,
    )

    subs = _finalize(
        [
            proof,
            f"지금 신청하면 {offer}" if offer else "",
            f"{audience}에게 딱 맞는 이유를 확인하세요." if audience else "지금 바로 핵심 포인트를 확인하세요.",
            f"근거: {proof}" if proof else "",
        ],
        c.sub_max_chars,
        MAX_SUBS,
        SUB_FALLBACK,
    )

    ctas = _finalize(
        [preferred_cta, *CTAS_BY_INTENT[intent]],
        c.cta_max_chars,
        MAX_CTAS,
        CTA_FALLBACK,
    )

    report = run_brief_doctor(BriefInput(
        objective=objective,
        audience=audience,
        usp=usp,
        offer=offer,
        proof=proof,
        cta=preferred_cta,
        brand_voice_keywords=voice,
    ))

    return CopyVariants(
        headlines=headlines,
        subs=subs,
        ctas=ctas,
        confidence=report.score / 100,
        warnings=report.warnings,
        brief=report,
    )
