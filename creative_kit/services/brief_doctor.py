"""Brief doctor - score an ad brief and say what is missing."""

import re

from ..models.copy import BriefInput, BriefReport
from .intent import classify_intent

_VAGUE = re.compile(r"(좋은|최고|완벽|대박|성장|매출|홍보|마케팅|브랜딩|올리기|늘리기)")
_OFFER_NUMBER = re.compile(r"(\d+%|\d+원|\d+일|\d+주|\d+개월|\d+\s?배)")
_OFFER_CONDITION = re.compile(r"(오늘|이번주|한정|선착순|마감|까지|내일|기간|조건|최대|최소)")


def looks_vague(text: str) -> bool:
    text = text.strip()
    if len(text) <= 6:
        return True
    return bool(_VAGUE.search(text))


def run_brief_doctor(brief: BriefInput) -> BriefReport:
    """
    Score a brief from 100 down, collecting warnings, questions and fixes.

    Missing fields cost the most (objective 30, USP 25, CTA 20, audience 15);
    vague fields, objective/CTA mismatch and offer gaps cost less.
    """
    objective = brief.objective.strip()
    audience = brief.audience.strip()
    usp = brief.usp.strip()
    offer = brief.offer.strip()
    proof = brief.proof.strip()
    cta = brief.cta.strip()
    voice = [v.strip() for v in brief.brand_voice_keywords if v.strip()]

    score = 100
    report = BriefReport(score=0)
    warn, ask, suggest = report.warnings.append, report.questions_to_ask.append, report.suggested_improvements.append

    if not objective:
        score -= 30
        warn("목표(Objective)가 비어있습니다.")
        ask("이번 광고의 1순위 목표는 무엇인가요? (구매/상담/예약/설치/유입 중 택1)")
    elif looks_vague(objective):
        score -= 10
        warn("목표가 다소 추상적입니다. 행동 단위로 좁히면 전환이 좋아집니다.")
        suggest('목표를 "무엇을 하게 만들 것인지"로 구체화하세요. 예: "첫 구매 유도", "무료 상담 신청", "앱 설치"')

    if not audience:
        score -= 15
        warn("타겟(Audience)이 비어있습니다.")
        ask("누구에게 파는 건가요? (지역/상황/직업/문제/니즈로 1문장)")
    elif looks_vague(audience):
        score -= 6
        warn("타겟이 넓습니다. 상황/문제 기반으로 좁히면 카피가 강해집니다.")
        suggest('타겟을 "상황+문제"로 좁혀보세요. 예: "퇴근 후 빠르게 한끼 해결하려는 직장인"')

    if not usp:
        score -= 25
        warn("USP(핵심 소구점)가 비어있습니다.")
        ask("경쟁 대비 딱 하나, 왜 당신이어야 하나요? (속도/가격/품질/후기/보장/특허/성분 등)")
    elif looks_vague(usp):
        score -= 10
        warn("USP가 다소 뻔합니다. 숫자/근거/차별 포인트를 붙이면 설득력이 올라갑니다.")
        suggest('USP에 "숫자/근거"를 붙여보세요. 예: "30일 환불 보장", "10분 완성", "누적 3,000건"')

    if not cta:
        score -= 20
        warn("CTA가 비어있습니다.")
        suggest('CTA는 목표에 맞춰 "행동"이 보이게 쓰세요. 예: "지금 구매", "무료 상담 신청", "예약하기"')

    objective_intent = classify_intent(objective)
    cta_intent = classify_intent(cta)
    if "unknown" not in (objective_intent, cta_intent) and objective_intent != cta_intent:
        score -= 10
        warn("목표(Objective)와 CTA가 서로 다른 행동을 요구하고 있습니다.")
        suggest("목표와 CTA를 같은 행동으로 정렬하세요. (예: 목표=상담 → CTA=상담 신청)")

    converting = objective_intent in ("buy", "lead")
    if offer:
        if _OFFER_NUMBER.search(offer) and not _OFFER_CONDITION.search(offer):
            score -= 6
            warn("오퍼(Offer)에 조건/기간이 부족합니다. 제한 조건이 있으면 긴급성이 올라갑니다.")
            ask('오퍼의 조건은 무엇인가요? 예: "오늘까지", "선착순 100명", "첫 구매 한정"')
    elif converting:
        score -= 5
        warn("오퍼(Offer)가 비어있습니다. 작은 혜택이라도 있으면 클릭률이 올라갑니다.")
        suggest('오퍼를 추가해보세요. 예: "첫 구매 10% 할인", "무료 체험", "배송비 무료"')

    if not proof and converting:
        score -= 5
        warn("증거(Proof)가 비어있습니다. 리뷰/수치/인증은 전환을 크게 올립니다.")
        suggest('증거를 추가해보세요. 예: "평점 4.9", "누적 10,000명", "전문가 추천"')

    if not voice:
        suggest("브랜드 보이스 키워드를 3개만 넣어도 톤이 일관돼 보입니다. 예: 프리미엄/미니멀/직설")

    report.score = max(0, min(100, score))
    return report
