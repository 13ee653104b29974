from creative_kit.models.copy import BriefInput
from creative_kit.services.brief_doctor import looks_vague, run_brief_doctor

COMPLETE_BRIEF = dict(
    objective="온라인 첫 구매 전환",
    audience="퇴근 후 한끼 해결하려는 직장인",
    usp="10분 완성 도시락 정기배송",
    offer="첫 구매 10% 할인 오늘까지",
    proof="누적 3,000건 주문",
    cta="지금 구매",
    brand_voice_keywords=["미니멀"],
)


def test_flags_missing_required_fields():
    out = run_brief_doctor(BriefInput())
    joined = " ".join(out.warnings)

    assert out.score < 60
    assert out.score == 10
    assert "목표" in joined
    assert "타겟" in joined
    assert "USP" in joined
    assert "CTA" in joined
    assert len(out.questions_to_ask) == 3


def test_detects_objective_cta_mismatch():
    out = run_brief_doctor(BriefInput(
        objective="무료 상담 신청 늘리기",
        audience="30대 직장인",
        usp="10분 내 상담 확정",
        cta="지금 구매",
    ))
    assert any("CTA" in w for w in out.warnings)


def test_complete_brief_scores_full_marks():
    out = run_brief_doctor(BriefInput(**COMPLETE_BRIEF))
    assert out.score == 100
    assert out.warnings == []
    assert out.questions_to_ask == []
    assert out.suggested_improvements == []


def test_offer_without_condition():
    out = run_brief_doctor(BriefInput(**{**COMPLETE_BRIEF, "offer": "10% 할인"}))
    assert out.score == 94
    assert any("조건" in q for q in out.questions_to_ask)


def test_lead_brief_without_offer_or_proof():
    out = run_brief_doctor(BriefInput(**{
        **COMPLETE_BRIEF,
        "objective": "무료 상담 신청 받기",
        "cta": "상담 신청",
        "offer": "",
        "proof": "",
    }))
    assert out.score == 90
    assert any("오퍼" in w for w in out.warnings)
    assert any("증거" in w for w in out.warnings)


def test_vague_fields_cost_less_than_missing():
    out = run_brief_doctor(BriefInput(**{**COMPLETE_BRIEF, "objective": "매출 올리기 캠페인"}))
    assert out.score == 90


def test_missing_voice_keywords_is_only_a_suggestion():
    out = run_brief_doctor(BriefInput(**{**COMPLETE_BRIEF, "brand_voice_keywords": ["  "]}))
    assert out.score == 100
    assert len(out.suggested_improvements) == 1


def test_looks_vague():
    assert looks_vague("")
    assert looks_vague("짧은 목표")
    assert looks_vague("브랜딩 강화 프로젝트")
    assert not looks_vague("온라인 첫 구매 전환")
