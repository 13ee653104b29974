import pytest

from creative_kit.errors import InvalidAspectRatio
from creative_kit.models.copy import CopyInput
from creative_kit.services.copy import compact_korean, constraints_for_aspect_ratio, generate_copy_variants
from creative_kit.services.intent import classify_intent


def test_square_variants_respect_limits():
    c = constraints_for_aspect_ratio("1:1")
    out = generate_copy_variants(CopyInput(
        aspect_ratio="1:1",
        objective="구매 전환",
        audience="민감성 피부",
        usp="단 7일, 피부 결이 달라짐",
        offer="첫 구매 10% 할인",
        proof="평점 4.9 (2,312명)",
        preferred_cta="지금 구매하기",
    ))

    assert 0 < len(out.headlines) <= 5
    assert 0 < len(out.subs) <= 3
    assert 0 < len(out.ctas) <= 3
    assert all(0 < len(h) <= c.headline_max_chars for h in out.headlines)
    assert all(0 < len(s) <= c.sub_max_chars for s in out.subs)
    assert all(0 < len(cta) <= c.cta_max_chars for cta in out.ctas)
    assert out.ctas[0] == "구매하기"
    assert out.subs[0] == "평점 4.9 (2,312명)"


def test_constraints_per_aspect_ratio():
    assert constraints_for_aspect_ratio("4:5").headline_max_chars == 20
    assert constraints_for_aspect_ratio("9:16").sub_max_chars == 40
    assert constraints_for_aspect_ratio("1:1").cta_max_chars == 9
    with pytest.raises(InvalidAspectRatio):
        constraints_for_aspect_ratio("3:2")


def test_empty_input_still_produces_copy_with_low_confidence():
    out = generate_copy_variants(CopyInput(aspect_ratio="9:16"))

    assert out.headlines[0] == "핵심 혜택을 한 문장으로"
    assert out.subs == ["핵심 포인트를 확인하세요."]
    assert out.ctas == ["자세히 보기", "확인", "더 알아보기"]
    assert out.confidence == pytest.approx(0.1)
    assert out.warnings


def test_tone_prefix_uses_first_two_voice_keywords():
    out = generate_copy_variants(CopyInput(
        aspect_ratio="9:16",
        usp="10분 완성 도시락",
        brand_voice_keywords=["미니멀", " 직설 ", "프리미엄"],
    ))
    assert out.headlines[0] == "미니멀 · 직설 10분 완성 도시락"


def test_intent_from_cta_when_objective_is_unclear():
    out = generate_copy_variants(CopyInput(aspect_ratio="4:5", objective="브랜드 인지", usp="30일 환불 보장", preferred_cta="상담 신청"))
    assert out.ctas == ["상담 신청", "문의하기", "예약하기"]


def test_compact_korean_drops_filler():
    assert compact_korean("지금  바로 최고의 혜택") == "의 혜택"
    assert compact_korean("지금 확인") == "확인"


@pytest.mark.parametrize("text, intent", [
    ("앱 설치 늘리기", "app_install"),
    ("App order", "app_install"),
    ("구매 전환", "buy"),
    ("무료 상담 신청", "lead"),
    ("매장 방문 유도", "traffic"),
    ("브랜딩", "unknown"),
    ("", "unknown"),
])
def test_classify_intent(text, intent):
    assert classify_intent(text) == intent


def test_variants_carry_the_brief_they_were_scored_with():
    out = generate_copy_variants(CopyInput(aspect_ratio="1:1", objective="구매 전환"))
    assert out.brief is not None
    assert out.confidence == out.brief.score / 100
    assert out.warnings == out.brief.warnings
