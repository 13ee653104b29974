import base64
import json
from io import BytesIO

from PIL import Image

from creative_kit import config
from creative_kit.handlers import compose as compose_handler
from creative_kit.handlers import copy as copy_handler
from creative_kit.handlers import keyword_net as keyword_net_handler
from creative_kit.handlers import overlay as overlay_handler
from creative_kit.layouts import create_default_layout, layout_to_dict
from creative_kit.services.keyword_cache import KeywordNetCache

from .conftest import FakeLocal, FakeSupabase


def call(handler, body, **event):
    result = handler({"body": json.dumps(body, ensure_ascii=False), **event}, None)
    return result["statusCode"], json.loads(result["body"])


def test_overlay_for_aspect_ratio():
    status, payload = call(overlay_handler.handler, {"aspectRatio": "4:5", "showSafeZone": True})

    assert status == 200
    assert payload["mimeType"] == "image/png"
    assert payload["dataUrl"].startswith("data:image/png;base64,")
    image = Image.open(BytesIO(base64.b64decode(payload["imageBase64"])))
    assert image.size == (1080, 1350)
    assert payload["layout"]["canvas"]["aspectRatio"] == "4:5"


def test_overlay_for_custom_layout():
    layout = layout_to_dict(create_default_layout("9:16"))
    layout["headline"]["box"] = [0.1, 0.1, 0.5, 0.1]
    status, payload = call(overlay_handler.handler, {"layout": layout})

    assert status == 200
    assert payload["layout"]["headline"]["box"] == [0.1, 0.1, 0.5, 0.1]


def test_overlay_invalid_layout_lists_problems():
    layout = layout_to_dict(create_default_layout("1:1"))
    layout["cta"]["maxLines"] = 0
    status, payload = call(overlay_handler.handler, {"layout": layout})

    assert status == 400
    assert payload["problems"] == ["cta.maxLines: must be >= 1"]


def test_overlay_unsupported_ratio():
    status, payload = call(overlay_handler.handler, {"aspectRatio": "3:2"})
    assert status == 400
    assert "3:2" in payload["error"]


def test_bad_json_body():
    result = overlay_handler.handler({"body": "{not json"}, None)
    assert result["statusCode"] == 400


def test_copy_handler():
    status, payload = call(copy_handler.handler, {
        "aspectRatio": "4:5",
        "objective": "무료 상담 신청",
        "usp": "10분 내 상담 확정",
        "brandVoiceKeywords": "미니멀, 직설",
    })

    assert status == 200
    assert payload["headlines"] and payload["subs"] and payload["ctas"]
    assert payload["constraints"] == {"headlineMaxChars": 20, "subMaxChars": 36, "ctaMaxChars": 10}
    assert set(payload["autofit"]) == {"headline", "subtext", "cta"}
    assert payload["autofit"]["cta"]["fontSizePx"] > 0
    assert 0 <= payload["brief"]["score"] <= 100


def test_keyword_net_requires_store_name():
    status, payload = call(keyword_net_handler.handler, {"area": "성수동", "bizType": "restaurant"})
    assert status == 400
    assert "storeName" in payload["error"]


def test_keyword_net_without_searchad_credentials(monkeypatch):
    monkeypatch.setattr(config, "NAVER_SEARCHAD_ACCESS_LICENSE", None)
    status, payload = call(
        keyword_net_handler.handler, {"storeName": "테스트매장", "area": "성수동", "bizType": "restaurant"},
    )
    assert status == 501
    assert "NAVER_SEARCHAD_ACCESS_LICENSE" in payload["error"]


def test_keyword_net_rate_limited(monkeypatch):
    monkeypatch.setattr(keyword_net_handler, "KEYWORD_NET_RATE_LIMIT", 1)
    headers = {"headers": {"X-Forwarded-For": "10.0.0.1, 10.0.0.2"}}

    first, _ = call(keyword_net_handler.handler, {}, **headers)
    second, payload = call(keyword_net_handler.handler, {}, **headers)

    assert first == 400
    assert second == 429
    assert payload["resetAt"] > 0


def test_keyword_net_builds_then_serves_from_cache(monkeypatch, fake_searchad, place_candidates):
    store = FakeSupabase()
    local = FakeLocal(candidates=place_candidates)
    monkeypatch.setattr(keyword_net_handler.SearchAdClient, "from_env", lambda: fake_searchad)
    monkeypatch.setattr(keyword_net_handler.LocalSearchClient, "from_env", lambda: local)
    monkeypatch.setattr(keyword_net_handler, "KeywordNetCache", lambda: KeywordNetCache(store=store))
    body = {
        "storeName": "테스트매장",
        "area": "성수동",
        "bizType": "restaurant",
        "placeUrl": "https://place.naver.com/restaurant/1234567890/home",
    }

    status, payload = call(keyword_net_handler.handler, body)
    assert status == 200
    assert payload["ok"] is True
    assert payload["fromCache"] is False
    assert payload["placeId"] == "1234567890"
    assert payload["selectedPlace"]["title"] == "테스트매장"
    assert payload["keywordNet"][0]["keyword"] == "성수동맛집"
    assert payload["clusters"][0]["clusterName"] == "맛집"
    assert "cachedAt" not in payload

    status, cached = call(keyword_net_handler.handler, body)
    assert status == 200
    assert cached["fromCache"] is True
    assert cached["cacheKey"] == payload["cacheKey"]
    assert cached["ageMinutes"] == 0
    assert len(fake_searchad.tool_calls) == 1


def test_keyword_net_single_extra_hint_string_is_one_seed(monkeypatch, fake_searchad):
    monkeypatch.setattr(keyword_net_handler.SearchAdClient, "from_env", lambda: fake_searchad)
    monkeypatch.setattr(keyword_net_handler.LocalSearchClient, "from_env", lambda: FakeLocal())
    monkeypatch.setattr(keyword_net_handler, "KeywordNetCache", lambda: KeywordNetCache(store=FakeSupabase()))

    status, _ = call(keyword_net_handler.handler, {
        "storeName": "테스트매장",
        "area": "성수동",
        "bizType": "restaurant",
        "extraHintSeeds": "성수라멘",
    })

    assert status == 200
    hints = fake_searchad.tool_calls[0].split(",")
    assert hints[0] == "성수라멘"
    assert not any(len(h) == 1 for h in hints)


def test_keyword_net_rejects_non_list_extra_hints():
    status, payload = call(keyword_net_handler.handler, {
        "storeName": "테스트매장",
        "area": "성수동",
        "bizType": "restaurant",
        "extraHintSeeds": 5,
    })
    assert status == 400
    assert "extraHintSeeds" in payload["error"]


def test_non_string_aspect_ratio_is_a_client_error():
    for handler in (overlay_handler.handler, copy_handler.handler):
        status, _ = call(handler, {"aspectRatio": [1]})
        assert status == 400


def test_copy_handler_brief_matches_confidence():
    status, payload = call(copy_handler.handler, {"aspectRatio": "1:1", "objective": "구매 전환"})
    assert status == 200
    assert payload["brief"]["score"] == round(payload["confidence"] * 100)


def png_base64(color, size=(1080, 1080)):
    buf = BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode("ascii")


def test_compose_creative():
    status, payload = call(compose_handler.handler, {
        "aspectRatio": "4:5",
        "backgroundBase64": "data:image/png;base64," + png_base64((20, 20, 20), size=(800, 800)),
        "headline": "Big Sale Today",
        "ctaText": "Shop now",
    })

    assert status == 200
    assert payload["dataUrl"].startswith("data:image/png;base64,")
    image = Image.open(BytesIO(base64.b64decode(payload["imageBase64"])))
    assert image.size == (1080, 1350)
    assert payload["qa"]["score"] == 100
    assert (payload["qa"]["width"], payload["qa"]["height"]) == (800, 800)
    assert payload["layout"]["canvas"]["aspectRatio"] == "4:5"


def test_compose_requires_background():
    status, payload = call(compose_handler.handler, {"aspectRatio": "1:1", "headline": "Hi"})
    assert status == 400
    assert "backgroundBase64" in payload["error"]

    status, _ = call(compose_handler.handler, {"backgroundBase64": "%%%"})
    assert status == 400
