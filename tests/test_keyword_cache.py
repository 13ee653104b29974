from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta

import pytest

from creative_kit.models.keyword import KeywordNetParams, KeywordNetResult, KeywordNetSummary
from creative_kit.services.keyword_cache import KeywordNetCache
from creative_kit.services.keyword_net import compute_keyword_net_inputs

from .conftest import FakeSupabase, hours_ago


@pytest.fixture
def params():
    return KeywordNetParams(store_name="테스트매장", area="성수동", biz_type="restaurant")


def cached_payload(cache_key):
    return KeywordNetResult(
        place_query="성수동 테스트매장",
        place_id=None,
        place_candidates=[],
        selected_place=None,
        keyword_net=[],
        summary=KeywordNetSummary(
            device="PC", demand_top10=0, avg_ctr_top10=None, median_bid_pos3_top10=None, fetched_at=1700000000000,
        ),
        cache_key=cache_key,
    ).to_dict()


def test_load_miss_on_empty_table():
    assert KeywordNetCache(store=FakeSupabase()).load("missing") is None


def test_load_fresh_row():
    store = FakeSupabase(rows=[{"cache_key": "abc", "result_json": cached_payload("abc"), "created_at": hours_ago(1)}])
    cache = KeywordNetCache(store=store, ttl=timedelta(hours=24))

    result = cache.load("abc")
    assert result.place_query == "성수동 테스트매장"
    assert result.summary.fetched_at == 1700000000000
    assert store.tables == ["keyword_net_cache"]


def test_load_ignores_expired_row():
    store = FakeSupabase(rows=[{"cache_key": "abc", "result_json": cached_payload("abc"), "created_at": hours_ago(25)}])
    assert KeywordNetCache(store=store, ttl=timedelta(hours=24)).load("abc") is None


def test_load_ignores_non_object_payload():
    store = FakeSupabase(rows=[{"cache_key": "abc", "result_json": "oops", "created_at": hours_ago(1)}])
    assert KeywordNetCache(store=store).load("abc") is None


def test_store_errors_behave_as_miss():
    store = FakeSupabase(error=RuntimeError("connection refused"))
    cache = KeywordNetCache(store=store)

    assert cache.load("abc") is None
    cache.save("abc", {"placeQuery": "x"})


def test_get_or_build_saves_then_hits(params, fake_searchad):
    store = FakeSupabase()
    cache = KeywordNetCache(store=store)
    key = compute_keyword_net_inputs(params).cache_key

    first = cache.get_or_build(params, fake_searchad)
    assert first.from_cache is False
    assert first.cached_at is None
    assert first.result.cache_key == key
    assert [row["cache_key"] for row in store.rows] == [key]

    second = cache.get_or_build(params, fake_searchad)
    assert second.from_cache is True
    assert second.age_minutes == 0
    assert second.result.to_dict() == first.result.to_dict()
    assert len(fake_searchad.tool_calls) == 1


def test_cached_entry_age(params, fake_searchad):
    key = compute_keyword_net_inputs(params).cache_key
    store = FakeSupabase(rows=[{"cache_key": key, "result_json": cached_payload(key), "created_at": hours_ago(1)}])

    cached = KeywordNetCache(store=store).get_or_build(params, fake_searchad)
    assert cached.from_cache is True
    assert cached.age_minutes == 60
    assert fake_searchad.tool_calls == []


def test_background_save_failure_never_surfaces(params, fake_searchad):
    store = FakeSupabase(error=RuntimeError("insert failed"))
    with ThreadPoolExecutor(max_workers=1) as executor:
        cached = KeywordNetCache(store=store, executor=executor).get_or_build(params, fake_searchad)

    assert cached.from_cache is False
    assert cached.result.keyword_net
