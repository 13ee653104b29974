"""Shared fakes for the SearchAd, local search and Supabase collaborators."""

from datetime import timedelta

import pytest

from creative_kit.models.keyword import PlaceCandidate
from creative_kit.services.rate_limit import reset_rate_limits
from creative_kit.utils import utc_now


class FakeSearchAd:
    """Records calls; returns canned keyword tool items and bids."""

    def __init__(self, keyword_items=None, bids=None, error=None):
        self.keyword_items = keyword_items or []
        self.bids = bids or []
        self.error = error
        self.tool_calls = []
        self.bid_calls = []

    def get_keyword_tool(self, hint_keywords, show_detail=True):
        self.tool_calls.append(hint_keywords)
        if self.error:
            raise self.error
        return self.keyword_items

    def get_average_position_bids(self, device, keywords, positions=(1, 2, 3, 4, 5), chunk_size=100):
        self.bid_calls.append({"device": device, "keywords": list(keywords)})
        return self.bids


class FakeLocal:
    def __init__(self, candidates=None, error=None):
        self.candidates = candidates or []
        self.error = error
        self.queries = []

    def search(self, query, display=5, start=1, sort="comment"):
        self.queries.append(query)
        if self.error:
            raise self.error
        return self.candidates


class _Result:
    def __init__(self, data):
        self.data = data


class _Query:
    def __init__(self, store, table):
        self.store = store
        self.table_name = table
        self.filters = {}
        self._insert = None

    def select(self, columns):
        return self

    def eq(self, column, value):
        self.filters[column] = value
        return self

    def order(self, column, desc=False):
        return self

    def limit(self, n):
        return self

    def insert(self, payload):
        self._insert = payload
        return self

    def execute(self):
        if self.store.error:
            raise self.store.error
        if self._insert is not None:
            row = dict(self._insert)
            row.setdefault("created_at", utc_now().isoformat())
            self.store.rows.append(row)
            return _Result([row])
        key = self.filters.get("cache_key")
        matches = [r for r in self.store.rows if r["cache_key"] == key]
        matches.sort(key=lambda r: r["created_at"], reverse=True)
        return _Result(matches[:1])


class FakeSupabase:
    """Minimal stand-in for the supabase-py query builder."""

    def __init__(self, rows=None, error=None):
        self.rows = rows or []
        self.error = error
        self.tables = []

    def table(self, name):
        self.tables.append(name)
        return _Query(self, name)


def hours_ago(hours: float) -> str:
    return (utc_now() - timedelta(hours=hours)).isoformat()


@pytest.fixture(autouse=True)
def _clear_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def keyword_items():
    return [
        {
            "relKeyword": "성수동맛집",
            "monthlyPcQcCnt": "1,000",
            "monthlyMobileQcCnt": "9,000",
            "monthlyAvePcCtr": "1.2",
            "monthlyAveMobileCtr": "0.8",
            "compIdx": "높음",
            "plAvgDepth": "15",
        },
        {
            "relKeyword": "성수동혼밥",
            "monthlyPcQcCnt": "< 10",
            "monthlyMobileQcCnt": "300",
        },
        {
            "relKeyword": "서울 가볼만한곳",
            "monthlyPcQcCnt": 50000,
            "monthlyMobileQcCnt": 90000,
        },
        {
            "relKeyword": "테스트매장 예약",
            "monthlyPcQcCnt": "40",
            "monthlyMobileQcCnt": "120",
        },
    ]


@pytest.fixture
def fake_searchad(keyword_items):
    return FakeSearchAd(
        keyword_items=keyword_items,
        bids=[
            {"key": "성수동맛집", "position": 1, "bid": 9000.0},
            {"key": "성수동맛집", "position": 3, "bid": 5000.0},
        ],
    )


@pytest.fixture
def place_candidates():
    return [
        PlaceCandidate(title="다른매장", link="https://map.naver.com/p/entry/place/11111111", category="음식점>한식"),
        PlaceCandidate(
            title="테스트매장",
            link="https://place.naver.com/restaurant/1234567890/home",
            category="음식점>라멘",
            road_address="서울 성동구 성수이로 1",
        ),
    ]
