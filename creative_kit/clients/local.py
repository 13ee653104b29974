"""Naver Local Search API client (place candidates)."""

import re

import requests

from .. import config
from ..errors import ConfigurationError, InvalidInputError, ProviderError
from ..models.keyword import PlaceCandidate

NAVER_LOCAL_URL = "https://openapi.naver.com/v1/search/local.json"


def strip_html(text: str) -> str:
    return re.sub(r"<[^>]*>", "", text).strip()


class LocalSearchClient:
    """Client for place lookup by free-text query."""

    def __init__(self, client_id: str, client_secret: str):
        self.client_id = client_id
        self.client_secret = client_secret

    @classmethod
    def from_env(cls) -> "LocalSearchClient":
        if not config.NAVER_CLIENT_ID or not config.NAVER_CLIENT_SECRET:
            raise ConfigurationError("Missing NAVER_CLIENT_ID / NAVER_CLIENT_SECRET")
        return cls(config.NAVER_CLIENT_ID, config.NAVER_CLIENT_SECRET)

    def _get_headers(self) -> dict:
        return {
            "X-Naver-Client-Id": self.client_id,
            "X-Naver-Client-Secret": self.client_secret,
        }

    def search(self, query: str, display: int = 5, start: int = 1, sort: str = "comment") -> list[PlaceCandidate]:
        """Search places. Titles and descriptions come back with HTML tags stripped."""
        query = query.strip()
        if not query:
            raise InvalidInputError("Query is required")

        try:
            response = requests.get(
                NAVER_LOCAL_URL,
                params={"query": query, "display": display, "start": start, "sort": sort},
                headers=self._get_headers(),
                timeout=30,
            )
        except requests.RequestException as e:
            raise ProviderError(f"[Naver Local API] request failed: {e}") from e

        if not response.ok:
            raise ProviderError(
                f"[Naver Local API {response.status_code}] {response.text or 'Request failed'}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(f"[Naver Local API] invalid JSON response: {e}") from e
        items = (data.get("items") or []) if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise ProviderError("[Naver Local API] unexpected response shape")

        return [
            PlaceCandidate(
                title=strip_html(str(item.get("title") or "")),
                link=str(item.get("link") or ""),
                category=str(item.get("category") or ""),
                description=strip_html(str(item.get("description") or "")),
                telephone=str(item.get("telephone") or ""),
                address=str(item.get("address") or ""),
                road_address=str(item.get("roadAddress") or ""),
                mapx=str(item.get("mapx") or ""),
                mapy=str(item.get("mapy") or ""),
            )
            for item in items
            if isinstance(item, dict)
        ]
