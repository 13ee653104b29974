"""Naver SearchAd API client (keyword tool + average-position bid estimates)."""

import base64
import hashlib
import hmac
import logging
import time

import requests

from .. import config
from ..errors import ConfigurationError, ProviderError

logger = logging.getLogger(__name__)

SEARCHAD_BASE_URL = "https://api.searchad.naver.com"
BID_ESTIMATE_URI = "/estimate/average-position-bid/keyword"
BID_ESTIMATE_FALLBACK_URI = "/npc-estimate/average-position-bid/keyword"


def sign_searchad(timestamp: str, method: str, uri: str, secret_key: str) -> str:
    """Base64 HMAC-SHA256 of "{timestamp}.{METHOD}.{uri}"."""
    message = f"{timestamp}.{method}.{uri}"
    digest = hmac.new(secret_key.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def _extract_bid_items(raw) -> list[dict]:
    """Bid responses come as {"items": [...]}, {"estimate": [...]} or a bare list."""
    if isinstance(raw, dict):
        items = raw.get("items") if isinstance(raw.get("items"), list) else raw.get("estimate")
    else:
        items = raw
    if not isinstance(items, list):
        return []

    out = []
    for item in items:
        if not isinstance(item, dict):
            continue
        key = str(item.get("key") or item.get("keyword") or "").strip()
        try:
            position = int(item.get("position") or 0)
            bid = float(item.get("bid") or 0)
        except (TypeError, ValueError):
            continue
        if key and position > 0 and bid >= 0:
            out.append({"key": key, "position": position, "bid": bid})
    return out


class SearchAdClient:
    """Client for the Naver SearchAd REST API."""

    def __init__(self, access_license: str, secret_key: str, customer_id: str, timeout_ms: int = 12000):
        self.access_license = access_license
        self.secret_key = secret_key
        self.customer_id = str(customer_id)
        self.timeout = min(max(timeout_ms or 12000, 3000), 60000) / 1000
        self.base_url = SEARCHAD_BASE_URL

    @classmethod
    def from_env(cls) -> "SearchAdClient":
        missing = [
            name for name in (
                "NAVER_SEARCHAD_ACCESS_LICENSE",
                "NAVER_SEARCHAD_SECRET_KEY",
                "NAVER_SEARCHAD_CUSTOMER_ID",
            )
            if not getattr(config, name)
        ]
        if missing:
            raise ConfigurationError(f"Missing {', '.join(missing)}")
        return cls(
            access_license=config.NAVER_SEARCHAD_ACCESS_LICENSE,
            secret_key=config.NAVER_SEARCHAD_SECRET_KEY,
            customer_id=config.NAVER_SEARCHAD_CUSTOMER_ID,
            timeout_ms=config.NAVER_SEARCHAD_TIMEOUT_MS,
        )

    def _get_headers(self, method: str, uri: str) -> dict:
        timestamp = str(int(time.time() * 1000))
        return {
            "Content-Type": "application/json; charset=UTF-8",
            "X-Timestamp": timestamp,
            "X-API-KEY": self.access_license,
            "X-Customer": self.customer_id,
            "X-Signature": sign_searchad(timestamp, method, uri, self.secret_key),
        }

    def _request_with_retry(
        self,
        method: str,
        uri: str,
        params: dict | None = None,
        json: dict | None = None,
        max_retries: int = 3,
    ) -> requests.Response:
        """Make request with exponential backoff on 429 errors."""
        url = f"{self.base_url}{uri}"
        response = None
        for attempt in range(max_retries):
            # signature embeds the timestamp, so re-sign every attempt
            headers = self._get_headers(method, uri)
            try:
                response = requests.request(method, url, params=params, json=json, headers=headers, timeout=self.timeout)
            except requests.Timeout as e:
                raise ProviderError(f"[SearchAd API TIMEOUT] {uri} exceeded {int(self.timeout * 1000)}ms", uri=uri) from e
            except requests.RequestException as e:
                raise ProviderError(f"[SearchAd API] {uri} request failed: {e}", uri=uri) from e

            if response.status_code == 429:
                time.sleep(2 ** attempt)
                continue

            return response

        return response

    def request(self, method: str, uri: str, params: dict | None = None, body: dict | None = None):
        """Signed request. Returns decoded JSON, raises ProviderError on non-2xx."""
        if not uri.startswith("/"):
            raise ValueError("SearchAd uri must start with '/'")
        response = self._request_with_retry(method, uri, params=params, json=body)
        if not response.ok:
            raise ProviderError(
                f"[SearchAd API {response.status_code}] {response.text or 'Request failed'}",
                status_code=response.status_code,
                uri=uri,
            )
        return response.json()

    def get_keyword_tool(self, hint_keywords: str, show_detail: bool = True) -> list[dict]:
        """Related keywords with monthly volume / CTR for up to 5 comma-separated hints."""
        data = self.request(
            "GET",
            "/keywordstool",
            params={"hintKeywords": hint_keywords, "showDetail": 1 if show_detail else 0},
        )
        keyword_list = data.get("keywordList") if isinstance(data, dict) else None
        return keyword_list if isinstance(keyword_list, list) else []

    def get_average_position_bids(
        self,
        device: str,
        keywords: list[str],
        positions: tuple[int, ...] = (1, 2, 3, 4, 5),
        chunk_size: int = 100,
    ) -> list[dict]:
        """
        Estimated bid to reach each position, per keyword.

        Args:
            device: "PC" or "MOBILE"
            keywords: Keywords to estimate (deduplicated)
            positions: Ad positions to estimate
            chunk_size: Max (keyword, position) items per request

        Returns:
            List of {"key", "position", "bid"}
        """
        unique = list(dict.fromkeys(k.strip() for k in keywords if k.strip()))
        items = [{"key": k, "position": p} for k in unique for p in positions]
        if chunk_size <= 0:
            chunk_size = len(items) or 1

        merged = []
        for start in range(0, len(items), chunk_size):
            body = {"device": device, "items": items[start:start + chunk_size]}
            found = _extract_bid_items(self.request("POST", BID_ESTIMATE_URI, body=body))

            # some accounts return nothing on /estimate but answer on /npc-estimate
            if not found:
                try:
                    found = _extract_bid_items(self.request("POST", BID_ESTIMATE_FALLBACK_URI, body=body))
                except ProviderError as e:
                    logger.warning(f"Bid estimate fallback failed: {e}")
                    found = []

            merged.extend(found)
        return merged
