"""Keyword net cache on Supabase. Best-effort: any storage failure behaves as a miss."""

import logging
from concurrent.futures import Executor
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .. import config
from ..clients.storage import get_supabase_client
from ..models.keyword import KeywordNetParams, KeywordNetResult
from ..utils import utc_now
from .keyword_net import build_keyword_net, compute_keyword_net_inputs

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=config.KEYWORD_NET_CACHE_TTL_HOURS)
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class CachedKeywordNet:
    """A keyword net and whether it came from the cache."""
    result: KeywordNetResult
    from_cache: bool
    cached_at: datetime | None = None         # row created_at on a hit

    @property
    def age_minutes(self) -> int | None:
        if self.cached_at is None:
            return None
        return round((utc_now() - self.cached_at).total_seconds() / 60)


def _parse_created_at(value) -> datetime:
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class KeywordNetCache:
    """Read-through cache of KeywordNetResult payloads keyed by cache key."""

    def __init__(
        self,
        store=None,
        ttl: timedelta = DEFAULT_TTL,
        executor: Executor | None = None,
        table: str = config.KEYWORD_NET_CACHE_TABLE,
    ):
        """
        Args:
            store: Supabase client (resolved lazily with get_supabase_client when omitted)
            ttl: Max age of a usable row
            executor: When given, saves run in the background
            table: Cache table name
        """
        self._store = store
        self.ttl = ttl
        self.executor = executor
        self.table = table

    def _get_store(self):
        if self._store is None:
            self._store = get_supabase_client()
        return self._store

    def load_entry(self, cache_key: str) -> tuple[KeywordNetResult, datetime] | None:
        """Latest fresh (result, created_at) for the key, or None."""
        try:
            response = (
                self._get_store()
                .table(self.table)
                .select("result_json, created_at")
                .eq("cache_key", cache_key)
                .order("created_at", desc=True)
                .limit(1)
                .execute()
            )
            rows = response.data or []
            if not rows:
                return None

            created_at = _parse_created_at(rows[0].get("created_at"))
            if utc_now() - created_at > self.ttl:
                return None

            payload = rows[0].get("result_json")
            if not isinstance(payload, dict):
                return None
            return KeywordNetResult.from_dict(payload), created_at
        except Exception as e:
            logger.warning(f"Keyword net cache load failed for {cache_key[:12]}: {e}")
            return None

    def load(self, cache_key: str) -> KeywordNetResult | None:
        entry = self.load_entry(cache_key)
        return entry[0] if entry else None

    def save(self, cache_key: str, payload: dict) -> None:
        """Insert a row. Failures are logged, never raised."""
        try:
            self._get_store().table(self.table).insert({
                "cache_key": cache_key,
                "result_json": payload,
            }).execute()
        except Exception as e:
            logger.warning(f"Keyword net cache save failed for {cache_key[:12]}: {e}")

    def get_or_build(self, params: KeywordNetParams, searchad, local=None) -> CachedKeywordNet:
        """
        Return the cached keyword net for params, building and saving it on a miss.

        Provider errors from the build propagate; cache errors never do.
        """
        inputs = compute_keyword_net_inputs(params)

        entry = self.load_entry(inputs.cache_key)
        if entry is not None:
            result, created_at = entry
            print(f"  Keyword net cache hit: {inputs.cache_key[:12]}", flush=True)
            return CachedKeywordNet(result=result, from_cache=True, cached_at=created_at)

        result = build_keyword_net(params, searchad, local)
        result.cache_key = inputs.cache_key
        payload = result.to_dict()

        if self.executor is not None:
            self.executor.submit(self.save, inputs.cache_key, payload)
        else:
            self.save(inputs.cache_key, payload)

        return CachedKeywordNet(result=result, from_cache=False)
