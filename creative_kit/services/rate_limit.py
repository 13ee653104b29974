"""In-process fixed-window rate limiter.

Buckets live in this process only; several workers each keep their own count.
"""

import threading
import time
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    remaining: int
    reset_at: float                           # epoch seconds


@dataclass
class _Bucket:
    count: int
    reset_at: float


_buckets: dict[str, _Bucket] = {}
_lock = threading.Lock()


def _sweep_expired(now: float) -> None:
    """Drop buckets whose window has ended. Caller holds _lock."""
    for key in [k for k, b in _buckets.items() if b.reset_at <= now]:
        del _buckets[key]


def consume_rate_limit(key: str, limit: int, window_seconds: float, now: float | None = None) -> RateLimitResult:
    """Count one request for key; allowed=False once limit is reached in the current window."""
    now = time.time() if now is None else now
    with _lock:
        bucket = _buckets.get(key)
        if bucket is None or now >= bucket.reset_at:
            _sweep_expired(now)
            bucket = _Bucket(count=1, reset_at=now + window_seconds)
            _buckets[key] = bucket
            return RateLimitResult(allowed=True, remaining=max(limit - 1, 0), reset_at=bucket.reset_at)

        if bucket.count >= limit:
            return RateLimitResult(allowed=False, remaining=0, reset_at=bucket.reset_at)

        bucket.count += 1
        return RateLimitResult(allowed=True, remaining=max(limit - bucket.count, 0), reset_at=bucket.reset_at)


def reset_rate_limits() -> None:
    with _lock:
        _buckets.clear()
