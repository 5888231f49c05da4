from __future__ import annotations

from mentorpath.config import get_settings
from mentorpath.core.rate_limit import KeyedLocks, RateLimiter

_RATE_LIMITER: RateLimiter | None = None
_USER_LOCKS: KeyedLocks | None = None


def get_rate_limiter() -> RateLimiter:
    global _RATE_LIMITER
    if _RATE_LIMITER is None:
        settings = get_settings()
        _RATE_LIMITER = RateLimiter(
            max_requests=settings.rate_limit_max,
            window_sec=settings.rate_limit_window_sec,
        )
    return _RATE_LIMITER


def get_user_locks() -> KeyedLocks:
    global _USER_LOCKS
    if _USER_LOCKS is None:
        _USER_LOCKS = KeyedLocks()
    return _USER_LOCKS
