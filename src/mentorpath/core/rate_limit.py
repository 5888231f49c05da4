from __future__ import annotations

import threading
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RateLimitDecision:
    allowed: bool
    retry_after: float | None = None


@dataclass(slots=True)
class _Window:
    count: int
    reset_at: float


class KeyedLocks:
    """Registry handing out one ``threading.Lock`` per key.

    Locks taken through ``hold`` are dropped from the registry once no
    thread holds or waits on them.
    """

    def __init__(self) -> None:
        self._registry_lock = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}
        self._holders: dict[str, int] = {}

    def __len__(self) -> int:
        with self._registry_lock:
            return len(self._locks)

    def get(self, key: str) -> threading.Lock:
        with self._registry_lock:
            return self._locks.setdefault(key, threading.Lock())

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._registry_lock:
            lock = self._locks.setdefault(key, threading.Lock())
            self._holders[key] = self._holders.get(key, 0) + 1
        try:
            with lock:
                yield
        finally:
            with self._registry_lock:
                remaining = self._holders[key] - 1
                if remaining:
                    self._holders[key] = remaining
                else:
                    del self._holders[key]
                    self._locks.pop(key, None)


class RateLimiter:
    def __init__(
        self,
        max_requests: int,
        window_sec: float,
        *,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests < 1:
            raise ValueError("max_requests must be at least 1")
        if window_sec <= 0:
            raise ValueError("window_sec must be positive")
        self.max_requests = max_requests
        self.window_sec = window_sec
        self.clock = clock
        self._locks = KeyedLocks()
        self._windows_lock = threading.Lock()
        self._windows: dict[str, _Window] = {}
        self._last_pruned = clock()

    def __len__(self) -> int:
        with self._windows_lock:
            return len(self._windows)

    def hit(self, key: str) -> RateLimitDecision:
        with self._locks.hold(key), self._windows_lock:
            now = self.clock()
            self._prune(now)
            window = self._windows.get(key)

            if window is None or window.reset_at <= now:
                self._windows[key] = _Window(count=1, reset_at=now + self.window_sec)
                return RateLimitDecision(allowed=True)

            if window.count < self.max_requests:
                window.count += 1
                return RateLimitDecision(allowed=True)

            return RateLimitDecision(allowed=False, retry_after=max(0.0, window.reset_at - now))

    def reset(self, key: str | None = None) -> None:
        with self._windows_lock:
            if key is None:
                self._windows.clear()
            else:
                self._windows.pop(key, None)

    def _prune(self, now: float) -> None:
        # Caller holds _windows_lock. Sweeps at most once per window.
        if now - self._last_pruned < self.window_sec:
            return
        self._last_pruned = now
        expired = [key for key, window in self._windows.items() if window.reset_at <= now]
        for key in expired:
            del self._windows[key]
