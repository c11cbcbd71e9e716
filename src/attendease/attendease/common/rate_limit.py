from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from threading import Lock


@dataclass
class _Window:
    count: int
    reset_at: datetime


class RateLimiter:
    """Fixed-window counter keyed by an arbitrary string (e.g. ``attendance:<user_id>``).

    Process-local; a second instance behind a load balancer keeps its own counts.
    """

    def __init__(self, *, limit: int, window_seconds: int):
        self._limit = int(limit)
        self._window = timedelta(seconds=window_seconds)
        self._entries: dict[str, _Window] = {}
        self._lock = Lock()

    def allow(self, key: str, *, now: datetime) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None or now > entry.reset_at:
                self._evict(now)
                self._entries[key] = _Window(count=1, reset_at=now + self._window)
                return True

            if entry.count >= self._limit:
                return False
            entry.count += 1
            return True

    def _evict(self, now: datetime) -> None:
        expired = [k for k, v in self._entries.items() if now > v.reset_at]
        for k in expired:
            del self._entries[k]
