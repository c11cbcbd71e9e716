"""Keyed "at most once per TTL" gate for movement alerts."""
from __future__ import annotations

from datetime import datetime, timedelta
from threading import Lock
from typing import Protocol


class CooldownStore(Protocol):
    def try_acquire(self, key: str, *, now: datetime, ttl_seconds: int) -> bool:
        """Atomically claim ``key`` until ``now + ttl_seconds``.

        Returns False when the key is still held from an earlier claim.
        """
        raise NotImplementedError


class InMemoryCooldownStore:
    """Process-local store. Only enough for a single app instance."""

    def __init__(self):
        self._expiry: dict[str, datetime] = {}
        self._lock = Lock()

    def try_acquire(self, key: str, *, now: datetime, ttl_seconds: int) -> bool:
        with self._lock:
            expires_at = self._expiry.get(key)
            if expires_at is not None and now < expires_at:
                return False

            self._evict(now)
            self._expiry[key] = now + timedelta(seconds=ttl_seconds)
            return True

    def _evict(self, now: datetime) -> None:
        for k in [k for k, v in self._expiry.items() if now >= v]:
            del self._expiry[k]

    def __len__(self) -> int:
        return len(self._expiry)
