"""Per-(user, business day) critical section around read-validate-write.

Two concurrent check-ins for the same user must not both observe "no open
session" and both insert. Callers hold the lock from loading the day's
sessions until the summary is upserted.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import date
from threading import Lock
from typing import Iterator, Protocol

from ..core.constants import SESSION_LOCK_TIMEOUT_SECONDS
from ..core.exceptions import RateLimitedError
from ..database.connection import DatabaseConnection

logger = logging.getLogger(__name__)

BUSY_MESSAGE = "Another attendance action is still being processed. Please try again."


def lock_name(user_id: int, work_date: date) -> str:
    return f"attendance:{int(user_id)}:{work_date.isoformat()}"


class SessionLock(Protocol):
    def hold(self, user_id: int, work_date: date):
        """Context manager; raises RateLimitedError when the lock is busy too long."""
        raise NotImplementedError


class InProcessSessionLock:
    """One threading.Lock per (user, day). Only serializes within this process.

    Entries are reference-counted and dropped once nobody holds or waits on them.
    """

    def __init__(self, *, timeout: float = SESSION_LOCK_TIMEOUT_SECONDS):
        self._timeout = float(timeout)
        self._locks: dict[str, Lock] = {}
        self._holders: dict[str, int] = {}
        self._guard = Lock()

    def _checkout(self, name: str) -> Lock:
        with self._guard:
            lock = self._locks.get(name)
            if lock is None:
                lock = self._locks[name] = Lock()
            self._holders[name] = self._holders.get(name, 0) + 1
            return lock

    def _checkin(self, name: str) -> None:
        with self._guard:
            remaining = self._holders[name] - 1
            if remaining:
                self._holders[name] = remaining
            else:
                del self._holders[name]
                del self._locks[name]

    def active_names(self) -> list[str]:
        with self._guard:
            return sorted(self._locks)

    @contextmanager
    def hold(self, user_id: int, work_date: date) -> Iterator[None]:
        name = lock_name(user_id, work_date)
        lock = self._checkout(name)
        try:
            if not lock.acquire(timeout=self._timeout):
                raise RateLimitedError(BUSY_MESSAGE)
            try:
                yield
            finally:
                lock.release()
        finally:
            self._checkin(name)


class MySQLSessionLock:
    """MySQL named lock (GET_LOCK), shared by every app instance on the same server.

    The lock lives on its own connection, held open for the duration of the
    critical section; repository calls inside use their own short connections.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, timeout: float = SESSION_LOCK_TIMEOUT_SECONDS):
        self._conn_factory = conn_factory
        self._timeout = int(max(0, round(timeout)))

    @contextmanager
    def hold(self, user_id: int, work_date: date) -> Iterator[None]:
        name = lock_name(user_id, work_date)
        conn = self._conn_factory.connect()
        try:
            cur = conn.cursor()
            cur.execute("SELECT GET_LOCK(%s, %s)", (name, self._timeout))
            row = cur.fetchone()
            if not row or row[0] != 1:
                logger.info("Session lock busy: %s", name)
                raise RateLimitedError(BUSY_MESSAGE)
            try:
                yield
            finally:
                cur.execute("SELECT RELEASE_LOCK(%s)", (name,))
                cur.fetchone()
        finally:
            conn.close()
