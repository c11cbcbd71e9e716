from __future__ import annotations

from datetime import datetime, timedelta

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, to_db_utc
from .cooldown import CooldownStore

_EPOCH = datetime(1970, 1, 1)


class MySQLCooldownStore(CooldownStore):
    """Cooldown keys shared by every app instance pointing at the same database.

    The row is created if missing, then locked with SELECT ... FOR UPDATE so the
    compare-and-extend runs atomically inside one transaction.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def try_acquire(self, key: str, *, now: datetime, ttl_seconds: int) -> bool:
        now_db = to_db_utc(now)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO movement_alert_cooldowns(cooldown_key, expires_at) VALUES(%s,%s)",
                (key, _EPOCH),
            )
            cur.execute(
                "SELECT expires_at FROM movement_alert_cooldowns WHERE cooldown_key=%s FOR UPDATE",
                (key,),
            )
            row = fetchone(cur)
            if row and row["expires_at"] is not None and now_db < row["expires_at"]:
                return False

            cur.execute(
                "UPDATE movement_alert_cooldowns SET expires_at=%s WHERE cooldown_key=%s",
                (now_db + timedelta(seconds=ttl_seconds), key),
            )
            return True

