from __future__ import annotations

from datetime import datetime
from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, to_db_utc
from .repository import NotificationRepository


class MySQLNotificationRepository(NotificationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, user_id: int, title: str, message: str, link: Optional[str], created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO notifications(user_id, title, message, link, created_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(user_id), title, message, link, to_db_utc(created_at)),
            )
            return int(cur.lastrowid)

    def exists_since(self, *, user_id: int, title: str, since: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT notification_id
                FROM notifications
                WHERE user_id=%s AND title=%s AND created_at >= %s
                LIMIT 1
                """,
                (int(user_id), title, to_db_utc(since)),
            )
            return fetchone(cur) is not None
