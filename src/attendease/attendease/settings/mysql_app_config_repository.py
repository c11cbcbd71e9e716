from __future__ import annotations

from typing import Iterable, Mapping

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import AppConfigRepository


class MySQLAppConfigRepository(AppConfigRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_values(self, keys: Iterable[str]) -> Mapping[str, str]:
        keys = [str(k) for k in keys]
        if not keys:
            return {}

        placeholders = ",".join(["%s"] * len(keys))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT config_key, config_value FROM app_config WHERE config_key IN ({placeholders})",
                tuple(keys),
            )
            return {r["config_key"]: str(r["config_value"]) for r in fetchall(cur)}
