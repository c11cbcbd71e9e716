from __future__ import annotations

from typing import Any, Dict, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import Shift
from .repository import ShiftRepository

_COLUMNS = "shift_id, shift_name, start_time, end_time, grace_minutes, standard_work_mins, is_default, is_active"


def _to_shift(r: Dict[str, Any]) -> Shift:
    return Shift(
        shift_id=int(r["shift_id"]),
        shift_name=r["shift_name"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        grace_minutes=int(r.get("grace_minutes") or 0),
        standard_work_mins=int(r.get("standard_work_mins") or 0),
        is_default=bool(r.get("is_default")),
        is_active=bool(r.get("is_active")),
    )


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM shifts WHERE shift_id=%s", (int(shift_id),))
            r = fetchone(cur)
            return _to_shift(r) if r else None

    def get_default(self) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM shifts
                WHERE is_default=1 AND is_active=1
                ORDER BY shift_id
                LIMIT 1
                """
            )
            r = fetchone(cur)
            return _to_shift(r) if r else None
