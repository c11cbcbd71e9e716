from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_bool, db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, full_name, email, role, shift_id, geofence_enabled, is_active"


def _to_user(r: Dict[str, Any]) -> User:
    return User(
        user_id=int(r["user_id"]),
        full_name=r["full_name"],
        email=r["email"],
        role=Role(r["role"]),
        shift_id=int(r["shift_id"]) if r.get("shift_id") is not None else None,
        geofence_enabled=as_bool(r.get("geofence_enabled")),
        is_active=bool(r.get("is_active")),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return _to_user(r) if r else None

    def list_active_by_roles(self, roles: Iterable[Role]) -> Sequence[User]:
        values = [Role(r).value for r in roles]
        if not values:
            return []

        placeholders = ",".join(["%s"] * len(values))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM users
                WHERE is_active=1 AND role IN ({placeholders})
                ORDER BY user_id
                """,
                tuple(values),
            )
            return [_to_user(r) for r in fetchall(cur)]
