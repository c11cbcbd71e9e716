from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import DayStatus, SessionType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_utc, to_db_utc
from .model import AttendanceSession, DailySummary
from .repository import SessionRepository, SummaryRepository


def _to_session(r: Dict[str, Any]) -> AttendanceSession:
    return AttendanceSession(
        session_id=int(r["session_id"]),
        user_id=int(r["user_id"]),
        session_type=SessionType(r["session_type"]),
        occurred_at=from_db_utc(r["occurred_at"]),
        latitude=float(r["latitude"]),
        longitude=float(r["longitude"]),
        address=r.get("address"),
        device_info=r.get("device_info"),
    )


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT session_id, user_id, session_type, occurred_at, latitude, longitude, address, device_info
                FROM attendance_sessions
                WHERE user_id=%s AND occurred_at >= %s AND occurred_at < %s
                ORDER BY occurred_at ASC, session_id ASC
                """,
                (int(user_id), to_db_utc(start), to_db_utc(end)),
            )
            return [_to_session(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        user_id: int,
        session_type: SessionType,
        occurred_at: datetime,
        latitude: float,
        longitude: float,
        address: Optional[str] = None,
        device_info: Optional[str] = None,
    ) -> AttendanceSession:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_sessions(user_id, session_type, occurred_at, latitude, longitude, address, device_info)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(user_id), session_type.value, to_db_utc(occurred_at), latitude, longitude, address, device_info),
            )
            session_id = int(cur.lastrowid)

        return AttendanceSession(
            session_id=session_id,
            user_id=int(user_id),
            session_type=session_type,
            occurred_at=occurred_at,
            latitude=latitude,
            longitude=longitude,
            address=address,
            device_info=device_info,
        )


class MySQLSummaryRepository(SummaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, user_id: int, work_date: date) -> Optional[DailySummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, work_date, first_check_in, last_check_out, total_work_mins,
                       total_break_mins, overtime_mins, session_count, status
                FROM daily_summaries
                WHERE user_id=%s AND work_date=%s
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return DailySummary(
                user_id=int(r["user_id"]),
                work_date=r["work_date"],
                first_check_in=from_db_utc(r.get("first_check_in")),
                last_check_out=from_db_utc(r.get("last_check_out")),
                total_work_mins=int(r["total_work_mins"]),
                total_break_mins=int(r["total_break_mins"]),
                overtime_mins=int(r["overtime_mins"]),
                session_count=int(r["session_count"]),
                status=DayStatus(r["status"]),
            )

    def upsert(self, summary: DailySummary) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO daily_summaries(
                    user_id, work_date, first_check_in, last_check_out, total_work_mins,
                    total_break_mins, overtime_mins, session_count, status
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s) AS new
                ON DUPLICATE KEY UPDATE
                    first_check_in=new.first_check_in,
                    last_check_out=new.last_check_out,
                    total_work_mins=new.total_work_mins,
                    total_break_mins=new.total_break_mins,
                    overtime_mins=new.overtime_mins,
                    session_count=new.session_count,
                    status=new.status
                """,
                (
                    int(summary.user_id),
                    summary.work_date,
                    to_db_utc(summary.first_check_in),
                    to_db_utc(summary.last_check_out),
                    int(summary.total_work_mins),
                    int(summary.total_break_mins),
                    int(summary.overtime_mins),
                    int(summary.session_count),
                    summary.status.value,
                ),
            )
