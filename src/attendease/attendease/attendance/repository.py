from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import SessionType
from .model import AttendanceSession, DailySummary


class SessionRepository(Protocol):
    def list_between(self, *, user_id: int, start: datetime, end: datetime) -> Sequence[AttendanceSession]:
        """Sessions with start <= occurred_at < end, oldest first."""
        raise NotImplementedError

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
        raise NotImplementedError


class SummaryRepository(Protocol):
    def get(self, *, user_id: int, work_date: date) -> Optional[DailySummary]:
        raise NotImplementedError

    def upsert(self, summary: DailySummary) -> None:
        """Insert or replace the row keyed by (user_id, work_date)."""
        raise NotImplementedError
