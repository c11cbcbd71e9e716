from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import DayStatus, SessionState, SessionType


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one check-in or check-out event. Never mutated after insert.

    ``occurred_at`` is a timezone-aware UTC instant.
    """

    session_id: int
    user_id: int
    session_type: SessionType
    occurred_at: datetime
    latitude: float
    longitude: float
    address: Optional[str] = None
    device_info: Optional[str] = None


@dataclass(frozen=True)
class DailySummary:
    """Derived record: one row per (user, business date)."""

    user_id: int
    work_date: date
    first_check_in: Optional[datetime]
    last_check_out: Optional[datetime]
    total_work_mins: int
    total_break_mins: int
    overtime_mins: int
    session_count: int
    status: DayStatus


@dataclass(frozen=True)
class WorkTotals:
    work_mins: int
    break_mins: int


@dataclass(frozen=True)
class SessionResult:
    session: AttendanceSession
    summary: DailySummary


@dataclass(frozen=True)
class DayStatusView:
    work_date: date
    state: SessionState
    last_session: Optional[AttendanceSession]
    summary: Optional[DailySummary]


@dataclass(frozen=True)
class OfflineEntry:
    """An action captured while the device was offline, uploaded later."""

    index: int
    session_type: SessionType
    occurred_at: datetime
    latitude: float
    longitude: float
    device_info: Optional[str] = None


@dataclass(frozen=True)
class SyncResult:
    index: int
    success: bool
    session_id: Optional[int] = None
    error: Optional[str] = None
    code: Optional[str] = None


@dataclass(frozen=True)
class SyncReport:
    results: list[SyncResult] = field(default_factory=list)

    @property
    def synced(self) -> int:
        return sum(1 for r in self.results if r.success)
