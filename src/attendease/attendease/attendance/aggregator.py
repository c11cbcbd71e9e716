from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import SessionType
from ..shifts.model import Shift
from .calculations import is_late_arrival, overtime_minutes, working_minutes
from .factory import DayStatusStrategyFactory
from .model import AttendanceSession, DailySummary
from .repository import SummaryRepository
from .strategies.base import DayFacts


class DailySummaryAggregator:
    """Recompute and upsert the one-summary-per-user-per-day record.

    The summary is a pure function of the day's sessions and the shift, so
    re-running it on an unchanged session list writes identical values.
    """

    def __init__(self, summaries: SummaryRepository, *, strategy_factory: Optional[DayStatusStrategyFactory] = None):
        self._summaries = summaries
        self._factory = strategy_factory or DayStatusStrategyFactory()

    def build(self, *, user_id: int, work_date: date, sessions: Sequence[AttendanceSession], shift: Shift) -> DailySummary:
        totals = working_minutes(sessions)

        check_ins = [s.occurred_at for s in sessions if s.session_type == SessionType.CHECK_IN]
        check_outs = [s.occurred_at for s in sessions if s.session_type == SessionType.CHECK_OUT]
        first_check_in = min(check_ins) if check_ins else None
        last_check_out = max(check_outs) if check_outs else None

        facts = DayFacts(
            first_check_in=first_check_in,
            work_mins=totals.work_mins,
            is_late=is_late_arrival(first_check_in, shift),
        )
        decision = self._factory.for_day(facts).decide(facts)

        return DailySummary(
            user_id=int(user_id),
            work_date=work_date,
            first_check_in=first_check_in,
            last_check_out=last_check_out,
            total_work_mins=totals.work_mins,
            total_break_mins=totals.break_mins,
            overtime_mins=overtime_minutes(totals.work_mins, shift),
            session_count=len(sessions),
            status=decision.status,
        )

    def upsert_summary(
        self,
        *,
        user_id: int,
        work_date: date,
        sessions: Sequence[AttendanceSession],
        shift: Shift,
    ) -> DailySummary:
        summary = self.build(user_id=user_id, work_date=work_date, sessions=sessions, shift=shift)
        self._summaries.upsert(summary)
        return summary
