"""Pure time/shift arithmetic over a day's session list."""
from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional

from ..common.datetime_utils import minute_of_day, minutes_between
from ..core.enums import SessionType
from ..shifts.model import Shift
from .model import AttendanceSession, WorkTotals


def working_minutes(sessions: Iterable[AttendanceSession]) -> WorkTotals:
    """Pair sessions in the given order as (CHECK_IN, CHECK_OUT).

    Work is the sum over complete pairs; break is the sum of CHECK_OUT ->
    next CHECK_IN gaps. A trailing open CHECK_IN counts toward neither.
    """
    work = 0
    breaks = 0
    open_check_in: Optional[datetime] = None
    last_check_out: Optional[datetime] = None

    for s in sessions:
        if s.session_type == SessionType.CHECK_IN:
            if last_check_out is not None:
                breaks += minutes_between(last_check_out, s.occurred_at)
            open_check_in = s.occurred_at
            last_check_out = None
        elif open_check_in is not None:
            work += minutes_between(open_check_in, s.occurred_at)
            last_check_out = s.occurred_at
            open_check_in = None

    return WorkTotals(work_mins=work, break_mins=breaks)


def is_late_arrival(first_check_in: Optional[datetime], shift: Shift) -> bool:
    # Compared at minute precision: 09:10:59 against a 09:10 threshold is on time.
    if first_check_in is None:
        return False
    return minute_of_day(first_check_in) > shift.late_threshold_minute


def overtime_minutes(work_mins: int, shift: Shift) -> int:
    return max(0, int(work_mins) - int(shift.standard_work_mins))
