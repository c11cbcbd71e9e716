from datetime import time

from src.attendease.attendease.attendance.calculations import is_late_arrival, overtime_minutes, working_minutes
from src.attendease.attendease.core.enums import SessionType
from src.attendease.attendease.shifts.model import FALLBACK_SHIFT, Shift

from tests.fakes import InMemorySessions, ist

CI = SessionType.CHECK_IN
CO = SessionType.CHECK_OUT


def _day(*events):
    sessions = InMemorySessions()
    for session_type, (hour, minute, *rest) in events:
        sessions.add(1, session_type, ist(2025, 1, 6, hour, minute, *rest))
    return sessions.rows


def test_two_pairs_with_lunch_break():
    totals = working_minutes(_day((CI, (9, 0)), (CO, (13, 0)), (CI, (14, 0)), (CO, (18, 0))))

    assert totals.work_mins == 480
    assert totals.break_mins == 60


def test_trailing_open_check_in_counts_toward_nothing():
    totals = working_minutes(_day((CI, (9, 0)), (CO, (12, 0)), (CI, (13, 0))))

    assert totals.work_mins == 180
    assert totals.break_mins == 60


def test_partial_minutes_are_truncated():
    totals = working_minutes(_day((CI, (9, 0, 0)), (CO, (9, 0, 59))))

    assert totals.work_mins == 0


def test_no_sessions():
    totals = working_minutes([])

    assert (totals.work_mins, totals.break_mins) == (0, 0)


def test_late_threshold_is_exclusive_at_minute_precision():
    assert is_late_arrival(ist(2025, 1, 6, 9, 10), FALLBACK_SHIFT) is False
    assert is_late_arrival(ist(2025, 1, 6, 9, 10, 59), FALLBACK_SHIFT) is False
    assert is_late_arrival(ist(2025, 1, 6, 9, 11), FALLBACK_SHIFT) is True


def test_late_uses_shift_start_and_grace():
    shift = Shift(shift_id=2, shift_name="Late", start_time=time(10, 30), end_time=time(19, 0), grace_minutes=5)

    assert is_late_arrival(ist(2025, 1, 6, 10, 35), shift) is False
    assert is_late_arrival(ist(2025, 1, 6, 10, 36), shift) is True


def test_no_check_in_is_never_late():
    assert is_late_arrival(None, FALLBACK_SHIFT) is False


def test_overtime_above_standard_only():
    assert overtime_minutes(500, FALLBACK_SHIFT) == 20
    assert overtime_minutes(400, FALLBACK_SHIFT) == 0
