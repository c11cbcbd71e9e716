from datetime import date

import pytest

from src.attendease.attendease.attendance.locking import InProcessSessionLock, lock_name
from src.attendease.attendease.core.exceptions import RateLimitedError


def test_lock_name_is_per_user_and_day():
    assert lock_name(5, date(2025, 1, 6)) == "attendance:5:2025-01-06"


def test_same_user_day_is_serialised():
    lock = InProcessSessionLock(timeout=0.05)

    with lock.hold(1, date(2025, 1, 6)):
        with pytest.raises(RateLimitedError):
            with lock.hold(1, date(2025, 1, 6)):
                pass


def test_other_users_and_days_do_not_block():
    lock = InProcessSessionLock(timeout=0.05)

    with lock.hold(1, date(2025, 1, 6)):
        with lock.hold(2, date(2025, 1, 6)):
            pass
        with lock.hold(1, date(2025, 1, 7)):
            pass


def test_lock_is_released_after_errors():
    lock = InProcessSessionLock(timeout=0.05)

    with pytest.raises(ValueError):
        with lock.hold(1, date(2025, 1, 6)):
            raise ValueError("boom")

    with lock.hold(1, date(2025, 1, 6)):
        pass


def test_lock_entries_are_dropped_after_release():
    lock = InProcessSessionLock(timeout=0.05)

    for user_id in range(1, 501):
        with lock.hold(user_id, date(2025, 1, 6)):
            assert lock.active_names() == [lock_name(user_id, date(2025, 1, 6))]

    assert lock.active_names() == []


def test_lock_entry_survives_while_another_caller_holds_it():
    lock = InProcessSessionLock(timeout=0.05)

    with lock.hold(1, date(2025, 1, 6)):
        with pytest.raises(RateLimitedError):
            with lock.hold(1, date(2025, 1, 6)):
                pass
        assert lock.active_names() == ["attendance:1:2025-01-06"]

    assert lock.active_names() == []
