from __future__ import annotations

from typing import Optional

from ..users.model import User
from .model import FALLBACK_SHIFT, Shift
from .repository import ShiftRepository


class ShiftResolver:
    """Pick the shift that governs a user's day.

    Order: the user's own active shift, then the active default shift, then the
    built-in 09:00-17:00 / 10 min grace / 480 min fallback.
    """

    def __init__(self, shifts: ShiftRepository):
        self._shifts = shifts

    def for_user(self, user: Optional[User]) -> Shift:
        if user and user.shift_id:
            shift = self._shifts.get_by_id(user.shift_id)
            if shift and shift.is_active:
                return shift

        return self._shifts.get_default() or FALLBACK_SHIFT
