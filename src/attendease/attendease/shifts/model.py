from __future__ import annotations

from dataclasses import dataclass
from datetime import time

from ..core.constants import (
    DEFAULT_GRACE_MINUTES,
    DEFAULT_SHIFT_END,
    DEFAULT_SHIFT_START,
    DEFAULT_STANDARD_WORK_MINS,
)


@dataclass(frozen=True)
class Shift:
    """Domain entity: work shift. Times are business-timezone local."""

    shift_id: int
    shift_name: str
    start_time: time
    end_time: time
    grace_minutes: int = DEFAULT_GRACE_MINUTES
    standard_work_mins: int = DEFAULT_STANDARD_WORK_MINS
    is_default: bool = False
    is_active: bool = True

    @property
    def late_threshold_minute(self) -> int:
        """Minute of day after which a first check-in counts as late."""
        return self.start_time.hour * 60 + self.start_time.minute + self.grace_minutes


# Used when a user has no shift and no default shift is configured.
FALLBACK_SHIFT = Shift(
    shift_id=0,
    shift_name="General",
    start_time=DEFAULT_SHIFT_START,
    end_time=DEFAULT_SHIFT_END,
)
