from __future__ import annotations

from ...core.constants import HALF_DAY_THRESHOLD_MINS
from ...core.enums import DayStatus
from .base import DayFacts, DayStatusStrategy, StatusDecision


class HalfDayStrategy(DayStatusStrategy):
    """Some work recorded, but less than the half-day threshold.

    Zero minutes means nothing is completed yet (still checked in), which
    is not a half day.
    """

    def __init__(self, threshold_mins: int = HALF_DAY_THRESHOLD_MINS):
        self.threshold_mins = int(threshold_mins)

    def matches(self, facts: DayFacts) -> bool:
        return 0 < facts.work_mins < self.threshold_mins

    def decide(self, facts: DayFacts) -> StatusDecision:
        return StatusDecision(
            status=DayStatus.HALF_DAY,
            note=f"worked {facts.work_mins}m of {self.threshold_mins}m",
        )
