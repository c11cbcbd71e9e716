from __future__ import annotations

from ...core.enums import DayStatus
from .base import DayFacts, DayStatusStrategy, StatusDecision


class LateStrategy(DayStatusStrategy):
    """First check-in after shift start + grace."""

    def matches(self, facts: DayFacts) -> bool:
        return facts.first_check_in is not None and facts.is_late

    def decide(self, facts: DayFacts) -> StatusDecision:
        return StatusDecision(
            status=DayStatus.LATE,
            note=f"first check-in {facts.first_check_in.isoformat()}",
        )
