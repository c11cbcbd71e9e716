from __future__ import annotations

from ...core.enums import DayStatus
from .base import DayFacts, DayStatusStrategy, StatusDecision


class PresentStrategy(DayStatusStrategy):
    """Fallback: always applies."""

    def matches(self, facts: DayFacts) -> bool:
        return True

    def decide(self, facts: DayFacts) -> StatusDecision:
        return StatusDecision(status=DayStatus.PRESENT)
