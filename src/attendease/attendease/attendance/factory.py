from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import HALF_DAY_THRESHOLD_MINS
from .strategies.base import DayFacts, DayStatusStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class DayStatusStrategyFactory:
    """Factory Pattern: the first strategy whose rule matches the day wins.

    Order is LATE, HALF_DAY, PRESENT.
    """

    half_day_threshold_mins: int = HALF_DAY_THRESHOLD_MINS

    def strategies(self) -> tuple[DayStatusStrategy, ...]:
        return (
            LateStrategy(),
            HalfDayStrategy(self.half_day_threshold_mins),
            PresentStrategy(),
        )

    def for_day(self, facts: DayFacts) -> DayStatusStrategy:
        for strategy in self.strategies():
            if strategy.matches(facts):
                return strategy
        raise LookupError("No status strategy matched")
