from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import DayStatus


@dataclass(frozen=True)
class DayFacts:
    first_check_in: Optional[datetime]
    work_mins: int
    is_late: bool


@dataclass(frozen=True)
class StatusDecision:
    status: DayStatus
    note: Optional[str] = None


class DayStatusStrategy(ABC):
    """Strategy Pattern: encapsulate how a day's summary status is decided."""

    @abstractmethod
    def matches(self, facts: DayFacts) -> bool:
        raise NotImplementedError

    @abstractmethod
    def decide(self, facts: DayFacts) -> StatusDecision:
        raise NotImplementedError
