from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..attendance.model import AttendanceSession
from ..core.enums import PingStatus
from ..users.model import User


@dataclass(frozen=True)
class PingResult:
    status: PingStatus
    distance: Optional[int] = None


@dataclass(frozen=True)
class MovementAlert:
    """Everything the background worker needs to build and send one alert."""

    employee: User
    recipients: tuple[str, ...]
    check_in: AttendanceSession
    latitude: float
    longitude: float
    distance: int
    heading: str
