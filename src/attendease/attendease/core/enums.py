from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles known to the attendance engine."""

    EMPLOYEE = "EMPLOYEE"
    MANAGER = "MANAGER"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"
    MANAGEMENT = "MANAGEMENT"


class SessionType(str, Enum):
    CHECK_IN = "CHECK_IN"
    CHECK_OUT = "CHECK_OUT"


class DayStatus(str, Enum):
    """Status stored on a daily summary row."""

    PRESENT = "PRESENT"
    LATE = "LATE"
    HALF_DAY = "HALF_DAY"
    ABSENT = "ABSENT"
    ON_LEAVE = "ON_LEAVE"


class SessionState(str, Enum):
    """Where a user stands within one business day."""

    NOT_STARTED = "NOT_STARTED"
    CHECKED_IN = "CHECKED_IN"
    CHECKED_OUT = "CHECKED_OUT"


class PingStatus(str, Enum):
    RATE_LIMITED = "rate_limited"
    ALERTS_DISABLED = "alerts_disabled"
    NO_CHECKIN = "no_checkin"
    NOT_CHECKED_IN = "not_checked_in"
    OK = "ok"
    ALREADY_ALERTED = "already_alerted"
    ALERT_SKIPPED = "alert_skipped"
    ALERT_SENT = "alert_sent"
