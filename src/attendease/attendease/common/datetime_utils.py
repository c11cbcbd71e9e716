from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from ..core.constants import BUSINESS_TIMEZONE

BUSINESS_TZ = ZoneInfo(BUSINESS_TIMEZONE)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 instant; naive values are read as business-local time."""
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=BUSINESS_TZ)
    return parsed.astimezone(timezone.utc)


def parse_hhmm(value: str) -> time:
    return datetime.strptime(value.strip(), "%H:%M").time()


def now_utc() -> datetime:
    """Current instant (aware, UTC).

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def to_business(instant: datetime) -> datetime:
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(BUSINESS_TZ)


def business_date(instant: datetime) -> date:
    return to_business(instant).date()


def day_range(work_date: date) -> tuple[datetime, datetime]:
    """UTC bounds [start, end) of a business day."""
    start = datetime.combine(work_date, time.min, tzinfo=BUSINESS_TZ)
    end = start + timedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def minutes_between(start: datetime, end: datetime) -> int:
    """Whole minutes from start to end, truncated toward zero."""
    return int((end - start).total_seconds() / 60)


def minute_of_day(instant: datetime) -> int:
    local = to_business(instant)
    return local.hour * 60 + local.minute


def format_local_time(instant: datetime) -> str:
    return to_business(instant).strftime("%I:%M %p")


def format_long_date(day: date) -> str:
    return day.strftime("%A, %B %d, %Y").replace(" 0", " ")
