from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Any, Optional, Sequence

from ..common.datetime_utils import business_date, day_range, now_utc
from ..common.rate_limit import RateLimiter
from ..common.validators import optional_text, require_location, require_session_type
from ..core.constants import (
    ACTION_RATE_LIMIT,
    OFFLINE_CLOCK_SKEW_SECONDS,
    RATE_LIMIT_WINDOW_SECONDS,
)
from ..core.enums import SessionType
from ..core.exceptions import DomainError, RateLimitedError, ValidationError
from ..geo.distance import format_coordinates
from ..geo.geocoder import ReverseGeocoder
from ..geofences.guard import GeofenceGuard
from ..movement.monitor import MovementMonitor
from ..settings.model import AttendanceSettings
from ..settings.service import SettingsService
from ..shifts.service import ShiftResolver
from ..users.model import User
from ..users.repository import UserRepository
from .aggregator import DailySummaryAggregator
from .locking import SessionLock
from .model import (
    AttendanceSession,
    DailySummary,
    DayStatusView,
    OfflineEntry,
    SessionResult,
    SyncReport,
    SyncResult,
)
from .offline import parse_offline_entry
from .repository import SessionRepository, SummaryRepository
from .state_machine import AttendanceDay

logger = logging.getLogger(__name__)

MAX_SYNC_ENTRIES = 50


class AttendanceService:
    """Check-in/check-out engine.

    The address is reverse-geocoded first, outside any lock. The rest of a
    write runs inside the per-(user, day) session lock:
    load the day -> validate alternation -> geofence -> insert -> re-aggregate.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        summaries: SummaryRepository,
        users: UserRepository,
        shifts: ShiftResolver,
        settings_service: SettingsService,
        geofence_guard: GeofenceGuard,
        geocoder: ReverseGeocoder,
        session_lock: SessionLock,
        *,
        aggregator: Optional[DailySummaryAggregator] = None,
        movement_monitor: Optional[MovementMonitor] = None,
        rate_limiter: Optional[RateLimiter] = None,
        max_sync_entries: int = MAX_SYNC_ENTRIES,
    ):
        self._sessions = sessions
        self._summaries = summaries
        self._users = users
        self._shifts = shifts
        self._settings = settings_service
        self._guard = geofence_guard
        self._geocoder = geocoder
        self._lock = session_lock
        self._aggregator = aggregator or DailySummaryAggregator(summaries)
        self._movement = movement_monitor
        self._rate_limiter = rate_limiter or RateLimiter(
            limit=ACTION_RATE_LIMIT, window_seconds=RATE_LIMIT_WINDOW_SECONDS
        )
        self._max_sync_entries = int(max_sync_entries)

    def record_session(
        self,
        user_id: int,
        session_type: Any,
        latitude: Any,
        longitude: Any,
        device_info: Any = None,
        *,
        now: Optional[datetime] = None,
    ) -> SessionResult:
        now = now or now_utc()
        self._check_rate(user_id, now)

        stype = require_session_type(session_type)
        lat, lng = require_location(latitude, longitude)
        user = self._require_user(user_id)
        settings = self._settings.load()

        try:
            result, day_before = self._append(
                user,
                stype,
                occurred_at=now,
                latitude=lat,
                longitude=lng,
                device_info=optional_text(device_info),
                settings=settings,
            )
        except DomainError as e:
            logger.info("Rejected %s for user=%s: %s (%s)", stype.value, user.user_id, e, e.code)
            raise

        logger.info(
            "Recorded %s for user=%s at %s (status=%s, work=%dm)",
            stype.value,
            user.user_id,
            now.isoformat(),
            result.summary.status.value,
            result.summary.total_work_mins,
        )

        if stype == SessionType.CHECK_OUT and self._movement is not None:
            try:
                self._movement.check_checkout(user=user, day=day_before, checkout=result.session, settings=settings)
            except Exception:
                logger.exception("Check-out movement check failed for user=%s", user.user_id)

        return result

    def get_today_sessions(
        self, user_id: int, work_date: Optional[date] = None, *, now: Optional[datetime] = None
    ) -> list[AttendanceSession]:
        work_date = work_date or business_date(now or now_utc())
        start, end = day_range(work_date)
        return list(self._sessions.list_between(user_id=int(user_id), start=start, end=end))

    def get_summary(self, user_id: int, work_date: date) -> Optional[DailySummary]:
        return self._summaries.get(user_id=int(user_id), work_date=work_date)

    def get_status(self, user_id: int, *, now: Optional[datetime] = None) -> DayStatusView:
        work_date = business_date(now or now_utc())
        day = AttendanceDay.from_sessions(int(user_id), work_date, self.get_today_sessions(user_id, work_date))
        return DayStatusView(
            work_date=work_date,
            state=day.state,
            last_session=day.last_session,
            summary=self.get_summary(user_id, work_date),
        )

    def sync_offline_entries(
        self, user_id: int, entries: Sequence[Any], *, now: Optional[datetime] = None
    ) -> SyncReport:
        """Apply queued offline actions oldest-first; one bad entry never aborts the rest."""
        now = now or now_utc()
        if not entries:
            raise ValidationError("No entries to sync")
        if len(entries) > self._max_sync_entries:
            raise ValidationError(f"Too many entries to sync (max {self._max_sync_entries})")

        self._check_rate(user_id, now)
        user = self._require_user(user_id)
        settings = self._settings.load()
        latest_allowed = now + timedelta(seconds=OFFLINE_CLOCK_SKEW_SECONDS)

        results: list[SyncResult] = []
        parsed: list[OfflineEntry] = []
        for index, raw in enumerate(entries):
            try:
                entry = parse_offline_entry(index, raw)
                if entry.occurred_at > latest_allowed:
                    raise ValidationError("Timestamp is in the future")
                parsed.append(entry)
            except DomainError as e:
                results.append(SyncResult(index=index, success=False, error=str(e), code=e.code))

        for entry in sorted(parsed, key=lambda e: (e.occurred_at, e.index)):
            try:
                result, _ = self._append(
                    user,
                    entry.session_type,
                    occurred_at=entry.occurred_at,
                    latitude=entry.latitude,
                    longitude=entry.longitude,
                    device_info=entry.device_info,
                    settings=settings,
                )
                results.append(SyncResult(index=entry.index, success=True, session_id=result.session.session_id))
            except DomainError as e:
                results.append(SyncResult(index=entry.index, success=False, error=str(e), code=e.code))

        report = SyncReport(results=sorted(results, key=lambda r: r.index))
        logger.info("Offline sync for user=%s: %d/%d entries applied", user.user_id, report.synced, len(entries))
        return report

    def _append(
        self,
        user: User,
        session_type: SessionType,
        *,
        occurred_at: datetime,
        latitude: float,
        longitude: float,
        device_info: Optional[str],
        settings: AttendanceSettings,
    ) -> tuple[SessionResult, AttendanceDay]:
        """Validate and persist one action; returns the result and the day as it was before it."""
        work_date = business_date(occurred_at)
        start, end = day_range(work_date)
        address = self._resolve_address(latitude, longitude)

        with self._lock.hold(user.user_id, work_date):
            day = AttendanceDay.from_sessions(
                user.user_id,
                work_date,
                self._sessions.list_between(user_id=user.user_id, start=start, end=end),
            )
            day.ensure_can_record(session_type)
            last = day.last_session
            if last is not None and occurred_at <= last.occurred_at:
                raise ValidationError("Session time must be after the previous session of the day")

            self._guard.enforce(user=user, latitude=latitude, longitude=longitude, settings=settings)

            session = self._sessions.create(
                user_id=user.user_id,
                session_type=session_type,
                occurred_at=occurred_at,
                latitude=latitude,
                longitude=longitude,
                address=address,
                device_info=device_info,
            )
            updated = day.with_session(session)
            summary = self._aggregator.upsert_summary(
                user_id=user.user_id,
                work_date=work_date,
                sessions=updated.sessions,
                shift=self._shifts.for_user(user),
            )

        return SessionResult(session=session, summary=summary), day

    def _resolve_address(self, latitude: float, longitude: float) -> str:
        try:
            return self._geocoder.reverse_geocode(latitude, longitude)
        except Exception:
            logger.exception("Geocoder raised, storing raw coordinates")
            return format_coordinates(latitude, longitude)

    def _check_rate(self, user_id: int, now: datetime) -> None:
        if not self._rate_limiter.allow(f"attendance:{int(user_id)}", now=now):
            raise RateLimitedError("Too many attendance actions. Please wait a minute and try again.")

    def _require_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if user is None or not user.is_active:
            raise ValidationError("User not found or inactive")
        return user
