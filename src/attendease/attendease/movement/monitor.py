"""Post-check-in movement detection.

Two entry points share one alert path:

- ``evaluate_ping``: periodic client pings while checked in, throttled per user
  by a cooldown store (one alert per hour by default).
- ``check_checkout``: the check-out location compared once against the first
  check-in of the day; no cooldown.

Alert fan-out (geocoding, email) runs on the outbound dispatcher; the caller
only waits for the distance computation.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceSession
from ..attendance.repository import SessionRepository
from ..attendance.state_machine import AttendanceDay
from ..common.datetime_utils import business_date, day_range, format_local_time, now_utc
from ..common.rate_limit import RateLimiter
from ..common.validators import require_location
from ..core.constants import MOVEMENT_ALERT_COOLDOWN_SECONDS, PING_RATE_LIMIT, RATE_LIMIT_WINDOW_SECONDS
from ..core.enums import PingStatus, Role, SessionState
from ..geo.distance import directions_url, format_coordinates, format_distance, haversine_m
from ..geo.geocoder import ReverseGeocoder
from ..notifications.dispatcher import OutboundDispatcher
from ..notifications.service import NotificationService
from ..notifications.templates import movement_alert_email
from ..settings.model import AttendanceSettings
from ..settings.service import SettingsService
from ..users.model import User
from ..users.repository import UserRepository
from .cooldown import CooldownStore
from .model import MovementAlert, PingResult

logger = logging.getLogger(__name__)

PING_ALERT_TITLE = "Location Movement Detected"
CHECKOUT_ALERT_TITLE = "Check-Out Location Alert"


def movement_distance(check_in: AttendanceSession, latitude: float, longitude: float) -> int:
    return int(round(haversine_m(check_in.latitude, check_in.longitude, latitude, longitude)))


class MovementMonitor:
    def __init__(
        self,
        sessions: SessionRepository,
        users: UserRepository,
        settings_service: SettingsService,
        notifier: NotificationService,
        geocoder: ReverseGeocoder,
        cooldowns: CooldownStore,
        *,
        dispatcher: OutboundDispatcher,
        rate_limiter: Optional[RateLimiter] = None,
        cooldown_seconds: int = MOVEMENT_ALERT_COOLDOWN_SECONDS,
        recipient_roles: Sequence[Role] = (Role.SUPER_ADMIN,),
    ):
        self._sessions = sessions
        self._users = users
        self._settings = settings_service
        self._notifier = notifier
        self._geocoder = geocoder
        self._cooldowns = cooldowns
        self._dispatcher = dispatcher
        self._rate_limiter = rate_limiter or RateLimiter(
            limit=PING_RATE_LIMIT, window_seconds=RATE_LIMIT_WINDOW_SECONDS
        )
        self._cooldown_seconds = int(cooldown_seconds)
        self._recipient_roles = tuple(recipient_roles)

    def evaluate_ping(self, user_id: int, latitude, longitude, *, now: Optional[datetime] = None) -> PingResult:
        now = now or now_utc()

        if not self._rate_limiter.allow(f"ping:{int(user_id)}", now=now):
            return PingResult(PingStatus.RATE_LIMITED)

        lat, lng = require_location(latitude, longitude)

        settings = self._settings.load()
        if not settings.movement_alert_enabled:
            return PingResult(PingStatus.ALERTS_DISABLED)

        work_date = business_date(now)
        start, end = day_range(work_date)
        day = AttendanceDay.from_sessions(
            int(user_id), work_date, self._sessions.list_between(user_id=int(user_id), start=start, end=end)
        )

        check_in = day.first_check_in
        if check_in is None:
            return PingResult(PingStatus.NO_CHECKIN)
        if day.state != SessionState.CHECKED_IN:
            return PingResult(PingStatus.NOT_CHECKED_IN)

        distance = movement_distance(check_in, lat, lng)
        if distance <= settings.movement_alert_distance_m:
            return PingResult(PingStatus.OK, distance)

        # Claimed before the recipient lookup: a skipped alert still starts the cooldown.
        if not self._cooldowns.try_acquire(
            f"movement:{int(user_id)}", now=now, ttl_seconds=self._cooldown_seconds
        ):
            return PingResult(PingStatus.ALREADY_ALERTED, distance)

        employee = self._users.get_by_id(int(user_id))
        recipients = self._recipient_emails()
        if employee is None or not recipients:
            logger.info("Movement alert skipped for user=%s (employee=%s, recipients=%d)",
                        user_id, employee is not None, len(recipients))
            return PingResult(PingStatus.ALERT_SKIPPED, distance)

        self._raise_alert(
            MovementAlert(
                employee=employee,
                recipients=recipients,
                check_in=check_in,
                latitude=lat,
                longitude=lng,
                distance=distance,
                heading="Employee Movement Alert",
            ),
            title=PING_ALERT_TITLE,
            message=f"You have moved {format_distance(distance)} from your check-in location. This has been reported.",
        )
        return PingResult(PingStatus.ALERT_SENT, distance)

    def check_checkout(
        self,
        *,
        user: User,
        day: AttendanceDay,
        checkout: AttendanceSession,
        settings: AttendanceSettings,
    ) -> Optional[int]:
        """Compare a just-recorded check-out with the day's first check-in.

        Returns the distance when an alert was raised, otherwise None.
        """
        if not settings.movement_alert_enabled:
            return None

        check_in = day.first_check_in
        if check_in is None:
            return None

        distance = movement_distance(check_in, checkout.latitude, checkout.longitude)
        if distance <= settings.movement_alert_distance_m:
            return None

        recipients = self._recipient_emails()
        if not recipients:
            logger.info("Check-out alert for user=%s has no recipients", user.user_id)
            return None

        self._raise_alert(
            MovementAlert(
                employee=user,
                recipients=recipients,
                check_in=check_in,
                latitude=checkout.latitude,
                longitude=checkout.longitude,
                distance=distance,
                heading="Check-Out Location Alert",
            ),
            title=CHECKOUT_ALERT_TITLE,
            message=f"You checked out {format_distance(distance)} from your check-in location. This has been reported.",
        )
        return distance

    def _recipient_emails(self) -> tuple[str, ...]:
        users = self._users.list_active_by_roles(self._recipient_roles)
        return tuple(u.email for u in users if u.email)

    def _raise_alert(self, alert: MovementAlert, *, title: str, message: str) -> None:
        self._notifier.notify(alert.employee.user_id, title, message, "/dashboard")
        self._dispatcher.submit("movement-alert", self._deliver_alert, alert)

    def _deliver_alert(self, alert: MovementAlert) -> int:
        current_address = self._geocoder.reverse_geocode(alert.latitude, alert.longitude)
        check_in = alert.check_in
        distance = format_distance(alert.distance)

        html = movement_alert_email(
            employee_name=alert.employee.full_name,
            employee_email=alert.employee.email,
            heading=alert.heading,
            check_in_time=format_local_time(check_in.occurred_at),
            check_in_address=check_in.address or format_coordinates(check_in.latitude, check_in.longitude),
            current_address=current_address,
            distance=distance,
            map_url=directions_url(check_in.latitude, check_in.longitude, alert.latitude, alert.longitude),
        )
        subject = f"Movement Alert: {alert.employee.full_name} moved {distance} from check-in"

        sent = self._notifier.deliver_emails(alert.recipients, subject, html)
        logger.info(
            "Movement alert for %s: %d/%d emails sent (%dm moved)",
            alert.employee.full_name,
            sent,
            len(alert.recipients),
            alert.distance,
        )
        return sent
