import math
from datetime import date

import pytest

from src.attendease.attendease.attendance.state_machine import AttendanceDay
from src.attendease.attendease.common.rate_limit import RateLimiter
from src.attendease.attendease.core.enums import PingStatus, Role, SessionType
from src.attendease.attendease.core.exceptions import ValidationError
from src.attendease.attendease.movement.cooldown import InMemoryCooldownStore
from src.attendease.attendease.movement.monitor import MovementMonitor
from src.attendease.attendease.notifications.service import NotificationService
from src.attendease.attendease.settings.model import AttendanceSettings
from src.attendease.attendease.settings.service import SettingsService

from tests.fakes import (
    InMemoryAppConfig,
    InMemoryNotifications,
    InMemorySessions,
    InMemoryUsers,
    RecordingDispatcher,
    RecordingEmailSender,
    StaticGeocoder,
    ist,
    make_user,
)

LAT, LNG = 12.9716, 77.5946


def north(meters: float) -> float:
    return LAT + math.degrees(meters / 6371000)


class Harness:
    def __init__(self, *, config=None, with_admin=True, rate_limiter=None):
        self.users = InMemoryUsers()
        self.employee = self.users.add(make_user(1, full_name="Asha Rao"))
        if with_admin:
            self.users.add(make_user(99, role=Role.SUPER_ADMIN, email="boss@example.com"))
        self.sessions = InMemorySessions()
        self.notifications = InMemoryNotifications()
        self.email = RecordingEmailSender()
        self.dispatcher = RecordingDispatcher()
        self.monitor = MovementMonitor(
            self.sessions,
            self.users,
            SettingsService(InMemoryAppConfig(dict(config or {}))),
            NotificationService(self.notifications, self.email, self.dispatcher),
            StaticGeocoder("Indiranagar, Bengaluru"),
            InMemoryCooldownStore(),
            dispatcher=self.dispatcher,
            rate_limiter=rate_limiter,
        )

    def check_in(self, hour=9, minute=0):
        return self.sessions.add(1, SessionType.CHECK_IN, ist(2025, 1, 6, hour, minute), LAT, LNG)

    def alerts(self) -> int:
        return self.dispatcher.names().count("movement-alert")


def test_no_check_in_today():
    h = Harness()

    assert h.monitor.evaluate_ping(1, LAT, LNG, now=ist(2025, 1, 6, 10, 0)).status == PingStatus.NO_CHECKIN


def test_checked_out_user_is_not_tracked():
    h = Harness()
    h.check_in()
    h.sessions.add(1, SessionType.CHECK_OUT, ist(2025, 1, 6, 12, 0))

    result = h.monitor.evaluate_ping(1, north(5000), LNG, now=ist(2025, 1, 6, 12, 30))

    assert result.status == PingStatus.NOT_CHECKED_IN
    assert h.alerts() == 0


def test_within_threshold_is_ok():
    h = Harness()
    h.check_in()

    result = h.monitor.evaluate_ping(1, north(300), LNG, now=ist(2025, 1, 6, 10, 0))

    assert result.status == PingStatus.OK
    assert result.distance == 300


def test_alerts_can_be_disabled():
    h = Harness(config={"MOVEMENT_ALERT_ENABLED": "false"})
    h.check_in()

    assert h.monitor.evaluate_ping(1, north(5000), LNG, now=ist(2025, 1, 6, 10, 0)).status == PingStatus.ALERTS_DISABLED


def test_threshold_comes_from_config():
    h = Harness(config={"MOVEMENT_ALERT_DISTANCE": "1000"})
    h.check_in()

    assert h.monitor.evaluate_ping(1, north(800), LNG, now=ist(2025, 1, 6, 10, 0)).status == PingStatus.OK


def test_cooldown_allows_one_alert_per_hour():
    h = Harness()
    h.check_in()

    first = h.monitor.evaluate_ping(1, north(800), LNG, now=ist(2025, 1, 6, 10, 0))
    second = h.monitor.evaluate_ping(1, north(900), LNG, now=ist(2025, 1, 6, 10, 10))
    third = h.monitor.evaluate_ping(1, north(900), LNG, now=ist(2025, 1, 6, 11, 10))

    assert first.status == PingStatus.ALERT_SENT
    assert second.status == PingStatus.ALREADY_ALERTED
    assert second.distance == 900
    assert third.status == PingStatus.ALERT_SENT
    assert h.alerts() == 2


def test_missing_recipients_skip_but_still_start_cooldown():
    h = Harness(with_admin=False)
    h.check_in()

    first = h.monitor.evaluate_ping(1, north(800), LNG, now=ist(2025, 1, 6, 10, 0))
    second = h.monitor.evaluate_ping(1, north(800), LNG, now=ist(2025, 1, 6, 10, 10))

    assert first.status == PingStatus.ALERT_SKIPPED
    assert second.status == PingStatus.ALREADY_ALERTED
    assert h.dispatcher.tasks == []


def test_pings_are_rate_limited_without_error():
    h = Harness(rate_limiter=RateLimiter(limit=2, window_seconds=60))
    h.check_in()
    now = ist(2025, 1, 6, 10, 0)

    h.monitor.evaluate_ping(1, LAT, LNG, now=now)
    h.monitor.evaluate_ping(1, LAT, LNG, now=now)

    assert h.monitor.evaluate_ping(1, LAT, LNG, now=now).status == PingStatus.RATE_LIMITED


def test_invalid_coordinates():
    h = Harness()

    with pytest.raises(ValidationError):
        h.monitor.evaluate_ping(1, "north", LNG, now=ist(2025, 1, 6, 10, 0))


def test_alert_delivery_builds_email_and_employee_notification():
    h = Harness()
    h.check_in()

    h.monitor.evaluate_ping(1, north(1200), LNG, now=ist(2025, 1, 6, 10, 0))
    h.dispatcher.run_all()

    [(to, subject, html)] = h.email.sent
    assert to == "boss@example.com"
    assert subject == "Movement Alert: Asha Rao moved 1.2km from check-in"
    assert "Indiranagar, Bengaluru" in html
    assert "09:00 AM" in html
    assert "google.com/maps/dir" in html

    [note] = h.notifications.rows
    assert note.user_id == 1
    assert note.title == "Location Movement Detected"
    assert "1.2km" in note.message


def test_check_out_far_from_check_in_alerts_without_cooldown():
    h = Harness()
    check_in = h.check_in()
    day = AttendanceDay.from_sessions(1, date(2025, 1, 6), [check_in])
    settings = AttendanceSettings()

    for hour in (17, 18):
        checkout = h.sessions.add(1, SessionType.CHECK_OUT, ist(2025, 1, 6, hour, 0), north(700), LNG)
        assert h.monitor.check_checkout(user=h.employee, day=day, checkout=checkout, settings=settings) == 700

    assert h.alerts() == 2


def test_check_out_nearby_or_disabled_is_silent():
    h = Harness()
    check_in = h.check_in()
    day = AttendanceDay.from_sessions(1, date(2025, 1, 6), [check_in])
    near = h.sessions.add(1, SessionType.CHECK_OUT, ist(2025, 1, 6, 17, 0), north(100), LNG)
    far = h.sessions.add(1, SessionType.CHECK_OUT, ist(2025, 1, 6, 18, 0), north(5000), LNG)

    assert h.monitor.check_checkout(user=h.employee, day=day, checkout=near, settings=AttendanceSettings()) is None
    assert (
        h.monitor.check_checkout(
            user=h.employee, day=day, checkout=far, settings=AttendanceSettings(movement_alert_enabled=False)
        )
        is None
    )
    assert h.alerts() == 0
