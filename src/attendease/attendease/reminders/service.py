"""Cron-driven check-in / check-out reminders.

At most one reminder of each kind per user per business day; an in-app
notification with the same title created earlier today counts as "already sent".
"""
from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Optional, Sequence

from ..attendance.repository import SessionRepository
from ..attendance.state_machine import AttendanceDay
from ..common.datetime_utils import business_date, day_range, format_long_date, minute_of_day, now_utc
from ..core.constants import REMINDER_BUFFER_MINUTES
from ..core.enums import Role, SessionState
from ..notifications.repository import NotificationRepository
from ..notifications.service import NotificationService
from ..notifications.templates import check_in_reminder_email, check_out_reminder_email, dashboard_url
from ..shifts.model import Shift
from ..shifts.service import ShiftResolver
from ..users.model import User
from ..users.repository import UserRepository
from .model import ReminderReport

logger = logging.getLogger(__name__)

CHECK_IN_TITLE = "Check-In Reminder"
CHECK_OUT_TITLE = "Check-Out Reminder"


def _minute(t: time) -> int:
    return t.hour * 60 + t.minute


def _clock_label(t: time) -> str:
    return t.strftime("%I:%M %p")


class ReminderService:
    def __init__(
        self,
        users: UserRepository,
        sessions: SessionRepository,
        shifts: ShiftResolver,
        notifications: NotificationRepository,
        notifier: NotificationService,
        *,
        buffer_minutes: int = REMINDER_BUFFER_MINUTES,
        roles: Sequence[Role] = (Role.EMPLOYEE,),
        app_url: str = "",
    ):
        self._users = users
        self._sessions = sessions
        self._shifts = shifts
        self._notifications = notifications
        self._notifier = notifier
        self._buffer = int(buffer_minutes)
        self._roles = tuple(roles)
        self._dashboard_url = dashboard_url(app_url)

    def run(self, *, now: Optional[datetime] = None) -> ReminderReport:
        now = now or now_utc()
        work_date = business_date(now)
        day_start, day_end = day_range(work_date)
        current_minute = minute_of_day(now)

        checked = check_in_sent = check_out_sent = failed = 0
        for user in self._users.list_active_by_roles(self._roles):
            checked += 1
            try:
                day = AttendanceDay.from_sessions(
                    user.user_id,
                    work_date,
                    self._sessions.list_between(user_id=user.user_id, start=day_start, end=day_end),
                )
                shift = self._shifts.for_user(user)
                kind = self._due_reminder(day.state, shift, current_minute)
                if kind is None:
                    continue
                if self._notifications.exists_since(user_id=user.user_id, title=kind, since=day_start):
                    continue

                self._send(kind, user, shift, day, now)
                if kind == CHECK_IN_TITLE:
                    check_in_sent += 1
                else:
                    check_out_sent += 1
            except Exception:
                failed += 1
                logger.exception("Reminder failed for user=%s", user.user_id)

        report = ReminderReport(
            checked=checked, check_in_sent=check_in_sent, check_out_sent=check_out_sent, failed=failed
        )
        logger.info(
            "Attendance reminders: checked=%d check_in=%d check_out=%d failed=%d",
            report.checked,
            report.check_in_sent,
            report.check_out_sent,
            report.failed,
        )
        return report

    def _due_reminder(self, state: SessionState, shift: Shift, current_minute: int) -> Optional[str]:
        start = _minute(shift.start_time)
        end = _minute(shift.end_time)

        if state == SessionState.NOT_STARTED and start + self._buffer <= current_minute < end:
            return CHECK_IN_TITLE
        if state == SessionState.CHECKED_IN and current_minute >= end + self._buffer:
            return CHECK_OUT_TITLE
        return None

    def _send(self, kind: str, user: User, shift: Shift, day: AttendanceDay, now: datetime) -> None:
        day_label = format_long_date(day.work_date)
        if kind == CHECK_IN_TITLE:
            message = f"You haven't checked in yet. Your shift started at {_clock_label(shift.start_time)}."
            html = check_in_reminder_email(
                employee_name=user.full_name,
                shift_name=shift.shift_name,
                shift_start=_clock_label(shift.start_time),
                day_label=day_label,
                link=self._dashboard_url,
            )
        else:
            message = f"You are still checked in. Your shift ended at {_clock_label(shift.end_time)}."
            html = check_out_reminder_email(
                employee_name=user.full_name,
                shift_name=shift.shift_name,
                shift_end=_clock_label(shift.end_time),
                day_label=day_label,
                link=self._dashboard_url,
            )

        # Written synchronously: the row is the dedup marker for the next cron run.
        self._notifications.create(user_id=user.user_id, title=kind, message=message, link="/dashboard", created_at=now)
        if user.email:
            self._notifier.send_email(user.email, kind, html)
