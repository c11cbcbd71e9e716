from __future__ import annotations

from dataclasses import dataclass

from .attendance.aggregator import DailySummaryAggregator
from .attendance.locking import InProcessSessionLock, MySQLSessionLock, SessionLock
from .attendance.mysql_attendance_repository import MySQLSessionRepository, MySQLSummaryRepository
from .attendance.service import AttendanceService
from .core.process_settings import ProcessSettings
from .database.connection import DBConfig, DatabaseConnection
from .geo.geocoder import NominatimGeocoder, ReverseGeocoder
from .geofences.guard import GeofenceGuard
from .geofences.mysql_geofence_repository import MySQLGeoFenceRepository
from .movement.cooldown import CooldownStore, InMemoryCooldownStore
from .movement.monitor import MovementMonitor
from .movement.mysql_cooldown_store import MySQLCooldownStore
from .notifications.dispatcher import OutboundDispatcher, ThreadPoolDispatcher
from .notifications.email import SMTPConfig, SMTPEmailSender
from .notifications.mysql_notification_repository import MySQLNotificationRepository
from .notifications.service import NotificationService
from .reminders.service import ReminderService
from .settings.mysql_app_config_repository import MySQLAppConfigRepository
from .settings.service import SettingsService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.service import ShiftResolver
from .users.mysql_user_repository import MySQLUserRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    dispatcher: OutboundDispatcher
    geocoder: ReverseGeocoder

    settings_service: SettingsService
    notification_service: NotificationService
    attendance_service: AttendanceService
    movement_monitor: MovementMonitor
    reminder_service: ReminderService


def _session_lock(settings: ProcessSettings, conn: DatabaseConnection) -> SessionLock:
    if settings.session_lock_backend == "mysql":
        return MySQLSessionLock(conn, timeout=settings.session_lock_timeout)
    return InProcessSessionLock(timeout=settings.session_lock_timeout)


def _cooldown_store(settings: ProcessSettings, conn: DatabaseConnection) -> CooldownStore:
    if settings.cooldown_backend == "mysql":
        return MySQLCooldownStore(conn)
    return InMemoryCooldownStore()


def build_container(settings: ProcessSettings) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(settings.db_config))

    users_repo = MySQLUserRepository(conn)
    shifts_repo = MySQLShiftRepository(conn)
    geofences_repo = MySQLGeoFenceRepository(conn)
    app_config_repo = MySQLAppConfigRepository(conn)
    sessions_repo = MySQLSessionRepository(conn)
    summaries_repo = MySQLSummaryRepository(conn)
    notifications_repo = MySQLNotificationRepository(conn)

    dispatcher = ThreadPoolDispatcher(
        max_workers=settings.outbound_max_workers,
        max_pending=settings.outbound_max_pending,
    )
    geocoder = NominatimGeocoder(
        base_url=settings.geocoder_url,
        user_agent=settings.geocoder_user_agent,
        timeout=settings.geocoder_timeout,
    )
    email = SMTPEmailSender(SMTPConfig.from_mapping(settings.smtp_config), app_name=settings.app_name)

    settings_service = SettingsService(app_config_repo)
    shift_resolver = ShiftResolver(shifts_repo)
    notification_service = NotificationService(notifications_repo, email, dispatcher)

    movement_monitor = MovementMonitor(
        sessions_repo,
        users_repo,
        settings_service,
        notification_service,
        geocoder,
        _cooldown_store(settings, conn),
        dispatcher=dispatcher,
    )
    attendance_service = AttendanceService(
        sessions_repo,
        summaries_repo,
        users_repo,
        shift_resolver,
        settings_service,
        GeofenceGuard(geofences_repo),
        geocoder,
        _session_lock(settings, conn),
        aggregator=DailySummaryAggregator(summaries_repo),
        movement_monitor=movement_monitor,
    )
    reminder_service = ReminderService(
        users_repo,
        sessions_repo,
        shift_resolver,
        notifications_repo,
        notification_service,
        app_url=settings.app_url,
    )

    return Container(
        conn=conn,
        dispatcher=dispatcher,
        geocoder=geocoder,
        settings_service=settings_service,
        notification_service=notification_service,
        attendance_service=attendance_service,
        movement_monitor=movement_monitor,
        reminder_service=reminder_service,
    )
