from __future__ import annotations

from .model import AttendanceSettings, ConfigKey
from .repository import AppConfigRepository


class SettingsService:
    """Loads the runtime toggles. No caching: every call reads current values."""

    def __init__(self, app_config: AppConfigRepository):
        self._app_config = app_config

    def load(self) -> AttendanceSettings:
        values = self._app_config.get_values([k.value for k in ConfigKey])
        return AttendanceSettings.from_values(values)
