from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Mapping

from ..core.constants import DEFAULT_MOVEMENT_ALERT_DISTANCE_M

logger = logging.getLogger(__name__)


class ConfigKey(str, Enum):
    """Known runtime toggles stored in the ``app_config`` table."""

    GEOFENCE_ENFORCE = "GEOFENCE_ENFORCE"
    MOVEMENT_ALERT_ENABLED = "MOVEMENT_ALERT_ENABLED"
    MOVEMENT_ALERT_DISTANCE = "MOVEMENT_ALERT_DISTANCE"


@dataclass(frozen=True)
class AttendanceSettings:
    """Typed snapshot of the runtime toggles, read once per request.

    Defaults:
    - GEOFENCE_ENFORCE: off unless the stored value is exactly ``"true"``.
    - MOVEMENT_ALERT_ENABLED: on unless the stored value is exactly ``"false"``.
    - MOVEMENT_ALERT_DISTANCE: 500 m; unparsable or non-positive values fall back to it.
    """

    geofence_enforce: bool = False
    movement_alert_enabled: bool = True
    movement_alert_distance_m: int = DEFAULT_MOVEMENT_ALERT_DISTANCE_M

    @classmethod
    def from_values(cls, values: Mapping[str, str]) -> "AttendanceSettings":
        return cls(
            geofence_enforce=values.get(ConfigKey.GEOFENCE_ENFORCE.value) == "true",
            movement_alert_enabled=values.get(ConfigKey.MOVEMENT_ALERT_ENABLED.value) != "false",
            movement_alert_distance_m=_parse_distance(values.get(ConfigKey.MOVEMENT_ALERT_DISTANCE.value)),
        )


def _parse_distance(raw: str | None) -> int:
    if raw is None or not str(raw).strip():
        return DEFAULT_MOVEMENT_ALERT_DISTANCE_M
    try:
        value = int(str(raw).strip())
    except ValueError:
        logger.warning("Ignoring invalid %s=%r", ConfigKey.MOVEMENT_ALERT_DISTANCE.value, raw)
        return DEFAULT_MOVEMENT_ALERT_DISTANCE_M
    if value <= 0:
        logger.warning("Ignoring non-positive %s=%r", ConfigKey.MOVEMENT_ALERT_DISTANCE.value, raw)
        return DEFAULT_MOVEMENT_ALERT_DISTANCE_M
    return value
