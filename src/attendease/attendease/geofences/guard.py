from __future__ import annotations

import logging
from typing import Optional, Sequence

from ..core.exceptions import GeofenceViolationError
from ..geo.distance import haversine_m
from ..settings.model import AttendanceSettings
from ..users.model import User
from .model import AdmissionResult, GeoFence
from .repository import GeoFenceRepository

logger = logging.getLogger(__name__)


def check_admission(latitude: float, longitude: float, fences: Sequence[GeoFence]) -> AdmissionResult:
    """Is the point inside any active fence, and how far is the nearest center?

    With no active fences the check is a no-op and always admits.
    """
    active = [f for f in fences if f.is_active]
    if not active:
        return AdmissionResult(allowed=True, nearest_distance=0)

    nearest = float("inf")
    allowed = False
    for fence in active:
        distance = haversine_m(latitude, longitude, fence.latitude, fence.longitude)
        nearest = min(nearest, distance)
        if distance <= fence.radius_m:
            allowed = True

    return AdmissionResult(allowed=allowed, nearest_distance=int(round(nearest)))


class GeofenceGuard:
    """Admission gate in front of check-in/check-out (never in front of pings)."""

    def __init__(self, fences: GeoFenceRepository):
        self._fences = fences

    @staticmethod
    def applies_to(user: Optional[User], settings: AttendanceSettings) -> bool:
        if not settings.geofence_enforce:
            return False
        # Per-user opt-out wins over the global flag.
        return not (user is not None and user.geofence_enabled is False)

    def enforce(self, *, user: Optional[User], latitude: float, longitude: float, settings: AttendanceSettings) -> None:
        if not self.applies_to(user, settings):
            return

        result = check_admission(latitude, longitude, self._fences.list_active())
        if not result.allowed:
            logger.info(
                "Geofence rejected user=%s at %.6f,%.6f (nearest %dm)",
                user.user_id if user else None,
                latitude,
                longitude,
                result.nearest_distance,
            )
            raise GeofenceViolationError(result.nearest_distance)
