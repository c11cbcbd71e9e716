import math

import pytest

from src.attendease.attendease.core.exceptions import GeofenceViolationError
from src.attendease.attendease.geofences.guard import GeofenceGuard, check_admission
from src.attendease.attendease.geofences.model import GeoFence
from src.attendease.attendease.settings.model import AttendanceSettings

from tests.fakes import InMemoryGeoFences, make_user

LAT, LNG = 12.9716, 77.5946
HQ = GeoFence(geofence_id=1, name="HQ", latitude=LAT, longitude=LNG, radius_m=500)


def north(meters: float) -> float:
    return LAT + math.degrees(meters / 6371000)


def test_inside_radius_is_allowed():
    result = check_admission(north(450), LNG, [HQ])

    assert result.allowed is True
    assert result.nearest_distance == 450


def test_outside_radius_reports_nearest_distance():
    result = check_admission(north(600), LNG, [HQ])

    assert result.allowed is False
    assert result.nearest_distance == 600


def test_any_fence_admits():
    far = GeoFence(geofence_id=2, name="Plant", latitude=north(10_000), longitude=LNG, radius_m=100)

    result = check_admission(north(9_950), LNG, [HQ, far])

    assert result.allowed is True
    assert result.nearest_distance == 50


def test_no_active_fence_admits_everything():
    inactive = GeoFence(geofence_id=3, name="Old", latitude=LAT, longitude=LNG, radius_m=10, is_active=False)

    assert check_admission(0.0, 0.0, []).allowed is True
    assert check_admission(0.0, 0.0, [inactive]).allowed is True


def test_guard_respects_global_and_per_user_flags():
    enforced = AttendanceSettings(geofence_enforce=True)

    assert GeofenceGuard.applies_to(make_user(geofence_enabled=True), enforced) is True
    assert GeofenceGuard.applies_to(make_user(geofence_enabled=None), enforced) is True
    assert GeofenceGuard.applies_to(make_user(geofence_enabled=False), enforced) is False
    assert GeofenceGuard.applies_to(make_user(), AttendanceSettings(geofence_enforce=False)) is False


def test_guard_raises_with_distance():
    guard = GeofenceGuard(InMemoryGeoFences([HQ]))

    with pytest.raises(GeofenceViolationError) as exc:
        guard.enforce(
            user=make_user(), latitude=north(600), longitude=LNG, settings=AttendanceSettings(geofence_enforce=True)
        )

    assert exc.value.nearest_distance == 600
    assert exc.value.code == "OUTSIDE_GEOFENCE"


def test_guard_is_noop_when_disabled():
    guard = GeofenceGuard(InMemoryGeoFences([HQ]))

    guard.enforce(user=make_user(), latitude=0.0, longitude=0.0, settings=AttendanceSettings())
