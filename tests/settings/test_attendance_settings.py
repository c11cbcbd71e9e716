import logging

import pytest

from src.attendease.attendease.settings.model import AttendanceSettings
from src.attendease.attendease.settings.service import SettingsService

from tests.fakes import InMemoryAppConfig


def test_defaults_when_nothing_is_stored():
    settings = AttendanceSettings.from_values({})

    assert settings.geofence_enforce is False
    assert settings.movement_alert_enabled is True
    assert settings.movement_alert_distance_m == 500


def test_flags_match_exact_strings_only():
    assert AttendanceSettings.from_values({"GEOFENCE_ENFORCE": "true"}).geofence_enforce is True
    assert AttendanceSettings.from_values({"GEOFENCE_ENFORCE": "TRUE"}).geofence_enforce is False
    assert AttendanceSettings.from_values({"MOVEMENT_ALERT_ENABLED": "false"}).movement_alert_enabled is False
    assert AttendanceSettings.from_values({"MOVEMENT_ALERT_ENABLED": "no"}).movement_alert_enabled is True


@pytest.mark.parametrize("raw", ["abc", "0", "-20", "  "])
def test_bad_distance_falls_back(raw, caplog):
    with caplog.at_level(logging.WARNING):
        settings = AttendanceSettings.from_values({"MOVEMENT_ALERT_DISTANCE": raw})

    assert settings.movement_alert_distance_m == 500


def test_valid_distance_is_used():
    assert AttendanceSettings.from_values({"MOVEMENT_ALERT_DISTANCE": " 750 "}).movement_alert_distance_m == 750


def test_service_reads_current_values_every_time():
    store = InMemoryAppConfig({"GEOFENCE_ENFORCE": "false"})
    service = SettingsService(store)

    assert service.load().geofence_enforce is False
    store.values["GEOFENCE_ENFORCE"] = "true"
    assert service.load().geofence_enforce is True
