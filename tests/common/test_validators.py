import pytest

from src.attendease.attendease.common.validators import (
    optional_text,
    require_coordinate,
    require_location,
    require_session_type,
)
from src.attendease.attendease.core.enums import SessionType
from src.attendease.attendease.core.exceptions import ValidationError


def test_location_accepts_ints_and_floats():
    assert require_location(12, 77.5) == (12.0, 77.5)


@pytest.mark.parametrize("value", [None, "12.9", True, float("inf"), [1]])
def test_non_numeric_coordinates(value):
    with pytest.raises(ValidationError, match="Invalid location data"):
        require_coordinate(value, "Latitude", limit=90)


def test_out_of_range_coordinates():
    with pytest.raises(ValidationError, match="Longitude must be between -180 and 180"):
        require_location(0, 180.5)


def test_session_type():
    assert require_session_type("CHECK_OUT") == SessionType.CHECK_OUT
    assert require_session_type(SessionType.CHECK_IN) == SessionType.CHECK_IN
    with pytest.raises(ValidationError, match="Invalid session type"):
        require_session_type("check_in")


def test_optional_text():
    assert optional_text(None) is None
    assert optional_text("   ") is None
    assert optional_text(" Pixel ") == "Pixel"
    assert optional_text("x" * 300) == "x" * 255
