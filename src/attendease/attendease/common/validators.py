from __future__ import annotations

import math
from typing import Any

from ..core.enums import SessionType
from ..core.exceptions import ValidationError


def require_coordinate(value: Any, field_name: str, *, limit: float) -> float:
    # bool is an int subclass; "true" is not a coordinate.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError("Invalid location data")
    number = float(value)
    if not math.isfinite(number):
        raise ValidationError("Invalid location data")
    if not -limit <= number <= limit:
        raise ValidationError(f"{field_name} must be between {-limit:g} and {limit:g}")
    return number


def require_location(latitude: Any, longitude: Any) -> tuple[float, float]:
    return (
        require_coordinate(latitude, "Latitude", limit=90),
        require_coordinate(longitude, "Longitude", limit=180),
    )


def require_session_type(value: Any) -> SessionType:
    if isinstance(value, SessionType):
        return value
    try:
        return SessionType(str(value))
    except ValueError:
        raise ValidationError("Invalid session type")


def optional_text(value: Any, *, max_len: int = 255) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text[:max_len] or None
