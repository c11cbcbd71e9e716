"""Parsing of actions queued on a device while it was offline."""
from __future__ import annotations

from typing import Any, Mapping

from ..common.datetime_utils import parse_iso_datetime
from ..common.validators import optional_text, require_location, require_session_type
from ..core.exceptions import ValidationError
from .model import OfflineEntry


def parse_offline_entry(index: int, raw: Any) -> OfflineEntry:
    """Accepts ``{"type", "timestamp", "latitude", "longitude", "deviceInfo"?}``."""
    if not isinstance(raw, Mapping):
        raise ValidationError("Invalid entry")

    session_type = require_session_type(raw.get("type"))

    timestamp = raw.get("timestamp")
    if not isinstance(timestamp, str) or not timestamp.strip():
        raise ValidationError("Invalid timestamp")
    try:
        occurred_at = parse_iso_datetime(timestamp)
    except ValueError:
        raise ValidationError("Invalid timestamp")

    latitude, longitude = require_location(raw.get("latitude"), raw.get("longitude"))

    return OfflineEntry(
        index=index,
        session_type=session_type,
        occurred_at=occurred_at,
        latitude=latitude,
        longitude=longitude,
        device_info=optional_text(raw.get("deviceInfo")),
    )
