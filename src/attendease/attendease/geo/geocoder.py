"""Reverse geocoding adapter.

Resolves coordinates to a short human-readable address using OpenStreetMap's
Nominatim API. Every failure (timeout, HTTP error, unexpected payload) falls
back to the raw ``"lat, lng"`` string so callers can store the result as-is.
"""
from __future__ import annotations

import logging
from typing import Optional, Protocol

import requests

from ..core.constants import GEOCODER_TIMEOUT_SECONDS
from ..core.exceptions import CollaboratorError
from .distance import format_coordinates

logger = logging.getLogger(__name__)

NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"
MAX_ADDRESS_PARTS = 4


class ReverseGeocoder(Protocol):
    def reverse_geocode(self, latitude: float, longitude: float) -> str:
        raise NotImplementedError


class NominatimGeocoder:
    def __init__(
        self,
        *,
        base_url: str = NOMINATIM_REVERSE_URL,
        user_agent: str = "AttendEase/1.0 (attendance-app)",
        timeout: float = GEOCODER_TIMEOUT_SECONDS,
        http: Optional[requests.Session] = None,
    ):
        self._base_url = base_url
        self._timeout = float(timeout)
        self._http = http or requests.Session()
        self._headers = {"User-Agent": user_agent, "Accept": "application/json"}

    def reverse_geocode(self, latitude: float, longitude: float) -> str:
        try:
            return self._lookup(latitude, longitude)
        except CollaboratorError as e:
            logger.warning("Reverse geocoding failed for %.6f,%.6f: %s", latitude, longitude, e)
        except (requests.RequestException, ValueError) as e:
            logger.warning("Reverse geocoding unavailable for %.6f,%.6f: %s", latitude, longitude, e)
        return format_coordinates(latitude, longitude)

    def _lookup(self, latitude: float, longitude: float) -> str:
        response = self._http.get(
            self._base_url,
            params={"format": "json", "lat": latitude, "lon": longitude, "zoom": 18, "addressdetails": 1},
            headers=self._headers,
            timeout=self._timeout,
        )
        if not response.ok:
            raise CollaboratorError(f"HTTP {response.status_code}")

        display_name = (response.json() or {}).get("display_name")
        if not display_name:
            raise CollaboratorError("no display_name in response")

        parts = [p.strip() for p in str(display_name).split(",") if p.strip()]
        return ", ".join(parts[:MAX_ADDRESS_PARTS])


class CoordinateGeocoder:
    """Offline stand-in: always answers with the raw coordinates."""

    def reverse_geocode(self, latitude: float, longitude: float) -> str:
        return format_coordinates(latitude, longitude)
