from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class GeoFence:
    """Domain entity: circular admission boundary (center + radius)."""

    geofence_id: int
    name: str
    latitude: float
    longitude: float
    radius_m: int
    is_active: bool = True


@dataclass(frozen=True)
class AdmissionResult:
    allowed: bool
    nearest_distance: int
