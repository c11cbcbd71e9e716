from __future__ import annotations

import math

EARTH_RADIUS_M = 6371000


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate distance between two points in meters."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def format_distance(meters: int) -> str:
    if meters >= 1000:
        return f"{meters / 1000:.1f}km"
    return f"{meters}m"


def format_coordinates(latitude: float, longitude: float) -> str:
    return f"{latitude:.6f}, {longitude:.6f}"


def directions_url(from_lat: float, from_lng: float, to_lat: float, to_lng: float) -> str:
    return f"https://www.google.com/maps/dir/{from_lat},{from_lng}/{to_lat},{to_lng}"
