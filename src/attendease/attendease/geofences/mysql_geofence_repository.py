from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import GeoFence
from .repository import GeoFenceRepository


class MySQLGeoFenceRepository(GeoFenceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[GeoFence]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT geofence_id, name, latitude, longitude, radius_m, is_active
                FROM geofences
                WHERE is_active=1
                ORDER BY geofence_id
                """
            )
            return [
                GeoFence(
                    geofence_id=int(r["geofence_id"]),
                    name=r["name"],
                    latitude=float(r["latitude"]),
                    longitude=float(r["longitude"]),
                    radius_m=int(r["radius_m"]),
                    is_active=bool(r["is_active"]),
                )
                for r in fetchall(cur)
            ]
