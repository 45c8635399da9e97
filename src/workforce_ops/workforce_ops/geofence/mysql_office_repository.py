from __future__ import annotations

from typing import Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import OfficeLocation
from .repository import OfficeRepository


class MySQLOfficeRepository(OfficeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_active(self) -> Sequence[OfficeLocation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT office_id, name, latitude, longitude, radius_meters, is_active
                FROM office_locations
                WHERE is_active=1
                ORDER BY office_id ASC
                """
            )
            return [
                OfficeLocation(
                    office_id=int(r["office_id"]),
                    name=r["name"],
                    latitude=float(r["latitude"]),
                    longitude=float(r["longitude"]),
                    radius_meters=int(r["radius_meters"]) if r.get("radius_meters") is not None else None,
                    is_active=bool(r.get("is_active", True)),
                )
                for r in fetchall(cur)
            ]
