from __future__ import annotations

import logging

from ..core.constants import DEFAULT_GEOFENCE_RADIUS_METERS
from .distance import GeofenceResult, check_geofence
from .repository import OfficeRepository

logger = logging.getLogger(__name__)


class GeofenceService:
    def __init__(self, offices: OfficeRepository, *, default_radius_meters: int = DEFAULT_GEOFENCE_RADIUS_METERS):
        self._offices = offices
        self._default_radius = int(default_radius_meters)

    def locate(self, latitude: float, longitude: float) -> GeofenceResult:
        """Check a reported position against every active office.

        The first office whose radius contains the point wins. Otherwise the
        distance to the nearest office is reported with ``within_geofence=False``.
        """

        offices = list(self._offices.list_active())
        if not offices:
            logger.warning("[geofence] no active office locations configured")
            return GeofenceResult(distance_meters=0, within_geofence=False)

        nearest: GeofenceResult | None = None
        for office in offices:
            radius = office.radius_meters or self._default_radius
            result = check_geofence(latitude, longitude, office.latitude, office.longitude, radius)
            if result.within_geofence:
                return result
            if nearest is None or result.distance_meters < nearest.distance_meters:
                nearest = result
        return nearest
