from __future__ import annotations

import math
from dataclasses import dataclass
from math import asin, cos, radians, sin, sqrt

from ..core.constants import DEFAULT_GEOFENCE_RADIUS_METERS, EARTH_RADIUS_METERS


@dataclass(frozen=True)
class GeofenceResult:
    distance_meters: int
    within_geofence: bool


def haversine_distance(user_lat: float, user_lon: float, office_lat: float, office_lon: float) -> float:
    """Great-circle distance between two points, in metres."""
    dlat = radians(float(office_lat) - float(user_lat))
    dlon = radians(float(office_lon) - float(user_lon))
    a = sin(dlat / 2) ** 2 + cos(radians(float(user_lat))) * cos(radians(float(office_lat))) * sin(dlon / 2) ** 2
    c = 2 * asin(sqrt(min(1.0, a)))
    return EARTH_RADIUS_METERS * c


def _is_number(value) -> bool:
    if isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def check_geofence(
    user_lat: float,
    user_lon: float,
    office_lat: float,
    office_lon: float,
    threshold_meters: float = DEFAULT_GEOFENCE_RADIUS_METERS,
) -> GeofenceResult:
    """Fails closed: anything that is not a usable coordinate is outside."""
    if not all(_is_number(v) for v in (user_lat, user_lon, office_lat, office_lon)):
        return GeofenceResult(distance_meters=0, within_geofence=False)

    distance = int(round(haversine_distance(user_lat, user_lon, office_lat, office_lon)))
    return GeofenceResult(distance_meters=distance, within_geofence=distance <= threshold_meters)
