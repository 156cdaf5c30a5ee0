"""Great-circle distance between two coordinates."""
from __future__ import annotations

import math

from src.core.entities import Coordinate
from src.core.errors import ensure_finite

EARTH_RADIUS_KM = 6371.0


def haversine_distance(a: Coordinate, b: Coordinate) -> float:
    """Return the haversine distance in kilometres between ``a`` and ``b``."""

    lat1 = ensure_finite("latitude", a.latitude)
    lng1 = ensure_finite("longitude", a.longitude)
    lat2 = ensure_finite("latitude", b.latitude)
    lng2 = ensure_finite("longitude", b.longitude)

    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    h = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return 2 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1 - h))


__all__ = ["EARTH_RADIUS_KM", "haversine_distance"]
