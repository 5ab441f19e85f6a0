"""Great-circle distance between two coordinates."""

import math
from typing import Optional

from .config import EARTH_RADIUS_KM


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Distance in kilometres between two (lat, lon) points given in degrees."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distance_between(a, b) -> Optional[float]:
    """
    Distance between two objects with latitude/longitude attributes.

    Returns None when either side lacks coordinates; callers treat that
    as an unknown distance.
    """
    coords = (a.latitude, a.longitude, b.latitude, b.longitude)
    if any(c is None for c in coords):
        return None
    return haversine_km(*coords)
