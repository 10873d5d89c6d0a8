"""Geospatial helpers for HalabTours."""

import math

from ..models.place import Coordinates

EARTH_RADIUS_KM = 6371.0


def distance_between(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in kilometers between two points given in degrees."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lng2 - lng1)

    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def haversine_km(origin: Coordinates, target: Coordinates) -> float:
    """Haversine distance in kilometers between two coordinates."""
    return distance_between(origin.latitude, origin.longitude, target.latitude, target.longitude)
