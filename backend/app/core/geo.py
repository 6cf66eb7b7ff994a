import math

from app.core.constants import EARTH_RADIUS_KM


def haversine_km(lat1, lon1, lat2, lon2):
    """Return great‑circle distance in kilometers between two WGS84 points.

    Uses the standard haversine formula; identical points give 0.
    """
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c
