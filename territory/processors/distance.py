# File: territory/processors/distance.py
"""Great-circle distance in miles."""

import math

from territory.core.config_manager import Config


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float,
                       radius: float = Config.EARTH_RADIUS_MILES) -> float:
    """Haversine distance between two lat/lng pairs, in miles by default."""
    phi1 = math.radians(lat1)
    phi2 = math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lon2 - lon1)
    
    a = (math.sin(d_phi / 2) ** 2 +
         math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return radius * c
