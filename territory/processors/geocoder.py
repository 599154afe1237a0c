# File: territory/processors/geocoder.py
"""
Deterministic ZIP -> coordinate placeholder.

No lookup is performed. The character codes of the ZIP are summed and the
sum is folded into Config.GEOCODE_BUCKETS buckets; the bucket becomes an
offset of 0.00-0.99 degrees added to both latitude and longitude of
Config.GEOCODE_ORIGIN (lower Manhattan). Results are real degrees, so the
conflict radius in miles keeps its meaning, but they are not the true
location of the ZIP.
"""

from typing import Tuple

from territory.core.config_manager import Config


def zip_hash(zip_code: str) -> int:
    """Sum of the character codes of the ZIP string."""
    return sum(ord(ch) for ch in zip_code)


def geocode_zip(zip_code: str) -> Tuple[float, float]:
    """
    Map a ZIP code to a stable (latitude, longitude) pair.
    
    Args:
        zip_code: 5-digit ZIP string
    
    Returns:
        (latitude, longitude) in degrees
    """
    bucket = zip_hash(zip_code) % Config.GEOCODE_BUCKETS
    offset = bucket * Config.GEOCODE_SPAN_DEGREES / Config.GEOCODE_BUCKETS
    origin_lat, origin_lng = Config.GEOCODE_ORIGIN
    return origin_lat + offset, origin_lng + offset
