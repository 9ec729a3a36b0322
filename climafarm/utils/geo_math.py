"""
Geometry and rounding helpers shared by the classifier and temperature code.
"""
import math

EARTH_RADIUS_KM = 6371.0


def to_radians(degrees: float) -> float:
    """Convert degrees to radians."""
    return degrees * (math.pi / 180)


def haversine_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Great-circle distance between two points using the Haversine formula.

    Args:
        lat1: Latitude of the first point in degrees
        lon1: Longitude of the first point in degrees
        lat2: Latitude of the second point in degrees
        lon2: Longitude of the second point in degrees

    Returns:
        Distance in kilometers
    """
    d_lat = to_radians(lat2 - lat1)
    d_lon = to_radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(to_radians(lat1)) * math.cos(to_radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, halves towards positive infinity.

    Unlike round(), which rounds halves to even: 2.5 -> 3, -2.5 -> -2.
    """
    return int(math.floor(value + 0.5))
