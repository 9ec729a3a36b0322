"""
External map viewer URLs for a coordinate.
"""
from typing import Optional
from urllib.parse import quote

DEFAULT_ZOOM = 10
SEARCH_ZOOM = 12


def google_maps_url(latitude: float, longitude: float, zoom: int = DEFAULT_ZOOM) -> str:
    return f"https://www.google.com/maps/@{latitude},{longitude},{zoom}z"


def google_maps_search_url(
    location_name: str,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
) -> str:
    """Search URL for a place name, centered on the coordinate when one is given."""
    encoded = quote(location_name, safe="!~*'()")
    if latitude and longitude:
        return f"https://www.google.com/maps/search/{encoded}/@{latitude},{longitude},{SEARCH_ZOOM}z"
    return f"https://www.google.com/maps/search/{encoded}"


def google_maps_embed_url(
    latitude: float,
    longitude: float,
    zoom: int = DEFAULT_ZOOM,
    api_key: Optional[str] = None,
) -> str:
    """Iframe URL; the keyless variant works without an API key but has limitations."""
    if api_key:
        return (
            f"https://www.google.com/maps/embed/v1/view?key={api_key}"
            f"&center={latitude},{longitude}&zoom={zoom}"
        )
    return f"https://maps.google.com/maps?q={latitude},{longitude}&hl=en&z={zoom}&output=embed"


def open_street_map_url(latitude: float, longitude: float, zoom: int = DEFAULT_ZOOM) -> str:
    return f"https://www.openstreetmap.org/#map={zoom}/{latitude}/{longitude}"
