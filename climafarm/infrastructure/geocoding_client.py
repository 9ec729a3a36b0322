"""
Infrastructure layer: Reverse-geocoding providers.

Three third-party services (Nominatim, Photon, BigDataCloud) are queried over
one shared httpx client. Each provider normalizes its own response schema
into a LocationName and raises GeocodingError on any failure.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    retry_if_exception_type,
)

from climafarm.config import settings
from climafarm.domain.models import LocationName, LocationSource
from climafarm.infrastructure.api_constants import GeocodingEndpoints
from climafarm.utils.place_names import translate_place_name

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """A provider could not produce a usable place name."""
    pass


def build_location_name(
    city: Optional[str],
    state: Optional[str],
    country: Optional[str],
    source: LocationSource,
) -> LocationName:
    """
    Normalize provider fields into a LocationName.

    Raises:
        GeocodingError: If the place or the country is missing
    """
    city = translate_place_name(city)
    state = translate_place_name(state)
    country = translate_place_name(country)
    if not city or not country:
        raise GeocodingError(f"{source} response is missing a place or country")

    parts = [city]
    if state and state != city:
        parts.append(state)
    parts.append(country)
    return LocationName(
        city=city,
        state=state or None,
        country=country,
        full_name=", ".join(parts),
        source=source,
    )


class GeocodingProvider:
    """Base class: one reverse-geocoding HTTP API."""

    source: LocationSource
    path: str

    def __init__(self, client: httpx.AsyncClient, base_url: str):
        self.client = client
        self.base_url = base_url.rstrip("/")

    def params(self, latitude: float, longitude: float) -> Dict[str, Any]:
        raise NotImplementedError

    def parse(self, payload: Any) -> LocationName:
        raise NotImplementedError

    @retry(
        stop=stop_after_attempt(settings.geocoding_retries + 1),
        retry=retry_if_exception_type((httpx.TransportError, httpx.HTTPStatusError)),
        reraise=True,
    )
    async def _get(self, latitude: float, longitude: float) -> httpx.Response:
        response = await self.client.get(
            f"{self.base_url}{self.path}",
            params=self.params(latitude, longitude),
            timeout=settings.geocoding_timeout,
        )
        if response.status_code >= 500:
            response.raise_for_status()
        return response

    async def reverse(self, latitude: float, longitude: float) -> LocationName:
        """
        Resolve a coordinate to a place name.

        Raises:
            GeocodingError: On timeout, HTTP error, malformed JSON or missing fields
        """
        try:
            response = await self._get(latitude, longitude)
        except httpx.HTTPError as e:
            raise GeocodingError(f"{self.source} request failed: {e!r}") from e

        if response.status_code >= 400:
            raise GeocodingError(f"{self.source} returned HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as e:
            raise GeocodingError(f"{self.source} returned malformed JSON") from e

        location = self.parse(payload)
        logger.info(f"{self.source} resolved ({latitude}, {longitude}) to {location.full_name}")
        return location


class NominatimProvider(GeocodingProvider):
    source = "nominatim"
    path = GeocodingEndpoints.NOMINATIM_REVERSE

    PLACE_KEYS = ("city", "town", "village", "hamlet", "suburb", "neighbourhood", "county")

    def params(self, latitude: float, longitude: float) -> Dict[str, Any]:
        return {
            "format": "jsonv2",
            "lat": latitude,
            "lon": longitude,
            "zoom": 10,
            "addressdetails": 1,
            "namedetails": 1,
            "accept-language": "en",
        }

    def parse(self, payload: Any) -> LocationName:
        if not isinstance(payload, dict):
            raise GeocodingError("nominatim response is not an object")
        address = payload.get("address") or {}
        place = next((address[key] for key in self.PLACE_KEYS if address.get(key)), None)
        if place is not None:
            english = (payload.get("namedetails") or {}).get("name:en")
            place = english or place
        return build_location_name(place, address.get("state"), address.get("country"), self.source)


class PhotonProvider(GeocodingProvider):
    source = "photon"
    path = GeocodingEndpoints.PHOTON_REVERSE

    def params(self, latitude: float, longitude: float) -> Dict[str, Any]:
        return {"lat": latitude, "lon": longitude, "lang": "en"}

    def parse(self, payload: Any) -> LocationName:
        features = payload.get("features") if isinstance(payload, dict) else None
        if not features:
            raise GeocodingError("photon response has no features")
        props = features[0].get("properties") or {}
        place = props.get("city") or props.get("name") or props.get("county")
        return build_location_name(place, props.get("state"), props.get("country"), self.source)


class BigDataCloudProvider(GeocodingProvider):
    source = "bigdatacloud"
    path = GeocodingEndpoints.BIGDATACLOUD_REVERSE

    def params(self, latitude: float, longitude: float) -> Dict[str, Any]:
        return {"latitude": latitude, "longitude": longitude, "localityLanguage": "en"}

    def parse(self, payload: Any) -> LocationName:
        if not isinstance(payload, dict):
            raise GeocodingError("bigdatacloud response is not an object")
        place = payload.get("city") or payload.get("locality")
        return build_location_name(
            place,
            payload.get("principalSubdivision"),
            payload.get("countryName"),
            self.source,
        )


class GeocodingClient:
    """Owns the shared HTTP client and the ordered provider list."""

    def __init__(self):
        self.client = httpx.AsyncClient(
            headers={"User-Agent": settings.geocoding_user_agent},
            timeout=settings.geocoding_timeout,
        )
        self.providers: List[GeocodingProvider] = [
            NominatimProvider(self.client, settings.nominatim_url),
            PhotonProvider(self.client, settings.photon_url),
            BigDataCloudProvider(self.client, settings.bigdatacloud_url),
        ]

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()


# Singleton instance
_geocoding_client: Optional[GeocodingClient] = None


def get_geocoding_client() -> GeocodingClient:
    """Get or create the singleton geocoding client."""
    global _geocoding_client
    if _geocoding_client is None:
        _geocoding_client = GeocodingClient()
    return _geocoding_client
