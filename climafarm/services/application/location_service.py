"""
Application service: Resolve coordinates to human place names.

Naming order is nearest major city, then the reverse-geocoding providers in
sequence, then the classifier's regional name. This path never raises.
"""
import asyncio
import logging
from typing import Iterable, List, Optional, Tuple

from climafarm.config import settings
from climafarm.domain.models import LocationName
from climafarm.infrastructure.geocoding_client import GeocodingClient
from climafarm.services.domain.geo_classifier import GeoClassifier
from climafarm.utils.fallback import first_success

logger = logging.getLogger(__name__)

UNKNOWN_COUNTRY = "Unknown"


class LocationService:
    """
    Application service for place naming.

    Wraps the geocoding providers in an ordered fallback chain and falls back
    to the offline classifier when every provider fails.
    """

    def __init__(
        self,
        geocoding_client: GeocodingClient,
        classifier: Optional[GeoClassifier] = None,
    ):
        self.geocoding_client = geocoding_client
        self.classifier = classifier or GeoClassifier()

    def fallback_name(self, latitude: float, longitude: float) -> LocationName:
        """Offline name from the classifier, tagged as a fallback."""
        name = self.classifier.location_name(latitude, longitude)
        return LocationName(
            city=name,
            state=None,
            country=UNKNOWN_COUNTRY,
            full_name=name,
            source="fallback",
        )

    async def reverse_geocode(self, latitude: float, longitude: float) -> LocationName:
        """
        Try each provider in order and return the first usable name.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            LocationName from a provider, or the classifier fallback
        """
        attempts = [
            (
                f"{provider.source} reverse geocode",
                lambda provider=provider: provider.reverse(latitude, longitude),
            )
            for provider in self.geocoding_client.providers
        ]
        return await first_success(
            attempts,
            lambda: self.fallback_name(latitude, longitude),
        )

    def city_name(self, latitude: float, longitude: float) -> Optional[LocationName]:
        """Nearest major city within range, or None when a provider is needed."""
        city = self.classifier.nearest_city(latitude, longitude)
        if not city:
            return None
        return LocationName(
            city=city,
            state=None,
            country=UNKNOWN_COUNTRY,
            full_name=city,
            source="fallback",
        )

    async def area_name(self, latitude: float, longitude: float) -> LocationName:
        """Nearest major city if one is close enough, otherwise reverse geocode."""
        name = self.city_name(latitude, longitude)
        if name:
            return name
        return await self.reverse_geocode(latitude, longitude)

    async def resolve_names(
        self,
        coordinates: Iterable[Tuple[float, float]],
        stagger_seconds: Optional[float] = None,
    ) -> List[LocationName]:
        """
        Resolve many coordinates one at a time.

        Coordinates near a major city are answered locally. The stagger is
        only slept between two lookups that both go out to the providers.

        Args:
            coordinates: (latitude, longitude) pairs
            stagger_seconds: Pause between successive provider lookups

        Returns:
            One LocationName per coordinate, in input order
        """
        stagger = settings.geocode_stagger_seconds if stagger_seconds is None else stagger_seconds
        names = []
        called_provider = False
        for latitude, longitude in coordinates:
            name = self.city_name(latitude, longitude)
            if name is None:
                if called_provider and stagger > 0:
                    await asyncio.sleep(stagger)
                name = await self.reverse_geocode(latitude, longitude)
                called_provider = True
            names.append(name)
        logger.info(f"Resolved {len(names)} location names")
        return names
