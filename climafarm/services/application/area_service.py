"""
Application service: Build playable areas from LST statistics.

Orchestrates the PostgREST client, the temperature heuristics, the classifier
and place naming into Area / LocationData payloads.
"""
import asyncio
import logging
import random
from typing import Any, Dict, List, Optional, Tuple

from climafarm.domain.models import Area, Band, LocationData, TemperatureReading
from climafarm.infrastructure.api_constants import APIConstants
from climafarm.infrastructure.postgrest_client import PostgRESTClient
from climafarm.services.application.location_service import LocationService
from climafarm.services.domain.area_builder import build_area, build_location_data
from climafarm.services.domain.geo_classifier import GeoClassifier
from climafarm.services.domain.temperature import derive_reading

logger = logging.getLogger(__name__)

# Temperature used for descriptions before real readings are loaded
LISTING_DESCRIPTION_TEMP = 20

FALLBACK_AREAS: List[Tuple[str, float, float]] = [
    ("New York", 40.7128, -74.0060),
    ("London", 51.5074, -0.1278),
    ("Tokyo", 35.6762, 139.6503),
    ("Sydney", -33.8688, 151.2093),
    ("Paris", 48.8566, 2.3522),
    ("Los Angeles", 34.0522, -118.2437),
    ("Mumbai", 19.0760, 72.8777),
    ("São Paulo", -23.5505, -46.6333),
    ("Cairo", 30.0444, 31.2357),
    ("Moscow", 55.7558, 37.6173),
    ("Beijing", 39.9042, 116.4074),
    ("Cape Town", -33.9249, 18.4241),
    ("Bangkok", 13.7563, 100.5018),
    ("Berlin", 52.5200, 13.4050),
    ("Buenos Aires", -34.6118, -58.3960),
]

_ZERO_READING = TemperatureReading(day_temp_c=0, night_temp_c=0, avg_temp_c=0)


def unique_locations(records: List[Dict[str, Any]]) -> List[Tuple[float, float]]:
    """Exact (latitude, longitude) pairs in first-seen order."""
    seen: Dict[Tuple[float, float], None] = {}
    for record in records:
        try:
            latitude = float(record.get("latitude"))
            longitude = float(record.get("longitude"))
        except (TypeError, ValueError):
            continue
        if not latitude or not longitude:
            continue
        seen.setdefault((latitude, longitude), None)
    return list(seen)


class AreaService:
    """
    Application service for area listing and per-location climate data.

    Remote failures never escape: missing statistics become synthesized
    temperatures and a missing area list becomes the static one.
    """

    def __init__(
        self,
        postgrest_client: PostgRESTClient,
        location_service: LocationService,
        classifier: Optional[GeoClassifier] = None,
        rng: Optional[random.Random] = None,
    ):
        self.postgrest_client = postgrest_client
        self.location_service = location_service
        self.classifier = classifier or location_service.classifier
        self.rng = rng or random.Random()

    async def _band_samples(
        self,
        latitude: float,
        longitude: float,
        band: Band,
        limit: int,
    ) -> List[Dict[str, Any]]:
        try:
            return await self.postgrest_client.get_band_statistics(latitude, longitude, band, limit)
        except Exception as e:
            logger.warning(f"Could not load {band.value} statistics for ({latitude}, {longitude}): {e}")
            return []

    async def temperature_reading(
        self,
        latitude: float,
        longitude: float,
        limit: int = APIConstants.ENHANCED_SAMPLE_LIMIT,
    ) -> TemperatureReading:
        """Fetch day and night samples concurrently and derive a reading."""
        day_samples, night_samples = await asyncio.gather(
            self._band_samples(latitude, longitude, Band.DAY, limit),
            self._band_samples(latitude, longitude, Band.NIGHT, limit),
        )
        reading = derive_reading(day_samples, night_samples, self.rng)
        logger.info(
            f"Temperatures for ({latitude}, {longitude}): "
            f"day {reading.day_temp_c}°C, night {reading.night_temp_c}°C"
        )
        return reading

    async def build_location(
        self,
        latitude: float,
        longitude: float,
        limit: int = APIConstants.ENHANCED_SAMPLE_LIMIT,
    ) -> LocationData:
        """Full pipeline for one coordinate: temperatures, naming, classification."""
        reading, location_name = await asyncio.gather(
            self.temperature_reading(latitude, longitude, limit),
            self.location_service.area_name(latitude, longitude),
        )
        area = build_area(
            latitude,
            longitude,
            location_name.full_name,
            self.classifier.climate_zone(latitude, longitude),
            self.classifier.soil_type(latitude, longitude),
            reading,
            source=location_name.source,
            rng=self.rng,
        )
        return build_location_data(area)

    async def location_for_coordinates(self, latitude: float, longitude: float) -> LocationData:
        """Location data using the smaller legacy sample size."""
        return await self.build_location(latitude, longitude, APIConstants.LEGACY_SAMPLE_LIMIT)

    async def location_for_area(self, area: Area) -> LocationData:
        """
        Load real temperatures for a listed area.

        The area keeps its id and name; its temperatures are replaced.
        """
        reading = await self.temperature_reading(area.latitude, area.longitude)
        updated = area.model_copy(update={
            "day_temperature": reading.day_temp_c,
            "night_temperature": reading.night_temp_c,
        })
        return build_location_data(updated)

    def _listing_area(
        self,
        area_id: int,
        name: str,
        latitude: float,
        longitude: float,
        source: Optional[str] = None,
    ) -> Area:
        return build_area(
            latitude,
            longitude,
            name,
            self.classifier.climate_zone(latitude, longitude),
            self.classifier.soil_type(latitude, longitude),
            _ZERO_READING,
            description_temp=LISTING_DESCRIPTION_TEMP,
            source=source,
            area_id=area_id,
        )

    def fallback_areas(self) -> List[Area]:
        return [
            self._listing_area(index + 1, name, latitude, longitude, "fallback")
            for index, (name, latitude, longitude) in enumerate(FALLBACK_AREAS)
        ]

    async def list_available_areas(self, geocode: bool = False) -> List[Area]:
        """
        Every distinct coordinate in the statistics table as a selectable area.

        Args:
            geocode: Resolve names through the providers (staggered) instead of
                the offline classifier

        Returns:
            Areas with zero temperatures, or the static list when the table
            is unreachable or empty
        """
        try:
            records = await self.postgrest_client.get_statistic_locations()
        except Exception as e:
            logger.warning(f"Could not list areas, using fallback areas: {e}")
            return self.fallback_areas()

        locations = unique_locations(records)
        if not locations:
            logger.warning("No areas found in statistics, using fallback areas")
            return self.fallback_areas()

        logger.info(f"Found {len(locations)} unique locations from {len(records)} records")
        if geocode:
            names = await self.location_service.resolve_names(locations)
            labels = [(name.full_name, name.source) for name in names]
        else:
            labels = [(self.classifier.location_name(lat, lon), None) for lat, lon in locations]

        return [
            self._listing_area(index + 1, name, latitude, longitude, source)
            for index, ((latitude, longitude), (name, source)) in enumerate(zip(locations, labels))
        ]
