"""
Application service: Pick a random location from the statistics table.

The table is only reachable through limit/offset paging, so three strategies
guess an offset in different ways. The chosen strategy falls through to the
ones after it, and the last resort is a static list of well-known cities.
"""
import logging
import math
import random
from typing import Any, Callable, Dict, List, Optional, Tuple

from climafarm.domain.models import LocationData, TemperatureReading
from climafarm.infrastructure.api_constants import APIConstants
from climafarm.infrastructure.postgrest_client import PostgRESTClient
from climafarm.services.application.area_service import AreaService
from climafarm.services.domain.area_builder import build_area, build_location_data
from climafarm.utils.fallback import first_success
from climafarm.utils.geo_math import round_half_up

logger = logging.getLogger(__name__)

DEFAULT_RECORD_COUNT = 10000
MIN_ESTIMATED_COUNT = 5000
MIN_MAX_OFFSET = 1000
LARGE_OFFSET_RANGE = 50000
RETRY_OFFSET_RANGE = 5000
BATCH_OFFSET_RANGES: List[Tuple[int, int]] = [
    (0, 10000),
    (10000, 30000),
    (25000, 40000),
]

# (latitude, longitude, day °C, night °C)
FALLBACK_LOCATIONS: List[Tuple[float, float, int, int]] = [
    (40.7128, -74.0060, 22, 12),    # New York
    (51.5074, -0.1278, 18, 8),      # London
    (35.6762, 139.6503, 25, 15),    # Tokyo
    (-33.8688, 151.2093, 28, 18),   # Sydney
    (48.8566, 2.3522, 20, 10),      # Paris
    (34.0522, -118.2437, 26, 16),   # Los Angeles
    (19.0760, 72.8777, 32, 24),     # Mumbai
    (-23.5505, -46.6333, 24, 14),   # São Paulo
]

Record = Dict[str, Any]


def record_count(count_result: Any) -> int:
    """
    Interpret a `select=count` response.

    `[{"count": n}]` gives n; any other list gives max(len * 100, 5000);
    anything else gives 10000.
    """
    if isinstance(count_result, list):
        if count_result and isinstance(count_result[0], dict) and count_result[0].get("count"):
            try:
                return int(count_result[0]["count"])
            except (TypeError, ValueError):
                pass
        return max(len(count_result) * 100, MIN_ESTIMATED_COUNT)
    return DEFAULT_RECORD_COUNT


def has_coordinates(record: Any) -> bool:
    if not isinstance(record, dict):
        return False
    try:
        return math.isfinite(float(record["latitude"])) and math.isfinite(float(record["longitude"]))
    except (KeyError, TypeError, ValueError):
        return False


class RandomLocationSelector:
    """Random area selection with ordered strategy fall-through."""

    def __init__(
        self,
        postgrest_client: PostgRESTClient,
        area_service: AreaService,
        rng: Optional[random.Random] = None,
    ):
        self.postgrest_client = postgrest_client
        self.area_service = area_service
        self.classifier = area_service.classifier
        self.rng = rng or random.Random()

    # ============================================================
    # Strategies
    # ============================================================

    async def count_based(self) -> List[Record]:
        count = record_count(await self.postgrest_client.count_statistics())
        max_offset = max(count - APIConstants.COUNT_BATCH_SIZE, MIN_MAX_OFFSET)
        offset = self.rng.randrange(max_offset)
        logger.info(f"count-based: {count} records, offset {offset}")
        return await self.postgrest_client.get_statistics_page(APIConstants.COUNT_BATCH_SIZE, offset)

    async def large_offset(self) -> List[Record]:
        offset = self.rng.randrange(LARGE_OFFSET_RANGE)
        logger.info(f"large-offset: offset {offset}")
        batch = await self.postgrest_client.get_statistics_page(
            APIConstants.LARGE_OFFSET_BATCH_SIZE, offset
        )
        if batch:
            return batch
        offset = self.rng.randrange(RETRY_OFFSET_RANGE)
        logger.info(f"large-offset: offset too large, retrying at {offset}")
        return await self.postgrest_client.get_statistics_page(
            APIConstants.LARGE_OFFSET_BATCH_SIZE, offset
        )

    async def multi_batch(self) -> List[Record]:
        offsets = [self.rng.randrange(low, high) for low, high in BATCH_OFFSET_RANGES]
        offset = self.rng.choice(offsets)
        logger.info(f"multi-batch: offset {offset}")
        return await self.postgrest_client.get_statistics_page(APIConstants.MULTI_BATCH_SIZE, offset)

    def strategies(self) -> List[Tuple[str, Callable]]:
        return [
            ("count-based", self.count_based),
            ("large-offset", self.large_offset),
            ("multi-batch", self.multi_batch),
        ]

    # ============================================================
    # Selection
    # ============================================================

    def _pick_from(self, label: str, fetch: Callable):
        async def attempt() -> Optional[Record]:
            batch = [record for record in (await fetch() or []) if has_coordinates(record)]
            if not batch:
                return None
            index = self.rng.randrange(len(batch))
            logger.info(f"{label}: selected record {index + 1}/{len(batch)}")
            return batch[index]
        return attempt

    def fallback_location(self) -> LocationData:
        """One of the static locations, with its fixed temperatures."""
        latitude, longitude, day, night = self.rng.choice(FALLBACK_LOCATIONS)
        name = self.classifier.location_name(latitude, longitude)
        reading = TemperatureReading(
            day_temp_c=day,
            night_temp_c=night,
            avg_temp_c=round_half_up((day + night) / 2),
        )
        area = build_area(
            latitude,
            longitude,
            name,
            self.classifier.climate_zone(latitude, longitude),
            self.classifier.soil_type(latitude, longitude),
            reading,
            description_temp=day,
            source="fallback",
            rng=self.rng,
        )
        return build_location_data(area)

    async def pick_random_area(self) -> LocationData:
        """
        Pick a random location with derived temperatures.

        A strategy is chosen uniformly; on an empty batch or error it falls
        through to the strategies after it, then to the static list.
        Never raises.
        """
        strategies = self.strategies()
        start = self.rng.randrange(len(strategies))
        logger.info(f"Random location strategy: {strategies[start][0]}")
        attempts = [
            (f"{label} strategy", self._pick_from(label, fetch))
            for label, fetch in strategies[start:]
        ]
        record = await first_success(attempts, lambda: None)
        if record is None:
            return self.fallback_location()

        latitude = float(record["latitude"])
        longitude = float(record["longitude"])
        return await self.area_service.build_location(latitude, longitude)
