"""
Domain service: Heuristic geographic classification of coordinates.

Provides:
- Nearest major city lookup (Haversine distance, fixed city table)
- Continent / region / ocean naming from latitude-longitude boxes
- Climate zone inference (regional boxes, then latitude bands)
- Soil type from a stable coordinate hash

The boxes overlap and are not geographically rigorous. Rules are evaluated
top-down and the first match wins, so table order is part of the behavior.
"""
import math
import logging
from dataclasses import dataclass
from functools import cached_property
from typing import Callable, Optional

from shapely.geometry import Point, Polygon, box

from climafarm.domain.models import Classification, ClimateZone, SoilType
from climafarm.utils.geo_math import haversine_km
from climafarm.config import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class City:
    """A major city used for nearest-city naming."""
    name: str
    latitude: float
    longitude: float


@dataclass(frozen=True)
class RegionBox:
    """Latitude/longitude rectangle, inclusive on every edge."""
    label: str
    min_lat: float
    max_lat: float
    min_lon: float
    max_lon: float

    @cached_property
    def geometry(self) -> Polygon:
        # shapely works in (x, y) = (lon, lat)
        return box(self.min_lon, self.min_lat, self.max_lon, self.max_lat)

    def contains(self, latitude: float, longitude: float) -> bool:
        return self.geometry.covers(Point(longitude, latitude))


MAJOR_CITIES: list[City] = [
    # North America
    City("New York", 40.7128, -74.0060),
    City("Los Angeles", 34.0522, -118.2437),
    City("Chicago", 41.8781, -87.6298),
    City("Toronto", 43.6532, -79.3832),
    City("Mexico City", 19.4326, -99.1332),
    # Europe
    City("London", 51.5074, -0.1278),
    City("Paris", 48.8566, 2.3522),
    City("Berlin", 52.5200, 13.4050),
    City("Madrid", 40.4168, -3.7038),
    City("Rome", 41.9028, 12.4964),
    City("Moscow", 55.7558, 37.6173),
    # Asia
    City("Tokyo", 35.6762, 139.6503),
    City("Beijing", 39.9042, 116.4074),
    City("Shanghai", 31.2304, 121.4737),
    City("Mumbai", 19.0760, 72.8777),
    City("Delhi", 28.7041, 77.1025),
    City("Bangkok", 13.7563, 100.5018),
    City("Seoul", 37.5665, 126.9780),
    # Middle East & Africa
    City("Cairo", 30.0444, 31.2357),
    City("Istanbul", 41.0082, 28.9784),
    City("Dubai", 25.2048, 55.2708),
    City("Cape Town", -33.9249, 18.4241),
    City("Lagos", 6.5244, 3.3792),
    # South America
    City("São Paulo", -23.5505, -46.6333),
    City("Buenos Aires", -34.6118, -58.3960),
    City("Lima", -12.0464, -77.0428),
    # Oceania
    City("Sydney", -33.8688, 151.2093),
    City("Melbourne", -37.8136, 144.9631),
    City("Auckland", -36.8485, 174.7633),
]

REMOTE_REGION = "Remote Geographic Region"


# ============================================================
# Climate zone rules
# ============================================================

CLIMATE_RULES: list[tuple[RegionBox, ClimateZone]] = [
    # Hot deserts
    (RegionBox("Sahara", 15, 32, -17, 33), ClimateZone.ARID_DESERT),
    (RegionBox("Arabian Desert", 15, 32, 35, 60), ClimateZone.ARID_DESERT),
    (RegionBox("Thar Desert", 24, 30, 69, 76), ClimateZone.ARID_DESERT),
    (RegionBox("Australian Outback", -32, -19, 118, 142), ClimateZone.ARID_DESERT),
    (RegionBox("Kalahari and Namib", -28, -17, 12, 25), ClimateZone.ARID_DESERT),
    (RegionBox("Atacama and Peruvian Coast", -30, -5, -81, -70.5), ClimateZone.ARID_DESERT),
    (RegionBox("Sonoran and Mojave", 27, 37, -118, -109), ClimateZone.ARID_DESERT),
    # Cold deserts
    (RegionBox("Gobi", 38, 47, 90, 112), ClimateZone.COLD_DESERT),
    (RegionBox("Tibetan Plateau", 28, 37, 78, 100), ClimateZone.COLD_DESERT),
    (RegionBox("Patagonian Steppe", -52, -38, -72, -64), ClimateZone.COLD_DESERT),
    (RegionBox("Great Basin", 37, 43, -120, -111), ClimateZone.COLD_DESERT),
    # Semi-arid margins
    (RegionBox("Sahel", 10, 15, -17, 40), ClimateZone.SEMI_ARID),
    (RegionBox("Mexican Plateau", 22, 30, -108, -98), ClimateZone.SEMI_ARID),
    # Mediterranean basins
    (RegionBox("Mediterranean Basin", 30, 45, -10, 36), ClimateZone.MEDITERRANEAN),
    (RegionBox("California Coast", 32, 42, -124, -117), ClimateZone.MEDITERRANEAN),
    (RegionBox("Central Chile", -38, -30, -74, -70), ClimateZone.MEDITERRANEAN),
    (RegionBox("Western Cape", -35, -31, 17, 21), ClimateZone.MEDITERRANEAN),
    (RegionBox("Southwest Australia", -35, -30, 114, 120), ClimateZone.MEDITERRANEAN),
    # Rainforests
    (RegionBox("Amazon Basin", -15, 5, -75, -45), ClimateZone.TROPICAL_RAINFOREST),
    (RegionBox("Congo Basin", -5, 5, 10, 30), ClimateZone.TROPICAL_RAINFOREST),
    (RegionBox("Maritime Southeast Asia", -10, 7, 95, 150), ClimateZone.TROPICAL_RAINFOREST),
    # Monsoon belt
    (RegionBox("Indian Subcontinent", 8, 24, 68, 92), ClimateZone.TROPICAL_MONSOON),
    (RegionBox("Mainland Southeast Asia", 8, 23.5, 92, 110), ClimateZone.TROPICAL_MONSOON),
    (RegionBox("West African Coast", 4, 10, -15, 10), ClimateZone.TROPICAL_MONSOON),
    # Steppe belts
    (RegionBox("Kazakh Steppe", 43, 55, 45, 85), ClimateZone.STEPPE),
    (RegionBox("Pontic Steppe", 45, 52, 30, 45), ClimateZone.STEPPE),
    (RegionBox("Mongolian Steppe", 47, 52, 90, 120), ClimateZone.STEPPE),
    (RegionBox("Great Plains", 35, 50, -105, -95), ClimateZone.STEPPE),
    # Ice, tundra and subarctic belts
    (RegionBox("Antarctica", -90, -60, -180, 180), ClimateZone.POLAR),
    (RegionBox("Greenland", 60, 84, -73, -11), ClimateZone.POLAR),
    (RegionBox("Siberian Tundra", 66.5, 78, 60, 180), ClimateZone.TUNDRA),
    (RegionBox("Canadian Arctic", 66.5, 84, -141, -60), ClimateZone.TUNDRA),
    (RegionBox("Alaska North Slope", 66.5, 72, -170, -141), ClimateZone.TUNDRA),
    (RegionBox("Siberian Taiga", 50, 66.5, 60, 180), ClimateZone.SUBARCTIC),
    (RegionBox("Canadian Boreal Forest", 50, 66.5, -141, -55), ClimateZone.SUBARCTIC),
    (RegionBox("Northern Scandinavia", 60, 71, 5, 32), ClimateZone.SUBARCTIC),
    # Mid-latitude belts
    (RegionBox("Western Europe", 43, 60, -10, 15), ClimateZone.TEMPERATE),
    (RegionBox("Eastern Europe", 45, 60, 15, 45), ClimateZone.CONTINENTAL),
    (RegionBox("Northeast China and Manchuria", 38, 50, 112, 135), ClimateZone.CONTINENTAL),
    (RegionBox("North American Interior", 38, 50, -95, -65), ClimateZone.CONTINENTAL),
    (RegionBox("Southeast United States", 25, 38, -95, -75), ClimateZone.SUBTROPICAL),
    (RegionBox("Southern China", 22, 32, 105, 122), ClimateZone.SUBTROPICAL),
    (RegionBox("Eastern Australia", -38, -25, 145, 154), ClimateZone.SUBTROPICAL),
    (RegionBox("Southeast South America", -35, -22, -60, -45), ClimateZone.SUBTROPICAL),
]

# (exclusive upper bound on |latitude|, zone); last band catches the rest
LATITUDE_BANDS: list[tuple[float, ClimateZone]] = [
    (23.5, ClimateZone.TROPICAL),
    (35.0, ClimateZone.SUBTROPICAL),
    (45.0, ClimateZone.TEMPERATE),
    (50.0, ClimateZone.CONTINENTAL),
    (66.5, ClimateZone.SUBARCTIC),
    (math.inf, ClimateZone.POLAR),
]

SOIL_TYPES: list[SoilType] = list(SoilType)


# ============================================================
# Regional naming
# ============================================================

def _americas_region(lat: float, lon: float) -> str:
    if lat >= 23.5:
        return "North American Plains"
    if lat >= 0:
        return "Central American Highlands"
    return "South American Region"


def _europe_region(lat: float, lon: float) -> str:
    if lon <= 15:
        return "Western European Region"
    return "Eastern European Plains"


def _africa_middle_east_region(lat: float, lon: float) -> str:
    if lat >= 15:
        return "Northern African Region"
    if lat >= -10:
        return "Central African Basin"
    return "Southern African Region"


def _asia_oceania_region(lat: float, lon: float) -> str:
    if lat >= 50:
        return "Siberian Region"
    if lat >= 20:
        return "Central Asian Steppes"
    if lat >= -10:
        return "Southeast Asian Region"
    return "Australian Outback"


CONTINENT_RULES: list[tuple[RegionBox, Callable[[float, float], str]]] = [
    (RegionBox("Americas", -60, 75, -180, -30), _americas_region),
    (RegionBox("Europe", 35, 71, -10, 40), _europe_region),
    (RegionBox("Africa and Middle East", -35, 55, 25, 60), _africa_middle_east_region),
    (RegionBox("Asia and Oceania", -50, 75, 60, 180), _asia_oceania_region),
]


def _pacific_band(lon: float) -> bool:
    return 120 <= lon <= 180 or -180 <= lon <= -120


def is_ocean_region(lat: float, lon: float) -> bool:
    """
    Simplified ocean detection by longitude bands with continental exclusions.

    Enclosed seas are ignored.
    """
    if _pacific_band(lon):
        return True

    # Atlantic, minus Europe/Africa and the Americas
    if -60 <= lat <= 75 and -80 <= lon <= 20:
        europe_africa = 25 <= lat <= 75 and -25 <= lon <= 50
        americas = -35 <= lat <= 35 and -60 <= lon <= -35
        if not (europe_africa or americas):
            return True

    # Indian Ocean, minus Africa
    if -60 <= lat <= 30 and 20 <= lon <= 120:
        if not (-35 <= lat <= 35 and 20 <= lon <= 52):
            return True

    if lat >= 75:
        return True
    if lat <= -60:
        return True
    return False


def ocean_region_name(lat: float, lon: float) -> str:
    """Name of the ocean basin a coordinate falls into."""
    if lat >= 75:
        return "Arctic Ocean Region"
    if lat <= -60:
        return "Antarctic Waters"

    if _pacific_band(lon):
        if lat >= 20:
            return "North Pacific Basin"
        if lat >= -20:
            return "Equatorial Pacific"
        return "South Pacific Basin"

    if -80 <= lon <= 20:
        if lat >= 25:
            return "North Atlantic Basin"
        if lat >= -25:
            return "Equatorial Atlantic"
        return "South Atlantic Basin"

    if 20 <= lon <= 120:
        if lat >= 10:
            return "Arabian Sea"
        return "Indian Ocean Basin"

    return "Open Ocean Region"


def geographic_region(lat: float, lon: float) -> str:
    """Finer-grained region names, used when no continent rule matched."""
    if is_ocean_region(lat, lon):
        return ocean_region_name(lat, lon)

    if -60 <= lat <= 83 and -180 <= lon <= -30:
        if lat >= 60:
            return "Alaska Region"
        if lat >= 49:
            return "Canadian Prairies"
        if lat >= 25.5:
            if -125 <= lon <= -66:
                return "United States Plains"
            if lon >= -125:
                return "US West Coast"
            return "US East Coast"
        if lat >= 14:
            return "Mexico & Central America"
        if lat >= -23:
            return "Amazon Basin"
        if lat >= -35:
            return "Brazilian Highlands"
        return "Patagonia Region"

    if 35 <= lat <= 71 and -10 <= lon <= 60:
        if lat >= 60:
            return "Scandinavian Peninsula"
        if lon <= 30:
            if lat >= 50:
                return "Northern European Plains"
            if lat >= 40:
                return "Mediterranean Region"
            return "Southern Europe"
        if lat >= 55:
            return "Russian Taiga"
        if lat >= 45:
            return "Eastern European Steppes"
        return "Caucasus Region"

    if -35 <= lat <= 38 and -18 <= lon <= 52:
        if lat >= 25:
            if lon >= 32:
                return "Arabian Peninsula"
            return "Sahara Desert"
        if lat >= 10:
            return "Sahel Region"
        if lat >= 0:
            return "Congo Basin"
        if lat >= -15:
            return "East African Highlands"
        if lat >= -25:
            return "Zambezi Basin"
        return "Kalahari Region"

    if -50 <= lat <= 75 and 60 <= lon <= 180:
        if lat >= 65:
            return "Siberian Tundra"
        if lat >= 50:
            return "Central Siberia"
        if lat >= 35:
            if lon >= 135:
                return "Manchurian Plains"
            if lon >= 100:
                return "Mongolian Steppes"
            return "Central Asian Desert"
        if lat >= 20:
            if lon >= 135:
                return "East China Plains"
            if lon >= 100:
                return "Southeast Asian Highlands"
            return "Indian Subcontinent"
        if lat >= -10:
            if lon >= 140:
                return "Indonesian Archipelago"
            return "Indochina Peninsula"
        if lat >= -30:
            return "Northern Australia"
        return "Australian Outback"

    if lon >= 120 or lon <= -120:
        if lat >= 20:
            return "North Pacific Region"
        if lat >= 0:
            return "Equatorial Pacific"
        return "South Pacific Islands"

    if -60 <= lon <= 20:
        if lat >= 40:
            return "North Atlantic Region"
        if lat >= 0:
            return "Tropical Atlantic"
        return "South Atlantic Region"

    if 40 <= lon <= 100:
        if lat >= 0:
            return "Arabian Sea Region"
        return "Indian Ocean Basin"

    return REMOTE_REGION


class GeoClassifier:
    """
    Domain service turning a coordinate into a name, climate zone and soil type.

    Every method is a pure function of its arguments and never raises.
    """

    def __init__(self, nearest_city_radius_km: Optional[float] = None):
        self.nearest_city_radius_km = (
            nearest_city_radius_km
            if nearest_city_radius_km is not None
            else settings.nearest_city_radius_km
        )

    def nearest_city(self, lat: float, lon: float) -> Optional[str]:
        """
        Find the closest major city within the naming radius.

        Args:
            lat: Latitude in degrees
            lon: Longitude in degrees

        Returns:
            City name, or None if every city is at least the radius away
        """
        nearest = None
        min_distance = math.inf
        for city in MAJOR_CITIES:
            distance = haversine_km(lat, lon, city.latitude, city.longitude)
            if distance < min_distance and distance < self.nearest_city_radius_km:
                min_distance = distance
                nearest = city.name
        if nearest:
            logger.debug(f"Nearest city to ({lat}, {lon}) is {nearest} ({min_distance:.1f} km)")
        return nearest

    def regional_name(self, lat: float, lon: float) -> str:
        """Continent-level name, then finer regions, oceans and the remote default."""
        for region, namer in CONTINENT_RULES:
            if region.contains(lat, lon):
                return namer(lat, lon)
        return geographic_region(lat, lon)

    def location_name(self, lat: float, lon: float) -> str:
        return self.nearest_city(lat, lon) or self.regional_name(lat, lon)

    def climate_zone(self, lat: float, lon: Optional[float] = None) -> ClimateZone:
        """
        Infer a climate zone.

        With a longitude, regional boxes are tried first in table order.
        Without one, or when no box matches, the zone comes from |latitude| bands.
        """
        if lon is not None:
            for region, zone in CLIMATE_RULES:
                if region.contains(lat, lon):
                    logger.debug(f"({lat}, {lon}) matched climate region {region.label}")
                    return zone
        return self.latitude_band_zone(lat)

    @staticmethod
    def latitude_band_zone(lat: float) -> ClimateZone:
        abs_lat = abs(lat)
        for upper, zone in LATITUDE_BANDS:
            if abs_lat < upper:
                return zone
        return ClimateZone.POLAR

    @staticmethod
    def soil_type(lat: float, lon: float) -> SoilType:
        """Stable, not physically meaningful, soil label for a coordinate."""
        index = math.floor(abs(lat * lon) * 10) % len(SOIL_TYPES)
        return SOIL_TYPES[index]

    def classify(self, lat: float, lon: float) -> Classification:
        return Classification(
            name=self.location_name(lat, lon),
            climate_zone=self.climate_zone(lat, lon),
            soil_type=self.soil_type(lat, lon),
        )
