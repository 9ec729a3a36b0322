"""
Domain service: Assemble playable areas and location payloads.

Combines a coordinate, a temperature reading and classifier output into the
Area / LocationData models the game consumes, including the free-text
description and external map links.
"""
import random
from typing import Optional

from climafarm.domain.models import (
    Area,
    ClimateZone,
    LocationData,
    LocationInfo,
    LocationSource,
    MapCoordinates,
    MapData,
    MapLinks,
    SoilType,
    TemperatureReading,
)
from climafarm.services.domain.geo_classifier import MAJOR_CITIES
from climafarm.services.domain.temperature import temperature_description
from climafarm.utils.map_links import (
    google_maps_embed_url,
    google_maps_search_url,
    google_maps_url,
    open_street_map_url,
)

AREA_ID_RANGE = 1000

CLIMATE_DESCRIPTIONS: dict[str, str] = {
    ClimateZone.TROPICAL.value: "offers year-round growing seasons with high biodiversity potential",
    ClimateZone.TROPICAL_RAINFOREST.value: "combines constant warmth and heavy rainfall, ideal for fast-growing tropical crops",
    ClimateZone.TROPICAL_MONSOON.value: "depends on a pronounced rainy season that shapes planting calendars",
    ClimateZone.SUBTROPICAL.value: "provides excellent conditions for diverse crop cultivation",
    ClimateZone.MEDITERRANEAN.value: "suits olives, grapes and citrus with its dry summers and mild wet winters",
    ClimateZone.TEMPERATE.value: "features seasonal variations ideal for traditional agriculture",
    ClimateZone.CONTINENTAL.value: "experiences distinct seasons suitable for grain production",
    ClimateZone.STEPPE.value: "supports grazing and dryland grains on its open grasslands",
    ClimateZone.ARID_DESERT.value: "needs careful irrigation and heat-tolerant crops to farm at all",
    ClimateZone.COLD_DESERT.value: "pairs scarce water with cold winters, limiting farming to hardy species",
    ClimateZone.SEMI_ARID.value: "rewards drought-resistant crops and water conservation",
    ClimateZone.SUBARCTIC.value: "has a brief summer window for fast-maturing crops",
    ClimateZone.TUNDRA.value: "allows only minimal cultivation on thawing ground",
    ClimateZone.POLAR.value: "requires specialized techniques for short-season cultivation",
}
DEFAULT_CLIMATE_DESCRIPTION = "presents unique agricultural challenges and opportunities"

CITY_NAMES = [city.name for city in MAJOR_CITIES]


def climate_description(climate: str) -> str:
    key = getattr(climate, "value", climate)
    return CLIMATE_DESCRIPTIONS.get(key, DEFAULT_CLIMATE_DESCRIPTION)


def city_type(name: str) -> str:
    """'metropolitan area' when the name mentions a major city, else 'region'."""
    return "metropolitan area" if any(city in name for city in CITY_NAMES) else "region"


def area_description(name: str, temp: float, climate: str) -> str:
    climate_label = getattr(climate, "value", climate)
    return (
        f"{climate_label} {city_type(name)} with {temperature_description(temp)} temperatures. "
        f"{name} {climate_description(climate)}"
    )


def random_area_id(rng: Optional[random.Random] = None) -> int:
    return (rng or random).randrange(AREA_ID_RANGE)


def build_area(
    latitude: float,
    longitude: float,
    name: str,
    climate_zone: ClimateZone,
    soil_type: SoilType,
    reading: TemperatureReading,
    description_temp: Optional[float] = None,
    source: Optional[LocationSource] = None,
    area_id: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> Area:
    """
    Build an Area. The id is random unless one is supplied.

    The description uses the average temperature unless description_temp is given.
    """
    temp = reading.avg_temp_c if description_temp is None else description_temp
    return Area(
        id=random_area_id(rng) if area_id is None else area_id,
        name=name,
        latitude=latitude,
        longitude=longitude,
        day_temperature=reading.day_temp_c,
        night_temperature=reading.night_temp_c,
        soil_type=soil_type,
        climate_zone=climate_zone,
        description=area_description(name, temp, climate_zone),
        source=source,
    )


def location_map_data(latitude: float, longitude: float, area: Area) -> MapData:
    """Map viewer links and a display summary for a location."""
    return MapData(
        coordinates=MapCoordinates(
            latitude=latitude,
            longitude=longitude,
            formatted=f"{latitude:.4f}°, {longitude:.4f}°",
        ),
        maps=MapLinks(
            google_maps=google_maps_url(latitude, longitude),
            google_maps_search=google_maps_search_url(area.name, latitude, longitude),
            google_maps_embed=google_maps_embed_url(latitude, longitude),
            open_street_map=open_street_map_url(latitude, longitude),
        ),
        location_info=LocationInfo(
            name=area.name,
            climate=area.climate_zone.value,
            description=area.description,
        ),
    )


def build_location_data(area: Area) -> LocationData:
    """Wrap an Area into the hidden-until-revealed LocationData payload."""
    return LocationData(
        latitude=area.latitude,
        longitude=area.longitude,
        day_temp=area.day_temperature,
        night_temp=area.night_temperature,
        location_name=area.name,
        is_revealed=False,
        area=area,
        map_data=location_map_data(area.latitude, area.longitude, area),
    )
