"""
Domain models for locations, climate classification and LST statistics.

These models represent the core domain entities and should be independent
of any infrastructure concerns (API clients, databases, etc.).
"""
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, Field


class ClimateZone(str, Enum):
    """Fixed set of climate labels produced by the classifier."""
    TROPICAL = "Tropical"
    TROPICAL_RAINFOREST = "Tropical Rainforest"
    TROPICAL_MONSOON = "Tropical Monsoon"
    SUBTROPICAL = "Subtropical"
    MEDITERRANEAN = "Mediterranean"
    TEMPERATE = "Temperate"
    CONTINENTAL = "Continental"
    STEPPE = "Steppe"
    ARID_DESERT = "Arid Desert"
    COLD_DESERT = "Cold Desert"
    SEMI_ARID = "Semi-Arid"
    SUBARCTIC = "Subarctic"
    TUNDRA = "Tundra"
    POLAR = "Polar"


class SoilType(str, Enum):
    """Soil labels. Order matters: it is indexed by the coordinate hash."""
    SANDY = "Sandy"
    CLAY_RICH = "Clay-rich"
    VOLCANIC = "Volcanic"
    ROCKY = "Rocky"
    LOAMY = "Loamy"
    PEATY = "Peaty"


class Band(str, Enum):
    """MODIS LST bands stored in lst_statistics."""
    DAY = "LST_Day_1km"
    NIGHT = "LST_Night_1km"


LocationSource = Literal["nominatim", "photon", "bigdatacloud", "fallback"]


class Coordinate(BaseModel):
    """Geographic coordinate in decimal degrees."""
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    class Config:
        frozen = True


class LocationName(BaseModel):
    """Normalized reverse-geocoding result."""
    city: str
    state: Optional[str] = None
    country: str
    full_name: str
    source: LocationSource


class TemperatureReading(BaseModel):
    """Day, night and average temperature in whole degrees Celsius."""
    day_temp_c: int
    night_temp_c: int
    avg_temp_c: int


class Classification(BaseModel):
    """Pure classifier output for a coordinate."""
    name: str
    climate_zone: ClimateZone
    soil_type: SoilType


class Area(BaseModel):
    """A playable area. Built fresh on every resolution, never persisted."""
    id: int = Field(description="Ephemeral random id used for UI keying")
    name: str
    latitude: float
    longitude: float
    day_temperature: int
    night_temperature: int
    soil_type: SoilType
    climate_zone: ClimateZone
    description: str
    source: Optional[LocationSource] = None


class MapCoordinates(BaseModel):
    latitude: float
    longitude: float
    formatted: str


class MapLinks(BaseModel):
    google_maps: str
    google_maps_search: str
    google_maps_embed: str
    open_street_map: str


class LocationInfo(BaseModel):
    name: str
    climate: str
    description: str


class MapData(BaseModel):
    """Links to external map viewers for a location."""
    coordinates: MapCoordinates
    maps: MapLinks
    location_info: LocationInfo


class LocationData(BaseModel):
    """Everything the game needs to play a location."""
    latitude: float
    longitude: float
    day_temp: int
    night_temp: int
    location_name: str
    is_revealed: bool = False
    area: Area
    map_data: Optional[MapData] = None


class NDVIStatus(BaseModel):
    """Vegetation health verdict for a single NDVI value."""
    value: Optional[float] = None
    status: Literal["OK", "KO", "unknown"]
    color: Literal["green", "red", "gray"]
    description: str



class Crop(BaseModel):
    """A plantable crop and the conditions it tolerates."""
    id: int
    name: str
    type: Literal["fruit", "vegetable", "legume"]
    min_temperature: int
    max_temperature: int
    soil_requirement: SoilType
    image: str
    description: str


class EarthArea(BaseModel):
    """Hand-authored tutorial area with a single representative temperature."""
    id: int
    name: str
    temperature: int
    soil_type: SoilType
    description: str
    x: int
    y: int


class QuizQuestion(BaseModel):
    id: int
    question: str
    options: list[str]
    correct_answer: int = Field(description="Index of the correct option")
    explanation: str
    area_id: int
