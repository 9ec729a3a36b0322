"""
API router for game-facing climate endpoints.
"""
from typing import Annotated, List, Optional

from fastapi import APIRouter, Query

from climafarm.api.dependencies import (
    AreaServiceDep,
    GeoClassifierDep,
    LocationServiceDep,
    RandomLocationSelectorDep,
)
from climafarm.domain.models import Area, Classification, LocationData, LocationName, NDVIStatus
from climafarm.services.domain.ndvi import ndvi_status


router = APIRouter(
    prefix="/climate",
    tags=["climate"],
)

Latitude = Annotated[float, Query(ge=-90, le=90, description="Latitude in degrees")]
Longitude = Annotated[float, Query(ge=-180, le=180, description="Longitude in degrees")]


@router.get(
    "/random-location",
    response_model=LocationData,
    summary="Pick a random location to play",
    description="""
    Picks a random record from the LST statistics table and derives day/night
    temperatures, a name, a climate zone and a soil type for it.

    Paging strategies fall through to one another and finally to a static list
    of well-known cities, so this endpoint always answers.
    """,
)
async def get_random_location(selector: RandomLocationSelectorDep) -> LocationData:
    return await selector.pick_random_area()


@router.get(
    "/areas",
    response_model=List[Area],
    summary="List selectable areas",
)
async def get_available_areas(
    area_service: AreaServiceDep,
    geocode: Annotated[bool, Query(description="Name areas through the reverse geocoders")] = False,
) -> List[Area]:
    return await area_service.list_available_areas(geocode=geocode)


@router.post(
    "/areas/details",
    response_model=LocationData,
    summary="Load real temperatures for a listed area",
)
async def get_area_details(area: Area, area_service: AreaServiceDep) -> LocationData:
    return await area_service.location_for_area(area)


@router.get(
    "/location",
    response_model=LocationData,
    summary="Climate data for a coordinate",
)
async def get_location(
    latitude: Latitude,
    longitude: Longitude,
    area_service: AreaServiceDep,
) -> LocationData:
    return await area_service.location_for_coordinates(latitude, longitude)


@router.get(
    "/classify",
    response_model=Classification,
    summary="Offline name, climate zone and soil type for a coordinate",
)
async def classify(
    latitude: Latitude,
    longitude: Longitude,
    classifier: GeoClassifierDep,
) -> Classification:
    return classifier.classify(latitude, longitude)


@router.get(
    "/reverse-geocode",
    response_model=LocationName,
    summary="Resolve a coordinate to a place name",
)
async def reverse_geocode(
    latitude: Latitude,
    longitude: Longitude,
    location_service: LocationServiceDep,
) -> LocationName:
    return await location_service.reverse_geocode(latitude, longitude)


@router.get(
    "/ndvi-status",
    response_model=NDVIStatus,
    summary="Vegetation health for an NDVI value",
)
async def get_ndvi_status(value: Optional[float] = None) -> NDVIStatus:
    return ndvi_status(value)
