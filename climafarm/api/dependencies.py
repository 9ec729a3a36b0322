"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from climafarm.infrastructure.geocoding_client import (
    GeocodingClient,
    get_geocoding_client,
)
from climafarm.infrastructure.postgrest_client import (
    PostgRESTClient,
    get_postgrest_client,
)
from climafarm.services.application.area_service import AreaService
from climafarm.services.application.location_service import LocationService
from climafarm.services.application.random_location import RandomLocationSelector
from climafarm.services.domain.game_data import QuizGenerator
from climafarm.services.domain.geo_classifier import GeoClassifier


def get_geo_classifier() -> GeoClassifier:
    """
    Dependency factory for GeoClassifier.

    Returns:
        GeoClassifier instance
    """
    return GeoClassifier()


def get_location_service(
    geocoding_client: Annotated[GeocodingClient, Depends(get_geocoding_client)],
    classifier: Annotated[GeoClassifier, Depends(get_geo_classifier)],
) -> LocationService:
    """
    Dependency factory for LocationService.

    Args:
        geocoding_client: Reverse-geocoding providers (injected)
        classifier: Offline classifier (injected)

    Returns:
        LocationService instance
    """
    return LocationService(geocoding_client=geocoding_client, classifier=classifier)


def get_area_service(
    postgrest_client: Annotated[PostgRESTClient, Depends(get_postgrest_client)],
    location_service: Annotated[LocationService, Depends(get_location_service)],
) -> AreaService:
    return AreaService(postgrest_client=postgrest_client, location_service=location_service)


def get_random_location_selector(
    postgrest_client: Annotated[PostgRESTClient, Depends(get_postgrest_client)],
    area_service: Annotated[AreaService, Depends(get_area_service)],
) -> RandomLocationSelector:
    return RandomLocationSelector(postgrest_client=postgrest_client, area_service=area_service)


def get_quiz_generator() -> QuizGenerator:
    return QuizGenerator()


# Type aliases for cleaner route signatures
PostgRESTClientDep = Annotated[PostgRESTClient, Depends(get_postgrest_client)]
GeoClassifierDep = Annotated[GeoClassifier, Depends(get_geo_classifier)]
LocationServiceDep = Annotated[LocationService, Depends(get_location_service)]
AreaServiceDep = Annotated[AreaService, Depends(get_area_service)]
RandomLocationSelectorDep = Annotated[RandomLocationSelector, Depends(get_random_location_selector)]
QuizGeneratorDep = Annotated[QuizGenerator, Depends(get_quiz_generator)]
