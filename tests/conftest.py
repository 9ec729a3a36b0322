"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample LST statistics rows
- Mock PostgREST client
- Seeded random source
- FastAPI test client
"""
import random

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from climafarm.main import app
from climafarm.domain.models import (
    Area,
    ClimateZone,
    LocationData,
    SoilType,
)
from climafarm.infrastructure.postgrest_client import PostgRESTClient
from climafarm.middleware.rate_limiter import limiter
from climafarm.services.domain.geo_classifier import GeoClassifier


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def day_statistics() -> list[dict]:
    """Two LST_Day_1km rows for Paris (Kelvin)."""
    return [
        {
            "latitude": 48.8566,
            "longitude": 2.3522,
            "band": "LST_Day_1km",
            "value_mean": 300.0,
            "value_min": 290.0,
            "value_max": 310.0,
        },
        {
            "latitude": 48.8566,
            "longitude": 2.3522,
            "band": "LST_Day_1km",
            "value_mean": 302.0,
            "value_min": 292.0,
            "value_max": 312.0,
        },
    ]


@pytest.fixture
def night_statistics() -> list[dict]:
    """Two LST_Night_1km rows for Paris (Kelvin)."""
    return [
        {
            "latitude": 48.8566,
            "longitude": 2.3522,
            "band": "LST_Night_1km",
            "value_mean": 285.0,
            "value_min": 280.0,
            "value_max": 290.0,
        },
        {
            "latitude": 48.8566,
            "longitude": 2.3522,
            "band": "LST_Night_1km",
            "value_mean": 287.0,
            "value_min": 282.0,
            "value_max": 292.0,
        },
    ]


@pytest.fixture
def sample_area() -> Area:
    return Area(
        id=7,
        name="Paris",
        latitude=48.8566,
        longitude=2.3522,
        day_temperature=0,
        night_temperature=0,
        soil_type=SoilType.ROCKY,
        climate_zone=ClimateZone.TEMPERATE,
        description="Temperate metropolitan area with moderate temperatures.",
    )


@pytest.fixture
def sample_location(sample_area) -> LocationData:
    area = sample_area.model_copy(update={"day_temperature": 26, "night_temperature": 14})
    return LocationData(
        latitude=area.latitude,
        longitude=area.longitude,
        day_temp=26,
        night_temp=14,
        location_name=area.name,
        area=area,
    )


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(42)


@pytest.fixture
def classifier() -> GeoClassifier:
    return GeoClassifier(nearest_city_radius_km=500)


# ============================================================
# Mock API Client Fixtures
# ============================================================

@pytest.fixture
def mock_postgrest_client(day_statistics, night_statistics):
    """PostgREST client double answering per band."""
    mock_client = AsyncMock(spec=PostgRESTClient)

    async def band_statistics(latitude, longitude, band, limit=20):
        return day_statistics if band.value == "LST_Day_1km" else night_statistics

    mock_client.get_band_statistics.side_effect = band_statistics
    mock_client.get_statistic_locations.return_value = []
    mock_client.get_statistics_page.return_value = []
    mock_client.count_statistics.return_value = []
    return mock_client


@pytest.fixture
def empty_postgrest_client():
    """PostgREST client double whose tables are empty."""
    mock_client = AsyncMock(spec=PostgRESTClient)
    mock_client.count_statistics.return_value = []
    mock_client.get_statistics_page.return_value = []
    mock_client.get_band_statistics.return_value = []
    mock_client.get_statistic_locations.return_value = []
    return mock_client


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Every test starts with fresh rate limit counters."""
    limiter.reset()
    yield


@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)
