"""
Unit tests for the offline geographic classifier.

Tests cover:
- Nearest major city lookup
- Regional and ocean naming
- Regional climate boxes and latitude bands
- Soil hash
- Geometry helpers
"""
import math

import pytest

from climafarm.domain.models import ClimateZone, SoilType
from climafarm.services.domain.geo_classifier import (
    MAJOR_CITIES,
    REMOTE_REGION,
    GeoClassifier,
    RegionBox,
    geographic_region,
    is_ocean_region,
)
from climafarm.utils.geo_math import haversine_km, round_half_up


# ============================================================
# Geometry Helper Tests
# ============================================================

class TestGeoMath:
    """Tests for distance and rounding helpers."""

    def test_haversine_zero_distance(self):
        assert haversine_km(48.8566, 2.3522, 48.8566, 2.3522) == 0

    def test_haversine_paris_london(self):
        """Paris to London is roughly 344 km."""
        distance = haversine_km(48.8566, 2.3522, 51.5074, -0.1278)
        assert 330 < distance < 360

    def test_haversine_is_symmetric(self):
        a = haversine_km(-33.8688, 151.2093, 35.6762, 139.6503)
        b = haversine_km(35.6762, 139.6503, -33.8688, 151.2093)
        assert a == pytest.approx(b)

    @pytest.mark.parametrize("value,expected", [
        (2.5, 3),
        (-2.5, -2),
        (35.53, 36),
        (-0.5, 0),
        (7.4999, 7),
    ])
    def test_round_half_up(self, value, expected):
        """Halves round towards positive infinity."""
        assert round_half_up(value) == expected


class TestRegionBox:
    """Tests for inclusive bounding boxes."""

    def test_contains_interior(self):
        box = RegionBox("test", 10, 20, 30, 40)
        assert box.contains(15, 35)

    def test_contains_edges(self):
        """Boxes are inclusive on every edge."""
        box = RegionBox("test", 10, 20, 30, 40)
        assert box.contains(10, 30)
        assert box.contains(20, 40)
        assert box.contains(10, 40)

    def test_excludes_outside(self):
        box = RegionBox("test", 10, 20, 30, 40)
        assert not box.contains(9.99, 35)
        assert not box.contains(15, 40.01)


# ============================================================
# Nearest City Tests
# ============================================================

class TestNearestCity:
    """Tests for the major-city lookup."""

    def test_city_table_size(self):
        assert len(MAJOR_CITIES) == 29

    def test_exact_city_coordinate(self, classifier):
        """A coordinate exactly at Paris resolves to Paris."""
        assert classifier.nearest_city(48.8566, 2.3522) == "Paris"

    def test_closest_city_wins(self, classifier):
        """Near Paris, London is also within range but further away."""
        assert haversine_km(49.0, 2.5, 51.5074, -0.1278) < 500
        assert classifier.nearest_city(49.0, 2.5) == "Paris"

    def test_far_from_every_city(self, classifier):
        """Mid-Pacific is far more than 500 km from every listed city."""
        lat, lon = 0.0, -140.0
        assert all(
            haversine_km(lat, lon, city.latitude, city.longitude) > 600
            for city in MAJOR_CITIES
        )
        assert classifier.nearest_city(lat, lon) is None

    def test_far_coordinate_falls_through_to_regional_name(self, classifier):
        name = classifier.location_name(0.0, -140.0)
        assert name == classifier.regional_name(0.0, -140.0)
        assert name == "Central American Highlands"

    def test_radius_is_configurable(self):
        """A tiny radius only accepts the city itself."""
        strict = GeoClassifier(nearest_city_radius_km=1)
        assert strict.nearest_city(48.8566, 2.3522) == "Paris"
        assert strict.nearest_city(49.0, 2.5) is None


# ============================================================
# Regional Naming Tests
# ============================================================

class TestRegionalNaming:
    """Tests for continent, ocean and fallback region names."""

    @pytest.mark.parametrize("lat,lon,expected", [
        (10.0, -20.0, "Equatorial Atlantic"),
        (80.0, 0.0, "Arctic Ocean Region"),
        (-70.0, 0.0, "Antarctic Waters"),
        (0.0, -140.0, "Central American Highlands"),
    ])
    def test_regional_names(self, classifier, lat, lon, expected):
        assert classifier.regional_name(lat, lon) == expected

    def test_pacific_band_is_ocean(self):
        assert is_ocean_region(0.0, 170.0)
        assert is_ocean_region(0.0, -170.0)

    def test_geographic_region_always_returns_a_name(self):
        for lat in range(-90, 91, 15):
            for lon in range(-180, 181, 30):
                assert geographic_region(lat, lon)

    def test_remote_region_constant(self):
        assert REMOTE_REGION == "Remote Geographic Region"


# ============================================================
# Climate Zone Tests
# ============================================================

class TestClimateZone:
    """Tests for regional climate boxes and latitude bands."""

    @pytest.mark.parametrize("lat,lon,expected", [
        (30.0444, 31.2357, ClimateZone.ARID_DESERT),        # Cairo
        (41.9028, 12.4964, ClimateZone.MEDITERRANEAN),      # Rome
        (-3.1, -60.0, ClimateZone.TROPICAL_RAINFOREST),     # Manaus
        (19.0760, 72.8777, ClimateZone.TROPICAL_MONSOON),   # Mumbai
        (48.0, 68.0, ClimateZone.STEPPE),                   # Kazakhstan
        (70.0, 100.0, ClimateZone.TUNDRA),                  # Taymyr
        (60.0, 100.0, ClimateZone.SUBARCTIC),               # Central Siberia
        (39.9042, 116.4074, ClimateZone.CONTINENTAL),       # Beijing
        (51.5074, -0.1278, ClimateZone.TEMPERATE),          # London
        (43.0, 105.0, ClimateZone.COLD_DESERT),             # Gobi
        (12.0, 0.0, ClimateZone.SEMI_ARID),                 # Sahel
        (-33.8688, 151.2093, ClimateZone.SUBTROPICAL),      # Sydney
        (-80.0, 0.0, ClimateZone.POLAR),                    # Antarctica
    ])
    def test_regional_climate(self, classifier, lat, lon, expected):
        assert classifier.climate_zone(lat, lon) == expected

    @pytest.mark.parametrize("lat,expected", [
        (70.0, ClimateZone.POLAR),
        (55.0, ClimateZone.SUBARCTIC),
        (47.0, ClimateZone.CONTINENTAL),
        (40.0, ClimateZone.TEMPERATE),
        (30.0, ClimateZone.SUBTROPICAL),
        (10.0, ClimateZone.TROPICAL),
        (-10.0, ClimateZone.TROPICAL),
        (-66.5, ClimateZone.POLAR),
    ])
    def test_latitude_bands(self, classifier, lat, expected):
        """Without a longitude only |latitude| matters."""
        assert classifier.climate_zone(lat) == expected

    def test_unmatched_coordinate_uses_latitude_band(self, classifier):
        """Open South Pacific matches no box."""
        assert classifier.climate_zone(-40.0, -130.0) == ClimateZone.TEMPERATE

    def test_climate_zone_is_deterministic(self, classifier):
        assert classifier.climate_zone(12.3, 45.6) == classifier.climate_zone(12.3, 45.6)


# ============================================================
# Soil Type Tests
# ============================================================

class TestSoilType:
    """Tests for the coordinate soil hash."""

    def test_paris_soil(self, classifier):
        """floor(|48.8566 * 2.3522| * 10) = 1149, 1149 mod 6 = 3."""
        assert classifier.soil_type(48.8566, 2.3522) == SoilType.ROCKY

    def test_zero_product_is_sandy(self, classifier):
        assert classifier.soil_type(0.0, 123.4) == SoilType.SANDY

    def test_sign_does_not_matter(self, classifier):
        assert classifier.soil_type(-10.5, 20.25) == classifier.soil_type(10.5, -20.25)

    def test_soil_index_formula(self, classifier):
        lat, lon = 12.345, 67.89
        index = math.floor(abs(lat * lon) * 10) % 6
        assert classifier.soil_type(lat, lon) == list(SoilType)[index]


# ============================================================
# Classification Tests
# ============================================================

class TestClassify:
    """Tests for the combined classifier output."""

    def test_classify_paris(self, classifier):
        result = classifier.classify(48.8566, 2.3522)

        assert result.name == "Paris"
        assert result.climate_zone == ClimateZone.TEMPERATE
        assert result.soil_type == SoilType.ROCKY

    def test_classify_never_raises(self, classifier):
        for lat, lon in [(90, 180), (-90, -180), (0, 0), (89.999, -0.001)]:
            assert classifier.classify(lat, lon).name


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
