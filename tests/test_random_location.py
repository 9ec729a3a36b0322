"""
Unit tests for random location selection.

Tests cover:
- Count response interpretation
- Offset strategies
- Strategy fall-through order
- Static fallback when the table is empty or unreachable
"""
import random

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from climafarm.infrastructure.postgrest_client import PostgRESTError
from climafarm.services.application.area_service import AreaService
from climafarm.services.application.location_service import LocationService
from climafarm.services.application.random_location import (
    FALLBACK_LOCATIONS,
    RandomLocationSelector,
    has_coordinates,
    record_count,
)


@pytest.fixture
def area_service(mock_postgrest_client, classifier, rng) -> AreaService:
    location_service = LocationService(geocoding_client=MagicMock(providers=[]), classifier=classifier)
    return AreaService(mock_postgrest_client, location_service, rng=rng)


@pytest.fixture
def selector(mock_postgrest_client, area_service, rng) -> RandomLocationSelector:
    return RandomLocationSelector(mock_postgrest_client, area_service, rng=rng)


@pytest.fixture
def stub_area_service(classifier, sample_location):
    service = MagicMock()
    service.classifier = classifier
    service.build_location = AsyncMock(return_value=sample_location)
    return service


PARIS_ROW = {"latitude": 48.8566, "longitude": 2.3522, "band": "LST_Day_1km"}


# ============================================================
# Helper Tests
# ============================================================

class TestRecordCount:
    """Tests for interpreting select=count responses."""

    def test_count_row(self):
        assert record_count([{"count": 42}]) == 42

    def test_plain_rows_are_estimated(self):
        assert record_count([{"latitude": 1}] * 3) == 5000
        assert record_count([{"latitude": 1}] * 80) == 8000

    def test_empty_list(self):
        assert record_count([]) == 5000

    @pytest.mark.parametrize("value", [None, {}, "42"])
    def test_non_list_uses_default(self, value):
        assert record_count(value) == 10000


class TestHasCoordinates:

    def test_valid(self):
        assert has_coordinates(PARIS_ROW)
        assert has_coordinates({"latitude": "1.5", "longitude": "2.5"})

    @pytest.mark.parametrize("record", [
        {"latitude": None, "longitude": 2.0},
        {"latitude": "abc", "longitude": 2.0},
        {"latitude": float("nan"), "longitude": 2.0},
        {"longitude": 2.0},
        "not a record",
    ])
    def test_invalid(self, record):
        assert not has_coordinates(record)


# ============================================================
# Strategy Tests
# ============================================================

class TestStrategies:
    """Tests for the three offset strategies."""

    @pytest.mark.asyncio
    async def test_count_based_offset_is_in_range(self, selector, mock_postgrest_client):
        mock_postgrest_client.count_statistics.return_value = [{"count": 5000}]

        await selector.count_based()

        limit, offset = mock_postgrest_client.get_statistics_page.await_args.args
        assert limit == 10
        assert 0 <= offset < 4990

    @pytest.mark.asyncio
    async def test_count_based_minimum_offset_range(self, selector, mock_postgrest_client):
        mock_postgrest_client.count_statistics.return_value = [{"count": 50}]

        for _ in range(20):
            await selector.count_based()
            _, offset = mock_postgrest_client.get_statistics_page.await_args.args
            assert 0 <= offset < 1000

    @pytest.mark.asyncio
    async def test_large_offset_retries_smaller(self, selector, mock_postgrest_client):
        mock_postgrest_client.get_statistics_page.side_effect = [[], [PARIS_ROW]]

        batch = await selector.large_offset()

        assert batch == [PARIS_ROW]
        calls = mock_postgrest_client.get_statistics_page.await_args_list
        assert len(calls) == 2
        assert calls[0].args[0] == 15
        assert 0 <= calls[1].args[1] < 5000

    @pytest.mark.asyncio
    async def test_large_offset_single_call_when_data(self, selector, mock_postgrest_client):
        mock_postgrest_client.get_statistics_page.return_value = [PARIS_ROW]

        await selector.large_offset()

        assert mock_postgrest_client.get_statistics_page.await_count == 1

    @pytest.mark.asyncio
    async def test_multi_batch(self, selector, mock_postgrest_client):
        await selector.multi_batch()

        limit, offset = mock_postgrest_client.get_statistics_page.await_args.args
        assert limit == 20
        assert 0 <= offset < 40000

    def test_strategy_order(self, selector):
        assert [label for label, _ in selector.strategies()] == [
            "count-based", "large-offset", "multi-batch",
        ]


# ============================================================
# Selection Tests
# ============================================================

class TestPickRandomArea:
    """Tests for pick_random_area."""

    @pytest.mark.asyncio
    async def test_falls_through_to_later_strategies(
        self, mock_postgrest_client, stub_area_service, rng
    ):
        selector = RandomLocationSelector(mock_postgrest_client, stub_area_service, rng=rng)
        first = AsyncMock(return_value=[PARIS_ROW])
        second = AsyncMock(return_value=[])
        third = AsyncMock(return_value=[{"latitude": "-33.8688", "longitude": "151.2093"}])
        selector.strategies = lambda: [("a", first), ("b", second), ("c", third)]

        with patch.object(selector.rng, "randrange", side_effect=[1, 0]):
            await selector.pick_random_area()

        first.assert_not_awaited()
        second.assert_awaited_once()
        third.assert_awaited_once()
        stub_area_service.build_location.assert_awaited_once_with(-33.8688, 151.2093)

    @pytest.mark.asyncio
    async def test_exception_moves_to_next_strategy(
        self, mock_postgrest_client, stub_area_service, rng
    ):
        selector = RandomLocationSelector(mock_postgrest_client, stub_area_service, rng=rng)
        failing = AsyncMock(side_effect=PostgRESTError("timeout", 503))
        working = AsyncMock(return_value=[PARIS_ROW])
        selector.strategies = lambda: [("a", failing), ("b", working)]

        with patch.object(selector.rng, "randrange", side_effect=[0, 0]):
            location = await selector.pick_random_area()

        assert location.location_name == "Paris"
        stub_area_service.build_location.assert_awaited_once_with(48.8566, 2.3522)

    @pytest.mark.asyncio
    async def test_last_strategy_failure_uses_static_list(
        self, mock_postgrest_client, stub_area_service, rng
    ):
        selector = RandomLocationSelector(mock_postgrest_client, stub_area_service, rng=rng)
        first = AsyncMock(return_value=[PARIS_ROW])
        last = AsyncMock(return_value=[])
        selector.strategies = lambda: [("a", first), ("b", last)]

        with patch.object(selector.rng, "randrange", return_value=1):
            location = await selector.pick_random_area()

        first.assert_not_awaited()
        stub_area_service.build_location.assert_not_awaited()
        assert location.area.source == "fallback"

    @pytest.mark.asyncio
    async def test_rows_without_coordinates_are_skipped(
        self, mock_postgrest_client, stub_area_service, rng
    ):
        selector = RandomLocationSelector(mock_postgrest_client, stub_area_service, rng=rng)
        only = AsyncMock(return_value=[{"latitude": None, "longitude": None}])
        selector.strategies = lambda: [("a", only)]

        location = await selector.pick_random_area()

        stub_area_service.build_location.assert_not_awaited()
        assert location.area.source == "fallback"

    @pytest.mark.asyncio
    async def test_real_data_builds_location(self, selector, mock_postgrest_client):
        mock_postgrest_client.count_statistics.return_value = [{"count": 5000}]
        mock_postgrest_client.get_statistics_page.return_value = [PARIS_ROW]

        location = await selector.pick_random_area()

        assert location.location_name == "Paris"
        assert location.day_temp == 35

    @pytest.mark.asyncio
    @pytest.mark.parametrize("seed", range(10))
    async def test_empty_table_uses_static_list(
        self, empty_postgrest_client, classifier, seed
    ):
        """Never raises; always returns one of the static locations."""
        location_service = LocationService(geocoding_client=MagicMock(providers=[]), classifier=classifier)
        area_service = AreaService(empty_postgrest_client, location_service)
        selector = RandomLocationSelector(
            empty_postgrest_client, area_service, rng=random.Random(seed)
        )

        location = await selector.pick_random_area()

        expected = {(lat, lon): (day, night) for lat, lon, day, night in FALLBACK_LOCATIONS}
        assert (location.latitude, location.longitude) in expected
        assert (location.day_temp, location.night_temp) == expected[(location.latitude, location.longitude)]
        assert location.area.source == "fallback"
        assert location.is_revealed is False

    @pytest.mark.asyncio
    async def test_unreachable_table_uses_static_list(self, empty_postgrest_client, area_service, rng):
        empty_postgrest_client.count_statistics.side_effect = PostgRESTError("down", 503)
        empty_postgrest_client.get_statistics_page.side_effect = PostgRESTError("down", 503)
        selector = RandomLocationSelector(empty_postgrest_client, area_service, rng=rng)

        location = await selector.pick_random_area()

        assert location.area.source == "fallback"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
