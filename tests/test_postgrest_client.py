"""
Unit tests for the PostgREST client.

Tests cover:
- Successful responses and empty bodies
- Retry logic on 5xx errors
- No retry on 4xx errors, with the SQLSTATE code kept
- Query construction for filters and stored procedures
- Async context manager
"""
import json

import pytest
import httpx
import respx
from unittest.mock import AsyncMock

from climafarm.domain.models import Band
from climafarm.infrastructure.postgrest_client import (
    PostgRESTClient,
    PostgRESTError,
    get_postgrest_client,
)


BASE_URL = "http://postgrest.test"


@pytest.fixture
async def client():
    client = PostgRESTClient(base_url=BASE_URL)
    yield client
    await client.close()


# ============================================================
# Client Initialization Tests
# ============================================================

class TestClientInitialization:
    """Tests for client initialization."""

    def test_default_base_url(self):
        client = PostgRESTClient()
        assert client.base_url == "http://localhost:3001"

    def test_singleton_pattern(self):
        """get_postgrest_client should return the same instance."""
        import climafarm.infrastructure.postgrest_client as module
        module._postgrest_client = None

        client1 = get_postgrest_client()
        client2 = get_postgrest_client()

        assert client1 is client2


class TestAsyncContextManager:

    @pytest.mark.asyncio
    async def test_context_manager_enter(self):
        client = PostgRESTClient(base_url=BASE_URL)

        async with client as ctx_client:
            assert ctx_client is client

    @pytest.mark.asyncio
    async def test_context_manager_exit_closes_client(self):
        client = PostgRESTClient(base_url=BASE_URL)
        client.close = AsyncMock()

        async with client:
            pass

        client.close.assert_called_once()


# ============================================================
# Response Handling Tests
# ============================================================

class TestResponses:
    """Tests for response decoding and error mapping."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_successful_get(self, client):
        respx.get(f"{BASE_URL}/lst_statistics").mock(
            return_value=httpx.Response(200, json=[{"id": 1}])
        )

        assert await client.get_all_statistics() == [{"id": 1}]

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_body_is_none(self, client):
        respx.delete(f"{BASE_URL}/lst_tr_sf_data").mock(return_value=httpx.Response(204))

        assert await client._make_request("DELETE", "/lst_tr_sf_data") is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_4xx_not_retried_and_keeps_sqlstate(self, client):
        respx.post(f"{BASE_URL}/lst_tr_sf_data").mock(
            return_value=httpx.Response(409, json={
                "code": "23505",
                "message": "duplicate key value violates unique constraint",
            })
        )

        with pytest.raises(PostgRESTError) as exc_info:
            await client.insert_lst_data({"band": "LST_Day_1km"})

        assert exc_info.value.status_code == 409
        assert exc_info.value.code == "23505"
        assert respx.calls.call_count == 1

    @pytest.mark.asyncio
    @respx.mock
    async def test_4xx_without_json_body(self, client):
        respx.get(f"{BASE_URL}/lst_statistics").mock(
            return_value=httpx.Response(404, text="Not Found")
        )

        with pytest.raises(PostgRESTError, match="404") as exc_info:
            await client.get_all_statistics()

        assert exc_info.value.code is None

    @pytest.mark.asyncio
    @respx.mock
    async def test_5xx_error_triggers_retry(self, client):
        route = respx.get(f"{BASE_URL}/lst_statistics")
        route.side_effect = [
            httpx.Response(500, text="Internal Server Error"),
            httpx.Response(200, json=[{"id": 1}]),
        ]

        result = await client.get_all_statistics()

        assert result == [{"id": 1}]
        assert respx.calls.call_count == 2

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_json(self, client):
        respx.get(f"{BASE_URL}/lst_statistics").mock(
            return_value=httpx.Response(200, text="<html>")
        )

        with pytest.raises(PostgRESTError) as exc_info:
            await client.get_all_statistics()

        assert exc_info.value.status_code == 502


# ============================================================
# Query Construction Tests
# ============================================================

class TestQueries:
    """Tests for PostgREST filter syntax."""

    @pytest.mark.asyncio
    @respx.mock
    async def test_band_statistics_filters(self, client):
        route = respx.get(f"{BASE_URL}/lst_statistics").mock(
            return_value=httpx.Response(200, json=[])
        )

        await client.get_band_statistics(48.8566, 2.3522, Band.NIGHT, limit=10)

        params = route.calls.last.request.url.params
        assert params["latitude"] == "eq.48.8566"
        assert params["longitude"] == "eq.2.3522"
        assert params["band"] == "eq.LST_Night_1km"
        assert params["limit"] == "10"

    @pytest.mark.asyncio
    @respx.mock
    async def test_location_search_sends_both_bounds(self, client):
        route = respx.get(f"{BASE_URL}/lst_tr_sf_data").mock(
            return_value=httpx.Response(200, json=[])
        )

        await client.get_lst_data_by_location(10.0, 20.0, radius=0.5)

        params = route.calls.last.request.url.params
        assert params.get_list("latitude") == ["gte.9.5", "lte.10.5"]
        assert params.get_list("longitude") == ["gte.19.5", "lte.20.5"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_search_requires_both_bounds(self, client):
        route = respx.get(f"{BASE_URL}/lst_tr_sf_data").mock(
            return_value=httpx.Response(200, json=[])
        )

        await client.search_lst_data({"band": "LST_Day_1km", "minLat": "10", "minLon": "5", "maxLon": "6"})

        params = route.calls.last.request.url.params
        assert params["band"] == "eq.LST_Day_1km"
        assert "latitude" not in params
        assert params.get_list("longitude") == ["gte.5", "lte.6"]

    @pytest.mark.asyncio
    @respx.mock
    async def test_date_range(self, client):
        route = respx.get(f"{BASE_URL}/lst_statistics").mock(
            return_value=httpx.Response(200, json=[])
        )

        await client.get_statistics_by_date_range("2024-01-01", "2024-12-31")

        assert route.calls.last.request.url.params.get_list("calendar_date") == [
            "gte.2024-01-01", "lte.2024-12-31",
        ]

    @pytest.mark.asyncio
    @respx.mock
    async def test_insert_statistics_wraps_payload(self, client):
        route = respx.post(f"{BASE_URL}/rpc/insert_lst_statistics").mock(
            return_value=httpx.Response(200, json={"inserted": 1})
        )
        payload = {"statistics": [{"band": "LST_Day_1km"}]}

        await client.insert_lst_statistics(payload)

        assert json.loads(route.calls.last.request.content) == {"statistics_json": payload}

    @pytest.mark.asyncio
    @respx.mock
    async def test_update_sets_timestamp(self, client):
        route = respx.patch(f"{BASE_URL}/lst_tr_sf_data").mock(
            return_value=httpx.Response(200, json=[{"id": 5}])
        )

        await client.update_lst_data(5, {"units": "K"})

        request = route.calls.last.request
        body = json.loads(request.content)
        assert request.url.params["id"] == "eq.5"
        assert request.headers["Prefer"] == "return=representation"
        assert body["units"] == "K"
        assert "updated_at" in body

    @pytest.mark.asyncio
    @respx.mock
    async def test_rpc_omits_missing_filters(self, client):
        route = respx.post(f"{BASE_URL}/rpc/get_lst_data_with_statistics").mock(
            return_value=httpx.Response(200, json=[])
        )

        await client.get_lst_data_with_statistics(band="LST_Day_1km")

        assert json.loads(route.calls.last.request.content) == {"band_filter": "LST_Day_1km"}


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
