"""
Infrastructure layer: PostgREST client with retry logic.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from climafarm.config import settings
from climafarm.domain.models import Band
from climafarm.infrastructure.api_constants import APIConstants, PostgRESTEndpoints

logger = logging.getLogger(__name__)


class PostgRESTError(Exception):
    """
    Error returned by (or while reaching) the PostgREST service.

    Attributes:
        message: Human readable description
        status_code: HTTP status reported upstream (503 when unreachable)
        code: PostgreSQL SQLSTATE from the PostgREST error body, if any
    """

    def __init__(self, message: str, status_code: int = 500, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code


def _sqlstate(response: httpx.Response) -> Optional[str]:
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        return body.get("code")
    return None


class PostgRESTClient:
    """
    Client for the PostgREST API in front of the NASA LST database.
    Implements retry logic with exponential backoff on 5xx and transport errors.
    """

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None):
        """Initialize the API client with configuration."""
        self.base_url = base_url or settings.postgrest_url
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={
                "accept": APIConstants.CONTENT_TYPE_JSON,
                "Content-Type": APIConstants.CONTENT_TYPE_JSON,
            },
            timeout=timeout or settings.postgrest_timeout,
        )

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "PostgRESTClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.TransportError)),
        reraise=True,
    )
    async def _send(self, method: str, endpoint: str, **kwargs) -> httpx.Response:
        """Send a request, raising on 5xx so it is retried."""
        response = await self.client.request(method, endpoint, **kwargs)
        if response.status_code >= 500:
            response.raise_for_status()
        return response

    async def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Any:
        """
        Make an HTTP request with retry logic.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: Table or RPC path
            **kwargs: Additional arguments for the request

        Returns:
            Decoded JSON body, or None for empty responses

        Raises:
            PostgRESTError: If the request fails after retries or returns 4xx
        """
        try:
            response = await self._send(method, endpoint, **kwargs)
        except httpx.HTTPStatusError as e:
            raise PostgRESTError(
                f"PostgREST request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
                code=_sqlstate(e.response),
            )
        except httpx.HTTPError as e:
            raise PostgRESTError(f"PostgREST request error: {str(e)}", status_code=503)

        if response.status_code >= 400:
            # Client errors are not retried
            raise PostgRESTError(
                f"PostgREST request failed: {response.status_code} - {response.text}",
                status_code=response.status_code,
                code=_sqlstate(response),
            )

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            raise PostgRESTError("PostgREST returned a malformed JSON body", status_code=502)

    # ============================================================
    # lst_statistics
    # ============================================================

    async def count_statistics(self) -> Any:
        """Raw result of `select=count` on lst_statistics."""
        return await self._make_request(
            "GET", PostgRESTEndpoints.LST_STATISTICS, params={"select": "count"}
        )

    async def get_statistics_page(self, limit: int, offset: int) -> List[Dict[str, Any]]:
        """Fetch a window of lst_statistics rows."""
        data = await self._make_request(
            "GET",
            PostgRESTEndpoints.LST_STATISTICS,
            params={"limit": limit, "offset": offset},
        )
        return data or []

    async def get_band_statistics(
        self,
        latitude: float,
        longitude: float,
        band: Band,
        limit: int = APIConstants.ENHANCED_SAMPLE_LIMIT,
    ) -> List[Dict[str, Any]]:
        """Fetch statistics rows for one location and band."""
        data = await self._make_request(
            "GET",
            PostgRESTEndpoints.LST_STATISTICS,
            params={
                "latitude": PostgRESTEndpoints.eq(latitude),
                "longitude": PostgRESTEndpoints.eq(longitude),
                "band": PostgRESTEndpoints.eq(Band(band).value),
                "limit": limit,
            },
        )
        return data or []

    async def get_statistic_locations(self) -> List[Dict[str, Any]]:
        """Coordinates and band of every statistics row."""
        data = await self._make_request(
            "GET",
            PostgRESTEndpoints.LST_STATISTICS,
            params={"select": "latitude,longitude,band"},
        )
        return data or []

    async def get_all_statistics(self) -> List[Dict[str, Any]]:
        return await self._make_request("GET", PostgRESTEndpoints.LST_STATISTICS) or []

    async def get_statistics_by_band(self, band: str) -> List[Dict[str, Any]]:
        data = await self._make_request(
            "GET",
            PostgRESTEndpoints.LST_STATISTICS,
            params={"band": PostgRESTEndpoints.eq(band)},
        )
        return data or []

    async def get_statistics_by_date_range(self, start_date: str, end_date: str) -> List[Dict[str, Any]]:
        data = await self._make_request(
            "GET",
            PostgRESTEndpoints.LST_STATISTICS,
            params=[
                ("calendar_date", PostgRESTEndpoints.gte(start_date)),
                ("calendar_date", PostgRESTEndpoints.lte(end_date)),
            ],
        )
        return data or []

    async def insert_lst_statistics(self, statistics_payload: Dict[str, Any]) -> Any:
        return await self._make_request(
            "POST",
            PostgRESTEndpoints.INSERT_LST_STATISTICS,
            json={"statistics_json": statistics_payload},
        )

    # ============================================================
    # lst_tr_sf_data
    # ============================================================

    async def get_all_lst_data(self) -> List[Dict[str, Any]]:
        return await self._make_request("GET", PostgRESTEndpoints.LST_DATA) or []

    async def get_lst_data_by_location(
        self,
        latitude: float,
        longitude: float,
        radius: float = APIConstants.DEFAULT_LOCATION_RADIUS,
    ) -> List[Dict[str, Any]]:
        """Raster subsets within a square of +/- radius degrees."""
        data = await self._make_request(
            "GET",
            PostgRESTEndpoints.LST_DATA,
            params=[
                ("latitude", PostgRESTEndpoints.gte(latitude - radius)),
                ("latitude", PostgRESTEndpoints.lte(latitude + radius)),
                ("longitude", PostgRESTEndpoints.gte(longitude - radius)),
                ("longitude", PostgRESTEndpoints.lte(longitude + radius)),
            ],
        )
        return data or []

    async def search_lst_data(self, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """
        Search raster subsets.

        Supported filters: band, minLat/maxLat, minLon/maxLon.
        """
        params: list[tuple[str, str]] = []
        if filters.get("band"):
            params.append(("band", PostgRESTEndpoints.eq(filters["band"])))
        if filters.get("minLat") and filters.get("maxLat"):
            params.append(("latitude", PostgRESTEndpoints.gte(filters["minLat"])))
            params.append(("latitude", PostgRESTEndpoints.lte(filters["maxLat"])))
        if filters.get("minLon") and filters.get("maxLon"):
            params.append(("longitude", PostgRESTEndpoints.gte(filters["minLon"])))
            params.append(("longitude", PostgRESTEndpoints.lte(filters["maxLon"])))
        data = await self._make_request("GET", PostgRESTEndpoints.LST_DATA, params=params)
        return data or []

    async def insert_lst_data(self, lst_data: Dict[str, Any]) -> Any:
        fields = APIConstants.LST_REQUIRED_FIELDS + ("header",)
        payload = {field: lst_data.get(field) for field in fields}
        return await self._make_request(
            "POST",
            PostgRESTEndpoints.LST_DATA,
            json=payload,
            headers={"Prefer": APIConstants.PREFER_REPRESENTATION},
        )

    async def update_lst_data(self, record_id: int, lst_data: Dict[str, Any]) -> Any:
        payload = {**lst_data, "updated_at": datetime.now(timezone.utc).isoformat()}
        return await self._make_request(
            "PATCH",
            PostgRESTEndpoints.LST_DATA,
            params={"id": PostgRESTEndpoints.eq(record_id)},
            json=payload,
            headers={"Prefer": APIConstants.PREFER_REPRESENTATION},
        )

    async def delete_lst_data(self, record_id: int) -> None:
        await self._make_request(
            "DELETE",
            PostgRESTEndpoints.LST_DATA,
            params={"id": PostgRESTEndpoints.eq(record_id)},
        )

    # ============================================================
    # Stored procedures
    # ============================================================

    async def filter_lst_by_date(self, start_date: str, end_date: str) -> Any:
        return await self._make_request(
            "POST",
            PostgRESTEndpoints.FILTER_LST_BY_DATE,
            json={"start_date": start_date, "end_date": end_date},
        )

    async def get_temperature_stats(
        self,
        lat_min: float,
        lat_max: float,
        lon_min: float,
        lon_max: float,
    ) -> Any:
        return await self._make_request(
            "POST",
            PostgRESTEndpoints.GET_TEMPERATURE_STATS,
            json={
                "lat_min": lat_min,
                "lat_max": lat_max,
                "lon_min": lon_min,
                "lon_max": lon_max,
            },
        )

    async def get_lst_data_with_statistics(
        self,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        band: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        payload = {}
        if latitude:
            payload["target_latitude"] = latitude
        if longitude:
            payload["target_longitude"] = longitude
        if band:
            payload["band_filter"] = band
        data = await self._make_request(
            "POST", PostgRESTEndpoints.GET_LST_DATA_WITH_STATISTICS, json=payload
        )
        return data or []

    async def get_vgt_data_with_statistics(
        self,
        latitude: Optional[float] = None,
        longitude: Optional[float] = None,
        band: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """Vegetation (NDVI) subsets joined with their statistics."""
        payload = {}
        if latitude:
            payload["target_latitude"] = latitude
        if longitude:
            payload["target_longitude"] = longitude
        if band:
            payload["band_filter"] = band
        data = await self._make_request(
            "POST", PostgRESTEndpoints.GET_VGT_DATA_WITH_STATISTICS, json=payload
        )
        return data or []


# Singleton instance
_postgrest_client: Optional[PostgRESTClient] = None


def get_postgrest_client() -> PostgRESTClient:
    """
    Get or create the singleton PostgREST client instance.

    Returns:
        PostgRESTClient instance
    """
    global _postgrest_client
    if _postgrest_client is None:
        _postgrest_client = PostgRESTClient()
    return _postgrest_client
