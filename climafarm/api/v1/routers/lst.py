"""
API router for LST raster subsets and statistics.

Thin proxy over the PostgREST tables and stored procedures. PostgREST
failures propagate to the error middleware.
"""
from typing import Annotated, Any, Dict, Optional

from fastapi import APIRouter, Body, Path, Query, Request, status

from climafarm.api.dependencies import PostgRESTClientDep
from climafarm.api.v1.models.requests import DateRangeRequest, RegionRequest
from climafarm.api.v1.models.responses import ErrorResponse, LSTResponse
from climafarm.domain.models import Coordinate
from climafarm.infrastructure.api_constants import APIConstants
from climafarm.middleware.rate_limiter import STRICT_LIMIT, limiter


router = APIRouter(
    prefix="/lst",
    tags=["lst"],
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid input"},
        404: {"model": ErrorResponse, "description": "Resource not found"},
        429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
        500: {"model": ErrorResponse, "description": "PostgREST failure"},
    },
)

_EXCLUDE_NONE = {"response_model": LSTResponse, "response_model_exclude_none": True}


# ============================================================
# Read endpoints
# ============================================================

@router.get("/", summary="List all LST raster subsets", **_EXCLUDE_NONE)
async def get_all_lst_data(postgrest: PostgRESTClientDep) -> LSTResponse:
    data = await postgrest.get_all_lst_data()
    return LSTResponse(data=data, count=len(data))


@router.get(
    "/location/{lat}/{lon}",
    summary="LST raster subsets near a coordinate",
    **_EXCLUDE_NONE,
)
async def get_lst_data_by_location(
    lat: Annotated[float, Path(description="Latitude in degrees")],
    lon: Annotated[float, Path(description="Longitude in degrees")],
    postgrest: PostgRESTClientDep,
    radius: Annotated[float, Query(gt=0, description="Half-width of the search square in degrees")] = APIConstants.DEFAULT_LOCATION_RADIUS,
) -> LSTResponse:
    location = Coordinate(latitude=lat, longitude=lon)
    data = await postgrest.get_lst_data_by_location(lat, lon, radius)
    return LSTResponse(
        data=data,
        location=location.model_dump(),
        radius=radius,
    )


@router.get(
    "/search",
    summary="Search LST raster subsets",
    description="Optional query filters: band, minLat & maxLat, minLon & maxLon.",
    **_EXCLUDE_NONE,
)
async def search_lst_data(request: Request, postgrest: PostgRESTClientDep) -> LSTResponse:
    filters = dict(request.query_params)
    data = await postgrest.search_lst_data(filters)
    return LSTResponse(data=data, filters=filters, count=len(data))


@router.get("/statistics", summary="List all LST statistics", **_EXCLUDE_NONE)
async def get_all_lst_statistics(postgrest: PostgRESTClientDep) -> LSTResponse:
    data = await postgrest.get_all_statistics()
    return LSTResponse(data=data, count=len(data))


@router.get("/statistics/band/{band}", summary="LST statistics for one band", **_EXCLUDE_NONE)
async def get_statistics_by_band(
    band: Annotated[str, Path(description="Band name, e.g. LST_Day_1km")],
    postgrest: PostgRESTClientDep,
) -> LSTResponse:
    data = await postgrest.get_statistics_by_band(band)
    return LSTResponse(data=data, band=band, count=len(data))


@router.get(
    "/data-with-statistics",
    summary="LST raster subsets joined with their statistics",
    **_EXCLUDE_NONE,
)
async def get_lst_data_with_statistics(
    postgrest: PostgRESTClientDep,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    band: Optional[str] = None,
) -> LSTResponse:
    data = await postgrest.get_lst_data_with_statistics(latitude, longitude, band)
    return LSTResponse(
        data=data,
        filters={"latitude": latitude, "longitude": longitude, "band": band},
        count=len(data),
    )


@router.get(
    "/vgt-data-with-statistics",
    summary="Vegetation (NDVI) subsets joined with their statistics",
    **_EXCLUDE_NONE,
)
async def get_vgt_data_with_statistics(
    postgrest: PostgRESTClientDep,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    band: Optional[str] = None,
) -> LSTResponse:
    data = await postgrest.get_vgt_data_with_statistics(latitude, longitude, band)
    return LSTResponse(
        data=data,
        filters={"latitude": latitude, "longitude": longitude, "band": band},
        count=len(data),
    )


# ============================================================
# Stored procedure endpoints
# ============================================================

@router.post("/filter-by-date", summary="LST data within a date range", **_EXCLUDE_NONE)
async def filter_lst_by_date_range(
    postgrest: PostgRESTClientDep,
    body: Optional[DateRangeRequest] = None,
) -> LSTResponse:
    start_date, end_date = (body or DateRangeRequest()).require()
    data = await postgrest.filter_lst_by_date(start_date, end_date)
    return LSTResponse(data=data, filters={"startDate": start_date, "endDate": end_date})


@router.post("/temperature-stats", summary="Temperature statistics for a region", **_EXCLUDE_NONE)
async def get_temperature_stats(
    postgrest: PostgRESTClientDep,
    body: Optional[RegionRequest] = None,
) -> LSTResponse:
    lat_min, lat_max, lon_min, lon_max = (body or RegionRequest()).require()
    data = await postgrest.get_temperature_stats(lat_min, lat_max, lon_min, lon_max)
    return LSTResponse(
        data=data,
        region={"latMin": lat_min, "latMax": lat_max, "lonMin": lon_min, "lonMax": lon_max},
    )


@router.post(
    "/statistics/date-range",
    summary="LST statistics within a date range",
    **_EXCLUDE_NONE,
)
async def get_statistics_by_date_range(
    postgrest: PostgRESTClientDep,
    body: Optional[DateRangeRequest] = None,
) -> LSTResponse:
    start_date, end_date = (body or DateRangeRequest()).require()
    data = await postgrest.get_statistics_by_date_range(start_date, end_date)
    return LSTResponse(
        data=data,
        filters={"startDate": start_date, "endDate": end_date},
        count=len(data),
    )


# ============================================================
# Write endpoints
# ============================================================

@router.post(
    "/",
    status_code=status.HTTP_201_CREATED,
    summary="Create an LST raster subset",
    **_EXCLUDE_NONE,
)
@limiter.limit(STRICT_LIMIT)
async def create_lst_data(
    request: Request,
    postgrest: PostgRESTClientDep,
    lst_data: Annotated[Dict[str, Any], Body()],
) -> LSTResponse:
    missing = [field for field in APIConstants.LST_REQUIRED_FIELDS if lst_data.get(field) in (None, "")]
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")
    data = await postgrest.insert_lst_data(lst_data)
    return LSTResponse(data=data, message="LST data created successfully")


@router.post(
    "/statistics",
    status_code=status.HTTP_201_CREATED,
    summary="Insert a batch of LST statistics",
    **_EXCLUDE_NONE,
)
@limiter.limit(STRICT_LIMIT)
async def create_lst_statistics(
    request: Request,
    postgrest: PostgRESTClientDep,
    statistics_data: Annotated[Dict[str, Any], Body()],
) -> LSTResponse:
    if not isinstance(statistics_data.get("statistics"), list):
        raise ValueError("Invalid statistics data format. Expected { statistics: [...] }")
    data = await postgrest.insert_lst_statistics(statistics_data)
    return LSTResponse(data=data, message="LST statistics created successfully")


@router.put("/{record_id}", summary="Update an LST raster subset", **_EXCLUDE_NONE)
@limiter.limit(STRICT_LIMIT)
async def update_lst_data(
    request: Request,
    record_id: Annotated[int, Path(description="Row id in lst_tr_sf_data")],
    postgrest: PostgRESTClientDep,
    lst_data: Annotated[Dict[str, Any], Body()],
) -> LSTResponse:
    data = await postgrest.update_lst_data(record_id, lst_data)
    return LSTResponse(data=data, message="LST data updated successfully")


@router.delete("/{record_id}", summary="Delete an LST raster subset", **_EXCLUDE_NONE)
@limiter.limit(STRICT_LIMIT)
async def delete_lst_data(
    request: Request,
    record_id: Annotated[int, Path(description="Row id in lst_tr_sf_data")],
    postgrest: PostgRESTClientDep,
) -> LSTResponse:
    await postgrest.delete_lst_data(record_id)
    return LSTResponse(message="LST data deleted successfully")
