"""
API endpoint constants and configuration.

This module contains the PostgREST table/RPC paths and the reverse-geocoding
provider paths. Centralizing these values makes it easy to swap out endpoints.
"""


class PostgRESTEndpoints:
    """PostgREST table and stored-procedure paths."""

    # Tables
    LST_DATA = "/lst_tr_sf_data"
    LST_STATISTICS = "/lst_statistics"

    # Stored procedures
    RPC_BASE = "/rpc"
    FILTER_LST_BY_DATE = f"{RPC_BASE}/filter_lst_by_date"
    GET_TEMPERATURE_STATS = f"{RPC_BASE}/get_temperature_stats"
    INSERT_LST_STATISTICS = f"{RPC_BASE}/insert_lst_statistics"
    GET_LST_DATA_WITH_STATISTICS = f"{RPC_BASE}/get_lst_data_with_statistics"
    GET_VGT_DATA_WITH_STATISTICS = f"{RPC_BASE}/get_vgt_data_with_statistics"

    @staticmethod
    def eq(value) -> str:
        """PostgREST equality filter value."""
        return f"eq.{value}"

    @staticmethod
    def gte(value) -> str:
        return f"gte.{value}"

    @staticmethod
    def lte(value) -> str:
        return f"lte.{value}"


class GeocodingEndpoints:
    """Reverse-geocoding provider paths (relative to each provider's base URL)."""

    NOMINATIM_REVERSE = "/reverse"
    PHOTON_REVERSE = "/reverse"
    BIGDATACLOUD_REVERSE = "/data/reverse-geocode-client"


# API Configuration Constants
class APIConstants:
    """General API configuration constants."""

    # HTTP Headers
    CONTENT_TYPE_JSON = "application/json"
    PREFER_REPRESENTATION = "return=representation"

    # Random location sampling
    COUNT_BATCH_SIZE = 10
    LARGE_OFFSET_BATCH_SIZE = 15
    MULTI_BATCH_SIZE = 20

    # Per-band statistics samples
    ENHANCED_SAMPLE_LIMIT = 20
    LEGACY_SAMPLE_LIMIT = 10

    # Location search radius in degrees
    DEFAULT_LOCATION_RADIUS = 0.1

    # Required fields when creating an LST raster subset
    LST_REQUIRED_FIELDS = (
        "xllcorner",
        "yllcorner",
        "cellsize",
        "nrows",
        "ncols",
        "band",
        "units",
        "scale",
        "latitude",
        "longitude",
        "subset",
    )
