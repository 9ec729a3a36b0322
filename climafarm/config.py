"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # PostgREST Configuration
    postgrest_url: str = Field(
        default="http://localhost:3001",
        description="Base URL of the PostgREST service in front of the LST database"
    )
    postgrest_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for PostgREST requests"
    )

    # Retry Configuration
    max_retry_attempts: int = Field(
        default=3,
        description="Maximum number of retry attempts for PostgREST calls"
    )
    retry_backoff_multiplier: int = Field(
        default=1,
        description="Multiplier for exponential backoff"
    )
    retry_min_wait: int = Field(
        default=1,
        description="Minimum wait time in seconds between retries"
    )
    retry_max_wait: int = Field(
        default=4,
        description="Maximum wait time in seconds between retries"
    )

    # Reverse Geocoding
    nominatim_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Base URL of the Nominatim reverse geocoder"
    )
    photon_url: str = Field(
        default="https://photon.komoot.io",
        description="Base URL of the Photon reverse geocoder"
    )
    bigdatacloud_url: str = Field(
        default="https://api.bigdatacloud.net",
        description="Base URL of the BigDataCloud reverse geocoder"
    )
    geocoding_timeout: float = Field(
        default=5.0,
        description="Timeout in seconds for a single geocoding request"
    )
    geocoding_retries: int = Field(
        default=1,
        description="Number of retries per geocoding provider"
    )
    geocode_stagger_seconds: float = Field(
        default=0.2,
        description="Pause between successive geocoding calls in batch resolution"
    )
    geocoding_user_agent: str = Field(
        default="climafarm/1.0 (educational climate farming game)",
        description="User-Agent sent to geocoding providers"
    )

    # Classification
    nearest_city_radius_km: float = Field(
        default=500.0,
        description="Maximum distance for a coordinate to be named after a major city"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["http://localhost:4200"],
        description="Allowed CORS origins"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )
    strict_rate_limit_requests: int = Field(
        default=10,
        description="Maximum data modification requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="NASA LST Climate Farming API",
        description="Application name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    debug: bool = Field(
        default=False,
        description="Debug mode"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
