"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from climafarm.config import settings
from climafarm.middleware.error_handler import ErrorHandlerMiddleware
from climafarm.middleware.rate_limiter import limiter, rate_limit_exceeded_handler
from climafarm.api.v1.routers import climate, game, lst

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events using the modern FastAPI pattern.
    """
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(f"PostgREST: {settings.postgrest_url}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute, "
                f"{settings.strict_rate_limit_requests} writes/minute")

    yield

    # Shutdown
    from climafarm.infrastructure.geocoding_client import get_geocoding_client
    from climafarm.infrastructure.postgrest_client import get_postgrest_client
    logger.info("Shutting down application...")
    await get_postgrest_client().close()
    await get_geocoding_client().close()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Backend for an educational climate farming game.

    ## Features

    - **LST data API**: Proxies MODIS Land Surface Temperature rasters and
      statistics stored behind PostgREST
    - **Random locations**: Picks a location from the statistics table and
      derives day/night temperatures, climate zone and soil type
    - **Place naming**: Nearest major city, then Nominatim, Photon and
      BigDataCloud in turn, then an offline regional name
    - **Game content**: Crops, tutorial areas and generated quiz questions
    - **Rate Limiting**: Protects the API and the data store from abuse
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    debug=settings.debug,
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# Add CORS middleware with configurable origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add global error handling middleware
app.add_middleware(ErrorHandlerMiddleware)

# Include routers
app.include_router(lst.router, prefix="/api")
app.include_router(climate.router, prefix="/api")
app.include_router(game.router, prefix="/api")


@app.get("/", tags=["health"])
async def root():
    """
    Root endpoint for health check.

    Returns:
        Status message
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
    }


@app.get("/health", tags=["health"])
async def health_check():
    """
    Health check endpoint.

    Returns:
        Health status
    """
    return {
        "status": "healthy",
        "service": settings.app_name,
    }
