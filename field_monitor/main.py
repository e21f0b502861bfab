"""
FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from field_monitor.config import settings
from field_monitor.api.rate_limit import limiter
from field_monitor.middleware.error_handler import ErrorHandlerMiddleware
from field_monitor.api.v1.routers import forecast, indicators

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
    logger.info(f"Forecast config: horizon={settings.forecast_horizon_days}d, "
                f"bucket_by_location_time={settings.forecast_bucket_by_location_time}, "
                f"max_attempts={settings.max_retry_attempts}")
    logger.info(f"Rate limit: {settings.rate_limit_requests} requests/minute")
    if not settings.openweather_api_key:
        logger.warning("OPENWEATHER_API_KEY is not set; forecast requests will fail")

    yield

    # Shutdown
    from field_monitor.infrastructure.weather_api_client import close_weather_client
    logger.info("Shutting down application...")
    await close_weather_client()
    logger.info("Shutdown complete")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Field Monitoring API for Agricultural Dashboards

    This API backs location widgets with satellite indicator trends and a
    multi-day weather forecast summary.

    ## Features

    - **Indicator Trends**: NDVI, soil moisture and temperature history per location,
      with trend direction/magnitude and good/warning/poor status
    - **Daily Forecast**: OpenWeatherMap 3-hour samples collapsed into daily summaries
    - **Robust Error Handling**: Provider failures surface as a single
      source-unavailable error, never partial results
    - **Rate Limiting**: Protects the API from abuse

    ## Trend Algorithm

    1. Average the last three daily samples
    2. Average the three samples before them
    3. Report the percent change; below 2% the indicator is stable
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Add rate limiter to app state
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

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
app.include_router(indicators.router, prefix="/api/v1")
app.include_router(forecast.router, prefix="/api/v1")


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
        "version": settings.app_version,
    }
