"""
API router for satellite indicator endpoints.
"""
from datetime import date
from typing import Annotated, Optional
from fastapi import APIRouter, HTTPException, Query, Request

from field_monitor.api.dependencies import MonitoringServiceDep
from field_monitor.api.rate_limit import limiter, DEFAULT_RATE_LIMIT
from field_monitor.api.v1.models.responses import IndicatorsResponse
from field_monitor.config import settings
from field_monitor.services.domain.indicator_analyzer import SUPPORTED_WINDOWS
from field_monitor.utils.date_helpers import utc_today


router = APIRouter(
    prefix="/indicators",
    tags=["indicators"],
)


@router.get(
    "",
    response_model=IndicatorsResponse,
    summary="Get indicator trends for a location",
    description="""
    Return NDVI, soil moisture and temperature series for a location.

    For each indicator this endpoint:
    1. Derives a baseline from the location (reproducible per coordinate pair)
    2. Synthesizes one sample per day over the requested window
    3. Compares the last three samples with the three before them for the trend
    4. Classifies the current value against the indicator's thresholds
    """,
    responses={
        200: {"description": "Indicator series for the location"},
        422: {"description": "Invalid coordinates or unsupported window"},
        429: {"description": "Rate limit exceeded"},
    }
)
@limiter.limit(DEFAULT_RATE_LIMIT)
async def get_indicators(
    request: Request,
    latitude: Annotated[float, Query(ge=-90, le=90, description="Latitude in degrees")],
    longitude: Annotated[float, Query(ge=-180, le=180, description="Longitude in degrees")],
    monitoring_service: MonitoringServiceDep,
    days: Annotated[int, Query(description="History window: 7, 10, 14 or 30 days")] = settings.default_indicator_window_days,
    reference_date: Annotated[Optional[date], Query(description="Last history day (defaults to today, UTC)")] = None,
    seed: Annotated[Optional[int], Query(ge=0, description="Pins the history noise draw")] = None,
) -> IndicatorsResponse:
    """
    Get analyzed indicator series for a location.

    Args:
        request: Incoming request (used by the rate limiter)
        latitude: Latitude in degrees
        longitude: Longitude in degrees
        monitoring_service: Monitoring service (injected dependency)
        days: History window length
        reference_date: Last history day
        seed: Optional seed for the noise draw

    Returns:
        IndicatorsResponse with one series per indicator

    Raises:
        HTTPException: If the window length is not supported
    """
    if days not in SUPPORTED_WINDOWS:
        raise HTTPException(
            status_code=422,
            detail=f"days must be one of {', '.join(str(d) for d in SUPPORTED_WINDOWS)}"
        )

    reference_date = reference_date or utc_today()
    indicators = monitoring_service.get_indicator_series(
        latitude=latitude,
        longitude=longitude,
        days=days,
        reference_date=reference_date,
        seed=seed,
    )

    return IndicatorsResponse(
        latitude=latitude,
        longitude=longitude,
        days=days,
        reference_date=reference_date,
        indicators=indicators,
    )
