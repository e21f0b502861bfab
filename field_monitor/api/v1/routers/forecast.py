"""
API router for weather forecast endpoints.
"""
from typing import Annotated
from fastapi import APIRouter, Query, Request

from field_monitor.api.dependencies import MonitoringServiceDep
from field_monitor.api.rate_limit import limiter, DEFAULT_RATE_LIMIT
from field_monitor.api.v1.models.responses import ForecastResponse


router = APIRouter(
    prefix="/forecast",
    tags=["forecast"],
)


@router.get(
    "",
    response_model=ForecastResponse,
    summary="Get the daily forecast for a location",
    description="""
    Return up to seven daily weather summaries for a location.

    This endpoint:
    1. Fetches the 5 day / 3 hour forecast from OpenWeatherMap
    2. Groups samples by the location's calendar day
    3. Computes temperature range, total precipitation, mean wind and humidity
    4. Picks the most frequent condition and a representative description

    The requested coordinates are echoed so clients can drop stale responses.
    """,
    responses={
        200: {
            "description": "Daily forecast summaries",
            "content": {
                "application/json": {
                    "example": {
                        "latitude": 52.52,
                        "longitude": 13.405,
                        "location_name": "Berlin",
                        "utc_offset_seconds": 7200,
                        "day_count": 1,
                        "days": [
                            {
                                "date": "2024-06-07",
                                "temp_min": 14.2,
                                "temp_max": 23.8,
                                "dominant_condition": "Clouds",
                                "condition_description": "scattered clouds",
                                "icon": "03d",
                                "is_daytime": True,
                                "precipitation_total_mm": 0.4,
                                "avg_wind_mps": 3.12,
                                "avg_humidity_percent": 61.5,
                            }
                        ],
                    }
                }
            }
        },
        422: {"description": "Invalid coordinates"},
        429: {"description": "Rate limit exceeded"},
        503: {"description": "Weather provider unavailable (source-unavailable)"},
    }
)
@limiter.limit(DEFAULT_RATE_LIMIT)
async def get_forecast(
    request: Request,
    latitude: Annotated[float, Query(ge=-90, le=90, description="Latitude in degrees")],
    longitude: Annotated[float, Query(ge=-180, le=180, description="Longitude in degrees")],
    monitoring_service: MonitoringServiceDep,
) -> ForecastResponse:
    """
    Get the aggregated daily forecast for a location.

    Provider failures propagate as ForecastSourceUnavailableError and are
    rendered by the error handling middleware.
    """
    # Delegate to service layer (no business logic here)
    result = await monitoring_service.get_forecast(latitude, longitude)

    return ForecastResponse(
        latitude=result.latitude,
        longitude=result.longitude,
        location_name=result.location_name,
        utc_offset_seconds=result.utc_offset_seconds,
        day_count=len(result.days),
        days=result.days,
    )
