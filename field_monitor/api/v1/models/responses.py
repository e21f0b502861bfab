"""
API response models using Pydantic.
"""
from datetime import date
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from field_monitor.domain.models import ForecastDay, IndicatorSeries


class IndicatorsResponse(BaseModel):
    """Response model for the indicators endpoint."""
    latitude: float = Field(description="Requested latitude in degrees")
    longitude: float = Field(description="Requested longitude in degrees")
    days: int = Field(description="History window length in days")
    reference_date: date = Field(description="Last day of every history")
    indicators: List[IndicatorSeries] = Field(
        description="One analyzed series per supported indicator"
    )

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "latitude": 52.52,
            "longitude": 13.405,
            "days": 7,
            "reference_date": "2024-06-07",
            "indicators": [
                {
                    "name": "NDVI",
                    "unit": "",
                    "current_value": 0.64,
                    "history": [
                        {"timestamp": "2024-06-01", "value": 0.61},
                        {"timestamp": "2024-06-02", "value": 0.66},
                    ],
                    "trend_direction": "up",
                    "trend_magnitude_percent": 3.4,
                    "status": "good",
                }
            ],
        }
    })


class ForecastResponse(BaseModel):
    """Response model for the forecast endpoint."""
    latitude: float = Field(description="Requested latitude in degrees")
    longitude: float = Field(description="Requested longitude in degrees")
    location_name: Optional[str] = Field(
        default=None,
        description="Place name reported by the weather provider"
    )
    utc_offset_seconds: int = Field(
        description="Offset used to bucket samples into calendar days"
    )
    day_count: int = Field(description="Number of daily summaries")
    days: List[ForecastDay] = Field(description="Daily summaries in chronological order")

    model_config = ConfigDict(json_schema_extra={
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
    })
