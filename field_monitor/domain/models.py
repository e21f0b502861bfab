"""
Domain models for indicator series and weather forecasts.

These models represent the core domain entities and should be independent
of any infrastructure concerns (API clients, databases, etc.).
"""
from datetime import date, datetime
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class TrendDirection(str, Enum):
    """Direction of an indicator's recent movement."""
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class IndicatorStatus(str, Enum):
    """Health classification of an indicator's current value."""
    GOOD = "good"
    WARNING = "warning"
    POOR = "poor"


class Location(BaseModel):
    """A monitored point."""
    latitude: float
    longitude: float


class Sample(BaseModel):
    """One value of a daily series."""
    model_config = ConfigDict(frozen=True)

    timestamp: date
    value: float


class TrendResult(BaseModel):
    """Trend of a series: direction plus absolute percent change."""
    model_config = ConfigDict(frozen=True)

    direction: TrendDirection = TrendDirection.STABLE
    magnitude_percent: float = Field(default=0.0, ge=0)


class IndicatorSeries(BaseModel):
    """Analyzed indicator: current value, bounded history, trend and status."""
    name: str
    unit: str
    current_value: float
    history: List[Sample]
    trend_direction: TrendDirection
    trend_magnitude_percent: float = Field(ge=0)
    status: IndicatorStatus


class WeatherCondition(BaseModel):
    """Weather descriptor attached to a forecast sample."""
    main: str = Field(description="Short primary label, e.g. 'Rain'")
    description: str = Field(default="", description="Human readable description")
    icon: str = Field(default="", description="Provider icon code; 'd'/'n' suffix marks day or night")

    @property
    def is_daytime(self) -> bool:
        return self.icon.endswith("d")


class RawForecastSample(BaseModel):
    """A single sub-daily (3-hour) forecast record."""
    timestamp: datetime
    temperature_c: float
    humidity_percent: float
    wind_speed_mps: float
    precipitation_mm: float = 0.0
    conditions: List[WeatherCondition] = Field(min_length=1)

    @property
    def primary_condition(self) -> WeatherCondition:
        return self.conditions[0]


class ForecastDay(BaseModel):
    """Daily summary built from the sub-daily samples of one calendar day."""
    date: date
    temp_min: float
    temp_max: float
    dominant_condition: str
    condition_description: str
    icon: str
    is_daytime: bool
    precipitation_total_mm: float
    avg_wind_mps: float
    avg_humidity_percent: float


class ForecastResult(BaseModel):
    """Aggregated forecast for the location it was requested for."""
    latitude: float
    longitude: float
    location_name: Optional[str] = None
    utc_offset_seconds: int = 0
    days: List[ForecastDay]
