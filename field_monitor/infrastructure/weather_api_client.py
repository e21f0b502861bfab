"""
Infrastructure layer: OpenWeatherMap forecast client with optional retry logic.
"""
from typing import List, Dict, Any, Optional
import logging

from pydantic import BaseModel, Field, ValidationError, field_validator
import httpx
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from field_monitor.config import settings
from field_monitor.domain.models import RawForecastSample, WeatherCondition
from field_monitor.infrastructure.api_constants import APIConstants, OpenWeatherEndpoints
from field_monitor.utils.date_helpers import from_unix_seconds

logger = logging.getLogger(__name__)


# Pydantic models for API responses
class MainReadings(BaseModel):
    """Temperature and humidity block of a forecast entry."""
    temp: float = Field(description="Temperature in °C (metric units)")
    humidity: float = Field(description="Relative humidity in %")


class WindReadings(BaseModel):
    """Wind block of a forecast entry."""
    speed: float = Field(description="Wind speed in m/s (metric units)")


class PrecipitationWindow(BaseModel):
    """Precipitation accumulated over the 3-hour window."""
    three_hours: float = Field(default=0.0, alias="3h", description="Volume in mm")


class WeatherDescriptor(BaseModel):
    """Condition descriptor of a forecast entry."""
    main: str
    description: str = ""
    icon: str = ""


class ForecastEntry(BaseModel):
    """Single 3-hour entry from the forecast endpoint."""
    dt: int = Field(description="Unix timestamp (seconds, UTC)")
    main: MainReadings
    wind: WindReadings
    rain: Optional[PrecipitationWindow] = None
    weather: List[WeatherDescriptor] = Field(min_length=1)

    @field_validator("dt")
    @classmethod
    def dt_within_calendar_range(cls, value: int) -> int:
        try:
            from_unix_seconds(value)
        except (ValueError, OverflowError, OSError) as e:
            raise ValueError(f"timestamp {value} is out of range: {e}")
        return value

    def to_sample(self) -> RawForecastSample:
        """Convert to the domain sample model."""
        return RawForecastSample(
            timestamp=from_unix_seconds(self.dt),
            temperature_c=self.main.temp,
            humidity_percent=self.main.humidity,
            wind_speed_mps=self.wind.speed,
            precipitation_mm=self.rain.three_hours if self.rain else 0.0,
            conditions=[
                WeatherCondition(main=w.main, description=w.description, icon=w.icon)
                for w in self.weather
            ],
        )


class CityInfo(BaseModel):
    """Location metadata returned with the forecast."""
    name: Optional[str] = None
    timezone: Optional[int] = Field(
        default=0, gt=-86400, lt=86400, description="Shift in seconds from UTC; null means UTC"
    )


class ForecastPayload(BaseModel):
    """Response from the forecast endpoint."""
    entries: List[ForecastEntry] = Field(alias="list")
    city: Optional[CityInfo] = None

    @property
    def utc_offset_seconds(self) -> int:
        return (self.city.timezone or 0) if self.city else 0

    @property
    def location_name(self) -> Optional[str]:
        return self.city.name if self.city else None

    def to_samples(self) -> List[RawForecastSample]:
        return [entry.to_sample() for entry in self.entries]


class ExternalAPIError(Exception):
    """Custom exception for external API errors."""

    error_code = "external-api-error"

    def __init__(self, message: str, status_code: int = 502):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ForecastSourceUnavailableError(ExternalAPIError):
    """The weather provider did not return a usable forecast payload."""

    error_code = "source-unavailable"

    def __init__(self, message: str):
        super().__init__(message, status_code=503)


class WeatherAPIClient:
    """
    Client for the OpenWeatherMap 5 day / 3 hour forecast.

    Performs a single fetch-or-fail by default; retries with exponential
    backoff on 5xx and transport errors when max_retry_attempts > 1.
    """

    def __init__(self):
        """Initialize the API client with configuration."""
        self.base_url = settings.openweather_base_url
        self.api_key = settings.openweather_api_key
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"accept": APIConstants.CONTENT_TYPE_JSON},
            timeout=settings.request_timeout_seconds,
        )

    async def __aenter__(self) -> "WeatherAPIClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def close(self):
        """Close the HTTP client."""
        await self.client.aclose()

    @retry(
        stop=stop_after_attempt(settings.max_retry_attempts),
        wait=wait_exponential(
            multiplier=settings.retry_backoff_multiplier,
            min=settings.retry_min_wait,
            max=settings.retry_max_wait,
        ),
        retry=retry_if_exception_type((httpx.HTTPStatusError, httpx.RequestError)),
        reraise=True,
    )
    async def _make_request(
        self,
        method: str,
        endpoint: str,
        **kwargs
    ) -> Dict[str, Any]:
        """
        Make an HTTP request, retrying server and transport errors.

        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint path
            **kwargs: Additional arguments for the request

        Returns:
            Response data as dictionary

        Raises:
            ExternalAPIError: On client errors (4xx) or a non-JSON body
            httpx.HTTPStatusError: On server errors (5xx) once retries are exhausted
            httpx.RequestError: On transport errors once retries are exhausted
        """
        response = await self.client.request(method, endpoint, **kwargs)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            # Retry on server errors (5xx)
            if e.response.status_code >= 500:
                raise
            # Don't retry on client errors (4xx)
            raise ExternalAPIError(
                f"API request failed: {e.response.status_code} - {e.response.text}",
                status_code=e.response.status_code,
            )
        try:
            return response.json()
        except ValueError:
            raise ExternalAPIError("API response is not valid JSON")

    async def fetch_forecast(self, latitude: float, longitude: float) -> ForecastPayload:
        """
        Fetch the 3-hour forecast for a location.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            Parsed ForecastPayload

        Raises:
            ForecastSourceUnavailableError: If the fetch fails or the payload
                has no usable entry list
        """
        logger.info(f"Fetching forecast for ({latitude:.4f}, {longitude:.4f})")
        try:
            data = await self._make_request(
                "GET",
                OpenWeatherEndpoints.FORECAST,
                params=OpenWeatherEndpoints.forecast_params(latitude, longitude, self.api_key),
            )
        except ExternalAPIError as e:
            logger.error(f"Forecast request rejected: {e.message}")
            raise ForecastSourceUnavailableError(f"Failed to fetch weather data: {e.message}")
        except httpx.HTTPStatusError as e:
            logger.error(f"Forecast provider error: {e.response.status_code}")
            raise ForecastSourceUnavailableError(
                f"Failed to fetch weather data: {e.response.status_code}"
            )
        except httpx.RequestError as e:
            logger.error(f"Forecast request error: {e}")
            raise ForecastSourceUnavailableError(f"Failed to fetch weather data: {str(e)}")

        try:
            payload = ForecastPayload.model_validate(data)
        except ValidationError as e:
            logger.error(f"Malformed forecast payload: {e.error_count()} validation errors")
            raise ForecastSourceUnavailableError("Malformed forecast payload")

        logger.info(f"Received {len(payload.entries)} forecast entries")
        return payload


# Singleton instance
_weather_client: Optional[WeatherAPIClient] = None


def get_weather_client() -> WeatherAPIClient:
    """
    Get or create the singleton weather client instance.

    Returns:
        WeatherAPIClient instance
    """
    global _weather_client
    if _weather_client is None:
        _weather_client = WeatherAPIClient()
    return _weather_client


async def close_weather_client() -> None:
    """Close the singleton client and drop it so the next call builds a fresh one."""
    global _weather_client
    if _weather_client is not None:
        await _weather_client.close()
        _weather_client = None
