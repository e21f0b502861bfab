"""
API endpoint constants and configuration.

This module contains all external API endpoint paths and related constants.
"""


# OpenWeatherMap API Endpoints
class OpenWeatherEndpoints:
    """OpenWeatherMap API endpoint paths."""

    DATA_BASE = "/data/2.5"

    # 5 day / 3 hour forecast
    FORECAST = f"{DATA_BASE}/forecast"

    @classmethod
    def forecast_params(cls, latitude: float, longitude: float, api_key: str) -> dict:
        """
        Query parameters for the forecast endpoint.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            api_key: Provider API key

        Returns:
            Query parameter dictionary
        """
        return {
            "lat": latitude,
            "lon": longitude,
            "units": APIConstants.UNITS_METRIC,
            "appid": api_key,
        }


# API Configuration Constants
class APIConstants:
    """General API configuration constants."""

    # HTTP Headers
    CONTENT_TYPE_JSON = "application/json"

    # Units (Celsius, m/s)
    UNITS_METRIC = "metric"
