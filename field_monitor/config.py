"""
Application configuration using Pydantic settings.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Weather Provider Configuration
    openweather_base_url: str = Field(
        default="https://api.openweathermap.org",
        description="Base URL for the OpenWeatherMap API"
    )
    openweather_api_key: str = Field(
        default="",
        description="OpenWeatherMap API key (appid)"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for a single forecast request"
    )

    # Retry Configuration
    max_retry_attempts: int = Field(
        default=1,
        description="Total attempts per forecast fetch (1 = single fetch-or-fail)"
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
        default=10,
        description="Maximum wait time in seconds between retries"
    )

    # Forecast Aggregation
    forecast_horizon_days: int = Field(
        default=7,
        description="Maximum number of daily summaries returned"
    )
    forecast_bucket_by_location_time: bool = Field(
        default=True,
        description="Group samples by the location's local calendar day instead of UTC"
    )

    # Indicator Analysis
    default_indicator_window_days: int = Field(
        default=10,
        description="History window used when the caller does not pick one"
    )
    trend_stable_threshold_percent: float = Field(
        default=2.0,
        description="Absolute percent change below which a trend is reported as stable"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    # CORS Configuration
    cors_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins (use specific origins in production)"
    )

    # Rate Limiting
    rate_limit_requests: int = Field(
        default=100,
        description="Maximum requests per minute per client"
    )

    # Application Settings
    app_name: str = Field(
        default="Field Monitor API",
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


# Global settings instance
settings = Settings()
