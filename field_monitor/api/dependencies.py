"""
Dependency injection for FastAPI.
"""
from typing import Annotated
from fastapi import Depends

from field_monitor.infrastructure.weather_api_client import (
    WeatherAPIClient,
    get_weather_client,
)
from field_monitor.services.domain.forecast_aggregator import ForecastAggregator
from field_monitor.services.domain.indicator_analyzer import IndicatorAnalyzer
from field_monitor.services.application.monitoring_service import MonitoringService


def get_indicator_analyzer() -> IndicatorAnalyzer:
    """
    Dependency factory for IndicatorAnalyzer.

    Returns:
        IndicatorAnalyzer instance
    """
    return IndicatorAnalyzer()


def get_forecast_aggregator() -> ForecastAggregator:
    """
    Dependency factory for ForecastAggregator.

    Returns:
        ForecastAggregator instance
    """
    return ForecastAggregator()


def get_monitoring_service(
    api_client: Annotated[WeatherAPIClient, Depends(get_weather_client)],
    analyzer: Annotated[IndicatorAnalyzer, Depends(get_indicator_analyzer)],
    aggregator: Annotated[ForecastAggregator, Depends(get_forecast_aggregator)],
) -> MonitoringService:
    """
    Dependency factory for MonitoringService.

    Args:
        api_client: Weather provider client (injected)
        analyzer: Indicator analyzer (injected)
        aggregator: Forecast aggregator (injected)

    Returns:
        MonitoringService instance
    """
    return MonitoringService(api_client=api_client, analyzer=analyzer, aggregator=aggregator)


# Type aliases for cleaner route signatures
MonitoringServiceDep = Annotated[MonitoringService, Depends(get_monitoring_service)]
