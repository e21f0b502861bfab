"""
Application service: Orchestration layer for field monitoring operations.
"""
from datetime import date
from typing import List, Optional
import logging

import numpy as np

from field_monitor.config import settings
from field_monitor.domain.models import ForecastResult, IndicatorSeries
from field_monitor.infrastructure.weather_api_client import WeatherAPIClient
from field_monitor.services.domain.forecast_aggregator import ForecastAggregator
from field_monitor.services.domain.indicator_analyzer import (
    IndicatorAnalyzer,
    SyntheticIndicatorSource,
)
from field_monitor.utils.date_helpers import utc_today

logger = logging.getLogger(__name__)


class MonitoringService:
    """
    Application service for indicator and forecast widgets.

    Orchestrates data fetching and domain logic execution.
    No business logic here, only coordination between infrastructure
    and domain layers.
    """

    def __init__(
        self,
        api_client: WeatherAPIClient,
        analyzer: IndicatorAnalyzer,
        aggregator: ForecastAggregator,
    ):
        """
        Initialize the service with dependencies.

        Args:
            api_client: Weather provider client
            analyzer: Indicator analyzer
            aggregator: Forecast aggregator
        """
        self.api_client = api_client
        self.analyzer = analyzer
        self.aggregator = aggregator

    def get_indicator_series(
        self,
        latitude: float,
        longitude: float,
        days: int,
        reference_date: Optional[date] = None,
        seed: Optional[int] = None,
    ) -> List[IndicatorSeries]:
        """
        Produce analyzed indicator series for a location.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            days: History window length
            reference_date: Last history day; defaults to today (UTC)
            seed: Pins the history noise draw when given

        Returns:
            One IndicatorSeries per supported indicator
        """
        analyzer = self.analyzer
        if seed is not None:
            analyzer = IndicatorAnalyzer(
                config=self.analyzer.config,
                data_source=SyntheticIndicatorSource(rng=np.random.default_rng(seed)),
            )

        return analyzer.generate_indicator_series(
            latitude=latitude,
            longitude=longitude,
            days=days,
            reference_date=reference_date or utc_today(),
        )

    async def get_forecast(
        self,
        latitude: float,
        longitude: float,
    ) -> ForecastResult:
        """
        Fetch and aggregate the daily forecast for a location.

        This method orchestrates:
        1. Fetching the 3-hour forecast from the provider
        2. Choosing the day-bucketing offset
        3. Aggregating samples into daily summaries

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            ForecastResult echoing the requested coordinates

        Raises:
            ForecastSourceUnavailableError: If the provider fetch fails
        """
        payload = await self.api_client.fetch_forecast(latitude, longitude)

        utc_offset = payload.utc_offset_seconds if settings.forecast_bucket_by_location_time else 0
        days = self.aggregator.aggregate_forecast(payload.to_samples(), utc_offset_seconds=utc_offset)
        logger.info(f"Built {len(days)}-day forecast for ({latitude:.4f}, {longitude:.4f})")

        return ForecastResult(
            latitude=latitude,
            longitude=longitude,
            location_name=payload.location_name,
            utc_offset_seconds=utc_offset,
            days=days,
        )
