"""
Domain service: Daily forecast aggregation from sub-daily weather samples.

Collapses a flat list of 3-hour samples into per-day summaries:
- Calendar-day bucketing at a fixed UTC offset, first-seen order
- Temperature range, total precipitation, mean wind and humidity
- Dominant condition by label count (first seen wins ties)
- Representative description/icon from the middle sample of the day
"""
from collections import Counter
from datetime import date
from typing import Optional
import logging

from field_monitor.domain.models import ForecastDay, RawForecastSample
from field_monitor.utils.date_helpers import local_calendar_date
from field_monitor.utils.numeric_helpers import mean, round_to
from field_monitor.config import settings

logger = logging.getLogger(__name__)


def group_by_calendar_day(
    samples: list[RawForecastSample],
    utc_offset_seconds: int = 0,
) -> dict[date, list[RawForecastSample]]:
    """
    Bucket samples by calendar date.

    Keys keep first-seen order; samples keep arrival order within a day.

    Args:
        samples: Raw forecast samples
        utc_offset_seconds: Offset of the bucketing timezone from UTC

    Returns:
        Ordered mapping of date to that day's samples
    """
    groups: dict[date, list[RawForecastSample]] = {}
    for sample in samples:
        day = local_calendar_date(sample.timestamp, utc_offset_seconds)
        groups.setdefault(day, []).append(sample)
    return groups


def dominant_condition(samples: list[RawForecastSample]) -> str:
    """
    Most frequent primary condition label.

    Counter keeps insertion order for equal counts, so the label seen first
    wins a tie.
    """
    counts = Counter(s.primary_condition.main for s in samples)
    label, _ = counts.most_common(1)[0]
    return label


def summarize_day(day: date, samples: list[RawForecastSample]) -> ForecastDay:
    """
    Aggregate one day's samples.

    Args:
        day: Calendar date of the group
        samples: Non-empty list of the day's samples in arrival order

    Returns:
        ForecastDay summary
    """
    temps = [s.temperature_c for s in samples]
    representative = samples[len(samples) // 2].primary_condition

    return ForecastDay(
        date=day,
        temp_min=min(temps),
        temp_max=max(temps),
        dominant_condition=dominant_condition(samples),
        condition_description=representative.description,
        icon=representative.icon,
        is_daytime=representative.is_daytime,
        precipitation_total_mm=round_to(sum(s.precipitation_mm or 0.0 for s in samples), 2),
        avg_wind_mps=round_to(mean([s.wind_speed_mps for s in samples]), 2),
        avg_humidity_percent=round_to(mean([s.humidity_percent for s in samples]), 2),
    )


class ForecastAggregator:
    """
    Domain service turning raw forecast samples into daily summaries.

    Deterministic: identical input always yields identical output.
    """

    def __init__(self, horizon_days: Optional[int] = None):
        """
        Initialize the aggregator.

        Args:
            horizon_days: Maximum number of days returned; defaults to settings
        """
        self.horizon_days = settings.forecast_horizon_days if horizon_days is None else horizon_days

    def aggregate_forecast(
        self,
        samples: list[RawForecastSample],
        utc_offset_seconds: int = 0,
    ) -> list[ForecastDay]:
        """
        Aggregate samples into at most horizon_days daily summaries.

        Days are truncated in grouping order, without re-sorting; upstream
        samples arrive chronologically so this order is chronological.

        Args:
            samples: Raw forecast samples sharing one epoch
            utc_offset_seconds: Offset of the bucketing timezone from UTC

        Returns:
            List of ForecastDay
        """
        logger.info(f"Aggregating {len(samples)} forecast samples "
                    f"(utc_offset={utc_offset_seconds}s, horizon={self.horizon_days}d)")

        groups = group_by_calendar_day(samples, utc_offset_seconds)
        if len(groups) > self.horizon_days:
            logger.debug(f"Truncating {len(groups)} days to {self.horizon_days}")

        forecast = []
        for day, day_samples in list(groups.items())[:self.horizon_days]:
            summary = summarize_day(day, day_samples)
            logger.debug(f"  {day.isoformat()}: {len(day_samples)} samples, "
                         f"{summary.temp_min:.1f}..{summary.temp_max:.1f}°C, "
                         f"{summary.dominant_condition}")
            forecast.append(summary)

        return forecast
