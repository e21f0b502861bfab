"""
Domain service: Indicator series generation, trend analysis and status classification.

This module turns a location and a lookback window into analyzed indicator series:
- Location-derived baselines (sin(lat * lon) seed)
- Daily history synthesis around each baseline
- Trend from the last three samples against the three before them
- Status classification against per-indicator threshold tables

History comes from an IndicatorDataSource. The bundled synthetic source stands in
for a satellite feed; any other source only has to return one baseline and a
bounded daily history per indicator.
"""
from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Protocol
import logging
import math

import numpy as np

from field_monitor.domain.models import (
    IndicatorSeries,
    IndicatorStatus,
    Location,
    Sample,
    TrendDirection,
    TrendResult,
)
from field_monitor.utils.date_helpers import trailing_days, utc_today
from field_monitor.utils.numeric_helpers import (
    floor_at_zero,
    mean,
    percent_change,
    round_to,
)
from field_monitor.config import settings

logger = logging.getLogger(__name__)

SUPPORTED_WINDOWS: tuple[int, ...] = (7, 10, 14, 30)

TREND_WINDOW = 3
"""Number of samples in each of the recent and older trend windows"""


@dataclass(frozen=True)
class StatusThresholds:
    """
    Inclusive good/warning bands for an indicator.

    A value inside the good band is good, inside the (wider) warning band is
    a warning, anything else is poor.
    """
    good_min: float
    warning_min: float
    good_max: float = math.inf
    warning_max: float = math.inf

    def classify(self, value: float) -> IndicatorStatus:
        if self.good_min <= value <= self.good_max:
            return IndicatorStatus.GOOD
        if self.warning_min <= value <= self.warning_max:
            return IndicatorStatus.WARNING
        return IndicatorStatus.POOR


@dataclass(frozen=True)
class IndicatorDefinition:
    """Static description of a monitored indicator."""
    name: str
    unit: str
    variance: float
    """Width of the uniform noise band applied around the baseline"""

    base_offset: float
    seed_modulus: float
    seed_divisor: float
    display_decimals: int
    thresholds: StatusThresholds

    def baseline_from_seed(self, seed: float) -> float:
        return self.base_offset + (seed % self.seed_modulus) / self.seed_divisor


INDICATORS: dict[str, IndicatorDefinition] = {
    "NDVI": IndicatorDefinition(
        name="NDVI",
        unit="",
        variance=0.1,
        base_offset=0.55,
        seed_modulus=20,
        seed_divisor=100,
        display_decimals=2,
        thresholds=StatusThresholds(good_min=0.6, warning_min=0.4),
    ),
    "Soil Moisture": IndicatorDefinition(
        name="Soil Moisture",
        unit="%",
        variance=5,
        base_offset=30,
        seed_modulus=20,
        seed_divisor=1,
        display_decimals=1,
        thresholds=StatusThresholds(good_min=30, good_max=50, warning_min=20, warning_max=60),
    ),
    "Temperature": IndicatorDefinition(
        name="Temperature",
        unit="°C",
        variance=3,
        base_offset=18,
        seed_modulus=10,
        seed_divisor=1,
        display_decimals=1,
        thresholds=StatusThresholds(good_min=15, good_max=25, warning_min=10, warning_max=30),
    ),
}


def derive_location_seed(latitude: float, longitude: float) -> float:
    """
    Deterministic per-location seed: |sin(latitude * longitude)| * 1000.

    Args:
        latitude: Latitude in degrees
        longitude: Longitude in degrees

    Returns:
        Seed in [0, 1000]
    """
    return abs(math.sin(latitude * longitude)) * 1000


def synthesize_history(
    baseline: float,
    days: int,
    variance: float,
    reference_date: date,
    rng: np.random.Generator,
) -> list[Sample]:
    """
    Generate a noisy daily history around a baseline.

    Each value is max(0, baseline + U(-variance/2, variance/2)) rounded to
    two decimals.

    Args:
        baseline: Center value
        days: Number of samples (one per day, reference date inclusive)
        variance: Width of the noise band
        reference_date: Date of the last sample
        rng: Random generator used for the noise draw

    Returns:
        Samples ordered oldest first
    """
    history = []
    for day in trailing_days(reference_date, days):
        noise = rng.uniform(-variance / 2, variance / 2)
        history.append(Sample(
            timestamp=day,
            value=round_to(floor_at_zero(baseline + noise), 2),
        ))
    return history


def calculate_trend(
    history: list[Sample],
    stable_threshold_percent: float = 2.0,
) -> TrendResult:
    """
    Compare the mean of the last three samples with the three before them.

    Short histories (fewer than 2 points, or no older window) and a zero
    older mean resolve to stable with magnitude 0.

    Args:
        history: Samples ordered oldest first
        stable_threshold_percent: Absolute change below which the trend is stable

    Returns:
        TrendResult with direction and absolute percent change
    """
    if len(history) < 2:
        return TrendResult()

    recent = history[-TREND_WINDOW:]
    older = history[-2 * TREND_WINDOW:-TREND_WINDOW]

    recent_avg = mean([s.value for s in recent])
    older_avg = mean([s.value for s in older])
    change = percent_change(older_avg, recent_avg)

    if change is None or abs(change) < stable_threshold_percent:
        return TrendResult()

    direction = TrendDirection.UP if change > 0 else TrendDirection.DOWN
    return TrendResult(direction=direction, magnitude_percent=abs(change))


def get_indicator_status(name: str, value: float) -> IndicatorStatus:
    """
    Classify a current value against the indicator's threshold table.

    Unknown indicators are reported as good.
    """
    definition = INDICATORS.get(name)
    if definition is None:
        return IndicatorStatus.GOOD
    return definition.thresholds.classify(value)


class IndicatorDataSource(Protocol):
    """Supplies baselines and daily history for indicators."""

    def baseline(self, name: str, location: Location) -> float:
        ...

    def history(
        self,
        name: str,
        baseline: float,
        days: int,
        variance: float,
        reference_date: date,
    ) -> list[Sample]:
        ...


class SyntheticIndicatorSource:
    """
    Location-seeded synthetic data source.

    Baselines are reproducible per coordinate pair; history noise comes from
    the random generator, which can be seeded to pin the draw.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng or np.random.default_rng()

    def baseline(self, name: str, location: Location) -> float:
        seed = derive_location_seed(location.latitude, location.longitude)
        return INDICATORS[name].baseline_from_seed(seed)

    def history(
        self,
        name: str,
        baseline: float,
        days: int,
        variance: float,
        reference_date: date,
    ) -> list[Sample]:
        return synthesize_history(baseline, days, variance, reference_date, self.rng)


@dataclass
class AnalysisConfig:
    """Configuration for indicator analysis."""

    stable_threshold_percent: float = 2.0
    """Absolute percent change below which a trend is reported as stable"""

    indicators: tuple[str, ...] = field(default=("NDVI", "Soil Moisture", "Temperature"))
    """Indicators produced for a location, in output order"""


class IndicatorAnalyzer:
    """
    Domain service producing analyzed indicator series for a location.

    Pure apart from the random draw performed by the data source.
    """

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        data_source: Optional[IndicatorDataSource] = None,
    ):
        """
        Initialize the analyzer.

        Args:
            config: Analysis configuration; defaults come from settings
            data_source: Baseline/history provider; defaults to the synthetic source
        """
        self.config = config or AnalysisConfig(
            stable_threshold_percent=settings.trend_stable_threshold_percent,
        )
        self.data_source = data_source or SyntheticIndicatorSource()

    def analyze_indicator(
        self,
        name: str,
        baseline: float,
        days: int,
        variance: float,
        reference_date: Optional[date] = None,
    ) -> IndicatorSeries:
        """
        Build one analyzed series from a baseline.

        Args:
            name: Indicator name
            baseline: Value for the reference day
            days: History length
            variance: Noise band width
            reference_date: Last history day; defaults to today (UTC)

        Returns:
            IndicatorSeries with history, trend and status
        """
        reference_date = reference_date or utc_today()
        definition = INDICATORS.get(name)
        unit = definition.unit if definition else ""
        decimals = definition.display_decimals if definition else 2

        history = self.data_source.history(name, baseline, days, variance, reference_date)
        trend = calculate_trend(history, self.config.stable_threshold_percent)
        current_value = round_to(baseline, decimals)
        status = get_indicator_status(name, current_value)

        logger.debug(f"{name}: current={current_value}, trend={trend.direction.value} "
                     f"({trend.magnitude_percent:.2f}%), status={status.value}")

        return IndicatorSeries(
            name=name,
            unit=unit,
            current_value=current_value,
            history=history,
            trend_direction=trend.direction,
            trend_magnitude_percent=trend.magnitude_percent,
            status=status,
        )

    def generate_indicator_series(
        self,
        latitude: float,
        longitude: float,
        days: int,
        reference_date: Optional[date] = None,
    ) -> list[IndicatorSeries]:
        """
        Analyze every configured indicator for a location.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees
            days: History window length
            reference_date: Last history day; defaults to today (UTC)

        Returns:
            One IndicatorSeries per configured indicator
        """
        location = Location(latitude=latitude, longitude=longitude)
        reference_date = reference_date or utc_today()
        logger.info(f"Generating {days}-day indicator series for "
                    f"({latitude:.4f}, {longitude:.4f}) ending {reference_date.isoformat()}")

        series = []
        for name in self.config.indicators:
            definition = INDICATORS[name]
            baseline = self.data_source.baseline(name, location)
            series.append(self.analyze_indicator(
                name=name,
                baseline=baseline,
                days=days,
                variance=definition.variance,
                reference_date=reference_date,
            ))

        return series
