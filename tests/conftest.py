"""
Shared pytest fixtures for all tests.

This module provides common fixtures including:
- Sample forecast entries and samples
- Deterministic indicator analyzer
- FastAPI test client
"""
import pytest
import numpy as np
from datetime import date, datetime, timezone
from fastapi.testclient import TestClient

from field_monitor.main import app
from field_monitor.domain.models import RawForecastSample, WeatherCondition
from field_monitor.services.domain.indicator_analyzer import (
    IndicatorAnalyzer,
    SyntheticIndicatorSource,
)


def make_sample(
    timestamp: datetime,
    temperature: float = 20.0,
    condition: str = "Clear",
    description: str = "clear sky",
    icon: str = "01d",
    humidity: float = 50.0,
    wind: float = 3.0,
    precipitation: float = 0.0,
) -> RawForecastSample:
    """Build a single forecast sample with sensible defaults."""
    return RawForecastSample(
        timestamp=timestamp,
        temperature_c=temperature,
        humidity_percent=humidity,
        wind_speed_mps=wind,
        precipitation_mm=precipitation,
        conditions=[WeatherCondition(main=condition, description=description, icon=icon)],
    )


def make_entry(
    dt: int,
    temp: float = 20.0,
    main: str = "Clear",
    description: str = "clear sky",
    icon: str = "01d",
    humidity: float = 50,
    wind: float = 3.0,
    rain: float = None,
) -> dict:
    """Build a single provider forecast entry as returned by OpenWeatherMap."""
    entry = {
        "dt": dt,
        "main": {"temp": temp, "humidity": humidity},
        "wind": {"speed": wind},
        "weather": [{"main": main, "description": description, "icon": icon}],
    }
    if rain is not None:
        entry["rain"] = {"3h": rain}
    return entry


# ============================================================
# Sample Data Fixtures
# ============================================================

@pytest.fixture
def sample_factory():
    return make_sample


@pytest.fixture
def entry_factory():
    return make_entry


@pytest.fixture
def reference_date() -> date:
    return date(2024, 6, 15)


@pytest.fixture
def two_day_samples() -> list[RawForecastSample]:
    """Samples spanning two UTC days: temps [10, 15, 20] and [5, 8]."""
    return [
        make_sample(datetime(2024, 6, 1, 9, tzinfo=timezone.utc), temperature=10, condition="Rain"),
        make_sample(datetime(2024, 6, 1, 12, tzinfo=timezone.utc), temperature=15, condition="Rain"),
        make_sample(datetime(2024, 6, 1, 15, tzinfo=timezone.utc), temperature=20, condition="Clear"),
        make_sample(datetime(2024, 6, 2, 0, tzinfo=timezone.utc), temperature=5, condition="Clouds"),
        make_sample(datetime(2024, 6, 2, 3, tzinfo=timezone.utc), temperature=8, condition="Clouds"),
    ]


@pytest.fixture
def forecast_payload() -> dict:
    """Provider payload with two 3-hour entries on one UTC day."""
    base = int(datetime(2024, 6, 1, 9, tzinfo=timezone.utc).timestamp())
    return {
        "cod": "200",
        "cnt": 2,
        "list": [
            make_entry(base, temp=12.5, main="Rain", description="light rain", icon="10d", rain=0.6),
            make_entry(base + 3 * 3600, temp=16.0, main="Clouds", description="few clouds", icon="02d"),
        ],
        "city": {"name": "Testville", "timezone": 0},
    }


# ============================================================
# Domain Service Fixtures
# ============================================================

@pytest.fixture
def seeded_analyzer() -> IndicatorAnalyzer:
    """Analyzer whose history noise is pinned."""
    return IndicatorAnalyzer(
        data_source=SyntheticIndicatorSource(rng=np.random.default_rng(42)),
    )


# ============================================================
# FastAPI Test Client Fixtures
# ============================================================

@pytest.fixture
def test_client() -> TestClient:
    """Create a synchronous test client for FastAPI."""
    return TestClient(app)
