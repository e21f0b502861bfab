"""
Integration tests for API endpoints.

Tests the full HTTP request/response cycle with mocked external dependencies.
"""
import pytest
from datetime import date
from unittest.mock import AsyncMock, MagicMock
from fastapi.testclient import TestClient

from field_monitor.main import app
from field_monitor.api.dependencies import get_monitoring_service
from field_monitor.domain.models import ForecastDay, ForecastResult
from field_monitor.infrastructure.weather_api_client import (
    ForecastSourceUnavailableError,
    WeatherAPIClient,
    get_weather_client,
)
from field_monitor.services.application.monitoring_service import MonitoringService
from field_monitor.services.domain.forecast_aggregator import ForecastAggregator
from field_monitor.services.domain.indicator_analyzer import IndicatorAnalyzer


@pytest.fixture
def real_service_override():
    """Use the real analyzer and aggregator with a mocked weather client."""
    weather_client = AsyncMock(spec=WeatherAPIClient)
    service = MonitoringService(
        api_client=weather_client,
        analyzer=IndicatorAnalyzer(),
        aggregator=ForecastAggregator(),
    )
    app.dependency_overrides[get_monitoring_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.fixture
def mock_service_override():
    """Replace the monitoring service with a mock."""
    service = MagicMock(spec=MonitoringService)
    service.get_forecast = AsyncMock()
    app.dependency_overrides[get_monitoring_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


# ============================================================
# Health Check Tests
# ============================================================

class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_root_endpoint(self, test_client):
        """Root endpoint should return healthy status."""
        response = test_client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "service" in data
        assert "version" in data

    def test_health_endpoint(self, test_client):
        """Health endpoint should return healthy status."""
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "service" in data
        assert "version" in data

    def test_restart_builds_fresh_weather_client(self):
        """A second app startup should not reuse the client closed at shutdown."""
        import field_monitor.infrastructure.weather_api_client as module

        with TestClient(app):
            first = get_weather_client()
        assert module._weather_client is None
        assert first.client.is_closed

        with TestClient(app):
            second = get_weather_client()
            assert second is not first
            assert not second.client.is_closed


# ============================================================
# Indicators Endpoint Tests
# ============================================================

class TestIndicatorsEndpoint:
    """Tests for the indicators endpoint."""

    def test_response_structure(self, test_client, real_service_override):
        """Should return three analyzed indicators for the window."""
        response = test_client.get(
            "/api/v1/indicators",
            params={"latitude": 0.0, "longitude": 12.0, "days": 14, "reference_date": "2024-06-15"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["latitude"] == 0.0
        assert data["longitude"] == 12.0
        assert data["days"] == 14
        assert data["reference_date"] == "2024-06-15"
        assert [i["name"] for i in data["indicators"]] == ["NDVI", "Soil Moisture", "Temperature"]

        ndvi = data["indicators"][0]
        assert ndvi["current_value"] == 0.55
        assert ndvi["status"] == "warning"
        assert ndvi["trend_direction"] in ("up", "down", "stable")
        assert len(ndvi["history"]) == 14
        assert ndvi["history"][0]["timestamp"] == "2024-06-02"
        assert ndvi["history"][-1]["timestamp"] == "2024-06-15"

    def test_default_window(self, test_client, real_service_override):
        """Without days the default ten-day window should be used."""
        response = test_client.get("/api/v1/indicators", params={"latitude": 10, "longitude": 20})

        assert response.status_code == 200
        assert response.json()["days"] == 10
        assert all(len(i["history"]) == 10 for i in response.json()["indicators"])

    def test_seed_is_reproducible(self, test_client, real_service_override):
        """Same seed should return the same histories."""
        params = {"latitude": 10, "longitude": 20, "days": 7, "seed": 99, "reference_date": "2024-01-10"}

        first = test_client.get("/api/v1/indicators", params=params).json()
        second = test_client.get("/api/v1/indicators", params=params).json()

        assert first == second

    @pytest.mark.parametrize("days", [0, 5, 31])
    def test_unsupported_window(self, test_client, real_service_override, days):
        """Windows other than 7, 10, 14 and 30 should be rejected."""
        response = test_client.get(
            "/api/v1/indicators", params={"latitude": 10, "longitude": 20, "days": days}
        )

        assert response.status_code == 422

    @pytest.mark.parametrize("params", [
        {"latitude": 91, "longitude": 0},
        {"latitude": 0, "longitude": -181},
        {"latitude": "north", "longitude": 0},
        {"longitude": 0},
    ])
    def test_invalid_coordinates(self, test_client, real_service_override, params):
        """Out-of-range or missing coordinates should be rejected."""
        response = test_client.get("/api/v1/indicators", params=params)

        assert response.status_code == 422


# ============================================================
# Forecast Endpoint Tests
# ============================================================

class TestForecastEndpoint:
    """Tests for the forecast endpoint."""

    def test_response_structure(self, test_client, mock_service_override):
        """Should return daily summaries with the echoed location."""
        mock_service_override.get_forecast.return_value = ForecastResult(
            latitude=52.52,
            longitude=13.405,
            location_name="Berlin",
            utc_offset_seconds=7200,
            days=[
                ForecastDay(
                    date=date(2024, 6, 7),
                    temp_min=14.2,
                    temp_max=23.8,
                    dominant_condition="Clouds",
                    condition_description="scattered clouds",
                    icon="03d",
                    is_daytime=True,
                    precipitation_total_mm=0.4,
                    avg_wind_mps=3.12,
                    avg_humidity_percent=61.5,
                )
            ],
        )

        response = test_client.get("/api/v1/forecast", params={"latitude": 52.52, "longitude": 13.405})

        assert response.status_code == 200
        data = response.json()
        assert data["latitude"] == 52.52
        assert data["longitude"] == 13.405
        assert data["location_name"] == "Berlin"
        assert data["day_count"] == 1
        day = data["days"][0]
        assert day["date"] == "2024-06-07"
        assert day["temp_min"] == 14.2
        assert day["dominant_condition"] == "Clouds"
        assert day["icon"] == "03d"
        mock_service_override.get_forecast.assert_awaited_once_with(52.52, 13.405)

    def test_source_unavailable(self, test_client, mock_service_override):
        """Provider failures should return 503 source-unavailable without days."""
        mock_service_override.get_forecast.side_effect = ForecastSourceUnavailableError(
            "Failed to fetch weather data: 500"
        )

        response = test_client.get("/api/v1/forecast", params={"latitude": 1, "longitude": 2})

        assert response.status_code == 503
        data = response.json()
        assert data["error"] == "source-unavailable"
        assert "days" not in data

    def test_invalid_coordinates(self, test_client, mock_service_override):
        """Out-of-range coordinates should be rejected before fetching."""
        response = test_client.get("/api/v1/forecast", params={"latitude": -95, "longitude": 2})

        assert response.status_code == 422
        mock_service_override.get_forecast.assert_not_called()


# ============================================================
# Response Format Tests
# ============================================================

class TestResponseFormats:
    """Tests for API response formats."""

    def test_openapi_schema_available(self, test_client):
        """OpenAPI schema should list both endpoints."""
        response = test_client.get("/openapi.json")

        assert response.status_code == 200
        data = response.json()
        assert "/api/v1/indicators" in data["paths"]
        assert "/api/v1/forecast" in data["paths"]

    def test_docs_endpoint_available(self, test_client):
        """Swagger docs should be available."""
        response = test_client.get("/docs")

        assert response.status_code == 200

    def test_rate_limit_documented_in_openapi(self, test_client):
        """429 should be documented for rate-limited routes."""
        data = test_client.get("/openapi.json").json()

        assert "429" in data["paths"]["/api/v1/indicators"]["get"]["responses"]
        assert "429" in data["paths"]["/api/v1/forecast"]["get"]["responses"]
        assert "503" in data["paths"]["/api/v1/forecast"]["get"]["responses"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
