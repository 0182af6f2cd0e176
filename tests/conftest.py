"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator, Callable
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# Set test environment variables before importing app
os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key")
os.environ.setdefault("VISUAL_CROSSING_API_KEY", "test-vc-key")

from weather_likelihood.config import Settings
from weather_likelihood.models.weather import (
    CompositeForecast,
    DailyObservation,
    ForecastLocation,
    HistoricalData,
)
from weather_likelihood.services.statistics_service import (
    calculate_monthly_averages,
    calculate_statistics,
)


@pytest.fixture
def test_settings() -> Settings:
    """Real settings object with test credentials and short timeouts."""
    return Settings(
        gemini_api_key="test-gemini-key",
        visual_crossing_api_key="test-vc-key",
        weather_api_base_url="https://weather.test/timeline",
        analysis_timeout_seconds=0.2,
        historical_years=5,
    )


@pytest.fixture
def make_observation() -> Callable[..., DailyObservation]:
    """Factory for daily observations with sensible defaults."""

    def _make(**overrides) -> DailyObservation:
        values = {
            "datetime": "2025-09-30",
            "temp": 27.4,
            "tempmax": 31.2,
            "tempmin": 24.1,
            "feelslike": 30.5,
            "humidity": 78.3,
            "precip": 4.2,
            "precipprob": 65.0,
            "snow": 0.0,
            "snowdepth": 0.0,
            "windspeed": 14.8,
            "windgust": 27.0,
            "winddir": 240.0,
            "pressure": 1008.6,
            "cloudcover": 62.5,
            "visibility": 9.8,
            "uvindex": 7.0,
            "conditions": "Rain, Partially cloudy",
            "description": "Partly cloudy throughout the day with afternoon rain.",
            "icon": "rain",
        }
        values.update(overrides)
        return DailyObservation(**values)

    return _make


@pytest.fixture
def provider_payload() -> Callable[..., dict]:
    """Factory for Visual Crossing timeline response bodies."""

    def _payload(days: list[dict] | None = None) -> dict:
        return {
            "queryCost": 1,
            "latitude": 10.726563,
            "longitude": 76.290312,
            "resolvedAddress": "10.726563,76.290312",
            "address": "10.726563,76.290312",
            "timezone": "Asia/Kolkata",
            "tzoffset": 5.5,
            "days": days if days is not None else [{"datetime": "2026-09-30", "temp": 27.0, "precip": 3.1}],
        }

    return _payload


@pytest.fixture
def sample_forecast(make_observation) -> CompositeForecast:
    """Composite forecast with a current-day observation and full history."""
    history = [
        make_observation(datetime=f"{2025 - i}-09-30", temp=26.0 + i, precip=float(i))
        for i in range(5)
    ]
    return CompositeForecast(
        date="30-09-2026",
        location=ForecastLocation(
            latitude=10.726563, longitude=76.290312, address="Thrissur, Kerala, India"
        ),
        current=make_observation(datetime="2026-09-30"),
        forecast=None,
        historical_data=HistoricalData(
            past_years=history,
            monthly_averages=calculate_monthly_averages(history),
        ),
        statistics=calculate_statistics(history),
    )


@pytest.fixture
def analysis_payload() -> dict:
    """A well-formed generated analysis document."""
    graph = {
        "description": "Quarterly values",
        "year_minus_5": [25.1, 28.4, 26.2, 25.9],
        "year_minus_4": [25.3, 28.1, 26.0, 26.1],
        "year_minus_3": [25.0, 28.9, 26.4, 25.7],
        "year_minus_2": [25.6, 28.7, 26.8, 26.3],
        "year_minus_1": [25.9, 29.0, 26.5, 26.0],
    }
    return {
        "request_parameters": {
            "latitude": "10.726563",
            "longitude": "76.290312",
            "date": "30-09-2026",
        },
        "overall_comfortability_score": {"score": 62, "summary": "Warm and humid"},
        "activities": {
            "suggestions": ["Visit an indoor museum in the afternoon."],
            "warnings": ["High UV index around midday."],
            "reminders": ["Carry an umbrella."],
        },
        "weather_conditions": {
            "general_conditions": {
                "is_very_hot_percentage": 35,
                "is_very_cold_percentage": 0,
                "is_very_windy_percentage": 10,
                "is_very_wet_percentage": 55,
            },
            "specific_variables": {
                "temperature_celsius": 27.4,
                "rainfall_mm": 4.2,
                "windspeed_kph": 14.8,
                "dust_concentration_ug_m3": 18,
                "snowfall_cm": 0,
                "snow_depth_cm": 0,
                "cloud_cover_percent": 62.5,
                "air_quality_index": 48,
                "humidity_percent": 78.3,
            },
        },
        "statistical_analysis": {
            "threshold_probabilities": [
                {"description": "Chance of temperature exceeding 32°C", "percentage": 12}
            ],
            "long_term_mean_comparison": [
                {"variable": "temperature_celsius", "mean_value": 28.0, "deviation_from_mean": -0.6}
            ],
            "trend_estimation": {
                "heavy_rain_trend": "Stable",
                "high_temperature_trend": "Increasing",
            },
        },
        "temperature_graph_data": graph,
        "rain_graph_data": graph,
        "snow_graph_data": graph,
    }


@pytest.fixture
def mock_weather_data_service(sample_forecast) -> MagicMock:
    """Weather data service returning the sample forecast."""
    service = MagicMock()
    service.get_statistical_forecast = AsyncMock(return_value=sample_forecast)
    service.close = AsyncMock()
    return service


@pytest.fixture
def mock_analysis_service() -> MagicMock:
    """Analysis service whose result is configured per test."""
    service = MagicMock()
    service.get_weather_analysis = AsyncMock()
    service.close = AsyncMock()
    return service


@pytest.fixture
async def async_client(
    mock_weather_data_service, mock_analysis_service
) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client against the app with provider services mocked."""
    from weather_likelihood.api.routes import get_analysis_service, get_weather_data_service
    from weather_likelihood.main import app

    app.dependency_overrides[get_weather_data_service] = lambda: mock_weather_data_service
    app.dependency_overrides[get_analysis_service] = lambda: mock_analysis_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
