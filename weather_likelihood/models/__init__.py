"""Models package exports."""

from weather_likelihood.models.request import WeatherQuery, validate_weather_query
from weather_likelihood.models.response import (
    ActualData,
    ErrorResponse,
    HealthResponse,
    VisualCrossingData,
    WeatherAnalysisResponse,
)
from weather_likelihood.models.weather import (
    CompositeForecast,
    DailyObservation,
    DescriptiveStatistics,
    MonthlyAverages,
    Trend,
)

__all__ = [
    "ActualData",
    "CompositeForecast",
    "DailyObservation",
    "DescriptiveStatistics",
    "ErrorResponse",
    "HealthResponse",
    "MonthlyAverages",
    "Trend",
    "VisualCrossingData",
    "WeatherAnalysisResponse",
    "WeatherQuery",
    "validate_weather_query",
]
