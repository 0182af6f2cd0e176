"""Services package exports."""

from weather_likelihood.services.analysis_service import AnalysisService
from weather_likelihood.services.logging_service import configure_logging, get_logger
from weather_likelihood.services.weather_service import WeatherDataService

__all__ = [
    "AnalysisService",
    "WeatherDataService",
    "configure_logging",
    "get_logger",
]
