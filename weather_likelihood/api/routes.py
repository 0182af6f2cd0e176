"""API route definitions for weather analysis and health endpoints."""

import time
from datetime import datetime, timezone
from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from weather_likelihood import __version__
from weather_likelihood.config import get_settings
from weather_likelihood.exceptions import AnalysisTimeoutError, QueryValidationError
from weather_likelihood.models.request import validate_weather_query
from weather_likelihood.models.response import ErrorResponse, HealthResponse
from weather_likelihood.services.analysis_service import AnalysisService
from weather_likelihood.services.weather_service import WeatherDataService

SERVICE_NAME = "Weather Analysis API"

router = APIRouter(prefix="/api")


@lru_cache
def get_weather_data_service() -> WeatherDataService:
    """Get the shared weather data service (lazy loaded)."""
    return WeatherDataService()


@lru_cache
def get_analysis_service() -> AnalysisService:
    """Get the shared analysis service (lazy loaded)."""
    return AnalysisService()


def _is_timeout(error: Exception) -> bool:
    return isinstance(error, AnalysisTimeoutError) or "timeout" in str(error).lower()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint.

    Returns:
        Status, ISO8601 timestamp, service name and version
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        service=SERVICE_NAME,
        version=__version__,
    )


@router.get("/weather")
async def get_weather_analysis(
    request: Request,
    weather_data_service: WeatherDataService = Depends(get_weather_data_service),
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> JSONResponse:
    """Weather likelihood analysis for a location and date.

    Query parameters: ``latitude``, ``longitude`` and ``date`` (DD-MM-YYYY).

    Returns:
        200 with the analysis, 400 on invalid parameters, 504 when the
        generative provider times out, 500 on any other failure
    """
    logger = structlog.get_logger()
    start_time = time.perf_counter()

    # A repeated parameter arrives as a list and fails the type check
    params = request.query_params
    raw = {}
    for name in ("latitude", "longitude", "date"):
        values = params.getlist(name)
        raw[name] = values if len(values) > 1 else params.get(name)

    try:
        query = validate_weather_query(raw["latitude"], raw["longitude"], raw["date"])
    except QueryValidationError as e:
        logger.warning("weather_query_invalid", error=e.error, detail=e.message)
        return JSONResponse(status_code=400, content=e.to_dict())

    logger.info(
        "weather_analysis_request",
        latitude=query.latitude,
        longitude=query.longitude,
        date=query.date,
    )

    try:
        forecast = None
        if get_settings().weather_data_enabled:
            forecast = await weather_data_service.get_statistical_forecast(query)
        analysis = await analysis_service.get_weather_analysis(query, forecast)
    except Exception as e:
        duration_ms = int((time.perf_counter() - start_time) * 1000)
        logger.error(
            "weather_analysis_failed",
            error_type=type(e).__name__,
            error=str(e),
            duration_ms=duration_ms,
        )
        if _is_timeout(e):
            body = ErrorResponse(
                error="Gateway Timeout",
                message=(
                    "The AI service took too long to respond. "
                    "Please try again with a different date or location."
                ),
                details=str(e),
            )
            return JSONResponse(status_code=504, content=body.model_dump(exclude_none=True))

        body = ErrorResponse(
            error="Internal server error",
            message="Failed to process weather analysis request",
            details=str(e) or "Unknown error",
        )
        return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))

    logger.info(
        "weather_analysis_complete",
        duration_ms=int((time.perf_counter() - start_time) * 1000),
    )
    return JSONResponse(status_code=200, content=analysis.to_response_dict())
