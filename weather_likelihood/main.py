"""FastAPI application initialization."""

from contextlib import asynccontextmanager

from dotenv import load_dotenv

# Load environment variables before anything else
load_dotenv()

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from weather_likelihood import __version__
from weather_likelihood.api.middleware import CorrelationIdMiddleware, RequestTimeoutMiddleware
from weather_likelihood.api.routes import (
    get_analysis_service,
    get_weather_data_service,
    router,
)
from weather_likelihood.config import get_settings, validate_settings
from weather_likelihood.exceptions import ConfigurationError
from weather_likelihood.services.logging_service import configure_logging, get_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger = get_logger("main")

    # Refuse to start without provider credentials
    try:
        validate_settings(settings)
    except ConfigurationError as e:
        logger.error("configuration_invalid", settings_missing=e.missing, error=e.message)
        raise

    logger.info(
        "application_started",
        environment=settings.environment,
        allowed_origins=settings.allowed_origins_list,
        model=settings.generative_model,
        weather_data_enabled=settings.weather_data_enabled,
    )

    yield

    await get_weather_data_service().close()
    await get_analysis_service().close()
    logger.info("application_shutdown")


settings = get_settings()

app = FastAPI(
    title="Weather Analysis API",
    description="Weather likelihood analysis for a location and date",
    version=__version__,
    lifespan=lifespan,
)


@app.get("/")
async def root() -> dict:
    """Service banner listing the available endpoints."""
    return {
        "message": "Weather Analysis API",
        "version": __version__,
        "endpoints": {
            "health": "/api/health",
            "weather": "/api/weather?latitude={lat}&longitude={lon}&date={DD-MM-YYYY}",
        },
        "documentation": "See README.md for full API documentation",
    }


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Render 404s and other HTTP errors in the API's error format."""
    if exc.status_code == 404:
        content = {
            "error": "Not Found",
            "message": f"Route {request.method} {request.url.path} not found",
        }
    else:
        content = {"error": str(exc.detail), "message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for errors that escape the route handlers."""
    logger = structlog.get_logger()
    logger.error(
        "unhandled_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        error=str(exc),
    )
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal Server Error",
            "message": str(exc) or "Something went wrong",
        },
    )


# Hard deadline over the full request/response cycle; must sit inside CORS
app.add_middleware(RequestTimeoutMiddleware)

# CORS middleware for browser clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Correlation ID middleware for request tracking and observability
app.add_middleware(CorrelationIdMiddleware)

app.include_router(router)
