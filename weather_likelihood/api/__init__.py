"""API package exports."""

from weather_likelihood.api.middleware import CorrelationIdMiddleware, RequestTimeoutMiddleware
from weather_likelihood.api.routes import router

__all__ = ["router", "CorrelationIdMiddleware", "RequestTimeoutMiddleware"]
