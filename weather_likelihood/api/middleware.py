"""Middleware for request processing and observability."""

import asyncio
import time
from typing import Optional
from uuid import uuid4

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from weather_likelihood.config import get_settings

logger = structlog.get_logger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to add correlation ID to every request.

    - Generates UUID4 per request (or uses X-Correlation-Id header if present)
    - Stores in request.state.correlation_id
    - Binds to structlog context for all subsequent logging
    - Logs request receipt and completion
    - Adds X-Correlation-Id response header
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process request with correlation ID tracking."""
        correlation_id = request.headers.get("X-Correlation-Id", str(uuid4()))
        request.state.correlation_id = correlation_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

        start_time = time.perf_counter()
        logger.info("request_received", method=request.method, path=request.url.path)

        response = await call_next(request)

        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=int((time.perf_counter() - start_time) * 1000),
        )
        response.headers["X-Correlation-Id"] = correlation_id
        return response


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """Hard deadline over the whole request/response cycle.

    Requests that exceed the deadline get a 504 response. Without an
    explicit ``timeout_seconds`` the deadline is read from settings on
    each request.
    """

    def __init__(self, app, timeout_seconds: Optional[float] = None):
        super().__init__(app)
        self.timeout_seconds = timeout_seconds

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        timeout = self.timeout_seconds or get_settings().request_timeout_seconds
        try:
            return await asyncio.wait_for(call_next(request), timeout=timeout)
        except asyncio.TimeoutError:
            logger.error(
                "request_timeout",
                method=request.method,
                path=request.url.path,
                timeout_seconds=timeout,
            )
            return JSONResponse(
                status_code=504,
                content={
                    "error": "Gateway Timeout",
                    "message": (
                        f"Request exceeded the {timeout:g} second limit. "
                        "Please try again."
                    ),
                },
            )
