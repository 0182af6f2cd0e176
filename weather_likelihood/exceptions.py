"""Error types raised by the weather analysis services."""

from typing import Optional


class WeatherLikelihoodError(Exception):
    """Base class for all service errors.

    Attributes:
        message: Human-readable description, surfaced as ``details``
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(WeatherLikelihoodError):
    """A required setting is missing at startup."""

    def __init__(self, message: str, missing: Optional[list[str]] = None):
        self.missing = missing or []
        super().__init__(message)


class QueryValidationError(WeatherLikelihoodError):
    """Query parameters failed validation.

    Attributes:
        error: Short category shown to the client (e.g. "Invalid latitude")
        message: What the client should send instead
        example: Optional example of a valid value
    """

    def __init__(self, error: str, message: str, example: Optional[str] = None):
        self.error = error
        self.example = example
        super().__init__(message)

    def to_dict(self) -> dict:
        body = {"error": self.error, "message": self.message}
        if self.example is not None:
            body["example"] = self.example
        return body


class WeatherDataError(WeatherLikelihoodError):
    """The weather data provider could not be reached or rejected the request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class AnalysisError(WeatherLikelihoodError):
    """Base class for generative analysis failures."""


class AnalysisTimeoutError(AnalysisError):
    """The generative provider did not answer before the deadline."""


class AnalysisParseError(AnalysisError):
    """The generative provider returned text that is not a JSON object."""


class AnalysisStructureError(AnalysisError):
    """The generated JSON lacks a required top-level field."""


class AnalysisProviderError(AnalysisError):
    """Transport or authentication failure talking to the generative provider."""
