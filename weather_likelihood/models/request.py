"""Weather query model and query-string validation."""

import math
import re
from datetime import date as date_type
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from weather_likelihood.exceptions import QueryValidationError

DATE_PATTERN = re.compile(r"^\d{2}-\d{2}-\d{4}$", re.ASCII)

# Leading numeric prefix, read the way a lenient float parser reads it ("45abc" -> 45)
NUMBER_PREFIX_PATTERN = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")

EXAMPLE_URL = "/api/weather?latitude=10.726563&longitude=76.290312&date=30-09-2026"
EXAMPLE_DATE = "30-09-2026"


class WeatherQuery(BaseModel):
    """Validated weather analysis request.

    Attributes:
        latitude: Latitude as received, e.g. "10.726563"
        longitude: Longitude as received
        date: Target day in DD-MM-YYYY
    """

    model_config = ConfigDict(frozen=True)

    latitude: str
    longitude: str
    date: str = Field(..., pattern=DATE_PATTERN.pattern)

    @property
    def provider_date(self) -> str:
        """Date reformatted to YYYY-MM-DD for the weather data provider."""
        day, month, year = self.date.split("-")
        return f"{year}-{month}-{day}"

    @property
    def target_date(self) -> date_type:
        """Calendar date of the request."""
        return date_type.fromisoformat(self.provider_date)


def parse_coordinate(value: str) -> Optional[float]:
    """Parse the numeric prefix of a coordinate string.

    Returns None when the string does not start with a finite number.
    """
    match = NUMBER_PREFIX_PATTERN.match(value)
    if not match:
        return None
    number = float(match.group(0))
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def validate_weather_query(latitude: Any, longitude: Any, date: Any) -> WeatherQuery:
    """Validate raw query parameters in order, failing on the first violation.

    Raises:
        QueryValidationError: naming the violated constraint
    """
    if not latitude or not longitude or not date:
        raise QueryValidationError(
            "Missing required parameters",
            "Please provide latitude, longitude, and date as query parameters",
            example=EXAMPLE_URL,
        )

    if not all(isinstance(v, str) for v in (latitude, longitude, date)):
        raise QueryValidationError(
            "Invalid parameter types",
            "All parameters must be strings",
        )

    if not DATE_PATTERN.fullmatch(date):
        raise QueryValidationError(
            "Invalid date format",
            "Date must be in DD-MM-YYYY format",
            example=EXAMPLE_DATE,
        )

    lat = parse_coordinate(latitude)
    if lat is None or lat < -90 or lat > 90:
        raise QueryValidationError(
            "Invalid latitude",
            "Latitude must be a number between -90 and 90",
        )

    lon = parse_coordinate(longitude)
    if lon is None or lon < -180 or lon > 180:
        raise QueryValidationError(
            "Invalid longitude",
            "Longitude must be a number between -180 and 180",
        )

    return WeatherQuery(latitude=latitude, longitude=longitude, date=date)
