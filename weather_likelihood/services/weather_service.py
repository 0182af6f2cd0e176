"""Weather data service for Visual Crossing timeline API integration."""

import time
from datetime import date, timedelta
from typing import Optional

import httpx
import structlog
from pydantic import ValidationError

from weather_likelihood.config import get_settings
from weather_likelihood.exceptions import WeatherDataError
from weather_likelihood.models.request import WeatherQuery
from weather_likelihood.models.weather import (
    OBSERVATION_ELEMENTS,
    CompositeForecast,
    DailyObservation,
    ForecastLocation,
    HistoricalData,
    ProviderResponse,
)
from weather_likelihood.services.statistics_service import (
    calculate_monthly_averages,
    calculate_statistics,
)

logger = structlog.get_logger(__name__)


def _parse_provider_date(value: str) -> date:
    """Parse a YYYY-MM-DD string, raising WeatherDataError on a bad calendar date."""
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise WeatherDataError(f"Invalid date '{value}': {e}") from e


def _same_day_in_year(target: date, year: int) -> date:
    """Same month/day in another year; Feb 29 falls back to Feb 28."""
    try:
        return target.replace(year=year)
    except ValueError:
        return target.replace(year=year, day=28)


def _error_message(response: httpx.Response) -> str:
    """Extract the provider's error message from a failed response."""
    try:
        body = response.json()
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    except ValueError:
        pass
    return response.text.strip() or response.reason_phrase or f"HTTP {response.status_code}"


class WeatherDataService:
    """Service for fetching daily observations and statistical forecasts."""

    def __init__(self):
        self.settings = get_settings()
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.settings.weather_api_timeout)
            )
        return self._client

    async def close(self):
        """Close HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def fetch_weather_data(
        self,
        latitude: str,
        longitude: str,
        start_date: str,
        end_date: Optional[str] = None,
    ) -> ProviderResponse:
        """Fetch daily observations for one day or a date range.

        Args:
            latitude: Latitude as sent by the client
            longitude: Longitude as sent by the client
            start_date: First day, YYYY-MM-DD
            end_date: Optional last day, YYYY-MM-DD

        Returns:
            Parsed provider response

        Raises:
            WeatherDataError: on transport failure, non-2xx status or bad payload
        """
        date_range = f"{start_date}/{end_date}" if end_date else start_date
        url = f"{self.settings.weather_api_base_url}/{latitude},{longitude}/{date_range}"
        params = {
            "key": self.settings.visual_crossing_api_key,
            "unitGroup": "metric",
            "include": "days,current",
            "elements": OBSERVATION_ELEMENTS,
            "contentType": "json",
        }

        client = await self._get_client()
        start_time = time.perf_counter()
        logger.debug("weather_data_fetch", url=url, date_range=date_range)

        try:
            response = await client.get(url, params=params)
        except httpx.HTTPError as e:
            logger.error(
                "weather_api_error",
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise WeatherDataError(f"Visual Crossing API error: {e}") from e

        if response.status_code >= 400:
            message = _error_message(response)
            logger.error(
                "weather_api_status_error",
                url=url,
                status_code=response.status_code,
                error=message,
            )
            raise WeatherDataError(
                f"Visual Crossing API error: {message}",
                status_code=response.status_code,
            )

        try:
            data = ProviderResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            logger.error(
                "weather_parse_error",
                url=url,
                error=str(e),
                error_type=type(e).__name__,
            )
            raise WeatherDataError(f"Visual Crossing API returned an invalid payload: {e}") from e

        logger.info(
            "weather_data_fetched",
            date_range=date_range,
            days=len(data.days),
            latency_ms=int((time.perf_counter() - start_time) * 1000),
        )
        return data

    async def get_historical_data(
        self,
        latitude: str,
        longitude: str,
        target_date: str,
        years: Optional[int] = None,
    ) -> list[DailyObservation]:
        """Fetch the same calendar day for each of the preceding years.

        Requests are issued one after another, year-1 first. A year whose
        request fails is logged and left out; this never raises.

        Args:
            latitude: Latitude as sent by the client
            longitude: Longitude as sent by the client
            target_date: Target day, YYYY-MM-DD
            years: Number of prior years (defaults to settings.historical_years)

        Returns:
            Observations ordered year-1, year-2, ..., with failed years absent
        """
        years = self.settings.historical_years if years is None else years
        target = _parse_provider_date(target_date)
        historical: list[DailyObservation] = []

        for offset in range(1, years + 1):
            historical_date = _same_day_in_year(target, target.year - offset).isoformat()
            try:
                data = await self.fetch_weather_data(latitude, longitude, historical_date)
            except WeatherDataError as e:
                logger.warning(
                    "historical_fetch_failed",
                    date=historical_date,
                    error=e.message,
                )
                continue

            if data.days:
                historical.append(data.days[0])
            else:
                logger.warning("historical_fetch_empty", date=historical_date)

        logger.info(
            "historical_data_collected",
            requested=years,
            received=len(historical),
        )
        return historical

    async def get_statistical_forecast(
        self,
        query: WeatherQuery,
        today: Optional[date] = None,
    ) -> CompositeForecast:
        """Build the composite forecast for a validated query.

        The target day goes under ``current`` when it is today or earlier and
        under ``forecast`` when it lies in the future.

        Args:
            query: Validated weather query
            today: Reference date (defaults to the current local date)

        Raises:
            WeatherDataError: if the target day cannot be fetched
        """
        provider_date = query.provider_date
        target = _parse_provider_date(provider_date)
        is_future = target > (today or date.today())

        logger.info(
            "statistical_forecast_request",
            latitude=query.latitude,
            longitude=query.longitude,
            date=provider_date,
            is_future=is_future,
        )

        main_data = await self.fetch_weather_data(
            query.latitude, query.longitude, provider_date
        )
        target_day = main_data.days[0] if main_data.days else None

        historical = await self.get_historical_data(
            query.latitude, query.longitude, provider_date
        )

        return CompositeForecast(
            date=query.date,
            location=ForecastLocation(
                latitude=main_data.latitude,
                longitude=main_data.longitude,
                address=main_data.resolvedAddress,
            ),
            current=target_day if not is_future else None,
            forecast=target_day if is_future else None,
            historical_data=HistoricalData(
                past_years=historical,
                monthly_averages=calculate_monthly_averages(historical),
            ),
            statistics=calculate_statistics(historical),
        )

    async def get_extended_forecast(
        self,
        latitude: str,
        longitude: str,
        start_date: str,
        days: int = 15,
    ) -> list[DailyObservation]:
        """Fetch consecutive days starting at a DD-MM-YYYY date.

        Raises:
            WeatherDataError: if the range cannot be fetched
        """
        day, month, year = start_date.split("-")
        start = _parse_provider_date(f"{year}-{month}-{day}")
        end = start + timedelta(days=max(days, 1) - 1)

        data = await self.fetch_weather_data(
            latitude, longitude, start.isoformat(), end.isoformat()
        )
        return data.days
