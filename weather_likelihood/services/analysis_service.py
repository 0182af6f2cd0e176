"""Weather analysis via a generative model behind an OpenAI-compatible API.

Builds the prompt from the query and the optional composite forecast, races
the completion against a deadline, and turns the reply into a validated
WeatherAnalysisResponse enriched with the real provider data.
"""

import asyncio
import json
import re
import time
from typing import Optional

import openai
import structlog
from openai import AsyncOpenAI
from pydantic import ValidationError

from weather_likelihood.config import get_settings
from weather_likelihood.exceptions import (
    AnalysisParseError,
    AnalysisProviderError,
    AnalysisStructureError,
    AnalysisTimeoutError,
)
from weather_likelihood.models.request import WeatherQuery
from weather_likelihood.models.response import (
    ActualData,
    VisualCrossingData,
    WeatherAnalysisResponse,
)
from weather_likelihood.models.weather import CompositeForecast
from weather_likelihood.prompts.defaults import ANALYSIS_PROMPT, WEATHER_DATA_CONTEXT

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = ("overall_comfortability_score", "activities")

_FENCE_OPEN = re.compile(r"^```(?:json)?[ \t]*\r?\n?")
_FENCE_CLOSE = re.compile(r"\r?\n?```$")


def strip_code_fences(text: str) -> str:
    """Remove a surrounding Markdown code fence (```json ... ```) if present."""
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = _FENCE_OPEN.sub("", stripped, count=1)
        stripped = _FENCE_CLOSE.sub("", stripped, count=1)
    return stripped.strip()


def build_prompt(query: WeatherQuery, forecast: Optional[CompositeForecast] = None) -> str:
    """Render the analysis prompt, embedding real data when available."""
    context = ""
    if forecast is not None and forecast.target_day is not None:
        stats = forecast.statistics
        context = WEATHER_DATA_CONTEXT.format(
            data_type=forecast.data_type,
            address=forecast.location.address,
            latitude=forecast.location.latitude,
            longitude=forecast.location.longitude,
            day=forecast.target_day,
            years=len(forecast.historical_data.past_years),
            averages=forecast.historical_data.monthly_averages,
            temperature=stats.temperatureStats,
            precipitation=stats.precipitationStats,
            temperature_trend=stats.trends.temperatureTrend.value,
            precipitation_trend=stats.trends.precipitationTrend.value,
        )

    return ANALYSIS_PROMPT.format(
        weather_data_context=context,
        latitude=query.latitude,
        longitude=query.longitude,
        date=query.date,
    )


def parse_analysis(text: str) -> dict:
    """Parse generated text into a JSON object with the required fields.

    Raises:
        AnalysisParseError: text is not a JSON object
        AnalysisStructureError: a required top-level field is missing
    """
    json_text = strip_code_fences(text)
    try:
        parsed = json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.error(
            "analysis_json_parse_error",
            error=str(e),
            response_length=len(json_text),
        )
        raise AnalysisParseError("Generative API returned invalid JSON. Please try again.") from e

    if not isinstance(parsed, dict):
        logger.error("analysis_json_not_object", json_type=type(parsed).__name__)
        raise AnalysisParseError("Generative API returned invalid JSON. Please try again.")

    missing = [field for field in REQUIRED_FIELDS if parsed.get(field) is None]
    if missing:
        logger.error("analysis_invalid_structure", missing_fields=missing)
        raise AnalysisStructureError("Invalid response structure from generative API")

    return parsed


def attach_weather_data(
    analysis: WeatherAnalysisResponse, forecast: Optional[CompositeForecast]
) -> WeatherAnalysisResponse:
    """Append the real provider data block when a target day was fetched."""
    if forecast is None or forecast.target_day is None:
        return analysis

    analysis.visual_crossing_data = VisualCrossingData(
        location=forecast.location,
        actualData=ActualData.from_observation(forecast.target_day),
        historicalAverages=forecast.historical_data.monthly_averages,
        statistics=forecast.statistics,
    )
    return analysis


def _discard_result(task: asyncio.Task) -> None:
    """Retrieve the outcome of an abandoned completion so it is not reported."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.debug("abandoned_completion_failed", error_type=type(error).__name__)


class AnalysisService:
    """Service generating weather analyses from the generative provider."""

    def __init__(self):
        self.settings = get_settings()
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-load the provider client."""
        if self._client is None:
            self._client = AsyncOpenAI(
                api_key=self.settings.gemini_api_key,
                base_url=self.settings.generative_api_base_url,
                max_retries=0,
            )
        return self._client

    async def close(self):
        """Close the provider client."""
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def _generate(self, prompt: str) -> str:
        """Request a JSON completion and return its text."""
        extra_body = None
        if self.settings.generative_top_k > 0:
            extra_body = {"top_k": self.settings.generative_top_k}

        try:
            completion = await self.client.chat.completions.create(
                model=self.settings.generative_model,
                messages=[{"role": "user", "content": prompt}],
                temperature=self.settings.generative_temperature,
                top_p=self.settings.generative_top_p,
                max_tokens=self.settings.generative_max_output_tokens,
                response_format={"type": "json_object"},
                extra_body=extra_body,
            )
        except openai.APIError as e:
            raise AnalysisProviderError(f"Generative API error: {e}") from e

        if not completion.choices:
            raise AnalysisProviderError("Generative API returned no choices")
        return completion.choices[0].message.content or ""

    async def _generate_with_deadline(self, prompt: str) -> str:
        """Race the completion against the analysis timeout.

        When the deadline wins the completion keeps running in the
        background; its result is dropped.
        """
        timeout = self.settings.analysis_timeout_seconds
        task = asyncio.ensure_future(self._generate(prompt))
        done, _ = await asyncio.wait({task}, timeout=timeout)

        if task not in done:
            task.add_done_callback(_discard_result)
            logger.error("analysis_timeout", timeout_seconds=timeout)
            raise AnalysisTimeoutError(
                f"Generative API timeout after {timeout:g} seconds"
            )
        return task.result()

    async def get_weather_analysis(
        self,
        query: WeatherQuery,
        forecast: Optional[CompositeForecast] = None,
    ) -> WeatherAnalysisResponse:
        """Generate the weather analysis for a query.

        Args:
            query: Validated weather query
            forecast: Optional composite forecast embedded in the prompt and
                appended to the result

        Returns:
            Parsed analysis, with ``visual_crossing_data`` when a forecast
            with a target day was supplied

        Raises:
            AnalysisTimeoutError, AnalysisParseError,
            AnalysisStructureError, AnalysisProviderError
        """
        start_time = time.perf_counter()
        logger.info(
            "analysis_request",
            latitude=query.latitude,
            longitude=query.longitude,
            date=query.date,
            model=self.settings.generative_model,
            has_weather_data=forecast is not None,
        )

        prompt = build_prompt(query, forecast)
        text = await self._generate_with_deadline(prompt)
        parsed = parse_analysis(text)

        try:
            analysis = WeatherAnalysisResponse.model_validate(parsed)
        except ValidationError as e:
            logger.error("analysis_invalid_structure", error=str(e))
            raise AnalysisStructureError(
                f"Invalid response structure from generative API: {e.error_count()} invalid field(s)"
            ) from e

        analysis = attach_weather_data(analysis, forecast)

        logger.info(
            "analysis_complete",
            latency_ms=int((time.perf_counter() - start_time) * 1000),
            has_weather_data=analysis.visual_crossing_data is not None,
        )
        return analysis
