"""Response models for the weather analysis API.

The generated analysis is parsed leniently: only the comfort score and the
activities block are required, every other field is nullable, and keys the
generator adds beyond the documented schema are passed through unchanged.
"""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from weather_likelihood.models.weather import (
    DailyObservation,
    DescriptiveStatistics,
    ForecastLocation,
    MonthlyAverages,
)

# Generators sometimes quote numbers ("score": "85"); keep whatever was sent
Number = Optional[Union[int, float, str]]


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="allow")


class RequestParameters(_Lenient):
    latitude: Number = None
    longitude: Number = None
    date: Number = None


class ComfortabilityScore(_Lenient):
    """0 (extremely uncomfortable) to 100 (extremely comfortable)."""

    score: Number = None
    summary: Optional[str] = None


class Activities(_Lenient):
    suggestions: Optional[list[str]] = Field(default_factory=list)
    warnings: Optional[list[str]] = Field(default_factory=list)
    reminders: Optional[list[str]] = Field(default_factory=list)


class GeneralConditions(_Lenient):
    is_very_hot_percentage: Number = None
    is_very_cold_percentage: Number = None
    is_very_windy_percentage: Number = None
    is_very_wet_percentage: Number = None


class SpecificVariables(_Lenient):
    temperature_celsius: Number = None
    rainfall_mm: Number = None
    windspeed_kph: Number = None
    dust_concentration_ug_m3: Number = None
    snowfall_cm: Number = None
    snow_depth_cm: Number = None
    cloud_cover_percent: Number = None
    air_quality_index: Number = None
    humidity_percent: Number = None


class WeatherConditions(_Lenient):
    general_conditions: Optional[GeneralConditions] = None
    specific_variables: Optional[SpecificVariables] = None


class ThresholdProbability(_Lenient):
    description: Optional[str] = None
    percentage: Number = None


class LongTermMeanComparison(_Lenient):
    variable: Optional[str] = None
    mean_value: Number = None
    deviation_from_mean: Number = None


class TrendEstimation(_Lenient):
    heavy_rain_trend: Optional[str] = None
    high_temperature_trend: Optional[str] = None


class StatisticalAnalysis(_Lenient):
    threshold_probabilities: Optional[list[ThresholdProbability]] = Field(default_factory=list)
    long_term_mean_comparison: Optional[list[LongTermMeanComparison]] = Field(default_factory=list)
    trend_estimation: Optional[TrendEstimation] = None


class GraphData(_Lenient):
    """Quarterly values [Q1, Q2, Q3, Q4] for each of the past five years."""

    description: Optional[str] = None
    year_minus_5: Optional[list[Any]] = Field(default_factory=list)
    year_minus_4: Optional[list[Any]] = Field(default_factory=list)
    year_minus_3: Optional[list[Any]] = Field(default_factory=list)
    year_minus_2: Optional[list[Any]] = Field(default_factory=list)
    year_minus_1: Optional[list[Any]] = Field(default_factory=list)


class ActualData(BaseModel):
    """Target-day measurements, renamed from the provider's field names."""

    temperature: Optional[float] = None
    temperatureMax: Optional[float] = None
    temperatureMin: Optional[float] = None
    feelsLike: Optional[float] = None
    humidity: Optional[float] = None
    precipitation: Optional[float] = None
    precipitationProbability: Optional[float] = None
    snow: Optional[float] = None
    snowDepth: Optional[float] = None
    windSpeed: Optional[float] = None
    windGust: Optional[float] = None
    cloudCover: Optional[float] = None
    uvIndex: Optional[float] = None
    visibility: Optional[float] = None
    pressure: Optional[float] = None
    conditions: Optional[str] = None
    description: Optional[str] = None

    @classmethod
    def from_observation(cls, day: DailyObservation) -> "ActualData":
        return cls(
            temperature=day.temp,
            temperatureMax=day.tempmax,
            temperatureMin=day.tempmin,
            feelsLike=day.feelslike,
            humidity=day.humidity,
            precipitation=day.precip,
            precipitationProbability=day.precipprob,
            snow=day.snow,
            snowDepth=day.snowdepth,
            windSpeed=day.windspeed,
            windGust=day.windgust,
            cloudCover=day.cloudcover,
            uvIndex=day.uvindex,
            visibility=day.visibility,
            pressure=day.pressure,
            conditions=day.conditions,
            description=day.description,
        )


class VisualCrossingData(BaseModel):
    """Real provider data appended to the generated analysis."""

    source: str = "Visual Crossing Weather API"
    location: ForecastLocation
    actualData: ActualData
    historicalAverages: MonthlyAverages
    statistics: DescriptiveStatistics


class WeatherAnalysisResponse(_Lenient):
    """Generated weather analysis returned to the frontend."""

    request_parameters: Optional[RequestParameters] = None
    overall_comfortability_score: ComfortabilityScore
    activities: Activities
    weather_conditions: Optional[WeatherConditions] = None
    statistical_analysis: Optional[StatisticalAnalysis] = None
    temperature_graph_data: Optional[GraphData] = None
    rain_graph_data: Optional[GraphData] = None
    snow_graph_data: Optional[GraphData] = None
    visual_crossing_data: Optional[VisualCrossingData] = None

    def to_response_dict(self) -> dict:
        """JSON body: generated keys as received plus the full data block."""
        body = self.model_dump(
            mode="json", exclude_unset=True, exclude={"visual_crossing_data"}
        )
        if self.visual_crossing_data is not None:
            body["visual_crossing_data"] = self.visual_crossing_data.model_dump(mode="json")
        return body


class ErrorResponse(BaseModel):
    """Error body: what happened, why, and optionally an example or details."""

    error: str
    message: str
    example: Optional[str] = None
    details: Optional[str] = None


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    service: str
    version: str
