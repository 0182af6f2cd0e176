"""Weather data models for the Visual Crossing provider and derived statistics."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class DailyObservation(BaseModel):
    """One calendar day of weather for a location, as returned by the provider.

    Field names follow the provider's wire format. Values used by the
    statistics default to zero when absent; an explicit null from the
    provider is kept and counted as zero by the statistics.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    datetime: Optional[str] = Field(None, description="Day in YYYY-MM-DD")
    temp: Optional[float] = Field(0.0, description="Mean temperature (°C)")
    tempmax: Optional[float] = Field(None, description="Maximum temperature (°C)")
    tempmin: Optional[float] = Field(None, description="Minimum temperature (°C)")
    feelslike: Optional[float] = None
    feelslikemax: Optional[float] = None
    feelslikemin: Optional[float] = None
    dew: Optional[float] = None
    humidity: Optional[float] = Field(0.0, description="Relative humidity (%)")
    precip: Optional[float] = Field(0.0, description="Precipitation amount (mm)")
    precipprob: Optional[float] = Field(None, description="Precipitation probability (%)")
    precipcover: Optional[float] = None
    preciptype: Optional[list[str]] = None
    snow: Optional[float] = Field(None, description="Snowfall (cm)")
    snowdepth: Optional[float] = Field(None, description="Snow depth (cm)")
    windgust: Optional[float] = Field(None, description="Wind gust (km/h)")
    windspeed: Optional[float] = Field(0.0, description="Wind speed (km/h)")
    winddir: Optional[float] = None
    pressure: Optional[float] = Field(None, description="Sea level pressure (mb)")
    cloudcover: Optional[float] = Field(None, description="Cloud cover (%)")
    visibility: Optional[float] = Field(None, description="Visibility (km)")
    solarradiation: Optional[float] = None
    solarenergy: Optional[float] = None
    uvindex: Optional[float] = None
    conditions: Optional[str] = None
    description: Optional[str] = None
    icon: Optional[str] = None


# Elements requested from the provider, one per DailyObservation field
OBSERVATION_ELEMENTS = ",".join(DailyObservation.model_fields)


class ProviderResponse(BaseModel):
    """Envelope of a Visual Crossing timeline response."""

    model_config = ConfigDict(extra="ignore")

    latitude: float
    longitude: float
    resolvedAddress: str = ""
    address: str = ""
    timezone: Optional[str] = None
    tzoffset: Optional[float] = None
    description: Optional[str] = None
    days: list[DailyObservation] = Field(default_factory=list)


class Trend(str, Enum):
    """Direction of a linear trend over a short series."""

    INCREASING = "Increasing"
    DECREASING = "Decreasing"
    STABLE = "Stable"


class TemperatureStats(BaseModel):
    mean: float = 0.0
    min: float = 0.0
    max: float = 0.0
    standardDeviation: float = 0.0


class PrecipitationStats(BaseModel):
    totalMean: float = 0.0
    probability: float = Field(0.0, ge=0, le=100)
    maxRecorded: float = 0.0


class Trends(BaseModel):
    temperatureTrend: Trend = Trend.STABLE
    precipitationTrend: Trend = Trend.STABLE


class DescriptiveStatistics(BaseModel):
    """Statistics over the historical set. All zero and Stable when empty."""

    temperatureStats: TemperatureStats = Field(default_factory=TemperatureStats)
    precipitationStats: PrecipitationStats = Field(default_factory=PrecipitationStats)
    trends: Trends = Field(default_factory=Trends)


class MonthlyAverages(BaseModel):
    """Means of the historical set per variable; zero when the set is empty."""

    temperature: float = 0.0
    precipitation: float = 0.0
    humidity: float = 0.0
    windspeed: float = 0.0


class ForecastLocation(BaseModel):
    latitude: float
    longitude: float
    address: str = ""


class HistoricalData(BaseModel):
    past_years: list[DailyObservation] = Field(
        default_factory=list,
        alias="past5Years",
        description="Same calendar day in prior years, year-1 first",
    )
    monthly_averages: MonthlyAverages = Field(
        default_factory=MonthlyAverages, alias="monthlyAverages"
    )

    model_config = ConfigDict(populate_by_name=True)


class CompositeForecast(BaseModel):
    """Target-day observation plus history and statistics for one request.

    Exactly one of ``current`` and ``forecast`` is populated when the provider
    returned a record for the target day.
    """

    model_config = ConfigDict(populate_by_name=True)

    date: str = Field(..., description="Requested date in DD-MM-YYYY")
    location: ForecastLocation
    current: Optional[DailyObservation] = None
    forecast: Optional[DailyObservation] = None
    historical_data: HistoricalData = Field(
        default_factory=HistoricalData, alias="historicalData"
    )
    statistics: DescriptiveStatistics = Field(default_factory=DescriptiveStatistics)

    @property
    def target_day(self) -> Optional[DailyObservation]:
        """The fetched day, whichever slot it sits in."""
        return self.current or self.forecast

    @property
    def data_type(self) -> str:
        """Label describing whether the target day is observed or forecast."""
        return "CURRENT/HISTORICAL" if self.current else "FORECAST"
