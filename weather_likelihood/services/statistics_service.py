"""Descriptive statistics and trend classification over historical observations.

Pure functions; nothing here performs I/O or keeps state between calls.
"""

import math
from typing import Sequence

from weather_likelihood.models.weather import (
    DailyObservation,
    DescriptiveStatistics,
    MonthlyAverages,
    PrecipitationStats,
    TemperatureStats,
    Trend,
    Trends,
)

# Slope magnitude (units per year) below which a series is considered flat
TREND_THRESHOLD = 0.1


def _round(value: float) -> float:
    return round(value, 2)


def mean(values: Sequence[float]) -> float:
    """Arithmetic mean, 0 for an empty sequence."""
    if not values:
        return 0.0
    return sum(values) / len(values)


def population_std(values: Sequence[float]) -> float:
    """Population standard deviation (divides by N)."""
    if not values:
        return 0.0
    avg = mean(values)
    return math.sqrt(sum((v - avg) ** 2 for v in values) / len(values))


def regression_slope(values: Sequence[float]) -> float:
    """Ordinary least-squares slope of value against index 0..N-1."""
    n = len(values)
    if n < 2:
        return 0.0
    sum_x = (n - 1) * n / 2
    sum_x2 = (n - 1) * n * (2 * n - 1) / 6
    sum_y = sum(values)
    sum_xy = sum(x * y for x, y in enumerate(values))
    return (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)


def classify_trend(values: Sequence[float]) -> Trend:
    """Label a series Increasing, Decreasing or Stable from its OLS slope."""
    if len(values) < 2:
        return Trend.STABLE
    slope = regression_slope(values)
    if slope > TREND_THRESHOLD:
        return Trend.INCREASING
    if slope < -TREND_THRESHOLD:
        return Trend.DECREASING
    return Trend.STABLE


def calculate_statistics(
    observations: Sequence[DailyObservation],
    temperature_field: str = "temp",
    precipitation_field: str = "precip",
) -> DescriptiveStatistics:
    """Compute temperature and precipitation statistics for a historical set.

    Series are analysed in the order given; the trend direction depends on
    it. An empty set yields all-zero statistics with Stable trends.

    Args:
        observations: Historical observations, 0 or more
        temperature_field: Observation attribute treated as temperature
        precipitation_field: Observation attribute treated as precipitation

    Returns:
        DescriptiveStatistics with values rounded to 2 decimal places
    """
    if not observations:
        return DescriptiveStatistics()

    temps = [float(getattr(o, temperature_field) or 0.0) for o in observations]
    precips = [float(getattr(o, precipitation_field) or 0.0) for o in observations]

    days_with_precip = sum(1 for p in precips if p > 0)

    return DescriptiveStatistics(
        temperatureStats=TemperatureStats(
            mean=_round(mean(temps)),
            min=_round(min(temps)),
            max=_round(max(temps)),
            standardDeviation=_round(population_std(temps)),
        ),
        precipitationStats=PrecipitationStats(
            totalMean=_round(mean(precips)),
            probability=_round(days_with_precip / len(precips) * 100),
            maxRecorded=_round(max(precips)),
        ),
        trends=Trends(
            temperatureTrend=classify_trend(temps),
            precipitationTrend=classify_trend(precips),
        ),
    )


def calculate_monthly_averages(
    observations: Sequence[DailyObservation],
) -> MonthlyAverages:
    """Per-variable means over the historical set, 0 when empty."""
    if not observations:
        return MonthlyAverages()

    def avg(field: str) -> float:
        return _round(mean([float(getattr(o, field) or 0.0) for o in observations]))

    return MonthlyAverages(
        temperature=avg("temp"),
        precipitation=avg("precip"),
        humidity=avg("humidity"),
        windspeed=avg("windspeed"),
    )
