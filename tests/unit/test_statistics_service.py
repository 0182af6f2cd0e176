"""Unit tests for the statistics engine."""

import pytest

from weather_likelihood.models.weather import DescriptiveStatistics, MonthlyAverages, Trend
from weather_likelihood.services.statistics_service import (
    calculate_monthly_averages,
    calculate_statistics,
    classify_trend,
    mean,
    population_std,
    regression_slope,
)


class TestHelpers:
    """Tests for the arithmetic helpers."""

    def test_mean(self):
        assert mean([1, 2, 3, 4]) == 2.5
        assert mean([]) == 0.0

    def test_population_std_divides_by_n(self):
        """Population (not sample) standard deviation."""
        assert population_std([10, 12, 14, 16, 18]) == pytest.approx(2.8284, abs=1e-4)
        assert population_std([5]) == 0.0
        assert population_std([]) == 0.0

    def test_regression_slope(self):
        assert regression_slope([10, 12, 14, 16, 18]) == pytest.approx(2.0)
        assert regression_slope([3, 2, 1]) == pytest.approx(-1.0)
        assert regression_slope([7]) == 0.0


class TestClassifyTrend:
    """Tests for trend classification thresholds."""

    def test_increasing(self):
        assert classify_trend([10, 12, 14, 16, 18]) == Trend.INCREASING

    def test_decreasing(self):
        assert classify_trend([18, 16, 14, 12, 10]) == Trend.DECREASING

    def test_flat_series_is_stable(self):
        assert classify_trend([0, 0, 0, 0, 0]) == Trend.STABLE

    def test_slope_within_threshold_is_stable(self):
        """Slope of exactly 0.1 does not count as a trend."""
        assert classify_trend([0.0, 0.1]) == Trend.STABLE
        assert classify_trend([0.0, 0.05, 0.1]) == Trend.STABLE

    def test_slope_just_above_threshold(self):
        assert classify_trend([0.0, 0.11]) == Trend.INCREASING
        assert classify_trend([0.0, -0.11]) == Trend.DECREASING

    def test_fewer_than_two_points_is_stable(self):
        assert classify_trend([]) == Trend.STABLE
        assert classify_trend([42.0]) == Trend.STABLE

    def test_threshold_uses_unrounded_slope(self):
        """A slope of 0.104 rounds to 0.10 but still exceeds the threshold."""
        assert classify_trend([0.0, 0.104]) == Trend.INCREASING


class TestCalculateStatistics:
    """Tests for calculate_statistics."""

    def test_empty_input_defaults(self):
        """Empty history gives zeros and Stable trends, never an error."""
        stats = calculate_statistics([])

        assert stats == DescriptiveStatistics()
        assert stats.temperatureStats.mean == 0
        assert stats.temperatureStats.min == 0
        assert stats.temperatureStats.max == 0
        assert stats.temperatureStats.standardDeviation == 0
        assert stats.precipitationStats.totalMean == 0
        assert stats.precipitationStats.probability == 0
        assert stats.precipitationStats.maxRecorded == 0
        assert stats.trends.temperatureTrend == "Stable"
        assert stats.trends.precipitationTrend == "Stable"

    def test_single_observation(self, make_observation):
        """One point: zero spread and Stable trends."""
        stats = calculate_statistics([make_observation(temp=21.5, precip=2.0)])

        assert stats.temperatureStats.mean == 21.5
        assert stats.temperatureStats.standardDeviation == 0
        assert stats.precipitationStats.probability == 100
        assert stats.trends.temperatureTrend == Trend.STABLE
        assert stats.trends.precipitationTrend == Trend.STABLE

    def test_temperature_series(self, make_observation):
        temps = [10, 12, 14, 16, 18]
        observations = [make_observation(temp=t, precip=0) for t in temps]

        stats = calculate_statistics(observations)

        assert stats.temperatureStats.mean == 14
        assert stats.temperatureStats.min == 10
        assert stats.temperatureStats.max == 18
        assert stats.temperatureStats.standardDeviation == 2.83
        assert stats.trends.temperatureTrend == Trend.INCREASING

    def test_dry_history(self, make_observation):
        observations = [make_observation(precip=0) for _ in range(5)]

        stats = calculate_statistics(observations)

        assert stats.precipitationStats.probability == 0
        assert stats.precipitationStats.totalMean == 0
        assert stats.precipitationStats.maxRecorded == 0
        assert stats.trends.precipitationTrend == Trend.STABLE

    def test_precipitation_probability(self, make_observation):
        precips = [0.0, 1.2, 0.0, 5.5, 0.3]
        observations = [make_observation(precip=p) for p in precips]

        stats = calculate_statistics(observations)

        assert stats.precipitationStats.probability == 60
        assert stats.precipitationStats.maxRecorded == 5.5
        assert stats.precipitationStats.totalMean == 1.4

    def test_values_rounded_to_two_places(self, make_observation):
        observations = [make_observation(temp=t) for t in (10.0, 10.0, 10.1)]

        stats = calculate_statistics(observations)

        assert stats.temperatureStats.mean == 10.03
        assert stats.temperatureStats.standardDeviation == 0.05

    def test_order_determines_trend_direction(self, make_observation):
        """The same values reversed flip the trend."""
        observations = [make_observation(temp=t) for t in (18, 16, 14, 12, 10)]

        stats = calculate_statistics(observations)

        assert stats.trends.temperatureTrend == Trend.DECREASING

    def test_alternate_fields(self, make_observation):
        """The engine can analyse another pair of variables."""
        observations = [
            make_observation(humidity=h, windspeed=w)
            for h, w in ((60, 10), (70, 8), (80, 6))
        ]

        stats = calculate_statistics(
            observations,
            temperature_field="humidity",
            precipitation_field="windspeed",
        )

        assert stats.temperatureStats.mean == 70
        assert stats.trends.temperatureTrend == Trend.INCREASING
        assert stats.trends.precipitationTrend == Trend.DECREASING

    def test_idempotent(self, make_observation):
        """Repeated calls with the same input give identical output."""
        observations = [make_observation(temp=t, precip=p) for t, p in ((20.1, 0), (22.7, 3.3), (19.4, 0.2))]

        first = calculate_statistics(observations)
        second = calculate_statistics(observations)

        assert first.model_dump() == second.model_dump()


class TestMonthlyAverages:
    """Tests for calculate_monthly_averages."""

    def test_empty(self):
        assert calculate_monthly_averages([]) == MonthlyAverages()

    def test_means(self, make_observation):
        observations = [
            make_observation(temp=20, precip=1, humidity=60, windspeed=10),
            make_observation(temp=25, precip=0, humidity=70, windspeed=15),
        ]

        averages = calculate_monthly_averages(observations)

        assert averages.temperature == 22.5
        assert averages.precipitation == 0.5
        assert averages.humidity == 65
        assert averages.windspeed == 12.5
