"""Tests for weekly windows, trend direction and best/worst days."""

from datetime import date, timedelta

import pytest

from fittrack.core.exceptions import ValidationError
from fittrack.engine.metric_types import ActivityMetric, TrendDirection
from fittrack.engine.trends import TrendAnalyzer, series_trend, trend_direction

SUBJECT = 1
TODAY = date(2026, 3, 14)


@pytest.fixture
def analyzer(aggregation) -> TrendAnalyzer:
    return TrendAnalyzer(aggregation)


class TestTrendDirection:
    @pytest.mark.parametrize(
        "first,last,expected",
        [
            (40000, 55000, TrendDirection.IMPROVING),
            (55000, 40000, TrendDirection.DECLINING),
            (40000, 40000, TrendDirection.STABLE),
        ],
    )
    def test_direction(self, first, last, expected):
        assert trend_direction(first, last) is expected

    def test_single_week_is_insufficient(self):
        assert series_trend([40000]) is TrendDirection.INSUFFICIENT_DATA
        assert series_trend([]) is TrendDirection.INSUFFICIENT_DATA

    def test_compares_first_and_last_only(self):
        assert series_trend([10, 100, 20]) is TrendDirection.IMPROVING


class TestWeekWindows:
    def test_windows_oldest_first_ending_today(self, analyzer):
        windows = analyzer.week_windows(2, TODAY)
        assert windows == [
            (date(2026, 3, 1), date(2026, 3, 7)),
            (date(2026, 3, 8), date(2026, 3, 14)),
        ]

    def test_rejects_zero_weeks(self, analyzer):
        with pytest.raises(ValidationError):
            analyzer.week_windows(0, TODAY)


class TestAnalyze:
    def test_improving_steps(self, analyzer, log_week):
        """Weekly totals 40000 then 55000 read as improving."""
        log_week(SUBJECT, date(2026, 3, 1), [40000])
        log_week(SUBJECT, date(2026, 3, 8), [55000])
        result = analyzer.analyze(SUBJECT, 2, TODAY)
        assert [week["totalSteps"] for week in result["weeklyData"]] == [40000, 55000]
        assert result["stepsTrend"] is TrendDirection.IMPROVING
        assert result["workoutTrend"] is TrendDirection.STABLE

    def test_one_week_is_insufficient(self, analyzer, log_week):
        log_week(SUBJECT, date(2026, 3, 8), [5000])
        result = analyzer.analyze(SUBJECT, 1, TODAY)
        assert result["stepsTrend"] is TrendDirection.INSUFFICIENT_DATA


class TestBestAndWorstDay:
    START = date(2026, 3, 1)
    END = START + timedelta(days=6)

    def test_best_day(self, analyzer, log_week):
        log_week(SUBJECT, self.START, [0, 5000, 12000, 8000, 0, 15000, 9000])
        best = analyzer.best_day(SUBJECT, self.START, self.END, ActivityMetric.STEPS)
        assert best.day == self.START + timedelta(days=5)
        assert best.value == 15000

    def test_worst_day_tie_goes_to_earliest(self, analyzer, log_week):
        log_week(SUBJECT, self.START, [0, 5000, 12000, 8000, 0, 15000, 9000])
        worst = analyzer.worst_day(SUBJECT, self.START, self.END, ActivityMetric.STEPS)
        assert worst.day == self.START
        assert worst.value == 0

    def test_best_day_tie_goes_to_earliest(self, analyzer, log_week):
        log_week(SUBJECT, self.START, [9000, 3000, 9000])
        best = analyzer.best_day(SUBJECT, self.START, self.END, ActivityMetric.STEPS)
        assert best.day == self.START
