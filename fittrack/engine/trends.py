"""Longitudinal views composed from aggregation windows."""

from collections.abc import Sequence
from datetime import date, timedelta
from typing import Optional

from fittrack.core.exceptions import ValidationError
from fittrack.engine.aggregation import AggregationEngine, DailyValue
from fittrack.engine.metric_types import ActivityMetric, TrendDirection

WEEK_DAYS = 7


def trend_direction(first_week_value: float, last_week_value: float) -> TrendDirection:
    if last_week_value > first_week_value:
        return TrendDirection.IMPROVING
    if last_week_value < first_week_value:
        return TrendDirection.DECLINING
    return TrendDirection.STABLE


def series_trend(values: Sequence[float]) -> TrendDirection:
    """Compare the first and last values; fewer than two is insufficient data."""
    if len(values) < 2:
        return TrendDirection.INSUFFICIENT_DATA
    return trend_direction(values[0], values[-1])


class TrendAnalyzer:
    """Weekly breakdowns, trend direction and best/worst days."""

    def __init__(self, aggregation: AggregationEngine):
        self.aggregation = aggregation

    def week_windows(self, number_of_weeks: int, today: date) -> list[tuple[date, date]]:
        """Consecutive 7-day windows ending at ``today``, oldest first."""
        if number_of_weeks < 1:
            raise ValidationError("number_of_weeks", "must be at least 1")
        windows = []
        for offset in range(number_of_weeks - 1, -1, -1):
            end = today - timedelta(days=WEEK_DAYS * offset)
            windows.append((end - timedelta(days=WEEK_DAYS - 1), end))
        return windows

    def weekly_breakdown(
        self, subject_id: int, number_of_weeks: int, today: Optional[date] = None
    ) -> list[dict]:
        today = today or date.today()
        return [
            self.aggregation.window_summary(subject_id, start, end)
            for start, end in self.week_windows(number_of_weeks, today)
        ]

    def best_day(
        self, subject_id: int, start: date, end: date, metric: ActivityMetric
    ) -> DailyValue:
        # max() keeps the first maximum, i.e. the earliest date
        series = self.aggregation.daily_series(subject_id, start, end, metric)
        return max(series, key=lambda point: point.value)

    def worst_day(
        self, subject_id: int, start: date, end: date, metric: ActivityMetric
    ) -> DailyValue:
        series = self.aggregation.daily_series(subject_id, start, end, metric)
        return min(series, key=lambda point: point.value)

    def analyze(self, subject_id: int, weeks: int, today: Optional[date] = None) -> dict:
        """Weekly data plus steps and workout trends across the whole span."""
        weekly = self.weekly_breakdown(subject_id, weeks, today)
        return {
            "weeklyData": weekly,
            "stepsTrend": series_trend([week["totalSteps"] for week in weekly]),
            "workoutTrend": series_trend([week["workoutCount"] for week in weekly]),
            "workoutDurationTrend": series_trend(
                [week["totalWorkoutDuration"] for week in weekly]
            ),
        }
