"""Windowed statistics over activity logs and workouts.

Windows are inclusive ``[start, end]`` date ranges. Two policies apply and
are deliberately different:

* averages are taken over days that have a log (missing days are skipped);
* ``daily_series`` emits one point per calendar day, with 0 for missing days.
"""

from collections import defaultdict
from collections.abc import Iterator
from datetime import date, timedelta
from typing import NamedTuple, Optional

from fittrack.core.exceptions import InvalidRange
from fittrack.engine.entities import DEFAULT_STEPS_GOAL, ActivityLog, WorkoutEntry
from fittrack.engine.metric_types import ActivityMetric
from fittrack.engine.storage import ActivityRepository, WorkoutRepository

LOG_METRICS = {
    ActivityMetric.STEPS: "step_count",
    ActivityMetric.CALORIES_CONSUMED: "calories_consumed",
    ActivityMetric.CALORIES_BURNED: "calories_burned",
}


class DailyValue(NamedTuple):
    day: date
    value: float


def check_range(start: date, end: date) -> None:
    if start > end:
        raise InvalidRange(start, end)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar day in ``[start, end]``, oldest first."""
    check_range(start, end)
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def _workout_value(workout: WorkoutEntry, metric: ActivityMetric) -> float:
    if metric is ActivityMetric.WORKOUT_DURATION:
        return workout.duration_minutes
    if metric is ActivityMetric.WORKOUT_CALORIES:
        return workout.calories_burned or 0
    return 1


class AggregationEngine:
    """Computes totals, averages, counts and day-by-day series on demand.

    Example:
        engine = AggregationEngine(activity_repo, workout_repo)
        engine.total_steps(subject_id, date(2026, 1, 1), date(2026, 1, 7))
    """

    def __init__(
        self,
        activity_repository: ActivityRepository,
        workout_repository: WorkoutRepository,
        default_steps_goal: int = DEFAULT_STEPS_GOAL,
    ):
        self.activity_repo = activity_repository
        self.workout_repo = workout_repository
        self.default_steps_goal = default_steps_goal

    # =========================================================================
    # Raw fetches
    # =========================================================================

    def _logs(self, subject_id: int, start: date, end: date) -> list[ActivityLog]:
        check_range(start, end)
        return self.activity_repo.list_logs(subject_id, start, end)

    def _workouts(self, subject_id: int, start: date, end: date) -> list[WorkoutEntry]:
        check_range(start, end)
        return self.workout_repo.list_workouts(subject_id, start, end)

    # =========================================================================
    # Activity log statistics
    # =========================================================================

    def total_steps(self, subject_id: int, start: date, end: date) -> int:
        return sum(log.step_count for log in self._logs(subject_id, start, end))

    def average_steps(self, subject_id: int, start: date, end: date) -> float:
        logs = self._logs(subject_id, start, end)
        if not logs:
            return 0.0
        return sum(log.step_count for log in logs) / len(logs)

    def total_calories_consumed(self, subject_id: int, start: date, end: date) -> int:
        return sum(log.calories_consumed for log in self._logs(subject_id, start, end))

    def total_calories_burned(self, subject_id: int, start: date, end: date) -> int:
        return sum(log.calories_burned for log in self._logs(subject_id, start, end))

    def average_calories_consumed(self, subject_id: int, start: date, end: date) -> float:
        logs = self._logs(subject_id, start, end)
        if not logs:
            return 0.0
        return sum(log.calories_consumed for log in logs) / len(logs)

    def days_goal_achieved(
        self,
        subject_id: int,
        start: date,
        end: date,
        goal_steps_per_day: Optional[int] = None,
    ) -> int:
        """Days whose step count meets the goal.

        Without an explicit threshold each log's own ``steps_goal`` is used.
        """
        count = 0
        for log in self._logs(subject_id, start, end):
            threshold = goal_steps_per_day or log.steps_goal or self.default_steps_goal
            if log.step_count >= threshold:
                count += 1
        return count

    # =========================================================================
    # Workout statistics
    # =========================================================================

    def total_workout_duration(self, subject_id: int, start: date, end: date) -> int:
        return sum(w.duration_minutes for w in self._workouts(subject_id, start, end))

    def total_workout_calories(self, subject_id: int, start: date, end: date) -> int:
        return sum(w.calories_burned or 0 for w in self._workouts(subject_id, start, end))

    def workout_count(self, subject_id: int, start: date, end: date) -> int:
        return len(self._workouts(subject_id, start, end))

    def workout_type_breakdown(self, subject_id: int, start: date, end: date) -> dict:
        """Session count and minutes per workout type."""
        counts: dict[str, int] = defaultdict(int)
        minutes: dict[str, int] = defaultdict(int)
        for workout in self._workouts(subject_id, start, end):
            counts[workout.workout_type.value] += 1
            minutes[workout.workout_type.value] += workout.duration_minutes
        return {"count": dict(counts), "duration": dict(minutes)}

    # =========================================================================
    # Series and composite views
    # =========================================================================

    def daily_series(
        self,
        subject_id: int,
        start: date,
        end: date,
        metric: ActivityMetric,
    ) -> list[DailyValue]:
        """One ``(day, value)`` per calendar day in range, 0 where nothing was logged."""
        check_range(start, end)
        values: dict[date, float] = defaultdict(float)

        if metric in LOG_METRICS:
            attr = LOG_METRICS[metric]
            for log in self.activity_repo.list_logs(subject_id, start, end):
                values[log.log_date] = getattr(log, attr)
        else:
            for workout in self.workout_repo.list_workouts(subject_id, start, end):
                values[workout.workout_date] += _workout_value(workout, metric)

        return [DailyValue(day, values.get(day, 0)) for day in iter_days(start, end)]

    def metric_total(
        self, subject_id: int, start: date, end: date, metric: ActivityMetric
    ) -> float:
        return sum(point.value for point in self.daily_series(subject_id, start, end, metric))

    def window_summary(self, subject_id: int, start: date, end: date) -> dict:
        """All windowed statistics for one range, fetched once."""
        logs = self._logs(subject_id, start, end)
        workouts = self._workouts(subject_id, start, end)
        total_steps = sum(log.step_count for log in logs)

        return {
            "start": start,
            "end": end,
            "totalSteps": total_steps,
            "avgSteps": total_steps / len(logs) if logs else 0.0,
            "daysLogged": len(logs),
            "daysGoalAchieved": sum(
                1 for log in logs if log.step_count >= (log.steps_goal or self.default_steps_goal)
            ),
            "totalWorkoutDuration": sum(w.duration_minutes for w in workouts),
            "workoutCount": len(workouts),
            "workoutCaloriesBurned": sum(w.calories_burned or 0 for w in workouts),
            "caloriesConsumed": sum(log.calories_consumed for log in logs),
            "caloriesBurned": sum(log.calories_burned for log in logs),
        }
