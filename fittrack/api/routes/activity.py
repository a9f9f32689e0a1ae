from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from fittrack.api.deps import get_tracking_service, get_trainer_service
from fittrack.api.responses import (
    activity_log_to_response,
    daily_value_to_response,
    workout_to_response,
)
from fittrack.engine.aggregation import check_range
from fittrack.engine.metric_types import ActivityMetric, Intensity, WorkoutType
from fittrack.services import get_local_today
from fittrack.services.tracking import TrackingService
from fittrack.services.trainer import TrainerService

router = APIRouter()


# =========================================================================
# Request Models
# =========================================================================


class StepsLog(BaseModel):
    steps: int = Field(ge=0)
    log_date: Optional[date] = None
    steps_goal: Optional[int] = Field(default=None, gt=0)


class CaloriesLog(BaseModel):
    calories_consumed: int = Field(ge=0)
    calories_burned: int = Field(default=0, ge=0)
    log_date: Optional[date] = None


class WorkoutCreate(BaseModel):
    workout_type: WorkoutType
    duration_minutes: int = Field(gt=0)
    workout_date: Optional[date] = None
    calories_burned: Optional[int] = Field(default=None, ge=0)
    intensity: Intensity = Intensity.MEDIUM
    notes: Optional[str] = None


def _default_window(start: Optional[date], end: Optional[date]) -> tuple[date, date]:
    end = end or get_local_today()
    start = start or end - timedelta(days=6)
    check_range(start, end)
    return start, end


# =========================================================================
# Logging
# =========================================================================


@router.post("/{subject_id}/steps")
def log_steps(
    subject_id: int,
    data: StepsLog,
    tracking: TrackingService = Depends(get_tracking_service),
):
    """Record the step count for a day, replacing any earlier count."""
    log = tracking.log_steps(subject_id, data.steps, data.log_date, data.steps_goal)
    return activity_log_to_response(log)


@router.post("/{subject_id}/calories")
def log_calories(
    subject_id: int,
    data: CaloriesLog,
    tracking: TrackingService = Depends(get_tracking_service),
):
    log = tracking.log_calories(
        subject_id, data.calories_consumed, data.calories_burned, data.log_date
    )
    return activity_log_to_response(log)


@router.post("/{subject_id}/workouts", status_code=201)
def log_workout(
    subject_id: int,
    data: WorkoutCreate,
    tracking: TrackingService = Depends(get_tracking_service),
):
    workout = tracking.log_workout(
        subject_id,
        data.workout_type,
        data.duration_minutes,
        day=data.workout_date,
        calories_burned=data.calories_burned,
        intensity=data.intensity,
        notes=data.notes,
    )
    return workout_to_response(workout)


@router.delete("/workouts/{workout_id}", status_code=204)
def delete_workout(
    workout_id: int,
    tracking: TrackingService = Depends(get_tracking_service),
):
    tracking.delete_workout(workout_id)


# =========================================================================
# Reads and statistics
# =========================================================================


@router.get("/{subject_id}/logs")
def list_logs(
    subject_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
    tracking: TrackingService = Depends(get_tracking_service),
):
    tracking.require_subject(subject_id)
    start, end = _default_window(start, end)
    logs = tracking.activity.list_logs(subject_id, start, end)
    return [activity_log_to_response(log) for log in logs]


@router.get("/{subject_id}/workouts")
def list_workouts(
    subject_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
    tracking: TrackingService = Depends(get_tracking_service),
):
    tracking.require_subject(subject_id)
    start, end = _default_window(start, end)
    workouts = tracking.workouts.list_workouts(subject_id, start, end)
    return [workout_to_response(workout) for workout in workouts]


@router.get("/{subject_id}/summary")
def window_summary(
    subject_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
    goal_steps_per_day: Optional[int] = Query(default=None, gt=0),
    tracking: TrackingService = Depends(get_tracking_service),
):
    """Totals, averages and counts for a window (last 7 days by default)."""
    tracking.require_subject(subject_id)
    start, end = _default_window(start, end)
    aggregation = tracking.aggregation
    summary = aggregation.window_summary(subject_id, start, end)
    if goal_steps_per_day is not None:
        summary["daysGoalAchieved"] = aggregation.days_goal_achieved(
            subject_id, start, end, goal_steps_per_day
        )
    summary["avgCaloriesConsumed"] = aggregation.average_calories_consumed(subject_id, start, end)
    summary["workoutTypes"] = aggregation.workout_type_breakdown(subject_id, start, end)
    return summary


@router.get("/{subject_id}/series")
def daily_series(
    subject_id: int,
    metric: ActivityMetric = ActivityMetric.STEPS,
    start: Optional[date] = None,
    end: Optional[date] = None,
    tracking: TrackingService = Depends(get_tracking_service),
):
    """One point per calendar day, 0 for days with nothing logged."""
    tracking.require_subject(subject_id)
    start, end = _default_window(start, end)
    series = tracking.aggregation.daily_series(subject_id, start, end, metric)
    return {"metric": metric.value, "points": [daily_value_to_response(p) for p in series]}


@router.get("/{subject_id}/best-day")
def best_day(
    subject_id: int,
    metric: ActivityMetric = ActivityMetric.STEPS,
    start: Optional[date] = None,
    end: Optional[date] = None,
    trainer: TrainerService = Depends(get_trainer_service),
):
    trainer.tracking.require_subject(subject_id)
    start, end = _default_window(start, end)
    return daily_value_to_response(trainer.trends.best_day(subject_id, start, end, metric))


@router.get("/{subject_id}/worst-day")
def worst_day(
    subject_id: int,
    metric: ActivityMetric = ActivityMetric.STEPS,
    start: Optional[date] = None,
    end: Optional[date] = None,
    trainer: TrainerService = Depends(get_trainer_service),
):
    trainer.tracking.require_subject(subject_id)
    start, end = _default_window(start, end)
    return daily_value_to_response(trainer.trends.worst_day(subject_id, start, end, metric))


@router.get("/{subject_id}/trends")
def trends(
    subject_id: int,
    weeks: Optional[int] = Query(default=None, ge=1, le=52),
    trainer: TrainerService = Depends(get_trainer_service),
):
    """Weekly breakdown with steps and workout trend direction."""
    weeks = weeks or trainer.tracking.settings.trend_weeks
    return trainer.analyze_trends(subject_id, weeks)
