"""Entity to JSON-ready dict conversions shared by the routers."""

from datetime import date
from typing import Optional

from fittrack.engine import goals as goal_engine
from fittrack.engine.aggregation import DailyValue
from fittrack.engine.entities import (
    ActivityLog,
    Alert,
    Goal,
    HealthMeasurement,
    TrainerPlan,
    WorkoutEntry,
)
from fittrack.models import Subject


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def subject_to_response(subject: Subject) -> dict:
    return {
        "id": subject.id,
        "display_name": subject.display_name,
        "role": subject.role,
        "height_cm": subject.height_cm,
        "created_at": _iso(subject.created_at),
    }


def activity_log_to_response(log: ActivityLog) -> dict:
    return {
        "id": log.id,
        "subject_id": log.subject_id,
        "date": log.log_date.isoformat(),
        "step_count": log.step_count,
        "calories_consumed": log.calories_consumed,
        "calories_burned": log.calories_burned,
        "steps_goal": log.steps_goal,
        "goal_achieved": log.goal_achieved,
    }


def workout_to_response(workout: WorkoutEntry) -> dict:
    return {
        "id": workout.id,
        "subject_id": workout.subject_id,
        "workout_type": workout.workout_type.value,
        "duration_minutes": workout.duration_minutes,
        "calories_burned": workout.calories_burned,
        "intensity": workout.intensity.value,
        "date": workout.workout_date.isoformat(),
        "notes": workout.notes,
    }


def measurement_to_response(measurement: HealthMeasurement) -> dict:
    return {
        "id": measurement.id,
        "subject_id": measurement.subject_id,
        "weight_kg": measurement.weight_kg,
        "height_cm": measurement.height_cm,
        "bmi": round(measurement.bmi, 2),
        "category": measurement.category.value,
        "blood_pressure_systolic": measurement.blood_pressure_systolic,
        "blood_pressure_diastolic": measurement.blood_pressure_diastolic,
        "resting_heart_rate": measurement.resting_heart_rate,
        "measured_on": measurement.measured_on.isoformat(),
    }


def goal_to_response(goal: Goal, today: date) -> dict:
    return {
        "id": goal.id,
        "subject_id": goal.subject_id,
        "goal_type": goal.goal_type.value,
        "target_value": goal.target_value,
        "current_value": goal.current_value,
        "start_date": goal.start_date.isoformat(),
        "end_date": goal.end_date.isoformat(),
        "status": goal_engine.effective_status(goal, today).value,
        "progress_percentage": round(goal_engine.progress_percentage(goal), 1),
        "created_at": _iso(goal.created_at),
    }


def alert_to_response(alert: Alert) -> dict:
    return {
        "id": alert.id,
        "subject_id": alert.subject_id,
        "alert_type": alert.alert_type.value,
        "message": alert.message,
        "severity": alert.severity.value,
        "read": alert.read,
        "created_at": _iso(alert.created_at),
    }


def plan_to_response(plan: TrainerPlan) -> dict:
    return {
        "id": plan.id,
        "trainer_id": plan.trainer_id,
        "client_id": plan.client_id,
        "plan_type": plan.plan_type.value,
        "title": plan.title,
        "description": plan.description,
        "created_at": _iso(plan.created_at),
    }


def daily_value_to_response(point: DailyValue) -> dict:
    return {"date": point.day.isoformat(), "value": point.value}
