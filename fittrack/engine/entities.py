"""Value types the engine reads and derives.

Storage owns persistence; these are the shapes repositories hand to the
engine and accept back. All of them are frozen: a change is a new value built
with ``dataclasses.replace``, which re-runs validation.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from fittrack.core.exceptions import ValidationError
from fittrack.engine.bmi import classify, compute_bmi
from fittrack.engine.metric_types import (
    AlertSeverity,
    AlertType,
    BMICategory,
    GoalStatus,
    GoalType,
    Intensity,
    PlanType,
    WorkoutType,
)

DEFAULT_STEPS_GOAL = 10000


def _require_non_negative(name: str, value: Optional[float]) -> None:
    if value is not None and value < 0:
        raise ValidationError(name, "must be non-negative")


@dataclass(frozen=True)
class HealthMeasurement:
    """Weight/height reading. ``bmi`` and ``category`` follow the current pair."""

    subject_id: int
    weight_kg: float
    height_cm: float
    measured_on: date
    id: Optional[int] = None
    blood_pressure_systolic: Optional[int] = None
    blood_pressure_diastolic: Optional[int] = None
    resting_heart_rate: Optional[int] = None

    def __post_init__(self):
        # Raises InvalidMeasurement for non-positive values
        compute_bmi(self.weight_kg, self.height_cm)

    @property
    def bmi(self) -> float:
        return compute_bmi(self.weight_kg, self.height_cm)

    @property
    def category(self) -> BMICategory:
        return classify(self.bmi)


@dataclass(frozen=True)
class WorkoutEntry:
    subject_id: int
    workout_type: WorkoutType
    duration_minutes: int
    workout_date: date
    id: Optional[int] = None
    calories_burned: Optional[int] = None
    intensity: Intensity = Intensity.MEDIUM
    notes: Optional[str] = None

    def __post_init__(self):
        if self.duration_minutes <= 0:
            raise ValidationError("duration_minutes", "must be positive")
        _require_non_negative("calories_burned", self.calories_burned)


@dataclass(frozen=True)
class ActivityLog:
    """One row per (subject, date); later writes overwrite the counters."""

    subject_id: int
    log_date: date
    step_count: int = 0
    calories_consumed: int = 0
    calories_burned: int = 0
    steps_goal: int = DEFAULT_STEPS_GOAL
    workouts: tuple[WorkoutEntry, ...] = field(default_factory=tuple)
    id: Optional[int] = None

    def __post_init__(self):
        _require_non_negative("step_count", self.step_count)
        _require_non_negative("calories_consumed", self.calories_consumed)
        _require_non_negative("calories_burned", self.calories_burned)
        if self.steps_goal <= 0:
            raise ValidationError("steps_goal", "must be positive")

    @property
    def goal_achieved(self) -> bool:
        return self.step_count >= self.steps_goal


@dataclass(frozen=True)
class Goal:
    subject_id: int
    goal_type: GoalType
    target_value: float
    start_date: date
    end_date: date
    current_value: float = 0.0
    status: GoalStatus = GoalStatus.IN_PROGRESS
    id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Alert:
    """Write-once notification; only ``read`` may change after creation."""

    subject_id: int
    alert_type: AlertType
    message: str
    severity: AlertSeverity = AlertSeverity.INFO
    read: bool = False
    created_at: Optional[datetime] = None
    id: Optional[int] = None


@dataclass(frozen=True)
class TrainerPlan:
    trainer_id: int
    client_id: int
    plan_type: PlanType
    title: str
    description: str = ""
    id: Optional[int] = None
    created_at: Optional[datetime] = None
