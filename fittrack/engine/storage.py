"""Storage collaborator interfaces the engine depends on.

Implementations return already-typed entities and raise
``StorageUnavailable`` on failure. The engine never retries.
"""

from datetime import date, datetime
from typing import Optional, Protocol

from fittrack.engine.entities import (
    ActivityLog,
    Alert,
    Goal,
    HealthMeasurement,
    TrainerPlan,
    WorkoutEntry,
)


class ActivityRepository(Protocol):
    """Daily activity logs, unique per (subject, date)."""

    def get_log(self, subject_id: int, day: date) -> Optional[ActivityLog]: ...

    def list_logs(self, subject_id: int, start: date, end: date) -> list[ActivityLog]: ...

    def upsert_log(self, log: ActivityLog) -> ActivityLog: ...


class WorkoutRepository(Protocol):
    def list_workouts(self, subject_id: int, start: date, end: date) -> list[WorkoutEntry]: ...

    def add_workout(self, workout: WorkoutEntry) -> WorkoutEntry: ...

    def delete_workout(self, workout_id: int) -> None: ...


class MeasurementRepository(Protocol):
    def add(self, measurement: HealthMeasurement) -> HealthMeasurement: ...

    def latest(self, subject_id: int) -> Optional[HealthMeasurement]: ...

    def history(self, subject_id: int) -> list[HealthMeasurement]: ...


class GoalRepository(Protocol):
    def save(self, goal: Goal) -> Goal: ...

    def get(self, goal_id: int) -> Optional[Goal]: ...

    def list_for_subject(self, subject_id: int) -> list[Goal]: ...

    def delete(self, goal_id: int) -> None: ...


class AlertRepository(Protocol):
    def add(self, alert: Alert) -> Alert: ...

    def get(self, alert_id: int) -> Optional[Alert]: ...

    def list_for_subject(self, subject_id: int, unread_only: bool = False) -> list[Alert]: ...

    def mark_read(self, alert_id: int) -> Optional[Alert]: ...

    def mark_all_read(self, subject_id: int) -> int: ...

    def unread_count(self, subject_id: int) -> int: ...

    def list_read_before(self, cutoff: datetime) -> list[Alert]: ...

    def delete_many(self, alert_ids: list[int]) -> int: ...


class PlanRepository(Protocol):
    def add(self, plan: TrainerPlan) -> TrainerPlan: ...

    def list_for_trainer(self, trainer_id: int) -> list[TrainerPlan]: ...

    def list_for_client(self, client_id: int) -> list[TrainerPlan]: ...

    def delete(self, plan_id: int) -> None: ...
