"""SQLAlchemy implementations of the engine's storage protocols.

Repositories convert between ORM rows and engine entities, flush their writes
into the session's open transaction, and turn any ``SQLAlchemyError`` into
``StorageUnavailable``. Services decide when to commit with ``transactional``.
"""

import functools
from datetime import date, datetime
from typing import Optional

import structlog
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from fittrack.core.exceptions import StorageUnavailable
from fittrack.engine.entities import (
    ActivityLog,
    Alert,
    Goal,
    HealthMeasurement,
    TrainerPlan,
    WorkoutEntry,
)
from fittrack.engine.metric_types import (
    AlertSeverity,
    AlertType,
    GoalStatus,
    GoalType,
    Intensity,
    PlanType,
    Role,
    WorkoutType,
)
from fittrack.models import (
    ActivityLogRecord,
    AlertRecord,
    GoalRecord,
    HealthMeasurementRecord,
    Subject,
    TrainerClient,
    TrainerPlanRecord,
    WorkoutRecord,
)

logger = structlog.get_logger()


def storage_operation(name: str):
    """Roll back and re-raise SQLAlchemy failures as ``StorageUnavailable``."""

    def decorator(method):
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs):
            try:
                return method(self, *args, **kwargs)
            except SQLAlchemyError as e:
                self.db.rollback()
                logger.error("storage_operation_failed", operation=name, error=str(e))
                raise StorageUnavailable(name, str(e)) from e

        return wrapper

    return decorator


def transactional(method):
    """Commit once when the outermost service call returns, roll back if it raises.

    Nested calls on the same session join the outer call's transaction.
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        depth = self.db.info.get("transaction_depth", 0)
        self.db.info["transaction_depth"] = depth + 1
        try:
            result = method(self, *args, **kwargs)
            if depth == 0:
                self.db.commit()
            return result
        except SQLAlchemyError as e:
            if depth == 0:
                self.db.rollback()
            logger.error("transaction_failed", operation=method.__name__, error=str(e))
            raise StorageUnavailable(method.__name__, str(e)) from e
        except Exception:
            if depth == 0:
                self.db.rollback()
            raise
        finally:
            self.db.info["transaction_depth"] = depth

    return wrapper


class SqlRepository:
    def __init__(self, db: Session):
        self.db = db


# =============================================================================
# Activity and workouts
# =============================================================================


def _to_activity_log(row: ActivityLogRecord) -> ActivityLog:
    return ActivityLog(
        id=row.id,
        subject_id=row.subject_id,
        log_date=row.log_date,
        step_count=row.step_count or 0,
        calories_consumed=row.calories_consumed or 0,
        calories_burned=row.calories_burned or 0,
        steps_goal=row.steps_goal,
    )


def _to_workout(row: WorkoutRecord) -> WorkoutEntry:
    return WorkoutEntry(
        id=row.id,
        subject_id=row.subject_id,
        workout_type=WorkoutType(row.workout_type),
        duration_minutes=row.duration_minutes,
        calories_burned=row.calories_burned,
        intensity=Intensity(row.intensity),
        workout_date=row.workout_date,
        notes=row.notes,
    )


class SqlActivityRepository(SqlRepository):
    @storage_operation("activity.get")
    def get_log(self, subject_id: int, day: date) -> Optional[ActivityLog]:
        row = (
            self.db.query(ActivityLogRecord)
            .filter(ActivityLogRecord.subject_id == subject_id, ActivityLogRecord.log_date == day)
            .first()
        )
        return _to_activity_log(row) if row else None

    @storage_operation("activity.list")
    def list_logs(self, subject_id: int, start: date, end: date) -> list[ActivityLog]:
        rows = (
            self.db.query(ActivityLogRecord)
            .filter(
                ActivityLogRecord.subject_id == subject_id,
                ActivityLogRecord.log_date >= start,
                ActivityLogRecord.log_date <= end,
            )
            .order_by(ActivityLogRecord.log_date)
            .all()
        )
        return [_to_activity_log(row) for row in rows]

    @storage_operation("activity.upsert")
    def upsert_log(self, log: ActivityLog) -> ActivityLog:
        row = (
            self.db.query(ActivityLogRecord)
            .filter(
                ActivityLogRecord.subject_id == log.subject_id,
                ActivityLogRecord.log_date == log.log_date,
            )
            .first()
        )
        if row is None:
            row = ActivityLogRecord(subject_id=log.subject_id, log_date=log.log_date)
            self.db.add(row)
        row.step_count = log.step_count
        row.calories_consumed = log.calories_consumed
        row.calories_burned = log.calories_burned
        row.steps_goal = log.steps_goal
        self.db.flush()
        self.db.refresh(row)
        return _to_activity_log(row)


class SqlWorkoutRepository(SqlRepository):
    @storage_operation("workout.list")
    def list_workouts(self, subject_id: int, start: date, end: date) -> list[WorkoutEntry]:
        rows = (
            self.db.query(WorkoutRecord)
            .filter(
                WorkoutRecord.subject_id == subject_id,
                WorkoutRecord.workout_date >= start,
                WorkoutRecord.workout_date <= end,
            )
            .order_by(WorkoutRecord.workout_date, WorkoutRecord.id)
            .all()
        )
        return [_to_workout(row) for row in rows]

    @storage_operation("workout.get")
    def get_workout(self, workout_id: int) -> Optional[WorkoutEntry]:
        row = self.db.get(WorkoutRecord, workout_id)
        return _to_workout(row) if row else None

    @storage_operation("workout.add")
    def add_workout(self, workout: WorkoutEntry) -> WorkoutEntry:
        row = WorkoutRecord(
            subject_id=workout.subject_id,
            workout_type=workout.workout_type.value,
            duration_minutes=workout.duration_minutes,
            calories_burned=workout.calories_burned,
            intensity=workout.intensity.value,
            workout_date=workout.workout_date,
            notes=workout.notes,
        )
        self.db.add(row)
        self.db.flush()
        self.db.refresh(row)
        return _to_workout(row)

    @storage_operation("workout.delete")
    def delete_workout(self, workout_id: int) -> None:
        self.db.query(WorkoutRecord).filter(WorkoutRecord.id == workout_id).delete()
        self.db.flush()


# =============================================================================
# Measurements
# =============================================================================


def _to_measurement(row: HealthMeasurementRecord) -> HealthMeasurement:
    return HealthMeasurement(
        id=row.id,
        subject_id=row.subject_id,
        weight_kg=row.weight_kg,
        height_cm=row.height_cm,
        measured_on=row.measured_on,
        blood_pressure_systolic=row.blood_pressure_systolic,
        blood_pressure_diastolic=row.blood_pressure_diastolic,
        resting_heart_rate=row.resting_heart_rate,
    )


class SqlMeasurementRepository(SqlRepository):
    @storage_operation("measurement.add")
    def add(self, measurement: HealthMeasurement) -> HealthMeasurement:
        row = HealthMeasurementRecord(
            subject_id=measurement.subject_id,
            weight_kg=measurement.weight_kg,
            height_cm=measurement.height_cm,
            bmi=measurement.bmi,
            category=measurement.category.value,
            blood_pressure_systolic=measurement.blood_pressure_systolic,
            blood_pressure_diastolic=measurement.blood_pressure_diastolic,
            resting_heart_rate=measurement.resting_heart_rate,
            measured_on=measurement.measured_on,
        )
        self.db.add(row)
        self.db.flush()
        self.db.refresh(row)
        return _to_measurement(row)

    @storage_operation("measurement.latest")
    def latest(self, subject_id: int) -> Optional[HealthMeasurement]:
        row = (
            self.db.query(HealthMeasurementRecord)
            .filter(HealthMeasurementRecord.subject_id == subject_id)
            .order_by(HealthMeasurementRecord.measured_on.desc(), HealthMeasurementRecord.id.desc())
            .first()
        )
        return _to_measurement(row) if row else None

    @storage_operation("measurement.history")
    def history(self, subject_id: int) -> list[HealthMeasurement]:
        """Newest first."""
        rows = (
            self.db.query(HealthMeasurementRecord)
            .filter(HealthMeasurementRecord.subject_id == subject_id)
            .order_by(HealthMeasurementRecord.measured_on.desc(), HealthMeasurementRecord.id.desc())
            .all()
        )
        return [_to_measurement(row) for row in rows]


# =============================================================================
# Goals
# =============================================================================


def _to_goal(row: GoalRecord) -> Goal:
    return Goal(
        id=row.id,
        subject_id=row.subject_id,
        goal_type=GoalType(row.goal_type),
        target_value=row.target_value,
        current_value=row.current_value or 0.0,
        start_date=row.start_date,
        end_date=row.end_date,
        status=GoalStatus(row.status),
        created_at=row.created_at,
    )


class SqlGoalRepository(SqlRepository):
    @storage_operation("goal.save")
    def save(self, goal: Goal) -> Goal:
        row = self.db.get(GoalRecord, goal.id) if goal.id is not None else None
        if row is None:
            row = GoalRecord(subject_id=goal.subject_id)
            self.db.add(row)
        row.goal_type = goal.goal_type.value
        row.target_value = goal.target_value
        row.current_value = goal.current_value
        row.start_date = goal.start_date
        row.end_date = goal.end_date
        row.status = goal.status.value
        self.db.flush()
        self.db.refresh(row)
        return _to_goal(row)

    @storage_operation("goal.get")
    def get(self, goal_id: int) -> Optional[Goal]:
        row = self.db.get(GoalRecord, goal_id)
        return _to_goal(row) if row else None

    @storage_operation("goal.list")
    def list_for_subject(self, subject_id: int) -> list[Goal]:
        rows = (
            self.db.query(GoalRecord)
            .filter(GoalRecord.subject_id == subject_id)
            .order_by(GoalRecord.end_date, GoalRecord.id)
            .all()
        )
        return [_to_goal(row) for row in rows]

    @storage_operation("goal.delete")
    def delete(self, goal_id: int) -> None:
        self.db.query(GoalRecord).filter(GoalRecord.id == goal_id).delete()
        self.db.flush()


# =============================================================================
# Alerts
# =============================================================================


def _to_alert(row: AlertRecord) -> Alert:
    return Alert(
        id=row.id,
        subject_id=row.subject_id,
        alert_type=AlertType(row.alert_type),
        message=row.message,
        severity=AlertSeverity(row.severity),
        read=bool(row.is_read),
        created_at=row.created_at,
    )


class SqlAlertRepository(SqlRepository):
    @storage_operation("alert.add")
    def add(self, alert: Alert) -> Alert:
        row = AlertRecord(
            subject_id=alert.subject_id,
            alert_type=alert.alert_type.value,
            message=alert.message,
            severity=alert.severity.value,
            is_read=alert.read,
            created_at=alert.created_at or datetime.utcnow(),
        )
        self.db.add(row)
        self.db.flush()
        self.db.refresh(row)
        return _to_alert(row)

    @storage_operation("alert.get")
    def get(self, alert_id: int) -> Optional[Alert]:
        row = self.db.get(AlertRecord, alert_id)
        return _to_alert(row) if row else None

    @storage_operation("alert.list")
    def list_for_subject(self, subject_id: int, unread_only: bool = False) -> list[Alert]:
        query = self.db.query(AlertRecord).filter(AlertRecord.subject_id == subject_id)
        if unread_only:
            query = query.filter(AlertRecord.is_read.is_(False))
        rows = query.order_by(AlertRecord.created_at.desc(), AlertRecord.id.desc()).all()
        return [_to_alert(row) for row in rows]

    @storage_operation("alert.mark_read")
    def mark_read(self, alert_id: int) -> Optional[Alert]:
        row = self.db.get(AlertRecord, alert_id)
        if row is None:
            return None
        row.is_read = True
        self.db.flush()
        self.db.refresh(row)
        return _to_alert(row)

    @storage_operation("alert.mark_all_read")
    def mark_all_read(self, subject_id: int) -> int:
        updated = (
            self.db.query(AlertRecord)
            .filter(AlertRecord.subject_id == subject_id, AlertRecord.is_read.is_(False))
            .update({AlertRecord.is_read: True}, synchronize_session=False)
        )
        self.db.flush()
        return updated

    @storage_operation("alert.unread_count")
    def unread_count(self, subject_id: int) -> int:
        return (
            self.db.query(func.count(AlertRecord.id))
            .filter(AlertRecord.subject_id == subject_id, AlertRecord.is_read.is_(False))
            .scalar()
            or 0
        )

    @storage_operation("alert.list_read_before")
    def list_read_before(self, cutoff: datetime) -> list[Alert]:
        rows = (
            self.db.query(AlertRecord)
            .filter(AlertRecord.is_read.is_(True), AlertRecord.created_at < cutoff)
            .all()
        )
        return [_to_alert(row) for row in rows]

    @storage_operation("alert.delete_many")
    def delete_many(self, alert_ids: list[int]) -> int:
        if not alert_ids:
            return 0
        deleted = (
            self.db.query(AlertRecord)
            .filter(AlertRecord.id.in_(alert_ids))
            .delete(synchronize_session=False)
        )
        self.db.flush()
        return deleted


# =============================================================================
# Trainer plans and subjects
# =============================================================================


def _to_plan(row: TrainerPlanRecord) -> TrainerPlan:
    return TrainerPlan(
        id=row.id,
        trainer_id=row.trainer_id,
        client_id=row.client_id,
        plan_type=PlanType(row.plan_type),
        title=row.title,
        description=row.description or "",
        created_at=row.created_at,
    )


class SqlPlanRepository(SqlRepository):
    @storage_operation("plan.add")
    def add(self, plan: TrainerPlan) -> TrainerPlan:
        row = TrainerPlanRecord(
            trainer_id=plan.trainer_id,
            client_id=plan.client_id,
            plan_type=plan.plan_type.value,
            title=plan.title,
            description=plan.description,
        )
        self.db.add(row)
        self.db.flush()
        self.db.refresh(row)
        return _to_plan(row)

    @storage_operation("plan.list_for_trainer")
    def list_for_trainer(self, trainer_id: int) -> list[TrainerPlan]:
        rows = (
            self.db.query(TrainerPlanRecord)
            .filter(TrainerPlanRecord.trainer_id == trainer_id)
            .order_by(TrainerPlanRecord.created_at.desc(), TrainerPlanRecord.id.desc())
            .all()
        )
        return [_to_plan(row) for row in rows]

    @storage_operation("plan.list_for_client")
    def list_for_client(self, client_id: int) -> list[TrainerPlan]:
        rows = (
            self.db.query(TrainerPlanRecord)
            .filter(TrainerPlanRecord.client_id == client_id)
            .order_by(TrainerPlanRecord.created_at.desc(), TrainerPlanRecord.id.desc())
            .all()
        )
        return [_to_plan(row) for row in rows]

    @storage_operation("plan.delete")
    def delete(self, plan_id: int) -> None:
        self.db.query(TrainerPlanRecord).filter(TrainerPlanRecord.id == plan_id).delete()
        self.db.flush()


class SqlSubjectRepository(SqlRepository):
    """Subjects and trainer assignments. Returns ORM rows; these are not engine inputs."""

    @storage_operation("subject.create")
    def create(self, display_name: str, role: Role, height_cm: Optional[float] = None) -> Subject:
        subject = Subject(display_name=display_name, role=role.value, height_cm=height_cm)
        self.db.add(subject)
        self.db.flush()
        self.db.refresh(subject)
        return subject

    @storage_operation("subject.get")
    def get(self, subject_id: int) -> Optional[Subject]:
        return self.db.get(Subject, subject_id)

    @storage_operation("subject.update_height")
    def update_height(self, subject_id: int, height_cm: float) -> None:
        subject = self.db.get(Subject, subject_id)
        if subject is not None:
            subject.height_cm = height_cm
            self.db.flush()

    @storage_operation("subject.assign")
    def assign(self, trainer_id: int, client_id: int) -> None:
        exists = (
            self.db.query(TrainerClient)
            .filter(TrainerClient.trainer_id == trainer_id, TrainerClient.client_id == client_id)
            .first()
        )
        if exists is None:
            self.db.add(TrainerClient(trainer_id=trainer_id, client_id=client_id))
            self.db.flush()

    @storage_operation("subject.unassign")
    def unassign(self, trainer_id: int, client_id: int) -> None:
        self.db.query(TrainerClient).filter(
            TrainerClient.trainer_id == trainer_id, TrainerClient.client_id == client_id
        ).delete()
        self.db.flush()

    @storage_operation("subject.clients")
    def clients_of(self, trainer_id: int) -> list[Subject]:
        return (
            self.db.query(Subject)
            .join(TrainerClient, TrainerClient.client_id == Subject.id)
            .filter(TrainerClient.trainer_id == trainer_id)
            .order_by(Subject.display_name)
            .all()
        )
