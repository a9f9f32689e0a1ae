"""
Self-service tracking.

Logs activity and measurements for a subject, keeps goals in step with the
logged totals, and raises alerts through the rule engine.
"""

from dataclasses import replace
from datetime import date, datetime
from typing import NamedTuple, Optional

import structlog
from sqlalchemy.orm import Session

from fittrack.config import get_settings
from fittrack.core.exceptions import NotFoundError
from fittrack.engine import goals as goal_engine
from fittrack.engine.aggregation import AggregationEngine
from fittrack.engine.alerts import AlertRuleEngine, purge_cutoff
from fittrack.engine.entities import ActivityLog, Alert, Goal, HealthMeasurement, WorkoutEntry
from fittrack.engine.metric_types import (
    GOAL_METRICS,
    GoalStatus,
    GoalType,
    Intensity,
    Role,
    WorkoutType,
)
from fittrack.models import Subject
from fittrack.repositories import (
    SqlActivityRepository,
    SqlAlertRepository,
    SqlGoalRepository,
    SqlMeasurementRepository,
    SqlSubjectRepository,
    SqlWorkoutRepository,
    transactional,
)
from fittrack.services import get_local_today

logger = structlog.get_logger()


class MeasurementResult(NamedTuple):
    measurement: HealthMeasurement
    alert: Optional[Alert]


class GoalProgressResult(NamedTuple):
    goal: Goal
    alert: Optional[Alert]


class TrackingService:
    """Individual logging, goals and alerts for one request."""

    def __init__(self, db: Session, alert_rules: Optional[AlertRuleEngine] = None):
        self.db = db
        self.settings = get_settings()
        self.subjects = SqlSubjectRepository(db)
        self.activity = SqlActivityRepository(db)
        self.workouts = SqlWorkoutRepository(db)
        self.measurements = SqlMeasurementRepository(db)
        self.goals = SqlGoalRepository(db)
        self.alerts = SqlAlertRepository(db)
        self.alert_rules = alert_rules or AlertRuleEngine()
        self.aggregation = AggregationEngine(
            self.activity, self.workouts, self.settings.default_steps_goal
        )

    def require_subject(self, subject_id: int) -> Subject:
        subject = self.subjects.get(subject_id)
        if subject is None:
            raise NotFoundError("Subject", subject_id)
        return subject

    @transactional
    def create_subject(
        self, display_name: str, role: Role, height_cm: Optional[float] = None
    ) -> Subject:
        subject = self.subjects.create(display_name, role, height_cm)
        logger.info("subject_created", subject_id=subject.id, role=subject.role)
        return subject

    @transactional
    def emit_alert(self, alert: Optional[Alert]) -> Optional[Alert]:
        if alert is None:
            return None
        saved = self.alerts.add(alert)
        logger.info(
            "alert_created",
            subject_id=saved.subject_id,
            alert_type=saved.alert_type.value,
            severity=saved.severity.value,
        )
        return saved

    # =========================================================================
    # Activity logging
    # =========================================================================

    def _existing_or_blank(self, subject_id: int, day: date) -> ActivityLog:
        existing = self.activity.get_log(subject_id, day)
        if existing is not None:
            return existing
        return ActivityLog(
            subject_id=subject_id, log_date=day, steps_goal=self.settings.default_steps_goal
        )

    @transactional
    def log_steps(
        self,
        subject_id: int,
        steps: int,
        day: Optional[date] = None,
        steps_goal: Optional[int] = None,
    ) -> ActivityLog:
        """Overwrite the step count for a day, keeping its calorie fields."""
        self.require_subject(subject_id)
        day = day or get_local_today()
        current = self._existing_or_blank(subject_id, day)
        log = replace(current, step_count=steps, steps_goal=steps_goal or current.steps_goal)
        saved = self.activity.upsert_log(log)
        logger.info("steps_logged", subject_id=subject_id, day=str(day), steps=steps)
        self.refresh_goals(subject_id)
        return saved

    @transactional
    def log_calories(
        self,
        subject_id: int,
        calories_consumed: int,
        calories_burned: int = 0,
        day: Optional[date] = None,
    ) -> ActivityLog:
        """Overwrite the calorie fields for a day, keeping its step count."""
        self.require_subject(subject_id)
        day = day or get_local_today()
        current = self._existing_or_blank(subject_id, day)
        log = replace(
            current, calories_consumed=calories_consumed, calories_burned=calories_burned
        )
        saved = self.activity.upsert_log(log)
        logger.info(
            "calories_logged",
            subject_id=subject_id,
            day=str(day),
            consumed=calories_consumed,
            burned=calories_burned,
        )
        self.refresh_goals(subject_id)
        return saved

    @transactional
    def log_workout(
        self,
        subject_id: int,
        workout_type: WorkoutType,
        duration_minutes: int,
        day: Optional[date] = None,
        calories_burned: Optional[int] = None,
        intensity: Intensity = Intensity.MEDIUM,
        notes: Optional[str] = None,
    ) -> WorkoutEntry:
        self.require_subject(subject_id)
        workout = WorkoutEntry(
            subject_id=subject_id,
            workout_type=workout_type,
            duration_minutes=duration_minutes,
            workout_date=day or get_local_today(),
            calories_burned=calories_burned,
            intensity=intensity,
            notes=notes,
        )
        saved = self.workouts.add_workout(workout)
        logger.info(
            "workout_logged",
            subject_id=subject_id,
            workout_type=workout_type.value,
            duration_minutes=duration_minutes,
        )
        self.refresh_goals(subject_id)
        return saved

    @transactional
    def delete_workout(self, workout_id: int) -> None:
        workout = self.workouts.get_workout(workout_id)
        if workout is None:
            raise NotFoundError("Workout", workout_id)
        self.workouts.delete_workout(workout_id)
        logger.info("workout_deleted", subject_id=workout.subject_id, workout_id=workout_id)
        self.refresh_goals(workout.subject_id)

    # =========================================================================
    # Measurements
    # =========================================================================

    @transactional
    def record_measurement(
        self,
        subject_id: int,
        weight_kg: float,
        height_cm: float,
        measured_on: Optional[date] = None,
        blood_pressure_systolic: Optional[int] = None,
        blood_pressure_diastolic: Optional[int] = None,
        resting_heart_rate: Optional[int] = None,
    ) -> MeasurementResult:
        """Persist a measurement, update the subject's height and run the BMI rule."""
        self.require_subject(subject_id)
        measurement = HealthMeasurement(
            subject_id=subject_id,
            weight_kg=weight_kg,
            height_cm=height_cm,
            measured_on=measured_on or get_local_today(),
            blood_pressure_systolic=blood_pressure_systolic,
            blood_pressure_diastolic=blood_pressure_diastolic,
            resting_heart_rate=resting_heart_rate,
        )
        saved = self.measurements.add(measurement)
        self.subjects.update_height(subject_id, height_cm)
        logger.info(
            "measurement_recorded",
            subject_id=subject_id,
            bmi=round(saved.bmi, 2),
            category=saved.category.value,
        )
        alert = self.emit_alert(self.alert_rules.on_measurement(saved))
        return MeasurementResult(saved, alert)

    def latest_measurement(self, subject_id: int) -> Optional[HealthMeasurement]:
        return self.measurements.latest(subject_id)

    def measurement_history(self, subject_id: int) -> list[HealthMeasurement]:
        return self.measurements.history(subject_id)

    # =========================================================================
    # Goals
    # =========================================================================

    @transactional
    def create_goal(
        self,
        subject_id: int,
        goal_type: GoalType,
        target_value: float,
        start_date: date,
        end_date: date,
    ) -> Goal:
        self.require_subject(subject_id)
        goal = goal_engine.create_goal(subject_id, goal_type, target_value, start_date, end_date)
        saved = self.goals.save(goal)
        logger.info(
            "goal_created",
            subject_id=subject_id,
            goal_id=saved.id,
            goal_type=goal_type.value,
            target=target_value,
        )
        # Activity already logged inside the window counts toward the new goal
        self.refresh_goals(subject_id)
        return self.get_goal(saved.id)

    def get_goal(self, goal_id: int) -> Goal:
        goal = self.goals.get(goal_id)
        if goal is None:
            raise NotFoundError("Goal", goal_id)
        return goal

    def _apply_progress(self, goal: Goal, value: float) -> GoalProgressResult:
        update = goal_engine.update_progress(goal, value)
        saved = self.goals.save(update.goal)
        alert = None
        if update.completed:
            logger.info("goal_completed", subject_id=saved.subject_id, goal_id=saved.id)
            alert = self.emit_alert(self.alert_rules.on_goal_completed(saved))
        return GoalProgressResult(saved, alert)

    @transactional
    def update_goal_progress(self, goal_id: int, current_value: float) -> GoalProgressResult:
        return self._apply_progress(self.get_goal(goal_id), current_value)

    def list_goals(
        self, subject_id: int, active_only: bool = False, today: Optional[date] = None
    ) -> list[Goal]:
        self.require_subject(subject_id)
        goals = self.goals.list_for_subject(subject_id)
        if active_only:
            today = today or get_local_today()
            goals = [goal for goal in goals if goal_engine.is_active(goal, today)]
        return goals

    @transactional
    def refresh_goals(self, subject_id: int, today: Optional[date] = None) -> list[Goal]:
        """Recompute activity-driven goals from logged totals since each goal started.

        Returns the goals that completed on this refresh.
        """
        today = today or get_local_today()
        completed = []
        for goal in self.goals.list_for_subject(subject_id):
            metric = GOAL_METRICS.get(goal.goal_type)
            if metric is None or goal.status is not GoalStatus.IN_PROGRESS:
                continue
            window_end = min(today, goal.end_date)
            if window_end < goal.start_date:
                continue
            total = self.aggregation.metric_total(subject_id, goal.start_date, window_end, metric)
            if total == goal.current_value:
                continue
            result = self._apply_progress(goal, total)
            if result.alert is not None:
                completed.append(result.goal)
        return completed

    @transactional
    def delete_goal(self, goal_id: int) -> None:
        self.get_goal(goal_id)
        self.goals.delete(goal_id)

    # =========================================================================
    # Alerts
    # =========================================================================

    def list_alerts(self, subject_id: int, unread_only: bool = False) -> list[Alert]:
        return self.alerts.list_for_subject(subject_id, unread_only=unread_only)

    @transactional
    def mark_alert_read(self, alert_id: int) -> Alert:
        alert = self.alerts.mark_read(alert_id)
        if alert is None:
            raise NotFoundError("Alert", alert_id)
        return alert

    @transactional
    def mark_all_alerts_read(self, subject_id: int) -> int:
        return self.alerts.mark_all_read(subject_id)

    def unread_alert_count(self, subject_id: int) -> int:
        return self.alerts.unread_count(subject_id)

    @transactional
    def purge_read_alerts(
        self, now: Optional[datetime] = None, retention_days: Optional[int] = None
    ) -> int:
        """Delete read alerts older than the retention window."""
        cutoff = purge_cutoff(
            now or datetime.utcnow(), retention_days or self.settings.alert_retention_days
        )
        stale = self.alerts.list_read_before(cutoff)
        deleted = self.alerts.delete_many([alert.id for alert in stale])
        logger.info("read_alerts_purged", count=deleted, cutoff=cutoff.isoformat())
        return deleted
