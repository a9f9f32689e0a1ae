"""
Trainer operations.

Client assignment, plans and goals for clients (each notifying the client),
plus the progress and trend views a trainer uses to monitor clients.
"""

from datetime import date
from typing import Optional

import structlog
from sqlalchemy.orm import Session

from fittrack.core.exceptions import NotFoundError, ValidationError
from fittrack.engine.aggregation import check_range
from fittrack.engine.bmi import ideal_weight_range
from fittrack.engine.entities import Goal, TrainerPlan
from fittrack.engine.metric_types import ActivityMetric, GoalType, PlanType, Role
from fittrack.engine.trends import TrendAnalyzer
from fittrack.models import Subject
from fittrack.repositories import SqlPlanRepository, transactional
from fittrack.services import get_local_today
from fittrack.services.tracking import TrackingService

logger = structlog.get_logger()


class TrainerService:
    """Service for trainers monitoring and guiding their clients."""

    def __init__(self, db: Session, tracking: Optional[TrackingService] = None):
        self.db = db
        self.tracking = tracking or TrackingService(db)
        self.plans = SqlPlanRepository(db)
        self.subjects = self.tracking.subjects
        self.aggregation = self.tracking.aggregation
        self.trends = TrendAnalyzer(self.aggregation)

    def _require_role(self, subject_id: int, role: Role) -> Subject:
        subject = self.tracking.require_subject(subject_id)
        if subject.role != role.value:
            raise ValidationError("role", f"subject {subject_id} is not a {role.value}")
        return subject

    # =========================================================================
    # Client management
    # =========================================================================

    @transactional
    def assign_client(self, trainer_id: int, client_id: int) -> None:
        trainer = self._require_role(trainer_id, Role.TRAINER)
        self._require_role(client_id, Role.INDIVIDUAL)
        self.subjects.assign(trainer_id, client_id)
        logger.info("client_assigned", trainer_id=trainer_id, client_id=client_id)
        self.tracking.emit_alert(
            self.tracking.alert_rules.on_trainer_assigned(client_id, trainer.display_name)
        )

    @transactional
    def remove_client(self, trainer_id: int, client_id: int) -> None:
        self.ensure_client(trainer_id, client_id)
        self.subjects.unassign(trainer_id, client_id)
        logger.info("client_removed", trainer_id=trainer_id, client_id=client_id)

    def list_clients(self, trainer_id: int) -> list[Subject]:
        self._require_role(trainer_id, Role.TRAINER)
        return self.subjects.clients_of(trainer_id)

    # =========================================================================
    # Plans and goals
    # =========================================================================

    @transactional
    def create_plan(
        self,
        trainer_id: int,
        client_id: int,
        plan_type: PlanType,
        title: str,
        description: str = "",
    ) -> TrainerPlan:
        self._require_role(trainer_id, Role.TRAINER)
        self.tracking.require_subject(client_id)
        plan = self.plans.add(
            TrainerPlan(
                trainer_id=trainer_id,
                client_id=client_id,
                plan_type=plan_type,
                title=title,
                description=description,
            )
        )
        logger.info("plan_created", trainer_id=trainer_id, client_id=client_id, plan_id=plan.id)
        self.tracking.emit_alert(self.tracking.alert_rules.on_new_plan(plan))
        return plan

    def list_plans(self, trainer_id: int) -> list[TrainerPlan]:
        return self.plans.list_for_trainer(trainer_id)

    def list_client_plans(self, client_id: int) -> list[TrainerPlan]:
        return self.plans.list_for_client(client_id)

    @transactional
    def delete_plan(self, plan_id: int) -> None:
        self.plans.delete(plan_id)

    @transactional
    def create_goal_for_client(
        self,
        trainer_id: int,
        client_id: int,
        goal_type: GoalType,
        target_value: float,
        start_date: date,
        end_date: date,
    ) -> Goal:
        self._require_role(trainer_id, Role.TRAINER)
        goal = self.tracking.create_goal(client_id, goal_type, target_value, start_date, end_date)
        self.tracking.emit_alert(self.tracking.alert_rules.on_new_goal(goal))
        return goal

    # =========================================================================
    # Progress monitoring
    # =========================================================================

    def client_steps_progress(self, client_id: int, start: date, end: date) -> dict:
        check_range(start, end)
        logs = self.tracking.activity.list_logs(client_id, start, end)
        progress = {
            "logs": logs,
            "totalSteps": self.aggregation.total_steps(client_id, start, end),
            "averageSteps": self.aggregation.average_steps(client_id, start, end),
            "daysGoalAchieved": self.aggregation.days_goal_achieved(client_id, start, end),
        }
        if logs:
            progress["bestDay"] = self.trends.best_day(client_id, start, end, ActivityMetric.STEPS)
            progress["worstDay"] = self.trends.worst_day(
                client_id, start, end, ActivityMetric.STEPS
            )
        return progress

    def client_calories_progress(self, client_id: int, start: date, end: date) -> dict:
        check_range(start, end)
        logs = self.tracking.activity.list_logs(client_id, start, end)
        consumed = self.aggregation.total_calories_consumed(client_id, start, end)
        burned = self.aggregation.total_calories_burned(client_id, start, end)
        return {
            "logs": logs,
            "totalCaloriesConsumed": consumed,
            "totalCaloriesBurned": burned,
            "netCalories": consumed - burned,
            "averageCaloriesConsumed": consumed / len(logs) if logs else 0.0,
            "averageCaloriesBurned": burned / len(logs) if logs else 0.0,
        }

    def client_workout_progress(self, client_id: int, start: date, end: date) -> dict:
        check_range(start, end)
        workouts = self.tracking.workouts.list_workouts(client_id, start, end)
        total_duration = sum(w.duration_minutes for w in workouts)
        progress = {
            "workouts": workouts,
            "totalDuration": total_duration,
            "totalCaloriesBurned": sum(w.calories_burned or 0 for w in workouts),
            "workoutCount": len(workouts),
            "typeBreakdown": self.aggregation.workout_type_breakdown(client_id, start, end),
        }
        if workouts:
            progress["averageWorkoutDuration"] = total_duration / len(workouts)
        return progress

    def client_health_metrics(self, client_id: int) -> dict:
        subject = self.tracking.require_subject(client_id)
        history = self.tracking.measurement_history(client_id)
        metrics = {
            "subject": subject,
            "latest": history[0] if history else None,
            "history": history,
        }
        if len(history) >= 2:
            latest, oldest = history[0], history[-1]
            metrics["weightChange"] = latest.weight_kg - oldest.weight_kg
            metrics["bmiChange"] = latest.bmi - oldest.bmi
        if subject.height_cm:
            metrics["idealWeightRange"] = ideal_weight_range(subject.height_cm)
        return metrics

    def analyze_trends(self, client_id: int, weeks: int, today: Optional[date] = None) -> dict:
        self.tracking.require_subject(client_id)
        return self.trends.analyze(client_id, weeks, today or get_local_today())

    def ensure_client(self, trainer_id: int, client_id: int) -> None:
        """Raise NotFoundError unless the client is assigned to the trainer."""
        if all(client.id != client_id for client in self.list_clients(trainer_id)):
            raise NotFoundError("Client", client_id)
