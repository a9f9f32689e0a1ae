"""Rule engine that turns measurement, goal and trainer events into alerts.

Each call looks at the facts it is given and returns at most one unsaved
alert. Persisting it is the caller's job.
"""

from datetime import datetime, timedelta
from typing import Optional

from fittrack.engine.entities import Alert, Goal, HealthMeasurement, TrainerPlan
from fittrack.engine.metric_types import (
    AlertSeverity,
    AlertType,
    BMICategory,
    PlanType,
)

DEFAULT_RETENTION_DAYS = 30


class AlertRuleEngine:
    """Stateless alert rules."""

    def __init__(self, clock=datetime.utcnow):
        self._clock = clock

    def _alert(
        self,
        subject_id: int,
        alert_type: AlertType,
        message: str,
        severity: AlertSeverity = AlertSeverity.INFO,
    ) -> Alert:
        return Alert(
            subject_id=subject_id,
            alert_type=alert_type,
            message=message,
            severity=severity,
            created_at=self._clock(),
        )

    def on_measurement(self, measurement: HealthMeasurement) -> Optional[Alert]:
        category = measurement.category
        if not category.needs_alert():
            return None
        severity = (
            AlertSeverity.CRITICAL if category is BMICategory.OBESE else AlertSeverity.WARNING
        )
        message = f"Your BMI is {measurement.bmi:.1f} ({category.label}). {category.advice}"
        return self._alert(
            measurement.subject_id, AlertType.for_bmi(category), message, severity
        )

    def on_goal_completed(self, goal: Goal) -> Alert:
        return self._alert(
            goal.subject_id,
            AlertType.GOAL_COMPLETED,
            f"Congratulations, completed {goal.goal_type.label} goal",
        )

    def on_trainer_assigned(self, client_id: int, trainer_name: str) -> Alert:
        return self._alert(
            client_id,
            AlertType.TRAINER_ASSIGNED,
            f"You have been assigned to trainer: {trainer_name}.",
        )

    def on_new_plan(self, plan: TrainerPlan) -> Alert:
        if plan.plan_type is PlanType.GENERAL:
            return self.on_new_suggestion(plan)
        return self._alert(
            plan.client_id,
            AlertType.NEW_PLAN,
            f"Your trainer has created a new {plan.plan_type.value} plan for you: {plan.title}",
        )

    def on_new_suggestion(self, plan: TrainerPlan) -> Alert:
        return self._alert(
            plan.client_id,
            AlertType.NEW_SUGGESTION,
            f"Your trainer has a new suggestion for you: {plan.title}",
        )

    def on_new_goal(self, goal: Goal) -> Alert:
        return self._alert(
            goal.subject_id,
            AlertType.NEW_GOAL,
            f"Your trainer has set a new {goal.goal_type.label} goal for you: "
            f"{goal.target_value:g}",
        )


def purge_cutoff(now: datetime, retention_days: int = DEFAULT_RETENTION_DAYS) -> datetime:
    """Read alerts created before this instant may be purged."""
    return now - timedelta(days=retention_days)


def is_purgeable(
    alert: Alert, now: datetime, retention_days: int = DEFAULT_RETENTION_DAYS
) -> bool:
    if not alert.read or alert.created_at is None:
        return False
    return alert.created_at < purge_cutoff(now, retention_days)
