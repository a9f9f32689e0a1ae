"""Tests for the alert rule engine."""

from datetime import date, datetime

import pytest

from fittrack.engine.alerts import AlertRuleEngine, is_purgeable, purge_cutoff
from fittrack.engine.entities import Alert, HealthMeasurement, TrainerPlan
from fittrack.engine.goals import create_goal
from fittrack.engine.metric_types import AlertSeverity, AlertType, GoalType, PlanType

NOW = datetime(2026, 3, 15, 12, 0)


@pytest.fixture
def rules() -> AlertRuleEngine:
    return AlertRuleEngine(clock=lambda: NOW)


def measurement(weight: float, height: float = 175) -> HealthMeasurement:
    return HealthMeasurement(1, weight, height, date(2026, 3, 15))


class TestMeasurementRule:
    """One alert per non-Normal measurement."""

    def test_normal_bmi_raises_nothing(self, rules):
        assert rules.on_measurement(measurement(70)) is None

    def test_obese_is_critical(self, rules):
        alert = rules.on_measurement(measurement(95))
        assert alert.alert_type is AlertType.BMI_OBESE
        assert alert.severity is AlertSeverity.CRITICAL
        assert alert.message.startswith("Your BMI is 31.0 (Obese).")
        assert alert.read is False
        assert alert.created_at == NOW

    @pytest.mark.parametrize(
        "weight,alert_type",
        [(50, AlertType.BMI_UNDERWEIGHT), (80, AlertType.BMI_OVERWEIGHT)],
    )
    def test_other_bands_warn(self, rules, weight, alert_type):
        alert = rules.on_measurement(measurement(weight))
        assert alert.alert_type is alert_type
        assert alert.severity is AlertSeverity.WARNING


class TestEventRules:
    def test_goal_completed(self, rules):
        goal = create_goal(1, GoalType.STEPS, 10000, date(2026, 3, 1), date(2026, 3, 31))
        alert = rules.on_goal_completed(goal)
        assert alert.alert_type is AlertType.GOAL_COMPLETED
        assert alert.severity is AlertSeverity.INFO
        assert "Steps" in alert.message

    def test_trainer_assigned(self, rules):
        alert = rules.on_trainer_assigned(7, "Coach Sam")
        assert alert.subject_id == 7
        assert alert.alert_type is AlertType.TRAINER_ASSIGNED
        assert "Coach Sam" in alert.message

    def test_workout_plan(self, rules):
        plan = TrainerPlan(2, 7, PlanType.WORKOUT, "Leg day")
        alert = rules.on_new_plan(plan)
        assert alert.subject_id == 7
        assert alert.alert_type is AlertType.NEW_PLAN

    def test_general_plan_is_a_suggestion(self, rules):
        plan = TrainerPlan(2, 7, PlanType.GENERAL, "Sleep more")
        assert rules.on_new_plan(plan).alert_type is AlertType.NEW_SUGGESTION

    def test_new_goal(self, rules):
        goal = create_goal(7, GoalType.WORKOUT_DURATION, 300, date(2026, 3, 1), date(2026, 3, 31))
        alert = rules.on_new_goal(goal)
        assert alert.alert_type is AlertType.NEW_GOAL
        assert "300" in alert.message


class TestRetention:
    def test_cutoff(self):
        assert purge_cutoff(NOW, 30) == datetime(2026, 2, 13, 12, 0)

    def test_only_old_read_alerts_are_purgeable(self):
        old = datetime(2026, 1, 1)
        read_old = Alert(1, AlertType.NEW_PLAN, "x", read=True, created_at=old)
        unread_old = Alert(1, AlertType.NEW_PLAN, "x", read=False, created_at=old)
        read_recent = Alert(1, AlertType.NEW_PLAN, "x", read=True, created_at=NOW)
        assert is_purgeable(read_old, NOW)
        assert not is_purgeable(unread_old, NOW)
        assert not is_purgeable(read_recent, NOW)
