"""
Rule-based assistant.

Answers a fixed set of topics with text built from engine results. Picking
the topic from a user's message is the caller's concern.
"""

from datetime import date, timedelta
from enum import Enum
from typing import Optional

from sqlalchemy.orm import Session

from fittrack.engine import goals as goal_engine
from fittrack.engine.bmi import health_assessment, ideal_weight_range, personalized_targets
from fittrack.engine.knowledge import KnowledgeBase, TipCategory, load_knowledge_base
from fittrack.services import get_local_today
from fittrack.services.tracking import TrackingService


class AssistantTopic(str, Enum):
    BMI = "bmi"
    GOALS = "goals"
    WEEKLY_SUMMARY = "weekly_summary"
    PERSONAL_PLAN = "personal_plan"
    TIP = "tip"
    MOTIVATION = "motivation"


class AssistantService:
    def __init__(self, db: Session, knowledge: Optional[KnowledgeBase] = None):
        self.tracking = TrackingService(db)
        self.knowledge = knowledge or load_knowledge_base()

    def respond(
        self,
        subject_id: int,
        topic: AssistantTopic,
        today: Optional[date] = None,
        tip_category: TipCategory = TipCategory.GENERAL,
    ) -> str:
        self.tracking.require_subject(subject_id)
        today = today or get_local_today()
        if topic is AssistantTopic.BMI:
            return self._bmi(subject_id)
        if topic is AssistantTopic.GOALS:
            return self._goals(subject_id, today)
        if topic is AssistantTopic.WEEKLY_SUMMARY:
            return self._weekly(subject_id, today)
        if topic is AssistantTopic.PERSONAL_PLAN:
            return self._personal_plan(subject_id)
        if topic is AssistantTopic.MOTIVATION:
            return self.knowledge.quote(today.toordinal())
        return self.knowledge.tip(tip_category, today.toordinal())

    def _bmi(self, subject_id: int) -> str:
        latest = self.tracking.latest_measurement(subject_id)
        if latest is None:
            return "No health metrics recorded yet. Please record your weight and height."
        assessment = health_assessment(latest.bmi)
        low, high = ideal_weight_range(latest.height_cm)
        return (
            f"Current BMI: {assessment['bmi']:.1f}\n"
            f"Category: {assessment['label']} ({assessment['range']})\n"
            f"Ideal weight for {latest.height_cm:.0f} cm: {low:.1f} - {high:.1f} kg\n\n"
            f"Recommendation: {assessment['advice']}"
        )

    def _goals(self, subject_id: int, today: date) -> str:
        goals = self.tracking.list_goals(subject_id, active_only=True, today=today)
        if not goals:
            return "You have no active goals. Set one to start tracking your progress."
        lines = ["Your active goals:"]
        for goal in goals:
            pct = goal_engine.progress_percentage(goal)
            lines.append(
                f"- {goal.goal_type.label}: {goal.current_value:g} / {goal.target_value:g} "
                f"({pct:.0f}%), due {goal.end_date.isoformat()}"
            )
        return "\n".join(lines)

    def _weekly(self, subject_id: int, today: date) -> str:
        start = today - timedelta(days=6)
        week = self.tracking.aggregation.window_summary(subject_id, start, today)
        return (
            f"Last 7 days:\n"
            f"- Steps: {week['totalSteps']:,} (avg {week['avgSteps']:,.0f} per logged day)\n"
            f"- Days at step goal: {week['daysGoalAchieved']}\n"
            f"- Workouts: {week['workoutCount']} ({week['totalWorkoutDuration']} min)\n"
            f"- Calories: {week['caloriesConsumed']:,} in / {week['caloriesBurned']:,} out"
        )

    def _personal_plan(self, subject_id: int) -> str:
        latest = self.tracking.latest_measurement(subject_id)
        if latest is None:
            return "Please record your health metrics first to get personalized goals."
        targets = personalized_targets(latest.category, latest.height_cm)
        lines = [f"{index}. {item}" for index, item in enumerate(targets["recommendations"], 1)]
        if targets["target_weight_kg"] is not None:
            lines.append(f"{len(lines) + 1}. Target weight: {targets['target_weight_kg']:.1f} kg")
        return "Personalized goals:\n" + "\n".join(lines)
