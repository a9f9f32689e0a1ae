"""Dashboard payloads.

The key names in these mappings are a contract with the UI; keep them stable.
"""

from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from fittrack.engine import goals as goal_engine
from fittrack.engine.entities import Goal
from fittrack.engine.metric_types import ActivityMetric, BMICategory
from fittrack.services import get_local_today
from fittrack.services.tracking import TrackingService
from fittrack.services.trainer import TrainerService

RECENT_PLAN_LIMIT = 5


def goal_with_progress(goal: Goal, today: date) -> dict:
    return {
        "id": goal.id,
        "goalType": goal.goal_type.value,
        "targetValue": goal.target_value,
        "currentValue": goal.current_value,
        "progressPercentage": round(goal_engine.progress_percentage(goal), 1),
        "status": goal_engine.effective_status(goal, today).value,
        "startDate": goal.start_date,
        "endDate": goal.end_date,
    }


class DashboardService:
    def __init__(self, db: Session):
        self.tracking = TrackingService(db)
        self.trainer = TrainerService(db, tracking=self.tracking)
        self.aggregation = self.tracking.aggregation
        self.settings = self.tracking.settings

    def _window(self, today: date, days: int) -> tuple[date, date]:
        return today - timedelta(days=days - 1), today

    def individual_dashboard(self, subject_id: int, today: Optional[date] = None) -> dict:
        self.tracking.require_subject(subject_id)
        today = today or get_local_today()
        week_start, _ = self._window(today, self.settings.weekly_window_days)
        month_start, _ = self._window(today, self.settings.monthly_window_days)

        today_stats = self.aggregation.window_summary(subject_id, today, today)
        weekly = self.aggregation.window_summary(subject_id, week_start, today)
        monthly = self.aggregation.window_summary(subject_id, month_start, today)

        latest = self.tracking.latest_measurement(subject_id)
        active_goals = self.tracking.list_goals(subject_id, active_only=True, today=today)
        chart = self.aggregation.daily_series(subject_id, week_start, today, ActivityMetric.STEPS)

        return {
            "todaySteps": today_stats["totalSteps"],
            "todayCaloriesConsumed": today_stats["caloriesConsumed"],
            "todayCaloriesBurned": today_stats["caloriesBurned"],
            "todayWorkoutDuration": today_stats["totalWorkoutDuration"],
            "todayWorkoutCount": today_stats["workoutCount"],
            "weeklyTotalSteps": weekly["totalSteps"],
            "weeklyAverageSteps": weekly["avgSteps"],
            "weekly": weekly,
            "monthly": monthly,
            "currentBMI": round(latest.bmi, 2) if latest else None,
            "bmiCategory": latest.category.value if latest else None,
            "activeGoalsWithProgress": [goal_with_progress(goal, today) for goal in active_goals],
            "unreadAlertCount": self.tracking.unread_alert_count(subject_id),
            "weeklyStepsChart": [{"date": point.day, "steps": point.value} for point in chart],
        }

    def trainer_dashboard(self, trainer_id: int, today: Optional[date] = None) -> dict:
        today = today or get_local_today()
        week_start, _ = self._window(today, self.settings.weekly_window_days)
        clients = self.trainer.list_clients(trainer_id)

        summaries = []
        bmi_categories: dict[str, int] = {}
        total_active_goals = 0
        for client in clients:
            weekly = self.aggregation.window_summary(client.id, week_start, today)
            latest = self.tracking.latest_measurement(client.id)
            active = self.tracking.list_goals(client.id, active_only=True, today=today)
            summary = {
                "clientId": client.id,
                "displayName": client.display_name,
                "weeklySteps": weekly["totalSteps"],
                "weeklyWorkouts": weekly["workoutCount"],
                "bmi": round(latest.bmi, 2) if latest else None,
                "bmiCategory": latest.category.value if latest else None,
                "activeGoals": len(active),
            }
            if latest:
                key = latest.category.value
                bmi_categories[key] = bmi_categories.get(key, 0) + 1
            total_active_goals += len(active)
            summaries.append(summary)

        plans = self.trainer.list_plans(trainer_id)
        return {
            "totalClients": len(clients),
            "clients": summaries,
            "totalActiveGoals": total_active_goals,
            "bmiCategories": bmi_categories,
            "totalPlans": len(plans),
            "recentPlans": plans[:RECENT_PLAN_LIMIT],
            "clientsNeedingAttention": [s for s in summaries if self._needs_attention(s)],
        }

    def _needs_attention(self, summary: dict) -> bool:
        category = summary["bmiCategory"]
        unhealthy = category is not None and BMICategory(category).needs_alert()
        return (
            summary["weeklySteps"] < self.settings.attention_weekly_steps
            or summary["weeklyWorkouts"] < self.settings.attention_weekly_workouts
            or unhealthy
        )
