"""Goal lifecycle: creation, progress updates and completion detection."""

from dataclasses import replace
from datetime import date
from typing import NamedTuple, Optional

from fittrack.core.exceptions import InvalidGoal
from fittrack.engine.entities import Goal
from fittrack.engine.metric_types import GoalStatus, GoalType


class ProgressUpdate(NamedTuple):
    """Result of ``update_progress``. ``completed`` is set on the transition only."""

    goal: Goal
    completed: bool


def create_goal(
    subject_id: int,
    goal_type: GoalType,
    target_value: float,
    start_date: date,
    end_date: date,
) -> Goal:
    """Build a new in-progress goal with ``current_value`` 0.

    Raises:
        InvalidGoal: If the target is not positive or ``end_date`` precedes ``start_date``.
    """
    if target_value <= 0:
        raise InvalidGoal("Goal target must be positive", target_value=target_value)
    if end_date < start_date:
        raise InvalidGoal(
            "Goal end date is before its start date",
            start_date=start_date,
            end_date=end_date,
        )
    return Goal(
        subject_id=subject_id,
        goal_type=goal_type,
        target_value=target_value,
        start_date=start_date,
        end_date=end_date,
    )


def update_progress(goal: Goal, new_current_value: float) -> ProgressUpdate:
    """Replace the current value and complete the goal when it reaches the target.

    The value is a measured total, not a delta, so a lower value still replaces
    the stored one. Completion is one-way: a completed goal stays completed.

    Raises:
        InvalidGoal: If ``new_current_value`` is negative.
    """
    if new_current_value < 0:
        raise InvalidGoal("Goal progress cannot be negative", current_value=new_current_value)
    updated = replace(goal, current_value=new_current_value)
    if goal.status is GoalStatus.IN_PROGRESS and new_current_value >= goal.target_value:
        return ProgressUpdate(replace(updated, status=GoalStatus.COMPLETED), True)
    return ProgressUpdate(updated, False)


def progress_percentage(goal: Goal) -> float:
    """``min(100, current / target * 100)``; 0 for a zero target."""
    if goal.target_value <= 0:
        return 0.0
    return min(100.0, goal.current_value / goal.target_value * 100.0)


def effective_status(goal: Goal, today: Optional[date] = None) -> GoalStatus:
    """Stored status, except an in-progress goal past its end date reads as failed."""
    today = today or date.today()
    if goal.status is GoalStatus.IN_PROGRESS and today > goal.end_date:
        return GoalStatus.FAILED
    return goal.status


def is_active(goal: Goal, today: Optional[date] = None) -> bool:
    return effective_status(goal, today) is GoalStatus.IN_PROGRESS
