from datetime import date

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from fittrack.api.deps import get_tracking_service
from fittrack.api.responses import alert_to_response, goal_to_response
from fittrack.engine.metric_types import GoalType
from fittrack.services import get_local_today
from fittrack.services.tracking import TrackingService

router = APIRouter()


class GoalCreate(BaseModel):
    subject_id: int
    goal_type: GoalType
    target_value: float
    start_date: date
    end_date: date


class GoalProgress(BaseModel):
    current_value: float = Field(ge=0)


@router.post("", status_code=201)
def create_goal(
    data: GoalCreate,
    tracking: TrackingService = Depends(get_tracking_service),
):
    """Create a goal; target and date range are checked by the goal engine."""
    goal = tracking.create_goal(
        data.subject_id, data.goal_type, data.target_value, data.start_date, data.end_date
    )
    return goal_to_response(goal, get_local_today())


@router.get("")
def list_goals(
    subject_id: int,
    active_only: bool = False,
    tracking: TrackingService = Depends(get_tracking_service),
):
    today = get_local_today()
    goals = tracking.list_goals(subject_id, active_only=active_only, today=today)
    return [goal_to_response(goal, today) for goal in goals]


@router.get("/{goal_id}")
def get_goal(
    goal_id: int,
    tracking: TrackingService = Depends(get_tracking_service),
):
    return goal_to_response(tracking.get_goal(goal_id), get_local_today())


@router.put("/{goal_id}/progress")
def update_progress(
    goal_id: int,
    data: GoalProgress,
    tracking: TrackingService = Depends(get_tracking_service),
):
    """Set the current value; completion is one-way and alerts once."""
    result = tracking.update_goal_progress(goal_id, data.current_value)
    return {
        "goal": goal_to_response(result.goal, get_local_today()),
        "alert": alert_to_response(result.alert) if result.alert else None,
    }


@router.delete("/{goal_id}", status_code=204)
def delete_goal(
    goal_id: int,
    tracking: TrackingService = Depends(get_tracking_service),
):
    tracking.delete_goal(goal_id)
