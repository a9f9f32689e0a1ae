from datetime import date, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from fittrack.api.deps import get_trainer_service
from fittrack.api.responses import (
    activity_log_to_response,
    daily_value_to_response,
    goal_to_response,
    measurement_to_response,
    plan_to_response,
    subject_to_response,
    workout_to_response,
)
from fittrack.engine.metric_types import GoalType, PlanType
from fittrack.services import get_local_today
from fittrack.services.trainer import TrainerService

router = APIRouter()


# =========================================================================
# Request Models
# =========================================================================


class PlanCreate(BaseModel):
    client_id: int
    plan_type: PlanType
    title: str = Field(min_length=1, max_length=255)
    description: str = ""


class ClientGoalCreate(BaseModel):
    goal_type: GoalType
    target_value: float
    start_date: date
    end_date: date


def _window(start: Optional[date], end: Optional[date]) -> tuple[date, date]:
    end = end or get_local_today()
    return start or end - timedelta(days=6), end


# =========================================================================
# Clients
# =========================================================================


@router.get("/{trainer_id}/clients")
def list_clients(
    trainer_id: int,
    trainer: TrainerService = Depends(get_trainer_service),
):
    return [subject_to_response(client) for client in trainer.list_clients(trainer_id)]


@router.post("/{trainer_id}/clients/{client_id}", status_code=201)
def assign_client(
    trainer_id: int,
    client_id: int,
    trainer: TrainerService = Depends(get_trainer_service),
):
    """Assign a client; the client is notified."""
    trainer.assign_client(trainer_id, client_id)
    return {"trainer_id": trainer_id, "client_id": client_id}


@router.delete("/{trainer_id}/clients/{client_id}", status_code=204)
def remove_client(
    trainer_id: int,
    client_id: int,
    trainer: TrainerService = Depends(get_trainer_service),
):
    trainer.remove_client(trainer_id, client_id)


# =========================================================================
# Plans and client goals
# =========================================================================


@router.post("/{trainer_id}/plans", status_code=201)
def create_plan(
    trainer_id: int,
    data: PlanCreate,
    trainer: TrainerService = Depends(get_trainer_service),
):
    trainer.ensure_client(trainer_id, data.client_id)
    plan = trainer.create_plan(
        trainer_id, data.client_id, data.plan_type, data.title, data.description
    )
    return plan_to_response(plan)


@router.get("/{trainer_id}/plans")
def list_plans(
    trainer_id: int,
    trainer: TrainerService = Depends(get_trainer_service),
):
    return [plan_to_response(plan) for plan in trainer.list_plans(trainer_id)]


@router.delete("/plans/{plan_id}", status_code=204)
def delete_plan(
    plan_id: int,
    trainer: TrainerService = Depends(get_trainer_service),
):
    trainer.delete_plan(plan_id)


@router.post("/{trainer_id}/clients/{client_id}/goals", status_code=201)
def create_client_goal(
    trainer_id: int,
    client_id: int,
    data: ClientGoalCreate,
    trainer: TrainerService = Depends(get_trainer_service),
):
    trainer.ensure_client(trainer_id, client_id)
    goal = trainer.create_goal_for_client(
        trainer_id, client_id, data.goal_type, data.target_value, data.start_date, data.end_date
    )
    return goal_to_response(goal, get_local_today())


# =========================================================================
# Client progress
# =========================================================================


@router.get("/{trainer_id}/clients/{client_id}/steps")
def client_steps(
    trainer_id: int,
    client_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
    trainer: TrainerService = Depends(get_trainer_service),
):
    trainer.ensure_client(trainer_id, client_id)
    progress = trainer.client_steps_progress(client_id, *_window(start, end))
    progress["logs"] = [activity_log_to_response(log) for log in progress["logs"]]
    for key in ("bestDay", "worstDay"):
        if key in progress:
            progress[key] = daily_value_to_response(progress[key])
    return progress


@router.get("/{trainer_id}/clients/{client_id}/calories")
def client_calories(
    trainer_id: int,
    client_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
    trainer: TrainerService = Depends(get_trainer_service),
):
    trainer.ensure_client(trainer_id, client_id)
    progress = trainer.client_calories_progress(client_id, *_window(start, end))
    progress["logs"] = [activity_log_to_response(log) for log in progress["logs"]]
    return progress


@router.get("/{trainer_id}/clients/{client_id}/workouts")
def client_workouts(
    trainer_id: int,
    client_id: int,
    start: Optional[date] = None,
    end: Optional[date] = None,
    trainer: TrainerService = Depends(get_trainer_service),
):
    trainer.ensure_client(trainer_id, client_id)
    progress = trainer.client_workout_progress(client_id, *_window(start, end))
    progress["workouts"] = [workout_to_response(w) for w in progress["workouts"]]
    return progress


@router.get("/{trainer_id}/clients/{client_id}/health")
def client_health(
    trainer_id: int,
    client_id: int,
    trainer: TrainerService = Depends(get_trainer_service),
):
    trainer.ensure_client(trainer_id, client_id)
    metrics = trainer.client_health_metrics(client_id)
    metrics["subject"] = subject_to_response(metrics["subject"])
    metrics["history"] = [measurement_to_response(m) for m in metrics["history"]]
    if metrics["latest"] is not None:
        metrics["latest"] = measurement_to_response(metrics["latest"])
    if "idealWeightRange" in metrics:
        low, high = metrics["idealWeightRange"]
        metrics["idealWeightRange"] = {"min_kg": round(low, 1), "max_kg": round(high, 1)}
    return metrics


@router.get("/{trainer_id}/clients/{client_id}/trends")
def client_trends(
    trainer_id: int,
    client_id: int,
    weeks: Optional[int] = Query(default=None, ge=1, le=52),
    trainer: TrainerService = Depends(get_trainer_service),
):
    trainer.ensure_client(trainer_id, client_id)
    return trainer.analyze_trends(client_id, weeks or trainer.tracking.settings.trend_weeks)
