from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from fittrack.api.deps import get_tracking_service, get_trainer_service
from fittrack.api.responses import plan_to_response, subject_to_response
from fittrack.engine.metric_types import Role
from fittrack.services.tracking import TrackingService
from fittrack.services.trainer import TrainerService

router = APIRouter()


class SubjectCreate(BaseModel):
    display_name: str = Field(min_length=1, max_length=255)
    role: Role = Role.INDIVIDUAL
    height_cm: Optional[float] = Field(default=None, gt=0)


@router.post("", status_code=201)
def create_subject(
    data: SubjectCreate,
    tracking: TrackingService = Depends(get_tracking_service),
):
    """Register an individual or a trainer."""
    subject = tracking.create_subject(data.display_name, data.role, data.height_cm)
    return subject_to_response(subject)


@router.get("/{subject_id}")
def get_subject(
    subject_id: int,
    tracking: TrackingService = Depends(get_tracking_service),
):
    return subject_to_response(tracking.require_subject(subject_id))


@router.get("/{subject_id}/plans")
def list_subject_plans(
    subject_id: int,
    trainer: TrainerService = Depends(get_trainer_service),
):
    """Plans and suggestions trainers have written for this subject."""
    trainer.tracking.require_subject(subject_id)
    return [plan_to_response(plan) for plan in trainer.list_client_plans(subject_id)]
