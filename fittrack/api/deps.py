"""API dependencies for dependency injection."""

from fastapi import Depends
from sqlalchemy.orm import Session

from fittrack.database import get_db
from fittrack.services.assistant import AssistantService
from fittrack.services.dashboard import DashboardService
from fittrack.services.tracking import TrackingService
from fittrack.services.trainer import TrainerService


def get_tracking_service(db: Session = Depends(get_db)) -> TrackingService:
    """Tracking service bound to the request's session."""
    return TrackingService(db)


def get_trainer_service(
    tracking: TrackingService = Depends(get_tracking_service),
) -> TrainerService:
    return TrainerService(tracking.db, tracking=tracking)


def get_dashboard_service(db: Session = Depends(get_db)) -> DashboardService:
    return DashboardService(db)


def get_assistant_service(db: Session = Depends(get_db)) -> AssistantService:
    return AssistantService(db)
