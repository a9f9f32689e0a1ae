from fastapi import APIRouter, Depends

from fittrack.api.deps import get_dashboard_service
from fittrack.api.responses import plan_to_response
from fittrack.services.dashboard import DashboardService

router = APIRouter()


@router.get("/{subject_id}")
def individual_dashboard(
    subject_id: int,
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    """Today, weekly and monthly figures plus goals and unread alerts."""
    return dashboard.individual_dashboard(subject_id)


@router.get("/trainer/{trainer_id}")
def trainer_dashboard(
    trainer_id: int,
    dashboard: DashboardService = Depends(get_dashboard_service),
):
    """Overview of all clients with the ones needing attention."""
    data = dashboard.trainer_dashboard(trainer_id)
    data["recentPlans"] = [plan_to_response(plan) for plan in data["recentPlans"]]
    return data
