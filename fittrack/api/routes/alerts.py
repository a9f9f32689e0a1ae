from typing import Optional

from fastapi import APIRouter, Depends, Query

from fittrack.api.deps import get_tracking_service
from fittrack.api.responses import alert_to_response
from fittrack.services.tracking import TrackingService

router = APIRouter()


@router.get("")
def list_alerts(
    subject_id: int,
    unread_only: bool = False,
    tracking: TrackingService = Depends(get_tracking_service),
):
    """Alerts for a subject, newest first."""
    tracking.require_subject(subject_id)
    alerts = tracking.list_alerts(subject_id, unread_only=unread_only)
    return [alert_to_response(alert) for alert in alerts]


@router.get("/unread-count")
def unread_count(
    subject_id: int,
    tracking: TrackingService = Depends(get_tracking_service),
):
    tracking.require_subject(subject_id)
    return {"subject_id": subject_id, "unread": tracking.unread_alert_count(subject_id)}


@router.put("/read-all")
def mark_all_read(
    subject_id: int,
    tracking: TrackingService = Depends(get_tracking_service),
):
    tracking.require_subject(subject_id)
    return {"updated": tracking.mark_all_alerts_read(subject_id)}


@router.put("/{alert_id}/read")
def mark_read(
    alert_id: int,
    tracking: TrackingService = Depends(get_tracking_service),
):
    return alert_to_response(tracking.mark_alert_read(alert_id))


@router.post("/purge")
def purge_read_alerts(
    retention_days: Optional[int] = Query(default=None, ge=1),
    tracking: TrackingService = Depends(get_tracking_service),
):
    """Delete read alerts older than the retention window."""
    return {"deleted": tracking.purge_read_alerts(retention_days=retention_days)}
