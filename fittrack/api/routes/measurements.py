from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from fittrack.api.deps import get_tracking_service
from fittrack.api.responses import alert_to_response, measurement_to_response
from fittrack.core.exceptions import NotFoundError
from fittrack.engine.bmi import health_assessment, ideal_weight_range, personalized_targets
from fittrack.services.tracking import TrackingService

router = APIRouter()


class MeasurementCreate(BaseModel):
    weight_kg: float = Field(gt=0)
    height_cm: float = Field(gt=0)
    measured_on: Optional[date] = None
    blood_pressure_systolic: Optional[int] = Field(default=None, gt=0)
    blood_pressure_diastolic: Optional[int] = Field(default=None, gt=0)
    resting_heart_rate: Optional[int] = Field(default=None, gt=0)


@router.get("/ideal-weight")
def ideal_weight(height_cm: float = Query(gt=0)):
    """Weight range that keeps BMI in the Normal band for a height."""
    low, high = ideal_weight_range(height_cm)
    return {"height_cm": height_cm, "min_kg": round(low, 1), "max_kg": round(high, 1)}


@router.post("/{subject_id}", status_code=201)
def record_measurement(
    subject_id: int,
    data: MeasurementCreate,
    tracking: TrackingService = Depends(get_tracking_service),
):
    """Record weight and height; returns the BMI alert when one was raised."""
    result = tracking.record_measurement(
        subject_id,
        data.weight_kg,
        data.height_cm,
        measured_on=data.measured_on,
        blood_pressure_systolic=data.blood_pressure_systolic,
        blood_pressure_diastolic=data.blood_pressure_diastolic,
        resting_heart_rate=data.resting_heart_rate,
    )
    return {
        "measurement": measurement_to_response(result.measurement),
        "alert": alert_to_response(result.alert) if result.alert else None,
    }


@router.get("/{subject_id}/latest")
def latest_measurement(
    subject_id: int,
    tracking: TrackingService = Depends(get_tracking_service),
):
    tracking.require_subject(subject_id)
    latest = tracking.latest_measurement(subject_id)
    if latest is None:
        raise NotFoundError("Measurement", subject_id)
    return measurement_to_response(latest)


@router.get("/{subject_id}/history")
def measurement_history(
    subject_id: int,
    tracking: TrackingService = Depends(get_tracking_service),
):
    tracking.require_subject(subject_id)
    return [measurement_to_response(m) for m in tracking.measurement_history(subject_id)]


@router.get("/{subject_id}/assessment")
def assessment(
    subject_id: int,
    tracking: TrackingService = Depends(get_tracking_service),
):
    """Latest BMI assessment with category-specific targets."""
    tracking.require_subject(subject_id)
    latest = tracking.latest_measurement(subject_id)
    if latest is None:
        raise NotFoundError("Measurement", subject_id)
    return {
        "assessment": health_assessment(latest.bmi),
        "targets": personalized_targets(latest.category, latest.height_cm),
    }
