"""Custom exception classes for FitTrack."""

from typing import Any, Optional


class FitTrackException(Exception):
    """Base exception for FitTrack."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(FitTrackException):
    """Resource not found error."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            message=f"{resource} not found: {identifier}",
            code="NOT_FOUND",
            status_code=404,
            details={"resource": resource, "identifier": str(identifier)},
        )


class ValidationError(FitTrackException):
    """Input validation error."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Validation error on {field}: {message}",
            code="VALIDATION_ERROR",
            status_code=422,
            details={"field": field},
        )


class InvalidMeasurement(FitTrackException):
    """Non-positive weight or height."""

    def __init__(self, weight_kg: float, height_cm: float):
        super().__init__(
            message="Weight and height must be positive values",
            code="INVALID_MEASUREMENT",
            status_code=422,
            details={"weight_kg": weight_kg, "height_cm": height_cm},
        )


class InvalidGoal(FitTrackException):
    """Non-positive goal target or inverted goal dates."""

    def __init__(self, message: str, **details: Any):
        super().__init__(
            message=message,
            code="INVALID_GOAL",
            status_code=422,
            details={key: str(value) for key, value in details.items()},
        )


class InvalidRange(FitTrackException):
    """Aggregation window whose start is after its end."""

    def __init__(self, start: Any, end: Any):
        super().__init__(
            message=f"Invalid date range: {start} is after {end}",
            code="INVALID_RANGE",
            status_code=422,
            details={"start": str(start), "end": str(end)},
        )


class StorageUnavailable(FitTrackException):
    """Storage collaborator failed; passed through unchanged."""

    def __init__(self, operation: str, message: str):
        super().__init__(
            message=f"Storage error during {operation}: {message}",
            code="STORAGE_UNAVAILABLE",
            status_code=503,
            details={"operation": operation},
        )
