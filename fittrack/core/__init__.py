from fittrack.core.exceptions import (
    FitTrackException,
    InvalidGoal,
    InvalidMeasurement,
    InvalidRange,
    NotFoundError,
    StorageUnavailable,
    ValidationError,
)

__all__ = [
    "FitTrackException",
    "InvalidGoal",
    "InvalidMeasurement",
    "InvalidRange",
    "NotFoundError",
    "StorageUnavailable",
    "ValidationError",
]
