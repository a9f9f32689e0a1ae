"""Pytest fixtures for FitTrack tests."""

import os

# Must be set before fittrack reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("RATE_LIMIT_DEFAULT", "10000/minute")

from collections.abc import Generator  # noqa: E402
from datetime import date, timedelta  # noqa: E402
from typing import Optional  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from fittrack.database import get_db  # noqa: E402
from fittrack.engine.aggregation import AggregationEngine  # noqa: E402
from fittrack.engine.entities import ActivityLog, WorkoutEntry  # noqa: E402
from fittrack.engine.metric_types import Role  # noqa: E402
from fittrack.main import app  # noqa: E402
from fittrack.models import Base, Subject  # noqa: E402
from fittrack.services.tracking import TrackingService  # noqa: E402
from fittrack.services.trainer import TrainerService  # noqa: E402

# Use SQLite in-memory for tests
TEST_DATABASE_URL = "sqlite:///:memory:"

# Fixed reference day so windows do not depend on the wall clock
TODAY = date(2026, 3, 15)


@pytest.fixture(scope="function")
def test_db() -> Generator[Session, None, None]:
    """Create a fresh test database for each test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    # Create all tables
    Base.metadata.create_all(bind=engine)

    # Override the get_db dependency
    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        app.dependency_overrides.clear()


@pytest.fixture
def client(test_db: Session) -> TestClient:
    """Create a test client with test database."""
    return TestClient(app)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def frozen_today(mocker, today: date) -> date:
    """Pin the services' notion of today."""
    for target in (
        "fittrack.services.tracking.get_local_today",
        "fittrack.services.trainer.get_local_today",
        "fittrack.services.dashboard.get_local_today",
        "fittrack.services.assistant.get_local_today",
        "fittrack.api.routes.activity.get_local_today",
        "fittrack.api.routes.goals.get_local_today",
        "fittrack.api.routes.trainers.get_local_today",
    ):
        mocker.patch(target, return_value=today)
    return today


@pytest.fixture
def tracking(test_db: Session) -> TrackingService:
    return TrackingService(test_db)


@pytest.fixture
def trainer_service(tracking: TrackingService) -> TrainerService:
    return TrainerService(tracking.db, tracking=tracking)


@pytest.fixture
def individual(tracking: TrackingService) -> Subject:
    """An individual subject with a known height."""
    return tracking.create_subject("Alex Walker", Role.INDIVIDUAL, height_cm=175.0)


@pytest.fixture
def trainer(tracking: TrackingService) -> Subject:
    return tracking.create_subject("Coach Sam", Role.TRAINER)


# =========================================================================
# In-memory storage for engine unit tests
# =========================================================================


class InMemoryActivityRepository:
    """Keeps one log per (subject, day), like the SQL repository."""

    def __init__(self):
        self.logs: dict[tuple[int, date], ActivityLog] = {}

    def get_log(self, subject_id: int, day: date) -> Optional[ActivityLog]:
        return self.logs.get((subject_id, day))

    def list_logs(self, subject_id: int, start: date, end: date) -> list[ActivityLog]:
        return sorted(
            (
                log
                for (owner, day), log in self.logs.items()
                if owner == subject_id and start <= day <= end
            ),
            key=lambda log: log.log_date,
        )

    def upsert_log(self, log: ActivityLog) -> ActivityLog:
        self.logs[(log.subject_id, log.log_date)] = log
        return log


class InMemoryWorkoutRepository:
    def __init__(self):
        self.workouts: list[WorkoutEntry] = []

    def list_workouts(self, subject_id: int, start: date, end: date) -> list[WorkoutEntry]:
        return [
            w
            for w in self.workouts
            if w.subject_id == subject_id and start <= w.workout_date <= end
        ]

    def add_workout(self, workout: WorkoutEntry) -> WorkoutEntry:
        self.workouts.append(workout)
        return workout

    def delete_workout(self, workout_id: int) -> None:
        self.workouts = [w for w in self.workouts if w.id != workout_id]


@pytest.fixture
def activity_repo() -> InMemoryActivityRepository:
    return InMemoryActivityRepository()


@pytest.fixture
def workout_repo() -> InMemoryWorkoutRepository:
    return InMemoryWorkoutRepository()


@pytest.fixture
def aggregation(activity_repo, workout_repo) -> AggregationEngine:
    return AggregationEngine(activity_repo, workout_repo)


@pytest.fixture
def log_week(activity_repo):
    """Store one step count per day starting at ``start``."""

    def _log_week(subject_id: int, start: date, steps: list[int]) -> None:
        for offset, count in enumerate(steps):
            day = start + timedelta(days=offset)
            activity_repo.upsert_log(ActivityLog(subject_id, day, step_count=count))

    return _log_week
