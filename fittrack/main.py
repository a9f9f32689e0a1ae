from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from fittrack.api.routes import (
    activity,
    alerts,
    assistant,
    dashboard,
    goals,
    health,
    measurements,
    subjects,
    trainers,
)
from fittrack.config import get_settings
from fittrack.core.error_handlers import (
    fittrack_exception_handler,
    generic_exception_handler,
    request_validation_handler,
)
from fittrack.core.exceptions import FitTrackException
from fittrack.core.logging import get_logger, setup_logging
from fittrack.core.middleware import RequestLoggingMiddleware
from fittrack.core.rate_limit import limiter, rate_limit_exceeded_handler
from fittrack.database import init_db

settings = get_settings()

# Initialize structured logging
setup_logging(debug=settings.debug, level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    settings.validate_windows()
    logger.info("application_startup", app_name=settings.app_name)
    init_db()
    logger.info("database_initialized")

    yield

    logger.info("application_shutdown")


app = FastAPI(
    title=settings.app_name,
    description="Health analytics and goal tracking for individuals and trainers",
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
    openapi_url="/openapi.json" if settings.debug else None,
)

# CORS middleware - restrict to configured origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
    expose_headers=["X-Request-ID"],
)

# Request logging middleware
app.add_middleware(RequestLoggingMiddleware)

# Rate limiting
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Register exception handlers
app.add_exception_handler(FitTrackException, fittrack_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include routers
app.include_router(health.router, tags=["health"])
app.include_router(subjects.router, prefix="/api/subjects", tags=["subjects"])
app.include_router(activity.router, prefix="/api/activity", tags=["activity"])
app.include_router(measurements.router, prefix="/api/measurements", tags=["measurements"])
app.include_router(goals.router, prefix="/api/goals", tags=["goals"])
app.include_router(alerts.router, prefix="/api/alerts", tags=["alerts"])
app.include_router(trainers.router, prefix="/api/trainers", tags=["trainers"])
app.include_router(dashboard.router, prefix="/api/dashboard", tags=["dashboard"])
app.include_router(assistant.router, prefix="/api/assistant", tags=["assistant"])


@app.get("/")
async def root():
    return {"message": "FitTrack API", "version": "0.1.0"}
