from functools import lru_cache
from typing import Literal
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Environment
    environment: Literal["development", "staging", "production"] = "development"

    # Database
    database_url: str = "sqlite:///./fittrack.db"

    # App settings
    app_name: str = "FitTrack"
    timezone: str = "UTC"

    @property
    def debug(self) -> bool:
        """Debug mode is only enabled in development."""
        return self.environment == "development"

    @property
    def tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    # Activity defaults
    default_steps_goal: int = 10000

    # Alerts older than this many days are purged once read
    alert_retention_days: int = 30

    # Aggregation windows
    weekly_window_days: int = 7
    monthly_window_days: int = 30
    trend_weeks: int = 4

    # Trainer dashboard thresholds for "needs attention"
    attention_weekly_steps: int = 35000
    attention_weekly_workouts: int = 2

    # CORS settings
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Rate limiting
    rate_limit_default: str = "100/minute"

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    def validate_windows(self) -> None:
        """Validate that configured windows and thresholds are usable."""
        if self.default_steps_goal <= 0:
            raise ValueError("DEFAULT_STEPS_GOAL must be positive")
        if self.weekly_window_days <= 0 or self.monthly_window_days <= 0:
            raise ValueError("Aggregation windows must be positive")
        if self.trend_weeks < 1:
            raise ValueError("TREND_WEEKS must be at least 1")


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    settings.validate_windows()
    return settings
