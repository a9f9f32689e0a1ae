from datetime import date, datetime

from fittrack.config import get_settings


def get_local_today() -> date:
    """Get today's date in the configured local timezone."""
    settings = get_settings()
    return datetime.now(settings.tz).date()
