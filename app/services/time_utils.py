from datetime import date, datetime, time, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

from app.core.config import settings


def local_tz() -> Optional[ZoneInfo]:
    """
    The zone used for calendar-day logic. None means the server's local
    time, which is what datetime.astimezone(None) falls back to.
    """
    if settings.LOCAL_TIMEZONE:
        return ZoneInfo(settings.LOCAL_TIMEZONE)
    return None


def local_today(tz=None) -> date:
    return datetime.now(timezone.utc).astimezone(tz).date()


def day_start(d: date, tz=None) -> datetime:
    """Aware datetime for 00:00 of `d` in `tz` (server local time if None)."""
    if tz is None:
        return datetime.combine(d, time.min).astimezone()
    return datetime.combine(d, time.min, tzinfo=tz)


def rolling_window_start(days: int = 7, now: Optional[datetime] = None) -> datetime:
    """Start of the last `days` x 24h ending now, as used for weekly progress."""
    now = now or datetime.now(timezone.utc)
    return now - timedelta(days=days)
