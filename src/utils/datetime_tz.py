from __future__ import annotations

from datetime import date, datetime, time, timezone
from functools import lru_cache

from zoneinfo import ZoneInfo

# Default application timezone aligned with frontend
DEFAULT_TIMEZONE_NAME = "Asia/Manila"


@lru_cache(maxsize=8)
def get_tz(name: str | None = None) -> ZoneInfo:
    return ZoneInfo(name or DEFAULT_TIMEZONE_NAME)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive values (SQLite drops tzinfo) and normalize aware ones."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def local_today(now: datetime, tz_name: str | None = None) -> date:
    """Calendar date of `now` in the application timezone."""
    return ensure_utc(now).astimezone(get_tz(tz_name)).date()


def format_appointment(d: date | None, t: time | None = None) -> str:
    """Return 'Fri 05 Dec 2026' or with time 'Fri 05 Dec 2026, 10:30 AM'."""
    if d is None:
        return ""
    label = d.strftime("%a %d %b %Y")
    if t is not None:
        label += ", " + t.strftime("%I:%M %p")
    return label
