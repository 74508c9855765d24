from __future__ import annotations

from datetime import date, datetime, time, timezone

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

# Fallback farm timezone when neither the farm nor the settings name one
DEFAULT_TIMEZONE_NAME = "Africa/Nairobi"


def resolve_timezone(name: str | None, default: str = DEFAULT_TIMEZONE_NAME) -> ZoneInfo:
    """Return the ZoneInfo for a farm's configured IANA name.

    Empty or unknown names fall back to `default`.
    """
    if name:
        try:
            return ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError):
            pass
    return ZoneInfo(default)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if dt is None:
        return None
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_local_date(instant: datetime, tz: ZoneInfo) -> date:
    """Farm-local calendar date of an instant.

    Naive instants are taken as UTC, never as the host's local time.
    """
    return ensure_utc(instant).astimezone(tz).date()


def local_date_to_utc_midnight(d: date, tz: ZoneInfo) -> datetime:
    """UTC instant of the start of `d` in the farm's timezone."""
    return datetime.combine(d, time(0, 0), tzinfo=tz).astimezone(timezone.utc)


def local_today(tz: ZoneInfo, now: datetime | None = None) -> date:
    return to_local_date(now or datetime.now(timezone.utc), tz)


def format_day_date(d: date | datetime | None) -> str:
    """Return 'June 26, 2025' style labels used in reminder messages."""
    if d is None:
        return ""
    if isinstance(d, datetime):
        d = d.date()
    return f"{d.strftime('%B')} {d.day}, {d.year}"
