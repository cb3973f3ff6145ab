from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid date (expected YYYY-MM-DD): {value!r}")


def parse_time_of_day(value: str | time) -> time:
    """Parse HH:MM (or HH:MM:SS) into a time of day."""
    if isinstance(value, time):
        return value
    v = (value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time of day (expected HH:MM): {value!r}")


def load_timezone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValidationError(f"Unknown timezone: {name!r}")


def to_local(value: datetime, tz: ZoneInfo) -> datetime:
    """Normalize a timestamp to naive local civil time in ``tz``.

    Naive input is assumed to already be local time.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)


def now_local(tz: ZoneInfo) -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock easier.
    """
    return to_local(datetime.now(tz), tz)


def days_ending(end: date, n: int) -> Iterator[date]:
    """Yield ``n`` consecutive days ending at ``end``, oldest first."""
    for offset in range(n - 1, -1, -1):
        yield end - timedelta(days=offset)
