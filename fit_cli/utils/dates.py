"""Epoch-millisecond and local calendar-day helpers."""

from __future__ import annotations

import re
from datetime import date, datetime, timedelta
from typing import Optional

import typer

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def epoch_ms(moment: datetime) -> int:
    """Convert a datetime (naive values are local time) to epoch milliseconds."""
    return int(moment.timestamp() * 1000)


def to_local_datetime(value_ms: int) -> datetime:
    """Convert epoch milliseconds to a naive local datetime."""
    return datetime.fromtimestamp(value_ms / 1000)


def local_day(value_ms: int) -> date:
    """Truncate epoch milliseconds to the local calendar day."""
    return to_local_datetime(value_ms).date()


def safe_local_day(value_ms: int) -> Optional[date]:
    """Like `local_day`, but None for timestamps the platform cannot localise."""
    try:
        return local_day(value_ms)
    except (OverflowError, OSError, ValueError):
        return None


def resolve_now(now: Optional[datetime] = None) -> datetime:
    """Return `now` or the current local time."""
    return now if now is not None else datetime.now()


def today(now: Optional[datetime] = None) -> date:
    """Local calendar day of `now`."""
    current = resolve_now(now)
    if current.tzinfo is not None:
        current = current.astimezone().replace(tzinfo=None)
    return current.date()


def start_of_week(day: date) -> date:
    """Sunday on or before `day`."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def sunday_weekday(day: date) -> int:
    """Weekday number with Sunday as 0 and Saturday as 6."""
    return (day.weekday() + 1) % 7


def parse_timestamp(value: str) -> datetime:
    """Parse YYYY-MM-DD or ISO-8601 datetime text into a datetime."""
    raw = value.strip()
    if _DATE_RE.match(raw):
        return datetime.strptime(raw, "%Y-%m-%d")
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    return datetime.fromisoformat(raw)


def validate_timestamp(value: Optional[str]) -> Optional[str]:
    """Typer callback that validates date/datetime options."""
    if value is None:
        return value
    try:
        parse_timestamp(value)
    except ValueError:
        raise typer.BadParameter(
            f"Invalid timestamp '{value}'. Expected YYYY-MM-DD or ISO-8601 (e.g. 2026-01-15T18:30)"
        )
    return value
