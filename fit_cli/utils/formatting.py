"""Formatting helpers used by prompts and console output."""

from __future__ import annotations

from typing import Optional

from fit_cli.core.constants import INTENSITY_BANDS


def intensity_label(duration_minutes: float) -> str:
    """Map a session duration onto light/moderate/hard/intense."""
    for upper, _, label in INTENSITY_BANDS:
        if upper is None or duration_minutes < upper:
            return label
    return INTENSITY_BANDS[-1][2]


def relative_day_label(days_ago: int) -> str:
    """Render a whole-day age as Today/Yesterday/N days ago."""
    if days_ago == 0:
        return "Today"
    if days_ago == 1:
        return "Yesterday"
    return f"{days_ago} days ago"


def format_minutes(minutes: Optional[int]) -> str:
    """Format minutes as `1h 05m` or `45m`."""
    if not minutes:
        return "0m"
    h, m = divmod(int(minutes), 60)
    if h:
        return f"{h}h {m:02d}m"
    return f"{m}m"


def format_weight(weight: float) -> str:
    """Drop the trailing .0 on whole weights."""
    value = float(weight)
    return str(int(value)) if value.is_integer() else f"{value:.1f}"


def fatigue_meter(score: float, width: int = 20) -> str:
    """Text gauge for a 0-100 fatigue score."""
    clamped = max(0.0, min(100.0, float(score)))
    filled = int(round(clamped / 100 * width))
    return "█" * filled + "░" * (width - filled)
