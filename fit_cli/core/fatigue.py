"""Decayed training-load fatigue model."""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Iterable, Optional

from fit_cli.core.constants import DAY_MS, FATIGUE_DECAY_DAYS, FATIGUE_MAX, INTENSITY_BANDS
from fit_cli.core.models import FatigueResult, WorkoutSummary
from fit_cli.utils.dates import epoch_ms, resolve_now, safe_local_day, today


def intensity_for_duration(duration_minutes: float) -> int:
    """Fatigue points for one session: 25/50/75/100 by duration band."""
    for upper, points, _ in INTENSITY_BANDS:
        if upper is None or duration_minutes < upper:
            return points
    return INTENSITY_BANDS[-1][1]


def decay_factor(days_ago: float) -> float:
    # Future-dated sessions weigh the same as one logged right now.
    return math.exp(-max(days_ago, 0.0) / FATIGUE_DECAY_DAYS)


def consecutive_training_days(workouts: Iterable[WorkoutSummary], now: Optional[datetime] = None) -> int:
    """Days in a row, counting back from today, with a completed workout.

    Unlike the dashboard streak there is no yesterday leniency: no workout
    today means zero.
    """
    days = {safe_local_day(workout.date) for workout in workouts if workout.completed}
    check_day = today(now)
    count = 0
    while check_day in days:
        count += 1
        check_day -= timedelta(days=1)
    return count


def compute_fatigue(workouts: Iterable[WorkoutSummary], now: Optional[datetime] = None) -> FatigueResult:
    """Sum of intensity * exp(-days_ago / 2) over completed workouts, capped to [0, 100]."""
    current = resolve_now(now)
    now_ms = epoch_ms(current)
    completed = [workout for workout in workouts if workout.completed]

    score = 0.0
    for workout in completed:
        days_ago = (now_ms - workout.date) / DAY_MS
        score += intensity_for_duration(workout.duration_minutes) * decay_factor(days_ago)

    return FatigueResult(
        fatigue_score=max(0.0, min(FATIGUE_MAX, score)),
        consecutive_days=consecutive_training_days(completed, now=current),
    )
