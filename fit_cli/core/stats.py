"""Dashboard statistics derived from an owner's workout log."""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional

from fit_cli.core.constants import DAY_MS
from fit_cli.core.models import StatsSnapshot, WeeklyProgress, WorkoutRecord
from fit_cli.core.store import WorkoutStore
from fit_cli.utils.dates import epoch_ms, resolve_now, safe_local_day, start_of_week, sunday_weekday, today


def completed_only(records: Iterable[WorkoutRecord]) -> List[WorkoutRecord]:
    return [record for record in records if record.completed]


def current_streak(records: Iterable[WorkoutRecord], now: Optional[datetime] = None) -> int:
    """Count consecutive workout days ending today or yesterday.

    Days are local calendar days and each day counts once no matter how many
    workouts it holds. The first matched day may be yesterday, so a chain is
    not broken until a full day passes without training. Future-dated
    workouts and dates that cannot be localised are ignored.
    """
    localised = (safe_local_day(record.date) for record in completed_only(records))
    days = sorted({day for day in localised if day is not None}, reverse=True)
    check_day = today(now)
    streak = 0

    for day in days:
        if day > check_day:
            continue
        if day == check_day or day == check_day - timedelta(days=1):
            streak += 1
            check_day = day - timedelta(days=1)
        else:
            break

    return streak


def compute_stats(records: Iterable[WorkoutRecord], now: Optional[datetime] = None) -> StatsSnapshot:
    """Aggregate totals, the rolling 7-day count and the streak."""
    current = resolve_now(now)
    completed = completed_only(records)
    week_ago = epoch_ms(current) - 7 * DAY_MS

    return StatsSnapshot(
        total_workouts=len(completed),
        total_minutes=sum(int(record.duration_minutes) for record in completed),
        this_week_workouts=sum(1 for record in completed if record.date >= week_ago),
        current_streak=current_streak(completed, now=current),
    )


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_weekly_progress(
    records: Iterable[WorkoutRecord],
    weekly_goal: int,
    now: Optional[datetime] = None,
) -> WeeklyProgress:
    """Progress for the calendar week starting Sunday at local midnight."""
    week_start: date = start_of_week(today(now))
    days = [safe_local_day(record.date) for record in completed_only(records)]
    this_week = [day for day in days if day is not None and day >= week_start]
    completed = len(this_week)

    if weekly_goal > 0:
        percent = min(100, _round_half_up(completed / weekly_goal * 100))
    else:
        percent = 100 if completed else 0

    weekdays = sorted({sunday_weekday(day) for day in this_week})
    return WeeklyProgress(
        completed_this_week=completed,
        weekly_goal=weekly_goal,
        percent_complete=percent,
        days_with_workouts=tuple(weekdays),
    )


class StatsAggregator:
    """Computes dashboard numbers for one owner from the record store."""

    def __init__(self, store: WorkoutStore) -> None:
        self.store = store

    def get_stats(self, owner_id: str, now: Optional[datetime] = None) -> StatsSnapshot:
        return compute_stats(self.store.list_by_owner(owner_id), now=now)

    def get_weekly_progress(
        self,
        owner_id: str,
        weekly_goal: int,
        now: Optional[datetime] = None,
    ) -> WeeklyProgress:
        return compute_weekly_progress(self.store.list_by_owner(owner_id), weekly_goal, now=now)
