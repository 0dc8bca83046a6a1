from __future__ import annotations

import math
from datetime import datetime, timedelta

import pytest

from fit_cli.core.fatigue import (
    compute_fatigue,
    consecutive_training_days,
    decay_factor,
    intensity_for_duration,
)


@pytest.mark.parametrize(
    ("duration", "expected"),
    [(0, 25), (19, 25), (20, 50), (39, 50), (40, 75), (59, 75), (60, 100), (180, 100)],
)
def test_intensity_bands(duration: int, expected: int) -> None:
    assert intensity_for_duration(duration) == expected


def test_empty_history_has_no_fatigue(now: datetime) -> None:
    result = compute_fatigue([], now=now)
    assert result.fatigue_score == 0.0
    assert result.consecutive_days == 0


def test_single_workout_decays_exponentially(now: datetime, make_summary) -> None:
    result = compute_fatigue([make_summary(now - timedelta(days=2), duration=30)], now=now)
    assert result.fatigue_score == pytest.approx(50 * math.exp(-1))


def test_more_recent_workout_contributes_more(now: datetime, make_summary) -> None:
    recent = compute_fatigue([make_summary(now - timedelta(hours=30), duration=25)], now=now)
    older = compute_fatigue([make_summary(now - timedelta(hours=31), duration=25)], now=now)
    assert recent.fatigue_score > older.fatigue_score


def test_decay_factor_is_strictly_decreasing() -> None:
    samples = [decay_factor(days / 4) for days in range(0, 40)]
    assert all(later < earlier for earlier, later in zip(samples, samples[1:]))
    assert decay_factor(0) == 1.0


def test_score_is_capped_at_100(now: datetime, make_summary) -> None:
    workouts = [make_summary(now - timedelta(minutes=index), duration=120) for index in range(10)]
    assert compute_fatigue(workouts, now=now).fatigue_score == 100.0


@pytest.mark.parametrize("offset_days", [-30, -1, 0, 0.5, 3, 400])
def test_score_is_bounded_for_odd_dates(now: datetime, make_summary, offset_days: float) -> None:
    workouts = [make_summary(now - timedelta(days=offset_days), duration=-10)] * 3
    score = compute_fatigue(workouts, now=now).fatigue_score
    assert 0.0 <= score <= 100.0


def test_incomplete_workouts_do_not_add_fatigue(now: datetime, make_summary) -> None:
    workouts = [make_summary(now - timedelta(hours=1), duration=90, completed=False)]
    result = compute_fatigue(workouts, now=now)
    assert result.fatigue_score == 0.0
    assert result.consecutive_days == 0


def test_consecutive_days_requires_today(now: datetime, make_summary) -> None:
    workouts = [make_summary(now - timedelta(days=1)), make_summary(now - timedelta(days=2))]
    assert consecutive_training_days(workouts, now=now) == 0


def test_consecutive_days_counts_strict_run(now: datetime, make_summary) -> None:
    workouts = [
        make_summary(now - timedelta(hours=1)),
        make_summary(now - timedelta(hours=2)),
        make_summary(now - timedelta(days=1)),
        make_summary(now - timedelta(days=3)),
    ]
    assert consecutive_training_days(workouts, now=now) == 2


def test_scenario_a_today_dominates(now: datetime, make_summary) -> None:
    workouts = [make_summary(now - timedelta(days=offset, hours=1), duration=45) for offset in range(3)]
    result = compute_fatigue(workouts, now=now)
    assert result.consecutive_days == 3
    assert result.fatigue_score == 100.0

    contributions = [75 * decay_factor(offset + 1 / 24) for offset in range(3)]
    assert contributions[0] > contributions[1] > contributions[2]
    assert contributions[0] > sum(contributions[1:]) * 0.9


def test_result_order_of_input_does_not_matter(now: datetime, make_summary) -> None:
    workouts = [make_summary(now - timedelta(days=offset), duration=15) for offset in (3, 0, 1)]
    forward = compute_fatigue(workouts, now=now)
    backward = compute_fatigue(list(reversed(workouts)), now=now)
    assert forward.fatigue_score == pytest.approx(backward.fatigue_score)
    assert forward.consecutive_days == backward.consecutive_days == 2
