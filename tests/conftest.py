from __future__ import annotations

import json
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import pytest
from typer.testing import CliRunner

from fit_cli.core.models import Exercise, ExerciseSet, WorkoutRecord, WorkoutSummary
from fit_cli.utils.dates import epoch_ms

# Saturday evening; the calendar week started Sunday 2026-02-08.
NOW = datetime(2026, 2, 14, 18, 0)


def _make_record(
    moment: datetime,
    duration: int = 45,
    completed: bool = True,
    name: str = "Workout",
    owner_id: str = "user-1",
    record_id: str = "w-1",
    exercises: Optional[List[Exercise]] = None,
) -> WorkoutRecord:
    return WorkoutRecord(
        id=record_id,
        owner_id=owner_id,
        name=name,
        date=epoch_ms(moment),
        duration_minutes=duration,
        completed=completed,
        exercises=tuple(exercises or ()),
    )


def _make_summary(moment: datetime, duration: int = 45, completed: bool = True, name: str = "Workout") -> WorkoutSummary:
    return WorkoutSummary(name=name, date=epoch_ms(moment), duration_minutes=duration, completed=completed)


def _exercise(name: str, *sets: tuple) -> Exercise:
    return Exercise(name=name, sets=tuple(ExerciseSet(reps=reps, weight=weight, completed=True) for reps, weight in sets))


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def ai_config(monkeypatch: pytest.MonkeyPatch) -> Dict[str, Any]:
    monkeypatch.setenv("FIT_TEST_AI_KEY", "sk-test")
    return {
        "ai": {
            "enabled": True,
            "base_url": "https://ai.example.com/v1",
            "model": "gpt-4o-mini",
            "api_key_env": "FIT_TEST_AI_KEY",
            "temperature": 0.7,
            "max_tokens": 500,
            "timeout_seconds": 5,
        }
    }


@pytest.fixture()
def offline_config(monkeypatch: pytest.MonkeyPatch) -> Dict[str, Any]:
    monkeypatch.delenv("FIT_TEST_AI_KEY", raising=False)
    return {"ai": {"enabled": True, "api_key_env": "FIT_TEST_AI_KEY"}}


@pytest.fixture()
def store_rows() -> List[Dict[str, Any]]:
    return [
        {
            "id": "w-1",
            "ownerId": "user-1",
            "name": "Leg Day",
            "date": epoch_ms(NOW - timedelta(hours=2)),
            "durationMinutes": 50,
            "completed": True,
            "exercises": [
                {"name": "Squat", "sets": [{"reps": 5, "weight": 100, "completed": True}]},
            ],
        },
        {
            "id": "w-2",
            "ownerId": "user-1",
            "name": "Upper Body",
            "date": epoch_ms(NOW - timedelta(days=1, hours=2)),
            "durationMinutes": 40,
            "completed": True,
            "exercises": [
                {"name": "Bench Press", "sets": [{"reps": 8, "weight": 60}, {"reps": 6, "weight": 70}]},
            ],
        },
        {
            "id": "w-3",
            "ownerId": "user-1",
            "name": "Planned Run",
            "date": epoch_ms(NOW - timedelta(days=3)),
            "durationMinutes": 30,
            "completed": False,
        },
        {
            "id": "w-4",
            "ownerId": "user-2",
            "name": "Someone Else",
            "date": epoch_ms(NOW - timedelta(hours=1)),
            "durationMinutes": 90,
            "completed": True,
        },
    ]


@pytest.fixture()
def store_file(tmp_path: Path, store_rows: List[Dict[str, Any]]) -> Path:
    path = tmp_path / "workouts.json"
    path.write_text(json.dumps(store_rows, indent=2) + "\n")
    return path


@pytest.fixture()
def write_temp_toml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write


@pytest.fixture()
def make_record() -> Callable[..., WorkoutRecord]:
    return _make_record


@pytest.fixture()
def make_summary() -> Callable[..., WorkoutSummary]:
    return _make_summary


@pytest.fixture()
def make_exercise() -> Callable[..., Exercise]:
    return _exercise
