"""Parsing helpers for workout and chat history documents."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from fit_cli.core.models import ChatTurn, Exercise, ExerciseSet, WorkoutRecord
from fit_cli.utils.dates import epoch_ms, parse_timestamp


def _first(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


_TRUE_WORDS = {"true", "yes", "y", "1", "on"}


def parse_flag(value: Any) -> bool:
    """Interpret a stored boolean; text such as "false" or "no" is False."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_WORDS
    return False


def parse_date_value(value: Any) -> int:
    """Accept epoch milliseconds or ISO text and return epoch milliseconds."""
    if isinstance(value, bool):
        raise ValueError(f"Invalid workout date: {value!r}")
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("-").isdigit():
            return int(text)
        return epoch_ms(parse_timestamp(text))
    raise ValueError(f"Invalid workout date: {value!r}")


def _parse_sets(raw_sets: Any) -> List[ExerciseSet]:
    if not isinstance(raw_sets, list):
        return []
    sets: List[ExerciseSet] = []
    for item in raw_sets:
        if not isinstance(item, dict):
            continue
        sets.append(
            ExerciseSet(
                reps=int(item.get("reps") or 0),
                weight=float(item.get("weight") or 0),
                completed=parse_flag(item.get("completed")),
            )
        )
    return sets


def _parse_exercises(raw_exercises: Any) -> List[Exercise]:
    if not isinstance(raw_exercises, list):
        return []
    exercises: List[Exercise] = []
    for item in raw_exercises:
        if not isinstance(item, dict) or not item.get("name"):
            continue
        exercises.append(Exercise(name=str(item["name"]), sets=tuple(_parse_sets(item.get("sets")))))
    return exercises


def record_from_dict(data: Dict[str, Any], index: int = 0) -> WorkoutRecord:
    """Build a WorkoutRecord from a camelCase or snake_case mapping."""
    raw_date = _first(data, "date", "workoutDay")
    if raw_date is None:
        raise ValueError(f"Workout #{index} is missing a date")

    return WorkoutRecord(
        id=str(_first(data, "id", "_id", default=f"w-{index}")),
        owner_id=str(_first(data, "ownerId", "owner_id", "userId", default="")),
        name=str(_first(data, "name", "title", default="Workout")),
        date=parse_date_value(raw_date),
        duration_minutes=int(_first(data, "durationMinutes", "duration_minutes", "duration", default=0)),
        completed=parse_flag(_first(data, "completed")),
        notes=_first(data, "notes"),
        favorite=parse_flag(_first(data, "favorite")),
        exercises=tuple(_parse_exercises(data.get("exercises"))),
    )


def _load_document(path: Path) -> Any:
    text = path.read_text()
    if not text.strip():
        return []
    if path.suffix.lower() in {".yaml", ".yml"}:
        return yaml.safe_load(text)
    return json.loads(text)


def load_workout_records(path: Path) -> List[WorkoutRecord]:
    """Load workout records from a JSON/YAML list or `{"workouts": [...]}`."""
    raw_data = _load_document(path)
    if isinstance(raw_data, dict):
        raw_data = raw_data.get("workouts", [])
    if not isinstance(raw_data, list):
        raise ValueError(f"{path} must contain a list of workouts")

    return [
        record_from_dict(item, index)
        for index, item in enumerate(raw_data)
        if isinstance(item, dict)
    ]


def load_chat_history(path: Optional[Path]) -> List[ChatTurn]:
    """Load chat turns from a JSON/YAML list, skipping malformed entries."""
    if path is None or not path.exists():
        return []
    raw_data = _load_document(path)
    if not isinstance(raw_data, list):
        return []

    turns: List[ChatTurn] = []
    for item in raw_data:
        if not isinstance(item, dict):
            continue
        role = item.get("role")
        content = item.get("content")
        if role in {"user", "assistant"} and isinstance(content, str):
            turns.append(ChatTurn(role=role, content=content))
    return turns


def save_chat_history(path: Path, turns: List[ChatTurn]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps([turn.to_dict() for turn in turns], indent=2, ensure_ascii=False) + "\n")
