"""Read-only workout record stores."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Protocol

import yaml

from fit_cli.core.models import WorkoutRecord
from fit_cli.utils.parsing import load_workout_records

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    """Raised when the workout store cannot be read."""


class WorkoutStore(Protocol):
    def list_by_owner(self, owner_id: str) -> List[WorkoutRecord]:
        """Return the owner's workouts, newest first."""


def _owned(records: Iterable[WorkoutRecord], owner_id: str) -> List[WorkoutRecord]:
    rows = [record for record in records if record.owner_id == owner_id]
    rows.sort(key=lambda record: record.date, reverse=True)
    return rows


class InMemoryWorkoutStore:
    """Store over an in-memory list of records."""

    def __init__(self, records: Iterable[WorkoutRecord] = ()) -> None:
        self.records = list(records)

    def list_by_owner(self, owner_id: str) -> List[WorkoutRecord]:
        return _owned(self.records, owner_id)


class FileWorkoutStore:
    """Store backed by a JSON or YAML file, re-read on every query."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self) -> List[WorkoutRecord]:
        if not self.path.exists():
            logger.debug("Workout store %s does not exist; treating as empty", self.path)
            return []
        try:
            return load_workout_records(self.path)
        except (OSError, ValueError, TypeError, yaml.YAMLError) as exc:
            raise StoreError(f"Failed to read workout store {self.path}: {exc}") from exc

    def list_by_owner(self, owner_id: str) -> List[WorkoutRecord]:
        return _owned(self._load(), owner_id)
