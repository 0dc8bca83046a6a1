"""On-disk debounce cache for recovery recommendations."""

from __future__ import annotations

import hashlib
import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from fit_cli.core.constants import RECOVERY_MIN_REFRESH_SECONDS
from fit_cli.core.models import RecoveryRecommendation, WorkoutSummary
from fit_cli.core.recovery import repair_recommendation
from fit_cli.utils.dates import resolve_now

logger = logging.getLogger(__name__)


def workouts_fingerprint(workouts: Iterable[WorkoutSummary], user_name: Optional[str] = None) -> str:
    """Stable hash of the recommendation inputs."""
    rows = sorted(
        (workout.date, workout.duration_minutes, workout.completed, workout.name)
        for workout in workouts
    )
    payload = json.dumps({"user": user_name, "workouts": rows}, sort_keys=True)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


class RecommendationCache:
    """Keeps the last recommendation per owner for `min_interval_seconds`."""

    def __init__(self, directory: Path, min_interval_seconds: float = RECOVERY_MIN_REFRESH_SECONDS) -> None:
        self.directory = directory
        self.min_interval_seconds = min_interval_seconds

    def _path(self, owner_id: str) -> Path:
        safe = re.sub(r"[^A-Za-z0-9_.-]+", "_", owner_id) or "default"
        return self.directory / f"recovery-{safe}.json"

    def _read(self, owner_id: str) -> Optional[Dict[str, Any]]:
        path = self._path(owner_id)
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text())
        except (OSError, ValueError) as exc:
            logger.debug("Ignoring unreadable cache file %s: %s", path, exc)
            return None
        return data if isinstance(data, dict) else None

    def get(
        self,
        owner_id: str,
        fingerprint: str,
        now: Optional[datetime] = None,
    ) -> Optional[RecoveryRecommendation]:
        entry = self._read(owner_id)
        if not entry or entry.get("fingerprint") != fingerprint:
            return None

        try:
            age = resolve_now(now).timestamp() - float(entry["saved_at"])
        except (KeyError, TypeError, ValueError):
            return None
        if age < 0 or age >= self.min_interval_seconds:
            return None

        recommendation = entry.get("recommendation")
        if not isinstance(recommendation, dict):
            return None
        return repair_recommendation(recommendation)

    def put(
        self,
        owner_id: str,
        fingerprint: str,
        recommendation: RecoveryRecommendation,
        now: Optional[datetime] = None,
    ) -> Optional[Path]:
        """Store the recommendation; returns None when the cache is not writable."""
        path = self._path(owner_id)
        entry = {
            "fingerprint": fingerprint,
            "saved_at": resolve_now(now).timestamp(),
            "recommendation": recommendation.to_dict(),
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(entry, indent=2, ensure_ascii=False) + "\n")
        except OSError as exc:
            logger.debug("Skipping cache write to %s: %s", path, exc)
            return None
        return path
