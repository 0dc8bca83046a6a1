"""Recovery recommendations: remote AI first, deterministic rules as fallback."""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from fit_cli.core.ai import build_ai_client, call_with_fallback
from fit_cli.core.constants import (
    DAY_MS,
    DEFAULT_RECOMMENDATION,
    FALLBACK_COPY,
    HOUR_MS,
    LIGHT_CONSECUTIVE_DAYS,
    LIGHT_FATIGUE_THRESHOLD,
    MODERATE_FATIGUE_THRESHOLD,
    RECOVERY_PROMPT_TEMPLATE,
    RECOVERY_STATUSES,
    RECOVERY_SUMMARY_LIMIT,
    RECOVERY_SYSTEM_PROMPT,
    REST_CONSECUTIVE_DAYS,
    REST_FATIGUE_THRESHOLD,
    TITLE_MAX_LENGTH,
)
from fit_cli.core.fatigue import compute_fatigue
from fit_cli.core.models import RecoveryRecommendation, RecoveryStatus, WorkoutSummary
from fit_cli.utils.dates import epoch_ms, resolve_now
from fit_cli.utils.formatting import intensity_label, relative_day_label

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)


def recent_completed(workouts: Iterable[WorkoutSummary], limit: int = RECOVERY_SUMMARY_LIMIT) -> List[WorkoutSummary]:
    rows = [workout for workout in workouts if workout.completed]
    rows.sort(key=lambda workout: workout.date, reverse=True)
    return rows[:limit]


def format_workout_summary(
    workouts: Iterable[WorkoutSummary],
    now: Optional[datetime] = None,
    limit: int = RECOVERY_SUMMARY_LIMIT,
) -> str:
    """One line per recent completed workout: name, minutes, intensity, age."""
    now_ms = epoch_ms(resolve_now(now))
    lines = []
    for workout in recent_completed(workouts, limit):
        days_ago = max(0, (now_ms - workout.date) // DAY_MS)
        lines.append(
            f"- {workout.name} ({workout.duration_minutes} min, "
            f"{intensity_label(workout.duration_minutes)}) - {relative_day_label(int(days_ago))}"
        )
    return "\n".join(lines)


def build_recovery_messages(
    workouts: Sequence[WorkoutSummary],
    user_name: Optional[str] = None,
    now: Optional[datetime] = None,
    limit: int = RECOVERY_SUMMARY_LIMIT,
) -> List[Dict[str, str]]:
    current = resolve_now(now)
    summary = format_workout_summary(workouts, now=current, limit=limit)
    prompt = RECOVERY_PROMPT_TEMPLATE.format(
        limit=limit,
        summary=summary or "No recent workouts found.",
        user_name=user_name or "Athlete",
        current_date=current.strftime("%Y-%m-%d"),
        title_max=TITLE_MAX_LENGTH,
    )
    return [
        {"role": "system", "content": RECOVERY_SYSTEM_PROMPT},
        {"role": "user", "content": prompt},
    ]


def strip_code_fences(content: str) -> str:
    text = content.strip()
    if text.startswith("```"):
        text = _FENCE_RE.sub("", text).replace("```", "")
    return text.strip()


def parse_recommendation(content: Optional[str]) -> Dict[str, Any]:
    """Parse the model's JSON object, tolerating ```json fences."""
    if not content or not content.strip():
        raise ValueError("Empty recommendation content")
    parsed = json.loads(strip_code_fences(content))
    if not isinstance(parsed, dict):
        raise ValueError("Recommendation content is not a JSON object")
    return parsed


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return default


def repair_recommendation(raw: Dict[str, Any]) -> RecoveryRecommendation:
    """Default every missing or malformed field of an untrusted recommendation."""
    status_raw = raw.get("status")
    status_text = status_raw.strip().lower() if isinstance(status_raw, str) else ""
    status = RecoveryStatus(status_text if status_text in RECOVERY_STATUSES else DEFAULT_RECOMMENDATION["status"])

    title = _text(raw.get("title"), DEFAULT_RECOMMENDATION["title"])[:TITLE_MAX_LENGTH].rstrip()

    tips_raw = raw.get("tips")
    tips: List[str] = []
    if isinstance(tips_raw, list):
        tips = [tip.strip() for tip in tips_raw if isinstance(tip, str) and tip.strip()]
    if not tips:
        tips = list(DEFAULT_RECOMMENDATION["tips"])

    suggested_raw = raw.get("suggestedWorkout", raw.get("suggested_workout"))
    suggested: Optional[str] = None
    if status is not RecoveryStatus.REST and isinstance(suggested_raw, str) and suggested_raw.strip():
        suggested = suggested_raw.strip()

    return RecoveryRecommendation(
        status=status,
        title=title,
        message=_text(raw.get("message"), DEFAULT_RECOMMENDATION["message"]),
        tips=tuple(tips),
        insights=_text(raw.get("insights"), DEFAULT_RECOMMENDATION["insights"]),
        suggested_workout=suggested,
    )


def fallback_recommendation(
    workouts: Iterable[WorkoutSummary],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Rule-based recommendation driven by the fatigue model."""
    current = resolve_now(now)
    completed = [workout for workout in workouts if workout.completed]
    fatigue = compute_fatigue(completed, now=current)
    score = fatigue.fatigue_score
    days = fatigue.consecutive_days

    if score > REST_FATIGUE_THRESHOLD or days >= REST_CONSECUTIVE_DAYS:
        copy = FALLBACK_COPY["rest"]
        message = (
            copy["message_streak"].format(days=days)
            if days >= REST_CONSECUTIVE_DAYS
            else copy["message_fatigue"]
        )
        return {
            "status": "rest",
            "title": copy["title"],
            "message": message,
            "tips": list(copy["tips"]),
            "insights": copy["insights"],
        }

    if score > LIGHT_FATIGUE_THRESHOLD or days == LIGHT_CONSECUTIVE_DAYS:
        copy = FALLBACK_COPY["light"]
        return {
            "status": "light",
            "title": copy["title"],
            "message": copy["message"],
            "tips": list(copy["tips"]),
            "insights": copy["insights"],
            "suggestedWorkout": copy["suggested_workout"],
        }

    if completed and score > MODERATE_FATIGUE_THRESHOLD:
        latest = max(workout.date for workout in completed)
        if (epoch_ms(current) - latest) < 24 * HOUR_MS:
            copy = FALLBACK_COPY["moderate"]
            return {
                "status": "moderate",
                "title": copy["title"],
                "message": copy["message"],
                "tips": list(copy["tips"]),
                "insights": copy["insights"],
                "suggestedWorkout": copy["suggested_workout"],
            }

    copy = FALLBACK_COPY["ready"]
    return {
        "status": "ready",
        "title": copy["title"],
        "message": copy["message_recovered"] if completed else copy["message_new"],
        "tips": list(copy["tips"]),
        "insights": copy["insights"],
        "suggestedWorkout": copy["suggested_workout"],
    }


class RecoveryAdvisor:
    """Produces a RecoveryRecommendation and never raises to the caller."""

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self.config = config or {}

    @property
    def summary_limit(self) -> int:
        return int(self.config.get("recovery", {}).get("summary_limit", RECOVERY_SUMMARY_LIMIT))

    def get_recovery_recommendation(
        self,
        workouts: Sequence[WorkoutSummary],
        user_name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> RecoveryRecommendation:
        current = resolve_now(now)
        raw = call_with_fallback(
            lambda: build_ai_client(self.config),
            lambda: build_recovery_messages(workouts, user_name=user_name, now=current, limit=self.summary_limit),
            parse_recommendation,
            lambda _exc: fallback_recommendation(workouts, now=current),
        )
        return repair_recommendation(raw)
