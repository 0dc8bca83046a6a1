"""Lightweight data models shared by the core and commands."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class RecoveryStatus(str, Enum):
    """Recovery status, ordered by how urgently rest is needed."""

    REST = "rest"
    LIGHT = "light"
    MODERATE = "moderate"
    READY = "ready"

    @property
    def urgency(self) -> int:
        return {"ready": 0, "moderate": 1, "light": 2, "rest": 3}[self.value]


@dataclass(frozen=True)
class ExerciseSet:
    """One set of an exercise."""

    reps: int
    weight: float
    completed: bool = False


@dataclass(frozen=True)
class Exercise:
    """Named exercise with its sets."""

    name: str
    sets: Tuple[ExerciseSet, ...] = ()


@dataclass(frozen=True)
class WorkoutSummary:
    """Minimal workout view consumed by the fatigue and recovery logic."""

    name: str
    date: int
    duration_minutes: int
    completed: bool


@dataclass(frozen=True)
class WorkoutRecord:
    """Workout entity as held by the record store. `date` is epoch milliseconds."""

    id: str
    owner_id: str
    name: str
    date: int
    duration_minutes: int
    completed: bool
    notes: Optional[str] = None
    favorite: bool = False
    exercises: Tuple[Exercise, ...] = ()

    def summary(self) -> WorkoutSummary:
        return WorkoutSummary(
            name=self.name,
            date=self.date,
            duration_minutes=self.duration_minutes,
            completed=self.completed,
        )


@dataclass(frozen=True)
class StatsSnapshot:
    """Dashboard totals for one owner."""

    total_workouts: int = 0
    total_minutes: int = 0
    this_week_workouts: int = 0
    current_streak: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "totalWorkouts": self.total_workouts,
            "totalMinutes": self.total_minutes,
            "thisWeekWorkouts": self.this_week_workouts,
            "currentStreak": self.current_streak,
        }


@dataclass(frozen=True)
class WeeklyProgress:
    """Progress towards the weekly workout goal for the current calendar week."""

    completed_this_week: int
    weekly_goal: int
    percent_complete: int
    days_with_workouts: Tuple[int, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "completedThisWeek": self.completed_this_week,
            "weeklyGoal": self.weekly_goal,
            "percentComplete": self.percent_complete,
            "daysWithWorkouts": list(self.days_with_workouts),
        }


@dataclass(frozen=True)
class FatigueResult:
    fatigue_score: float
    consecutive_days: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fatigueScore": round(self.fatigue_score, 1),
            "consecutiveDays": self.consecutive_days,
        }


@dataclass(frozen=True)
class RecoveryRecommendation:
    """Recovery advice. `suggested_workout` is never set for rest days."""

    status: RecoveryStatus
    title: str
    message: str
    tips: Tuple[str, ...]
    insights: str
    suggested_workout: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "status": self.status.value,
            "title": self.title,
            "message": self.message,
            "tips": list(self.tips),
            "insights": self.insights,
        }
        if self.suggested_workout is not None:
            payload["suggestedWorkout"] = self.suggested_workout
        return payload


@dataclass(frozen=True)
class ChatTurn:
    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ChatReply:
    response: str
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"response": self.response}
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass(frozen=True)
class PersonalRecord:
    """Best weight and reps ever logged for an exercise."""

    exercise_name: str
    max_weight: float
    max_reps: int
    date: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "exerciseName": self.exercise_name,
            "maxWeight": self.max_weight,
            "maxReps": self.max_reps,
            "date": self.date,
        }

