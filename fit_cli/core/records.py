"""Personal records derived from logged exercise sets."""

from __future__ import annotations

from typing import Dict, Iterable, List

from fit_cli.core.models import PersonalRecord, WorkoutRecord


def compute_personal_records(records: Iterable[WorkoutRecord]) -> List[PersonalRecord]:
    """Best set weight and best set reps per exercise name.

    Workouts are replayed oldest first; the record date moves to a workout's
    date whenever either best improves.
    """
    best: Dict[str, PersonalRecord] = {}

    for workout in sorted(records, key=lambda record: record.date):
        for exercise in workout.exercises:
            if not exercise.sets:
                continue
            max_weight = max(float(item.weight) for item in exercise.sets)
            max_reps = max(int(item.reps) for item in exercise.sets)

            existing = best.get(exercise.name)
            if existing is None:
                best[exercise.name] = PersonalRecord(
                    exercise_name=exercise.name,
                    max_weight=max_weight,
                    max_reps=max_reps,
                    date=workout.date,
                )
            elif max_weight > existing.max_weight or max_reps > existing.max_reps:
                best[exercise.name] = PersonalRecord(
                    exercise_name=exercise.name,
                    max_weight=max(max_weight, existing.max_weight),
                    max_reps=max(max_reps, existing.max_reps),
                    date=workout.date,
                )

    return [best[name] for name in sorted(best)]
