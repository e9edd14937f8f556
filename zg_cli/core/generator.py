"""Workout generation, split rotation and exercise swapping."""

from __future__ import annotations

import random
from typing import Any, Dict, Iterable, List, MutableSequence, Optional, Protocol, Sequence

from zg_cli.core.constants import FILL_PASS_MIN_REMAINING, SPLIT_MUSCLE_GROUPS, SPLIT_TRANSITIONS
from zg_cli.core.models import BodyArea, Exercise, MuscleGroup, WorkoutSplit


class RandomSource(Protocol):
    """Subset of ``random.Random`` used by the generator."""

    def shuffle(self, x: MutableSequence[Any]) -> None: ...

    def choice(self, seq: Sequence[Any]) -> Any: ...


_RNG = random.Random()


def _is_safe(exercise: Exercise, restrictions: Iterable[BodyArea]) -> bool:
    restricted = set(restrictions)
    return not any(area in restricted for area in exercise.contraindications)


def safe_exercises(catalog: Iterable[Exercise], restrictions: Iterable[BodyArea]) -> List[Exercise]:
    """Drop exercises contraindicated for any of the restricted body areas."""
    restricted = list(restrictions)
    return [exercise for exercise in catalog if _is_safe(exercise, restricted)]


def plan_duration(plan: Iterable[Exercise]) -> int:
    return sum(exercise.duration_minutes for exercise in plan)


def generate_workout(
    catalog: Sequence[Exercise],
    duration_budget: int,
    restrictions: Iterable[BodyArea] = (),
    split: WorkoutSplit = WorkoutSplit.FULL,
    rng: Optional[RandomSource] = None,
) -> List[Exercise]:
    """Build a balanced workout that fits in ``duration_budget`` minutes.

    One exercise per muscle group is taken first, in the split's order, then a
    single extra round visits the groups in random order and adds the first
    unused exercise that still fits. The extra round does not repeat even when
    time is left over.
    """
    rng = rng or _RNG
    split_groups = SPLIT_MUSCLE_GROUPS[split]

    grouped: Dict[MuscleGroup, List[Exercise]] = {}
    for exercise in safe_exercises(catalog, restrictions):
        if exercise.muscle_group in split_groups:
            grouped.setdefault(exercise.muscle_group, []).append(exercise)

    for bucket in grouped.values():
        rng.shuffle(bucket)

    workout: List[Exercise] = []
    remaining = duration_budget

    ordered_groups = [group for group in split_groups if grouped.get(group)]
    for group in ordered_groups:
        chosen = grouped[group][0]
        if chosen.duration_minutes <= remaining:
            workout.append(chosen)
            remaining -= chosen.duration_minutes

    fill_order = list(ordered_groups)
    rng.shuffle(fill_order)
    selected_ids = {exercise.id for exercise in workout}
    for group in fill_order:
        for exercise in grouped[group]:
            if remaining <= FILL_PASS_MIN_REMAINING:
                break
            if exercise.id not in selected_ids and exercise.duration_minutes <= remaining:
                workout.append(exercise)
                selected_ids.add(exercise.id)
                remaining -= exercise.duration_minutes
                break
        if remaining <= FILL_PASS_MIN_REMAINING:
            break

    return workout


def recommended_split(last_split: Optional[WorkoutSplit]) -> WorkoutSplit:
    """Next split to train given the previous one."""
    return SPLIT_TRANSITIONS[last_split]


def swap_candidates(
    current: Exercise,
    workout_in_progress: Iterable[Exercise],
    restrictions: Iterable[BodyArea],
    catalog: Sequence[Exercise],
) -> List[Exercise]:
    in_use = {exercise.id for exercise in workout_in_progress}
    return [
        exercise
        for exercise in safe_exercises(catalog, restrictions)
        if exercise.muscle_group == current.muscle_group
        and exercise.id != current.id
        and exercise.id not in in_use
    ]


def swap_exercise(
    current: Exercise,
    workout_in_progress: Iterable[Exercise],
    restrictions: Iterable[BodyArea],
    catalog: Sequence[Exercise],
    rng: Optional[RandomSource] = None,
) -> Optional[Exercise]:
    """Random safe alternative for the same muscle group, or None."""
    candidates = swap_candidates(current, workout_in_progress, restrictions, catalog)
    if not candidates:
        return None
    return (rng or _RNG).choice(candidates)


def replace_in_plan(plan: Sequence[Exercise], current: Exercise, replacement: Exercise) -> List[Exercise]:
    """Return a copy of ``plan`` with ``current`` swapped for ``replacement`` in place."""
    return [replacement if exercise == current else exercise for exercise in plan]
