"""
Balanced session generator.

Draws a randomized subset of a workout template in which every category
present in the template is represented at least once. Coverage wins over
the configured cap: a template spanning six categories yields at least six
exercises even with max_count=5.

Randomness comes from an injected random.Random so sessions are
reproducible under a fixed seed.
"""

import random
from collections.abc import Sequence
from datetime import datetime

from .catalog import NotFoundError
from .models import ActiveSession, Category, Exercise, SessionExercise, Snapshot, WorkoutTemplate


class SessionUnavailableError(Exception):
    """Raised when a session cannot be started from the current catalog."""

    pass


def resolve_exercises(
    template: WorkoutTemplate,
    exercises: Sequence[Exercise],
) -> list[Exercise]:
    """Map template ids to catalog exercises, silently dropping dangling ids."""
    by_id = {ex.id: ex for ex in exercises}
    return [by_id[ex_id] for ex_id in template.exercise_ids if ex_id in by_id]


def group_by_category(exercises: Sequence[Exercise]) -> dict[str, list[Exercise]]:
    """Partition exercises by category_id, keeping first-appearance order."""
    groups: dict[str, list[Exercise]] = {}
    for ex in exercises:
        groups.setdefault(ex.category_id, []).append(ex)
    return groups


def effective_cap(max_count: int, category_count: int) -> int:
    """Session size cap, raised so every category can get one pick."""
    return max(max_count, category_count)


def generate_session(
    template: WorkoutTemplate,
    exercises: Sequence[Exercise],
    categories: Sequence[Category],
    max_count: int,
    rng: random.Random,
) -> list[SessionExercise]:
    """
    Pick a category-balanced random subset of a template.

    Steps:
    1. Resolve template ids against the catalog (dangling ids dropped).
    2. Coverage: one uniform pick per category; the rest go to a shared pool.
    3. Fill: shuffle the pool and take from its end until the cap is reached.
    4. Shuffle the selection so coverage and fill picks interleave.

    Args:
        template: Workout template to draw from
        exercises: Exercise catalog
        categories: Category catalog, used only for display names
        max_count: Configured maximum exercises per session
        rng: Random source

    Returns:
        Selected exercises, size min(max(max_count, C), resolved count)
    """
    resolved = resolve_exercises(template, exercises)
    groups = group_by_category(resolved)
    cap = effective_cap(max_count, len(groups))

    selected: list[Exercise] = []
    remaining: list[Exercise] = []
    for pool in groups.values():
        picked = rng.choice(pool)
        selected.append(picked)
        remaining.extend(ex for ex in pool if ex.id != picked.id)

    rng.shuffle(remaining)
    while len(selected) < cap and remaining:
        selected.append(remaining.pop())

    rng.shuffle(selected)

    names = {cat.id: cat.name for cat in categories}
    return [
        SessionExercise(
            id=ex.id,
            name=ex.name,
            category_id=ex.category_id,
            category_name=names.get(ex.category_id, ""),
        )
        for ex in selected
    ]


def start_session(
    snapshot: Snapshot,
    workout_id: str,
    rng: random.Random,
    now: datetime | None = None,
) -> ActiveSession:
    """
    Generate a session for a stored template.

    Raises:
        NotFoundError: If workout_id is not a known template
        SessionUnavailableError: If the catalog has no categories or the
            template resolves to no exercises
    """
    template = next((w for w in snapshot.workouts if w.id == workout_id), None)
    if template is None:
        raise NotFoundError(f"Workout not found: {workout_id}")

    if not snapshot.categories:
        raise SessionUnavailableError("No categories defined. Add a category first.")

    session_exercises = generate_session(
        template,
        snapshot.exercises,
        snapshot.categories,
        snapshot.settings.max_exercises,
        rng,
    )
    if not session_exercises:
        raise SessionUnavailableError(
            f"Workout '{template.name}' has no exercises left in the catalog."
        )

    return ActiveSession(
        workout_id=template.id,
        workout_name=template.name,
        exercises=session_exercises,
        started_at=now if now is not None else datetime.now(),
    )
