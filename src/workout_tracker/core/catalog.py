"""
Catalog and history commands.

Every command takes a Snapshot and returns a new Snapshot; the input is
never modified. The caller decides when to persist the result.

Lookups used for display never raise on dangling references: a deleted
category reads as "Unknown", a deleted exercise or workout as "Deleted".
"""

import secrets
import string
from dataclasses import replace

from .config import DELETED_LABEL, ID_LENGTH, SETTING_RANGES, UNKNOWN_CATEGORY
from .models import (
    ActiveSession,
    Category,
    Exercise,
    HistoryRecord,
    Snapshot,
    WorkoutTemplate,
)

_ID_ALPHABET = string.ascii_lowercase + string.digits


class CatalogError(Exception):
    """Raised when a catalog command is rejected."""

    pass


class NotFoundError(LookupError):
    """Raised when a command targets an id that does not exist."""

    pass


def new_id() -> str:
    """Generate a short random base-36 identifier."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(ID_LENGTH))


def _require_name(name: str) -> str:
    name = name.strip()
    if not name:
        raise CatalogError("Name required")
    return name


def _index_of(items: list, item_id: str, kind: str) -> int:
    for i, item in enumerate(items):
        if item.id == item_id:
            return i
    raise NotFoundError(f"{kind} not found: {item_id}")


# =============================================================================
# Lookups
# =============================================================================


def find_category(snap: Snapshot, category_id: str) -> Category | None:
    return next((c for c in snap.categories if c.id == category_id), None)


def find_exercise(snap: Snapshot, exercise_id: str) -> Exercise | None:
    return next((e for e in snap.exercises if e.id == exercise_id), None)


def find_workout(snap: Snapshot, workout_id: str) -> WorkoutTemplate | None:
    return next((w for w in snap.workouts if w.id == workout_id), None)


def category_name(snap: Snapshot, category_id: str) -> str:
    cat = find_category(snap, category_id)
    return cat.name if cat is not None else UNKNOWN_CATEGORY


def exercise_name(snap: Snapshot, exercise_id: str) -> str:
    ex = find_exercise(snap, exercise_id)
    return ex.name if ex is not None else DELETED_LABEL


def workout_name(snap: Snapshot, workout_id: str) -> str:
    wo = find_workout(snap, workout_id)
    return wo.name if wo is not None else DELETED_LABEL


def exercise_count(snap: Snapshot, category_id: str) -> int:
    """Number of exercises filed under a category."""
    return sum(1 for e in snap.exercises if e.category_id == category_id)


def workout_category_names(snap: Snapshot, workout: WorkoutTemplate) -> list[str]:
    """Distinct names of categories a template touches, in template order."""
    names: list[str] = []
    for ex_id in workout.exercise_ids:
        ex = find_exercise(snap, ex_id)
        if ex is None:
            continue
        cat = find_category(snap, ex.category_id)
        if cat is not None and cat.name not in names:
            names.append(cat.name)
    return names


def valid_exercise_ids(snap: Snapshot, workout: WorkoutTemplate) -> list[str]:
    """Template ids that still resolve to an exercise."""
    known = {e.id for e in snap.exercises}
    return [ex_id for ex_id in workout.exercise_ids if ex_id in known]


# =============================================================================
# Categories
# =============================================================================


def add_category(snap: Snapshot, name: str) -> Snapshot:
    category = Category(id=new_id(), name=_require_name(name))
    return replace(snap, categories=[*snap.categories, category])


def rename_category(snap: Snapshot, category_id: str, name: str) -> Snapshot:
    idx = _index_of(snap.categories, category_id, "Category")
    categories = list(snap.categories)
    categories[idx] = replace(categories[idx], name=_require_name(name))
    return replace(snap, categories=categories)


def delete_category(snap: Snapshot, category_id: str) -> Snapshot:
    """
    Remove a category.

    Raises:
        NotFoundError: If the category does not exist
        CatalogError: If any exercise still references it
    """
    _index_of(snap.categories, category_id, "Category")
    if exercise_count(snap, category_id):
        raise CatalogError("Remove exercises first")
    return replace(snap, categories=[c for c in snap.categories if c.id != category_id])


# =============================================================================
# Exercises
# =============================================================================


def add_exercise(
    snap: Snapshot,
    name: str,
    category_id: str,
    description: str = "",
) -> Snapshot:
    if not snap.categories:
        raise CatalogError("Add a category first")
    if find_category(snap, category_id) is None:
        raise CatalogError(f"Select a category (unknown id: {category_id})")
    exercise = Exercise(
        id=new_id(),
        name=_require_name(name),
        category_id=category_id,
        description=description.strip(),
    )
    return replace(snap, exercises=[*snap.exercises, exercise])


def update_exercise(
    snap: Snapshot,
    exercise_id: str,
    name: str | None = None,
    category_id: str | None = None,
    description: str | None = None,
) -> Snapshot:
    """Edit fields of an exercise; None leaves a field unchanged."""
    idx = _index_of(snap.exercises, exercise_id, "Exercise")
    current = snap.exercises[idx]
    if category_id is not None and find_category(snap, category_id) is None:
        raise CatalogError(f"Select a category (unknown id: {category_id})")

    exercises = list(snap.exercises)
    exercises[idx] = replace(
        current,
        name=_require_name(name) if name is not None else current.name,
        category_id=category_id if category_id is not None else current.category_id,
        description=description.strip() if description is not None else current.description,
    )
    return replace(snap, exercises=exercises)


def delete_exercise(snap: Snapshot, exercise_id: str) -> Snapshot:
    """Remove an exercise and strip it from every workout template."""
    _index_of(snap.exercises, exercise_id, "Exercise")
    workouts = [
        replace(w, exercise_ids=[i for i in w.exercise_ids if i != exercise_id])
        for w in snap.workouts
    ]
    return replace(
        snap,
        exercises=[e for e in snap.exercises if e.id != exercise_id],
        workouts=workouts,
    )


# =============================================================================
# Workout templates
# =============================================================================


def _clean_exercise_ids(snap: Snapshot, exercise_ids: list[str]) -> list[str]:
    if not snap.exercises:
        raise CatalogError("Add exercises first")
    cleaned = list(dict.fromkeys(exercise_ids))
    if not cleaned:
        raise CatalogError("Select at least 1 exercise")
    unknown = [i for i in cleaned if find_exercise(snap, i) is None]
    if unknown:
        raise CatalogError(f"Unknown exercise ids: {', '.join(unknown)}")
    return cleaned


def add_workout(snap: Snapshot, name: str, exercise_ids: list[str]) -> Snapshot:
    workout = WorkoutTemplate(
        id=new_id(),
        name=_require_name(name),
        exercise_ids=_clean_exercise_ids(snap, exercise_ids),
    )
    return replace(snap, workouts=[*snap.workouts, workout])


def update_workout(
    snap: Snapshot,
    workout_id: str,
    name: str | None = None,
    exercise_ids: list[str] | None = None,
) -> Snapshot:
    idx = _index_of(snap.workouts, workout_id, "Workout")
    current = snap.workouts[idx]
    workouts = list(snap.workouts)
    workouts[idx] = replace(
        current,
        name=_require_name(name) if name is not None else current.name,
        exercise_ids=(
            _clean_exercise_ids(snap, exercise_ids)
            if exercise_ids is not None
            else current.exercise_ids
        ),
    )
    return replace(snap, workouts=workouts)


def delete_workout(snap: Snapshot, workout_id: str) -> Snapshot:
    _index_of(snap.workouts, workout_id, "Workout")
    return replace(snap, workouts=[w for w in snap.workouts if w.id != workout_id])


# =============================================================================
# History and settings
# =============================================================================


def complete_session(snap: Snapshot, session: ActiveSession, date: str) -> Snapshot:
    """
    Append the history record for a finished session.

    Args:
        snap: Current snapshot
        session: The session as shown to the user
        date: Training day (YYYY-MM-DD), normally calendar.today()

    Returns:
        Snapshot with exactly one extra HistoryRecord
    """
    record = HistoryRecord(
        id=new_id(),
        date=date,
        workout_id=session.workout_id,
        exercise_ids=[ex.id for ex in session.exercises],
    )
    return replace(snap, history=[*snap.history, record])


def delete_history_entry(snap: Snapshot, record_id: str) -> Snapshot:
    _index_of(snap.history, record_id, "History entry")
    return replace(snap, history=[h for h in snap.history if h.id != record_id])


def adjust_setting(snap: Snapshot, key: str, delta: int) -> Snapshot:
    """
    Step a numeric setting, clamped to its allowed range.

    Args:
        snap: Current snapshot
        key: "weekly_goal" or "max_exercises"
        delta: Signed step

    Returns:
        Snapshot with the updated setting
    """
    if key not in SETTING_RANGES:
        valid = ", ".join(SETTING_RANGES)
        raise CatalogError(f"Unknown setting '{key}'. Valid keys: {valid}")
    low, high = SETTING_RANGES[key]
    value = max(low, min(high, getattr(snap.settings, key) + delta))
    return replace(snap, settings=replace(snap.settings, **{key: value}))


def mark_backup(snap: Snapshot, date: str) -> Snapshot:
    """Record the date of the latest export."""
    return replace(snap, settings=replace(snap.settings, last_backup_reminder=date))
