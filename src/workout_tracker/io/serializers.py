"""
JSON serialization for the snapshot document.

Handles conversion between dataclasses and JSON-compatible dicts. Keys
use the camelCase layout of the exported backup files so existing
backups keep importing.
"""

import re
from datetime import datetime
from typing import Any

from ..core.calendar import today as training_today
from ..core.config import DEFAULT_MAX_EXERCISES, DEFAULT_WEEKLY_GOAL, SNAPSHOT_VERSION
from ..core.models import (
    Category,
    Exercise,
    HistoryRecord,
    Settings,
    Snapshot,
    WorkoutTemplate,
)


class ValidationError(Exception):
    """Raised when data validation fails."""

    pass


def validate_date(date_str: str) -> str:
    """
    Validate and normalize date string to ISO format.

    Args:
        date_str: Date string to validate

    Returns:
        Normalized YYYY-MM-DD string

    Raises:
        ValidationError: If date format is invalid
    """
    if not isinstance(date_str, str) or not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValidationError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValidationError(f"Invalid date: {date_str}") from e

    return date_str


def _require_list(data: dict[str, Any], key: str) -> list:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise ValidationError(f"'{key}' must be a list")
    return value


def _require_str(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValidationError(f"{where}: '{key}' must be a string")
    return value


def _optional_str(data: dict[str, Any], key: str, where: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{where}: '{key}' must be a string")
    return value


def _str_list(data: dict[str, Any], key: str, where: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValidationError(f"{where}: '{key}' must be a list of ids")
    return list(value)


def default_snapshot(today: str | None = None) -> Snapshot:
    """
    Fresh empty document with default settings.

    The backup reminder starts at today (the current training day when not
    given), so a new install is not reminded before its first month.
    """
    if today is None:
        today = training_today()
    return Snapshot(
        version=SNAPSHOT_VERSION,
        settings=Settings(
            weekly_goal=DEFAULT_WEEKLY_GOAL,
            max_exercises=DEFAULT_MAX_EXERCISES,
            last_backup_reminder=today,
        ),
    )


def settings_to_dict(settings: Settings) -> dict[str, Any]:
    return {
        "weeklyGoal": settings.weekly_goal,
        "maxExercises": settings.max_exercises,
        "lastBackupReminder": settings.last_backup_reminder,
    }


def dict_to_settings(data: dict[str, Any]) -> Settings:
    """
    Convert dict to Settings; missing keys fall back to defaults.

    Raises:
        ValidationError: If a value has the wrong type or range
    """
    if not isinstance(data, dict):
        raise ValidationError("'settings' must be an object")

    weekly_goal = data.get("weeklyGoal", DEFAULT_WEEKLY_GOAL)
    max_exercises = data.get("maxExercises", DEFAULT_MAX_EXERCISES)
    last_backup = data.get("lastBackupReminder")

    for name, value in (("weeklyGoal", weekly_goal), ("maxExercises", max_exercises)):
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValidationError(f"settings.{name} must be a positive integer, got {value!r}")
    if last_backup is not None:
        validate_date(last_backup)

    return Settings(
        weekly_goal=weekly_goal,
        max_exercises=max_exercises,
        last_backup_reminder=last_backup,
    )


def snapshot_to_dict(snap: Snapshot) -> dict[str, Any]:
    """
    Convert Snapshot to JSON-compatible dict.

    Args:
        snap: Snapshot to convert

    Returns:
        Dict representation
    """
    return {
        "version": snap.version,
        "settings": settings_to_dict(snap.settings),
        "categories": [{"id": c.id, "name": c.name} for c in snap.categories],
        "exercises": [
            {
                "id": e.id,
                "name": e.name,
                "categoryId": e.category_id,
                "description": e.description,
            }
            for e in snap.exercises
        ],
        "workouts": [
            {"id": w.id, "name": w.name, "exerciseIds": list(w.exercise_ids)}
            for w in snap.workouts
        ],
        "history": [
            {
                "id": h.id,
                "date": h.date,
                "workoutId": h.workout_id,
                "exerciseIds": list(h.exercise_ids),
            }
            for h in snap.history
        ],
    }


def dict_to_snapshot(data: Any) -> Snapshot:
    """
    Convert dict to Snapshot.

    Only structure is checked here: a truthy version, list-shaped
    collections and well-typed fields. Dangling references between
    collections are accepted as they are.

    Args:
        data: Decoded JSON document

    Returns:
        Snapshot instance

    Raises:
        ValidationError: If the document structure is invalid
    """
    if not isinstance(data, dict):
        raise ValidationError("Snapshot must be a JSON object")
    version = data.get("version")
    if not version:
        raise ValidationError("Missing snapshot version")
    if not isinstance(version, int) or isinstance(version, bool):
        raise ValidationError(f"Invalid snapshot version: {version!r}")
    if not isinstance(data.get("history"), list) or not isinstance(data.get("exercises"), list):
        raise ValidationError("Invalid structure: 'history' and 'exercises' must be lists")

    categories = [
        Category(
            id=_require_str(c, "id", f"categories[{i}]"),
            name=_require_str(c, "name", f"categories[{i}]"),
        )
        for i, c in enumerate(_require_list(data, "categories"))
        if _is_object(c, f"categories[{i}]")
    ]

    exercises = [
        Exercise(
            id=_require_str(e, "id", f"exercises[{i}]"),
            name=_require_str(e, "name", f"exercises[{i}]"),
            category_id=_require_str(e, "categoryId", f"exercises[{i}]"),
            description=_optional_str(e, "description", f"exercises[{i}]"),
        )
        for i, e in enumerate(_require_list(data, "exercises"))
        if _is_object(e, f"exercises[{i}]")
    ]

    workouts = [
        WorkoutTemplate(
            id=_require_str(w, "id", f"workouts[{i}]"),
            name=_require_str(w, "name", f"workouts[{i}]"),
            exercise_ids=_str_list(w, "exerciseIds", f"workouts[{i}]"),
        )
        for i, w in enumerate(_require_list(data, "workouts"))
        if _is_object(w, f"workouts[{i}]")
    ]

    history = [
        HistoryRecord(
            id=_require_str(h, "id", f"history[{i}]"),
            date=validate_date(h.get("date")),
            workout_id=_require_str(h, "workoutId", f"history[{i}]"),
            exercise_ids=_str_list(h, "exerciseIds", f"history[{i}]"),
        )
        for i, h in enumerate(_require_list(data, "history"))
        if _is_object(h, f"history[{i}]")
    ]

    settings = dict_to_settings(data.get("settings", {}))

    return Snapshot(
        version=version,
        settings=settings,
        categories=categories,
        exercises=exercises,
        workouts=workouts,
        history=history,
    )


def _is_object(item: Any, where: str) -> bool:
    if not isinstance(item, dict):
        raise ValidationError(f"{where} must be an object")
    return True
