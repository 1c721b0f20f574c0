"""
Data models for workout-tracker.

All core dataclasses representing the catalog (categories, exercises,
workout templates), completion history, settings and derived views.
The Snapshot groups them into the single document the application owns.
"""

from dataclasses import dataclass, field
from datetime import date, datetime

from .config import DEFAULT_MAX_EXERCISES, DEFAULT_WEEKLY_GOAL, SNAPSHOT_VERSION


def _validate_date(date_str: str) -> None:
    """Validate date string is ISO format YYYY-MM-DD."""
    import re

    if not re.match(r"^\d{4}-\d{2}-\d{2}$", date_str):
        raise ValueError(f"Invalid date format: {date_str}. Expected YYYY-MM-DD")

    try:
        datetime.strptime(date_str, "%Y-%m-%d")
    except ValueError as e:
        raise ValueError(f"Invalid date: {date_str}") from e


@dataclass(frozen=True, order=True)
class WeekBucket:
    """
    Monday-anchored calendar week.

    Equality, hashing and ordering follow the Monday date, so buckets can
    be used directly as dict keys and sorted chronologically.
    """

    monday: date

    def __post_init__(self) -> None:
        if self.monday.weekday() != 0:
            raise ValueError(f"WeekBucket must start on a Monday, got {self.monday}")

    def __str__(self) -> str:
        return self.monday.isoformat()


@dataclass
class Category:
    """A named group of exercises (e.g. "Legs")."""

    id: str
    name: str


@dataclass
class Exercise:
    """
    A single exercise in the catalog.

    category_id may point at a category that was deleted later; readers
    must treat that as an unknown category.
    """

    id: str
    name: str
    category_id: str
    description: str = ""


@dataclass
class WorkoutTemplate:
    """Named, ordered list of exercise ids to draw sessions from."""

    id: str
    name: str
    exercise_ids: list[str] = field(default_factory=list)


@dataclass
class HistoryRecord:
    """
    One completed session.

    exercise_ids is a snapshot of what was shown to the user, so later
    template edits do not rewrite history.
    """

    id: str
    date: str  # ISO format: YYYY-MM-DD
    workout_id: str
    exercise_ids: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate record data."""
        _validate_date(self.date)


@dataclass
class Settings:
    """User preferences."""

    weekly_goal: int = DEFAULT_WEEKLY_GOAL
    max_exercises: int = DEFAULT_MAX_EXERCISES
    last_backup_reminder: str | None = None

    def __post_init__(self) -> None:
        """Validate settings."""
        if self.weekly_goal < 1:
            raise ValueError("weekly_goal must be at least 1")
        if self.max_exercises < 1:
            raise ValueError("max_exercises must be at least 1")
        if self.last_backup_reminder is not None:
            _validate_date(self.last_backup_reminder)


@dataclass
class Snapshot:
    """
    The complete in-memory dataset at a point in time.

    Core functions take a Snapshot as input and return a new one instead
    of mutating shared state.
    """

    version: int = SNAPSHOT_VERSION
    settings: Settings = field(default_factory=Settings)
    categories: list[Category] = field(default_factory=list)
    exercises: list[Exercise] = field(default_factory=list)
    workouts: list[WorkoutTemplate] = field(default_factory=list)
    history: list[HistoryRecord] = field(default_factory=list)


@dataclass(frozen=True)
class SessionExercise:
    """An exercise picked for a generated session, with its category resolved."""

    id: str
    name: str
    category_id: str
    category_name: str  # "" when the category no longer exists


@dataclass
class ActiveSession:
    """A generated session the user is currently working through."""

    workout_id: str
    workout_name: str
    exercises: list[SessionExercise]
    started_at: datetime
    checked: set[str] = field(default_factory=set)

    def toggle(self, exercise_id: str) -> None:
        """Flip the done-mark of one exercise in the session."""
        if exercise_id in self.checked:
            self.checked.remove(exercise_id)
        else:
            self.checked.add(exercise_id)


@dataclass(frozen=True)
class StreakResult:
    """Current and longest run of consecutive complete weeks."""

    current: int
    longest: int

    def __post_init__(self) -> None:
        if self.current < 0 or self.longest < 0:
            raise ValueError("streak counters must be non-negative")
        if self.longest < self.current:
            raise ValueError("longest streak cannot be shorter than current streak")


@dataclass(frozen=True)
class WeekBar:
    """Session count for one week of the statistics chart."""

    bucket: WeekBucket
    count: int
    label: str  # "Now" for the reference week, "W-n" for n weeks earlier
    goal_met: bool
