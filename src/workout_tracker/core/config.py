"""
Configuration constants for the workout tracker.

Defaults for settings, the day-boundary rule and display palettes live
here. Values that users may override at runtime are re-read through
core/engine/config_loader.py, which falls back to these constants.
"""

from typing import Final

# =============================================================================
# SNAPSHOT DOCUMENT
# =============================================================================

SNAPSHOT_VERSION: Final[int] = 1  # Written into every saved document

# =============================================================================
# SETTINGS DEFAULTS AND RANGES
# =============================================================================

DEFAULT_WEEKLY_GOAL: Final[int] = 3  # Sessions per week to count as complete
DEFAULT_MAX_EXERCISES: Final[int] = 5  # Exercises per generated session

WEEKLY_GOAL_MIN: Final[int] = 1
WEEKLY_GOAL_MAX: Final[int] = 14
MAX_EXERCISES_MIN: Final[int] = 1
MAX_EXERCISES_MAX: Final[int] = 20

SETTING_RANGES: Final[dict[str, tuple[int, int]]] = {
    "weekly_goal": (WEEKLY_GOAL_MIN, WEEKLY_GOAL_MAX),
    "max_exercises": (MAX_EXERCISES_MIN, MAX_EXERCISES_MAX),
}

# =============================================================================
# DAY BOUNDARY
# =============================================================================

# Sessions finished before this local hour count toward the previous day.
DAY_CUTOFF_HOUR: Final[int] = 4

# =============================================================================
# CATEGORY COLORS
# =============================================================================

CATEGORY_PALETTE: Final[tuple[str, ...]] = (
    "#ff5c1a",
    "#2dce6e",
    "#4dabf7",
    "#ffd43b",
    "#cc5de8",
    "#ff8787",
    "#51cf66",
    "#74c0fc",
)

# =============================================================================
# STATISTICS AND DISPLAY
# =============================================================================

STATS_WEEKS: Final[int] = 8  # Bars in the weekly chart, current week included
TOP_N: Final[int] = 5  # Rows in top-workout / top-exercise rankings
HISTORY_RECENT_LIMIT: Final[int] = 20
BACKUP_REMINDER_DAYS: Final[int] = 30

# =============================================================================
# PLACEHOLDERS FOR DANGLING REFERENCES
# =============================================================================

UNKNOWN_CATEGORY: Final[str] = "Unknown"
DELETED_LABEL: Final[str] = "Deleted"

ID_LENGTH: Final[int] = 8
