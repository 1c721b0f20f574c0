"""
Read-only statistics over a snapshot.

Weekly bar chart data, this-week progress, workout/exercise rankings and
the backup reminder check. Nothing here modifies the snapshot.
"""

from collections import Counter
from collections.abc import Sequence
from datetime import date, timedelta

from .calendar import parse_date, shift_month, shift_week, week_bucket_of
from .catalog import exercise_name, workout_name
from .config import BACKUP_REMINDER_DAYS, STATS_WEEKS, TOP_N
from .models import HistoryRecord, Settings, Snapshot, WeekBar
from .streak import sessions_in_week, week_counts


def weekly_bars(
    history: Sequence[HistoryRecord],
    weekly_goal: int,
    reference_date: date | str,
    weeks: int = STATS_WEEKS,
) -> list[WeekBar]:
    """
    Session counts for the last `weeks` weeks, oldest first.

    The reference week is labelled "Now", earlier ones "W-1", "W-2", ...
    """
    counts = week_counts(history)
    this_week = week_bucket_of(reference_date)
    bars: list[WeekBar] = []
    for i in range(weeks - 1, -1, -1):
        bucket = shift_week(this_week, -i)
        count = counts.get(bucket, 0)
        bars.append(
            WeekBar(
                bucket=bucket,
                count=count,
                label="Now" if i == 0 else f"W-{i}",
                goal_met=count >= weekly_goal,
            )
        )
    return bars


def this_week_progress(
    history: Sequence[HistoryRecord],
    weekly_goal: int,
    reference_date: date | str,
) -> tuple[int, float]:
    """Return (sessions this week, percent of goal capped at 100)."""
    count = sessions_in_week(history, week_bucket_of(reference_date))
    pct = min(100.0, count / weekly_goal * 100.0) if weekly_goal > 0 else 100.0
    return count, pct


def week_days(
    history: Sequence[HistoryRecord],
    reference_date: date | str,
) -> list[tuple[date, bool]]:
    """Monday..Sunday of the reference week, each with a "has a session" flag."""
    monday = week_bucket_of(reference_date).monday
    done = {record.date for record in history}
    days = [monday + timedelta(days=i) for i in range(7)]
    return [(d, d.isoformat() in done) for d in days]


def sessions_on(history: Sequence[HistoryRecord], day: date | str) -> list[HistoryRecord]:
    key = parse_date(day).isoformat()
    return [record for record in history if record.date == key]


def top_workouts(snap: Snapshot, limit: int = TOP_N) -> list[tuple[str, int]]:
    """Most-completed workouts as (name, count); deleted ones read "Deleted"."""
    counts = Counter(record.workout_id for record in snap.history)
    return [(workout_name(snap, wid), n) for wid, n in counts.most_common(limit)]


def top_exercises(snap: Snapshot, limit: int = TOP_N) -> list[tuple[str, int]]:
    """Most-performed exercises across all history snapshots."""
    counts = Counter(ex_id for record in snap.history for ex_id in record.exercise_ids)
    return [(exercise_name(snap, eid), n) for eid, n in counts.most_common(limit)]


def backup_overdue(
    settings: Settings,
    reference_date: date | str,
    days: int = BACKUP_REMINDER_DAYS,
) -> bool:
    """True when the last export is more than `days` days old (or never happened)."""
    if settings.last_backup_reminder is None:
        return True
    elapsed = parse_date(reference_date) - parse_date(settings.last_backup_reminder)
    return elapsed.days > days


def month_grid(
    history: Sequence[HistoryRecord],
    month: date | str,
) -> list[list[tuple[date, bool] | None]]:
    """
    Monday-first calendar grid of one month.

    Args:
        history: Completed sessions
        month: Any day within the month to lay out

    Returns:
        One row per week, seven cells each. Cells outside the month are
        None, the others are (day, has a session).
    """
    first = parse_date(month).replace(day=1)
    last = shift_month(first, 1) - timedelta(days=1)
    done = {record.date for record in history}

    cells: list[tuple[date, bool] | None] = [None] * first.weekday()
    d = first
    while d <= last:
        cells.append((d, d.isoformat() in done))
        d += timedelta(days=1)
    cells.extend([None] * (-len(cells) % 7))
    return [cells[i:i + 7] for i in range(0, len(cells), 7)]
