"""
Weekly streak engine.

Groups completion records into Monday-anchored weeks and measures how
many consecutive weeks met the weekly goal. A week counts every session,
so two sessions on one day contribute two units.
"""

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import date

from .calendar import shift_week, week_bucket_of
from .models import HistoryRecord, StreakResult, WeekBucket


def week_counts(history: Iterable[HistoryRecord]) -> dict[WeekBucket, int]:
    """Count sessions per week bucket."""
    return dict(Counter(week_bucket_of(record.date) for record in history))


def sessions_in_week(history: Iterable[HistoryRecord], bucket: WeekBucket) -> int:
    """Number of sessions logged in the given week."""
    return sum(1 for record in history if week_bucket_of(record.date) == bucket)


def longest_run(buckets: Iterable[WeekBucket]) -> int:
    """
    Length of the longest chain of back-to-back weeks.

    Args:
        buckets: Week buckets in any order (duplicates ignored)

    Returns:
        0 for no buckets, otherwise the longest run of buckets each exactly
        one week after the previous
    """
    ordered = sorted(set(buckets))
    if not ordered:
        return 0

    best = run = 1
    for prev, curr in zip(ordered, ordered[1:]):
        if shift_week(prev, 1) == curr:
            run += 1
            best = max(best, run)
        else:
            run = 1
    return best


def compute_streak(
    history: Sequence[HistoryRecord],
    weekly_goal: int,
    reference_date: date | str,
) -> StreakResult:
    """
    Compute current and longest weekly streaks.

    The current week is still open: if it has not met the goal yet, the
    streak is counted from the previous week instead, so an unfinished
    week never breaks a streak that is otherwise alive.

    Args:
        history: Completion records in any order
        weekly_goal: Sessions required for a week to count as complete
        reference_date: The day treated as "today"

    Returns:
        StreakResult with current and longest (longest >= current)
    """
    counts = week_counts(history)
    complete = {bucket for bucket, n in counts.items() if n >= weekly_goal}

    if not complete:
        return StreakResult(current=0, longest=0)

    this_week = week_bucket_of(reference_date)
    start = this_week
    if this_week not in complete:
        start = shift_week(this_week, -1)

    current = 0
    check = start
    while check in complete:
        current += 1
        check = shift_week(check, -1)

    return StreakResult(current=current, longest=max(longest_run(complete), current))
