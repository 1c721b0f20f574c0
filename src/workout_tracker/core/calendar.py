"""
Calendar helpers: week bucketing and the day-boundary rule.

All bucketing works on calendar values (YYYY-MM-DD), never on absolute
time. Once "today" has been resolved to a date string, the remaining
arithmetic is timezone-free.
"""

from datetime import date, datetime, timedelta

from .config import DAY_CUTOFF_HOUR
from .models import WeekBucket


def parse_date(value: date | str) -> date:
    """
    Parse an ISO date string into a date.

    Args:
        value: "YYYY-MM-DD" string or an existing date

    Returns:
        Calendar date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, "%Y-%m-%d").date()


def week_bucket_of(value: date | str) -> WeekBucket:
    """Return the bucket for the Monday on or before the given date."""
    d = parse_date(value)
    return WeekBucket(d - timedelta(days=d.weekday()))


def shift_week(bucket: WeekBucket, n: int) -> WeekBucket:
    """Move a bucket by n weeks (negative n walks backward)."""
    return week_bucket_of(bucket.monday + timedelta(days=7 * n))


def today(now: datetime | None = None, cutoff_hour: int = DAY_CUTOFF_HOUR) -> str:
    """
    Resolve the current training day as an ISO date string.

    Times before cutoff_hour belong to the previous calendar day, so a
    session finished at 01:30 counts for the evening before.

    Args:
        now: Local time to resolve (default: datetime.now())
        cutoff_hour: Hour (0-23) at which a new training day starts

    Returns:
        YYYY-MM-DD string
    """
    if not 0 <= cutoff_hour <= 23:
        raise ValueError(f"cutoff_hour must be within 0..23, got {cutoff_hour}")
    if now is None:
        now = datetime.now()
    if now.hour < cutoff_hour:
        now = now - timedelta(days=1)
    return now.strftime("%Y-%m-%d")


def today_raw(now: datetime | None = None) -> str:
    """Plain calendar date of now, ignoring the day-boundary rule."""
    if now is None:
        now = datetime.now()
    return now.strftime("%Y-%m-%d")


def parse_month(value: str) -> date:
    """
    Parse a "YYYY-MM" month into the first day of that month.

    Raises:
        ValueError: If value is not a valid year-month
    """
    return datetime.strptime(value, "%Y-%m").date()


def shift_month(first: date, n: int) -> date:
    """First day of the month n months away from the given month."""
    index = first.year * 12 + (first.month - 1) + n
    return date(index // 12, index % 12 + 1, 1)
