"""
Tests for read-only statistics and the session clock.
"""

from datetime import date

import pytest

from workout_tracker.core.calendar import week_bucket_of
from workout_tracker.core.models import Exercise, HistoryRecord, Settings, Snapshot, WorkoutTemplate
from workout_tracker.core.session_clock import SessionClock, format_elapsed
from workout_tracker.core.stats import (
    backup_overdue,
    month_grid,
    sessions_on,
    this_week_progress,
    top_exercises,
    top_workouts,
    week_days,
    weekly_bars,
)


def _rec(i: int, d: str, workout_id: str = "w1", exercise_ids: list[str] | None = None) -> HistoryRecord:
    return HistoryRecord(id=f"h{i}", date=d, workout_id=workout_id, exercise_ids=exercise_ids or [])


HISTORY = [
    _rec(1, "2024-01-01", "w1", ["sq", "pl"]),
    _rec(2, "2024-01-03", "w1", ["sq"]),
    _rec(3, "2024-01-10", "w2", ["pl"]),
    _rec(4, "2024-01-10", "gone", ["sq", "old"]),
]


class TestWeeklyBars:
    def test_labels_and_counts(self):
        bars = weekly_bars(HISTORY, 2, "2024-01-11", weeks=3)
        assert [b.label for b in bars] == ["W-2", "W-1", "Now"]
        assert [b.count for b in bars] == [0, 2, 2]
        assert [b.goal_met for b in bars] == [False, True, True]
        assert bars[-1].bucket == week_bucket_of("2024-01-08")

    def test_default_is_eight_weeks(self):
        assert len(weekly_bars([], 3, "2024-01-11")) == 8


class TestThisWeek:
    def test_progress(self):
        assert this_week_progress(HISTORY, 3, "2024-01-12") == (2, pytest.approx(200 / 3))

    def test_progress_capped(self):
        assert this_week_progress(HISTORY, 1, "2024-01-12") == (2, 100.0)

    def test_week_days(self):
        days = week_days(HISTORY, "2024-01-03")
        assert days[0] == (date(2024, 1, 1), True)
        assert [done for _, done in days] == [True, False, True, False, False, False, False]

    def test_sessions_on(self):
        assert [r.id for r in sessions_on(HISTORY, "2024-01-10")] == ["h3", "h4"]
        assert sessions_on(HISTORY, date(2024, 1, 2)) == []


class TestRankings:
    @pytest.fixture
    def snap(self) -> Snapshot:
        return Snapshot(
            exercises=[Exercise("sq", "Squat", "legs"), Exercise("pl", "Plank", "core")],
            workouts=[WorkoutTemplate("w1", "Full body"), WorkoutTemplate("w2", "Core")],
            history=list(HISTORY),
        )

    def test_top_workouts_with_deleted(self, snap):
        assert top_workouts(snap) == [("Full body", 2), ("Core", 1), ("Deleted", 1)]

    def test_top_exercises(self, snap):
        assert top_exercises(snap, limit=2) == [("Squat", 3), ("Plank", 2)]

    def test_empty_history(self):
        assert top_workouts(Snapshot()) == []


class TestMonthGrid:
    def test_month_starting_on_monday(self):
        grid = month_grid(HISTORY, "2024-01-15")
        assert len(grid) == 5
        assert grid[0][0] == (date(2024, 1, 1), True)
        assert grid[0][1] == (date(2024, 1, 2), False)
        assert grid[4][:3] == [(date(2024, 1, 29), False), (date(2024, 1, 30), False), (date(2024, 1, 31), False)]
        assert grid[4][3:] == [None] * 4

    def test_leading_blanks_before_first_day(self):
        grid = month_grid([], date(2024, 2, 1))
        assert grid[0][:3] == [None] * 3
        assert grid[0][3] == (date(2024, 2, 1), False)
        assert all(len(week) == 7 for week in grid)
        days = [cell[0] for week in grid for cell in week if cell is not None]
        assert len(days) == 29

    def test_marks_every_logged_day(self):
        grid = month_grid(HISTORY, "2024-01-01")
        marked = {cell[0].isoformat() for week in grid for cell in week if cell and cell[1]}
        assert marked == {"2024-01-01", "2024-01-03", "2024-01-10"}


class TestBackupReminder:
    def test_never_backed_up(self):
        assert backup_overdue(Settings(), "2024-01-01")

    def test_recent_backup(self):
        assert not backup_overdue(Settings(last_backup_reminder="2024-01-01"), "2024-01-31")

    def test_old_backup(self):
        assert backup_overdue(Settings(last_backup_reminder="2024-01-01"), "2024-02-01")


# =============================================================================
# Session clock
# =============================================================================


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TestSessionClock:
    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, "0:00"), (9.9, "0:09"), (65, "1:05"), (3600, "60:00"), (-3, "0:00")],
    )
    def test_format_elapsed(self, seconds, expected):
        assert format_elapsed(seconds) == expected

    def test_tick_reports_elapsed(self):
        fake = FakeClock()
        seen: list[str] = []
        clock = SessionClock(seen.append, interval=3600, clock=fake)
        clock.start()
        try:
            fake.now += 75
            clock.tick()
        finally:
            clock.cancel()
        assert seen == ["1:15"]

    def test_tick_after_cancel_is_noop(self):
        seen: list[str] = []
        clock = SessionClock(seen.append, interval=3600, clock=FakeClock())
        clock.start()
        clock.cancel()
        clock.tick()
        assert seen == []
        assert not clock.running

    def test_torn_down_target_stops_clock(self):
        calls: list[str] = []

        def on_tick(elapsed: str) -> bool:
            calls.append(elapsed)
            return False

        clock = SessionClock(on_tick, interval=3600, clock=FakeClock())
        clock.start()
        clock.tick()
        clock.tick()
        assert len(calls) == 1
        assert not clock.running

    def test_double_start_rejected(self):
        clock = SessionClock(lambda _: True, interval=3600)
        clock.start()
        try:
            with pytest.raises(RuntimeError):
                clock.start()
        finally:
            clock.cancel()
