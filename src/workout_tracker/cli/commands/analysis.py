"""Analysis commands: dashboard, stats."""

import json
from datetime import datetime
from typing import Annotated

import typer

from ...core.engine.config_loader import get_backup_reminder_days, get_stats_weeks, get_top_n, load_app_config
from ...core.stats import (
    backup_overdue,
    this_week_progress,
    top_exercises,
    top_workouts,
    week_days,
    weekly_bars,
)
from ...core.streak import compute_streak
from .. import views
from ..app import DataPathOption, app, get_store, training_day


@app.command()
def dashboard(data_path: DataPathOption = None) -> None:
    """
    Show streak, this week's progress and the workout list.
    """
    now = datetime.now()
    today_str = training_day(now)
    snap = get_store(data_path).load(today_str)
    goal = snap.settings.weekly_goal

    streak = compute_streak(snap.history, goal, today_str)
    count, pct = this_week_progress(snap.history, goal, today_str)
    views.print_dashboard(
        snap,
        streak,
        count,
        pct,
        week_days(snap.history, today_str),
        today_str,
        now.hour,
    )

    if snap.history and backup_overdue(snap.settings, today_str, get_backup_reminder_days()):
        views.print_warning("No backup in a while. Run 'export PATH' to save a copy.")


@app.command()
def stats(
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
    data_path: DataPathOption = None,
) -> None:
    """
    Show streaks, weekly session counts and most-used workouts/exercises.
    """
    today_str = training_day()
    snap = get_store(data_path).load(today_str)
    goal = snap.settings.weekly_goal
    cfg = load_app_config()

    streak = compute_streak(snap.history, goal, today_str)
    bars = weekly_bars(snap.history, goal, today_str, get_stats_weeks(cfg))
    top_n = get_top_n(cfg)
    workouts = top_workouts(snap, top_n)
    exercises = top_exercises(snap, top_n)

    if json_out:
        print(json.dumps({
            "current_streak": streak.current,
            "longest_streak": streak.longest,
            "total_workouts": len(snap.history),
            "weekly_goal": goal,
            "weeks": [
                {"week": str(b.bucket), "label": b.label, "count": b.count, "goal_met": b.goal_met}
                for b in bars
            ],
            "top_workouts": [{"name": n, "count": c} for n, c in workouts],
            "top_exercises": [{"name": n, "count": c} for n, c in exercises],
        }, indent=2))
        return

    views.print_stats(streak, len(snap.history), bars, goal, workouts, exercises)
