"""
CLI entry point using Typer.

Provides commands for workout tracking:
- dashboard: Streak, this week's progress and workouts
- category / exercise / workout: Catalog management
- start: Generate a balanced session and log it
- history / day / delete-entry: Completed workouts
- stats: Streaks, weekly chart, rankings
- settings / export / import / reset: Preferences and backups
"""

import typer

from . import views
from .app import app
from .commands import analysis, catalog, data, sessions  # noqa: F401  (registers commands)


@app.callback(invoke_without_command=True)
def main_callback(ctx: typer.Context) -> None:
    """
    Workout tracker. Run without a command for interactive mode.
    """
    if ctx.invoked_subcommand is not None:
        return  # A sub-command was given, let it handle things

    # ── Interactive main menu ───────────────────────────────────────────────
    views.console.print()
    views.console.print("[bold cyan]workout-tracker[/bold cyan]: weekly streaks & balanced sessions")
    views.console.print()

    menu = {
        "1": ("dashboard",  "Dashboard"),
        "2": ("start",      "Start a workout"),
        "3": ("history",    "Calendar and history"),
        "4": ("stats",      "Statistics"),
        "5": ("catalog",    "Show categories, exercises and workouts"),
        "6": ("settings",   "Settings"),
        "0": ("quit",       "Quit"),
    }

    for key, (_, desc) in menu.items():
        views.console.print(f"  \\[{key}] {desc}")

    views.console.print()
    choice = views.console.input("Choose [1]: ").strip() or "1"

    if choice == "0":
        raise typer.Exit(0)

    cmd_map = {k: v[0] for k, v in menu.items()}
    chosen = cmd_map.get(choice)

    if chosen is None:
        views.print_error(f"Unknown choice: {choice}")
        raise typer.Exit(1)

    if chosen == "dashboard":
        ctx.invoke(analysis.dashboard)
    elif chosen == "start":
        ctx.invoke(analysis.dashboard)
        workout_id = views.console.input("Workout ID: ").strip()
        if not workout_id:
            views.print_info("Cancelled.")
            return
        ctx.invoke(sessions.start, workout_id=workout_id)
    elif chosen == "history":
        ctx.invoke(sessions.calendar)
        ctx.invoke(sessions.history)
    elif chosen == "stats":
        ctx.invoke(analysis.stats)
    elif chosen == "catalog":
        ctx.invoke(catalog.category_list)
        ctx.invoke(catalog.exercise_list)
        ctx.invoke(catalog.workout_list)
    elif chosen == "settings":
        ctx.invoke(data.settings)


if __name__ == "__main__":
    app()
