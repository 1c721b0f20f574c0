"""Data commands: settings, export, import, reset."""

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.markup import escape

from ...core.catalog import CatalogError, adjust_setting
from ...core.config import SETTING_RANGES
from ...io.serializers import ValidationError
from .. import views
from ..app import DataPathOption, app, get_store, training_day


@app.command()
def settings(
    goal_delta: Annotated[
        int,
        typer.Option("--goal-delta", "-g", help="Change the weekly goal by N (e.g. 1 or -1)"),
    ] = 0,
    max_delta: Annotated[
        int,
        typer.Option("--max-delta", "-m", help="Change max exercises per session by N"),
    ] = 0,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
    data_path: DataPathOption = None,
) -> None:
    """
    Show or adjust settings.

    Weekly goal stays within 1-14 and max exercises within 1-20.
    """
    store = get_store(data_path)
    snap = store.load(training_day())

    if goal_delta or max_delta:
        try:
            if goal_delta:
                snap = adjust_setting(snap, "weekly_goal", goal_delta)
            if max_delta:
                snap = adjust_setting(snap, "max_exercises", max_delta)
        except CatalogError as e:
            views.print_error(str(e))
            raise typer.Exit(1)
        store.save(snap)

    s = snap.settings
    if json_out:
        print(json.dumps({
            "weekly_goal": s.weekly_goal,
            "max_exercises": s.max_exercises,
            "last_backup": s.last_backup_reminder,
        }, indent=2))
        return

    goal_low, goal_high = SETTING_RANGES["weekly_goal"]
    max_low, max_high = SETTING_RANGES["max_exercises"]
    views.console.print()
    views.console.print(f"Weekly goal:    [bold]{s.weekly_goal}[/bold]  [dim]({goal_low}-{goal_high})[/dim]")
    views.console.print(f"Max exercises:  [bold]{s.max_exercises}[/bold]  [dim]({max_low}-{max_high})[/dim]")
    views.console.print(f"Last backup:    {s.last_backup_reminder or 'never'}")
    views.console.print(f"Data file:      [dim]{escape(str(store.data_path))}[/dim]")
    views.console.print()


@app.command("export")
def export_data(
    target: Annotated[
        Optional[Path],
        typer.Argument(help="Backup file (default: workout-backup-<date>.json)"),
    ] = None,
    data_path: DataPathOption = None,
) -> None:
    """Export all data to a JSON backup file."""
    today_str = training_day()
    if target is None:
        target = Path(f"workout-backup-{today_str}.json")
    store = get_store(data_path)
    store.export_to(target, today_str)
    views.print_success(f"Backup exported to {target}")


@app.command("import")
def import_data(
    source: Annotated[Path, typer.Argument(help="Backup file to import")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
    data_path: DataPathOption = None,
) -> None:
    """Replace all current data with a JSON backup."""
    if not force and not views.confirm_action("This will replace all current data. Continue?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    store = get_store(data_path)
    try:
        snap = store.import_from(source)
    except (FileNotFoundError, ValidationError) as e:
        views.print_error(str(e))
        views.print_info("Use a valid JSON backup created by 'export'.")
        raise typer.Exit(1)

    views.print_success(
        f"Data imported successfully! {len(snap.workouts)} workouts, {len(snap.history)} history entries."
    )


@app.command()
def reset(
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
    data_path: DataPathOption = None,
) -> None:
    """Reset all data to defaults. This cannot be undone."""
    if not force and not views.confirm_action("Reset all data? This cannot be undone."):
        views.print_info("Cancelled.")
        raise typer.Exit(0)
    get_store(data_path).reset(training_day())
    views.print_success("Data reset")
