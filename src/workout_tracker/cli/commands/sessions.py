"""Session commands: start, history, day, calendar, delete-entry, and helpers."""

import json
import random
from datetime import datetime
from typing import Annotated, Optional

import typer

from ...core.calendar import parse_month, today_raw
from ...core.catalog import NotFoundError, complete_session, delete_history_entry
from ...core.colors import CategoryColors
from ...core.config import HISTORY_RECENT_LIMIT
from ...core.models import ActiveSession
from ...core.session_clock import SessionClock, format_elapsed
from ...core.session_generator import SessionUnavailableError, start_session
from ...core.stats import month_grid, sessions_on
from ...io.serializers import ValidationError, validate_date
from .. import views
from ..app import DataPathOption, app, colors_for, get_store, training_day


def _run_interactive(session: ActiveSession, colors: CategoryColors) -> bool:
    """
    Walk the user through a session.

    Numbers toggle the done-mark of an exercise, 'c' completes and 'x'
    cancels. The terminal title shows the running clock.

    Returns:
        True if the session was completed, False if cancelled
    """
    active = {"session": session}

    def on_tick(elapsed: str) -> bool:
        if active["session"] is None:
            return False
        views.console.set_window_title(f"{session.workout_name} {elapsed}")
        return True

    clock = SessionClock(on_tick)
    clock.start()
    try:
        while True:
            views.print_session(session, colors, format_elapsed(clock.elapsed()))
            raw = views.console.input("Toggle # / \\[c]omplete / e\\[x]it: ").strip().lower()
            if raw in ("c", "complete"):
                return True
            if raw in ("x", "exit", "q"):
                if views.confirm_action("Cancel this workout?"):
                    return False
                continue
            try:
                idx = int(raw)
            except ValueError:
                views.print_error("Enter an exercise number, 'c' or 'x'")
                continue
            if idx < 1 or idx > len(session.exercises):
                views.print_error(f"Enter a number between 1 and {len(session.exercises)}")
                continue
            session.toggle(session.exercises[idx - 1].id)
    finally:
        active["session"] = None
        clock.cancel()


@app.command("start")
def start(
    workout_id: Annotated[str, typer.Argument(help="Workout template ID")],
    seed: Annotated[
        Optional[int],
        typer.Option("--seed", help="Random seed for a reproducible exercise pick"),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Log the session as completed without prompting"),
    ] = False,
    date: Annotated[
        Optional[str],
        typer.Option("--date", "-d", help="Session date (YYYY-MM-DD, default: today)"),
    ] = None,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
    data_path: DataPathOption = None,
) -> None:
    """
    Generate a balanced session from a workout template and log it.

    Every category in the template gets at least one exercise. Run with
    --yes to log straight away:

      workout-tracker start abc123de --yes
    """
    store = get_store(data_path)
    today_str = training_day()
    snap = store.load(today_str)

    if date is not None:
        try:
            validate_date(date)
        except ValidationError as e:
            views.print_error(str(e))
            raise typer.Exit(1)

    try:
        session = start_session(snap, workout_id, random.Random(seed))
    except NotFoundError as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    except SessionUnavailableError as e:
        views.print_error(f"Cannot start workout: {e}")
        raise typer.Exit(1)

    colors = colors_for(snap)
    if yes:
        views.print_session(session, colors)
        completed = True
    else:
        completed = _run_interactive(session, colors)

    if not completed:
        views.print_info("Workout cancelled.")
        return

    session_date = date or today_str
    updated = complete_session(snap, session, session_date)
    store.save(updated)

    if json_out:
        record = updated.history[-1]
        print(json.dumps({
            "id": record.id,
            "date": record.date,
            "workout_id": record.workout_id,
            "exercise_ids": record.exercise_ids,
            "elapsed": format_elapsed((datetime.now() - session.started_at).total_seconds()),
        }, indent=2))
        return

    views.print_success(f"Workout complete! 💪 Logged {session.workout_name} on {session_date}")


@app.command("history")
def history(
    limit: Annotated[
        int,
        typer.Option("--limit", "-n", min=1, help="Number of most recent entries to show"),
    ] = HISTORY_RECENT_LIMIT,
    json_out: Annotated[
        bool,
        typer.Option("--json", "-j", help="Output as JSON for machine processing"),
    ] = False,
    data_path: DataPathOption = None,
) -> None:
    """Show the most recent completed workouts."""
    snap = get_store(data_path).load(training_day())
    recent = sorted(snap.history, key=lambda h: h.date, reverse=True)[:limit]

    if json_out:
        print(json.dumps([
            {
                "id": h.id,
                "date": h.date,
                "workout_id": h.workout_id,
                "exercise_ids": h.exercise_ids,
            }
            for h in recent
        ], indent=2))
        return

    views.print_history(snap, recent)


@app.command("day")
def day(
    date: Annotated[str, typer.Argument(help="Date (YYYY-MM-DD)")],
    data_path: DataPathOption = None,
) -> None:
    """Show the workouts logged on one day."""
    try:
        validate_date(date)
    except ValidationError as e:
        views.print_error(str(e))
        raise typer.Exit(1)

    snap = get_store(data_path).load(training_day())
    records = sessions_on(snap.history, date)
    if not records:
        views.print_info(f"No workouts on {views.format_day(date)}.")
        return
    views.print_history(snap, records)


@app.command("calendar")
def calendar(
    month: Annotated[
        Optional[str],
        typer.Option("--month", "-m", help="Month to show (YYYY-MM, default: this month)"),
    ] = None,
    data_path: DataPathOption = None,
) -> None:
    """Show a month calendar with workout days marked."""
    today_str = today_raw()
    try:
        first = parse_month(month) if month is not None else parse_month(today_str[:7])
    except ValueError:
        views.print_error(f"Invalid month: {month} (expected YYYY-MM)")
        raise typer.Exit(1)

    snap = get_store(data_path).load(training_day())
    views.print_month_calendar(month_grid(snap.history, first), first, today_str)
    logged = [h for h in snap.history if h.date.startswith(first.strftime("%Y-%m"))]
    views.print_info(f"{len(logged)} workout(s) in {first:%B %Y}. Use 'day DATE' for details.")


@app.command("delete-entry")
def delete_entry(
    record_id: Annotated[str, typer.Argument(help="History entry ID (see 'history')")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
    data_path: DataPathOption = None,
) -> None:
    """Delete one history entry."""
    store = get_store(data_path)
    snap = store.load(training_day())

    target = next((h for h in snap.history if h.id == record_id), None)
    if target is None:
        views.print_error(f"History entry not found: {record_id}")
        raise typer.Exit(1)

    views.console.print(f"Entry to delete: [bold]{target.date}[/bold] ({record_id})")
    if not force and not views.confirm_action("Delete this workout entry?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)

    store.save(delete_history_entry(snap, record_id))
    views.print_success("Entry deleted")
