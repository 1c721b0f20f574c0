"""
CLI view formatters using Rich for pretty console output.

Handles table formatting and display of catalog, sessions and statistics.
"""

from datetime import date

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..core.calendar import parse_date
from ..core.catalog import (
    category_name,
    exercise_count,
    exercise_name,
    valid_exercise_ids,
    workout_category_names,
    workout_name,
)
from ..core.colors import CategoryColors
from ..core.models import ActiveSession, HistoryRecord, Snapshot, StreakResult, WeekBar

console = Console()

DAY_LETTERS = ("M", "T", "W", "T", "F", "S", "S")
BAR_WIDTH = 24


def format_day(date_str: str) -> str:
    """Short human date, e.g. "Mon, Jan 1"."""
    d = parse_date(date_str)
    return f"{d:%a}, {d:%b} {d.day}"


def greeting(hour: int) -> str:
    if hour < 12:
        return "Good Morning"
    if hour < 17:
        return "Good Afternoon"
    return "Good Evening"


def print_dashboard(
    snap: Snapshot,
    streak: StreakResult,
    week_count: int,
    week_pct: float,
    days: list[tuple[date, bool]],
    today_str: str,
    hour: int,
) -> None:
    """
    Print the dashboard: streak, this-week progress and workout list.

    Args:
        snap: Current snapshot
        streak: Current/longest streak
        week_count: Sessions logged this week
        week_pct: Progress toward the weekly goal (0-100)
        days: Monday..Sunday with done flags
        today_str: Training day (YYYY-MM-DD)
        hour: Current local hour, for the greeting
    """
    goal = snap.settings.weekly_goal
    console.print()
    console.print(f"[dim]{format_day(today_str)}[/dim]")
    console.print(f"[bold cyan]{greeting(hour)}[/bold cyan]")
    console.print(f"🔥 [bold]{streak.current}[/bold] week streak  [dim](best {streak.longest})[/dim]")
    console.print()

    filled = int(round(BAR_WIDTH * week_pct / 100))
    bar_style = "green" if week_count >= goal else "yellow"
    console.print(
        f"[bold]This week[/bold]  {week_count} / {goal}  "
        f"[{bar_style}]{'█' * filled}[/{bar_style}]{'░' * (BAR_WIDTH - filled)}"
    )

    dots: list[str] = []
    for (d, done), letter in zip(days, DAY_LETTERS):
        key = d.isoformat()
        if done:
            dots.append("[green]✓[/green]")
        elif key == today_str:
            dots.append(f"[bold cyan]{letter}[/bold cyan]")
        elif key < today_str:
            dots.append(f"[dim red]{letter}[/dim red]")
        else:
            dots.append(f"[dim]{letter}[/dim]")
    console.print("  " + " ".join(dots))
    console.print()

    console.print("[bold]Start a Workout[/bold]")
    if not snap.workouts:
        console.print("[yellow]No workouts yet.[/yellow] [dim]Create one with 'workout add'.[/dim]")
        return
    for w in snap.workouts:
        cats = workout_category_names(snap, w)
        cat_str = escape(", ".join(cats[:3])) + ("…" if len(cats) > 3 else "")
        console.print(
            f"  [cyan]{w.id}[/cyan]  [bold]{escape(w.name)}[/bold]  "
            f"[dim]{len(w.exercise_ids)} exercises · {cat_str}[/dim]"
        )
    console.print()


def format_category_table(snap: Snapshot, colors: CategoryColors) -> Table:
    table = Table(title="Categories", show_header=True, header_style="bold")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Exercises", justify="right")
    for cat in snap.categories:
        color = colors.color_of(cat.id)
        table.add_row(cat.id, f"[{color}]{escape(cat.name)}[/{color}]", str(exercise_count(snap, cat.id)))
    return table


def format_exercise_table(snap: Snapshot, colors: CategoryColors) -> Table:
    table = Table(title="Exercises", show_header=True, header_style="bold")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Category")
    table.add_column("Description", style="dim")
    for ex in snap.exercises:
        color = colors.color_of(ex.category_id)
        table.add_row(
            ex.id,
            escape(ex.name),
            f"[{color}]{escape(category_name(snap, ex.category_id))}[/{color}]",
            escape(ex.description),
        )
    return table


def format_workout_table(snap: Snapshot) -> Table:
    table = Table(title="Workout Templates", show_header=True, header_style="bold")
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Exercises", justify="right")
    table.add_column("Categories", style="dim")
    for w in snap.workouts:
        valid = len(valid_exercise_ids(snap, w))
        count = f"{valid}" if valid == len(w.exercise_ids) else f"{valid} ({len(w.exercise_ids)})"
        table.add_row(w.id, escape(w.name), count, escape(", ".join(workout_category_names(snap, w))))
    return table


def print_catalog_table(table: Table, empty_message: str, is_empty: bool) -> None:
    if is_empty:
        console.print(f"[yellow]{empty_message}[/yellow]")
        return
    console.print(table)


def print_session(session: ActiveSession, colors: CategoryColors, elapsed: str | None = None) -> None:
    """Print the exercises of an active session."""
    console.print()
    header = f"[bold]{escape(session.workout_name)}[/bold]"
    if elapsed is not None:
        header += f"  [dim]{elapsed}[/dim]"
    console.print(header)

    table = Table(show_header=True, header_style="dim")
    table.add_column("#", justify="right")
    table.add_column("Exercise")
    table.add_column("Category")
    table.add_column("Done", justify="center")
    for i, ex in enumerate(session.exercises, 1):
        color = colors.color_of(ex.category_id)
        table.add_row(
            str(i),
            escape(ex.name),
            f"[{color}]{escape(ex.category_name)}[/{color}]",
            "[green]✓[/green]" if ex.id in session.checked else "",
        )
    console.print(table)


def format_history_table(snap: Snapshot, records: list[HistoryRecord]) -> Table:
    table = Table(title="History", show_header=True, header_style="bold")
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Workout")
    table.add_column("Exercises")
    for record in records:
        names = [exercise_name(snap, ex_id) for ex_id in record.exercise_ids]
        table.add_row(
            record.id,
            format_day(record.date),
            escape(workout_name(snap, record.workout_id)),
            escape(", ".join(names)),
        )
    return table


def print_history(snap: Snapshot, records: list[HistoryRecord]) -> None:
    """
    Print history records, newest first as given.

    Args:
        snap: Snapshot used to resolve names
        records: Records to display
    """
    if not records:
        console.print("[yellow]No workouts logged yet.[/yellow]")
        return
    console.print(format_history_table(snap, records))


def print_month_calendar(
    grid: list[list[tuple[date, bool] | None]],
    month: date,
    today_str: str,
) -> None:
    """
    Print a Monday-first month grid.

    Days with a logged session are green, today is shown reversed.
    """
    table = Table(title=f"{month:%B %Y}", show_header=True, header_style="dim", box=None)
    for letter in DAY_LETTERS:
        table.add_column(letter, justify="right")
    for week in grid:
        row: list[str] = []
        for cell in week:
            if cell is None:
                row.append("")
                continue
            d, done = cell
            styles = []
            if done:
                styles.append("bold green")
            if d.isoformat() == today_str:
                styles.append("reverse")
            style = " ".join(styles)
            row.append(f"[{style}]{d.day}[/]" if style else str(d.day))
        table.add_row(*row)
    console.print(table)


def print_week_bars(bars: list[WeekBar], weekly_goal: int) -> None:
    """Horizontal bar chart of sessions per week."""
    top = max([b.count for b in bars] + [weekly_goal])
    console.print("[bold]Weekly Sessions[/bold]")
    for b in bars:
        width = int(round(BAR_WIDTH * b.count / top)) if top > 0 else 0
        style = "green" if b.goal_met else ("cyan" if b.label == "Now" else "white")
        console.print(
            f"  {b.label:>4}  [{style}]{'█' * width}[/{style}]{' ' * (BAR_WIDTH - width)}  {b.count}"
        )


def print_ranking(title: str, items: list[tuple[str, int]]) -> None:
    console.print(f"[bold]{title}[/bold]")
    if not items:
        console.print("  [dim]No data yet[/dim]")
        return
    top = items[0][1] or 1
    for i, (name, count) in enumerate(items, 1):
        width = int(round(BAR_WIDTH / 2 * count / top))
        console.print(f"  {i}. {escape(name):<24} [magenta]{'▇' * width}[/magenta] {count}")


def print_stats(
    streak: StreakResult,
    total: int,
    bars: list[WeekBar],
    weekly_goal: int,
    workouts: list[tuple[str, int]],
    exercises: list[tuple[str, int]],
) -> None:
    console.print()
    console.print(
        f"[bold]Current streak:[/bold] {streak.current}  "
        f"[bold]Longest:[/bold] {streak.longest}  "
        f"[bold]Total workouts:[/bold] {total}"
    )
    console.print()
    print_week_bars(bars, weekly_goal)
    console.print()
    print_ranking("Top Workouts", workouts)
    console.print()
    print_ranking("Top Exercises", exercises)
    console.print()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{escape(message)}[/green]")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[red]Error: {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]Warning: {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]{escape(message)}[/blue]")


def confirm_action(message: str) -> bool:
    """
    Prompt user for confirmation.

    Args:
        message: Confirmation message

    Returns:
        True if confirmed, False otherwise
    """
    response = console.input(f"{escape(message)} \\[y/N]: ")
    return response.lower() in ("y", "yes")
