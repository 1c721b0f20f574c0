"""Catalog commands: category, exercise and workout template management."""

from typing import Annotated, Callable, Optional

import typer

from ...core import catalog
from ...core.catalog import CatalogError, NotFoundError
from ...core.models import Snapshot
from .. import views
from ..app import DataPathOption, app, colors_for, get_store, training_day

category_app = typer.Typer(help="Manage exercise categories.", no_args_is_help=True)
exercise_app = typer.Typer(help="Manage exercises.", no_args_is_help=True)
workout_app = typer.Typer(help="Manage workout templates.", no_args_is_help=True)

app.add_typer(category_app, name="category")
app.add_typer(exercise_app, name="exercise")
app.add_typer(workout_app, name="workout")


def _apply(data_path, command: Callable[[Snapshot], Snapshot], success: str) -> Snapshot:
    """Load, run one catalog command, save, and report."""
    store = get_store(data_path)
    snap = store.load(training_day())
    try:
        updated = command(snap)
    except (CatalogError, NotFoundError) as e:
        views.print_error(str(e))
        raise typer.Exit(1)
    store.save(updated)
    views.print_success(success)
    return updated


def _split_ids(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


# =============================================================================
# Categories
# =============================================================================


@category_app.command("list")
def category_list(data_path: DataPathOption = None) -> None:
    """List categories with their exercise counts."""
    snap = get_store(data_path).load(training_day())
    views.print_catalog_table(
        views.format_category_table(snap, colors_for(snap)),
        "No categories yet. Add one with 'category add NAME'.",
        not snap.categories,
    )


@category_app.command("add")
def category_add(
    name: Annotated[str, typer.Argument(help="Category name, e.g. Legs")],
    data_path: DataPathOption = None,
) -> None:
    """Create a category."""
    _apply(data_path, lambda s: catalog.add_category(s, name), "Category created")


@category_app.command("rename")
def category_rename(
    category_id: Annotated[str, typer.Argument(help="Category ID")],
    name: Annotated[str, typer.Argument(help="New name")],
    data_path: DataPathOption = None,
) -> None:
    """Rename a category."""
    _apply(data_path, lambda s: catalog.rename_category(s, category_id, name), "Category updated")


@category_app.command("delete")
def category_delete(
    category_id: Annotated[str, typer.Argument(help="Category ID")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
    data_path: DataPathOption = None,
) -> None:
    """Delete a category that no exercise uses."""
    if not force and not views.confirm_action("Delete this category?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)
    _apply(data_path, lambda s: catalog.delete_category(s, category_id), "Category deleted")


# =============================================================================
# Exercises
# =============================================================================


@exercise_app.command("list")
def exercise_list(data_path: DataPathOption = None) -> None:
    """List exercises with their categories."""
    snap = get_store(data_path).load(training_day())
    views.print_catalog_table(
        views.format_exercise_table(snap, colors_for(snap)),
        "No exercises yet. Add one with 'exercise add NAME --category ID'.",
        not snap.exercises,
    )


@exercise_app.command("add")
def exercise_add(
    name: Annotated[str, typer.Argument(help="Exercise name")],
    category_id: Annotated[str, typer.Option("--category", "-c", help="Category ID")],
    description: Annotated[
        str, typer.Option("--description", "-d", help="Optional notes / cues")
    ] = "",
    data_path: DataPathOption = None,
) -> None:
    """Create an exercise in an existing category."""
    _apply(
        data_path,
        lambda s: catalog.add_exercise(s, name, category_id, description),
        "Exercise created",
    )


@exercise_app.command("edit")
def exercise_edit(
    exercise_id: Annotated[str, typer.Argument(help="Exercise ID")],
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="New name")] = None,
    category_id: Annotated[
        Optional[str], typer.Option("--category", "-c", help="New category ID")
    ] = None,
    description: Annotated[
        Optional[str], typer.Option("--description", "-d", help="New description")
    ] = None,
    data_path: DataPathOption = None,
) -> None:
    """Edit an exercise."""
    _apply(
        data_path,
        lambda s: catalog.update_exercise(s, exercise_id, name, category_id, description),
        "Exercise updated",
    )


@exercise_app.command("delete")
def exercise_delete(
    exercise_id: Annotated[str, typer.Argument(help="Exercise ID")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
    data_path: DataPathOption = None,
) -> None:
    """Delete an exercise and remove it from all workout templates."""
    if not force and not views.confirm_action("Delete this exercise?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)
    _apply(data_path, lambda s: catalog.delete_exercise(s, exercise_id), "Exercise deleted")


# =============================================================================
# Workout templates
# =============================================================================


@workout_app.command("list")
def workout_list(data_path: DataPathOption = None) -> None:
    """List workout templates."""
    snap = get_store(data_path).load(training_day())
    views.print_catalog_table(
        views.format_workout_table(snap),
        "No workouts yet. Create one with 'workout add NAME --exercises ID,ID'.",
        not snap.workouts,
    )


@workout_app.command("add")
def workout_add(
    name: Annotated[str, typer.Argument(help="Workout name")],
    exercises: Annotated[
        str, typer.Option("--exercises", "-x", help="Comma-separated exercise IDs")
    ],
    data_path: DataPathOption = None,
) -> None:
    """Create a workout template from exercise IDs."""
    _apply(
        data_path,
        lambda s: catalog.add_workout(s, name, _split_ids(exercises)),
        "Workout created",
    )


@workout_app.command("edit")
def workout_edit(
    workout_id: Annotated[str, typer.Argument(help="Workout ID")],
    name: Annotated[Optional[str], typer.Option("--name", "-n", help="New name")] = None,
    exercises: Annotated[
        Optional[str],
        typer.Option("--exercises", "-x", help="Comma-separated exercise IDs (replaces list)"),
    ] = None,
    data_path: DataPathOption = None,
) -> None:
    """Edit a workout template."""
    ids = _split_ids(exercises) if exercises is not None else None
    _apply(
        data_path,
        lambda s: catalog.update_workout(s, workout_id, name, ids),
        "Workout updated",
    )


@workout_app.command("delete")
def workout_delete(
    workout_id: Annotated[str, typer.Argument(help="Workout ID")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
    data_path: DataPathOption = None,
) -> None:
    """Delete a workout template (history entries keep their snapshot)."""
    if not force and not views.confirm_action("Delete this workout template?"):
        views.print_info("Cancelled.")
        raise typer.Exit(0)
    _apply(data_path, lambda s: catalog.delete_workout(s, workout_id), "Workout deleted")
