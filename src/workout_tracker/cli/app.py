"""Shared Typer app object, shared option types, and store utilities."""

from datetime import datetime
from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.calendar import today
from ..core.colors import CategoryColors
from ..core.engine.config_loader import get_day_cutoff_hour, get_palette
from ..core.models import Snapshot
from ..io.snapshot_store import SnapshotStore, get_default_data_path

# Shared --data-path option type used across all commands
DataPathOption = Annotated[
    Optional[Path],
    typer.Option("--data-path", "-p", help="Path to the snapshot JSON file"),
]

app = typer.Typer(
    name="workout-tracker",
    help="Weekly workout streaks and balanced, randomized exercise sessions.",
    no_args_is_help=False,
    invoke_without_command=True,
)


def get_store(data_path: Path | None) -> SnapshotStore:
    """Get snapshot store from path or default location."""
    if data_path is None:
        data_path = get_default_data_path()
    return SnapshotStore(data_path)


def training_day(now: datetime | None = None) -> str:
    """Today's date under the configured day-boundary rule."""
    return today(now, cutoff_hour=get_day_cutoff_hour())


def colors_for(snap: Snapshot) -> CategoryColors:
    """Color mapping seeded in catalog order."""
    return CategoryColors.from_catalog(snap.categories, get_palette())
