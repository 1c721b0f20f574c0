"""
JSON-based snapshot storage.

Handles reading, writing, exporting and importing the single snapshot
document that holds categories, exercises, workouts, history and settings.
"""

import json
import warnings
from pathlib import Path

from ..core.catalog import mark_backup
from ..core.engine.config_loader import get_app_home
from ..core.models import Snapshot
from .serializers import ValidationError, default_snapshot, dict_to_snapshot, snapshot_to_dict


class SnapshotStore:
    """
    Manages the snapshot document stored as one JSON file.

    A missing or malformed file never blocks the application: load()
    falls back to the default snapshot (weekly goal 3, max exercises 5).
    Imports are strict and refuse documents that fail validation.
    """

    def __init__(self, data_path: str | Path):
        """
        Initialize the snapshot store.

        Args:
            data_path: Path to the JSON snapshot file
        """
        self.data_path = Path(data_path)

    def exists(self) -> bool:
        """Check if the snapshot file exists."""
        return self.data_path.exists()

    def load(self, today: str | None = None) -> Snapshot:
        """
        Load the snapshot, falling back to defaults.

        Args:
            today: Date recorded as last backup reminder on a fresh snapshot

        Returns:
            Stored Snapshot, or a default one if the file is missing or invalid
        """
        if not self.data_path.exists():
            return default_snapshot(today)

        try:
            with open(self.data_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            return dict_to_snapshot(data)
        except (json.JSONDecodeError, ValidationError, ValueError) as e:
            warnings.warn(
                f"workout-tracker: could not read {self.data_path} ({e}); using defaults.",
                stacklevel=2,
            )
            return default_snapshot(today)

    def save(self, snap: Snapshot) -> None:
        """
        Write the snapshot to disk.

        Creates parent directories if needed. The file is replaced
        atomically so an interrupted write leaves the previous copy intact.
        """
        self.data_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.data_path.with_name(self.data_path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(snapshot_to_dict(snap), f, indent=2)
        tmp_path.replace(self.data_path)

    def export_to(self, target: str | Path, today: str) -> Snapshot:
        """
        Write a backup copy and remember the export date.

        Args:
            target: Backup file path
            today: Export date (YYYY-MM-DD)

        Returns:
            The snapshot with last_backup_reminder updated (also saved)
        """
        snap = mark_backup(self.load(today), today)
        self.save(snap)
        target = Path(target)
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            json.dump(snapshot_to_dict(snap), f, indent=2)
        return snap

    def import_from(self, source: str | Path) -> Snapshot:
        """
        Replace the stored snapshot with a backup file.

        Raises:
            FileNotFoundError: If source does not exist
            ValidationError: If source is not a valid backup
        """
        source = Path(source)
        if not source.exists():
            raise FileNotFoundError(f"Backup file not found: {source}")

        try:
            with open(source, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValidationError(f"Invalid backup file {source}: {e}") from e

        try:
            snap = dict_to_snapshot(data)
        except ValueError as e:
            raise ValidationError(f"Invalid backup file {source}: {e}") from e

        self.save(snap)
        return snap

    def reset(self, today: str | None = None) -> Snapshot:
        """
        Replace all data with the default snapshot (dangerous - use with caution).
        """
        snap = default_snapshot(today)
        self.save(snap)
        return snap


def get_default_data_path() -> Path:
    """
    Get the default snapshot file path.

    Returns:
        <app home>/snapshot.json (see config_loader.get_app_home)
    """
    return get_app_home() / "snapshot.json"


def get_default_store() -> SnapshotStore:
    """
    Get a SnapshotStore with the default path.

    Returns:
        SnapshotStore instance
    """
    return SnapshotStore(get_default_data_path())
