"""
Persistence boundary tests: serializers, SnapshotStore and YAML config.
"""

import json

import pytest

from workout_tracker.core.engine.config_loader import (
    get_app_home,
    get_day_cutoff_hour,
    get_palette,
    get_stats_weeks,
    load_app_config,
)
from workout_tracker.core.calendar import today
from workout_tracker.core.config import CATEGORY_PALETTE, DAY_CUTOFF_HOUR
from workout_tracker.core.models import Category, Exercise, HistoryRecord, Snapshot, WorkoutTemplate
from workout_tracker.io.serializers import (
    ValidationError,
    default_snapshot,
    dict_to_snapshot,
    snapshot_to_dict,
    validate_date,
)
from workout_tracker.io.snapshot_store import SnapshotStore, get_default_data_path


def _backup_doc() -> dict:
    return {
        "version": 1,
        "settings": {"weeklyGoal": 4, "maxExercises": 6, "lastBackupReminder": "2024-01-01"},
        "categories": [{"id": "legs", "name": "Legs"}],
        "exercises": [{"id": "sq", "name": "Squat", "categoryId": "legs", "description": "deep"}],
        "workouts": [{"id": "w1", "name": "Leg day", "exerciseIds": ["sq", "gone"]}],
        "history": [{"id": "h1", "date": "2024-01-02", "workoutId": "w1", "exerciseIds": ["sq"]}],
    }


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    monkeypatch.setenv("WORKOUT_TRACKER_HOME", str(home))
    return home


class TestSerializers:
    def test_validate_date(self):
        assert validate_date("2024-02-29") == "2024-02-29"
        with pytest.raises(ValidationError):
            validate_date("2024-02-30")
        with pytest.raises(ValidationError):
            validate_date("02/01/2024")

    def test_default_snapshot(self):
        snap = default_snapshot("2024-01-01")
        assert snap.version == 1
        assert (snap.settings.weekly_goal, snap.settings.max_exercises) == (3, 5)
        assert snap.history == [] and snap.exercises == []

    def test_dict_to_snapshot_reads_backup_layout(self):
        snap = dict_to_snapshot(_backup_doc())
        assert snap.settings.weekly_goal == 4
        assert snap.exercises[0] == Exercise("sq", "Squat", "legs", "deep")
        assert snap.workouts[0].exercise_ids == ["sq", "gone"]
        assert snap.history[0].workout_id == "w1"

    def test_snapshot_to_dict_uses_camel_case(self):
        snap = Snapshot(
            categories=[Category("legs", "Legs")],
            exercises=[Exercise("sq", "Squat", "legs")],
            workouts=[WorkoutTemplate("w1", "Leg day", ["sq"])],
            history=[HistoryRecord("h1", "2024-01-02", "w1", ["sq"])],
        )
        data = snapshot_to_dict(snap)
        assert data["exercises"][0]["categoryId"] == "legs"
        assert data["workouts"][0]["exerciseIds"] == ["sq"]
        assert data["history"][0]["workoutId"] == "w1"
        assert data["settings"]["weeklyGoal"] == 3

    @pytest.mark.parametrize(
        "mutate",
        [
            lambda d: d.pop("version"),
            lambda d: d.update(version=0),
            lambda d: d.update(version="one"),
            lambda d: d.update(history={}),
            lambda d: d.pop("exercises"),
            lambda d: d["history"][0].update(date="yesterday"),
            lambda d: d["exercises"][0].pop("categoryId"),
            lambda d: d["exercises"][0].update(description=5),
            lambda d: d["settings"].update(weeklyGoal=0),
            lambda d: d.update(categories=["legs"]),
        ],
    )
    def test_structural_validation(self, mutate):
        doc = _backup_doc()
        mutate(doc)
        with pytest.raises(ValidationError):
            dict_to_snapshot(doc)

    def test_missing_description_is_empty(self):
        doc = _backup_doc()
        del doc["exercises"][0]["description"]
        assert dict_to_snapshot(doc).exercises[0].description == ""

    def test_default_snapshot_seeds_backup_date(self):
        assert default_snapshot().settings.last_backup_reminder == today()

    def test_missing_settings_fall_back(self):
        doc = _backup_doc()
        del doc["settings"]
        assert dict_to_snapshot(doc).settings.max_exercises == 5


class TestSnapshotStore:
    def test_missing_file_gives_default(self, tmp_path):
        store = SnapshotStore(tmp_path / "snapshot.json")
        assert not store.exists()
        snap = store.load("2024-01-01")
        assert snap.settings.weekly_goal == 3
        assert snap.settings.last_backup_reminder == "2024-01-01"

    def test_malformed_file_gives_default(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text("{not json")
        with pytest.warns(UserWarning, match="using defaults"):
            snap = SnapshotStore(path).load()
        assert snap.settings.max_exercises == 5

    def test_versionless_file_gives_default(self, tmp_path):
        path = tmp_path / "snapshot.json"
        path.write_text(json.dumps({"history": [], "exercises": []}))
        with pytest.warns(UserWarning):
            assert SnapshotStore(path).load().history == []

    def test_save_creates_parents(self, tmp_path):
        store = SnapshotStore(tmp_path / "deep" / "dir" / "snapshot.json")
        store.save(dict_to_snapshot(_backup_doc()))
        assert store.exists()
        assert store.load().workouts[0].name == "Leg day"
        assert not (tmp_path / "deep" / "dir" / "snapshot.json.tmp").exists()

    def test_import_replaces_data(self, tmp_path):
        source = tmp_path / "backup.json"
        source.write_text(json.dumps(_backup_doc()))
        store = SnapshotStore(tmp_path / "snapshot.json")
        store.import_from(source)
        assert store.load().settings.weekly_goal == 4

    def test_invalid_import_keeps_existing_data(self, tmp_path):
        store = SnapshotStore(tmp_path / "snapshot.json")
        store.save(dict_to_snapshot(_backup_doc()))
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"version": 1, "history": "nope", "exercises": []}))
        with pytest.raises(ValidationError):
            store.import_from(bad)
        assert len(store.load().history) == 1

    def test_import_undecodable_file(self, tmp_path):
        store = SnapshotStore(tmp_path / "snapshot.json")
        store.save(dict_to_snapshot(_backup_doc()))
        bad = tmp_path / "bad.json"
        bad.write_bytes(b'\xff\xfe{"version": 1}')
        with pytest.raises(ValidationError, match="Invalid backup file"):
            store.import_from(bad)
        assert store.load().workouts[0].name == "Leg day"

    def test_import_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SnapshotStore(tmp_path / "snapshot.json").import_from(tmp_path / "none.json")

    def test_export_marks_backup(self, tmp_path):
        store = SnapshotStore(tmp_path / "snapshot.json")
        store.save(dict_to_snapshot(_backup_doc()))
        target = tmp_path / "out" / "backup.json"
        store.export_to(target, "2024-03-01")
        exported = json.loads(target.read_text())
        assert exported["settings"]["lastBackupReminder"] == "2024-03-01"
        assert store.load().settings.last_backup_reminder == "2024-03-01"

    def test_reset(self, tmp_path):
        store = SnapshotStore(tmp_path / "snapshot.json")
        store.save(dict_to_snapshot(_backup_doc()))
        store.reset("2024-03-01")
        assert store.load().workouts == []

    def test_default_path_follows_home(self, isolated_home):
        assert get_default_data_path() == isolated_home / "snapshot.json"


class TestConfigLoader:
    def test_bundled_defaults(self):
        cfg = load_app_config()
        assert cfg["day_boundary"]["cutoff_hour"] == DAY_CUTOFF_HOUR
        assert get_palette(cfg) == CATEGORY_PALETTE
        assert get_stats_weeks(cfg) == 8

    def test_user_override(self, isolated_home):
        isolated_home.mkdir(parents=True)
        (isolated_home / "config.yaml").write_text("day_boundary:\n  cutoff_hour: 2\n")
        assert get_app_home() == isolated_home
        assert get_day_cutoff_hour() == 2
        assert get_palette() == CATEGORY_PALETTE

    def test_malformed_user_file_ignored(self, isolated_home):
        isolated_home.mkdir(parents=True)
        (isolated_home / "config.yaml").write_text("day_boundary: [unclosed\n")
        with pytest.warns(UserWarning):
            assert get_day_cutoff_hour() == DAY_CUTOFF_HOUR

    def test_out_of_range_cutoff_ignored(self):
        with pytest.warns(UserWarning):
            assert get_day_cutoff_hour({"day_boundary": {"cutoff_hour": 30}}) == DAY_CUTOFF_HOUR
