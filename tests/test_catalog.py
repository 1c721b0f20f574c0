"""
Tests for catalog commands, placeholder lookups and category colors.

Commands return new snapshots; tests also check the input is untouched.
"""

from datetime import datetime

import pytest

from workout_tracker.core import catalog
from workout_tracker.core.catalog import CatalogError, NotFoundError
from workout_tracker.core.colors import CategoryColors
from workout_tracker.core.config import CATEGORY_PALETTE
from workout_tracker.core.models import (
    ActiveSession,
    Category,
    Exercise,
    HistoryRecord,
    SessionExercise,
    Snapshot,
    WorkoutTemplate,
)


@pytest.fixture
def snap() -> Snapshot:
    return Snapshot(
        categories=[Category("legs", "Legs"), Category("core", "Core"), Category("empty", "Empty")],
        exercises=[
            Exercise("sq", "Squat", "legs"),
            Exercise("lu", "Lunge", "legs"),
            Exercise("pl", "Plank", "core"),
        ],
        workouts=[
            WorkoutTemplate("w1", "Legs & core", ["sq", "lu", "pl"]),
            WorkoutTemplate("w2", "Legs only", ["sq", "lu"]),
        ],
        history=[HistoryRecord("h1", "2024-01-01", "w1", ["sq", "pl"])],
    )


class TestIds:
    def test_new_id_shape(self):
        ids = {catalog.new_id() for _ in range(200)}
        assert len(ids) == 200
        assert all(len(i) == 8 and i.isalnum() and i.lower() == i for i in ids)


class TestCategories:
    def test_add(self, snap):
        updated = catalog.add_category(snap, "  Arms ")
        assert [c.name for c in updated.categories][-1] == "Arms"
        assert len(snap.categories) == 3

    def test_add_requires_name(self, snap):
        with pytest.raises(CatalogError, match="Name required"):
            catalog.add_category(snap, "   ")

    def test_rename(self, snap):
        updated = catalog.rename_category(snap, "core", "Abs")
        assert catalog.category_name(updated, "core") == "Abs"
        assert catalog.category_name(snap, "core") == "Core"

    def test_delete_unused(self, snap):
        updated = catalog.delete_category(snap, "empty")
        assert [c.id for c in updated.categories] == ["legs", "core"]

    def test_delete_in_use_refused(self, snap):
        with pytest.raises(CatalogError, match="Remove exercises first"):
            catalog.delete_category(snap, "legs")

    def test_delete_unknown(self, snap):
        with pytest.raises(NotFoundError):
            catalog.delete_category(snap, "nope")


class TestExercises:
    def test_add(self, snap):
        updated = catalog.add_exercise(snap, "Crunch", "core", " slow ")
        added = updated.exercises[-1]
        assert (added.name, added.category_id, added.description) == ("Crunch", "core", "slow")

    def test_add_unknown_category(self, snap):
        with pytest.raises(CatalogError):
            catalog.add_exercise(snap, "Crunch", "nope")

    def test_add_without_categories(self):
        with pytest.raises(CatalogError, match="Add a category first"):
            catalog.add_exercise(Snapshot(), "Crunch", "core")

    def test_update_keeps_unspecified_fields(self, snap):
        updated = catalog.update_exercise(snap, "pl", name="Side plank")
        ex = catalog.find_exercise(updated, "pl")
        assert (ex.name, ex.category_id) == ("Side plank", "core")

    def test_delete_strips_from_templates(self, snap):
        updated = catalog.delete_exercise(snap, "sq")
        assert catalog.find_exercise(updated, "sq") is None
        assert [w.exercise_ids for w in updated.workouts] == [["lu", "pl"], ["lu"]]
        assert snap.workouts[0].exercise_ids == ["sq", "lu", "pl"]

    def test_delete_keeps_history_snapshot(self, snap):
        updated = catalog.delete_exercise(snap, "sq")
        assert updated.history[0].exercise_ids == ["sq", "pl"]
        assert catalog.exercise_name(updated, "sq") == "Deleted"


class TestWorkouts:
    def test_add_dedups_ids(self, snap):
        updated = catalog.add_workout(snap, "Core", ["pl", "pl"])
        assert updated.workouts[-1].exercise_ids == ["pl"]

    def test_add_requires_exercise(self, snap):
        with pytest.raises(CatalogError, match="at least 1"):
            catalog.add_workout(snap, "Nothing", [])

    def test_add_rejects_unknown_ids(self, snap):
        with pytest.raises(CatalogError, match="ghost"):
            catalog.add_workout(snap, "Ghost", ["ghost"])

    def test_update_and_delete(self, snap):
        updated = catalog.update_workout(snap, "w2", name="Legs")
        assert catalog.workout_name(updated, "w2") == "Legs"
        removed = catalog.delete_workout(updated, "w2")
        assert catalog.find_workout(removed, "w2") is None
        assert catalog.workout_name(removed, "w2") == "Deleted"


class TestLookups:
    def test_orphaned_exercise_category(self, snap):
        snap.exercises.append(Exercise("x", "Orphan", "gone"))
        assert catalog.category_name(snap, "gone") == "Unknown"

    def test_workout_category_names(self, snap):
        snap.workouts[0].exercise_ids.append("missing")
        assert catalog.workout_category_names(snap, snap.workouts[0]) == ["Legs", "Core"]
        assert catalog.valid_exercise_ids(snap, snap.workouts[0]) == ["sq", "lu", "pl"]


class TestHistoryAndSettings:
    def _session(self) -> ActiveSession:
        return ActiveSession(
            workout_id="w2",
            workout_name="Legs only",
            exercises=[
                SessionExercise("lu", "Lunge", "legs", "Legs"),
                SessionExercise("sq", "Squat", "legs", "Legs"),
            ],
            started_at=datetime(2024, 1, 8, 18, 0),
        )

    def test_complete_session_appends_one_record(self, snap):
        updated = catalog.complete_session(snap, self._session(), "2024-01-08")
        assert len(updated.history) == 2
        record = updated.history[-1]
        assert (record.date, record.workout_id, record.exercise_ids) == ("2024-01-08", "w2", ["lu", "sq"])
        assert len(snap.history) == 1

    def test_delete_history_entry(self, snap):
        assert catalog.delete_history_entry(snap, "h1").history == []
        with pytest.raises(NotFoundError):
            catalog.delete_history_entry(snap, "h2")

    @pytest.mark.parametrize(
        "key, delta, expected",
        [
            ("weekly_goal", 1, 4),
            ("weekly_goal", -10, 1),
            ("weekly_goal", 100, 14),
            ("max_exercises", -1, 4),
            ("max_exercises", 50, 20),
        ],
    )
    def test_adjust_setting_clamps(self, snap, key, delta, expected):
        assert getattr(catalog.adjust_setting(snap, key, delta).settings, key) == expected

    def test_adjust_unknown_setting(self, snap):
        with pytest.raises(CatalogError):
            catalog.adjust_setting(snap, "volume", 1)

    def test_mark_backup(self, snap):
        assert catalog.mark_backup(snap, "2024-02-01").settings.last_backup_reminder == "2024-02-01"


class TestCategoryColors:
    def test_idempotent(self):
        colors = CategoryColors()
        assert colors.color_of("legs") == colors.color_of("legs")

    def test_seeded_in_catalog_order(self, snap):
        colors = CategoryColors.from_catalog(snap.categories)
        assert colors.as_dict() == {
            "legs": CATEGORY_PALETTE[0],
            "core": CATEGORY_PALETTE[1],
            "empty": CATEGORY_PALETTE[2],
        }

    def test_stable_across_reload(self, snap):
        first = CategoryColors.from_catalog(snap.categories)
        first.color_of("late")
        second = CategoryColors.from_catalog(snap.categories)
        assert second.color_of("core") == first.color_of("core")

    def test_wraps_around_palette(self):
        colors = CategoryColors(["red", "blue"])
        assert [colors.color_of(c) for c in "abc"] == ["red", "blue", "red"]

    def test_empty_palette_rejected(self):
        with pytest.raises(ValueError):
            CategoryColors([])
