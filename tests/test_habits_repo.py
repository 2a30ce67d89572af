# tests/test_habits_repo.py
from datetime import datetime

from habit_manager import HabitTracker
from habits_repo import SqlStorage, make_engine


def _engine(tmp_path):
    # temporary sqlite
    return make_engine(f"sqlite:///{tmp_path / 'test.db'}")


def test_get_missing_key(tmp_path):
    store = SqlStorage(_engine(tmp_path))
    assert store.get("habits") is None


def test_set_then_overwrite(tmp_path):
    store = SqlStorage(_engine(tmp_path))
    store.set("habits", "[]")
    store.set("habits", '[{"id": "a"}]')
    assert store.get("habits") == '[{"id": "a"}]'


def test_values_survive_a_new_engine(tmp_path):
    SqlStorage(_engine(tmp_path)).set("isPremium", "true")
    assert SqlStorage(_engine(tmp_path)).get("isPremium") == "true"


def test_tracker_on_sql_store(tmp_path):
    now = datetime(2026, 10, 21, 9, 30)
    tracker = HabitTracker(SqlStorage(_engine(tmp_path)), clock=lambda: now)
    tracker.add_habit("Run 3km")
    habit_id = tracker.state.habits[0].id
    tracker.log_habit_minutes(habit_id, "55")

    reloaded = HabitTracker(SqlStorage(_engine(tmp_path)), clock=lambda: now)
    assert [h.name for h in reloaded.state.habits] == ["Run 3km"]
    assert reloaded.state.habit_entries[0].minutes == 55
