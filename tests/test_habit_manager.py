import itertools
import random
import tempfile
import unittest
from datetime import date, datetime
from pathlib import Path
from unittest.mock import ANY, MagicMock, patch

from app_state import AppState, load_state
from habit_manager import (
    HabitTracker, add_habit, delete_habit, log_habit_minutes, move_habit,
    parse_minutes, rename_habit, save_gratitude, set_premium, toggle_premium,
)
from local_storage import LocalStorage
from prompts import GRATITUDE_PROMPTS

NOW = datetime(2026, 10, 21, 9, 30)
TODAY = NOW.date()


def _ids(prefix="id"):
    counter = itertools.count(1)
    return lambda: f"{prefix}{next(counter)}"


def _state_with(*names):
    state = AppState()
    make_id = _ids("h")
    for name in names:
        add_habit(state, name, now=NOW, id_factory=make_id)
    return state


def _importances(state):
    return [h.importance for h in state.habits]


class TestHabitOperations(unittest.TestCase):

    def test_add_habit(self):
        state = AppState()
        success, message = add_habit(state, "  Read  ", now=NOW, id_factory=lambda: "x1")
        self.assertTrue(success)
        self.assertIn("created successfully", message)
        habit = state.habits[0]
        self.assertEqual((habit.id, habit.name, habit.importance), ("x1", "  Read  ", 1))
        self.assertEqual(habit.created_at, "2026-10-21T09:30:00")

    def test_add_habit_blank_name_is_noop(self):
        state = _state_with("Read")
        for name in ("", "   ", None, 123, ["Read"]):
            success, _ = add_habit(state, name)
            self.assertFalse(success)
        self.assertEqual(len(state.habits), 1)

    def test_add_habit_generates_unique_ids(self):
        state = AppState()
        add_habit(state, "Read")
        add_habit(state, "Walk")
        self.assertNotEqual(state.habits[0].id, state.habits[1].id)
        self.assertEqual(_importances(state), [1, 2])

    def test_move_up_and_down(self):
        state = _state_with("Read", "Walk", "Stretch")
        success, _ = move_habit(state, 2, "up")
        self.assertTrue(success)
        self.assertEqual([h.name for h in state.habits], ["Read", "Stretch", "Walk"])
        self.assertEqual(_importances(state), [1, 2, 3])

        move_habit(state, 0, "down")
        self.assertEqual([h.name for h in state.habits], ["Stretch", "Read", "Walk"])
        self.assertEqual(_importances(state), [1, 2, 3])

    def test_move_out_of_bounds_is_noop(self):
        state = _state_with("Read", "Walk")
        for index, direction in ((0, "up"), (1, "down"), (5, "up"), (-1, "down"), (0, "sideways")):
            success, _ = move_habit(state, index, direction)
            self.assertFalse(success)
        self.assertEqual([h.name for h in state.habits], ["Read", "Walk"])

    def test_move_is_its_own_inverse(self):
        state = _state_with("Read", "Walk", "Stretch", "Journal")
        original = [h.id for h in state.habits]
        move_habit(state, 2, "up")
        move_habit(state, 1, "down")
        self.assertEqual([h.id for h in state.habits], original)
        move_habit(state, 0, "down")
        move_habit(state, 1, "up")
        self.assertEqual([h.id for h in state.habits], original)

    def test_rename_keeps_importance(self):
        state = _state_with("Read", "Walk")
        success, _ = rename_habit(state, "h2", "Evening walk")
        self.assertTrue(success)
        self.assertEqual(state.habits[1].name, "Evening walk")
        self.assertEqual(state.habits[1].importance, 2)
        self.assertFalse(rename_habit(state, "h2", " ")[0])
        self.assertFalse(rename_habit(state, "missing", "x")[0])

    def test_delete_cascades_and_reranks(self):
        state = _state_with("Read", "Walk", "Stretch")
        log_habit_minutes(state, "h1", "20", today=TODAY)
        log_habit_minutes(state, "h2", "30", today=TODAY)

        success, _ = delete_habit(state, "h1")
        self.assertTrue(success)
        self.assertEqual([h.name for h in state.habits], ["Walk", "Stretch"])
        self.assertEqual(_importances(state), [1, 2])
        self.assertEqual([e.habit_id for e in state.habit_entries], ["h2"])

    def test_delete_unknown_id_is_noop(self):
        state = _state_with("Read")
        success, message = delete_habit(state, "nope")
        self.assertFalse(success)
        self.assertEqual(message, "Habit not found.")
        self.assertEqual(len(state.habits), 1)

    def test_importance_stays_dense_under_random_operations(self):
        rng = random.Random(7)
        state = AppState()
        for step in range(300):
            action = rng.choice(["add", "add", "move", "delete"])
            if action == "add":
                add_habit(state, f"habit {step}")
            elif action == "move" and state.habits:
                move_habit(state, rng.randrange(len(state.habits)), rng.choice(["up", "down"]))
            elif action == "delete" and state.habits:
                delete_habit(state, rng.choice(state.habits).id)
            self.assertEqual(sorted(_importances(state)), list(range(1, len(state.habits) + 1)))

    def test_log_minutes_upserts(self):
        state = _state_with("Read")
        self.assertTrue(log_habit_minutes(state, "h1", "15", today=TODAY)[0])
        self.assertTrue(log_habit_minutes(state, "h1", " 40 ", today=TODAY)[0])
        self.assertEqual(len(state.habit_entries), 1)
        self.assertEqual(state.habit_entries[0].minutes, 40)
        self.assertEqual(state.habit_entries[0].date, "2026-10-21")

        log_habit_minutes(state, "h1", "10", today=date(2026, 10, 22))
        self.assertEqual(len(state.habit_entries), 2)

    def test_log_minutes_rejects_bad_input(self):
        state = _state_with("Read")
        for text in ("", "abc", "0", "-5", "min 30", None, [30]):
            success, _ = log_habit_minutes(state, "h1", text, today=TODAY)
            self.assertFalse(success, text)
        self.assertFalse(log_habit_minutes(state, "unknown", "10", today=TODAY)[0])
        self.assertEqual(state.habit_entries, [])

    def test_log_minutes_reads_leading_number(self):
        state = _state_with("Read")
        for text, expected in (("2.5", 2), ("12abc", 12), ("30 min", 30), (" +45", 45), (20, 20)):
            success, _ = log_habit_minutes(state, "h1", text, today=TODAY)
            self.assertTrue(success, text)
            self.assertEqual(state.habit_entries[0].minutes, expected)
        self.assertEqual(len(state.habit_entries), 1)

    def test_parse_minutes(self):
        self.assertEqual(parse_minutes("  7 "), 7)
        self.assertEqual(parse_minutes("-3"), -3)
        self.assertIsNone(parse_minutes("x7"))
        self.assertIsNone(parse_minutes(None))

    def test_rename_stores_name_as_typed(self):
        state = _state_with("Read")
        self.assertTrue(rename_habit(state, "h1", " Read more ")[0])
        self.assertEqual(state.habits[0].name, " Read more ")
        self.assertFalse(rename_habit(state, "h1", 42)[0])
        self.assertEqual(state.habits[0].name, " Read more ")

    def test_save_gratitude_ignores_non_text(self):
        state = AppState()
        self.assertFalse(save_gratitude(state, 42, "prompt", today=TODAY)[0])
        self.assertFalse(save_gratitude(state, ["Coffee"], "prompt", today=TODAY)[0])
        self.assertEqual(state.gratitude_entries, [])

        self.assertTrue(save_gratitude(state, "Coffee", 7, today=TODAY)[0])
        self.assertEqual(state.gratitude_entries[0].prompt, "")

    def test_save_gratitude_replaces_same_day(self):
        state = AppState()
        make_id = _ids("g")
        self.assertFalse(save_gratitude(state, "   ", "prompt", today=TODAY)[0])

        save_gratitude(state, "Coffee", "What made you smile today?", today=TODAY, id_factory=make_id)
        success, message = save_gratitude(state, "Friends", "Who made a positive difference in your day?",
                                          today=TODAY, id_factory=make_id)
        self.assertTrue(success)
        self.assertEqual(message, "Today's gratitude entry updated.")
        self.assertEqual(len(state.gratitude_entries), 1)
        entry = state.gratitude_entries[0]
        self.assertEqual((entry.id, entry.content, entry.prompt),
                         ("g2", "Friends", "Who made a positive difference in your day?"))

        save_gratitude(state, "Rain", "p", today=date(2026, 10, 22), id_factory=make_id)
        self.assertEqual([e.date for e in state.gratitude_entries], ["2026-10-21", "2026-10-22"])

    def test_premium_flag(self):
        state = AppState()
        toggle_premium(state)
        self.assertTrue(state.is_premium)
        set_premium(state, False)
        self.assertFalse(state.is_premium)


class TestHabitTracker(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.storage_file = Path(self.tmp.name) / "data.json"

    def tearDown(self):
        self.tmp.cleanup()

    def _tracker(self, store=None):
        return HabitTracker(store or LocalStorage(self.storage_file), clock=lambda: NOW,
                            id_factory=_ids("h"), rng=random.Random(3))

    def test_mutations_are_persisted(self):
        tracker = self._tracker()
        tracker.add_habit("Read")
        tracker.add_habit("Walk")
        tracker.move_habit(1, "up")
        tracker.log_habit_minutes("h1", "25")
        tracker.save_gratitude("Sunshine", "What made you smile today?")
        tracker.toggle_premium()

        reloaded = load_state(LocalStorage(self.storage_file))
        self.assertEqual([h.name for h in reloaded.habits], ["Walk", "Read"])
        self.assertEqual([h.importance for h in reloaded.habits], [1, 2])
        self.assertEqual(reloaded.habit_entries[0].minutes, 25)
        self.assertEqual(reloaded.gratitude_entries[0].content, "Sunshine")
        self.assertTrue(reloaded.is_premium)

    def test_delete_rewrites_habits_and_entries(self):
        store = MagicMock()
        store.get.return_value = None
        tracker = self._tracker(store)
        tracker.add_habit("Read")
        tracker.log_habit_minutes("h1", "5")
        store.set.reset_mock()

        tracker.delete_habit("h1")
        store.set.assert_any_call("habits", "[]")
        store.set.assert_any_call("habitEntries", "[]")
        self.assertEqual(store.set.call_count, 2)

    def test_noop_writes_nothing(self):
        store = MagicMock()
        store.get.return_value = None
        tracker = self._tracker(store)

        tracker.add_habit("   ")
        tracker.move_habit(0, "up")
        tracker.delete_habit("ghost")
        tracker.log_habit_minutes("ghost", "abc")
        tracker.save_gratitude("", "prompt")
        store.set.assert_not_called()

        tracker.add_habit("Read")
        store.set.assert_called_once_with("habits", ANY)

    def test_prompt_is_stable_until_todays_entry_exists(self):
        tracker = self._tracker()
        prompt = tracker.current_prompt()
        self.assertIn(prompt, GRATITUDE_PROMPTS)
        self.assertEqual(tracker.current_prompt(), prompt)

        tracker.save_gratitude("Tea", "My own prompt")
        self.assertEqual(tracker.current_prompt(), "My own prompt")

    def test_today_comes_from_clock(self):
        self.assertEqual(self._tracker().today(), TODAY)

    def test_default_clock_is_calendar_now(self):
        with patch("calendar_utils.now", return_value=NOW):
            tracker = HabitTracker(LocalStorage(self.storage_file))
            self.assertEqual(tracker.today(), TODAY)

    def test_lock_is_reentrant(self):
        tracker = self._tracker()
        with tracker.lock:
            self.assertTrue(tracker.add_habit("Read")[0])
            self.assertEqual(tracker.state.habits[-1].name, "Read")


if __name__ == '__main__':
    unittest.main()
