import re
import threading
import uuid

from app_state import (
    AppState, GratitudeEntry, Habit, HabitEntry, GRATITUDE_KEY,
    HABIT_ENTRIES_KEY, HABITS_KEY, PREMIUM_KEY, load_state, save_state,
)
import calendar_utils
from calendar_utils import format_date
from prompts import pick_prompt
from reports import today_gratitude

DIRECTIONS = ("up", "down")

# leading whole number; anything after it is ignored ("30 min" -> 30)
LEADING_MINUTES = re.compile(r"\s*([+-]?\d+)")


def _new_id():
    return uuid.uuid4().hex


def _text(value):
    """Anything that is not a string (numbers, lists, None) counts as empty."""
    return value if isinstance(value, str) else ""


def parse_minutes(minutes_text):
    """Whole minutes at the start of the text, or None if it does not start with a number."""
    match = LEADING_MINUTES.match(str(minutes_text))
    return int(match.group(1)) if match else None


def _rerank(state: AppState):
    """Importance follows position: 1..N with no gaps."""
    for position, habit in enumerate(state.habits, start=1):
        habit.importance = position


# -------------------------
# Habits
# -------------------------
def add_habit(state: AppState, name, now=None, id_factory=None):
    """
    Append a habit at the lowest importance.

    Returns:
        (success: bool, message: str)
    """
    name = _text(name)
    if not name.strip():
        return False, "Habit name cannot be empty."

    now = now or calendar_utils.now()
    habit = Habit(
        id=(id_factory or _new_id)(),
        name=name,
        importance=len(state.habits) + 1,
        created_at=now.isoformat(),
    )
    state.habits.append(habit)
    return True, f"Habit '{name}' created successfully!"


def move_habit(state: AppState, index, direction):
    """Swap the habit at `index` with its neighbour, then re-rank."""
    if direction not in DIRECTIONS:
        return False, f"Direction must be one of {DIRECTIONS}."

    target = index - 1 if direction == "up" else index + 1
    if not (0 <= index < len(state.habits)) or not (0 <= target < len(state.habits)):
        return False, "Habit cannot move any further."

    habits = state.habits
    habits[index], habits[target] = habits[target], habits[index]
    _rerank(state)
    return True, f"Moved '{habits[target].name}' {direction}."


def rename_habit(state: AppState, habit_id, name):
    name = _text(name)
    if not name.strip():
        return False, "Habit name cannot be empty."

    habit = state.find_habit(habit_id)
    if habit is None:
        return False, "Habit not found."

    habit.name = name
    return True, f"Habit renamed to '{name}'."


def delete_habit(state: AppState, habit_id):
    """Remove the habit and every entry logged against it."""
    habit = state.find_habit(habit_id)
    if habit is None:
        return False, "Habit not found."

    state.habits = [h for h in state.habits if h.id != habit_id]
    state.habit_entries = [e for e in state.habit_entries if e.habit_id != habit_id]
    _rerank(state)
    return True, f"Habit '{habit.name}' deleted successfully."


def log_habit_minutes(state: AppState, habit_id, minutes_text, today=None):
    """Record today's minutes for a habit, overwriting anything already logged today."""
    minutes = parse_minutes(minutes_text)
    if minutes is None:
        return False, "Minutes must be a whole number."
    if minutes <= 0:
        return False, "Minutes must be greater than zero."

    habit = state.find_habit(habit_id)
    if habit is None:
        return False, "Habit not found."

    today_str = format_date(today or calendar_utils.now())
    for entry in state.habit_entries:
        if entry.habit_id == habit_id and entry.date == today_str:
            entry.minutes = minutes
            break
    else:
        state.habit_entries.append(HabitEntry(habit_id=habit_id, date=today_str, minutes=minutes))

    return True, f"Logged {minutes} minutes of '{habit.name}' today."


# -------------------------
# Gratitude
# -------------------------
def save_gratitude(state: AppState, text, prompt, today=None, id_factory=None):
    """One entry per day; saving again the same day replaces it."""
    text = _text(text)
    if not text.strip():
        return False, "Gratitude entry cannot be empty."

    entry = GratitudeEntry(
        id=(id_factory or _new_id)(),
        date=format_date(today or calendar_utils.now()),
        content=text,
        prompt=_text(prompt),
    )
    for i, existing in enumerate(state.gratitude_entries):
        if existing.date == entry.date:
            state.gratitude_entries[i] = entry
            return True, "Today's gratitude entry updated."

    state.gratitude_entries.append(entry)
    return True, "Gratitude entry saved."


# -------------------------
# Premium flag
# -------------------------
def set_premium(state: AppState, enabled):
    state.is_premium = bool(enabled)
    return True, "Premium active" if state.is_premium else "Premium disabled"


def toggle_premium(state: AppState):
    return set_premium(state, not state.is_premium)


# -------------------------
# Session
# -------------------------
class HabitTracker:
    """
    One user's session: loads state from the store once, applies the
    operations above, and rewrites the touched collections after each
    successful change.
    """

    def __init__(self, store, clock=None, id_factory=None, rng=None):
        self.store = store
        self.clock = clock or calendar_utils.now
        self.id_factory = id_factory or _new_id
        self.rng = rng
        self.lock = threading.RLock()
        self.state = load_state(store)
        self._prompt = None

    def today(self):
        return self.clock().date()

    def _apply(self, keys, op, *args, **kwargs):
        with self.lock:
            success, message = op(self.state, *args, **kwargs)
            if success:
                save_state(self.store, self.state, keys)
            return success, message

    def add_habit(self, name):
        return self._apply((HABITS_KEY,), add_habit, name,
                           now=self.clock(), id_factory=self.id_factory)

    def move_habit(self, index, direction):
        return self._apply((HABITS_KEY,), move_habit, index, direction)

    def rename_habit(self, habit_id, name):
        return self._apply((HABITS_KEY,), rename_habit, habit_id, name)

    def delete_habit(self, habit_id):
        return self._apply((HABITS_KEY, HABIT_ENTRIES_KEY), delete_habit, habit_id)

    def log_habit_minutes(self, habit_id, minutes_text):
        return self._apply((HABIT_ENTRIES_KEY,), log_habit_minutes, habit_id,
                           minutes_text, today=self.today())

    def save_gratitude(self, text, prompt):
        return self._apply((GRATITUDE_KEY,), save_gratitude, text, prompt,
                           today=self.today(), id_factory=self.id_factory)

    def set_premium(self, enabled):
        return self._apply((PREMIUM_KEY,), set_premium, enabled)

    def toggle_premium(self):
        return self._apply((PREMIUM_KEY,), toggle_premium)

    def current_prompt(self):
        """Today's saved prompt, else one prompt picked once per session."""
        entry = today_gratitude(self.state.gratitude_entries, self.today())
        if entry is not None:
            return entry.prompt
        if self._prompt is None:
            self._prompt = pick_prompt(self.rng)
        return self._prompt
