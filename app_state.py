# app_state.py
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

HABITS_KEY = "habits"
HABIT_ENTRIES_KEY = "habitEntries"
GRATITUDE_KEY = "gratitudeEntries"
PREMIUM_KEY = "isPremium"
ALL_KEYS = (HABITS_KEY, HABIT_ENTRIES_KEY, GRATITUDE_KEY, PREMIUM_KEY)


# -------------------------
# Records
# -------------------------
@dataclass
class Habit:
    id: str
    name: str
    importance: int
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "importance": self.importance,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Habit":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            importance=int(data["importance"]),
            created_at=str(data.get("createdAt") or ""),
        )


@dataclass
class HabitEntry:
    habit_id: str
    date: str
    minutes: int

    def to_dict(self) -> Dict[str, Any]:
        return {"habitId": self.habit_id, "date": self.date, "minutes": self.minutes}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HabitEntry":
        return cls(
            habit_id=str(data["habitId"]),
            date=str(data["date"]),
            minutes=int(data["minutes"]),
        )


@dataclass
class GratitudeEntry:
    id: str
    date: str
    content: str
    prompt: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "content": self.content,
            "prompt": self.prompt,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GratitudeEntry":
        return cls(
            id=str(data["id"]),
            date=str(data["date"]),
            content=str(data.get("content") or ""),
            prompt=str(data.get("prompt") or ""),
        )


@dataclass
class AppState:
    """Everything one session owns. Habits are kept in importance order."""
    habits: List[Habit] = field(default_factory=list)
    habit_entries: List[HabitEntry] = field(default_factory=list)
    gratitude_entries: List[GratitudeEntry] = field(default_factory=list)
    is_premium: bool = False

    def find_habit(self, habit_id: str) -> Optional[Habit]:
        for habit in self.habits:
            if habit.id == habit_id:
                return habit
        return None


# -------------------------
# Store <-> state
# -------------------------
def _load_json(store, key: str):
    try:
        raw = store.get(key)
    except Exception as e:
        print(f"[storage] error reading '{key}': {e}")
        return None
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        print(f"[storage] corrupt value for '{key}', starting empty: {e}")
        return None


def _load_records(store, key: str, record_cls) -> list:
    data = _load_json(store, key)
    if not isinstance(data, list):
        return []

    records = []
    for item in data:
        try:
            records.append(record_cls.from_dict(item))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            print(f"[storage] skipping bad record in '{key}': {e}")
    return records


def load_state(store) -> AppState:
    """Read the four collections once; anything missing or corrupt is empty."""
    habits = _load_records(store, HABITS_KEY, Habit)
    habits.sort(key=lambda h: h.importance)
    premium = _load_json(store, PREMIUM_KEY)
    return AppState(
        habits=habits,
        habit_entries=_load_records(store, HABIT_ENTRIES_KEY, HabitEntry),
        gratitude_entries=_load_records(store, GRATITUDE_KEY, GratitudeEntry),
        is_premium=premium if isinstance(premium, bool) else False,
    )


def serialize(state: AppState, key: str) -> str:
    if key == HABITS_KEY:
        payload = [h.to_dict() for h in state.habits]
    elif key == HABIT_ENTRIES_KEY:
        payload = [e.to_dict() for e in state.habit_entries]
    elif key == GRATITUDE_KEY:
        payload = [g.to_dict() for g in state.gratitude_entries]
    elif key == PREMIUM_KEY:
        payload = state.is_premium
    else:
        raise KeyError(key)
    return json.dumps(payload)


def save_state(store, state: AppState, keys=ALL_KEYS) -> None:
    """Overwrite each named collection as a whole."""
    for key in keys:
        store.set(key, serialize(state, key))
