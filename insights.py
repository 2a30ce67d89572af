# insights.py
"""
Rule-based "AI evaluation" shown on the reports page for premium users.

Nothing here learns or calls out anywhere; the same inputs always produce the
same text in the same order.
"""
from datetime import timedelta
from typing import Iterator, List

from app_state import AppState, GratitudeEntry, Habit, HabitEntry
from calendar_utils import as_date, parse_date
from reports import report_for

CONSISTENT_DAYS = 5
GRATITUDE_STREAK = 5
GRATITUDE_WINDOW_DAYS = 7

FALLBACK_INSIGHT = "Keep logging your habits to receive personalized AI insights!"


def _weekly_insights(habits, entries, now) -> Iterator[str]:
    for stat in report_for("week", habits, entries, now):
        if stat.days_tracked >= CONSISTENT_DAYS:
            yield (f'Great consistency with "{stat.name}"! '
                   f"You've logged {stat.days_tracked} days this week.")
        elif stat.days_tracked == 0:
            yield (f'"{stat.name}" hasn\'t been tracked this week. '
                   "Consider starting small with just 5-10 minutes.")
        # 1-4 days: nothing to say yet


def _strongest_habit(habits, entries, now) -> Iterator[str]:
    top = None
    for stat in report_for("month", habits, entries, now):
        # strict > keeps the earliest habit on ties
        if top is None or stat.total_minutes > top.total_minutes:
            top = stat
    if top is not None and top.total_minutes > 0:
        hours = top.total_minutes // 60
        yield (f'Your strongest habit this month is "{top.name}" '
               f"with {hours} hours invested.")


def gratitude_count(gratitude_entries: List[GratitudeEntry], now) -> int:
    """Entries dated within the seven days ending today, today included."""
    end = as_date(now)
    start = end - timedelta(days=GRATITUDE_WINDOW_DAYS - 1)
    count = 0
    for entry in gratitude_entries:
        day = parse_date(entry.date)
        if day is not None and start <= day <= end:
            count += 1
    return count


def insights(habits: List[Habit], entries: List[HabitEntry],
             gratitude_entries: List[GratitudeEntry], now) -> Iterator[str]:
    emitted = False

    for text in _weekly_insights(habits, entries, now):
        emitted = True
        yield text

    for text in _strongest_habit(habits, entries, now):
        emitted = True
        yield text

    count = gratitude_count(gratitude_entries, now)
    if count >= GRATITUDE_STREAK:
        emitted = True
        yield (f"Your gratitude practice is strong with {count} entries this week. "
               "This positive mindset supports all your habits!")

    if not emitted:
        yield FALLBACK_INSIGHT


def ai_evaluation(state: AppState, now) -> List[str]:
    return list(insights(state.habits, state.habit_entries, state.gratitude_entries, now))
