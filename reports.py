# reports.py
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from app_state import GratitudeEntry, Habit, HabitEntry
from calendar_utils import format_date, format_display, parse_date, period_bounds

DAYS_PER_YEAR = 365


@dataclass
class PeriodStat:
    habit_id: str
    name: str
    total_minutes: int
    days_tracked: int
    avg_minutes: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "habitId": self.habit_id,
            "name": self.name,
            "totalMinutes": self.total_minutes,
            "daysTracked": self.days_tracked,
            "avgMinutes": self.avg_minutes,
        }


def _round_half_up(numerator: int, denominator: int) -> int:
    # integer form of floor(n / d + 0.5) for non-negative n and positive d
    return (2 * numerator + denominator) // (2 * denominator)


def report_for(period: str, habits: List[Habit], entries: List[HabitEntry], now) -> List[PeriodStat]:
    """
    One PeriodStat per habit, in the order the habits are given.

    An entry counts when its habitId matches and its YYYY-MM-DD date sits
    inside the inclusive window for `period`. days_tracked is the number of
    such entries, zero-minute ones included.
    """
    start, end = period_bounds(period, now)
    start_str, end_str = format_date(start), format_date(end)

    stats = []
    for habit in habits:
        selected = [
            e for e in entries
            if e.habit_id == habit.id and start_str <= e.date <= end_str
        ]
        total = sum(e.minutes for e in selected)
        days = len(selected)
        stats.append(PeriodStat(
            habit_id=habit.id,
            name=habit.name,
            total_minutes=total,
            days_tracked=days,
            avg_minutes=_round_half_up(total, days) if days > 0 else 0,
        ))
    return stats


def year_end_report(habits: List[Habit], entries: List[HabitEntry], now) -> List[Dict[str, Any]]:
    """Yearly totals plus hours and a consistency percentage over 365 days."""
    rows = []
    for stat in report_for("year", habits, entries, now):
        row = stat.to_dict()
        row["totalHours"] = _round_half_up(stat.total_minutes, 60)
        row["consistency"] = _round_half_up(stat.days_tracked * 100, DAYS_PER_YEAR)
        rows.append(row)
    return rows


def habit_history(habits: List[Habit], entries: List[HabitEntry], limit: int = 10) -> List[Dict[str, Any]]:
    history = []
    for habit in habits:
        own = sorted(
            (e for e in entries if e.habit_id == habit.id),
            key=lambda e: e.date,
            reverse=True,
        )[:limit]
        history.append({
            "habitId": habit.id,
            "name": habit.name,
            "entries": [
                {
                    "date": e.date,
                    "label": _display_label(e.date),
                    "minutes": e.minutes,
                }
                for e in own
            ],
        })
    return history


def recent_gratitude(gratitude_entries: List[GratitudeEntry], limit: Optional[int] = None) -> List[GratitudeEntry]:
    """Most recently written first."""
    ordered = list(reversed(gratitude_entries))
    return ordered if limit is None else ordered[:limit]


def today_entry(entries: List[HabitEntry], habit_id: str, today) -> Optional[HabitEntry]:
    today_str = format_date(today)
    for entry in entries:
        if entry.habit_id == habit_id and entry.date == today_str:
            return entry
    return None


def today_gratitude(gratitude_entries: List[GratitudeEntry], today) -> Optional[GratitudeEntry]:
    today_str = format_date(today)
    for entry in gratitude_entries:
        if entry.date == today_str:
            return entry
    return None


def _display_label(date_str: str) -> str:
    parsed = parse_date(date_str)
    return format_display(parsed) if parsed else date_str
