# calendar_utils.py
import calendar
from datetime import date, datetime, timedelta
from typing import Optional, Tuple, Union

DATE_FORMAT = "%Y-%m-%d"
PERIODS = ("week", "month", "year")

DateLike = Union[date, datetime]


def now() -> datetime:
    """Wall clock used by the tracker and the dashboard; patched in tests."""
    return datetime.now()


def as_date(value: DateLike) -> date:
    """Accept either a date or a datetime and return the calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


def week_bounds(now: DateLike) -> Tuple[date, date]:
    """Monday..Sunday of the week containing `now` (inclusive)."""
    day = as_date(now)
    start = day - timedelta(days=day.weekday())
    return start, start + timedelta(days=6)


def month_bounds(now: DateLike) -> Tuple[date, date]:
    day = as_date(now)
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last)


def year_bounds(now: DateLike) -> Tuple[date, date]:
    day = as_date(now)
    return date(day.year, 1, 1), date(day.year, 12, 31)


def period_bounds(period: str, now: DateLike) -> Tuple[date, date]:
    if period == "week":
        return week_bounds(now)
    if period == "month":
        return month_bounds(now)
    if period == "year":
        return year_bounds(now)
    raise ValueError(f"Unknown period '{period}', expected one of {PERIODS}")


def format_date(d: DateLike) -> str:
    """Sortable day key, zero padded so string order == date order."""
    return as_date(d).strftime(DATE_FORMAT)


def parse_date(value) -> Optional[date]:
    try:
        return datetime.strptime(str(value), DATE_FORMAT).date()
    except (TypeError, ValueError):
        return None


def format_display(d: DateLike) -> str:
    """Human readable label, e.g. 'October 5, 2026'."""
    day = as_date(d)
    return f"{day.strftime('%B')} {day.day}, {day.year}"
