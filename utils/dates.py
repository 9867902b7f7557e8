"""
utils/dates.py
--------------
Calendar helpers shared by the recurrence engine and the scheduler.

Weekdays are Sunday-based throughout (0=Sunday .. 6=Saturday), matching
the board's calendar weeks; Python's own `date.weekday()` is Monday-based.
"""

import calendar
import math
from datetime import date, datetime, timedelta
from typing import Iterator, Optional, Union

from dateutil.relativedelta import relativedelta

from models.payment_item import WEEK_CATEGORIES

MONTH_FORMAT = "%Y-%m"


def sunday_weekday(d: date) -> int:
    """Weekday of `d` with 0=Sunday .. 6=Saturday."""
    return (d.weekday() + 1) % 7


def week_start(d: date) -> date:
    """The Sunday that opens the calendar week containing `d`."""
    return d - timedelta(days=sunday_weekday(d))


def last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def clamp_day(year: int, month: int, day: int) -> date:
    """Date for `day` in the given month, clamped to the month's last day."""
    return date(year, month, min(day, last_day_of_month(year, month)))


def month_window(year: int, month: int) -> tuple[date, date]:
    """Return (first_day, last_day) of the month."""
    return date(year, month, 1), date(year, month, last_day_of_month(year, month))


def parse_target_month(target: Union[str, date, None], today: Optional[date] = None) -> tuple[int, int]:
    """
    Resolve a target month to (year, month).

    Args:
        target: 'YYYY-MM' string, any date inside the month, or None for the
            month containing `today`.
        today: Reference date for None (default: date.today()).

    Raises:
        ValueError: If `target` is a string that is not 'YYYY-MM'.
    """
    if target is None:
        ref = today or date.today()
        return ref.year, ref.month
    if isinstance(target, date):
        return target.year, target.month
    try:
        parsed = datetime.strptime(target.strip(), MONTH_FORMAT)
    except ValueError:
        raise ValueError(f"Invalid month: {target!r} (expected YYYY-MM)")
    return parsed.year, parsed.month


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar day from `start` to `end` inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def iter_months(start: date, end: date) -> Iterator[tuple[int, int]]:
    """(year, month) for every month whose span intersects [start, end]."""
    current = start.replace(day=1)
    while current <= end:
        yield current.year, current.month
        current += relativedelta(months=1)


def week_of_month(d: date) -> int:
    """
    Board week (1-5) that `d` falls in.

    Weeks follow the calendar, starting on Sunday, so the first week of a
    month can be shorter than seven days. Days that would spill into a sixth
    calendar week are kept in week 5, the last board column.
    """
    first_weekday = sunday_weekday(d.replace(day=1))
    return min(math.ceil((d.day + first_weekday) / 7), 5)


def week_category(d: date) -> str:
    """Board category name, e.g. 'Week 3'."""
    return WEEK_CATEGORIES[week_of_month(d) - 1]
