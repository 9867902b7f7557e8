"""
services/recurrence_engine.py
-----------------------------
Expands a recurring expense into the concrete dates it falls due.

Pure computation: no I/O and no state between calls, so the same inputs
always give the same ascending, duplicate-free list of dates.
"""

from datetime import date
from typing import Union

from models.recurring import (
    AnnualConfig,
    BiweeklyConfig,
    MonthlyConfig,
    QuarterlyConfig,
    RecurrenceConfig,
    RecurringExpense,
    WeeklyConfig,
)
from utils.dates import clamp_day, iter_days, iter_months, sunday_weekday, week_start
from utils.logger import get_logger

logger = get_logger(__name__)


def occurrences(
    definition: Union[RecurringExpense, RecurrenceConfig, None],
    start: date,
    end: date,
) -> list[date]:
    """
    List every date in [start, end] (inclusive) on which `definition` is due.

    Args:
        definition: A RecurringExpense or a bare schedule config.
        start: First day of the window.
        end: Last day of the window.

    Returns:
        Ascending list of dates. Empty when the window is inverted or the
        definition has no usable schedule; this never raises for those cases
        so one bad definition cannot abort a batch.
    """
    schedule = definition.schedule if isinstance(definition, RecurringExpense) else definition

    if schedule is None:
        logger.debug(f"No schedule for {definition!s}; nothing to expand")
        return []
    if start > end:
        return []

    if isinstance(schedule, WeeklyConfig):
        return _weekly(schedule, start, end)
    if isinstance(schedule, BiweeklyConfig):
        return _biweekly(schedule, start, end)
    if isinstance(schedule, MonthlyConfig):
        return _by_month(schedule.day_of_month, None, start, end)
    if isinstance(schedule, QuarterlyConfig):
        cycle = {(schedule.month - 1 + 3 * k) % 12 + 1 for k in range(4)}
        return _by_month(schedule.day_of_month, cycle, start, end)
    if isinstance(schedule, AnnualConfig):
        return _by_month(schedule.day_of_month, {schedule.month}, start, end)

    logger.warning(f"Unsupported schedule type {type(schedule).__name__}; skipping")
    return []


def _weekly(schedule: WeeklyConfig, start: date, end: date) -> list[date]:
    return [d for d in iter_days(start, end) if sunday_weekday(d) in schedule.days_of_week]


def _biweekly(schedule: BiweeklyConfig, start: date, end: date) -> list[date]:
    # Without an explicit anchor the window's first week is an "on" week.
    anchor = week_start(schedule.anchor_date or start)
    result = []
    for d in iter_days(start, end):
        if sunday_weekday(d) not in schedule.days_of_week:
            continue
        weeks_from_anchor = (week_start(d) - anchor).days // 7
        if weeks_from_anchor % 2 == 0:
            result.append(d)
    return result


def _by_month(day_of_month: int, months, start: date, end: date) -> list[date]:
    """One clamped date per qualifying month; `months=None` means every month."""
    result = []
    for year, month in iter_months(start, end):
        if months is not None and month not in months:
            continue
        due = clamp_day(year, month, day_of_month)
        if start <= due <= end:
            result.append(due)
    return result
