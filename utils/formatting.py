"""
utils/formatting.py
-------------------
Human-readable rendering of schedules and amounts.
"""

import calendar
from typing import Optional, Union

from config import DEFAULT_CURRENCY
from models.recurring import (
    AnnualConfig,
    BiweeklyConfig,
    MonthlyConfig,
    QuarterlyConfig,
    RecurrenceConfig,
    RecurringExpense,
    WEEKDAY_NAMES,
    WeeklyConfig,
)

_CURRENCY_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£"}

# Shortest length each month can have (February in non-leap years).
_MIN_MONTH_LENGTH = {m: calendar.monthrange(2001, m)[1] for m in range(1, 13)}


def format_currency(value: float, currency: Optional[str] = None) -> str:
    """Format e.g. 1234.5 as '$1,234.50' (or '-$12.00' for negatives)."""
    code = (currency or DEFAULT_CURRENCY).upper()
    symbol = _CURRENCY_SYMBOLS.get(code)
    body = f"{abs(value):,.2f}"
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{body}" if symbol else f"{sign}{body} {code}"


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def _join(words: list[str]) -> str:
    if len(words) <= 1:
        return "".join(words)
    return f"{', '.join(words[:-1])} and {words[-1]}"


def _weekdays(days) -> str:
    return _join([WEEKDAY_NAMES[d] for d in sorted(days)])


def _clamp_note(day: int, months) -> str:
    if any(day > _MIN_MONTH_LENGTH[m] for m in months):
        return " (or the last day of shorter months)"
    return ""


def describe_recurrence(item: Union[RecurringExpense, RecurrenceConfig, None]) -> str:
    """
    Describe a schedule in plain English.

    Examples:
        'Weekly on Monday and Friday'
        'Every other week on Tuesday'
        'Monthly on the 31st (or the last day of shorter months)'
        'Quarterly on the 15th of Jan, Apr, Jul and Oct'
        'Annually on March 1st'
    """
    if isinstance(item, RecurringExpense):
        if item.schedule is None:
            return f"Invalid schedule: {item.config_error or 'missing configuration'}"
        item = item.schedule

    if isinstance(item, WeeklyConfig):
        return f"Weekly on {_weekdays(item.days_of_week)}"

    if isinstance(item, BiweeklyConfig):
        text = f"Every other week on {_weekdays(item.days_of_week)}"
        if item.anchor_date is not None:
            text += f", starting the week of {item.anchor_date.isoformat()}"
        return text

    if isinstance(item, MonthlyConfig):
        day = item.day_of_month
        return f"Monthly on the {ordinal(day)}{_clamp_note(day, range(1, 13))}"

    if isinstance(item, QuarterlyConfig):
        months = sorted((item.month - 1 + 3 * k) % 12 + 1 for k in range(4))
        names = _join([calendar.month_abbr[m] for m in months])
        day = item.day_of_month
        return f"Quarterly on the {ordinal(day)} of {names}{_clamp_note(day, months)}"

    if isinstance(item, AnnualConfig):
        day = item.day_of_month
        return f"Annually on {calendar.month_name[item.month]} {ordinal(day)}{_clamp_note(day, [item.month])}"

    return "Invalid schedule: missing configuration"
