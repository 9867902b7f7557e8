"""
models/recurring.py
-------------------
Domain model for recurring expenses and their schedules.

A schedule is one of five config variants, one per frequency, each carrying
only the fields that frequency needs. A RecurringExpense pairs a schedule
with the payload (description, amount, priority, ...) that is copied onto
every payment item materialized from it.
"""

import math
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Union


class InvalidRecurrenceError(ValueError):
    """Raised when a schedule is built with missing or out-of-range fields."""


class Frequency(str, Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"


# Sunday-based, matching the board's calendar weeks.
WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def _check_days_of_week(days) -> frozenset:
    if days is None:
        raise InvalidRecurrenceError("days_of_week is required")
    try:
        if any(isinstance(d, float) and not d.is_integer() for d in days):
            raise ValueError
        days = frozenset(int(d) for d in days)
    except (TypeError, ValueError):
        raise InvalidRecurrenceError(f"days_of_week must be integers, got {days!r}")
    if not days:
        raise InvalidRecurrenceError("days_of_week must not be empty")
    bad = sorted(d for d in days if not 0 <= d <= 6)
    if bad:
        raise InvalidRecurrenceError(f"days_of_week out of range 0-6: {bad}")
    return days


def _check_int(value, name: str, low: int, high: int) -> int:
    if value is None or isinstance(value, bool):
        raise InvalidRecurrenceError(f"{name} is required")
    if isinstance(value, float) and not value.is_integer():
        raise InvalidRecurrenceError(f"{name} must be a whole number, got {value!r}")
    try:
        value = int(value)
    except (TypeError, ValueError):
        raise InvalidRecurrenceError(f"{name} must be an integer, got {value!r}")
    if not low <= value <= high:
        raise InvalidRecurrenceError(f"{name} must be between {low} and {high}, got {value}")
    return value


@dataclass(frozen=True)
class WeeklyConfig:
    """Fires on every listed weekday (0=Sunday .. 6=Saturday)."""
    days_of_week: frozenset

    frequency = Frequency.WEEKLY

    def __post_init__(self):
        object.__setattr__(self, "days_of_week", _check_days_of_week(self.days_of_week))


@dataclass(frozen=True)
class BiweeklyConfig:
    """
    Fires on the listed weekdays of every other calendar week.

    Attributes:
        days_of_week: Weekdays, 0=Sunday .. 6=Saturday.
        anchor_date: Any date inside an "on" week. Weeks an even number of
            Sunday-start weeks away from it are "on". When None, the first
            week of the queried window is the "on" week.
    """
    days_of_week: frozenset
    anchor_date: Optional[date] = None

    frequency = Frequency.BIWEEKLY

    def __post_init__(self):
        object.__setattr__(self, "days_of_week", _check_days_of_week(self.days_of_week))
        if self.anchor_date is not None and not isinstance(self.anchor_date, date):
            raise InvalidRecurrenceError(f"anchor_date must be a date, got {self.anchor_date!r}")
        if isinstance(self.anchor_date, datetime):
            object.__setattr__(self, "anchor_date", self.anchor_date.date())


@dataclass(frozen=True)
class MonthlyConfig:
    day_of_month: int

    frequency = Frequency.MONTHLY

    def __post_init__(self):
        object.__setattr__(self, "day_of_month", _check_int(self.day_of_month, "day_of_month", 1, 31))


@dataclass(frozen=True)
class QuarterlyConfig:
    """`month` is the first month of the repeating three-month cycle."""
    day_of_month: int
    month: int

    frequency = Frequency.QUARTERLY

    def __post_init__(self):
        object.__setattr__(self, "day_of_month", _check_int(self.day_of_month, "day_of_month", 1, 31))
        object.__setattr__(self, "month", _check_int(self.month, "month", 1, 12))


@dataclass(frozen=True)
class AnnualConfig:
    day_of_month: int
    month: int

    frequency = Frequency.ANNUALLY

    def __post_init__(self):
        object.__setattr__(self, "day_of_month", _check_int(self.day_of_month, "day_of_month", 1, 31))
        object.__setattr__(self, "month", _check_int(self.month, "month", 1, 12))


RecurrenceConfig = Union[WeeklyConfig, BiweeklyConfig, MonthlyConfig, QuarterlyConfig, AnnualConfig]


def _first(mapping: dict, *keys):
    """Return the first non-None value among `keys` (camelCase or snake_case)."""
    for key in keys:
        if mapping.get(key) is not None:
            return mapping[key]
    return None


def _to_date(value) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise InvalidRecurrenceError(f"invalid date: {value!r}")


def _to_bool(value) -> bool:
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "1", "yes", "on"):
            return True
        if text in ("false", "0", "no", "off", ""):
            return False
        raise ValueError(f"is_active must be true or false, got {value!r}")
    return bool(value)


def _to_amount(value) -> float:
    amount = abs(float(value))
    if not math.isfinite(amount):
        raise ValueError(f"amount must be a finite number, got {value!r}")
    return amount


def build_schedule(frequency, config: Optional[dict] = None) -> RecurrenceConfig:
    """
    Build the config variant for `frequency` from a loose mapping.

    Accepts both camelCase (``daysOfWeek``, ``dayOfMonth``) and snake_case
    keys, as stored records and extraction output use either. A biweekly
    schedule is only anchored when the mapping names ``anchor_date``;
    otherwise its phase follows the queried window.

    Raises:
        InvalidRecurrenceError: unknown frequency or missing/invalid fields.
    """
    config = config or {}
    try:
        freq = Frequency(str(frequency).strip().lower())
    except ValueError:
        raise InvalidRecurrenceError(f"unsupported frequency: {frequency!r}")

    days = _first(config, "days_of_week", "daysOfWeek")
    dom = _first(config, "day_of_month", "dayOfMonth")
    month = _first(config, "month", "month_of_year", "monthOfYear")

    if freq is Frequency.WEEKLY:
        return WeeklyConfig(days)
    if freq is Frequency.BIWEEKLY:
        return BiweeklyConfig(days, _to_date(_first(config, "anchor_date", "anchorDate")))
    if freq is Frequency.MONTHLY:
        return MonthlyConfig(dom)
    if freq is Frequency.QUARTERLY:
        return QuarterlyConfig(dom, month)
    return AnnualConfig(dom, month)


@dataclass
class RecurringExpense:
    """
    A recurring payment template, not yet tied to dates.

    Attributes:
        description: What the payment is for (e.g., 'Rent', 'Netflix').
        amount: Payment amount, always positive.
        schedule: The frequency config variant, or None when the source
            record was structurally invalid.
        type: Either 'expense' or 'revenue'.
        priority: 'low' | 'medium' | 'high' | 'critical'.
        notes: Free text copied onto generated payment items.
        is_active: Inactive definitions never produce occurrences.
        id: Stable identifier (uuid string for new records).
        created_at: When the definition was created.
        raw_frequency: Frequency as received, kept when `schedule` is None.
        config_error: Why `schedule` could not be built, if it couldn't.
    """
    description: str
    amount: float
    schedule: Optional[RecurrenceConfig]
    type: str = "expense"  # 'expense' | 'revenue'
    priority: str = "medium"
    notes: Optional[str] = None
    is_active: bool = True
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: Optional[datetime] = None
    raw_frequency: Optional[str] = None
    config_error: Optional[str] = None

    @property
    def frequency(self) -> Optional[Frequency]:
        return self.schedule.frequency if self.schedule is not None else None

    @property
    def is_schedulable(self) -> bool:
        return self.is_active and self.schedule is not None

    @classmethod
    def from_record(cls, record: dict) -> "RecurringExpense":
        """
        Build a definition from a store or extraction record.

        Schedule problems never raise here; they are recorded in
        `config_error` and leave `schedule` as None.

        Raises:
            KeyError: if `description` or `amount` is missing or null.
            ValueError: if `amount` is not a finite number or `is_active`
                is not a recognisable boolean.
        """
        description = str(record.get("description") or "").strip()
        if not description:
            raise KeyError("description")
        if record.get("amount") is None:
            raise KeyError("amount")
        amount = _to_amount(record["amount"])

        created_at = record.get("created_at") or record.get("createdAt")
        if isinstance(created_at, str):
            try:
                created_at = datetime.fromisoformat(created_at.replace("Z", "+00:00"))
            except ValueError:
                created_at = None

        frequency = record.get("frequency") or "monthly"
        config = dict(record.get("frequency_config") or record.get("frequencyConfig") or {})
        # Legacy rows keep the monthly day in its own column.
        for key in ("day_of_month", "dayOfMonth", "days_of_week", "daysOfWeek",
                    "month", "anchor_date", "anchorDate"):
            if key in record and key not in config:
                config[key] = record[key]

        schedule, error = None, None
        try:
            schedule = build_schedule(frequency, config)
        except InvalidRecurrenceError as e:
            error = str(e)

        is_active = _first(record, "is_active", "isActive")
        return cls(
            id=str(record.get("id") or uuid.uuid4()),
            description=description,
            amount=amount,
            schedule=schedule,
            type=record.get("type") or "expense",
            priority=record.get("priority") or "medium",
            notes=record.get("notes") or None,
            is_active=True if is_active is None else _to_bool(is_active),
            created_at=created_at,
            raw_frequency=str(frequency),
            config_error=error,
        )

    def __str__(self) -> str:
        status = "✅" if self.is_active else "❌"
        freq = self.frequency.value if self.frequency else f"invalid: {self.raw_frequency}"
        return f"{status} {self.description}: {self.amount:.2f} ({freq})"
