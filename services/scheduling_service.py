"""
services/scheduling_service.py
------------------------------
Turns recurring expenses into dated payment items for one board month.

Workflow:
    1. Resolve the target month to a first..last day window.
    2. Expand every active definition with the recurrence engine.
    3. Bucket each date into a 'Week N' column.
    4. Skip anything already on the board (idempotency key).
    5. Return the new items plus a summary.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional, Union

from config import AUTO_SCHEDULE_NOTE
from models.payment_item import PRIORITY_ORDER, PaymentItem
from models.recurring import RecurringExpense
from services.recurrence_engine import occurrences
from utils.dates import month_window, parse_target_month, week_category
from utils.formatting import format_currency
from utils.logger import get_logger

logger = get_logger(__name__)


def idempotency_key(item: PaymentItem) -> tuple:
    """
    Key identifying "the same payment" across scheduling runs.

    Matches on description (case and surrounding whitespace ignored), due
    date and amount in cents, so manually entered duplicates are caught as
    well as previously generated items.
    """
    return (
        item.description.strip().lower(),
        item.due_date,
        round(item.amount * 100),
    )


@dataclass
class ScheduleResult:
    """
    Outcome of one scheduling run.

    Attributes:
        payments: Newly materialized items, by due date then priority.
        summary: One-paragraph description of what was scheduled.
        window: The (first_day, last_day) that was scheduled.
        skipped: (definition, reason) for definitions that produced nothing
            because their schedule is invalid.
        duplicates: Number of occurrences already present on the board.
    """
    payments: list[PaymentItem]
    summary: str
    window: tuple[date, date]
    skipped: list[tuple[RecurringExpense, str]] = field(default_factory=list)
    duplicates: int = 0

    @property
    def total_expenses(self) -> float:
        return sum(p.amount for p in self.payments if p.is_expense())

    @property
    def total_revenue(self) -> float:
        return sum(p.amount for p in self.payments if p.is_revenue())


class SchedulingService:
    """
    Materializes recurring expenses into board payment items.

    Holds no state between calls; callers that persist the result should
    pass what is already on the board as `existing_items` so repeated runs
    for the same month don't double-schedule.
    """

    def __init__(self, note: str = AUTO_SCHEDULE_NOTE):
        self.note = note

    def schedule_month(
        self,
        definitions: Iterable[RecurringExpense],
        target_month: Union[str, date, None] = None,
        existing_items: Iterable[PaymentItem] = (),
        today: Optional[date] = None,
    ) -> ScheduleResult:
        """
        Schedule every active definition into the target month.

        Args:
            definitions: Recurring expenses; inactive ones are ignored.
            target_month: 'YYYY-MM', a date in the month, or None for the
                current month.
            existing_items: Items already on the board, for deduplication.
            today: Reference date when `target_month` is None.

        Returns:
            A ScheduleResult.

        Raises:
            ValueError: If `target_month` is not a valid month.
        """
        year, month = parse_target_month(target_month, today)
        start, end = month_window(year, month)

        seen = {idempotency_key(item) for item in existing_items}
        payments: list[PaymentItem] = []
        skipped: list[tuple[RecurringExpense, str]] = []
        duplicates = 0

        for definition in definitions:
            if not definition.is_active:
                continue
            if definition.schedule is None:
                reason = definition.config_error or "missing schedule"
                logger.warning(f"Skipping '{definition.description}' #{definition.id}: {reason}")
                skipped.append((definition, reason))
                continue

            for due in occurrences(definition, start, end):
                item = self._materialize(definition, due)
                key = idempotency_key(item)
                if key in seen:
                    duplicates += 1
                    logger.debug(f"'{item.description}' on {due} already scheduled")
                    continue
                seen.add(key)
                payments.append(item)

        payments.sort(key=lambda p: (p.due_date, -PRIORITY_ORDER.get(p.priority, 0)))
        result = ScheduleResult(
            payments=payments,
            summary="",
            window=(start, end),
            skipped=skipped,
            duplicates=duplicates,
        )
        result.summary = self._summarize(result, year, month)
        logger.info(result.summary)
        return result

    def preview(
        self, definitions: Iterable[RecurringExpense], start: date, end: date
    ) -> list[tuple[RecurringExpense, list[date]]]:
        """Due dates per active definition over an arbitrary window."""
        return [(d, occurrences(d, start, end)) for d in definitions if d.is_active]

    def monthly_commitment(
        self, definitions: Iterable[RecurringExpense], target_month: Union[str, date, None] = None
    ) -> float:
        """Net amount (expenses minus revenue) the active definitions cost in a month."""
        start, end = month_window(*parse_target_month(target_month))
        total = 0.0
        for definition in definitions:
            if not definition.is_active:
                continue
            count = len(occurrences(definition, start, end))
            sign = -1 if definition.type == "revenue" else 1
            total += sign * definition.amount * count
        return total

    def _materialize(self, definition: RecurringExpense, due: date) -> PaymentItem:
        notes = f"{definition.notes}\n{self.note}" if definition.notes else self.note
        return PaymentItem(
            description=definition.description,
            amount=definition.amount,
            due_date=due,
            category=week_category(due),
            type=definition.type,
            priority=definition.priority,
            notes=notes,
            recurring_expense_id=definition.id,
        )

    @staticmethod
    def _summarize(result: ScheduleResult, year: int, month: int) -> str:
        label = date(year, month, 1).strftime("%B %Y")
        if not result.payments:
            text = f"No new payments scheduled for {label}."
        else:
            weeks = Counter(p.category for p in result.payments)
            per_week = ", ".join(f"{weeks[w]} in {w}" for w in sorted(weeks))
            text = (
                f"Scheduled {len(result.payments)} payment(s) for {label}: {per_week}. "
                f"Expenses {format_currency(result.total_expenses)}, "
                f"revenue {format_currency(result.total_revenue)}."
            )
        if result.duplicates:
            text += f" {result.duplicates} already on the board."
        if result.skipped:
            text += f" {len(result.skipped)} definition(s) skipped as invalid."
        return text
