"""
models/payment_item.py
----------------------
Domain model for payment items shown on the cash-flow board.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

PRIORITIES = ("low", "medium", "high", "critical")

PRIORITY_ORDER = {
    "critical": 4,
    "high": 3,
    "medium": 2,
    "low": 1,
}

WEEK_CATEGORIES = ("Week 1", "Week 2", "Week 3", "Week 4", "Week 5")

CATEGORY_NAMES = (
    "Needs Work",
    *WEEK_CATEGORIES,
    "Current Week",
    "Next Week",
    "Overdue",
    "In Transit",
    "Suspected to Be Paid or Received",
    "Payment In Transit",
    "Action Required",
    "Processing (Tasks Assigned)",
    "Recurring",
    "Backlog",
)


@dataclass
class PaymentItem:
    """
    A single dated payment on the board.

    Items materialized from a recurring expense are independent copies:
    editing or deleting the source definition does not touch them.

    Attributes:
        description: Human-readable label.
        amount: Payment amount, always positive.
        due_date: When the payment is due.
        category: Board column (e.g., 'Week 2', 'Overdue').
        type: Either 'expense' or 'revenue'.
        priority: 'low' | 'medium' | 'high' | 'critical'.
        notes: Free text.
        recurring_expense_id: Source definition, for generated items.
    """
    description: str
    amount: float
    due_date: date
    category: str
    type: str = "expense"  # 'expense' | 'revenue'
    priority: str = "medium"
    notes: str = ""
    recurring_expense_id: Optional[str] = None
    is_paid: bool = False
    paid_date: Optional[date] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=datetime.now)

    def is_expense(self) -> bool:
        """Returns True if this is an expense item."""
        return self.type == "expense"

    def is_revenue(self) -> bool:
        """Returns True if this is a revenue item."""
        return self.type == "revenue"

    def __str__(self) -> str:
        sign = "-" if self.is_expense() else "+"
        return f"{sign}{self.amount:.2f} | {self.description} | {self.due_date} | {self.category}"
