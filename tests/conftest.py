"""Shared fixtures for the planner test suite."""

from __future__ import annotations

from datetime import date

import pytest

from models.recurring import (
    AnnualConfig,
    BiweeklyConfig,
    MonthlyConfig,
    QuarterlyConfig,
    RecurringExpense,
    WeeklyConfig,
)

# 2026-02-01 is a Sunday and February 2026 has exactly four calendar weeks.
FEB_START = date(2026, 2, 1)
FEB_END = date(2026, 2, 28)


@pytest.fixture
def rent() -> RecurringExpense:
    return RecurringExpense(
        id="rent",
        description="Rent",
        amount=1500.0,
        schedule=MonthlyConfig(1),
        priority="critical",
        notes="Landlord: J. Smith",
    )


@pytest.fixture
def gym() -> RecurringExpense:
    return RecurringExpense(
        id="gym",
        description="Gym class",
        amount=10.0,
        schedule=WeeklyConfig({1}),
        priority="low",
    )


@pytest.fixture
def salary() -> RecurringExpense:
    return RecurringExpense(
        id="salary",
        description="Salary",
        amount=3000.0,
        schedule=MonthlyConfig(20),
        type="revenue",
        priority="high",
    )


@pytest.fixture
def all_schedules() -> list:
    return [
        WeeklyConfig({0, 3, 6}),
        BiweeklyConfig({2, 5}),
        BiweeklyConfig({1}, anchor_date=date(2025, 12, 29)),
        MonthlyConfig(31),
        QuarterlyConfig(30, 11),
        AnnualConfig(29, 2),
    ]
