"""Tests for utils/dates: week bucketing and month helpers."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from models.payment_item import CATEGORY_NAMES
from utils.dates import (
    clamp_day,
    iter_months,
    last_day_of_month,
    month_window,
    parse_target_month,
    sunday_weekday,
    week_category,
    week_of_month,
    week_start,
)
from tests.conftest import FEB_START


class TestWeekOfMonth:
    def test_always_between_one_and_five_and_non_decreasing(self) -> None:
        for year in (2024, 2025, 2026, 2027):
            for month in range(1, 13):
                weeks = [
                    week_of_month(date(year, month, day))
                    for day in range(1, last_day_of_month(year, month) + 1)
                ]
                assert all(1 <= w <= 5 for w in weeks)
                assert weeks == sorted(weeks)

    def test_month_starting_on_sunday(self) -> None:
        # February 2026: four whole weeks
        assert week_of_month(date(2026, 2, 1)) == 1
        assert week_of_month(date(2026, 2, 7)) == 1
        assert week_of_month(date(2026, 2, 8)) == 2
        assert week_of_month(date(2026, 2, 28)) == 4

    def test_month_starting_on_saturday(self) -> None:
        # August 2026 starts on a Saturday: the 1st is a one-day first week
        assert week_of_month(date(2026, 8, 1)) == 1
        assert week_of_month(date(2026, 8, 2)) == 2
        assert week_of_month(date(2026, 8, 29)) == 5

    def test_sixth_calendar_week_joins_week_five(self) -> None:
        assert week_of_month(date(2026, 8, 30)) == 5
        assert week_of_month(date(2026, 8, 31)) == 5
        assert week_of_month(date(2026, 5, 31)) == 5

    def test_category_name(self) -> None:
        assert week_category(date(2026, 2, 16)) == "Week 3"
        assert week_category(date(2026, 8, 31)) == "Week 5"

    def test_categories_are_board_columns(self) -> None:
        for day in range(1, 32):
            assert week_category(date(2026, 8, day)) in CATEGORY_NAMES


class TestCalendarHelpers:
    def test_sunday_weekday(self) -> None:
        assert sunday_weekday(FEB_START) == 0
        assert sunday_weekday(date(2026, 2, 7)) == 6

    def test_week_start(self) -> None:
        assert week_start(date(2026, 2, 4)) == FEB_START
        assert week_start(date(2026, 2, 11)) == date(2026, 2, 8)
        assert week_start(FEB_START) == FEB_START
        assert week_start(date(2026, 1, 1)) == date(2025, 12, 28)

    def test_clamp_day(self) -> None:
        assert clamp_day(2026, 2, 31) == date(2026, 2, 28)
        assert clamp_day(2024, 2, 30) == date(2024, 2, 29)
        assert clamp_day(2026, 4, 31) == date(2026, 4, 30)
        assert clamp_day(2026, 1, 15) == date(2026, 1, 15)

    def test_month_window(self) -> None:
        assert month_window(2026, 12) == (date(2026, 12, 1), date(2026, 12, 31))

    def test_iter_months_includes_partial_months(self) -> None:
        months = list(iter_months(date(2025, 12, 31), date(2026, 2, 1)))
        assert months == [(2025, 12), (2026, 1), (2026, 2)]


class TestParseTargetMonth:
    def test_string(self) -> None:
        assert parse_target_month("2026-03") == (2026, 3)

    def test_date_and_datetime(self) -> None:
        assert parse_target_month(date(2026, 7, 19)) == (2026, 7)
        assert parse_target_month(datetime(2026, 7, 19, 8, 30)) == (2026, 7)

    def test_none_uses_today(self) -> None:
        assert parse_target_month(None, today=date(2026, 10, 18)) == (2026, 10)

    @pytest.mark.parametrize("bad", ["2026-13", "March 2026", "", "2026/03"])
    def test_invalid_string_raises(self, bad: str) -> None:
        with pytest.raises(ValueError):
            parse_target_month(bad)
