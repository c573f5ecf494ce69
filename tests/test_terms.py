"""
Unit tests for the term helpers.
Validates whole-month counting and duration labels.
"""
from datetime import date

import pytest

from repayment_calc.terms import describe_duration, months_between, term_in_months
from repayment_calc.utils import add_months


@pytest.mark.parametrize(
    "start, maturity, expected",
    [
        (date(2025, 1, 1), date(2025, 5, 1), 4),
        (date(2025, 8, 23), date(2025, 12, 23), 4),
        (date(2025, 8, 23), date(2025, 12, 22), 3),
        (date(2025, 8, 23), date(2025, 8, 24), 0),
        (date(2024, 11, 15), date(2026, 2, 15), 15),
        (date(2025, 8, 23), date(2024, 1, 1), 0),
    ],
)
def test_months_between(start, maturity, expected):
    """Counts a month only once its day-of-month anniversary is reached."""
    assert months_between(start, maturity) == expected


def test_months_between_end_of_month():
    """Jan 31 to Feb 28 has not reached the 31st, so no whole month."""
    assert months_between(date(2025, 1, 31), date(2025, 2, 28)) == 0
    assert months_between(date(2025, 1, 31), date(2025, 3, 31)) == 2


def test_term_in_months_missing_dates():
    assert term_in_months(None, date(2025, 1, 1)) == 0
    assert term_in_months(date(2025, 1, 1), None) == 0
    assert term_in_months(date(2025, 1, 1), date(2025, 3, 1)) == 2


def test_add_months_clamps_to_month_end():
    assert add_months(date(2025, 1, 31), 1) == date(2025, 2, 28)
    assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
    assert add_months(date(2025, 11, 15), 3) == date(2026, 2, 15)


@pytest.mark.parametrize(
    "days, expected",
    [
        (1, "1 day"),
        (6, "6 days"),
        (7, "1 week"),
        (8, "1 week and 1 day"),
        (16, "2 weeks and 2 days"),
        (21, "3 weeks"),
        (30, "1 month"),
        (31, "1 month and 1 day"),
        (95, "3 months and 5 days"),
        (120, "4 months"),
        (365, "1 year"),
        (366, "1 year and 1 day"),
        (400, "1 year and 1 month"),
        (760, "2 years and 1 month"),
        (735, "2 years and 5 days"),
    ],
)
def test_describe_duration(days, expected):
    """Labels follow the day count with 30-day months and 365-day years."""
    start = date(2025, 1, 1)
    maturity = date.fromordinal(start.toordinal() + days)
    assert describe_duration(start, maturity) == expected


def test_describe_duration_empty_for_non_positive_spans():
    start = date(2025, 1, 1)
    assert describe_duration(start, start) == ""
    assert describe_duration(start, date(2024, 12, 1)) == ""
    assert describe_duration(None, start) == ""
