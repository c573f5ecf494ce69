"""Utility functions for the repayment calculator.

This module provides helpers for parsing user input into Python data types and
for handling dates, including adding calendar months and parsing ISO-8601
date strings into ``datetime.date`` instances.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
import calendar
from typing import Union

Number = Union[Decimal, int, float, str]


def parse_iso_date(value: Union[str, date]) -> date:
    """Parse a ``YYYY-MM-DD`` string into a ``date`` object.

    ``date`` instances are returned unchanged and ``datetime`` instances are
    truncated to their calendar date. A trailing time component in a string
    (``2025-01-01T00:00:00Z``) is ignored.

    Raises
    ------
    ValueError
        If the string is not a valid calendar date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip()[:10])
    except (AttributeError, ValueError) as exc:
        raise ValueError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from exc


def add_months(dt: date, months: int) -> date:
    """Return a new date a number of months after ``dt``.

    The day of the month is clamped to the last valid day if needed (e.g.,
    adding one month to Jan 31 yields Feb 28 or 29).
    """
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def to_decimal(value: Number) -> Decimal:
    """Convert a number or numeric string into a ``Decimal``.

    Floats go through their ``str`` form so ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion. Commas in strings are stripped.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Invalid numeric value: {value}")
    try:
        cleaned = str(value).replace(",", "").strip()
        result = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value}")
    return result
