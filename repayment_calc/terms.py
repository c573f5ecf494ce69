"""Loan term helpers.

``months_between`` is the single definition of "whole months" used by both the
validator and the schedule generator, so validation and schedule boundaries
always agree. ``describe_duration`` produces the label shown next to a loan.
"""

from __future__ import annotations

from datetime import date
from typing import Optional


def months_between(start_date: date, maturity_date: date) -> int:
    """Return the number of whole calendar months from start to maturity.

    A month counts once its day-of-month anniversary has been reached, so
    2025-01-23 to 2025-03-22 is one month and 2025-01-23 to 2025-03-23 is two.
    Negative spans are clamped to zero.
    """
    months = (maturity_date.year - start_date.year) * 12 + (
        maturity_date.month - start_date.month
    )
    if maturity_date.day < start_date.day:
        months -= 1
    return max(months, 0)


def term_in_months(start_date: Optional[date], maturity_date: Optional[date]) -> int:
    """Like :func:`months_between` but returns 0 when a date is missing."""
    if not start_date or not maturity_date:
        return 0
    return months_between(start_date, maturity_date)


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _with_remainder(count: int, unit: str, rest: int, rest_unit: str) -> str:
    label = _plural(count, unit)
    if rest:
        label += f" and {_plural(rest, rest_unit)}"
    return label


def describe_duration(start_date: Optional[date], maturity_date: Optional[date]) -> str:
    """Return a human-readable duration such as ``"2 weeks and 3 days"``.

    The label is based on the day count, with 30-day months and 365-day years.
    An empty string is returned for missing dates and for spans of zero or
    fewer days.
    """
    if not start_date or not maturity_date:
        return ""
    days = (maturity_date - start_date).days
    if days <= 0:
        return ""
    if days < 7:
        return _plural(days, "day")
    if days < 30:
        return _with_remainder(days // 7, "week", days % 7, "day")
    if days < 365:
        return _with_remainder(days // 30, "month", days % 30, "day")

    years, remaining = divmod(days, 365)
    months, leftover = divmod(remaining, 30)
    label = _plural(years, "year")
    if months:
        label += f" and {_plural(months, 'month')}"
    elif leftover:
        # days are only reported when there are no whole months left over
        label += f" and {_plural(leftover, 'day')}"
    return label
