"""Status of a scheduled repayment."""

from __future__ import annotations

from datetime import date
from typing import Optional

from .data_models import RepaymentStatus


def payment_status(
    due_date: date,
    payment_date: Optional[date] = None,
    today: Optional[date] = None,
) -> str:
    """Return ``PAID``, ``OVERDUE`` or ``PENDING`` for a repayment.

    A repayment with a payment date is paid regardless of when it was due.
    An unpaid repayment becomes overdue the day after its due date.
    """
    if payment_date is not None:
        return RepaymentStatus.PAID
    if today is None:
        today = date.today()
    if due_date < today:
        return RepaymentStatus.OVERDUE
    return RepaymentStatus.PENDING
