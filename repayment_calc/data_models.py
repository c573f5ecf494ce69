"""Data models for the repayment calculator.

This module defines dataclasses representing the entities used by the
calculator: the loan terms supplied by the user and the individual
installments of the generated repayment schedule. Amounts are kept as
``Decimal`` values so schedules can be summed without float drift.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass
class LoanTerms:
    """Terms of a flat-interest loan.

    Attributes
    ----------
    principal: Decimal
        The amount disbursed to the borrower, excluding interest.
    rate: Decimal
        Interest rate in percent (``12`` means 12 %). The rate is applied once
        to the principal for the whole term; it is neither compounded nor
        pro-rated by the length of the term.
    start_date: date
        The disbursement date. Monthly installments fall on its day of month.
    maturity_date: date
        The date by which principal and interest are fully repaid.
    """

    principal: Decimal
    rate: Decimal
    start_date: date
    maturity_date: date


@dataclass
class Installment:
    """One scheduled repayment.

    All installments except the last one carry an equal share of the total
    interest. The last installment is due on the maturity date and carries
    the principal together with whatever interest is still outstanding.
    """

    period: int
    due_date: date
    amount_due: Decimal
    is_last_payment: bool


class RepaymentStatus:
    """Status values of a stored repayment row."""

    PENDING = "PENDING"
    PAID = "PAID"
    OVERDUE = "OVERDUE"
