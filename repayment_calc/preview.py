"""Expected-payment figures shown before a loan is created.

These projections are computed from the form values alone and are not the
schedule that gets stored. Note that ``expected_monthly_payment`` returns the
whole flat interest rather than dividing it by the term, so
``expected_total_interest`` and ``expected_total_return`` grow with the
number of months; :func:`repayment_calc.engine.compute_schedule` gives the
figures that are actually scheduled.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Dict

from .data_models import LoanTerms
from .terms import describe_duration, term_in_months
from .utils import Number, to_decimal


def interest_amount(principal: Number, rate: Number) -> Decimal:
    return to_decimal(principal) * to_decimal(rate) / Decimal(100)


def total_amount(principal: Number, rate: Number) -> Decimal:
    """Principal plus flat interest."""
    return to_decimal(principal) + interest_amount(principal, rate)


def expected_monthly_payment(principal: Number, rate: Number, term_months: int) -> Decimal:
    if term_months <= 0:
        return Decimal("0")
    return interest_amount(principal, rate)


def expected_total_interest(principal: Number, rate: Number, term_months: int) -> Decimal:
    return expected_monthly_payment(principal, rate, term_months) * Decimal(term_months)


def expected_total_return(principal: Number, rate: Number, term_months: int) -> Decimal:
    """Expected interest over the term plus the principal returned."""
    return expected_total_interest(principal, rate, term_months) + to_decimal(principal)


def preview(terms: LoanTerms) -> Dict[str, object]:
    """Bundle the preview figures for ``terms`` into a serialisable dict."""
    months = term_in_months(terms.start_date, terms.maturity_date)
    return {
        "term_months": months,
        "duration": describe_duration(terms.start_date, terms.maturity_date),
        "interest_amount": float(interest_amount(terms.principal, terms.rate)),
        "total_amount": float(total_amount(terms.principal, terms.rate)),
        "expected_monthly_payment": float(expected_monthly_payment(terms.principal, terms.rate, months)),
        "expected_total_interest": float(expected_total_interest(terms.principal, terms.rate, months)),
        "expected_total_return": float(expected_total_return(terms.principal, terms.rate, months)),
    }
