"""Core calculation engine for the repayment calculator.

This module builds repayment schedules for flat (simple) interest loans. The
total interest is computed once on the principal for the whole term and spread
evenly across the whole-month periods between the start and maturity dates.
Every installment but the last pays one interest share; the last one, due on
the maturity date, pays the principal plus everything still outstanding.
Results are returned as a list of ``Installment`` objects, optionally along
with a summary dictionary.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Dict, List, Tuple

from .data_models import Installment, LoanTerms
from .terms import describe_duration, months_between
from .utils import Number, add_months, to_decimal
from .validation import validate_terms

# Interest shares are held on a fixed sub-cent grid so that subtracting the
# scheduled shares from the total amount is exact.
INTEREST_QUANTUM = Decimal("0.0000000001")


class InvalidTermError(ValueError):
    """Raised when a schedule is requested for a term shorter than one month."""


def working_precision(principal: Decimal, rate: Decimal) -> int:
    """Return the number of significant digits that hold every schedule amount exactly.

    The interest share has to fit on the ``INTEREST_QUANTUM`` grid and the
    total amount has to keep every digit of ``principal * rate / 100``, so the
    default context precision of 28 is raised for large or very precise loans.
    """
    top = max(principal.adjusted(), 0) + max(rate.adjusted(), 0) + 2
    bottom = min(
        principal.as_tuple().exponent + rate.as_tuple().exponent - 2,
        INTEREST_QUANTUM.as_tuple().exponent,
    )
    return max(28, top - bottom + 1)


def generate_schedule(
    principal: Number,
    rate: Number,
    start_date: date,
    maturity_date: date,
) -> List[Installment]:
    """Return the repayment schedule of a flat-interest loan.

    The parameters are expected to have passed
    :func:`repayment_calc.validation.validate`; the only check repeated here
    is that the term spans at least one whole month.

    Parameters
    ----------
    principal: Number
        Amount disbursed.
    rate: Number
        Interest rate in percent, applied once to the principal.
    start_date, maturity_date: date
        Disbursement and final repayment dates.

    Returns
    -------
    List[Installment]
        One installment per whole month. Installments ``1 .. n-1`` fall on
        the monthly anniversaries of ``start_date``; the last one falls on
        ``maturity_date``. The amounts add up to ``principal + interest``
        exactly.
    """
    principal = to_decimal(principal)
    rate = to_decimal(rate)
    term = months_between(start_date, maturity_date)
    if term <= 0:
        raise InvalidTermError(
            f"Invalid loan term: {start_date.isoformat()} to {maturity_date.isoformat()} "
            "is shorter than one month"
        )

    with localcontext() as ctx:
        ctx.prec = working_precision(principal, rate)
        total_interest = principal * rate / Decimal(100)
        total_amount = principal + total_interest

        if term == 1:
            return [Installment(period=1, due_date=maturity_date, amount_due=total_amount, is_last_payment=True)]

        interest_share = (total_interest / Decimal(term)).quantize(INTEREST_QUANTUM, rounding=ROUND_HALF_UP)
        schedule: List[Installment] = []
        for period in range(1, term):
            schedule.append(
                Installment(
                    period=period,
                    due_date=add_months(start_date, period),
                    amount_due=interest_share,
                    is_last_payment=False,
                )
            )

        # The last installment takes whatever is left so the total is exact.
        scheduled = sum((entry.amount_due for entry in schedule), Decimal("0"))
        schedule.append(
            Installment(
                period=term,
                due_date=maturity_date,
                amount_due=total_amount - scheduled,
                is_last_payment=True,
            )
        )
    return schedule


def compute_schedule(terms: LoanTerms) -> Tuple[List[Installment], Dict[str, object]]:
    """Validate ``terms`` and compute the schedule and summary for a loan.

    Raises
    ------
    ValidationError
        The first validation failure for ``terms``.

    Returns
    -------
    schedule: List[Installment]
        The generated installments.
    summary: Dict[str, object]
        Aggregate figures: total interest, total amount, term in months and
        its label, number of installments, the regular interest installment
        and the final payment.
    """
    error = validate_terms(terms)
    if error is not None:
        raise error

    principal = to_decimal(terms.principal)
    rate = to_decimal(terms.rate)
    schedule = generate_schedule(principal, rate, terms.start_date, terms.maturity_date)
    with localcontext() as ctx:
        ctx.prec = working_precision(principal, rate)
        total_amount = sum((entry.amount_due for entry in schedule), Decimal("0"))
        total_interest = total_amount - principal
    interest_installment = schedule[0].amount_due if len(schedule) > 1 else Decimal("0")

    summary = {
        "principal": float(principal),
        "rate": float(rate),
        "total_interest": float(total_interest),
        "total_amount": float(total_amount),
        "term_months": len(schedule),
        "duration": describe_duration(terms.start_date, terms.maturity_date),
        "start_date": terms.start_date.isoformat(),
        "maturity_date": terms.maturity_date.isoformat(),
        "installments": len(schedule),
        "interest_installment": float(interest_installment),
        "final_payment": float(schedule[-1].amount_due),
    }
    return schedule, summary
