"""Validation of loan parameters before a schedule is generated."""

from __future__ import annotations

from datetime import date
from typing import Optional

from .data_models import LoanTerms
from .terms import months_between
from .utils import Number, to_decimal


class ValidationError(ValueError):
    """Invalid loan parameters supplied by the caller.

    ``code`` identifies the failed check (``invalid_principal``,
    ``invalid_interest_rate``, ``invalid_date_order`` or ``term_too_short``)
    and ``message`` is the text shown to the user.
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (self.code, self.message) == (other.code, other.message)

    def __hash__(self) -> int:
        return hash((self.code, self.message))

    def __repr__(self) -> str:
        return f"ValidationError(code={self.code!r}, message={self.message!r})"


def validate(
    principal: Number,
    rate: Number,
    start_date: date,
    maturity_date: date,
) -> Optional[ValidationError]:
    """Return the first problem with the loan parameters, or ``None``.

    Checks run in a fixed order and only the first failure is reported:
    principal, interest rate, date order, then minimum term of one month.
    """
    if to_decimal(principal) <= 0:
        return ValidationError("invalid_principal", "Principal amount must be greater than 0")
    if to_decimal(rate) < 0:
        return ValidationError("invalid_interest_rate", "Interest rate cannot be negative")
    if start_date >= maturity_date:
        return ValidationError("invalid_date_order", "Maturity date must be after start date")
    if months_between(start_date, maturity_date) < 1:
        return ValidationError("term_too_short", "Loan term must be at least 1 month")
    return None


def validate_terms(terms: LoanTerms) -> Optional[ValidationError]:
    return validate(terms.principal, terms.rate, terms.start_date, terms.maturity_date)
