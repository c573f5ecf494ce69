"""
Tests for the loan and repayment store.
Uses an in-memory SQLite database.
"""
from datetime import date
from decimal import Decimal

import pytest

from repayment_calc.data_models import LoanTerms
from repayment_calc.engine import generate_schedule
from repayment_calc_web.repayment_store import RepaymentStore


@pytest.fixture
def store():
    return RepaymentStore("sqlite://")


@pytest.fixture
def terms():
    return LoanTerms(
        principal=Decimal("100000"),
        rate=Decimal("12"),
        start_date=date(2025, 1, 1),
        maturity_date=date(2025, 5, 1),
    )


def _create(store, terms, borrower="John Doe"):
    schedule = generate_schedule(terms.principal, terms.rate, terms.start_date, terms.maturity_date)
    return store.create_loan(borrower, terms, schedule)


def test_create_loan_stores_pending_repayments(store, terms):
    loan = _create(store, terms)

    assert loan["borrower"] == "John Doe"
    assert loan["principal"] == 100000.0
    assert loan["totalDue"] == 112000.0
    assert [r["amountDue"] for r in loan["repayments"]] == [3000.0, 3000.0, 3000.0, 103000.0]
    assert [r["dueDate"] for r in loan["repayments"]][-1] == "2025-05-01"
    assert all(r["amountPaid"] is None and r["paymentDate"] is None for r in loan["repayments"])


def test_get_loan_derives_status(store, terms):
    loan = _create(store, terms)

    stored = store.get_loan(loan["id"], today=date(2025, 3, 15))
    assert [r["status"] for r in stored["repayments"]] == ["OVERDUE", "OVERDUE", "PENDING", "PENDING"]


def test_get_missing_loan(store):
    assert store.get_loan(999) is None


def test_list_loans(store, terms):
    _create(store, terms, "John Doe")
    _create(store, terms, "Jane Smith")

    loans = store.list_loans()
    assert {loan["borrower"] for loan in loans} == {"John Doe", "Jane Smith"}


def test_record_payment_marks_paid(store, terms):
    loan = _create(store, terms)
    first = loan["repayments"][0]

    paid = store.record_payment(first["id"], Decimal("3000"), date(2025, 2, 3), today=date(2025, 3, 15))
    assert paid["status"] == "PAID"
    assert paid["amountPaid"] == 3000.0
    assert paid["paymentDate"] == "2025-02-03"

    stored = store.get_loan(loan["id"], today=date(2025, 3, 15))
    assert [r["status"] for r in stored["repayments"]] == ["PAID", "OVERDUE", "PENDING", "PENDING"]


def test_record_payment_missing_repayment(store):
    assert store.record_payment(42, Decimal("10"), date(2025, 1, 1)) is None


def test_loan_terms_keep_their_decimals(store):
    """Principal and rate come back with every decimal place they were given."""
    terms = LoanTerms(
        principal=Decimal("123456.78"),
        rate=Decimal("13.12345"),
        start_date=date(2025, 1, 1),
        maturity_date=date(2025, 4, 1),
    )
    loan = _create(store, terms)

    stored = store.get_loan(loan["id"])
    assert stored["principal"] == 123456.78
    assert stored["interestRate"] == 13.12345
