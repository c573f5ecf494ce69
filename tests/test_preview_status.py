"""
Unit tests for expected-payment previews and repayment status.
"""
from datetime import date
from decimal import Decimal

from repayment_calc.data_models import LoanTerms, RepaymentStatus
from repayment_calc.preview import (
    expected_monthly_payment,
    expected_total_interest,
    expected_total_return,
    interest_amount,
    preview,
    total_amount,
)
from repayment_calc.status import payment_status


def test_interest_and_total_amount():
    assert interest_amount(10000, 20) == Decimal("2000")
    assert total_amount(10000, 20) == Decimal("12000")


def test_expected_monthly_payment_is_whole_interest():
    """The preview shows the full flat interest as the monthly figure."""
    assert expected_monthly_payment(10000, 20, 4) == Decimal("2000")
    assert expected_monthly_payment(10000, 20, 0) == Decimal("0")


def test_expected_totals_scale_with_term():
    assert expected_total_interest(10000, 20, 4) == Decimal("8000")
    assert expected_total_return(10000, 20, 4) == Decimal("18000")
    assert expected_total_return(10000, 20, 0) == Decimal("10000")


def test_preview_bundle():
    terms = LoanTerms(
        principal=Decimal("10000"),
        rate=Decimal("20"),
        start_date=date(2025, 8, 23),
        maturity_date=date(2025, 12, 23),
    )
    result = preview(terms)

    assert result["term_months"] == 4
    assert result["duration"] == "4 months and 2 days"
    assert result["total_amount"] == 12000.0
    assert result["expected_monthly_payment"] == 2000.0
    assert result["expected_total_return"] == 18000.0


def test_paid_when_payment_date_set():
    assert payment_status(date(2025, 8, 20), date(2025, 8, 30), today=date(2025, 9, 1)) == RepaymentStatus.PAID


def test_overdue_after_due_date():
    assert payment_status(date(2025, 8, 20), today=date(2025, 8, 25)) == RepaymentStatus.OVERDUE


def test_pending_until_due_date_passes():
    assert payment_status(date(2025, 8, 30), today=date(2025, 8, 25)) == RepaymentStatus.PENDING
    assert payment_status(date(2025, 8, 25), today=date(2025, 8, 25)) == RepaymentStatus.PENDING
