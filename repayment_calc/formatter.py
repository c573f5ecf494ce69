"""Output helpers for the repayment calculator.

This module provides simple functions to render repayment schedules,
summaries and previews in a tabular text format using built-in printing and
string formatting. Amounts are shown with two decimals.
"""

from __future__ import annotations

from typing import Dict, Iterable

from .data_models import Installment


def print_summary(summary: Dict[str, object]) -> None:
    """Print a summary of loan metrics in a human-readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Principal          : {summary['principal']:.2f}")
    print(f"Interest rate      : {summary['rate']:.2f}%")
    print(f"Total interest     : {summary['total_interest']:.2f}")
    print(f"Total amount       : {summary['total_amount']:.2f}")
    duration = summary.get("duration")
    if duration:
        print(f"Term               : {summary['term_months']} months ({duration})")
    else:
        print(f"Term               : {summary['term_months']} months")
    print(f"Start date         : {summary['start_date']}")
    print(f"Maturity date      : {summary['maturity_date']}")
    print(f"Installments       : {summary['installments']}")
    # Single-month loans have no interest-only installments.
    if summary.get("interest_installment"):
        print(f"Monthly interest   : {summary['interest_installment']:.2f}")
    print(f"Final payment      : {summary['final_payment']:.2f}")
    print("-" * 72)


def print_schedule(schedule: Iterable[Installment]) -> None:
    """Print the repayment schedule as a simple table."""
    headers = ["Period", "Due date", "Amount", "Final"]
    print("\t".join(headers))
    for entry in schedule:
        row = [
            str(entry.period),
            entry.due_date.isoformat(),
            f"{entry.amount_due:.2f}",
            "Yes" if entry.is_last_payment else "No",
        ]
        print("\t".join(row))


def print_preview(preview: Dict[str, object]) -> None:
    """Print the expected-payment preview for a loan."""
    print("Preview")
    print("=" * 72)
    print(f"Term               : {preview['term_months']} months")
    if preview.get("duration"):
        print(f"Duration           : {preview['duration']}")
    print(f"Interest amount    : {preview['interest_amount']:.2f}")
    print(f"Total amount       : {preview['total_amount']:.2f}")
    print(f"Monthly payment    : {preview['expected_monthly_payment']:.2f}")
    print(f"Expected interest  : {preview['expected_total_interest']:.2f}")
    print(f"Expected return    : {preview['expected_total_return']:.2f}")
    print("=" * 72)
