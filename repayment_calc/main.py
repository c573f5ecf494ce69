"""Command-line interface for the repayment calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can generate full repayment schedules, check loan parameters,
preview expected payments or inspect the term between two dates. Schedules
can be printed to the terminal or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import click

from .data_models import Installment, LoanTerms
from .engine import compute_schedule
from .formatter import print_preview, print_schedule, print_summary
from .preview import preview as build_preview
from .terms import describe_duration, months_between
from .utils import parse_iso_date, to_decimal
from .validation import ValidationError, validate_terms


def parse_amount(value: str) -> Decimal:
    """Parse a numeric string with optional suffixes.

    Accepts plain numbers ("500000") and shorthand with ``k``/``m`` suffixes
    (e.g., "500k" meaning 500_000). Returns a ``Decimal``.
    """
    value = value.strip().lower().replace(",", "")
    factor = Decimal(1)
    if value.endswith("k"):
        factor = Decimal(1_000)
        value = value[:-1]
    elif value.endswith("m"):
        factor = Decimal(1_000_000)
        value = value[:-1]
    try:
        return to_decimal(value) * factor
    except ValueError:
        raise click.BadParameter(f"Invalid amount: {value}")


def parse_rate(value: str) -> Decimal:
    """Parse an interest rate in percent ("12" or "12%")."""
    value = value.strip()
    if value.endswith("%"):
        value = value[:-1]
    try:
        return to_decimal(value)
    except ValueError:
        raise click.BadParameter(f"Invalid interest rate: {value}")


def parse_date_option(value: str) -> date:
    try:
        return parse_iso_date(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def build_terms_from_options(principal: str, rate: str, start_date: str, maturity_date: str) -> LoanTerms:
    """Turn raw option strings into ``LoanTerms``.

    Only the format of each value is checked here; the loan rules are applied
    by the validator.
    """
    return LoanTerms(
        principal=parse_amount(principal),
        rate=parse_rate(rate),
        start_date=parse_date_option(start_date),
        maturity_date=parse_date_option(maturity_date),
    )


def schedule_to_dicts(schedule: List[Installment]) -> List[Dict[str, Any]]:
    """Convert installments into JSON-serialisable dictionaries."""
    return [
        {
            "period": e.period,
            "due_date": e.due_date.isoformat(),
            "amount_due": float(e.amount_due),
            "is_last_payment": e.is_last_payment,
        }
        for e in schedule
    ]


def export_to_json(path: Path, schedule: List[Installment], summary: Dict[str, Any]) -> None:
    """Export schedule and summary to a JSON file."""
    data = {"summary": summary, "schedule": schedule_to_dicts(schedule)}
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, schedule: List[Installment]) -> None:
    """Export schedule to a CSV file."""
    header = ["Period", "Due_Date", "Amount_Due", "Is_Last_Payment"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for e in schedule:
            writer.writerow([e.period, e.due_date.isoformat(), f"{e.amount_due:.2f}", e.is_last_payment])


def loan_options(func: Callable) -> Callable:
    """Attach the options shared by every loan command."""
    func = click.option("--maturity-date", "-m", "maturity_date", required=True, help="Maturity date (YYYY-MM-DD)")(func)
    func = click.option("--start-date", "-s", "start_date", required=True, help="Start date (YYYY-MM-DD)")(func)
    func = click.option("--rate", "-r", "rate", required=True, help="Interest rate for the whole term (percent)")(func)
    func = click.option("--principal", "-p", "principal", required=True, help="Loan principal")(func)
    return func


@click.group()
def cli() -> None:
    """A command-line calculator for flat-interest repayment schedules."""
    pass


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(principal: str, rate: str, start_date: str, maturity_date: str, output: Optional[str]) -> None:
    """Compute and print the full repayment schedule."""
    terms = build_terms_from_options(principal, rate, start_date, maturity_date)
    try:
        entries, summary = compute_schedule(terms)
    except ValidationError as exc:
        raise click.BadParameter(exc.message)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, entries, summary)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, entries)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Schedule exported to {path}")
    else:
        print_summary(summary)
        print_schedule(entries)


@cli.command()
@loan_options
@click.pass_context
def validate(ctx: click.Context, principal: str, rate: str, start_date: str, maturity_date: str) -> None:
    """Check loan parameters and report the first problem found."""
    terms = build_terms_from_options(principal, rate, start_date, maturity_date)
    error = validate_terms(terms)
    if error is not None:
        click.echo(f"Error: {error.message}")
        ctx.exit(1)
    click.echo("OK")


@cli.command()
@loan_options
def preview(principal: str, rate: str, start_date: str, maturity_date: str) -> None:
    """Print the expected payments shown before a loan is created."""
    terms = build_terms_from_options(principal, rate, start_date, maturity_date)
    print_preview(build_preview(terms))


@cli.command()
@click.option("--start-date", "-s", "start_date", required=True, help="Start date (YYYY-MM-DD)")
@click.option("--maturity-date", "-m", "maturity_date", required=True, help="Maturity date (YYYY-MM-DD)")
def term(start_date: str, maturity_date: str) -> None:
    """Print the whole-month term and duration between two dates."""
    start = parse_date_option(start_date)
    maturity = parse_date_option(maturity_date)
    click.echo(f"Months   : {months_between(start, maturity)}")
    click.echo(f"Duration : {describe_duration(start, maturity) or '-'}")


if __name__ == "__main__":
    cli()
