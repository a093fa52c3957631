"""Command-line interface for the EMI calculator.

This module uses the ``click`` library to implement a multi-command
interface. Users can compute full amortization schedules, view summaries,
compare a repayment plan against the plain fixed-rate loan and check
borrowing or savings-goal progress. Schedules can be printed to the terminal
or exported to JSON/CSV files.
"""

from __future__ import annotations

import csv
import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional, Tuple

import click

from .borrowing import BorrowingInputError, summarize_borrowing, validate_borrowing
from .data_models import Borrowing, Contribution, Goal, ScheduleInput, ScheduleResult
from .engine import baseline_input, compare_schedules, generate_schedule
from .formatter import (
    print_borrowing,
    print_comparison,
    print_goal,
    print_schedule,
    print_summary,
    row_dict,
    summary_dict,
)
from .goals import calculate_goal_progress, goal_status, recommended_contribution
from .utils import parse_amount, parse_date, parse_month_map
from .validation import ScheduleInputError

logger = logging.getLogger(__name__)

MAX_PRINTED_ROWS = 120


def _amount(value: str) -> float:
    try:
        return parse_amount(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc))


def build_input_from_options(
    principal: str,
    rate: float,
    term: Optional[int],
    years: Optional[int],
    hike: float,
    prepayment: Tuple[str, ...],
    rate_change: Tuple[str, ...],
) -> ScheduleInput:
    """Turn raw CLI option values into a ``ScheduleInput``."""
    if (term is None) == (years is None):
        raise click.UsageError("Specify exactly one of --term (months) or --years")
    tenure_months = term if term is not None else years * 12
    try:
        prepayments = parse_month_map(prepayment)
        rate_changes = parse_month_map(rate_change)
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    return ScheduleInput(
        principal=_amount(principal),
        annual_rate_percent=rate,
        tenure_months=tenure_months,
        yearly_hike_percent=hike,
        prepayments=prepayments,
        floating_rate_changes=rate_changes,
    )


def _compute(schedule_input: ScheduleInput) -> ScheduleResult:
    logger.debug(
        "Computing schedule: principal=%s rate=%s tenure=%d",
        schedule_input.principal,
        schedule_input.annual_rate_percent,
        schedule_input.tenure_months,
    )
    try:
        return generate_schedule(schedule_input)
    except ScheduleInputError as exc:
        raise click.UsageError(str(exc))


def export_to_json(path: Path, result: ScheduleResult) -> None:
    """Export schedule and summary to a JSON file."""
    data = {
        "summary": summary_dict(result),
        "schedule": [
            {k: (round(v, 2) if isinstance(v, float) else v) for k, v in row_dict(r).items()}
            for r in result.rows
        ],
    }
    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def export_to_csv(path: Path, result: ScheduleResult) -> None:
    """Export schedule to a CSV file."""
    header = ["Month", "Year", "Rate", "EMI", "Principal", "Interest", "Prepayment", "Balance"]
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        for r in result.rows:
            writer.writerow(
                [
                    r.month,
                    r.year,
                    r.rate,
                    round(r.emi, 2),
                    round(r.principal_component, 2),
                    round(r.interest_component, 2),
                    round(r.prepayment, 2),
                    round(r.outstanding_balance, 2),
                ]
            )


def loan_options(func):
    """Attach the shared loan options to a command."""
    options = [
        click.option("--principal", "-p", "principal", required=True, help="Loan amount (supports 500k, 2.5m)"),
        click.option("--rate", "-r", "rate", required=True, type=float, help="Annual interest rate (percent)"),
        click.option("--term", "-t", "term", type=int, help="Tenure in months"),
        click.option("--years", "-y", "years", type=int, help="Tenure in years"),
        click.option("--hike", "hike", type=float, default=0.0, show_default=True, help="Yearly EMI hike (percent)"),
        click.option("--prepayment", "prepayment", multiple=True, help="Prepayment in MONTH:AMOUNT format"),
        click.option("--rate-change", "rate_change", multiple=True, help="Floating rate reset in MONTH:RATE format"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """An EMI calculator with yearly hikes, prepayments and floating rates."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def schedule(
    principal: str,
    rate: float,
    term: Optional[int],
    years: Optional[int],
    hike: float,
    prepayment: Tuple[str, ...],
    rate_change: Tuple[str, ...],
    output: Optional[str],
) -> None:
    """Compute and print the full amortization schedule."""
    schedule_input = build_input_from_options(principal, rate, term, years, hike, prepayment, rate_change)
    result = _compute(schedule_input)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, result)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, result)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv")
        click.echo(f"Schedule exported to {path}")
        return

    print_summary(summary_dict(result))
    if result.months > MAX_PRINTED_ROWS:
        click.echo(f"Schedule has {result.months} rows; showing first {MAX_PRINTED_ROWS} rows.")
    print_schedule(result.rows[:MAX_PRINTED_ROWS])


@cli.command()
@loan_options
@click.option("--output", "output", type=str, help="Output file path (.json)")
def summary(
    principal: str,
    rate: float,
    term: Optional[int],
    years: Optional[int],
    hike: float,
    prepayment: Tuple[str, ...],
    rate_change: Tuple[str, ...],
    output: Optional[str],
) -> None:
    """Compute and print only the summary metrics for a loan."""
    schedule_input = build_input_from_options(principal, rate, term, years, hike, prepayment, rate_change)
    summary_data = summary_dict(_compute(schedule_input))
    if output:
        path = Path(output)
        if path.suffix.lower() != ".json":
            raise click.BadParameter("Summary export must use .json extension")
        with path.open("w", encoding="utf-8") as f:
            json.dump({"summary": summary_data}, f, indent=2)
        click.echo(f"Summary exported to {path}")
    else:
        print_summary(summary_data)


@cli.command()
@loan_options
def compare(
    principal: str,
    rate: float,
    term: Optional[int],
    years: Optional[int],
    hike: float,
    prepayment: Tuple[str, ...],
    rate_change: Tuple[str, ...],
) -> None:
    """Compare a repayment plan against the plain fixed-rate loan.

    The baseline drops the hike, prepayments and rate changes, for example:

        emi-calc compare -p 500k -r 9 -y 20 --hike 5 --prepayment 12:100k
    """
    plan_input = build_input_from_options(principal, rate, term, years, hike, prepayment, rate_change)
    plan = _compute(plan_input)
    baseline = _compute(baseline_input(plan_input))
    print_comparison(compare_schedules(baseline, plan))


@cli.command()
@click.option("--title", "title", default="Borrowing", help="Borrowing title")
@click.option("--amount", "amount", required=True, help="Borrowed amount")
@click.option("--years", "-y", "years", required=True, type=int, help="Tenure in years")
@click.option("--emi", "emi", required=True, help="Fixed monthly EMI")
@click.option("--paid", "paid", multiple=True, type=int, help="Month number already paid (repeatable)")
@click.option("--start-date", "start_date", help="First EMI date (YYYY-MM-DD)")
def borrowing(
    title: str,
    amount: str,
    years: int,
    emi: str,
    paid: Tuple[int, ...],
    start_date: Optional[str],
) -> None:
    """Show repayment progress for a fixed-EMI borrowing."""
    try:
        start = parse_date(start_date) if start_date else None
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    record = Borrowing(
        title=title,
        borrowing_amount=_amount(amount),
        tenure_years=years,
        emi_amount=_amount(emi),
        paid_months={month: True for month in paid},
        start_date=start,
    )
    try:
        validate_borrowing(record)
    except BorrowingInputError as exc:
        raise click.UsageError(str(exc))
    print_borrowing(summarize_borrowing(record))


def _parse_contribution(entry: str) -> Contribution:
    parts = entry.rsplit(":", 1)
    if len(parts) != 2:
        raise click.BadParameter(f"Contribution must be in YYYY-MM-DD:AMOUNT format; got {entry}")
    try:
        return Contribution(amount=parse_amount(parts[1]), contribution_date=parse_date(parts[0]))
    except ValueError as exc:
        raise click.BadParameter(str(exc))


@cli.command()
@click.option("--name", "name", default="Goal", help="Goal name")
@click.option("--target", "target", required=True, help="Target amount")
@click.option("--balance", "balance", help="Amount saved so far (defaults to the sum of contributions)")
@click.option("--target-date", "target_date", required=True, help="Target date (YYYY-MM-DD)")
@click.option("--contribution", "contribution", multiple=True, help="Contribution in YYYY-MM-DD:AMOUNT format")
@click.option("--today", "today", help="Evaluate as of this date (YYYY-MM-DD)")
def goal(
    name: str,
    target: str,
    balance: Optional[str],
    target_date: str,
    contribution: Tuple[str, ...],
    today: Optional[str],
) -> None:
    """Show progress and status of a savings goal."""
    try:
        deadline = parse_date(target_date)
        as_of = parse_date(today) if today else date.today()
    except ValueError as exc:
        raise click.BadParameter(str(exc))
    contributions = sorted((_parse_contribution(c) for c in contribution), key=lambda c: c.contribution_date)
    if balance is None:
        current_balance = sum(c.amount for c in contributions)
    else:
        current_balance = _amount(balance)
    record = Goal(
        name=name,
        target_amount=_amount(target),
        current_balance=current_balance,
        target_date=deadline,
        created_at=contributions[0].contribution_date if contributions else as_of,
        contributions=contributions,
    )
    progress = calculate_goal_progress(record, as_of)
    print_goal(progress, goal_status(record, as_of), recommended_contribution(record, as_of))


if __name__ == "__main__":
    cli()
