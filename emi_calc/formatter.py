"""Output helpers for the EMI calculator.

This module provides simple functions to render amortization schedules,
summaries and the borrowing/goal reports in a tabular text format. Amounts
are rounded to two decimals only when rendered.
"""

from __future__ import annotations

from typing import Dict, Iterable

from .data_models import BorrowingSummary, GoalProgress, ScheduleResult, ScheduleRow


def summary_dict(result: ScheduleResult) -> Dict[str, object]:
    """Return the aggregate figures of ``result`` as a JSON-friendly dict."""
    return {
        "monthly_emi": result.monthly_emi,
        "total_interest": result.total_interest,
        "total_principal_paid": result.total_principal_paid,
        "total_prepayment": result.total_prepayment,
        "total_paid": result.total_paid,
        "months": result.months,
        "residual_balance": result.residual_balance,
        "paid_off": result.paid_off,
    }


def row_dict(row: ScheduleRow) -> Dict[str, object]:
    return {
        "month": row.month,
        "year": row.year,
        "emi": row.emi,
        "principal": row.principal_component,
        "interest": row.interest_component,
        "prepayment": row.prepayment,
        "balance": row.outstanding_balance,
        "rate": row.rate,
    }


def print_summary(summary: Dict[str, object]) -> None:
    """Print a summary of loan metrics in a human-readable format."""
    print("Summary")
    print("-" * 72)
    print(f"Monthly EMI        : {summary['monthly_emi']:.2f}")
    print(f"Total interest     : {summary['total_interest']:.2f}")
    print(f"Principal paid     : {summary['total_principal_paid']:.2f}")
    if summary.get("total_prepayment"):
        print(f"Total prepayment   : {summary['total_prepayment']:.2f}")
    print(f"Total paid         : {summary['total_paid']:.2f}")
    print(f"Months             : {summary['months']}")
    if not summary["paid_off"]:
        print(f"Residual balance   : {summary['residual_balance']:.2f}")
    print("-" * 72)


def print_schedule(rows: Iterable[ScheduleRow]) -> None:
    """Print the amortization schedule as a simple table."""
    headers = ["Month", "Year", "Rate", "EMI", "Principal", "Interest", "Prepay", "Balance"]
    print("\t".join(headers))
    for row in rows:
        print(
            "\t".join(
                [
                    str(row.month),
                    str(row.year),
                    f"{row.rate:.2f}",
                    f"{row.emi:.2f}",
                    f"{row.principal_component:.2f}",
                    f"{row.interest_component:.2f}",
                    f"{row.prepayment:.2f}",
                    f"{row.outstanding_balance:.2f}",
                ]
            )
        )


def print_comparison(comparison: Dict[str, float]) -> None:
    """Print how a plan compares with the plain fixed-rate baseline.

    Positive savings mean the plan is cheaper or shorter.
    """
    print("Comparison")
    print("=" * 72)
    print(f"{'Baseline interest':20s} {comparison['baseline_total_interest']:15.2f}")
    print(f"{'Plan interest':20s} {comparison['scenario_total_interest']:15.2f}")
    print(f"{'Interest saved':20s} {comparison['interest_saved']:15.2f}")
    print(f"{'Total paid saved':20s} {comparison['total_paid_saved']:15.2f}")
    print(f"{'Months saved':20s} {int(comparison['months_saved']):15d}")
    print("=" * 72)


def print_borrowing(summary: BorrowingSummary) -> None:
    print("Borrowing")
    print("-" * 72)
    print(f"Total amount       : {summary.total_amount:.2f}")
    print(f"Paid               : {summary.paid_amount:.2f}")
    print(f"Remaining          : {summary.remaining_amount:.2f}")
    print(
        f"Progress           : {summary.paid_count}/{summary.total_months} months "
        f"({summary.progress_percentage}%)"
    )
    if summary.end_date:
        print(f"Last EMI           : {summary.end_date.strftime('%Y-%m')}")
    print("-" * 72)


def print_goal(progress: GoalProgress, status: str, recommended: int) -> None:
    print("Goal")
    print("-" * 72)
    print(f"Status             : {status}")
    print(f"Progress           : {progress.progress_percentage}%")
    print(f"Remaining          : {progress.remaining_amount:.2f}")
    print(f"Days remaining     : {progress.days_remaining}")
    print(f"Monthly required   : {progress.average_monthly_required:.2f}")
    print(f"Recommended        : {recommended}")
    if progress.projected_completion_date:
        print(f"Projected finish   : {progress.projected_completion_date.isoformat()}")
    print("-" * 72)
