"""Borrowing tracker calculations.

A borrowing is an informal loan repaid with a fixed EMI; progress is tracked
by ticking off months as paid rather than by amortizing interest.
"""

from __future__ import annotations

from typing import Dict

from dateutil.relativedelta import relativedelta

from .data_models import Borrowing, BorrowingSummary

MIN_AMOUNT = 1_000
MAX_AMOUNT = 10_000_000
MIN_EMI = 100
MAX_EMI = 1_000_000
MAX_TENURE_YEARS = 30
# Total EMI payments below this share of the amount usually mean a typo.
MIN_REPAYMENT_RATIO = 0.8


class BorrowingInputError(ValueError):
    """Raised when borrowing details are inconsistent; ``fields`` names each problem."""

    def __init__(self, fields: Dict[str, str]) -> None:
        self.fields = dict(fields)
        detail = "; ".join(f"{name}: {msg}" for name, msg in self.fields.items())
        super().__init__(f"Invalid borrowing ({detail})")


def validate_borrowing(borrowing: Borrowing) -> None:
    errors: Dict[str, str] = {}
    amount = borrowing.borrowing_amount
    emi = borrowing.emi_amount

    if amount < MIN_AMOUNT:
        errors["borrowing_amount"] = f"Borrowing amount must be at least {MIN_AMOUNT:,}"
    elif amount > MAX_AMOUNT:
        errors["borrowing_amount"] = f"Borrowing amount cannot exceed {MAX_AMOUNT:,}"

    if not isinstance(borrowing.tenure_years, int) or borrowing.tenure_years < 1:
        errors["tenure_years"] = "Tenure must be at least 1 year"
    elif borrowing.tenure_years > MAX_TENURE_YEARS:
        errors["tenure_years"] = f"Tenure cannot exceed {MAX_TENURE_YEARS} years"

    if emi < MIN_EMI:
        errors["emi_amount"] = f"EMI amount must be at least {MIN_EMI}"
    elif emi > MAX_EMI:
        errors["emi_amount"] = f"EMI amount cannot exceed {MAX_EMI:,}"
    elif emi > amount:
        errors["emi_amount"] = "EMI amount cannot be greater than borrowing amount"

    if "tenure_years" not in errors and "emi_amount" not in errors:
        if emi * borrowing.tenure_years * 12 < amount * MIN_REPAYMENT_RATIO:
            errors["tenure_years"] = (
                "Total EMI payments seem too low compared to borrowing amount"
            )

    if errors:
        raise BorrowingInputError(errors)


def summarize_borrowing(borrowing: Borrowing) -> BorrowingSummary:
    """Return paid/remaining totals and percentage progress for ``borrowing``."""
    total_months = borrowing.tenure_years * 12
    paid_count = sum(1 for paid in borrowing.paid_months.values() if paid)
    total_amount = borrowing.emi_amount * total_months
    paid_amount = paid_count * borrowing.emi_amount
    progress = round(paid_count / total_months * 100) if total_months > 0 else 0
    end_date = None
    if borrowing.start_date is not None and total_months > 0:
        end_date = borrowing.start_date + relativedelta(months=total_months - 1)
    return BorrowingSummary(
        total_months=total_months,
        paid_count=paid_count,
        total_amount=total_amount,
        paid_amount=paid_amount,
        remaining_amount=total_amount - paid_amount,
        progress_percentage=progress,
        end_date=end_date,
    )
