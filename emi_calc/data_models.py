"""Data models for the EMI calculator.

This module defines dataclasses for the inputs and outputs of the
amortization engine (schedule input, schedule rows and the aggregated
result) as well as the supporting records used for borrowing and savings-goal
tracking. Using dataclasses makes it easy to construct, inspect and serialize
these structures.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Optional


@dataclass
class ScheduleInput:
    """Inputs for an amortization schedule.

    Attributes
    ----------
    principal: float
        Original loan amount.
    annual_rate_percent: float
        Nominal annual interest rate in percent (e.g. ``8.5``).
    tenure_months: int
        Total number of monthly installments.
    yearly_hike_percent: float
        Percentage by which the EMI grows at the start of every 12-month
        block after the first.
    prepayments: Dict[int, float]
        Sparse map of 1-based month index to an extra one-time payment.
    floating_rate_changes: Dict[int, float]
        Sparse map of 1-based month index to a new annual rate in percent.
        The EMI is re-amortized over the remaining months when a change
        takes effect.
    """

    principal: float
    annual_rate_percent: float
    tenure_months: int
    yearly_hike_percent: float = 0.0
    prepayments: Dict[int, float] = field(default_factory=dict)
    floating_rate_changes: Dict[int, float] = field(default_factory=dict)

    @classmethod
    def from_years(
        cls,
        principal: float,
        annual_rate_percent: float,
        tenure_years: int,
        yearly_hike_percent: float = 0.0,
        prepayments: Optional[Dict[int, float]] = None,
        floating_rate_changes: Optional[Dict[int, float]] = None,
    ) -> "ScheduleInput":
        """Build an input from a tenure expressed in years."""
        return cls(
            principal=principal,
            annual_rate_percent=annual_rate_percent,
            tenure_months=int(tenure_years) * 12,
            yearly_hike_percent=yearly_hike_percent,
            prepayments=dict(prepayments or {}),
            floating_rate_changes=dict(floating_rate_changes or {}),
        )


@dataclass(frozen=True)
class ScheduleRow:
    """One month of the amortization schedule.

    Values are kept unrounded; rounding is applied only when the schedule is
    printed or exported.
    """

    month: int
    emi: float
    principal_component: float
    interest_component: float
    prepayment: float
    outstanding_balance: float
    rate: float  # annual rate in percent applied this month

    @property
    def year(self) -> int:
        return (self.month + 11) // 12


@dataclass(frozen=True)
class ScheduleResult:
    """The full schedule together with its aggregate totals."""

    rows: List[ScheduleRow]
    total_interest: float
    total_principal_paid: float
    monthly_emi: float

    @property
    def months(self) -> int:
        return len(self.rows)

    @property
    def total_prepayment(self) -> float:
        return sum(r.prepayment for r in self.rows)

    @property
    def total_paid(self) -> float:
        return self.total_interest + self.total_principal_paid

    @property
    def residual_balance(self) -> float:
        """Balance left after the last row; non-zero only if the tenure ran out."""
        return self.rows[-1].outstanding_balance if self.rows else 0.0

    @property
    def paid_off(self) -> bool:
        return self.residual_balance == 0.0


@dataclass
class Borrowing:
    """A fixed-EMI borrowing tracked by marking months as paid."""

    title: str
    borrowing_amount: float
    tenure_years: int
    emi_amount: float
    paid_months: Dict[int, bool] = field(default_factory=dict)
    start_date: Optional[date] = None


@dataclass(frozen=True)
class BorrowingSummary:
    total_months: int
    paid_count: int
    total_amount: float
    paid_amount: float
    remaining_amount: float
    progress_percentage: int
    end_date: Optional[date] = None  # month of the last EMI, when the start is known


@dataclass
class Contribution:
    """A single deposit towards a savings goal."""

    amount: float
    contribution_date: date
    created_at: Optional[date] = None
    description: Optional[str] = None


@dataclass
class Goal:
    """A savings goal with a target amount and date.

    ``created_at`` is used as the start of the contribution history when the
    first contribution carries no creation date of its own.
    """

    name: str
    target_amount: float
    current_balance: float
    target_date: date
    created_at: date
    is_completed: bool = False
    description: Optional[str] = None
    contributions: List[Contribution] = field(default_factory=list)


@dataclass(frozen=True)
class GoalProgress:
    progress_percentage: int
    remaining_amount: float
    days_remaining: int
    is_overdue: bool
    average_monthly_required: float
    projected_completion_date: Optional[date]


@dataclass(frozen=True)
class GoalSummary:
    total_contributions: float
    contribution_count: int
    average_contribution: float
    last_contribution_date: Optional[date]
    monthly_progress: Dict[str, float]
