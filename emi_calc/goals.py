"""Savings goal progress and status calculations.

Month differences follow calendar semantics (whole months between two dates)
via ``dateutil.relativedelta``. Functions that depend on the current date
accept an optional ``today`` so results are reproducible.
"""

from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Dict, Optional

from dateutil.relativedelta import relativedelta

from .data_models import Goal, GoalProgress, GoalSummary

STATUS_ACTIVE = "active"
STATUS_COMPLETED = "completed"
STATUS_OVERDUE = "overdue"
STATUS_AT_RISK = "at_risk"


def _months_between(start: date, end: date) -> int:
    delta = relativedelta(end, start)
    return delta.years * 12 + delta.months


def _months_remaining(goal: Goal, today: date) -> int:
    return max(1, _months_between(today, goal.target_date))


def calculate_goal_progress(goal: Goal, today: Optional[date] = None) -> GoalProgress:
    """Compute progress statistics for ``goal`` as of ``today``.

    The projected completion date extrapolates the average daily contribution
    since the first contribution; it is ``None`` when there is no history or
    nothing left to save.
    """
    today = today or date.today()
    if goal.target_amount > 0:
        progress = round(goal.current_balance / goal.target_amount * 100)
    else:
        progress = 0
    remaining = max(0.0, goal.target_amount - goal.current_balance)
    days_remaining = (goal.target_date - today).days

    projected: Optional[date] = None
    if goal.current_balance > 0 and remaining > 0 and goal.contributions:
        first = goal.contributions[0]
        started = first.created_at or first.contribution_date or goal.created_at
        total_days = (today - started).days
        avg_daily = goal.current_balance / max(1, total_days)
        days_to_complete = remaining / max(0.01, avg_daily)
        projected = today + timedelta(days=math.ceil(days_to_complete))

    return GoalProgress(
        progress_percentage=min(100, progress),
        remaining_amount=remaining,
        days_remaining=days_remaining,
        is_overdue=days_remaining < 0,
        average_monthly_required=remaining / _months_remaining(goal, today),
        projected_completion_date=projected,
    )


def goal_status(goal: Goal, today: Optional[date] = None) -> str:
    """Classify ``goal`` as completed, overdue, at risk or active.

    A goal is at risk when the monthly amount still required is more than
    twice its historical average contribution.
    """
    today = today or date.today()
    if goal.is_completed or goal.current_balance >= goal.target_amount:
        return STATUS_COMPLETED

    progress = calculate_goal_progress(goal, today)
    if progress.is_overdue:
        return STATUS_OVERDUE

    if goal.contributions:
        avg_contribution = goal.current_balance / len(goal.contributions)
        required = progress.remaining_amount / _months_remaining(goal, today)
        if required > avg_contribution * 2:
            return STATUS_AT_RISK

    return STATUS_ACTIVE


def calculate_goal_summary(goal: Goal) -> GoalSummary:
    contributions = goal.contributions
    count = len(contributions)
    total = goal.current_balance

    monthly: Dict[str, float] = {}
    for contribution in contributions:
        key = contribution.contribution_date.strftime("%Y-%m")
        monthly[key] = monthly.get(key, 0.0) + contribution.amount

    last_date = max((c.contribution_date for c in contributions), default=None)
    return GoalSummary(
        total_contributions=total,
        contribution_count=count,
        average_contribution=total / count if count else 0.0,
        last_contribution_date=last_date,
        monthly_progress=monthly,
    )


def recommended_contribution(goal: Goal, today: Optional[date] = None) -> int:
    """Whole-unit monthly amount needed to reach the target on time."""
    today = today or date.today()
    remaining = max(0.0, goal.target_amount - goal.current_balance)
    return math.ceil(remaining / _months_remaining(goal, today))


def validate_contribution(goal: Goal, amount: float) -> Optional[str]:
    """Check a new contribution; return a warning if it overshoots the target.

    Raises
    ------
    ValueError
        If ``amount`` is zero or negative.
    """
    if amount <= 0:
        raise ValueError("Contribution amount must be greater than zero.")
    new_balance = goal.current_balance + amount
    if new_balance > goal.target_amount:
        excess = new_balance - goal.target_amount
        return (
            f"This contribution will exceed your target by {excess:,.2f}. "
            "Your goal will be marked as completed."
        )
    return None
