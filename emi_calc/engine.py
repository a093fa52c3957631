"""Core calculation engine for the EMI calculator.

This module implements the amortization logic used everywhere an EMI schedule
is shown: the reducing-balance EMI formula and a month-by-month schedule
generator that supports yearly EMI hikes, one-off prepayments and floating
rate resets. Results are returned as a ``ScheduleResult`` holding the rows and
aggregate totals. The functions are pure; they keep no state between calls.
"""

from __future__ import annotations

import logging
from typing import Dict, List

from .data_models import ScheduleInput, ScheduleResult, ScheduleRow
from .validation import validate_schedule_input

logger = logging.getLogger(__name__)

# Balances under half a cent are floating point residue, not money owed.
_EPS = 0.005


def compute_emi(principal: float, annual_rate_percent: float, months: int) -> float:
    """Return the equated monthly installment for a reducing-balance loan.

    The formula is:

        emi = P * i * (1 + i)^n / ((1 + i)^n - 1)

    where ``P`` is the principal (or outstanding balance when re-amortizing),
    ``i`` is the monthly rate (``annual_rate_percent / 12 / 100``) and ``n``
    is the number of remaining months. The result is not rounded.

    When the rate is too small to register in ``(1 + i)^n`` the payment
    simplifies to ``P / n``; when ``(1 + i)^n`` overflows it tends to the
    interest-only payment ``P * i``.
    """
    if months < 1:
        raise ValueError("Months must be at least 1")
    if annual_rate_percent <= 0:
        raise ValueError("Annual rate must be positive")
    monthly_rate = annual_rate_percent / 12 / 100
    try:
        factor = (1 + monthly_rate) ** months
    except OverflowError:
        return principal * monthly_rate
    if factor == 1:
        return principal / months
    return principal * monthly_rate * factor / (factor - 1)


def generate_schedule(schedule_input: ScheduleInput) -> ScheduleResult:
    """Compute the amortization schedule for ``schedule_input``.

    Each month is processed in this order: a floating rate change for the
    month re-amortizes the outstanding balance over the remaining months, the
    yearly hike is applied on the first month of every 12-month block after
    the first, then interest, principal and any prepayment are applied. An
    overpayment is clipped so the balance never goes below zero, and the
    schedule stops at the first month the balance reaches zero.

    The schedule never runs past ``tenure_months``; if the balance is still
    positive at that point the result reports it as ``residual_balance``.

    Raises
    ------
    ScheduleInputError
        If the input fails validation.
    """
    validate_schedule_input(schedule_input)

    tenure = schedule_input.tenure_months
    prepayments = schedule_input.prepayments
    rate_changes = schedule_input.floating_rate_changes
    hike_percent = schedule_input.yearly_hike_percent

    current_rate = schedule_input.annual_rate_percent
    outstanding = float(schedule_input.principal)
    emi = compute_emi(outstanding, current_rate, tenure)

    rows: List[ScheduleRow] = []
    total_interest = 0.0
    total_principal_paid = 0.0

    for month in range(1, tenure + 1):
        if month in rate_changes:
            current_rate = rate_changes[month]
            emi = compute_emi(outstanding, current_rate, tenure - month + 1)
            logger.debug("Month %d: rate reset to %s%%, EMI re-amortized to %.4f", month, current_rate, emi)

        if month > 1 and (month - 1) % 12 == 0 and hike_percent:
            emi += emi * hike_percent / 100

        monthly_rate = current_rate / 12 / 100
        interest = outstanding * monthly_rate
        principal_component = emi - interest
        prepayment = float(prepayments.get(month, 0))

        new_balance = outstanding - principal_component - prepayment
        if new_balance < _EPS:
            # Overpayment (or rounding residue): shrink the principal part so
            # the balance lands exactly on zero.
            principal_component += new_balance
            new_balance = 0.0

        rows.append(
            ScheduleRow(
                month=month,
                emi=emi,
                principal_component=principal_component,
                interest_component=interest,
                prepayment=prepayment,
                outstanding_balance=new_balance,
                rate=current_rate,
            )
        )
        total_interest += interest
        total_principal_paid += principal_component + prepayment
        outstanding = new_balance

        if outstanding <= 0:
            break

    if outstanding > 0:
        logger.warning(
            "Tenure of %d months exhausted with %.2f still outstanding", tenure, outstanding
        )

    return ScheduleResult(
        rows=rows,
        total_interest=total_interest,
        total_principal_paid=total_principal_paid,
        monthly_emi=rows[0].emi,
    )


def compare_schedules(baseline: ScheduleResult, scenario: ScheduleResult) -> Dict[str, float]:
    """Return the savings of ``scenario`` relative to ``baseline``.

    Positive values mean the scenario is cheaper or shorter.
    """
    return {
        "baseline_total_interest": baseline.total_interest,
        "scenario_total_interest": scenario.total_interest,
        "interest_saved": baseline.total_interest - scenario.total_interest,
        "total_paid_saved": baseline.total_paid - scenario.total_paid,
        "months_saved": baseline.months - scenario.months,
    }


def baseline_input(schedule_input: ScheduleInput) -> ScheduleInput:
    """Strip hikes, prepayments and rate changes to get the plain fixed-rate loan."""
    return ScheduleInput(
        principal=schedule_input.principal,
        annual_rate_percent=schedule_input.annual_rate_percent,
        tenure_months=schedule_input.tenure_months,
    )
