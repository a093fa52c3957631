"""Input validation for the amortization engine.

The checks mirror the constraints the EMI form enforces before a schedule is
computed: positive amount, rate and tenure, a yearly hike between 0 and 100 %
and well-formed per-month override maps. All problems are collected and
reported together so that a caller can attach them to individual fields.
"""

from __future__ import annotations

import math
from typing import Dict, Mapping, Optional

from .data_models import ScheduleInput


class ScheduleInputError(ValueError):
    """Raised when a ``ScheduleInput`` cannot produce a meaningful schedule.

    ``fields`` maps the offending field name to a human-readable message.
    """

    def __init__(self, fields: Dict[str, str]) -> None:
        self.fields = dict(fields)
        detail = "; ".join(f"{name}: {msg}" for name, msg in self.fields.items())
        super().__init__(f"Invalid schedule input ({detail})")


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _check_month_map(
    name: str,
    mapping: Mapping[int, float],
    errors: Dict[str, str],
    *,
    allow_zero: bool,
) -> None:
    for month, value in mapping.items():
        if not isinstance(month, int) or isinstance(month, bool) or month < 1:
            errors[name] = f"Month keys must be positive integers; got {month!r}"
            return
        if not _is_number(value):
            errors[name] = f"Value for month {month} must be a number"
            return
        if value < 0 or (value == 0 and not allow_zero):
            bound = "negative" if allow_zero else "zero or negative"
            errors[name] = f"Value for month {month} cannot be {bound}"
            return


def validate_schedule_input(
    schedule_input: ScheduleInput, max_tenure_months: Optional[int] = None
) -> None:
    """Raise ``ScheduleInputError`` if ``schedule_input`` is not well formed.

    Parameters
    ----------
    schedule_input: ScheduleInput
        The input to check.
    max_tenure_months: Optional[int]
        Optional upper bound for the tenure, used by hosting applications that
        cap the schedule length.
    """
    errors: Dict[str, str] = {}

    if not _is_number(schedule_input.principal) or schedule_input.principal <= 0:
        errors["principal"] = "Loan amount must be greater than zero"
    if not _is_number(schedule_input.annual_rate_percent) or schedule_input.annual_rate_percent <= 0:
        errors["annual_rate_percent"] = "Interest rate must be greater than 0"

    tenure = schedule_input.tenure_months
    if not isinstance(tenure, int) or isinstance(tenure, bool):
        errors["tenure_months"] = "Tenure must be an integer"
    elif tenure <= 0:
        errors["tenure_months"] = "Tenure must be greater than 0"
    elif max_tenure_months is not None and tenure > max_tenure_months:
        errors["tenure_months"] = f"Tenure cannot exceed {max_tenure_months} months"

    hike = schedule_input.yearly_hike_percent
    if not _is_number(hike):
        errors["yearly_hike_percent"] = "Hike percentage must be a number"
    elif hike < 0:
        errors["yearly_hike_percent"] = "Hike percentage cannot be negative"
    elif hike > 100:
        errors["yearly_hike_percent"] = "Hike percentage cannot exceed 100%"

    _check_month_map("prepayments", schedule_input.prepayments, errors, allow_zero=True)
    _check_month_map(
        "floating_rate_changes", schedule_input.floating_rate_changes, errors, allow_zero=False
    )

    if errors:
        raise ScheduleInputError(errors)
