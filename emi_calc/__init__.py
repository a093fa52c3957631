"""EMI calculator: amortization schedules with hikes, prepayments and floating rates."""

from .data_models import ScheduleInput, ScheduleResult, ScheduleRow
from .engine import compute_emi, generate_schedule
from .validation import ScheduleInputError

__all__ = [
    "ScheduleInput",
    "ScheduleInputError",
    "ScheduleResult",
    "ScheduleRow",
    "compute_emi",
    "generate_schedule",
]
