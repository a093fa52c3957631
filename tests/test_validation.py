# tests/test_validation.py
import pytest

from emi_calc.data_models import ScheduleInput
from emi_calc.engine import generate_schedule
from emi_calc.validation import ScheduleInputError, validate_schedule_input


def test_valid_input_passes(plain_loan):
    validate_schedule_input(plain_loan)


@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"principal": 0}, "principal"),
        ({"principal": -5_000}, "principal"),
        ({"principal": float("nan")}, "principal"),
        ({"annual_rate_percent": 0}, "annual_rate_percent"),
        ({"tenure_months": 0}, "tenure_months"),
        ({"tenure_months": 12.5}, "tenure_months"),
        ({"yearly_hike_percent": -1}, "yearly_hike_percent"),
        ({"yearly_hike_percent": 150}, "yearly_hike_percent"),
        ({"prepayments": {0: 1_000}}, "prepayments"),
        ({"prepayments": {3: -10}}, "prepayments"),
        ({"floating_rate_changes": {5: 0}}, "floating_rate_changes"),
        ({"floating_rate_changes": {"5": 9.5}}, "floating_rate_changes"),
    ],
)
def test_invalid_field_is_reported(overrides, field):
    values = {"principal": 100_000, "annual_rate_percent": 12, "tenure_months": 12}
    values.update(overrides)
    with pytest.raises(ScheduleInputError) as excinfo:
        validate_schedule_input(ScheduleInput(**values))
    assert field in excinfo.value.fields


def test_all_errors_are_collected():
    with pytest.raises(ScheduleInputError) as excinfo:
        validate_schedule_input(ScheduleInput(principal=0, annual_rate_percent=0, tenure_months=0))
    assert set(excinfo.value.fields) == {"principal", "annual_rate_percent", "tenure_months"}
    assert "Loan amount must be greater than zero" in str(excinfo.value)


def test_max_tenure_is_enforced(plain_loan):
    plain_loan.tenure_months = 480
    validate_schedule_input(plain_loan)
    with pytest.raises(ScheduleInputError) as excinfo:
        validate_schedule_input(plain_loan, max_tenure_months=360)
    assert "360" in excinfo.value.fields["tenure_months"]


def test_zero_prepayment_is_allowed(plain_loan):
    plain_loan.prepayments = {2: 0}
    validate_schedule_input(plain_loan)


def test_generate_schedule_fails_fast_on_zero_rate():
    with pytest.raises(ScheduleInputError):
        generate_schedule(ScheduleInput(principal=100_000, annual_rate_percent=0, tenure_months=12))


def test_schedule_input_error_is_a_value_error():
    assert issubclass(ScheduleInputError, ValueError)
