from datetime import date

import pytest

from emi_calc.data_models import ScheduleInput


@pytest.fixture
def plain_loan():
    """100k at 12 % over 12 months: EMI ≈ 8884.88."""
    return ScheduleInput(principal=100_000, annual_rate_percent=12, tenure_months=12)


@pytest.fixture
def today():
    return date(2026, 1, 1)
