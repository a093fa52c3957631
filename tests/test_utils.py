# tests/test_utils.py
from datetime import date

import pytest

from emi_calc.utils import (
    coerce_month_map,
    parse_amount,
    parse_date,
    parse_month_entry,
    parse_month_map,
)


@pytest.mark.parametrize(
    "raw, expected",
    [("500000", 500_000), ("500k", 500_000), ("2.5M", 2_500_000), ("5,00,000", 500_000), (" 42 ", 42)],
)
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


def test_parse_amount_rejects_garbage():
    with pytest.raises(ValueError, match="Invalid amount"):
        parse_amount("lots")


def test_parse_month_entry():
    assert parse_month_entry("12:100k") == (12, 100_000)
    assert parse_month_entry("7:9.25") == (7, 9.25)


@pytest.mark.parametrize("raw", ["12", "x:100", "0:100", "1:2:3"])
def test_parse_month_entry_rejects_bad_entries(raw):
    with pytest.raises(ValueError):
        parse_month_entry(raw)


def test_parse_month_map_sums_repeated_months():
    assert parse_month_map(["3:1000", "3:500", "9:2k"]) == {3: 1_500, 9: 2_000}


def test_coerce_month_map_from_json():
    assert coerce_month_map({"1": 5000, "4": "250.5", "6": "", "7": None}) == {1: 5000.0, 4: 250.5}
    assert coerce_month_map(None) == {}
    with pytest.raises(ValueError):
        coerce_month_map({"june": 100})


def test_parse_date():
    assert parse_date("2026-03-15") == date(2026, 3, 15)
    with pytest.raises(ValueError, match="Invalid date"):
        parse_date("15/03/2026")

