"""Utility functions for the EMI calculator.

This module provides helpers for parsing user input into Python data types:
amounts with ``k``/``m`` shorthand, ``MONTH:VALUE`` entries for the sparse
per-month override maps, and ISO dates.
"""

from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, Mapping


def parse_amount(value: str) -> float:
    """Parse a numeric string with optional suffixes.

    Accepts plain numbers ("500000"), thousands separators ("5,00,000") and
    shorthand with ``k``/``m`` suffixes (e.g. "500k" meaning 500_000).

    Raises
    ------
    ValueError
        If the string is not a valid amount.
    """
    cleaned = value.strip().lower().replace(",", "")
    factor = 1.0
    if cleaned.endswith("k"):
        factor = 1_000.0
        cleaned = cleaned[:-1]
    elif cleaned.endswith("m"):
        factor = 1_000_000.0
        cleaned = cleaned[:-1]
    try:
        return float(cleaned) * factor
    except ValueError as exc:
        raise ValueError(f"Invalid amount: {value}") from exc


def parse_month_entry(entry: str) -> tuple:
    """Parse a ``MONTH:VALUE`` string into ``(month, value)``.

    ``MONTH`` is a 1-based month index and ``VALUE`` an amount or rate;
    amounts may use the ``k``/``m`` shorthand.
    """
    parts = entry.split(":")
    if len(parts) != 2:
        raise ValueError(f"Entry must be in MONTH:VALUE format; got {entry}")
    month_str, value_str = parts
    try:
        month = int(month_str.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid month in entry: {entry}") from exc
    if month < 1:
        raise ValueError(f"Month must be 1 or greater; got {month}")
    return month, parse_amount(value_str)


def parse_month_map(entries: Iterable[str]) -> Dict[int, float]:
    """Build a sparse month map from ``MONTH:VALUE`` entries.

    Repeated months are summed, so two prepayments in the same month add up.
    """
    mapping: Dict[int, float] = {}
    for entry in entries:
        month, value = parse_month_entry(entry)
        mapping[month] = mapping.get(month, 0.0) + value
    return mapping


def coerce_month_map(raw: Mapping) -> Dict[int, float]:
    """Normalize a JSON-style map (string keys, numeric values) to ``{int: float}``.

    Empty or null values are dropped, as an untouched form field would be.
    """
    mapping: Dict[int, float] = {}
    for key, value in (raw or {}).items():
        if value is None or value == "":
            continue
        try:
            month = int(key)
            mapping[month] = float(value)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid month entry {key!r}: {value!r}") from exc
    return mapping


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a ``date``."""
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid date string: {value}") from exc

