"""Utility functions for the loan amortizer.

This module provides helpers for turning user input (usually text typed into
a form) into validated ``LoanInput`` objects, plus the small text helpers the
presentation layer uses for the amount field and the years hint.
"""

from __future__ import annotations

import re
from decimal import Decimal, ROUND_HALF_UP, getcontext
from typing import Optional, Union

from .data_models import LoanInput

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

NumberLike = Union[str, int, float, Decimal]

# 100 years of monthly payments
MAX_TERM_MONTHS = 1200

_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")


def decimal_from_str(value: NumberLike) -> Decimal:
    """Convert a numeric string (or number) into a finite ``Decimal``.

    The function strips any commas and surrounding whitespace. It raises
    ``ValueError`` if conversion fails or the value is NaN or infinite.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid numeric value: {value}")
    try:
        cleaned = str(value).replace(",", "").strip()
        result = Decimal(cleaned)
    except Exception as exc:
        raise ValueError(f"Invalid numeric value: {value}") from exc
    if not result.is_finite():
        raise ValueError(f"Invalid numeric value: {value}")
    return result


def int_from_str(value: NumberLike, maximum: Optional[int] = None) -> int:
    """Convert a numeric string into an ``int``.

    Values with a fractional part (``"12.5"``) are rejected rather than
    truncated. When ``maximum`` is given, values larger than it in magnitude raise
    ``ValueError`` before any conversion, so ``"1e999999"`` never becomes a huge ``int``.
    """
    number = decimal_from_str(value)
    if maximum is not None and abs(number) > maximum:
        raise ValueError(f"Value exceeds {maximum}: {value}")
    if number != number.to_integral_value():
        raise ValueError(f"Invalid whole number: {value}")
    return int(number)


def parse_loan_input(
    principal: Optional[NumberLike],
    annual_rate_percent: Optional[NumberLike],
    term_months: Optional[NumberLike],
) -> Optional[LoanInput]:
    """Validate raw calculator input.

    Returns ``None`` when any field is missing, non-numeric or out of range
    (principal <= 0, rate < 0, term < 1 or above ``MAX_TERM_MONTHS``).
    """
    if principal is None or annual_rate_percent is None or term_months is None:
        return None
    try:
        principal_value = decimal_from_str(principal)
        rate_value = decimal_from_str(annual_rate_percent)
        term_value = int_from_str(term_months, maximum=MAX_TERM_MONTHS)
    except ValueError:
        return None
    if principal_value <= 0 or rate_value < 0 or term_value <= 0:
        return None
    return LoanInput(
        principal=principal_value,
        annual_rate_percent=rate_value,
        term_months=term_value,
    )


def strip_thousands_separators(value: str) -> str:
    """Remove the commas the amount field displays."""
    return value.replace(",", "")


def format_number(value: str) -> str:
    """Insert a comma every three digits, e.g. ``"250000"`` -> ``"250,000"``.

    Only the integer part is grouped, anything after a decimal point is kept
    as typed.
    """
    integer, dot, fraction = strip_thousands_separators(value).partition(".")
    return _THOUSANDS.sub(",", integer) + dot + fraction


def term_in_years(term_months: Optional[NumberLike]) -> Optional[int]:
    """Return the term rounded to whole years, or ``None`` for an invalid term."""
    if term_months is None:
        return None
    try:
        months = int_from_str(term_months, maximum=MAX_TERM_MONTHS)
    except ValueError:
        return None
    if months <= 0:
        return None
    years = (Decimal(months) / Decimal(12)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    return int(years)
