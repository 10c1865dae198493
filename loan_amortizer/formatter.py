"""Output helpers for the loan amortizer.

This module provides currency formatting shared by the CLI and the web page,
and simple functions that render a ``ScheduleResult`` as text tables. We rely
only on built-in printing and string formatting.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Iterable, Union

from .data_models import PaymentScheduleItem, ScheduleResult

EMPTY_STATE_MESSAGE = "Enter loan details to see your repayment schedule"


def format_currency(amount: Union[Decimal, float, int]) -> str:
    """Format an amount as US dollars with two decimals, e.g. ``$1,266.71``."""
    value = Decimal(str(amount))
    text = f"{value.copy_abs():,.2f}"
    # amounts that round to zero print without a sign
    sign = "-" if value < 0 and text.strip("0.,") else ""
    return f"{sign}${text}"


def print_summary(result: ScheduleResult) -> None:
    """Print the payment summary in a human-readable format."""
    print("Payment Summary")
    print("-" * 56)
    print(f"Monthly payment : {format_currency(result.monthly_payment)}")
    print(f"Total interest  : {format_currency(result.total_interest)}")
    print(f"Total amount    : {format_currency(result.total_amount)}")
    print(f"Payments        : {len(result.schedule)}")
    print("-" * 56)


def print_schedule(schedule: Iterable[PaymentScheduleItem]) -> None:
    """Print the amortization schedule as a simple tab separated table."""
    headers = ["Month", "Payment", "Principal", "Interest", "Balance"]
    print("\t".join(headers))
    for item in schedule:
        row = [
            str(item.month),
            format_currency(item.monthly_payment),
            format_currency(item.principal_payment),
            format_currency(item.interest_payment),
            format_currency(item.remaining_balance),
        ]
        print("\t".join(row))


def result_to_dict(result: ScheduleResult) -> Dict[str, Any]:
    """Convert a result into JSON-serialisable floats."""
    return {
        "monthly_payment": float(result.monthly_payment),
        "total_interest": float(result.total_interest),
        "total_amount": float(result.total_amount),
        "schedule": [
            {
                "month": item.month,
                "payment": float(item.monthly_payment),
                "principal": float(item.principal_payment),
                "interest": float(item.interest_payment),
                "balance": float(item.remaining_balance),
            }
            for item in result.schedule
        ],
    }
