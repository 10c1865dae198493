"""Data models for the loan amortizer.

This module defines dataclasses for the validated loan input, a single row of
the amortization schedule and the complete result returned by the engine.
Amounts are kept as ``Decimal`` so the schedule can be inspected and
serialized without losing precision.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List


@dataclass(frozen=True)
class LoanInput:
    """Validated calculator input.

    Attributes
    ----------
    principal: Decimal
        Amount borrowed, strictly positive.
    annual_rate_percent: Decimal
        Nominal annual interest rate in percent (``4.5`` means 4.5 %). May be
        zero.
    term_months: int
        Number of monthly payments, at least one.
    """

    principal: Decimal
    annual_rate_percent: Decimal
    term_months: int

    @property
    def monthly_rate(self) -> Decimal:
        return self.annual_rate_percent / Decimal(100) / Decimal(12)


@dataclass(frozen=True)
class PaymentScheduleItem:
    """One month of the amortization schedule."""

    month: int
    monthly_payment: Decimal
    principal_payment: Decimal
    interest_payment: Decimal
    remaining_balance: Decimal


@dataclass
class ScheduleResult:
    """Monthly payment, totals and the month-by-month schedule.

    An empty result (no schedule, every amount zero) stands for input that
    could not produce a schedule.
    """

    schedule: List[PaymentScheduleItem] = field(default_factory=list)
    monthly_payment: Decimal = Decimal("0")
    total_interest: Decimal = Decimal("0")
    total_amount: Decimal = Decimal("0")

    @classmethod
    def empty(cls) -> "ScheduleResult":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.schedule
