"""Core calculation engine for the loan amortizer.

This module implements fixed-rate amortization: the constant monthly payment
given by the annuity formula, and the month-by-month split of that payment
into interest on the remaining balance and principal reduction. Results are
returned as a ``ScheduleResult``.

Invalid or incomplete input never raises. It produces an empty result, which
the presentation layer shows as a prompt to enter loan details.
"""

from __future__ import annotations

import logging
from decimal import Decimal, DivisionByZero, InvalidOperation, Overflow, getcontext
from typing import List, Optional

from .data_models import LoanInput, PaymentScheduleItem, ScheduleResult
from .utils import NumberLike, parse_loan_input

getcontext().prec = 28  # increase precision for financial calculations

logger = logging.getLogger(__name__)

DEFAULT_PRINCIPAL = "250000"
DEFAULT_ANNUAL_RATE_PERCENT = "4.5"
DEFAULT_TERM_MONTHS = "360"


def _calculate_annuity_payment(principal: Decimal, rate_per_month: Decimal, term: int) -> Decimal:
    """Return the annuity (equal installment) monthly payment for a loan.

    The formula is:

        payment = P * (i * (1 + i)^n) / ((1 + i)^n - 1)

    where ``P`` is the principal, ``i`` is the monthly interest rate and
    ``n`` is the number of payments. When the interest rate is zero, the
    payment simplifies to ``P / n``.
    """
    if term <= 0:
        raise ValueError("Term must be positive")
    if rate_per_month == 0:
        return principal / Decimal(term)
    factor = (1 + rate_per_month) ** term
    # rates below the context precision leave (1 + i)^n == 1
    if factor == 1:
        return principal / Decimal(term)
    return principal * (rate_per_month * factor) / (factor - 1)


def calculate_loan(loan: LoanInput) -> ScheduleResult:
    """Build the amortization schedule for a validated loan.

    Parameters
    ----------
    loan: LoanInput
        Principal, annual rate in percent and term in months.

    Returns
    -------
    ScheduleResult
        One ``PaymentScheduleItem`` per month, in order, together with the
        monthly payment, total interest and total amount paid. The final
        item always has a remaining balance of exactly zero.
    """
    try:
        return _amortize(loan)
    except (Overflow, InvalidOperation, DivisionByZero) as exc:
        logger.warning(
            "Cannot compute schedule for principal=%s rate=%s%% term=%s: %r",
            loan.principal,
            loan.annual_rate_percent,
            loan.term_months,
            exc,
        )
        return ScheduleResult.empty()


def _amortize(loan: LoanInput) -> ScheduleResult:
    rate_per_month = loan.monthly_rate
    monthly_payment = _calculate_annuity_payment(loan.principal, rate_per_month, loan.term_months)
    schedule: List[PaymentScheduleItem] = []
    remaining_balance = loan.principal
    total_interest_paid = Decimal("0")

    for month in range(1, loan.term_months + 1):
        interest_payment = remaining_balance * rate_per_month
        principal_payment = monthly_payment - interest_payment
        remaining_balance -= principal_payment
        total_interest_paid += interest_payment

        # The closed-form payment leaves a tiny residual; the last month clears it.
        if month == loan.term_months:
            remaining_balance = Decimal("0")

        schedule.append(
            PaymentScheduleItem(
                month=month,
                monthly_payment=monthly_payment,
                principal_payment=principal_payment,
                interest_payment=interest_payment,
                remaining_balance=max(Decimal("0"), remaining_balance),
            )
        )

    logger.debug(
        "Computed %d month schedule, payment %s, total interest %s",
        len(schedule),
        monthly_payment,
        total_interest_paid,
    )
    return ScheduleResult(
        schedule=schedule,
        monthly_payment=monthly_payment,
        total_interest=total_interest_paid,
        total_amount=loan.principal + total_interest_paid,
    )


def compute_schedule(
    principal: Optional[NumberLike],
    annual_rate_percent: Optional[NumberLike],
    term_months: Optional[NumberLike],
) -> ScheduleResult:
    """Compute the amortization schedule from raw input.

    Arguments may be strings as typed by the user or numbers. Anything that
    is not a positive principal, a non-negative rate and a positive whole
    number of months yields ``ScheduleResult.empty()``.
    """
    loan = parse_loan_input(principal, annual_rate_percent, term_months)
    if loan is None:
        logger.debug(
            "Ignoring incomplete loan input: principal=%r rate=%r term=%r",
            principal,
            annual_rate_percent,
            term_months,
        )
        return ScheduleResult.empty()
    return calculate_loan(loan)


class LoanCalculator:
    """Current inputs and the last computed result of one calculator session.

    Every call to :meth:`update` replaces the changed inputs and recomputes
    the schedule from scratch.
    """

    def __init__(
        self,
        principal: Optional[NumberLike] = DEFAULT_PRINCIPAL,
        annual_rate_percent: Optional[NumberLike] = DEFAULT_ANNUAL_RATE_PERCENT,
        term_months: Optional[NumberLike] = DEFAULT_TERM_MONTHS,
    ) -> None:
        self.principal = principal
        self.annual_rate_percent = annual_rate_percent
        self.term_months = term_months
        self.result = compute_schedule(principal, annual_rate_percent, term_months)

    def update(
        self,
        *,
        principal: Optional[NumberLike] = None,
        annual_rate_percent: Optional[NumberLike] = None,
        term_months: Optional[NumberLike] = None,
    ) -> ScheduleResult:
        """Apply the given input changes and recompute.

        Only the keyword arguments that are passed (not ``None``) change; to
        clear a field pass an empty string.
        """
        if principal is not None:
            self.principal = principal
        if annual_rate_percent is not None:
            self.annual_rate_percent = annual_rate_percent
        if term_months is not None:
            self.term_months = term_months
        self.result = compute_schedule(self.principal, self.annual_rate_percent, self.term_months)
        return self.result
