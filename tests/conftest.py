"""Shared fixtures.

Fixture: $250K loan at 4.5 % over 360 months, the calculator's default.
"""

import pytest

from loan_amortizer.engine import compute_schedule
from loan_amortizer_web.app import app


@pytest.fixture
def standard_mortgage():
    return compute_schedule("250000", "4.5", "360")


@pytest.fixture
def one_month_loan():
    """$1,000 at 12 % repaid in a single month: interest is exactly $10."""
    return compute_schedule("1000", "12", "1")


@pytest.fixture
def client():
    app.config.update(TESTING=True)
    with app.test_client() as test_client:
        yield test_client
