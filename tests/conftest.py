"""Canonical test fixtures used across engine, data and API tests.

Fixture household: a credit card, a car loan and a small store card,
simulated from 2025-01-01.
"""

from datetime import date
from decimal import Decimal

import pytest

from debtplan.models.debt import CompoundingFrequency, DebtInput, LoanType


@pytest.fixture
def start_date() -> date:
    return date(2025, 1, 1)


@pytest.fixture
def make_debt():
    """Factory for DebtInput with string amounts."""

    def _make(
        id: str = "debt-1",
        balance: str = "5000",
        rate: str = "18",
        minimum: str = "150",
        additional: str = "0",
        loan_type: LoanType = LoanType.REVOLVING,
        compounding: CompoundingFrequency = CompoundingFrequency.MONTHLY,
        name: str | None = None,
        type: str = "credit_card",
    ) -> DebtInput:
        return DebtInput(
            id=id,
            name=name or id,
            remaining_balance=Decimal(balance),
            minimum_payment=Decimal(minimum),
            additional_monthly_payment=Decimal(additional),
            interest_rate=Decimal(rate),
            type=type,
            loan_type=loan_type,
            compounding_frequency=compounding,
        )

    return _make


@pytest.fixture
def household_debts(make_debt) -> list[DebtInput]:
    """Store card, credit card and car loan. Both methods rank them the same way."""
    return [
        make_debt("visa", balance="4200", rate="22.99", minimum="120", name="Visa"),
        make_debt(
            "car",
            balance="9800",
            rate="6.5",
            minimum="310",
            loan_type=LoanType.INSTALLMENT,
            name="Car Loan",
            type="auto_loan",
        ),
        make_debt("store", balance="650", rate="26.99", minimum="35", name="Store Card"),
    ]


@pytest.fixture
def diverging_debts(make_debt) -> list[DebtInput]:
    """Smaller balance carries the lower rate, so the methods pick different targets."""
    return [
        make_debt("small", balance="500", rate="5", minimum="15", name="Small Low Rate"),
        make_debt("large", balance="3000", rate="25", minimum="90", name="Large High Rate"),
    ]
