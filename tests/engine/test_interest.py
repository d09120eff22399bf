from decimal import Decimal

import pytest

from debtplan.engine.interest import (
    debt_interest,
    monthly_equivalent_rate,
    period_interest,
    posted_interest,
)
from debtplan.models.debt import CompoundingFrequency, LoanType


class TestSimpleMonthlyInterest:
    def test_installment(self):
        # 10000 * 6% / 12 = $50
        assert posted_interest(Decimal("10000"), Decimal("6"), LoanType.INSTALLMENT) == Decimal("50.00")

    def test_revolving_monthly(self):
        # 5000 * 18% / 12 = $75
        assert posted_interest(Decimal("5000"), Decimal("18")) == Decimal("75.00")

    def test_installment_ignores_compounding(self):
        simple = posted_interest(Decimal("10000"), Decimal("6"), LoanType.INSTALLMENT)
        daily = posted_interest(
            Decimal("10000"), Decimal("6"), LoanType.INSTALLMENT, CompoundingFrequency.DAILY
        )
        assert daily == simple


class TestCompoundedInterest:
    def test_daily_compounding(self):
        # 36.5% APR = 0.1% per day; (1.001)^30 - 1 = 3.0439%
        interest = posted_interest(
            Decimal("1000"), Decimal("36.5"), LoanType.REVOLVING, CompoundingFrequency.DAILY, 30
        )
        assert interest == Decimal("30.44")

    def test_daily_longer_cycle_costs_more(self):
        short = period_interest(
            Decimal("1000"), Decimal("20"), LoanType.REVOLVING, CompoundingFrequency.DAILY, 28
        )
        long = period_interest(
            Decimal("1000"), Decimal("20"), LoanType.REVOLVING, CompoundingFrequency.DAILY, 31
        )
        assert long > short

    def test_quarterly_compounding(self):
        # 12% APR, 3% per quarter compounded down to one month: 1.03^(1/3) - 1 = 0.990%
        interest = posted_interest(
            Decimal("1000"), Decimal("12"), LoanType.REVOLVING, CompoundingFrequency.QUARTERLY
        )
        assert interest == Decimal("9.90")

    def test_annual_compounding(self):
        # 1.12^(1/12) - 1 = 0.9489%
        interest = posted_interest(
            Decimal("1200"), Decimal("12"), LoanType.REVOLVING, CompoundingFrequency.ANNUALLY
        )
        assert interest == Decimal("11.39")

    def test_less_frequent_compounding_is_cheaper(self):
        rates = [
            monthly_equivalent_rate(Decimal("18"), LoanType.REVOLVING, freq)
            for freq in (
                CompoundingFrequency.MONTHLY,
                CompoundingFrequency.QUARTERLY,
                CompoundingFrequency.ANNUALLY,
            )
        ]
        assert rates[0] > rates[1] > rates[2]


class TestEdgeCases:
    @pytest.mark.parametrize("frequency", list(CompoundingFrequency))
    @pytest.mark.parametrize("loan_type", list(LoanType))
    def test_zero_rate(self, loan_type, frequency):
        assert period_interest(Decimal("5000"), Decimal("0"), loan_type, frequency) == Decimal("0")

    def test_zero_balance(self):
        assert posted_interest(Decimal("0"), Decimal("24.99")) == Decimal("0")

    def test_idempotent(self):
        args = (Decimal("3456.78"), Decimal("19.99"), LoanType.REVOLVING, CompoundingFrequency.DAILY, 31)
        assert period_interest(*args) == period_interest(*args)

    def test_posted_is_rounded_to_cents(self):
        # 1234.56 * 17% / 12 = 17.4896
        interest = posted_interest(Decimal("1234.56"), Decimal("17"))
        assert interest == Decimal("17.49")
        assert interest.as_tuple().exponent == -2

    def test_debt_interest_uses_debt_terms(self, make_debt):
        debt = make_debt(balance="5000", rate="6", loan_type=LoanType.INSTALLMENT)
        assert debt_interest(debt, Decimal("2400")) == Decimal("12.00")
