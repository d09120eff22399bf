"""Interest accrual model.

Pure functions: Decimal in, Decimal out. No I/O.

Every charge is computed for one simulated month regardless of how often
payments are made. Rates are annual percentages (18.99 means 18.99%).
"""

from decimal import Decimal, ROUND_HALF_UP

from debtplan.models.debt import CompoundingFrequency, DebtInput, LoanType

TWO_PLACES = Decimal("0.01")
DAYS_PER_YEAR = Decimal("365")
MONTHS_PER_YEAR = Decimal("12")
DEFAULT_BILLING_CYCLE_DAYS = 30


def monthly_equivalent_rate(
    annual_rate_percent: Decimal,
    loan_type: LoanType = LoanType.REVOLVING,
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.MONTHLY,
    billing_cycle_days: int = DEFAULT_BILLING_CYCLE_DAYS,
) -> Decimal:
    """Effective rate charged for one simulated month."""
    if annual_rate_percent <= 0:
        return Decimal("0")

    rate = annual_rate_percent / 100

    # Installment loans always use simple monthly interest
    if loan_type == LoanType.INSTALLMENT:
        return rate / MONTHS_PER_YEAR

    if compounding_frequency == CompoundingFrequency.DAILY:
        days = billing_cycle_days if billing_cycle_days > 0 else DEFAULT_BILLING_CYCLE_DAYS
        daily_rate = rate / DAYS_PER_YEAR
        return (1 + daily_rate) ** days - 1

    if compounding_frequency in (CompoundingFrequency.QUARTERLY, CompoundingFrequency.ANNUALLY):
        periods = Decimal(compounding_frequency.periods_per_year)
        periodic_rate = rate / periods
        # Compound the periodic rate down to a one-month step
        return (1 + periodic_rate) ** (periods / MONTHS_PER_YEAR) - 1

    return rate / MONTHS_PER_YEAR


def period_interest(
    balance: Decimal,
    annual_rate_percent: Decimal,
    loan_type: LoanType = LoanType.REVOLVING,
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.MONTHLY,
    billing_cycle_days: int = DEFAULT_BILLING_CYCLE_DAYS,
) -> Decimal:
    """Unrounded interest for one month on the given balance."""
    if balance <= 0:
        return Decimal("0")
    return balance * monthly_equivalent_rate(
        annual_rate_percent, loan_type, compounding_frequency, billing_cycle_days
    )


def posted_interest(
    balance: Decimal,
    annual_rate_percent: Decimal,
    loan_type: LoanType = LoanType.REVOLVING,
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.MONTHLY,
    billing_cycle_days: int = DEFAULT_BILLING_CYCLE_DAYS,
) -> Decimal:
    """Interest charge as posted to the ledger, rounded to cents."""
    return period_interest(
        balance, annual_rate_percent, loan_type, compounding_frequency, billing_cycle_days
    ).quantize(TWO_PLACES, ROUND_HALF_UP)


def debt_interest(debt: DebtInput, balance: Decimal) -> Decimal:
    """Posted monthly interest for a debt at its current running balance."""
    return posted_interest(
        balance,
        debt.interest_rate,
        debt.loan_type,
        debt.compounding_frequency,
        debt.billing_cycle_days,
    )
