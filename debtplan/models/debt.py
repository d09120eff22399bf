from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum


class PayoffMethod(Enum):
    SNOWBALL = "snowball"  # Smallest balance first
    AVALANCHE = "avalanche"  # Highest rate first


class PaymentFrequency(Enum):
    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"

    @property
    def payments_per_year(self) -> int:
        return {
            PaymentFrequency.WEEKLY: 52,
            PaymentFrequency.BIWEEKLY: 26,
            PaymentFrequency.MONTHLY: 12,
            PaymentFrequency.QUARTERLY: 4,
        }[self]


class LoanType(Enum):
    REVOLVING = "revolving"  # Credit cards, lines of credit
    INSTALLMENT = "installment"  # Auto, personal, mortgage


class CompoundingFrequency(Enum):
    DAILY = "daily"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"

    @property
    def periods_per_year(self) -> int:
        return {
            CompoundingFrequency.DAILY: 365,
            CompoundingFrequency.MONTHLY: 12,
            CompoundingFrequency.QUARTERLY: 4,
            CompoundingFrequency.ANNUALLY: 1,
        }[self]


@dataclass(frozen=True)
class DebtInput:
    id: str
    name: str
    remaining_balance: Decimal
    minimum_payment: Decimal
    interest_rate: Decimal  # Annual percent, e.g. Decimal("18.99")
    type: str = "other"  # credit_card, personal_loan, auto_loan, mortgage, ...
    additional_monthly_payment: Decimal = Decimal("0")  # Dedicated to this debt only
    loan_type: LoanType = LoanType.REVOLVING
    compounding_frequency: CompoundingFrequency = CompoundingFrequency.MONTHLY
    billing_cycle_days: int = 30
    color: str | None = None
    icon: str | None = None

    @property
    def scheduled_payment(self) -> Decimal:
        """Minimum plus the standing additional payment."""
        return self.minimum_payment + self.additional_monthly_payment

    @property
    def is_active(self) -> bool:
        return self.remaining_balance > 0


@dataclass(frozen=True)
class LumpSumPayment:
    month: int  # One-indexed simulated month
    amount: Decimal


@dataclass(frozen=True)
class PayoffScenario:
    name: str
    extra_monthly_payment: Decimal = Decimal("0")
    method: PayoffMethod = PayoffMethod.AVALANCHE
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    lump_sum_payments: tuple[LumpSumPayment, ...] = field(default_factory=tuple)

    @property
    def total_lump_sums(self) -> Decimal:
        return sum((ls.amount for ls in self.lump_sum_payments), Decimal("0"))
