from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from debtplan.models.debt import PaymentFrequency, PayoffMethod, PayoffScenario


@dataclass(frozen=True)
class PayoffOrderEntry:
    debt_id: str
    debt_name: str
    order: int  # 1 = first debt to reach zero
    original_balance: Decimal
    interest_rate: Decimal
    minimum_payment: Decimal
    months_to_payoff: int
    total_interest_paid: Decimal
    payoff_date: date
    type: str = "other"
    color: str | None = None
    icon: str | None = None


@dataclass(frozen=True)
class RolldownPaymentEntry:
    month: int
    debt_id: str
    debt_name: str
    payment_amount: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance_after: Decimal
    is_focus_debt: bool = False  # Received money from the extra pool this month


@dataclass(frozen=True)
class RecommendedPayment:
    """Where the money goes in month one."""

    debt_id: str
    debt_name: str
    current_balance: Decimal
    recommended_payment: Decimal
    months_until_payoff: int


@dataclass(frozen=True)
class StrategyResult:
    method: PayoffMethod
    payment_frequency: PaymentFrequency
    start_date: date
    payoff_order: list[PayoffOrderEntry] = field(default_factory=list)
    rolldown_payments: list[RolldownPaymentEntry] = field(default_factory=list)
    total_months: int = 0
    total_interest_paid: Decimal = Decimal("0")
    total_paid: Decimal = Decimal("0")
    debt_free_date: date | None = None
    is_complete: bool = True  # False when the iteration ceiling was hit
    remaining_balance: Decimal = Decimal("0")  # Still owed when incomplete
    next_recommended_payment: RecommendedPayment | None = None
    starting_balances: dict[str, Decimal] = field(default_factory=dict)  # By debt id, after rounding
    monthly_balances: list[dict[str, Decimal]] = field(default_factory=list)  # Month-end, index 0 = month 1

    @property
    def total_principal_paid(self) -> Decimal:
        return self.total_paid - self.total_interest_paid

    def payments_for_month(self, month: int) -> list[RolldownPaymentEntry]:
        return [p for p in self.rolldown_payments if p.month == month]

    def payments_for_debt(self, debt_id: str) -> list[RolldownPaymentEntry]:
        return [p for p in self.rolldown_payments if p.debt_id == debt_id]


@dataclass(frozen=True)
class MethodComparison:
    """Snowball vs avalanche on the same debts and budget."""

    snowball: StrategyResult
    avalanche: StrategyResult
    interest_saved: Decimal  # Snowball interest - avalanche interest
    months_saved: int  # Snowball months - avalanche months
    cheaper_method: PayoffMethod | None  # None on a tie
    faster_method: PayoffMethod | None
    recommended_method: PayoffMethod


@dataclass(frozen=True)
class ScenarioResult:
    scenario: PayoffScenario
    result: StrategyResult
    interest_saved_vs_baseline: Decimal = Decimal("0")  # Positive = cheaper than baseline
    months_saved_vs_baseline: int = 0  # Positive = faster than baseline

    @property
    def name(self) -> str:
        return self.scenario.name


@dataclass(frozen=True)
class ScenarioRecommendation:
    best_for_time: str
    best_for_money: str
    most_balanced: str


@dataclass(frozen=True)
class ScenarioComparison:
    scenarios: list[ScenarioResult] = field(default_factory=list)
    recommendation: ScenarioRecommendation | None = None

    @property
    def baseline(self) -> ScenarioResult | None:
        return self.scenarios[0] if self.scenarios else None


@dataclass(frozen=True)
class MonthlyBalance:
    month: int  # 0 = starting balances
    month_date: date
    total_balance: Decimal
    by_debt: dict[str, Decimal] = field(default_factory=dict)
