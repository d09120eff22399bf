"""Pydantic schemas for API request/response models.

Money is exchanged in dollars; responses are rounded to cents.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from debtplan.data.sources import is_valid_payment_frequency, is_valid_payoff_method


# ---- Request schemas ----

class DebtInputSchema(BaseModel):
    id: str
    name: str
    remaining_balance: Decimal = Field(..., ge=0)
    minimum_payment: Decimal = Field(Decimal("0"), ge=0)
    additional_monthly_payment: Decimal = Field(Decimal("0"), ge=0)
    interest_rate: Decimal = Field(Decimal("0"), ge=0, description="Annual percent, e.g. 18.99")
    type: str = "other"
    loan_type: str = "revolving"
    compounding_frequency: str = "monthly"
    billing_cycle_days: int = Field(30, gt=0)
    color: str | None = None
    icon: str | None = None


class LumpSumSchema(BaseModel):
    month: int = Field(..., ge=1, description="One-indexed simulated month")
    amount: Decimal = Field(..., gt=0)


class StrategyRequest(BaseModel):
    debts: list[DebtInputSchema] = []
    lump_sum_payments: list[LumpSumSchema] = []


class ScenarioSchema(BaseModel):
    name: str
    extra_monthly_payment: Decimal = Field(Decimal("0"), ge=0)
    method: str = "avalanche"
    payment_frequency: str = "monthly"
    lump_sum_payments: list[LumpSumSchema] = []

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Scenario name is required")
        return v.strip()

    @field_validator("method")
    @classmethod
    def valid_method(cls, v: str) -> str:
        if not is_valid_payoff_method(v):
            raise ValueError("Method must be 'snowball' or 'avalanche'")
        return v

    @field_validator("payment_frequency")
    @classmethod
    def valid_frequency(cls, v: str) -> str:
        if not is_valid_payment_frequency(v):
            raise ValueError("Payment frequency must be weekly, biweekly, monthly or quarterly")
        return v


class ScenarioComparisonRequest(BaseModel):
    debts: list[DebtInputSchema] = []
    scenarios: list[ScenarioSchema] = Field(..., min_length=1)


# ---- Response schemas ----

class PayoffOrderResponse(BaseModel):
    debt_id: str
    debt_name: str
    order: int
    original_balance: Decimal
    interest_rate: Decimal
    minimum_payment: Decimal
    months_to_payoff: int
    total_interest_paid: Decimal
    payoff_date: date
    type: str
    color: str | None = None
    icon: str | None = None


class RolldownPaymentResponse(BaseModel):
    month: int
    debt_id: str
    debt_name: str
    payment_amount: Decimal
    principal_portion: Decimal
    interest_portion: Decimal
    remaining_balance_after: Decimal
    is_focus_debt: bool


class RecommendedPaymentResponse(BaseModel):
    debt_id: str
    debt_name: str
    current_balance: Decimal
    recommended_payment: Decimal
    months_until_payoff: int


class StrategyResponse(BaseModel):
    has_debts: bool = True
    method: str
    payment_frequency: str
    total_months: int
    total_interest_paid: Decimal
    total_paid: Decimal
    debt_free_date: date | None = None
    is_complete: bool = True
    remaining_balance: Decimal = Decimal("0")
    payoff_order: list[PayoffOrderResponse] = []
    rolldown_payments: list[RolldownPaymentResponse] = []
    next_recommended_payment: RecommendedPaymentResponse | None = None


class MethodComparisonResponse(BaseModel):
    has_debts: bool = True
    snowball: StrategyResponse | None = None
    avalanche: StrategyResponse | None = None
    interest_saved: Decimal = Decimal("0")
    months_saved: int = 0
    cheaper_method: str | None = None
    faster_method: str | None = None
    recommended_method: str | None = None


class ScenarioResultResponse(BaseModel):
    name: str
    extra_monthly_payment: Decimal
    method: str
    payment_frequency: str
    total_lump_sums: Decimal
    result: StrategyResponse
    interest_saved_vs_baseline: Decimal
    months_saved_vs_baseline: int


class ScenarioRecommendationResponse(BaseModel):
    best_for_time: str
    best_for_money: str
    most_balanced: str


class ScenarioComparisonResponse(BaseModel):
    has_debts: bool = True
    scenarios: list[ScenarioResultResponse] = []
    recommendation: ScenarioRecommendationResponse | None = None
