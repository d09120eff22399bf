"""Payoff strategy routes: one method, or snowball vs avalanche."""

from decimal import Decimal

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import JSONResponse

from debtplan.api.schemas import DebtInputSchema, LumpSumSchema, StrategyRequest
from debtplan.api.serializers import compare_methods_response, strategy_to_response
from debtplan.config import settings
from debtplan.engine.simulator import calculate_payoff_strategy
from debtplan.models.debt import CompoundingFrequency, DebtInput, LoanType, LumpSumPayment

router = APIRouter(prefix="/api/v1/debts", tags=["strategy"])


def build_debts(debts: list[DebtInputSchema]) -> list[DebtInput]:
    """Convert request debts to engine inputs. Unknown enum values raise ValueError."""
    return [
        DebtInput(
            id=d.id,
            name=d.name,
            remaining_balance=d.remaining_balance,
            minimum_payment=d.minimum_payment,
            additional_monthly_payment=d.additional_monthly_payment,
            interest_rate=d.interest_rate,
            type=d.type,
            loan_type=LoanType(d.loan_type),
            compounding_frequency=CompoundingFrequency(d.compounding_frequency),
            billing_cycle_days=d.billing_cycle_days,
            color=d.color,
            icon=d.icon,
        )
        for d in debts
    ]


def build_lump_sums(lump_sums: list[LumpSumSchema]) -> tuple[LumpSumPayment, ...]:
    return tuple(LumpSumPayment(month=ls.month, amount=ls.amount) for ls in lump_sums)


@router.post("/strategy", response_model=None)
async def payoff_strategy(
    req: StrategyRequest,
    method: str | None = Query(None, description="snowball or avalanche"),
    extra_payment: Decimal = Query(Decimal("0"), ge=0),
    payment_frequency: str | None = Query(None, description="weekly, biweekly, monthly or quarterly"),
    compare: bool = Query(False, description="Return snowball and avalanche side by side"),
) -> JSONResponse:
    """Simulate the household's debts to zero under a payoff method.

    With compare=true the body is a MethodComparisonResponse, otherwise a
    StrategyResponse.
    """
    method = method or settings.default_payoff_method
    payment_frequency = payment_frequency or settings.default_payment_frequency

    try:
        debts = build_debts(req.debts)
        lump_sums = build_lump_sums(req.lump_sum_payments)
        if compare:
            response = compare_methods_response(debts, extra_payment, payment_frequency, lump_sums)
        else:
            response = strategy_to_response(calculate_payoff_strategy(
                debts,
                extra_payment,
                method,
                payment_frequency,
                lump_sums,
                max_months=settings.max_simulation_months,
            ))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return JSONResponse(response.model_dump(mode="json"))
