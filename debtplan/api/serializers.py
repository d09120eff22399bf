"""Engine results to response models.

Shared by the routes and the CLI; imports nothing from FastAPI.
"""

from decimal import Decimal, ROUND_HALF_UP

from debtplan.api.schemas import (
    MethodComparisonResponse,
    PayoffOrderResponse,
    RecommendedPaymentResponse,
    RolldownPaymentResponse,
    StrategyResponse,
)
from debtplan.config import settings
from debtplan.engine.comparison import compare_payoff_methods
from debtplan.models.results import StrategyResult

TWO_PLACES = Decimal("0.01")


def money(v: Decimal) -> Decimal:
    return v.quantize(TWO_PLACES, ROUND_HALF_UP)


def strategy_to_response(result: StrategyResult) -> StrategyResponse:
    """Convert engine StrategyResult to API response."""
    payoff_order = [
        PayoffOrderResponse(
            debt_id=e.debt_id,
            debt_name=e.debt_name,
            order=e.order,
            original_balance=money(e.original_balance),
            interest_rate=e.interest_rate,
            minimum_payment=money(e.minimum_payment),
            months_to_payoff=e.months_to_payoff,
            total_interest_paid=money(e.total_interest_paid),
            payoff_date=e.payoff_date,
            type=e.type,
            color=e.color,
            icon=e.icon,
        )
        for e in result.payoff_order
    ]

    rolldown = [
        RolldownPaymentResponse(
            month=p.month,
            debt_id=p.debt_id,
            debt_name=p.debt_name,
            payment_amount=money(p.payment_amount),
            principal_portion=money(p.principal_portion),
            interest_portion=money(p.interest_portion),
            remaining_balance_after=money(p.remaining_balance_after),
            is_focus_debt=p.is_focus_debt,
        )
        for p in result.rolldown_payments
    ]

    nxt = result.next_recommended_payment
    next_payment = None
    if nxt is not None:
        next_payment = RecommendedPaymentResponse(
            debt_id=nxt.debt_id,
            debt_name=nxt.debt_name,
            current_balance=money(nxt.current_balance),
            recommended_payment=money(nxt.recommended_payment),
            months_until_payoff=nxt.months_until_payoff,
        )

    return StrategyResponse(
        has_debts=bool(result.starting_balances),
        method=result.method.value,
        payment_frequency=result.payment_frequency.value,
        total_months=result.total_months,
        total_interest_paid=money(result.total_interest_paid),
        total_paid=money(result.total_paid),
        debt_free_date=result.debt_free_date,
        is_complete=result.is_complete,
        remaining_balance=money(result.remaining_balance),
        payoff_order=payoff_order,
        rolldown_payments=rolldown,
        next_recommended_payment=next_payment,
    )


def compare_methods_response(debts, extra_payment, payment_frequency, lump_sums) -> MethodComparisonResponse:
    comparison = compare_payoff_methods(
        debts,
        extra_payment,
        payment_frequency,
        lump_sums,
        max_months=settings.max_simulation_months,
    )
    if comparison is None:
        return MethodComparisonResponse(has_debts=False)

    return MethodComparisonResponse(
        snowball=strategy_to_response(comparison.snowball),
        avalanche=strategy_to_response(comparison.avalanche),
        interest_saved=money(comparison.interest_saved),
        months_saved=comparison.months_saved,
        cheaper_method=comparison.cheaper_method.value if comparison.cheaper_method else None,
        faster_method=comparison.faster_method.value if comparison.faster_method else None,
        recommended_method=comparison.recommended_method.value,
    )
