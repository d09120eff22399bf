"""What-if scenario routes."""

from fastapi import APIRouter, HTTPException

from debtplan.api.routes.strategy import build_debts, build_lump_sums
from debtplan.api.schemas import (
    ScenarioComparisonRequest,
    ScenarioComparisonResponse,
    ScenarioRecommendationResponse,
    ScenarioResultResponse,
    ScenarioSchema,
)
from debtplan.api.serializers import money, strategy_to_response
from debtplan.config import settings
from debtplan.engine.comparison import calculate_scenario_comparison
from debtplan.models.debt import PaymentFrequency, PayoffMethod, PayoffScenario

router = APIRouter(prefix="/api/v1/debts", tags=["scenarios"])


def _build_scenario(s: ScenarioSchema) -> PayoffScenario:
    return PayoffScenario(
        name=s.name,
        extra_monthly_payment=s.extra_monthly_payment,
        method=PayoffMethod(s.method),
        payment_frequency=PaymentFrequency(s.payment_frequency),
        lump_sum_payments=build_lump_sums(s.lump_sum_payments),
    )


@router.post("/scenarios", response_model=ScenarioComparisonResponse)
async def compare_scenarios(req: ScenarioComparisonRequest):
    """Run each scenario and measure it against the first (the current plan)."""
    if len(req.scenarios) > settings.max_scenarios:
        raise HTTPException(
            status_code=400,
            detail=f"At most {settings.max_scenarios} scenarios can be compared at once",
        )

    try:
        debts = build_debts(req.debts)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    scenarios = [_build_scenario(s) for s in req.scenarios]
    comparison = calculate_scenario_comparison(
        debts, scenarios, max_months=settings.max_simulation_months
    )
    if comparison is None:
        return ScenarioComparisonResponse(has_debts=False)

    results = [
        ScenarioResultResponse(
            name=r.name,
            extra_monthly_payment=money(r.scenario.extra_monthly_payment),
            method=r.scenario.method.value,
            payment_frequency=r.scenario.payment_frequency.value,
            total_lump_sums=money(r.scenario.total_lump_sums),
            result=strategy_to_response(r.result),
            interest_saved_vs_baseline=money(r.interest_saved_vs_baseline),
            months_saved_vs_baseline=r.months_saved_vs_baseline,
        )
        for r in comparison.scenarios
    ]

    rec = comparison.recommendation
    recommendation = None
    if rec is not None:
        recommendation = ScenarioRecommendationResponse(
            best_for_time=rec.best_for_time,
            best_for_money=rec.best_for_money,
            most_balanced=rec.most_balanced,
        )

    return ScenarioComparisonResponse(scenarios=results, recommendation=recommendation)
