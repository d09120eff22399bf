"""Strategy comparison: snowball vs avalanche, and named what-if scenarios.

Pure functions. Each comparison is a set of independent simulator runs.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Sequence

from debtplan.engine.simulator import (
    DEFAULT_MAX_MONTHS,
    calculate_payoff_strategy,
    coerce_frequency,
)
from debtplan.models.debt import (
    DebtInput,
    LumpSumPayment,
    PaymentFrequency,
    PayoffMethod,
    PayoffScenario,
)
from debtplan.models.results import (
    MethodComparison,
    ScenarioComparison,
    ScenarioRecommendation,
    ScenarioResult,
    StrategyResult,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def has_active_debts(debts: Sequence[DebtInput]) -> bool:
    return any(d.is_active for d in debts)


def _winner(saved: Decimal | int) -> PayoffMethod | None:
    """Method that comes out ahead given a snowball-minus-avalanche delta."""
    if saved > 0:
        return PayoffMethod.AVALANCHE
    if saved < 0:
        return PayoffMethod.SNOWBALL
    return None


def compare_payoff_methods(
    debts: Sequence[DebtInput],
    extra_payment: Decimal = ZERO,
    payment_frequency: PaymentFrequency | str = PaymentFrequency.MONTHLY,
    lump_sum_payments: Iterable[LumpSumPayment] = (),
    start_date: date | None = None,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> MethodComparison | None:
    """Run both methods on the same budget.

    Returns None when there is nothing to pay off.
    """
    frequency = coerce_frequency(payment_frequency)
    if not has_active_debts(debts):
        return None

    start = start_date or date.today()
    lump_sums = tuple(lump_sum_payments)
    snowball = calculate_payoff_strategy(
        debts, extra_payment, PayoffMethod.SNOWBALL, frequency, lump_sums, start, max_months
    )
    avalanche = calculate_payoff_strategy(
        debts, extra_payment, PayoffMethod.AVALANCHE, frequency, lump_sums, start, max_months
    )

    interest_saved = snowball.total_interest_paid - avalanche.total_interest_paid
    months_saved = snowball.total_months - avalanche.total_months

    # Avalanche when it wins on either axis, otherwise snowball for the quick wins
    if interest_saved > 0 or months_saved > 0:
        recommended = PayoffMethod.AVALANCHE
    else:
        recommended = PayoffMethod.SNOWBALL

    return MethodComparison(
        snowball=snowball,
        avalanche=avalanche,
        interest_saved=interest_saved,
        months_saved=months_saved,
        cheaper_method=_winner(interest_saved),
        faster_method=_winner(months_saved),
        recommended_method=recommended,
    )


def _normalized(value: Decimal, low: Decimal, high: Decimal) -> Decimal:
    if high == low:
        return ZERO
    return (value - low) / (high - low)


def recommend_scenarios(results: Sequence[ScenarioResult]) -> ScenarioRecommendation | None:
    """Pick the fastest, the cheapest and the best trade-off between the two.

    Scenarios that never reach zero are only considered when none do.
    Ties go to the earlier scenario.
    """
    if not results:
        return None

    candidates = [(i, r) for i, r in enumerate(results) if r.result.is_complete]
    if not candidates:
        candidates = list(enumerate(results))

    def months(item) -> Decimal:
        return Decimal(item[1].result.total_months)

    def interest(item) -> Decimal:
        return item[1].result.total_interest_paid

    fastest = min(candidates, key=lambda c: (months(c), interest(c), c[0]))
    cheapest = min(candidates, key=lambda c: (interest(c), months(c), c[0]))

    # Min-max normalize both axes so neither dominates, then sum
    lo_m, hi_m = min(months(c) for c in candidates), max(months(c) for c in candidates)
    lo_i, hi_i = min(interest(c) for c in candidates), max(interest(c) for c in candidates)
    balanced = min(
        candidates,
        key=lambda c: (
            _normalized(months(c), lo_m, hi_m) + _normalized(interest(c), lo_i, hi_i),
            c[0],
        ),
    )

    return ScenarioRecommendation(
        best_for_time=fastest[1].name,
        best_for_money=cheapest[1].name,
        most_balanced=balanced[1].name,
    )


def _vs_baseline(scenario: PayoffScenario, result: StrategyResult, baseline: StrategyResult) -> ScenarioResult:
    return ScenarioResult(
        scenario=scenario,
        result=result,
        interest_saved_vs_baseline=baseline.total_interest_paid - result.total_interest_paid,
        months_saved_vs_baseline=baseline.total_months - result.total_months,
    )


def calculate_scenario_comparison(
    debts: Sequence[DebtInput],
    scenarios: Sequence[PayoffScenario],
    start_date: date | None = None,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> ScenarioComparison | None:
    """Run every scenario and measure each against the first one (the current plan).

    Scenarios are assumed validated by the caller. Returns None when there
    are no debts or no scenarios.
    """
    if not scenarios or not has_active_debts(debts):
        return None

    start = start_date or date.today()
    runs = [
        calculate_payoff_strategy(
            debts,
            s.extra_monthly_payment,
            s.method,
            s.payment_frequency,
            s.lump_sum_payments,
            start,
            max_months,
        )
        for s in scenarios
    ]
    logger.debug("Compared %d scenarios", len(runs))

    baseline = runs[0]
    results = [_vs_baseline(s, r, baseline) for s, r in zip(scenarios, runs)]
    return ScenarioComparison(scenarios=results, recommendation=recommend_scenarios(results))
