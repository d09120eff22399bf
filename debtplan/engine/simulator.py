"""Single-strategy payoff simulator.

Pure computation. No I/O. DebtInput list in, StrategyResult out.

Each iteration is one calendar month:
    1. Post interest on every active debt (interest before payment).
    2. Re-rank active debts for the chosen method (rolldown).
    3. Pay every scheduled payment, then pour the extra pool into the
       highest-priority debt, cascading down the ranking.
    4. Record payments and mark paid-off debts; their scheduled payments
       join the pool from the next month on.
"""

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Sequence

from dateutil.relativedelta import relativedelta

from debtplan.engine.interest import debt_interest
from debtplan.models.debt import DebtInput, LumpSumPayment, PaymentFrequency, PayoffMethod
from debtplan.models.results import (
    PayoffOrderEntry,
    RecommendedPayment,
    RolldownPaymentEntry,
    StrategyResult,
)

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")
DEFAULT_MAX_MONTHS = 600  # 50 years


@dataclass
class _DebtState:
    """Running ledger for one debt inside a single simulation."""

    debt: DebtInput
    position: int  # Input order, last tie-breaker
    balance: Decimal
    original_balance: Decimal
    interest_paid: Decimal = ZERO
    month_interest: Decimal = ZERO
    month_payment: Decimal = ZERO
    month_from_pool: bool = False

    def pay(self, amount: Decimal) -> None:
        self.balance -= amount
        self.month_payment += amount


def coerce_method(value: PayoffMethod | str) -> PayoffMethod:
    """Accept an enum or its string value; ValueError otherwise."""
    if isinstance(value, PayoffMethod):
        return value
    return PayoffMethod(value)


def coerce_frequency(value: PaymentFrequency | str) -> PaymentFrequency:
    if isinstance(value, PaymentFrequency):
        return value
    return PaymentFrequency(value)


def to_cents(amount: Decimal) -> Decimal:
    """Clamp to zero and round to cents."""
    return max(Decimal(amount), ZERO).quantize(TWO_PLACES, ROUND_HALF_UP)


def monthly_amount(amount: Decimal, frequency: PaymentFrequency) -> Decimal:
    """Convert a per-payment amount to what is paid across one month.

    Biweekly pays 26 times a year, so one month carries 26/12 payments.
    """
    if frequency == PaymentFrequency.MONTHLY:
        return to_cents(amount)
    return to_cents(Decimal(amount) * frequency.payments_per_year / 12)


def _snowball_key(state: _DebtState) -> tuple:
    return (state.balance, state.position)


def _avalanche_key(state: _DebtState) -> tuple:
    return (-state.debt.interest_rate, state.balance, state.position)


def _priority_key(method: PayoffMethod):
    return _snowball_key if method == PayoffMethod.SNOWBALL else _avalanche_key


def prioritize(debts: Sequence[DebtInput], method: PayoffMethod | str) -> list[DebtInput]:
    """Active debts in the order the strategy would target them today."""
    method = coerce_method(method)
    states = [
        _DebtState(debt=d, position=i, balance=d.remaining_balance, original_balance=d.remaining_balance)
        for i, d in enumerate(debts)
        if d.is_active
    ]
    states.sort(key=_priority_key(method))
    return [s.debt for s in states]


def focus_debt_id(debts: Sequence[DebtInput], method: PayoffMethod | str) -> str:
    """Id of the debt receiving the extra pool first ("" when none are active)."""
    ordered = prioritize(debts, method)
    return ordered[0].id if ordered else ""


def _lump_sums_by_month(lump_sum_payments: Iterable[LumpSumPayment]) -> dict[int, Decimal]:
    by_month: dict[int, Decimal] = {}
    for ls in lump_sum_payments:
        if ls.month < 1 or ls.amount <= 0:
            continue
        by_month[ls.month] = by_month.get(ls.month, ZERO) + to_cents(ls.amount)
    return by_month


def calculate_payoff_strategy(
    debts: Sequence[DebtInput],
    extra_payment: Decimal = ZERO,
    method: PayoffMethod | str = PayoffMethod.AVALANCHE,
    payment_frequency: PaymentFrequency | str = PaymentFrequency.MONTHLY,
    lump_sum_payments: Iterable[LumpSumPayment] = (),
    start_date: date | None = None,
    max_months: int = DEFAULT_MAX_MONTHS,
) -> StrategyResult:
    """Simulate all debts to a zero balance under one payoff method.

    Args:
        debts: Snapshot of debts; zero-balance debts are ignored entirely
        extra_payment: Strategy-wide extra per payment, on top of minimums
        method: Snowball or avalanche ordering
        payment_frequency: Cadence of payments; amounts are per payment
        lump_sum_payments: One-time injections into a given month's pool
        start_date: Month zero for payoff dates (default today)
        max_months: Iteration ceiling for non-convergent inputs

    Returns a partial result with is_complete=False when the ceiling is hit.
    """
    method = coerce_method(method)
    frequency = coerce_frequency(payment_frequency)
    start = start_date or date.today()

    active: list[_DebtState] = []
    for i, debt in enumerate(debts):
        balance = to_cents(debt.remaining_balance)
        if balance > 0:
            active.append(_DebtState(debt=debt, position=i, balance=balance, original_balance=balance))

    if not active:
        return StrategyResult(
            method=method,
            payment_frequency=frequency,
            start_date=start,
            debt_free_date=start,
        )

    logger.debug(
        "Simulating %d debts: method=%s frequency=%s extra=%s",
        len(active), method.value, frequency.value, extra_payment,
    )

    states = list(active)
    extra = monthly_amount(extra_payment, frequency)
    lump_sums = _lump_sums_by_month(lump_sum_payments)
    key = _priority_key(method)
    first_target = min(states, key=key)  # Ranked on starting balances, same as prioritize()

    payoff_order: list[PayoffOrderEntry] = []
    rolldown: list[RolldownPaymentEntry] = []
    monthly_balances: list[dict[str, Decimal]] = []
    total_interest = ZERO
    total_paid = ZERO
    freed = ZERO  # Scheduled payments released by debts already paid off
    month = 0

    while active and month < max_months:
        month += 1

        for state in active:
            interest = debt_interest(state.debt, state.balance)
            state.balance += interest
            state.interest_paid += interest
            state.month_interest = interest
            state.month_payment = ZERO
            state.month_from_pool = False
            total_interest += interest

        # Balances moved, so the ranking has to be rebuilt every month
        active.sort(key=key)

        pool = extra + lump_sums.get(month, ZERO) + freed

        for state in active:
            scheduled = monthly_amount(state.debt.scheduled_payment, frequency)
            payment = min(scheduled, state.balance)
            pool += scheduled - payment
            state.pay(payment)

        for state in active:
            if pool <= 0:
                break
            if state.balance <= 0:
                continue
            payment = min(pool, state.balance)
            state.pay(payment)
            state.month_from_pool = True
            pool -= payment

        for state in active:
            if state.month_payment <= 0:
                continue
            interest_portion = min(state.month_payment, state.month_interest)
            rolldown.append(RolldownPaymentEntry(
                month=month,
                debt_id=state.debt.id,
                debt_name=state.debt.name,
                payment_amount=state.month_payment,
                principal_portion=state.month_payment - interest_portion,
                interest_portion=interest_portion,
                remaining_balance_after=state.balance,
                is_focus_debt=state.month_from_pool,
            ))
            total_paid += state.month_payment

        still_active: list[_DebtState] = []
        for state in active:
            if state.balance > 0:
                still_active.append(state)
                continue
            state.balance = ZERO
            freed += monthly_amount(state.debt.scheduled_payment, frequency)
            payoff_order.append(PayoffOrderEntry(
                debt_id=state.debt.id,
                debt_name=state.debt.name,
                order=len(payoff_order) + 1,
                original_balance=state.original_balance,
                interest_rate=state.debt.interest_rate,
                minimum_payment=state.debt.minimum_payment,
                months_to_payoff=month,
                total_interest_paid=state.interest_paid,
                payoff_date=start + relativedelta(months=month),
                type=state.debt.type,
                color=state.debt.color,
                icon=state.debt.icon,
            ))
        active = still_active
        monthly_balances.append({s.debt.id: s.balance for s in states})

    is_complete = not active
    remaining = sum((s.balance for s in active), ZERO)
    if not is_complete:
        logger.warning(
            "Payoff did not converge within %d months: %d debts still owe %s",
            max_months, len(active), remaining,
        )

    return StrategyResult(
        method=method,
        payment_frequency=frequency,
        start_date=start,
        payoff_order=payoff_order,
        rolldown_payments=rolldown,
        total_months=month,
        total_interest_paid=total_interest,
        total_paid=total_paid,
        debt_free_date=start + relativedelta(months=month) if is_complete else None,
        is_complete=is_complete,
        remaining_balance=remaining,
        next_recommended_payment=_first_month_target(first_target, rolldown, payoff_order, month),
        starting_balances={s.debt.id: s.original_balance for s in states},
        monthly_balances=monthly_balances,
    )


def _first_month_target(
    target: _DebtState,
    rolldown: list[RolldownPaymentEntry],
    payoff_order: list[PayoffOrderEntry],
    total_months: int,
) -> RecommendedPayment:
    """The top-ranked debt at the start and everything it receives in month one."""
    paid = sum(
        (p.payment_amount for p in rolldown if p.month == 1 and p.debt_id == target.debt.id),
        ZERO,
    )
    paid_off = next((e for e in payoff_order if e.debt_id == target.debt.id), None)
    return RecommendedPayment(
        debt_id=target.debt.id,
        debt_name=target.debt.name,
        current_balance=target.original_balance,
        recommended_payment=paid,
        months_until_payoff=paid_off.months_to_payoff if paid_off else total_months,
    )
