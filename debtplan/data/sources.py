"""Debt-source adapter: credit accounts, debt bills and standalone debts → DebtInput.

Records arrive as plain mappings (rows already loaded by the caller); nothing
here touches a database. Missing or null fields fall back to safe defaults.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping

from debtplan.config import settings
from debtplan.models.debt import (
    CompoundingFrequency,
    DebtInput,
    LoanType,
    PaymentFrequency,
    PayoffMethod,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENTS = Decimal("100")
CREDIT_ACCOUNT_TYPES = ("credit", "line_of_credit")


@dataclass(frozen=True)
class UnifiedDebtSource:
    """A DebtInput plus where it came from and whether the strategy uses it."""

    debt: DebtInput
    source: str  # "account", "bill" or "debt"
    source_type: str
    original_balance: Decimal
    include_in_payoff_strategy: bool = True


@dataclass(frozen=True)
class StrategySettings:
    extra_monthly_payment: Decimal = ZERO
    preferred_method: PayoffMethod = PayoffMethod.AVALANCHE
    payment_frequency: PaymentFrequency = PaymentFrequency.MONTHLY
    debt_strategy_enabled: bool = False


def _decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    if value is None or value == "":
        return default
    try:
        parsed = Decimal(str(value))
    except InvalidOperation:
        parsed = None
    if parsed is None or not parsed.is_finite():
        logger.warning("Unparseable amount %r, using %s", value, default)
        return default
    return parsed


def _cycle_days(value: Any) -> int:
    """Whole positive number of days, else the configured default."""
    days = _decimal(value)
    if days <= 0 or days != days.to_integral_value():
        return settings.default_billing_cycle_days
    return int(days)


def _from_cents(value: Any) -> Decimal:
    return _decimal(value) / CENTS


def _additional_payment(record: Mapping[str, Any], minimum: Decimal) -> Decimal:
    """Explicit additional payment, else whatever is budgeted above the minimum."""
    explicit = record.get("additional_monthly_payment")
    if explicit is not None:
        return max(_decimal(explicit), ZERO)
    budgeted = _decimal(record.get("budgeted_monthly_payment"))
    if budgeted > 0:
        return max(budgeted - minimum, ZERO)
    return ZERO


def _compounding(value: Any) -> CompoundingFrequency:
    try:
        return CompoundingFrequency(value)
    except ValueError:
        return CompoundingFrequency.MONTHLY


def normalize_method(value: Any) -> PayoffMethod | None:
    if isinstance(value, PayoffMethod):
        return value
    try:
        return PayoffMethod(value)
    except ValueError:
        return None


def normalize_frequency(value: Any) -> PaymentFrequency | None:
    if isinstance(value, PaymentFrequency):
        return value
    try:
        return PaymentFrequency(value)
    except ValueError:
        return None


def is_valid_payoff_method(value: Any) -> bool:
    return normalize_method(value) is not None


def is_valid_payment_frequency(value: Any) -> bool:
    return normalize_frequency(value) is not None


def from_credit_account(account: Mapping[str, Any]) -> UnifiedDebtSource:
    """Credit card or line of credit. Balances may be stored negative, in cents."""
    if account.get("current_balance_cents") is not None:
        balance = abs(_from_cents(account["current_balance_cents"]))
    else:
        balance = abs(_decimal(account.get("current_balance")))

    minimum = _decimal(account.get("minimum_payment_amount"))
    if account.get("credit_limit_cents") is not None:
        original = _from_cents(account["credit_limit_cents"])
    else:
        original = _decimal(account.get("credit_limit"), balance)

    # Variable-rate cards accrue daily; fixed-rate cards are modelled monthly
    compounding = (
        CompoundingFrequency.DAILY
        if account.get("interest_type") == "variable"
        else CompoundingFrequency.MONTHLY
    )
    account_type = account.get("type") or "credit"

    debt = DebtInput(
        id=str(account["id"]),
        name=account.get("name") or "Credit account",
        remaining_balance=balance,
        minimum_payment=minimum,
        additional_monthly_payment=_additional_payment(account, minimum),
        interest_rate=_decimal(account.get("interest_rate")),
        type=account_type,
        loan_type=LoanType.REVOLVING,
        compounding_frequency=compounding,
        billing_cycle_days=settings.default_billing_cycle_days,
        color=account.get("color"),
        icon=account.get("icon"),
    )
    return UnifiedDebtSource(
        debt=debt,
        source="account",
        source_type=account_type,
        original_balance=original,
        include_in_payoff_strategy=account.get("include_in_payoff_strategy") is not False,
    )


def from_debt_bill(bill: Mapping[str, Any]) -> UnifiedDebtSource:
    """A recurring bill flagged as debt; always treated as an installment loan."""
    balance = _decimal(bill.get("remaining_balance"))
    minimum = _decimal(bill.get("minimum_payment"))
    debt_type = bill.get("debt_type") or "other"

    debt = DebtInput(
        id=str(bill["id"]),
        name=bill.get("name") or "Bill",
        remaining_balance=balance,
        minimum_payment=minimum,
        additional_monthly_payment=_additional_payment(bill, minimum),
        interest_rate=_decimal(bill.get("interest_rate")),
        type=debt_type,
        loan_type=LoanType.INSTALLMENT,
        compounding_frequency=_compounding(bill.get("interest_type")),
        billing_cycle_days=settings.default_billing_cycle_days,
        color=bill.get("color"),
    )
    return UnifiedDebtSource(
        debt=debt,
        source="bill",
        source_type=debt_type,
        original_balance=_decimal(bill.get("original_balance"), balance) or balance,
        include_in_payoff_strategy=bill.get("include_in_payoff_strategy") is not False,
    )


def from_standalone_debt(record: Mapping[str, Any]) -> UnifiedDebtSource:
    """A manually tracked debt. Credit cards revolve unless a loan type says otherwise."""
    balance = _decimal(record.get("remaining_balance"))
    debt_type = record.get("type") or "other"
    inferred = LoanType.REVOLVING if debt_type == "credit_card" else LoanType.INSTALLMENT
    try:
        loan_type = LoanType(record["loan_type"]) if record.get("loan_type") else inferred
    except ValueError:
        loan_type = inferred

    debt = DebtInput(
        id=str(record["id"]),
        name=record.get("name") or "Debt",
        remaining_balance=balance,
        minimum_payment=_decimal(record.get("minimum_payment")),
        additional_monthly_payment=max(_decimal(record.get("additional_monthly_payment")), ZERO),
        interest_rate=_decimal(record.get("interest_rate")),
        type=debt_type,
        loan_type=loan_type,
        compounding_frequency=_compounding(record.get("compounding_frequency")),
        billing_cycle_days=_cycle_days(record.get("billing_cycle_days")),
        color=record.get("color"),
        icon=record.get("icon"),
    )
    return UnifiedDebtSource(
        debt=debt,
        source="debt",
        source_type=debt_type,
        original_balance=_decimal(record.get("original_amount"), balance) or balance,
        include_in_payoff_strategy=True,
    )


def unify_debt_sources(
    accounts: Iterable[Mapping[str, Any]] = (),
    bills: Iterable[Mapping[str, Any]] = (),
    debts: Iterable[Mapping[str, Any]] = (),
    include_zero_balances: bool = False,
) -> list[UnifiedDebtSource]:
    """Merge the three debt sources into one list.

    Only active credit-type accounts, active debt bills and active
    standalone debts are considered.
    """
    unified: list[UnifiedDebtSource] = []

    for account in accounts:
        if account.get("type") not in CREDIT_ACCOUNT_TYPES or account.get("is_active") is False:
            continue
        unified.append(from_credit_account(account))

    for bill in bills:
        if not bill.get("is_debt") or bill.get("is_active") is False:
            continue
        unified.append(from_debt_bill(bill))

    for record in debts:
        if (record.get("status") or "active") != "active":
            continue
        unified.append(from_standalone_debt(record))

    if not include_zero_balances:
        unified = [u for u in unified if u.debt.remaining_balance > 0]

    logger.debug("Unified %d debt sources", len(unified))
    return unified


def to_debt_inputs(sources: Iterable[UnifiedDebtSource], in_strategy_only: bool = True) -> list[DebtInput]:
    return [s.debt for s in sources if s.include_in_payoff_strategy or not in_strategy_only]


def resolve_strategy_settings(
    household: Mapping[str, Any] | None = None,
    legacy: Mapping[str, Any] | None = None,
) -> StrategySettings:
    """Household-level settings win; legacy per-user settings are the fallback."""
    default_method = normalize_method(settings.default_payoff_method) or PayoffMethod.AVALANCHE
    default_frequency = (
        normalize_frequency(settings.default_payment_frequency) or PaymentFrequency.MONTHLY
    )

    if household:
        return StrategySettings(
            extra_monthly_payment=_decimal(household.get("extra_monthly_payment")),
            preferred_method=normalize_method(household.get("debt_payoff_method")) or default_method,
            payment_frequency=normalize_frequency(household.get("payment_frequency")) or default_frequency,
            debt_strategy_enabled=bool(household.get("debt_strategy_enabled", False)),
        )

    if legacy:
        return StrategySettings(
            extra_monthly_payment=_decimal(legacy.get("extra_monthly_payment")),
            preferred_method=normalize_method(legacy.get("preferred_method")) or default_method,
            payment_frequency=normalize_frequency(legacy.get("payment_frequency")) or default_frequency,
            debt_strategy_enabled=False,
        )

    return StrategySettings(preferred_method=default_method, payment_frequency=default_frequency)
