"""Month-by-month balance projection for debt reduction charts.

Derived entirely from a StrategyResult. No I/O.
"""

from decimal import Decimal

from dateutil.relativedelta import relativedelta

from debtplan.models.results import MonthlyBalance, StrategyResult


def balance_projection(result: StrategyResult, months: int | None = None) -> list[MonthlyBalance]:
    """Total and per-debt balances from month 0 through payoff.

    Month-end balances include interest on debts that received no
    payment that month.

    Args:
        result: A simulated strategy
        months: Optional cap on the number of months after month 0
    """
    horizon = result.total_months if months is None else min(months, result.total_months)
    snapshots = [result.starting_balances] + result.monthly_balances[:horizon]

    return [
        MonthlyBalance(
            month=month,
            month_date=result.start_date + relativedelta(months=month),
            total_balance=sum(balances.values(), Decimal("0")),
            by_debt=dict(balances),
        )
        for month, balances in enumerate(snapshots)
    ]
