"""CLI for the payoff planner: loads a household snapshot and prints a terminal report.

Usage:
    python -m debtplan.cli household.json
    python -m debtplan.cli household.json --method snowball --extra 250 --frequency biweekly
    python -m debtplan.cli household.json --compare
    python -m debtplan.cli household.json --api-url http://localhost:8000

The snapshot is a JSON object with optional "accounts", "bills", "debts",
"household_settings" and "debt_settings" keys (see debtplan.data.sources).
"""

import argparse
import asyncio
import json
import logging
import sys
from decimal import Decimal
from pathlib import Path

import httpx

from debtplan.api.serializers import compare_methods_response, strategy_to_response
from debtplan.config import settings
from debtplan.data.sources import (
    StrategySettings,
    resolve_strategy_settings,
    to_debt_inputs,
    unify_debt_sources,
)
from debtplan.engine.simulator import calculate_payoff_strategy
from debtplan.models.debt import DebtInput

logger = logging.getLogger(__name__)


# ── Helpers ──────────────────────────────────────────────────────────────────

def _dollar(v) -> str:
    return f"${float(v):,.2f}"


def _header(title: str) -> None:
    print(f"\n{'=' * 64}")
    print(f"  {title}")
    print(f"{'=' * 64}")


def load_snapshot(path: Path) -> tuple[list[DebtInput], StrategySettings]:
    data = json.loads(path.read_text())
    sources = unify_debt_sources(
        accounts=data.get("accounts", []),
        bills=data.get("bills", []),
        debts=data.get("debts", []),
    )
    strategy = resolve_strategy_settings(data.get("household_settings"), data.get("debt_settings"))
    return to_debt_inputs(sources), strategy


def _debt_payload(debt: DebtInput) -> dict:
    return {
        "id": debt.id,
        "name": debt.name,
        "remaining_balance": str(debt.remaining_balance),
        "minimum_payment": str(debt.minimum_payment),
        "additional_monthly_payment": str(debt.additional_monthly_payment),
        "interest_rate": str(debt.interest_rate),
        "type": debt.type,
        "loan_type": debt.loan_type.value,
        "compounding_frequency": debt.compounding_frequency.value,
        "billing_cycle_days": debt.billing_cycle_days,
    }


# ── Report sections ──────────────────────────────────────────────────────────

def print_strategy(data: dict, months: int = 3) -> None:
    _header(f"{data['method'].title()} Plan ({data['payment_frequency']} payments)")
    if not data.get("has_debts", True):
        print("  No debts to pay off.")
        return

    print(f"  Months to Debt-Free:  {data['total_months']}")
    print(f"  Debt-Free Date:       {data['debt_free_date'] or 'never (payments too low)'}")
    print(f"  Total Interest:       {_dollar(data['total_interest_paid'])}")
    print(f"  Total Paid:           {_dollar(data['total_paid'])}")
    if not data["is_complete"]:
        print(f"  Still Owed:           {_dollar(data['remaining_balance'])}")

    nxt = data.get("next_recommended_payment")
    if nxt:
        print(f"  Focus This Month:     {nxt['debt_name']} ({_dollar(nxt['recommended_payment'])})")

    print()
    for entry in data["payoff_order"]:
        print(
            f"  {entry['order']:>2}. {entry['debt_name']:<24} "
            f"{_dollar(entry['original_balance']):>12}  "
            f"paid off month {entry['months_to_payoff']:>3} ({entry['payoff_date']})"
        )

    for month in range(1, months + 1):
        rows = [p for p in data["rolldown_payments"] if p["month"] == month]
        if not rows:
            break
        print(f"\n  Month {month}:")
        for p in rows:
            focus = " *" if p["is_focus_debt"] else ""
            print(
                f"    {p['debt_name']:<24} pay {_dollar(p['payment_amount']):>11}"
                f"  interest {_dollar(p['interest_portion']):>9}"
                f"  left {_dollar(p['remaining_balance_after']):>12}{focus}"
            )


def print_comparison(data: dict) -> None:
    if not data.get("has_debts", True):
        _header("Snowball vs Avalanche")
        print("  No debts to pay off.")
        return

    print_strategy(data["snowball"], months=0)
    print_strategy(data["avalanche"], months=0)
    _header("Snowball vs Avalanche")
    print(f"  Interest Saved by Avalanche:  {_dollar(data['interest_saved'])}")
    print(f"  Months Saved by Avalanche:    {data['months_saved']}")
    print(f"  Cheaper:                      {data['cheaper_method'] or 'tie'}")
    print(f"  Faster:                       {data['faster_method'] or 'tie'}")
    print(f"  Recommended:                  {data['recommended_method']}")


# ── Main ─────────────────────────────────────────────────────────────────────

def run_local(debts: list[DebtInput], method: str, extra: Decimal, frequency: str, compare: bool) -> dict:
    if compare:
        return compare_methods_response(debts, extra, frequency, ()).model_dump(mode="json")
    result = calculate_payoff_strategy(
        debts, extra, method, frequency, max_months=settings.max_simulation_months
    )
    return strategy_to_response(result).model_dump(mode="json")


async def run_remote(
    api_url: str, debts: list[DebtInput], method: str, extra: Decimal, frequency: str, compare: bool
) -> dict:
    params = {
        "method": method,
        "extra_payment": str(extra),
        "payment_frequency": frequency,
        "compare": str(compare).lower(),
    }
    payload = {"debts": [_debt_payload(d) for d in debts]}

    async with httpx.AsyncClient(timeout=60) as client:
        try:
            resp = await client.post(f"{api_url}/api/v1/debts/strategy", params=params, json=payload)
        except httpx.ConnectError:
            print(f"Error: Could not connect to API at {api_url}", file=sys.stderr)
            print("Is the server running? Start with: uvicorn debtplan.api.app:app --reload", file=sys.stderr)
            sys.exit(1)

    if resp.status_code != 200:
        print(f"Error: API returned {resp.status_code}", file=sys.stderr)
        print(f"  {resp.text}", file=sys.stderr)
        sys.exit(1)
    return resp.json()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Debt payoff plan for a household snapshot")
    parser.add_argument("snapshot", type=Path, help="Household snapshot JSON file")
    parser.add_argument("--method", choices=["snowball", "avalanche"], help="Payoff method (default: saved setting)")
    parser.add_argument("--extra", type=Decimal, help="Extra payment per period (default: saved setting)")
    parser.add_argument(
        "--frequency",
        choices=["weekly", "biweekly", "monthly", "quarterly"],
        help="Payment frequency (default: saved setting)",
    )
    parser.add_argument("--compare", action="store_true", help="Compare snowball and avalanche")
    parser.add_argument("--months", type=int, default=3, help="Months of the payment table to print")
    parser.add_argument("--api-url", help="Send the request to a running API instead of computing locally")
    return parser


async def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=settings.log_level)

    if not args.snapshot.exists():
        print(f"Error: snapshot not found: {args.snapshot}", file=sys.stderr)
        sys.exit(1)

    debts, saved = load_snapshot(args.snapshot)
    method = args.method or saved.preferred_method.value
    extra = args.extra if args.extra is not None else saved.extra_monthly_payment
    frequency = args.frequency or saved.payment_frequency.value
    logger.debug("Loaded %d debts from %s", len(debts), args.snapshot)

    if args.api_url:
        data = await run_remote(args.api_url, debts, method, extra, frequency, args.compare)
    else:
        data = run_local(debts, method, extra, frequency, args.compare)

    if args.compare:
        print_comparison(data)
    else:
        print_strategy(data, months=args.months)
    print()


if __name__ == "__main__":
    asyncio.run(main())
