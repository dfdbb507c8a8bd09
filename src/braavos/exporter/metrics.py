"""Prometheus gauges for account summaries."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Gauge, generate_latest

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from decimal import Decimal

    from braavos.portfolio.models import AccountSummary, SwapPositionView

_INVALID_METRIC_CHARS = re.compile(r"[^a-zA-Z0-9_]")

POSITION_FIELDS = ("cur_price", "avg_price", "pos", "pnl_u", "value", "change")

DETAIL_SUFFIX = "acc_detail"
TOTAL_SUFFIXES = (
    "acc",
    "pnl",
    "acc_long",
    "acc_long_pnl",
    "acc_short",
    "acc_short_pnl",
    "fra_pnl",
)
SIDE_SUFFIXES = ("long", "short")
METRIC_SUFFIXES = (DETAIL_SUFFIX, *TOTAL_SUFFIXES, *SIDE_SUFFIXES)


def metric_prefix(account_name: str) -> str:
    """Account name usable as a metric name prefix (`[a-zA-Z0-9_]`, not starting with a digit)."""
    prefix = _INVALID_METRIC_CHARS.sub("_", account_name)
    if not prefix or prefix[0].isdigit():
        prefix = f"_{prefix}"
    return prefix


def metric_names(account_name: str) -> frozenset[str]:
    """Every gauge name registered for one account."""
    prefix = metric_prefix(account_name)
    return frozenset(f"{prefix}_{suffix}" for suffix in METRIC_SUFFIXES)


def check_metric_names(account_names: Iterable[str]) -> None:
    """
    Ensure no two accounts register the same gauge name.

    Distinct names can still collide: `main` + `acc_long` and `main_acc` + `long` both give
    `main_acc_long`, and `desk-1` and `desk_1` share the prefix `desk_1`.

    Raises:
        ValueError: Naming the colliding gauges and the accounts that produce them.
    """
    owners: dict[str, str] = {}
    clashes: list[str] = []
    for name in account_names:
        for metric in sorted(metric_names(name)):
            other = owners.setdefault(metric, name)
            if other != name:
                clashes.append(f"{metric} ({other!r}, {name!r})")
    if clashes:
        raise ValueError(f"account names produce clashing metric names: {', '.join(clashes)}")


def _position_values(view: SwapPositionView) -> dict[str, Decimal]:
    return {
        "cur_price": view.cur_price,
        "avg_price": view.avg_price,
        "pos": view.position_amt,
        "pnl_u": view.pnl_u,
        "value": view.pos_u,
        "change": view.change,
    }


def register_account(registry: CollectorRegistry, name: str, summary: AccountSummary) -> None:
    """Add the gauges of one account to `registry`."""
    prefix = metric_prefix(name)
    swaps = summary.um_swap_summary

    detail = Gauge(
        f"{prefix}_{DETAIL_SUFFIX}",
        f"Wallet-level valuation of account {name}",
        ["field"],
        registry=registry,
    )
    detail.labels(field="acc_equity").set(float(summary.account_equity))
    detail.labels(field="negative_balance").set(float(summary.negative_balance))
    detail.labels(field="usdt_equity").set(float(summary.usdt_equity))
    detail.labels(field="account_pnl").set(float(summary.account_pnl))

    totals = {
        "acc": ("USD-margined swap notional", swaps.balance),
        "pnl": ("USD-margined swap unrealized PnL", swaps.pnl),
        "acc_long": ("Long swap notional", swaps.long_balance),
        "acc_long_pnl": ("Long swap unrealized PnL", swaps.long_pnl),
        "acc_short": ("Short swap notional", swaps.short_balance),
        "acc_short_pnl": ("Short swap unrealized PnL", swaps.short_pnl),
        "fra_pnl": ("Funding-rate-arbitrage swap unrealized PnL", swaps.fra_pnl),
    }
    for suffix in TOTAL_SUFFIXES:
        description, value = totals[suffix]
        Gauge(f"{prefix}_{suffix}", description, registry=registry).set(float(value))

    sides = {
        side: Gauge(
            f"{prefix}_{side}",
            f"{side.capitalize()} swap positions of account {name}",
            ["field", "symbol"],
            registry=registry,
        )
        for side in SIDE_SUFFIXES
    }
    for view in swaps.positions:
        gauge = sides[view.side]
        for field, value in _position_values(view).items():
            gauge.labels(field=field, symbol=view.symbol).set(float(value))


def render_metrics(summaries: Mapping[str, AccountSummary]) -> tuple[bytes, str]:
    """
    Render account summaries in the Prometheus text exposition format.

    A new registry is built for every call, so concurrent renders never share gauges and
    accounts missing from `summaries` simply vanish from the output.

    Returns:
        The exposition payload and its content type.

    Raises:
        ValueError: If two account names produce the same gauge name.
    """
    check_metric_names(summaries)
    registry = CollectorRegistry(auto_describe=True)
    for name, summary in summaries.items():
        register_account(registry, name, summary)
    return generate_latest(registry), CONTENT_TYPE_LATEST
