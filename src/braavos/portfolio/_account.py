"""Wallet-level aggregation over every asset balance of an account."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

import structlog

from braavos.constants import QUOTE_ASSET
from braavos.portfolio._valuation import value_asset

if TYPE_CHECKING:
    from collections.abc import Iterable

    from braavos.api.models import AssetBalance
    from braavos.portfolio._quotes import QuoteIndex
    from braavos.portfolio.models import AccountPolicy

logger = structlog.get_logger()


@dataclass(frozen=True)
class BalanceTotals:
    """Running totals produced by `summarize_balances`."""

    usdt_equity: Decimal
    total_balance: Decimal
    swap_pnl: Decimal
    negative_balance: Decimal
    missing_quotes: tuple[str, ...] = ()

    @property
    def account_equity(self) -> Decimal:
        return self.total_balance + self.swap_pnl


def _usdt_swap_wallets(balance: AssetBalance) -> Decimal:
    # A wallet in debt adds nothing rather than reducing USDT equity
    return max(Decimal(0), balance.cm_wallet_balance) + max(Decimal(0), balance.um_wallet_balance)


def summarize_balances(
    balances: Iterable[AssetBalance],
    quotes: QuoteIndex,
    policy: AccountPolicy,
) -> BalanceTotals:
    """
    Accumulate equity, unrealized PnL and negative balance across all assets.

    Every record adds its raw `um_unrealized_pnl + cm_unrealized_pnl` to the PnL total. On
    top of that:
    - USDT adds its wallet balance and negative balance unconverted and sets `usdt_equity`.
    - The fee-discount asset adds nothing else when the account burns it for fees.
    - Any other asset adds its USDT valuation (see `value_asset`). A missing price zeroes
      that asset and is logged; the rest of the account is still valued.
    """
    swap_pnl = Decimal(0)
    total_balance = Decimal(0)
    negative_balance = Decimal(0)
    usdt_equity = Decimal(0)
    missing: list[str] = []

    for balance in balances:
        swap_pnl += balance.um_unrealized_pnl + balance.cm_unrealized_pnl

        if balance.asset == QUOTE_ASSET:
            usdt_equity = balance.cross_margin_free + _usdt_swap_wallets(balance)
            total_balance += balance.total_wallet_balance
            negative_balance += balance.negative_balance
            continue

        if balance.asset == policy.fee_discount_asset and policy.burn_fee_discount:
            continue

        valuation = value_asset(balance, quotes)
        if valuation.missing_quote:
            logger.error(
                "No ticker for asset; valued at zero",
                asset=balance.asset,
                pair=f"{balance.asset}{QUOTE_ASSET}",
            )
            missing.append(balance.asset)
            continue

        logger.debug(
            "Asset valued",
            asset=balance.asset,
            total_balance=str(valuation.total_balance),
            pnl=str(valuation.pnl),
            negative_balance=str(valuation.negative_balance),
        )
        total_balance += valuation.total_balance
        swap_pnl += valuation.pnl
        negative_balance += valuation.negative_balance

    return BalanceTotals(
        usdt_equity=usdt_equity,
        total_balance=total_balance,
        swap_pnl=swap_pnl,
        negative_balance=negative_balance,
        missing_quotes=tuple(missing),
    )
