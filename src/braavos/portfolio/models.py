"""Account valuation data models.

These frozen dataclasses are produced fresh on every poll and represent:
- Valuation policy for one account (AccountPolicy)
- Per-symbol swap exposure (SwapPositionView)
- Swap totals split by side (SwapSummary)
- The consolidated account valuation (AccountSummary)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

from braavos.constants import DEFAULT_FEE_DISCOUNT_ASSET, QUOTE_ASSET

ZERO = Decimal(0)


@dataclass(frozen=True)
class AccountPolicy:
    """Valuation toggles for one account."""

    burn_fee_discount: bool = False
    """Exclude the fee-discount asset from equity (it is spent on trading fees)."""

    fra_base_assets: tuple[str, ...] = ()
    """Base assets hedged for funding-rate arbitrage (e.g. ("SOL", "ETH"))."""

    fee_discount_asset: str = DEFAULT_FEE_DISCOUNT_ASSET

    @property
    def fra_symbols(self) -> frozenset[str]:
        """Swap symbols excluded from headline PnL."""
        return frozenset(f"{base}{QUOTE_ASSET}" for base in self.fra_base_assets)


@dataclass(frozen=True)
class SwapPositionView:
    """Exported view of one swap position."""

    symbol: str
    cur_price: Decimal
    avg_price: Decimal
    pos_u: Decimal
    """Signed notional in USDT."""
    pnl_u: Decimal
    position_amt: Decimal

    @property
    def side(self) -> Literal["long", "short"]:
        return "long" if self.position_amt > 0 else "short"

    @property
    def change(self) -> Decimal:
        """Price move relative to entry, signed so that a profitable move is positive."""
        if self.avg_price == 0:
            return ZERO
        direction = 1 if self.side == "long" else -1
        return (self.cur_price / self.avg_price - 1) * direction


@dataclass(frozen=True)
class SwapSummary:
    """USD-margined swap exposure split by side."""

    long_balance: Decimal = ZERO
    long_pnl: Decimal = ZERO
    short_balance: Decimal = ZERO
    short_pnl: Decimal = ZERO
    balance: Decimal = ZERO
    pnl: Decimal = ZERO
    fra_pnl: Decimal = ZERO
    """PnL of funding-rate-arbitrage legs, kept out of `pnl`."""
    positions: tuple[SwapPositionView, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls) -> SwapSummary:
        return cls()


@dataclass(frozen=True)
class AccountSummary:
    """Consolidated valuation of a portfolio-margin account."""

    usdt_equity: Decimal
    negative_balance: Decimal
    account_pnl: Decimal
    """Unrealized PnL reported on wallet balances (not the position-level `um_swap_summary.pnl`)."""
    account_equity: Decimal
    um_swap_summary: SwapSummary
