"""Position-level aggregation of USD-margined swap exposure."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

import structlog

from braavos.portfolio.models import SwapPositionView, SwapSummary

if TYPE_CHECKING:
    from collections.abc import Iterable

    from braavos.api.models import SwapPosition
    from braavos.portfolio.models import AccountPolicy

logger = structlog.get_logger()


def summarize_swap_positions(
    positions: Iterable[SwapPosition],
    policy: AccountPolicy,
) -> SwapSummary:
    """
    Bucket swap positions into long/short notional and PnL.

    Positions on funding-rate-arbitrage symbols only feed `fra_pnl` and are left out of the
    position list. A position is long iff `position_amt > 0`; everything else (including
    flat positions) lands in the short bucket with its absolute notional.
    """
    fra_symbols = policy.fra_symbols

    balance = Decimal(0)
    long_balance = Decimal(0)
    short_balance = Decimal(0)
    pnl = Decimal(0)
    long_pnl = Decimal(0)
    short_pnl = Decimal(0)
    fra_pnl = Decimal(0)
    views: list[SwapPositionView] = []

    for swap in positions:
        if swap.symbol in fra_symbols:
            fra_pnl += swap.unrealized_profit
            continue

        logger.debug(
            "Swap position",
            symbol=swap.symbol,
            notional=str(swap.notional),
            unrealized_profit=str(swap.unrealized_profit),
        )
        pnl += swap.unrealized_profit
        if swap.position_amt > 0:
            balance += swap.notional
            long_balance += swap.notional
            long_pnl += swap.unrealized_profit
        else:
            notional = abs(swap.notional)
            balance += notional
            short_balance += notional
            short_pnl += swap.unrealized_profit

        views.append(
            SwapPositionView(
                symbol=swap.symbol,
                cur_price=swap.mark_price,
                avg_price=swap.entry_price,
                pos_u=swap.notional,
                pnl_u=swap.unrealized_profit,
                position_amt=swap.position_amt,
            )
        )

    return SwapSummary(
        long_balance=long_balance,
        long_pnl=long_pnl,
        short_balance=short_balance,
        short_pnl=short_pnl,
        balance=balance,
        pnl=pnl,
        fra_pnl=fra_pnl,
        positions=tuple(views),
    )
