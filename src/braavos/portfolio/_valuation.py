"""USDT valuation of a single non-USDT asset balance."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from braavos.constants import DUST_THRESHOLD_USDT, QUOTE_ASSET

if TYPE_CHECKING:
    from braavos.api.models import AssetBalance
    from braavos.portfolio._quotes import QuoteIndex

_ZERO = Decimal(0)


@dataclass(frozen=True)
class AssetValuation:
    """USDT contributions of one asset balance."""

    total_balance: Decimal
    pnl: Decimal
    negative_balance: Decimal
    missing_quote: bool = False

    @classmethod
    def unpriced(cls) -> AssetValuation:
        return cls(_ZERO, _ZERO, _ZERO, missing_quote=True)


def value_asset(balance: AssetBalance, quotes: QuoteIndex) -> AssetValuation:
    """
    Convert an asset balance into USDT using the `{asset}USDT` price.

    Args:
        balance: Balance record for a non-USDT asset.
        quotes: Price lookup for the current poll.

    Returns:
        Total wallet value, unrealized PnL (UM + CM) and negative balance, all in USDT.
        If the spot holding (`cross_margin_free * price`) is under the dust threshold the
        total wallet value is zero; PnL and negative balance are kept. Without a price every
        contribution is zero and `missing_quote` is set.
    """
    price = quotes.quote(balance.asset, QUOTE_ASSET)
    if price is None:
        return AssetValuation.unpriced()

    spot_equity = balance.cross_margin_free * price
    if spot_equity < DUST_THRESHOLD_USDT:
        total_balance = _ZERO
    else:
        total_balance = balance.total_wallet_balance * price

    negative_balance = balance.negative_balance * price
    pnl = balance.um_unrealized_pnl * price + balance.cm_unrealized_pnl * price
    return AssetValuation(total_balance, pnl, negative_balance)
