"""Symbol -> price lookup built from a ticker snapshot."""

from __future__ import annotations

from typing import TYPE_CHECKING

from braavos.constants import QUOTE_ASSET

if TYPE_CHECKING:
    from collections.abc import Iterable
    from decimal import Decimal

    from braavos.api.models import Ticker


class QuoteIndex:
    """Exact-match price lookup. Absent symbols return None; callers decide how to report it."""

    def __init__(self, prices: dict[str, Decimal] | None = None) -> None:
        self._prices: dict[str, Decimal] = dict(prices or {})

    @classmethod
    def from_tickers(cls, tickers: Iterable[Ticker]) -> QuoteIndex:
        prices: dict[str, Decimal] = {}
        for ticker in tickers:
            # First occurrence wins
            prices.setdefault(ticker.symbol, ticker.price)
        return cls(prices)

    def price(self, symbol: str) -> Decimal | None:
        return self._prices.get(symbol)

    def quote(self, asset: str, quote_asset: str = QUOTE_ASSET) -> Decimal | None:
        """Price of `asset` in `quote_asset`, looked up as the pair f"{asset}{quote_asset}"."""
        return self.price(f"{asset}{quote_asset}")

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._prices

    def __len__(self) -> int:
        return len(self._prices)
