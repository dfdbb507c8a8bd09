"""Portfolio-margin account valuation."""

from braavos.portfolio._account import BalanceTotals, summarize_balances
from braavos.portfolio._quotes import QuoteIndex
from braavos.portfolio._swaps import summarize_swap_positions
from braavos.portfolio._valuation import AssetValuation, value_asset
from braavos.portfolio.calculator import AccountCalculator, compute_account_summary
from braavos.portfolio.models import (
    AccountPolicy,
    AccountSummary,
    SwapPositionView,
    SwapSummary,
)
from braavos.portfolio.reader import PortfolioMarginReader, RawAccountData

__all__ = [
    "AccountCalculator",
    "AccountPolicy",
    "AccountSummary",
    "AssetValuation",
    "BalanceTotals",
    "PortfolioMarginReader",
    "QuoteIndex",
    "RawAccountData",
    "SwapPositionView",
    "SwapSummary",
    "compute_account_summary",
    "summarize_balances",
    "summarize_swap_positions",
    "value_asset",
]
