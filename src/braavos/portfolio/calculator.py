"""Composition of the balance and swap aggregators into one account summary."""

from __future__ import annotations

from typing import TYPE_CHECKING

from braavos.portfolio._account import BalanceTotals, summarize_balances
from braavos.portfolio._quotes import QuoteIndex
from braavos.portfolio._swaps import summarize_swap_positions
from braavos.portfolio.models import AccountPolicy, AccountSummary, SwapSummary

if TYPE_CHECKING:
    from collections.abc import Iterable

    from braavos.api.models import AssetBalance, SwapPosition, Ticker


class AccountCalculator:
    """
    Values a portfolio-margin account under a fixed policy.

    The calculator holds no state between calls; every method is a pure function of its
    inputs and the policy.
    """

    def __init__(self, policy: AccountPolicy | None = None) -> None:
        self.policy = policy or AccountPolicy()

    def balance_totals(
        self,
        balances: Iterable[AssetBalance],
        tickers: Iterable[Ticker],
    ) -> BalanceTotals:
        return summarize_balances(balances, QuoteIndex.from_tickers(tickers), self.policy)

    def swap_summary(self, positions: Iterable[SwapPosition]) -> SwapSummary:
        return summarize_swap_positions(positions, self.policy)

    def account_summary(
        self,
        balances: Iterable[AssetBalance],
        tickers: Iterable[Ticker],
        swaps: Iterable[SwapPosition],
    ) -> AccountSummary:
        """
        Combine wallet-level totals with the swap summary.

        `account_equity` only folds in the PnL reported on wallet balances. The
        position-level PnL in `um_swap_summary` is carried alongside and never reconciled
        with it.
        """
        totals = self.balance_totals(balances, tickers)
        return AccountSummary(
            usdt_equity=totals.usdt_equity,
            negative_balance=totals.negative_balance,
            account_pnl=totals.swap_pnl,
            account_equity=totals.account_equity,
            um_swap_summary=self.swap_summary(swaps),
        )


def compute_account_summary(
    balances: Iterable[AssetBalance],
    tickers: Iterable[Ticker],
    swaps: Iterable[SwapPosition],
    policy: AccountPolicy,
) -> AccountSummary:
    """Value an account from its raw balances, spot tickers and UM swap positions."""
    return AccountCalculator(policy).account_summary(balances, tickers, swaps)
