"""Concurrent retrieval of the raw datasets an account valuation needs."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog

from braavos.portfolio.calculator import AccountCalculator

if TYPE_CHECKING:
    from braavos.api.client import BinancePortfolioClient
    from braavos.api.models import AssetBalance, SwapPosition, Ticker
    from braavos.portfolio.models import AccountPolicy, AccountSummary

logger = structlog.get_logger()

RAW_DATASETS = ("balances", "tickers", "swap_positions")


@dataclass(frozen=True)
class RawAccountData:
    """One poll's worth of exchange data."""

    balances: tuple[AssetBalance, ...] = ()
    tickers: tuple[Ticker, ...] = ()
    swap_positions: tuple[SwapPosition, ...] = ()
    failed: tuple[str, ...] = ()
    """Names of datasets whose fetch failed and were replaced by an empty tuple."""

    @property
    def complete(self) -> bool:
        return not self.failed


class PortfolioMarginReader:
    """
    Fetches balances, spot tickers and UM positions for one account and values them.

    The three requests are independent and run concurrently. A failed request does not
    abort the poll: its dataset is logged, left empty and named in `RawAccountData.failed`.
    """

    def __init__(
        self,
        client: BinancePortfolioClient,
        policy: AccountPolicy | None = None,
        *,
        account: str | None = None,
    ) -> None:
        self._client = client
        self._calculator = AccountCalculator(policy)
        self._log = logger.bind(account=account) if account else logger

    @property
    def policy(self) -> AccountPolicy:
        return self._calculator.policy

    async def fetch_raw_data(self) -> RawAccountData:
        results = await asyncio.gather(
            self._client.get_balances(),
            self._client.get_spot_tickers(),
            self._client.get_um_positions(),
            return_exceptions=True,
        )

        datasets: dict[str, tuple[Any, ...]] = {}
        failed: list[str] = []
        for name, result in zip(RAW_DATASETS, results, strict=True):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                self._log.warning("Dataset fetch failed", dataset=name, error=str(result))
                datasets[name] = ()
                failed.append(name)
            else:
                datasets[name] = tuple(result)

        self._log.debug(
            "Fetched account data",
            balances=len(datasets["balances"]),
            tickers=len(datasets["tickers"]),
            swap_positions=len(datasets["swap_positions"]),
        )
        return RawAccountData(
            balances=datasets["balances"],
            tickers=datasets["tickers"],
            swap_positions=datasets["swap_positions"],
            failed=tuple(failed),
        )

    def summarize(self, raw: RawAccountData) -> AccountSummary:
        return self._calculator.account_summary(raw.balances, raw.tickers, raw.swap_positions)

    async def account_summary(self) -> AccountSummary:
        """Fetch the latest data and value the account."""
        return self.summarize(await self.fetch_raw_data())
