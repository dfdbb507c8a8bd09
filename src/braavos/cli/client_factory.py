"""Factory functions for constructing Binance API clients in CLI commands.

Commands build clients only through these functions, so tests can patch a single place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from braavos.api import APIConfig, BinancePortfolioClient, BinancePublicClient
from braavos.constants import DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT_SECONDS

if TYPE_CHECKING:
    from braavos.settings import Account, Settings


def public_client(
    *,
    proxy: str | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    max_retries: int = DEFAULT_MAX_RETRIES,
) -> BinancePublicClient:
    """Create a BinancePublicClient (use as async context manager)."""
    return BinancePublicClient(
        config=APIConfig(proxy=proxy),
        timeout=timeout,
        max_retries=max_retries,
    )


def account_client(settings: Settings, account: Account) -> BinancePortfolioClient:
    """Create a signed client for `account`, routed through the configured proxy.

    Example:
        ```python
        async with account_client(settings, settings.get_account("main")) as client:
            balances = await client.get_balances()
        ```
    """
    return settings.client_for(account)
