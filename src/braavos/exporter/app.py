"""HTTP exporter serving account metrics for Prometheus scrapes."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog
from fastapi import FastAPI, Response

from braavos.exporter.metrics import render_metrics
from braavos.portfolio.reader import PortfolioMarginReader

if TYPE_CHECKING:
    from collections.abc import Callable

    from braavos.api.client import BinancePortfolioClient
    from braavos.portfolio.models import AccountSummary
    from braavos.settings import Account, Settings

logger = structlog.get_logger()


async def read_account(
    account: Account,
    client_factory: Callable[[Account], BinancePortfolioClient],
) -> AccountSummary:
    """Fetch and value one account, closing its client afterwards."""
    async with client_factory(account) as client:
        reader = PortfolioMarginReader(client, account.policy, account=account.name)
        return await reader.account_summary()


async def read_all_accounts(
    settings: Settings,
    client_factory: Callable[[Account], BinancePortfolioClient] | None = None,
) -> dict[str, AccountSummary]:
    """
    Value every configured account concurrently.

    An account whose read raises is logged and left out of the result.
    """
    factory = client_factory or settings.client_for
    results = await asyncio.gather(
        *(read_account(account, factory) for account in settings.accounts),
        return_exceptions=True,
    )

    summaries: dict[str, AccountSummary] = {}
    for account, result in zip(settings.accounts, results, strict=True):
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            logger.error("Account read failed", account=account.name, error=str(result))
            continue
        summaries[account.name] = result
    return summaries


def create_app(
    settings: Settings,
    client_factory: Callable[[Account], BinancePortfolioClient] | None = None,
) -> FastAPI:
    """
    Build the exporter app.

    Every `GET /metrics` re-reads all accounts; nothing is cached between scrapes.

    Args:
        settings: Loaded settings (accounts and proxy).
        client_factory: Builds a client for an account. Defaults to `settings.client_for`.
    """
    app = FastAPI(title="braavos exporter", docs_url=None, redoc_url=None)

    @app.get("/metrics")
    async def metrics() -> Response:
        summaries = await read_all_accounts(settings, client_factory)
        payload, content_type = render_metrics(summaries)
        return Response(content=payload, media_type=content_type)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app
