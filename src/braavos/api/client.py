"""Binance API clients - public (no auth) and portfolio-margin (signed)."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from braavos.api.auth import BinanceAuth
from braavos.api.config import APIConfig, Route
from braavos.api.exceptions import AuthenticationError, BinanceAPIError, RateLimitError
from braavos.api.models import AssetBalance, SwapPosition, Ticker
from braavos.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RECV_WINDOW_MS,
    DEFAULT_TIMEOUT_SECONDS,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from tenacity import RetryCallState


logger = structlog.get_logger()

_RETRY_WAIT = wait_exponential(multiplier=1, min=1, max=60)


def _wait_with_retry_after(retry_state: RetryCallState) -> float:
    """Wait using Retry-After header if available, else exponential backoff."""
    outcome = retry_state.outcome
    if outcome is not None:
        exc = outcome.exception()
        if isinstance(exc, RateLimitError) and exc.retry_after is not None:
            return float(exc.retry_after)
    return float(_RETRY_WAIT(retry_state))


def _error_from_response(response: httpx.Response) -> BinanceAPIError:
    """Map an error response to an exception, keeping Binance's `{code, msg}` if present."""
    message = response.text
    code: int | None = None
    try:
        body = response.json()
    except json.JSONDecodeError:
        body = None
    if isinstance(body, dict):
        raw_code = body.get("code")
        code = raw_code if isinstance(raw_code, int) else None
        message = str(body.get("msg") or message)

    if response.status_code in (418, 429):
        retry_after: int | None = None
        retry_after_header = response.headers.get("Retry-After")
        if retry_after_header is not None:
            try:
                retry_after = int(retry_after_header)
            except ValueError:
                retry_after = None
        return RateLimitError(
            message=message or "Rate limit exceeded",
            retry_after=retry_after,
            status_code=response.status_code,
        )
    if response.status_code == 401:
        return AuthenticationError(message, code)
    return BinanceAPIError(response.status_code, message, code)


class BinancePublicClient:
    """
    Unauthenticated client for public Binance market-data endpoints.

    One client spans all Binance hosts (spot, portfolio margin, futures); routes are
    resolved to absolute URLs through `APIConfig`.
    """

    def __init__(
        self,
        config: APIConfig | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
    ) -> None:
        self._config = config or APIConfig()
        self._client = httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json"},
            proxy=self._config.proxy,
        )
        self._max_retries = max_retries

    async def __aenter__(self) -> BinancePublicClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def _request(
        self,
        route: Route,
        build_query: Callable[[], str | dict[str, Any] | None],
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        GET a route with retry, rebuilding the query on every attempt.

        Signed queries carry a timestamp, so they must be regenerated after a backoff.

        Returns:
            Decoded JSON body (object or array).
        """
        url = self._config.url_for(route)

        async for attempt in AsyncRetrying(
            retry=retry_if_exception_type(
                (
                    RateLimitError,
                    httpx.NetworkError,
                    httpx.TimeoutException,
                )
            ),
            stop=stop_after_attempt(self._max_retries),
            wait=_wait_with_retry_after,
            reraise=True,
        ):
            with attempt:
                response = await self._client.get(url, params=build_query(), headers=headers)
                logger.debug("Binance response", route=route.value, status=response.status_code)

                if response.status_code >= 400:
                    raise _error_from_response(response)

                try:
                    return response.json()
                except json.JSONDecodeError:
                    logger.error("Binance returned a non-JSON body", route=route.value)
                    raise BinanceAPIError(response.status_code, response.text) from None

        raise AssertionError("AsyncRetrying should have returned or raised")  # pragma: no cover

    async def _get(self, route: Route, params: dict[str, Any] | None = None) -> Any:
        return await self._request(route, lambda: params)

    @staticmethod
    def _as_list(data: Any, route: Route) -> list[Any]:
        if not isinstance(data, list):
            raise BinanceAPIError(200, f"Unexpected {route.value} response shape: {data!r}")
        return data

    # ==================== Market data ====================

    async def ping(self) -> None:
        """Test connectivity to the REST API."""
        await self._get(Route.PING)

    async def get_spot_tickers(self) -> list[Ticker]:
        """Latest price for every spot symbol."""
        data = self._as_list(await self._get(Route.SPOT_TICKER), Route.SPOT_TICKER)
        return [Ticker.model_validate(t) for t in data]

    async def get_swap_tickers(self) -> list[Ticker]:
        """Latest price for every USD-margined futures symbol."""
        data = self._as_list(await self._get(Route.SWAP_TICKER), Route.SWAP_TICKER)
        return [Ticker.model_validate(t) for t in data]


class BinancePortfolioClient(BinancePublicClient):
    """
    Authenticated client for portfolio-margin (unified account) endpoints.
    """

    def __init__(
        self,
        api_key: str,
        secret: str,
        config: APIConfig | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_retries: int = DEFAULT_MAX_RETRIES,
        recv_window: int = DEFAULT_RECV_WINDOW_MS,
    ) -> None:
        super().__init__(config=config, timeout=timeout, max_retries=max_retries)
        self._auth = BinanceAuth(api_key, secret, recv_window=recv_window)

    async def __aenter__(self) -> BinancePortfolioClient:
        return self

    async def _signed_get(self, route: Route, params: dict[str, Any] | None = None) -> Any:
        return await self._request(
            route,
            lambda: self._auth.signed_query(params),
            headers=self._auth.get_headers(),
        )

    # ==================== Portfolio margin ====================

    async def get_balances(self) -> list[AssetBalance]:
        """Balances of every asset in the unified account."""
        data = self._as_list(await self._signed_get(Route.PM_BALANCE), Route.PM_BALANCE)
        return [AssetBalance.model_validate(b) for b in data]

    async def get_um_positions(self) -> list[SwapPosition]:
        """Open USD-margined futures positions (position risk)."""
        data = self._as_list(
            await self._signed_get(Route.PM_UM_POSITION_RISK), Route.PM_UM_POSITION_RISK
        )
        return [SwapPosition.model_validate(p) for p in data]
