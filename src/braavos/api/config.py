"""
Exchange endpoint configuration (base URLs and REST routes).
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class BinanceBase(str, Enum):
    """Binance REST hosts."""

    SPOT = "spot"
    PORTFOLIO_MARGIN = "papi"
    FUTURES = "fapi"


class Route(str, Enum):
    """REST routes used by this project."""

    PING = "ping"
    SPOT_TICKER = "spot_ticker"
    SWAP_TICKER = "swap_ticker"
    PM_BALANCE = "pm_balance"
    PM_UM_POSITION_RISK = "pm_um_position_risk"


BASE_URLS: dict[BinanceBase, str] = {
    BinanceBase.SPOT: "https://api.binance.com",
    BinanceBase.PORTFOLIO_MARGIN: "https://papi.binance.com",
    BinanceBase.FUTURES: "https://fapi.binance.com",
}

ROUTES: dict[Route, tuple[BinanceBase, str]] = {
    Route.PING: (BinanceBase.SPOT, "/api/v3/ping"),
    Route.SPOT_TICKER: (BinanceBase.SPOT, "/api/v3/ticker/price"),
    Route.SWAP_TICKER: (BinanceBase.FUTURES, "/fapi/v2/ticker/price"),
    Route.PM_BALANCE: (BinanceBase.PORTFOLIO_MARGIN, "/papi/v1/balance"),
    Route.PM_UM_POSITION_RISK: (BinanceBase.PORTFOLIO_MARGIN, "/papi/v1/um/positionRisk"),
}

WEBSOCKET_API_URL = "wss://ws-api.binance.com:443/ws-api/v3"


class APIConfig(BaseModel):
    """Configuration for the exchange clients."""

    proxy: str | None = None
    base_urls: dict[BinanceBase, str] = dict(BASE_URLS)

    def url_for(self, route: Route) -> str:
        """Absolute URL for a route."""
        base, path = ROUTES[route]
        return self.base_urls[base] + path
