"""Binance API client module."""

from braavos.api.auth import BinanceAuth
from braavos.api.client import BinancePortfolioClient, BinancePublicClient
from braavos.api.config import APIConfig, BinanceBase, Route
from braavos.api.exceptions import (
    AuthenticationError,
    BinanceAPIError,
    BraavosError,
    RateLimitError,
)
from braavos.api.models import AssetBalance, SwapPosition, Ticker

__all__ = [
    # Clients
    "BinanceAuth",
    "BinancePortfolioClient",
    "BinancePublicClient",
    # Config
    "APIConfig",
    "BinanceBase",
    "Route",
    # Exceptions
    "AuthenticationError",
    "BinanceAPIError",
    "BraavosError",
    "RateLimitError",
    # Models
    "AssetBalance",
    "SwapPosition",
    "Ticker",
]
