"""Pydantic models for Binance API responses."""

from braavos.api.models._balance import AssetBalance
from braavos.api.models._position import SwapPosition
from braavos.api.models.ticker import Ticker

__all__ = [
    "AssetBalance",
    "SwapPosition",
    "Ticker",
]
