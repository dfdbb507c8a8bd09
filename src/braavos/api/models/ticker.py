"""Ticker price models."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class Ticker(BaseModel):
    """Latest price for a symbol (spot or USD-margined futures)."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    price: Decimal
    time: int | None = None
    """Match-engine time in ms; spot tickers do not carry it."""
