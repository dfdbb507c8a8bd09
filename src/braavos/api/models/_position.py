"""Pydantic models for unified-margin swap positions."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class SwapPosition(BaseModel):
    """Single position from GET /papi/v1/um/positionRisk."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    symbol: str

    entry_price: Decimal = Field(alias="entryPrice")
    """Average entry price."""

    leverage: int = 0
    """Current leverage (sent as a string)."""

    mark_price: Decimal = Field(alias="markPrice")

    max_notional_value: Decimal = Field(default=Decimal(0), alias="maxNotionalValue")
    """Maximum notional allowed at the current leverage."""

    position_amt: Decimal = Field(alias="positionAmt")
    """Position size; positive for long, negative for short, zero when flat."""

    notional: Decimal = Decimal(0)
    """Signed notional value in USDT (negative for shorts)."""

    unrealized_profit: Decimal = Field(alias="unRealizedProfit")

    liquidation_price: Decimal = Field(default=Decimal(0), alias="liquidationPrice")

    position_side: str = Field(default="BOTH", alias="positionSide")
    """BOTH in one-way mode, LONG/SHORT in hedge mode."""

    break_even_price: Decimal = Field(default=Decimal(0), alias="breakEvenPrice")

    update_time: int = Field(default=0, alias="updateTime")
    """Unix timestamp (ms) of the last position change."""
