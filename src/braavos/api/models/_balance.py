"""Pydantic models for portfolio-margin balances."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class AssetBalance(BaseModel):
    """Single asset from GET /papi/v1/balance."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    asset: str

    total_wallet_balance: Decimal = Field(alias="totalWalletBalance")
    """Cross margin free + cross margin locked + UM wallet balance + CM wallet balance."""

    cross_margin_asset: Decimal = Field(default=Decimal(0), alias="crossMarginAsset")
    """Cross margin free + cross margin locked."""

    cross_margin_borrowed: Decimal = Field(default=Decimal(0), alias="crossMarginBorrowed")

    cross_margin_free: Decimal = Field(alias="crossMarginFree")
    """Unlocked cross margin balance (spot holding that can be traded)."""

    cross_margin_interest: Decimal = Field(default=Decimal(0), alias="crossMarginInterest")

    cross_margin_locked: Decimal = Field(default=Decimal(0), alias="crossMarginLocked")

    um_wallet_balance: Decimal = Field(default=Decimal(0), alias="umWalletBalance")
    """USD-margined futures wallet balance (negative when the wallet owes)."""

    um_unrealized_pnl: Decimal = Field(default=Decimal(0), alias="umUnrealizedPNL")

    cm_wallet_balance: Decimal = Field(default=Decimal(0), alias="cmWalletBalance")
    """Coin-margined futures wallet balance."""

    cm_unrealized_pnl: Decimal = Field(default=Decimal(0), alias="cmUnrealizedPNL")

    negative_balance: Decimal = Field(default=Decimal(0), alias="negativeBalance")

    update_time: int = Field(default=0, alias="updateTime")
    """Unix timestamp (ms) of the last balance change."""
