"""Tests for Binance wire models."""

from __future__ import annotations

from decimal import Decimal

import pytest
from pydantic import ValidationError

from braavos.api.models import AssetBalance, SwapPosition, Ticker


def test_asset_balance_parses_camel_case(balance_json) -> None:
    usdt = AssetBalance.model_validate(balance_json[0])

    assert usdt.asset == "USDT"
    assert usdt.total_wallet_balance == Decimal("81.85440471")
    assert usdt.cross_margin_asset == Decimal("107.15440471")
    assert usdt.cross_margin_free == Decimal("107.15440471")
    assert usdt.cross_margin_locked == 0
    assert usdt.um_wallet_balance == Decimal("-25.3")
    assert usdt.um_unrealized_pnl == Decimal("328.75345911")
    assert usdt.cm_wallet_balance == 0
    assert usdt.cm_unrealized_pnl == 0
    assert usdt.negative_balance == Decimal("-406.38234549")
    assert usdt.update_time == 1719312000000


def test_asset_balance_keeps_exact_decimals() -> None:
    balance = AssetBalance.model_validate(
        {"asset": "ARB", "totalWalletBalance": "71.57186985", "crossMarginFree": "71.57186985"}
    )

    assert str(balance.total_wallet_balance) == "71.57186985"
    assert balance.negative_balance == 0
    assert balance.um_unrealized_pnl == 0


def test_asset_balance_requires_wallet_fields() -> None:
    with pytest.raises(ValidationError):
        AssetBalance.model_validate({"asset": "BTC"})


def test_asset_balance_is_frozen(balance_json) -> None:
    balance = AssetBalance.model_validate(balance_json[1])

    with pytest.raises(ValidationError):
        balance.asset = "ETH"  # type: ignore[misc]


def test_swap_position_parses_camel_case(position_risk_json) -> None:
    mew = SwapPosition.model_validate(position_risk_json[3])

    assert mew.symbol == "MEWUSDT"
    assert mew.position_amt == Decimal("-89164.0")
    assert mew.entry_price == Decimal("0.0051803174667")
    assert mew.mark_price == Decimal("0.00512372")
    assert mew.unrealized_profit == Decimal("5.04645652")
    assert mew.notional == Decimal("-456.85137008")
    assert mew.leverage == 5
    assert mew.position_side == "BOTH"
    assert mew.liquidation_price == Decimal("0.06182114")


def test_swap_position_tolerates_missing_optional_fields() -> None:
    flat = SwapPosition.model_validate(
        {
            "symbol": "XRPUSDT",
            "positionAmt": "0",
            "entryPrice": "0.0",
            "markPrice": "0.52",
            "unRealizedProfit": "0.00000000",
        }
    )

    assert flat.position_amt == 0
    assert flat.notional == 0
    assert flat.leverage == 0
    assert flat.break_even_price == 0


def test_ticker_time_is_optional(spot_ticker_json, swap_ticker_json) -> None:
    spot = Ticker.model_validate(spot_ticker_json[0])
    swap = Ticker.model_validate(swap_ticker_json[0])

    assert spot.time is None
    assert spot.price == Decimal("0.04610000")
    assert swap.time == 1719312000521
