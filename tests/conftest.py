"""
Shared test fixtures.

PHILOSOPHY: Use REAL objects wherever possible. Only mock at system boundaries.
- Real Pydantic models parsed from recorded Binance JSON (not dicts pretending to be models)
- respx ONLY for HTTP boundary
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest
import structlog

from braavos.api.models import AssetBalance, SwapPosition, Ticker

if TYPE_CHECKING:
    from collections.abc import Callable

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures" / "binance"

# Binance documentation example credentials (not a real account).
TEST_API_KEY = "vmPUZE6mv9SD5VNHk4HlWFsOr6aKE2zvsw0MuIgwCIPy6utIco14y7Ju91duEh8A"
TEST_SECRET = "NhqPtmdSJYdKjVHjA7PZj4Mge3R5YNiP1e3UZjInClVN65XAbvqqM6A7H5fATj0j"


@pytest.fixture(autouse=True)
def _uncached_loggers() -> None:
    """Let `structlog.testing.capture_logs` see module-level loggers in every test."""
    structlog.configure(cache_logger_on_first_use=False)


def load_fixture(name: str) -> Any:
    """Load a recorded Binance response from tests/fixtures/binance."""
    return json.loads((FIXTURES_DIR / name).read_text())


# ============================================================================
# Raw JSON (for respx mocks)
# ============================================================================
@pytest.fixture
def balance_json() -> list[dict[str, Any]]:
    return load_fixture("papi_balance.json")


@pytest.fixture
def position_risk_json() -> list[dict[str, Any]]:
    return load_fixture("papi_um_position_risk.json")


@pytest.fixture
def spot_ticker_json() -> list[dict[str, Any]]:
    return load_fixture("spot_ticker_price.json")


@pytest.fixture
def swap_ticker_json() -> list[dict[str, Any]]:
    return load_fixture("fapi_ticker_price.json")


# ============================================================================
# Parsed models
# ============================================================================
@pytest.fixture
def balances(balance_json: list[dict[str, Any]]) -> list[AssetBalance]:
    return [AssetBalance.model_validate(b) for b in balance_json]


@pytest.fixture
def swap_positions(position_risk_json: list[dict[str, Any]]) -> list[SwapPosition]:
    return [SwapPosition.model_validate(p) for p in position_risk_json]


@pytest.fixture
def spot_tickers(spot_ticker_json: list[dict[str, Any]]) -> list[Ticker]:
    return [Ticker.model_validate(t) for t in spot_ticker_json]


# ============================================================================
# Builders
# ============================================================================
@pytest.fixture
def make_balance() -> Callable[..., AssetBalance]:
    """Factory for an asset balance; everything not given is zero."""

    def _make(
        asset: str,
        *,
        total_wallet_balance: str | Decimal = "0",
        cross_margin_free: str | Decimal | None = None,
        um_wallet_balance: str | Decimal = "0",
        um_unrealized_pnl: str | Decimal = "0",
        cm_wallet_balance: str | Decimal = "0",
        cm_unrealized_pnl: str | Decimal = "0",
        negative_balance: str | Decimal = "0",
    ) -> AssetBalance:
        free = total_wallet_balance if cross_margin_free is None else cross_margin_free
        return AssetBalance(
            asset=asset,
            total_wallet_balance=Decimal(total_wallet_balance),
            cross_margin_free=Decimal(free),
            um_wallet_balance=Decimal(um_wallet_balance),
            um_unrealized_pnl=Decimal(um_unrealized_pnl),
            cm_wallet_balance=Decimal(cm_wallet_balance),
            cm_unrealized_pnl=Decimal(cm_unrealized_pnl),
            negative_balance=Decimal(negative_balance),
        )

    return _make


@pytest.fixture
def make_position() -> Callable[..., SwapPosition]:
    """Factory for a UM swap position with notional = amount * mark price."""

    def _make(
        symbol: str,
        position_amt: str | Decimal,
        *,
        mark_price: str | Decimal = "100",
        entry_price: str | Decimal = "100",
        unrealized_profit: str | Decimal = "0",
        notional: str | Decimal | None = None,
    ) -> SwapPosition:
        amount = Decimal(position_amt)
        mark = Decimal(mark_price)
        return SwapPosition(
            symbol=symbol,
            position_amt=amount,
            mark_price=mark,
            entry_price=Decimal(entry_price),
            unrealized_profit=Decimal(unrealized_profit),
            notional=amount * mark if notional is None else Decimal(notional),
        )

    return _make


@pytest.fixture
def make_ticker() -> Callable[[str, str], Ticker]:
    def _make(symbol: str, price: str) -> Ticker:
        return Ticker(symbol=symbol, price=Decimal(price))

    return _make


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    """A valid two-account settings file."""
    path = tmp_path / "Settings.toml"
    path.write_text(
        f"""
[[account]]
name = "main"
api_key = "{TEST_API_KEY}"
secret = "{TEST_SECRET}"
funding_rate_arbitrage = ["SOL", "ETH"]
burning_free = true

[[account]]
name = "hedge"
api_key = "{TEST_API_KEY}"
secret = "{TEST_SECRET}"
"""
    )
    return path
