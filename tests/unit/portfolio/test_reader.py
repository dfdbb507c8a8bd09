"""
Reader tests - mock ONLY at HTTP boundary.

The real portfolio client signs and sends requests; respx answers them.
"""

from __future__ import annotations

from decimal import Decimal

import pytest
import respx
from httpx import Response

from braavos.api import BinancePortfolioClient
from braavos.portfolio import AccountPolicy, PortfolioMarginReader

BALANCE_URL = "https://papi.binance.com/papi/v1/balance"
POSITION_URL = "https://papi.binance.com/papi/v1/um/positionRisk"
TICKER_URL = "https://api.binance.com/api/v3/ticker/price"

API_KEY = "test-key"
SECRET = "test-secret"


@pytest.fixture
def client() -> BinancePortfolioClient:
    return BinancePortfolioClient(API_KEY, SECRET, max_retries=1)


@respx.mock
async def test_fetch_raw_data(client, balance_json, spot_ticker_json, position_risk_json) -> None:
    balance_route = respx.get(BALANCE_URL).mock(return_value=Response(200, json=balance_json))
    respx.get(TICKER_URL).mock(return_value=Response(200, json=spot_ticker_json))
    respx.get(POSITION_URL).mock(return_value=Response(200, json=position_risk_json))

    async with client:
        raw = await PortfolioMarginReader(client).fetch_raw_data()

    assert raw.complete
    assert raw.failed == ()
    assert [b.asset for b in raw.balances] == ["USDT", "BTC", "ARB", "BNB", "DOGE", "NFT"]
    assert len(raw.tickers) == len(spot_ticker_json)
    assert len(raw.swap_positions) == 8

    request = balance_route.calls[0].request
    assert request.headers["X-MBX-APIKEY"] == API_KEY
    assert "signature" in request.url.params
    assert request.url.params["recvWindow"] == "5000"


@respx.mock
async def test_account_summary_end_to_end(
    client, balance_json, spot_ticker_json, position_risk_json
) -> None:
    respx.get(BALANCE_URL).mock(return_value=Response(200, json=balance_json))
    respx.get(TICKER_URL).mock(return_value=Response(200, json=spot_ticker_json))
    respx.get(POSITION_URL).mock(return_value=Response(200, json=position_risk_json))
    policy = AccountPolicy(burn_fee_discount=True, fra_base_assets=("SOL", "ETH"))

    async with client:
        summary = await PortfolioMarginReader(client, policy).account_summary()

    assert summary.account_equity == Decimal("1005.86615970000000")
    assert summary.usdt_equity == Decimal("107.15440471")
    assert summary.um_swap_summary.fra_pnl == Decimal("240.6949")


@respx.mock
async def test_failed_dataset_degrades_to_empty(
    client, balance_json, position_risk_json
) -> None:
    respx.get(BALANCE_URL).mock(return_value=Response(200, json=balance_json))
    respx.get(TICKER_URL).mock(
        return_value=Response(500, json={"code": -1000, "msg": "An unknown error occurred."})
    )
    respx.get(POSITION_URL).mock(return_value=Response(200, json=position_risk_json))
    reader = PortfolioMarginReader(client, account="main")

    async with client:
        raw = await reader.fetch_raw_data()
    summary = reader.summarize(raw)

    assert raw.failed == ("tickers",)
    assert not raw.complete
    assert raw.tickers == ()
    assert len(raw.balances) == 6
    # Without prices only USDT contributes
    assert summary.account_equity == Decimal("81.85440471") + Decimal("328.75345911")
    assert summary.um_swap_summary.balance == Decimal("2990.06808746")


@respx.mock
async def test_every_dataset_failing(client) -> None:
    respx.get(BALANCE_URL).mock(return_value=Response(401, json={"code": -2015, "msg": "bad"}))
    respx.get(POSITION_URL).mock(return_value=Response(401, json={"code": -2015, "msg": "bad"}))
    respx.get(TICKER_URL).mock(return_value=Response(503, text="unavailable"))

    async with client:
        raw = await PortfolioMarginReader(client).fetch_raw_data()

    assert raw.failed == ("balances", "tickers", "swap_positions")
    assert (raw.balances, raw.tickers, raw.swap_positions) == ((), (), ())


def test_reader_exposes_policy(client) -> None:
    policy = AccountPolicy(fra_base_assets=("ETH",))

    assert PortfolioMarginReader(client, policy).policy is policy
    assert PortfolioMarginReader(client).policy == AccountPolicy()
