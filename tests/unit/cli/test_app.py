from __future__ import annotations

import json
from decimal import Decimal
from unittest.mock import patch

import pytest
import respx
from httpx import Response
from typer.testing import CliRunner

from braavos.cli import app

runner = CliRunner()

PING_URL = "https://api.binance.com/api/v3/ping"
BALANCE_URL = "https://papi.binance.com/papi/v1/balance"
POSITION_URL = "https://papi.binance.com/papi/v1/um/positionRisk"
TICKER_URL = "https://api.binance.com/api/v3/ticker/price"


@pytest.fixture
def binance(balance_json, spot_ticker_json, position_risk_json):
    with respx.mock(assert_all_called=False) as router:
        router.get(BALANCE_URL).mock(return_value=Response(200, json=balance_json))
        router.get(TICKER_URL).mock(return_value=Response(200, json=spot_ticker_json))
        router.get(POSITION_URL).mock(return_value=Response(200, json=position_risk_json))
        yield router


def test_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "braavos v0.1.0" in result.stdout


def test_summary_json(settings_file, binance) -> None:
    result = runner.invoke(
        app, ["--config", str(settings_file), "summary", "--account", "main", "--json"]
    )

    assert result.exit_code == 0, result.stdout
    data = json.loads(result.stdout)
    assert list(data) == ["main"]
    main = data["main"]
    assert Decimal(main["usdt_equity"]) == Decimal("107.15440471")
    assert Decimal(main["negative_balance"]) == Decimal("-406.38234549")
    assert Decimal(main["account_pnl"]) == Decimal("328.75345911")
    assert Decimal(main["account_equity"]) == Decimal("1005.86615970000000")
    swaps = main["um_swap_summary"]
    assert Decimal(swaps["fra_pnl"]) == Decimal("240.6949")
    assert Decimal(swaps["pnl"]) == Decimal("41.06655935")
    assert len(swaps["positions"]) == 6
    mew = next(p for p in swaps["positions"] if p["symbol"] == "MEWUSDT")
    assert mew["side"] == "short"
    assert mew["position_amt"] == "-89164.0"


def test_summary_all_accounts_json(settings_file, binance) -> None:
    result = runner.invoke(app, ["--config", str(settings_file), "summary", "--json"])

    assert result.exit_code == 0, result.stdout
    data = json.loads(result.stdout)
    assert list(data) == ["main", "hedge"]
    assert Decimal(data["hedge"]["account_equity"]) == Decimal("1016.565307852")
    assert len(data["hedge"]["um_swap_summary"]["positions"]) == 8


def test_summary_table(settings_file, binance) -> None:
    result = runner.invoke(app, ["--config", str(settings_file), "summary", "-a", "hedge"])

    assert result.exit_code == 0, result.stdout
    assert "Account hedge" in result.stdout
    assert "1,016.5653" in result.stdout


def test_summary_uses_env_config(monkeypatch, settings_file, binance) -> None:
    monkeypatch.setenv("BRAAVOS_CONFIG", str(settings_file))

    result = runner.invoke(app, ["summary", "--json"])

    assert result.exit_code == 0, result.stdout
    assert "main" in json.loads(result.stdout)


def test_summary_warns_on_partial_data(settings_file, balance_json, position_risk_json) -> None:
    with respx.mock(assert_all_called=False) as router:
        router.get(BALANCE_URL).mock(return_value=Response(200, json=balance_json))
        router.get(TICKER_URL).mock(return_value=Response(500, json={"code": -1000, "msg": "x"}))
        router.get(POSITION_URL).mock(return_value=Response(200, json=position_risk_json))

        result = runner.invoke(app, ["--config", str(settings_file), "summary", "-a", "main"])

    assert result.exit_code == 0, result.stdout
    assert "could not fetch tickers" in result.stdout


def test_summary_fails_when_nothing_fetched(settings_file) -> None:
    with respx.mock(assert_all_called=False) as router:
        router.get(BALANCE_URL).mock(return_value=Response(401, json={"code": -2015, "msg": "x"}))
        router.get(TICKER_URL).mock(return_value=Response(503, text="unavailable"))
        router.get(POSITION_URL).mock(return_value=Response(401, json={"code": -2015, "msg": "x"}))

        result = runner.invoke(app, ["--config", str(settings_file), "summary", "-a", "main"])

    assert result.exit_code == 1
    assert "every request failed" in result.stdout


def test_summary_unknown_account(settings_file) -> None:
    result = runner.invoke(app, ["--config", str(settings_file), "summary", "-a", "nope"])

    assert result.exit_code == 1
    assert "Unknown account" in result.stdout


def test_summary_missing_settings(tmp_path) -> None:
    result = runner.invoke(app, ["--config", str(tmp_path / "missing.toml"), "summary"])

    assert result.exit_code == 1
    assert "Settings file not found" in result.stdout


@respx.mock
def test_ping() -> None:
    respx.get(PING_URL).mock(return_value=Response(200, json={}))

    result = runner.invoke(app, ["ping"])

    assert result.exit_code == 0
    assert "OK" in result.stdout


@respx.mock
def test_ping_api_error() -> None:
    respx.get(PING_URL).mock(
        return_value=Response(403, json={"code": -2014, "msg": "WAF limit violated"})
    )

    result = runner.invoke(app, ["ping"])

    assert result.exit_code == 1
    assert "API Error 403" in result.stdout


def test_serve(settings_file) -> None:
    with patch("uvicorn.run") as mock_run:
        result = runner.invoke(
            app, ["--config", str(settings_file), "serve", "--host", "0.0.0.0", "--port", "9100"]
        )

    assert result.exit_code == 0, result.stdout
    mock_run.assert_called_once()
    _, kwargs = mock_run.call_args
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 9100
    assert "main, hedge" in result.stdout


def test_serve_requires_settings(tmp_path) -> None:
    with patch("uvicorn.run") as mock_run:
        result = runner.invoke(app, ["--config", str(tmp_path / "nope.toml"), "serve"])

    assert result.exit_code == 1
    mock_run.assert_not_called()
