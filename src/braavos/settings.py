"""
Account settings loaded from a TOML file.

Example:

    proxy = "http://localhost:7890"

    [[account]]
    name = "main"
    api_key = "..."
    secret = "..."
    funding_rate_arbitrage = ["SOL", "ETH"]
    burning_free = true
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path

import structlog
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

from braavos.api.client import BinancePortfolioClient
from braavos.api.config import APIConfig
from braavos.api.exceptions import BraavosError
from braavos.constants import DEFAULT_FEE_DISCOUNT_ASSET
from braavos.exporter.metrics import check_metric_names
from braavos.paths import DEFAULT_SETTINGS_PATH
from braavos.portfolio.models import AccountPolicy

logger = structlog.get_logger()

CONFIG_ENV_VAR = "BRAAVOS_CONFIG"


class SettingsError(BraavosError):
    """Settings file is missing, unreadable, or invalid."""


class Account(BaseModel):
    """One portfolio-margin account and its valuation toggles."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    api_key: SecretStr
    secret: SecretStr
    funding_rate_arbitrage: tuple[str, ...] = ()
    burning_free: bool = False
    fee_discount_asset: str = DEFAULT_FEE_DISCOUNT_ASSET

    @field_validator("funding_rate_arbitrage")
    @classmethod
    def _normalize_assets(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(asset.strip().upper() for asset in value if asset.strip())

    @property
    def policy(self) -> AccountPolicy:
        return AccountPolicy(
            burn_fee_discount=self.burning_free,
            fra_base_assets=self.funding_rate_arbitrage,
            fee_discount_asset=self.fee_discount_asset,
        )

    def client(self, config: APIConfig | None = None) -> BinancePortfolioClient:
        """Create a signed client for this account. The caller owns (and must close) it."""
        return BinancePortfolioClient(
            api_key=self.api_key.get_secret_value(),
            secret=self.secret.get_secret_value(),
            config=config,
        )


class Settings(BaseModel):
    """Top-level settings: optional HTTPS proxy plus the configured accounts."""

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    proxy: str | None = None
    accounts: tuple[Account, ...] = Field(alias="account", min_length=1)

    @field_validator("accounts")
    @classmethod
    def _unique_names(cls, value: tuple[Account, ...]) -> tuple[Account, ...]:
        names = [account.name for account in value]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"duplicate account names: {', '.join(duplicates)}")
        check_metric_names(names)
        return value

    @property
    def api_config(self) -> APIConfig:
        return APIConfig(proxy=self.proxy)

    def get_account(self, name: str | None = None) -> Account:
        """
        Look up an account by name.

        Args:
            name: Account name. When omitted, the first configured account is returned.

        Raises:
            SettingsError: If no account has that name.
        """
        if name is None:
            return self.accounts[0]
        for account in self.accounts:
            if account.name == name:
                return account
        known = ", ".join(account.name for account in self.accounts)
        raise SettingsError(f"Unknown account {name!r} (configured: {known})")

    def client_for(self, account: Account) -> BinancePortfolioClient:
        return account.client(self.api_config)


def resolve_settings_path(path: Path | str | None = None) -> Path:
    """Explicit path, else `$BRAAVOS_CONFIG`, else `conf/Settings.toml`."""
    if path is not None:
        return Path(path)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_SETTINGS_PATH


def load_settings(path: Path | str | None = None) -> Settings:
    """
    Read and validate the settings file.

    Raises:
        SettingsError: If the file does not exist, is not valid TOML, or fails validation.
    """
    settings_path = resolve_settings_path(path)
    try:
        with settings_path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise SettingsError(f"Settings file not found: {settings_path}") from e
    except tomllib.TOMLDecodeError as e:
        raise SettingsError(f"Invalid TOML in {settings_path}: {e}") from e

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {settings_path}:\n{e}") from e

    logger.debug(
        "Loaded settings",
        path=str(settings_path),
        accounts=[account.name for account in settings.accounts],
        proxy=settings.proxy is not None,
    )
    return settings
