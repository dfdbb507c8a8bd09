"""Shared utilities for CLI commands (console output, settings, async helpers)."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer
from rich.console import Console

from braavos.settings import SettingsError, load_settings

if TYPE_CHECKING:
    from collections.abc import Coroutine
    from pathlib import Path

    from braavos.api.exceptions import BinanceAPIError
    from braavos.settings import Settings

console = Console()

T = TypeVar("T")


def run_async(coro: Coroutine[object, object, T]) -> T:
    """Run a coroutine from a sync CLI command.

    Raises:
        typer.Exit: With code 130 on KeyboardInterrupt (standard SIGINT exit code).
    """
    try:
        return asyncio.run(coro)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(130) from None


def exit_api_error(error: BinanceAPIError) -> NoReturn:
    """Print a Binance API error and exit with code 1."""
    code = f" (code {error.code})" if error.code is not None else ""
    console.print(f"[red]API Error {error.status_code}{code}:[/red] {error.message}")
    raise typer.Exit(1)


def load_settings_or_exit(path: Path | None) -> Settings:
    """Load settings, printing the problem and exiting with code 1 if they are unusable."""
    try:
        return load_settings(path)
    except SettingsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None


def format_decimal(value: Decimal, places: int = 4) -> str:
    """Fixed-point display value; the full precision is kept in `--json` output."""
    return f"{value.quantize(Decimal(1).scaleb(-places)):,}"


def format_signed(value: Decimal, places: int = 4) -> str:
    """Format a signed amount with color."""
    text = format_decimal(value, places)
    if value > 0:
        return f"[green]+{text}[/green]"
    if value < 0:
        return f"[red]{text}[/red]"
    return text


@dataclass(frozen=True)
class CliState:
    """Global options shared by every command via `ctx.obj`."""

    config_path: Path | None = None


def settings_from_context(ctx: typer.Context) -> Settings:
    state = ctx.obj if isinstance(ctx.obj, CliState) else CliState()
    return load_settings_or_exit(state.config_path)
