"""
CLI application for braavos.

Values Binance portfolio-margin accounts and exports the result as Prometheus metrics.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from dotenv import find_dotenv, load_dotenv

from braavos.cli.account import account_summary
from braavos.cli.serve import serve
from braavos.cli.utils import CliState, console, exit_api_error, run_async

app = typer.Typer(
    name="braavos",
    help="Binance portfolio-margin account valuation and metrics exporter.",
    add_completion=False,
)

app.command("summary")(account_summary)
app.command("serve")(serve)


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Settings file. Defaults to BRAAVOS_CONFIG or conf/Settings.toml.",
            show_default=False,
        ),
    ] = None,
) -> None:
    """braavos CLI."""
    load_dotenv(find_dotenv(usecwd=True))
    ctx.obj = CliState(config_path=config)


@app.command()
def version() -> None:
    """Show version information."""
    from braavos import __version__

    console.print(f"braavos v{__version__}")


@app.command()
def ping(
    ctx: typer.Context,
) -> None:
    """Check connectivity to the Binance REST API."""
    import time

    from braavos.api.exceptions import BinanceAPIError
    from braavos.cli.client_factory import public_client
    from braavos.settings import SettingsError, load_settings

    state = ctx.obj if isinstance(ctx.obj, CliState) else CliState()
    # A settings file is optional here; it only supplies the proxy.
    try:
        proxy = load_settings(state.config_path).proxy
    except SettingsError:
        proxy = None

    async def _ping() -> float:
        async with public_client(proxy=proxy) as client:
            started = time.perf_counter()
            try:
                await client.ping()
            except BinanceAPIError as e:
                exit_api_error(e)
            except Exception as e:
                console.print(f"[red]Error:[/red] {e}")
                raise typer.Exit(1) from None
            return time.perf_counter() - started

    elapsed = run_async(_ping())
    console.print(f"[green]OK[/green] Binance REST API reachable ({elapsed * 1000:.0f} ms)")


__all__ = ["app"]
