"""Account summary command - value portfolio-margin accounts."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Annotated, Any

import typer
from rich.table import Table

from braavos.cli.utils import (
    console,
    format_decimal,
    format_signed,
    run_async,
    settings_from_context,
)

if TYPE_CHECKING:
    from braavos.portfolio.models import AccountSummary
    from braavos.settings import Account, Settings


def summary_to_dict(summary: AccountSummary) -> dict[str, Any]:
    """JSON-ready view of a summary. Decimals are kept exact as strings."""
    swaps = summary.um_swap_summary
    return {
        "usdt_equity": str(summary.usdt_equity),
        "negative_balance": str(summary.negative_balance),
        "account_pnl": str(summary.account_pnl),
        "account_equity": str(summary.account_equity),
        "um_swap_summary": {
            "long_balance": str(swaps.long_balance),
            "long_pnl": str(swaps.long_pnl),
            "short_balance": str(swaps.short_balance),
            "short_pnl": str(swaps.short_pnl),
            "balance": str(swaps.balance),
            "pnl": str(swaps.pnl),
            "fra_pnl": str(swaps.fra_pnl),
            "positions": [
                {
                    "symbol": view.symbol,
                    "side": view.side,
                    "cur_price": str(view.cur_price),
                    "avg_price": str(view.avg_price),
                    "position_amt": str(view.position_amt),
                    "pos_u": str(view.pos_u),
                    "pnl_u": str(view.pnl_u),
                    "change": str(view.change),
                }
                for view in swaps.positions
            ],
        },
    }


def _render_summary(name: str, summary: AccountSummary) -> None:
    swaps = summary.um_swap_summary

    table = Table(title=f"Account {name}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Account equity", format_decimal(summary.account_equity))
    table.add_row("USDT equity", format_decimal(summary.usdt_equity))
    table.add_row("Negative balance", format_signed(summary.negative_balance))
    table.add_row("Account PnL", format_signed(summary.account_pnl))
    table.add_row("Swap notional (long)", format_decimal(swaps.long_balance))
    table.add_row("Swap PnL (long)", format_signed(swaps.long_pnl))
    table.add_row("Swap notional (short)", format_decimal(swaps.short_balance))
    table.add_row("Swap PnL (short)", format_signed(swaps.short_pnl))
    table.add_row("Swap notional", format_decimal(swaps.balance))
    table.add_row("Swap PnL", format_signed(swaps.pnl))
    table.add_row("FRA PnL", format_signed(swaps.fra_pnl))
    console.print(table)

    if not swaps.positions:
        console.print("[dim]No open swap positions.[/dim]")
        return

    positions = Table(title=f"Swap positions ({name})")
    positions.add_column("Symbol", style="cyan")
    positions.add_column("Side")
    positions.add_column("Qty", justify="right")
    positions.add_column("Entry", justify="right")
    positions.add_column("Mark", justify="right")
    positions.add_column("Notional", justify="right")
    positions.add_column("PnL", justify="right")
    positions.add_column("Change", justify="right")
    for view in swaps.positions:
        side_style = "green" if view.side == "long" else "red"
        positions.add_row(
            view.symbol,
            f"[{side_style}]{view.side}[/{side_style}]",
            str(view.position_amt),
            str(view.avg_price),
            str(view.cur_price),
            format_decimal(view.pos_u, 2),
            format_signed(view.pnl_u, 2),
            f"{view.change * 100:.2f}%",
        )
    console.print(positions)


async def _read_summaries(
    settings: Settings, accounts: list[Account]
) -> dict[str, AccountSummary]:
    from braavos.cli.client_factory import account_client
    from braavos.portfolio import PortfolioMarginReader
    from braavos.portfolio.reader import RAW_DATASETS

    summaries: dict[str, AccountSummary] = {}
    for account in accounts:
        try:
            async with account_client(settings, account) as client:
                reader = PortfolioMarginReader(client, account.policy, account=account.name)
                raw = await reader.fetch_raw_data()
        except (OSError, ValueError) as e:
            console.print(f"[red]Error:[/red] {e}")
            raise typer.Exit(1) from None

        if len(raw.failed) == len(RAW_DATASETS):
            console.print(f"[red]Error:[/red] {account.name}: every request failed")
            raise typer.Exit(1)
        if raw.failed:
            console.print(
                f"[yellow]Warning:[/yellow] {account.name}: could not fetch "
                f"{', '.join(raw.failed)}; values below are incomplete."
            )
        summaries[account.name] = reader.summarize(raw)
    return summaries


def account_summary(
    ctx: typer.Context,
    account: Annotated[
        str | None,
        typer.Option("--account", "-a", help="Account name (default: every account)."),
    ] = None,
    output_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
) -> None:
    """Value portfolio-margin accounts and print the summary."""
    from braavos.settings import SettingsError

    settings = settings_from_context(ctx)
    try:
        accounts = [settings.get_account(account)] if account else list(settings.accounts)
    except SettingsError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from None

    summaries = run_async(_read_summaries(settings, accounts))

    if output_json:
        payload = {name: summary_to_dict(summary) for name, summary in summaries.items()}
        typer.echo(json.dumps(payload, indent=2))
        return

    for name, summary in summaries.items():
        _render_summary(name, summary)
