"""Serve command - run the Prometheus exporter."""

from __future__ import annotations

from typing import Annotated

import typer

from braavos.cli.utils import console, settings_from_context
from braavos.constants import DEFAULT_EXPORTER_HOST, DEFAULT_EXPORTER_PORT


def serve(
    ctx: typer.Context,
    host: Annotated[str, typer.Option("--host", help="Interface to bind.")] = (
        DEFAULT_EXPORTER_HOST
    ),
    port: Annotated[int, typer.Option("--port", "-p", help="Port to listen on.")] = (
        DEFAULT_EXPORTER_PORT
    ),
) -> None:
    """Serve account metrics on /metrics for Prometheus."""
    import uvicorn

    from braavos.exporter import create_app

    settings = settings_from_context(ctx)
    app = create_app(settings)

    names = ", ".join(account.name for account in settings.accounts)
    console.print(f"Serving metrics for [cyan]{names}[/cyan] on http://{host}:{port}/metrics")
    uvicorn.run(app, host=host, port=port, log_level="warning")
