"""Mini README: Entry point CLI for the NeoFinance tracker.

This script exposes a Typer CLI with two commands:
    * run - start the FastAPI transactions service with uvicorn.
    * ledger - fetch the ledger from a running service and print the balance
      and the transactions matching a filter.

Settings such as ``MONGODB_URI`` and ``PORT`` are read from the environment
(or a ``.env`` file) through ``neofinance.configuration``.
"""

from __future__ import annotations

import typer
import uvicorn

from neofinance.client import LedgerFilter, LedgerState, LedgerStatus, TransactionsApiClient
from neofinance.configuration import get_settings
from neofinance.logging_utils import configure_root_logger, level_for_environment

cli = typer.Typer(help="Run and inspect the NeoFinance transactions service.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(level_for_environment(settings.environment))

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting NeoFinance on {effective_host}:{effective_port} "
        f"(storage: {settings.storage_backend}).\n"
        f"Dashboard: http://{browser_host}:{effective_port}/"
    )
    uvicorn.run(
        "neofinance.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def ledger(
    url: str = typer.Option("http://127.0.0.1:8080", help="Base URL of the service."),
    view: LedgerFilter = typer.Option(LedgerFilter.ALL, "--filter", help="Entries to list."),
) -> None:
    """Print the running balance and the filtered transaction list."""

    api = TransactionsApiClient.connect(url)
    try:
        state = LedgerState(api)
        if state.load() is LedgerStatus.ERROR:
            typer.echo(f"Error: {state.error}", err=True)
            raise typer.Exit(code=1)

        typer.echo(f"Balance: ${state.balance:.2f}")
        typer.echo(f"Income:  +${state.total_income:.2f}")
        typer.echo(f"Expense: -${state.total_expense:.2f}")
        for entry in state.visible(view):
            typer.echo(
                f"{entry.id}  {entry.occurred_at:%Y-%m-%d %H:%M}  "
                f"{entry.display_amount():>12}  {entry.description}"
            )
    finally:
        api.close()


if __name__ == "__main__":
    cli()
