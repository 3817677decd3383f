"""Mini README: Entry point CLI for the budget widget.

This script exposes a Typer CLI that starts the FastAPI dashboard and also
drives the ledger directly from a shell: set the budget, record or delete
expenses, review the history, and export CSV or chart files. Every command
builds the ledger from the same settings the dashboard uses, so both surfaces
read and write the same persisted record.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import NoReturn

import typer
import uvicorn

from budgetwidget.bootstrap import build_ledger_manager
from budgetwidget.configuration import get_settings
from budgetwidget.errors import LedgerError
from budgetwidget.export import CategoryChartRenderer, ChartKind, chart_filename, csv_filename
from budgetwidget.ledger import LedgerStateManager
from budgetwidget.logging_utils import configure_root_logger

cli = typer.Typer(help="Track a monthly budget and the expenses recorded against it.")


def _ledger() -> LedgerStateManager:
    settings = get_settings()
    configure_root_logger(settings.log_level)
    return build_ledger_manager(settings)


def _fail(error: Exception) -> NoReturn:
    typer.secho(str(error), fg=typer.colors.RED, err=True)
    raise typer.Exit(code=1)


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the dashboard using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 bind-all address directly.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting budget widget on {effective_host}:{effective_port}.\n"
        f"Open your browser at http://{browser_host}:{effective_port}"
    )
    uvicorn.run(
        "budgetwidget.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary() -> None:
    """Show budget, spent, and remaining totals with per-category sums."""

    ledger = _ledger()
    currency = get_settings().currency
    totals = ledger.compute_summary()
    if ledger.user_name:
        typer.echo(f"Hallo {ledger.user_name}")
    typer.echo(f"Budget:     {currency} {totals.budget:.2f}")
    typer.echo(f"Spent:      {currency} {totals.spent:.2f}")
    typer.echo(f"Remaining:  {currency} {totals.remaining:.2f}")
    if totals.over_budget:
        typer.secho("Over budget!", fg=typer.colors.RED)
    for category, amount in ledger.aggregate_by_category().items():
        typer.echo(f"  {category}: {currency} {amount:.2f}")


@cli.command("set-budget")
def set_budget(amount: str = typer.Argument(..., help="New monthly budget.")) -> None:
    """Replace the monthly budget."""

    try:
        value = _ledger().set_budget(amount)
    except LedgerError as error:
        _fail(error)
    typer.echo(f"Budget set to {value:.2f}")


@cli.command()
def add(
    amount: str = typer.Argument(..., help="Positive amount spent."),
    description: str = typer.Option("", "--description", "-d", help="What the money was spent on."),
    category: str = typer.Option("", "--category", "-c", help="Category name."),
) -> None:
    """Record a new expense."""

    try:
        transaction = _ledger().add_transaction(description, amount, category)
    except LedgerError as error:
        _fail(error)
    typer.echo(
        f"{transaction.transaction_id}: {transaction.category} — {transaction.description} — {transaction.amount:.2f}"
    )


@cli.command()
def delete(transaction_id: str = typer.Argument(..., help="Identifier such as txn_0001.")) -> None:
    """Delete a transaction; unknown identifiers are ignored."""

    if _ledger().delete_transaction(transaction_id):
        typer.echo(f"Deleted {transaction_id}")
    else:
        typer.echo(f"No transaction {transaction_id}; nothing deleted")


@cli.command()
def reset(yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt.")) -> None:
    """Clear the whole history while keeping the budget."""

    if not yes and not typer.confirm("Delete the whole history?"):
        raise typer.Abort()
    cleared = _ledger().reset_all()
    typer.echo(f"Removed {cleared} transactions")


@cli.command()
def history(
    query: str = typer.Option("", "--search", "-s", help="Text to look for in description or category."),
    category: str = typer.Option("", "--category", "-c", help="Only show this category."),
) -> None:
    """List transactions, newest first, optionally filtered."""

    ledger = _ledger()
    matches = list(reversed(ledger.filter_transactions(query, category)))
    if not matches:
        typer.echo("Keine Einträge.")
        return
    for transaction in matches:
        typer.echo(
            f"{transaction.transaction_id}  {transaction.created_at:%Y-%m-%d %H:%M}  "
            f"{transaction.category} — {transaction.description} — {transaction.amount:.2f}"
        )


@cli.command("export-csv")
def export_csv(
    directory: Path = typer.Option(Path("."), help="Directory to write the CSV file into."),
) -> None:
    """Write the history to verlauf_<date>.csv."""

    try:
        payload = _ledger().to_csv()
    except LedgerError as error:
        _fail(error)
    destination = directory / csv_filename(date.today())
    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(payload, encoding="utf-8")
    typer.echo(f"Wrote {destination}")


@cli.command("export-chart")
def export_chart(
    directory: Path = typer.Option(Path("."), help="Directory to write the PNG file into."),
    kind: str = typer.Option("bar", help="Chart style: bar or doughnut."),
) -> None:
    """Render the category chart to diagramm_<date>.png."""

    ledger = _ledger()
    renderer = CategoryChartRenderer(currency=get_settings().currency)
    try:
        chart_kind = ChartKind.from_str(kind)
        ledger.require_transactions()
        destination = renderer.export(
            ledger.aggregate_by_category(),
            directory / chart_filename(date.today()),
            chart_kind,
        )
    except ValueError as error:
        _fail(error)
    typer.echo(f"Wrote {destination}")


@cli.command("set-name")
def set_name(name: str = typer.Argument(..., help="Name shown in the greeting.")) -> None:
    """Store the display name."""

    try:
        value = _ledger().set_user_name(name)
    except LedgerError as error:
        _fail(error)
    typer.echo(f"Hallo {value}")


@cli.command("set-theme")
def set_theme(theme: str = typer.Argument(..., help="Theme identifier, e.g. standard.")) -> None:
    """Store the dashboard theme."""

    try:
        value = _ledger().set_theme(theme)
    except LedgerError as error:
        _fail(error)
    typer.echo(f"Theme set to {value}")


if __name__ == "__main__":
    cli()
