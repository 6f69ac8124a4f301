"""Mini README: Entry point CLI for Pocket Ledger.

This script exposes a Typer CLI for recording and reviewing transactions
from a terminal, and for starting the JSON API with uvicorn. It configures
logging from settings and opens the database named by
``POCKETLEDGER_DATABASE_PATH`` (or the ``.env`` file).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import List, Optional

import typer
import uvicorn

from pocketledger.configuration import get_settings
from pocketledger.finance import Transaction, TransactionType, signed_amount
from pocketledger.logging_utils import configure_root_logger
from pocketledger.storage import LedgerStore, open_ledger

cli = typer.Typer(help="Record transactions and review monthly balances.")


def _open_store() -> LedgerStore:
    settings = get_settings()
    configure_root_logger(settings.log_level)
    return open_ledger(settings)


def _parse_amount(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation as error:
        raise typer.BadParameter(f"'{value}' is not a number", param_hint="--amount") from error


def _format_line(transaction: Transaction) -> str:
    return (
        f"{transaction.id:>5}  {transaction.occurred_at:%Y-%m-%d %H:%M}  "
        f"{transaction.amount:>12,.2f}  {transaction.category:<14}  {transaction.description}"
    )


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the JSON API using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting Pocket Ledger on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "pocketledger.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def add(
    amount: str = typer.Option(..., help="Amount as entered; the sign comes from --expense."),
    description: str = typer.Option(..., help="What the money was for."),
    category: str = typer.Option("General", help="Free-text category label."),
    expense: bool = typer.Option(False, "--expense", help="Record as an expense."),
    when: Optional[datetime] = typer.Option(
        None,
        formats=["%Y-%m-%d %H:%M", "%Y-%m-%d"],
        help="When it happened (defaults to now).",
    ),
    image: Optional[List[str]] = typer.Option(None, help="Receipt image path; repeatable."),
) -> None:
    """Record a new income or expense."""

    direction = TransactionType.EXPENSE if expense else TransactionType.INCOME
    transaction = Transaction(
        amount=signed_amount(_parse_amount(amount), direction),
        description=description,
        category=category,
        occurred_at=when or datetime.now(),
        image_paths=list(image or []),
    )
    transaction_id = _open_store().create(transaction)
    typer.echo(f"Recorded transaction {transaction_id}.")


@cli.command("list")
def list_transactions(
    month: Optional[str] = typer.Option(None, help="Month label, e.g. 'Mar 2025'."),
) -> None:
    """List transactions, newest first."""

    store = _open_store()
    transactions = store.list_by_month(month) if month else store.list_all()
    if not transactions:
        typer.echo("No transactions found.")
        return
    for transaction in transactions:
        typer.echo(_format_line(transaction))


@cli.command()
def delete(transaction_id: int = typer.Argument(..., help="Id of the transaction to remove.")) -> None:
    """Delete a transaction and its receipt references."""

    store = _open_store()
    if store.get_by_id(transaction_id) is None:
        typer.echo(f"Transaction {transaction_id} not found.")
        raise typer.Exit(code=1)
    store.delete_by_id(transaction_id)
    typer.echo(f"Deleted transaction {transaction_id}.")


@cli.command()
def summary(
    month: Optional[str] = typer.Option(None, help="Month label, e.g. 'Mar 2025'."),
) -> None:
    """Show totals overall or for a single month."""

    store = _open_store()
    if month:
        figures = store.month_summary(month)
        typer.echo(f"{figures.month_label}: {figures.transaction_count} transactions")
        typer.echo(f"Income:      {figures.income:,.2f}")
        typer.echo(f"Expenses:    {abs(figures.expenses):,.2f}")
        typer.echo(f"Profit/loss: {figures.profit_loss:,.2f} ({figures.outcome})")
        return
    totals = store.summary()
    typer.echo(f"All time: {totals.transaction_count} transactions")
    typer.echo(f"Income:   {totals.income:,.2f}")
    typer.echo(f"Expenses: {abs(totals.expenses):,.2f}")
    typer.echo(f"Balance:  {totals.balance:,.2f}")


if __name__ == "__main__":
    cli()
