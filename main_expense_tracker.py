"""Mini README: Entry point CLI for the shared expense tracker.

This script exposes a Typer CLI to serve the JSON API through uvicorn and to
inspect or update the ledger directly from a terminal. Every command reads
the same settings (``SHARED_EXPENSES_*`` environment variables or ``.env``)
so the CLI and the API operate on the same stored ledger.
"""

from __future__ import annotations

from typing import List

import typer
import uvicorn

from sharedexpenses.configuration import get_settings
from sharedexpenses.errors import ValidationError
from sharedexpenses.ledger import Debt, create_ledger
from sharedexpenses.logging_utils import configure_root_logger
from sharedexpenses.reports import build_report

cli = typer.Typer(help="Track shared expenses and settle up between participants.")


@cli.callback()
def main() -> None:
    """Configure logging before any command runs."""

    configure_root_logger(get_settings().log_level)


@cli.command()
def serve(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    reload: bool = typer.Option(False, help="Reload on code changes (development only)."),
) -> None:
    """Start the JSON API using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(f"Serving shared expenses at http://{browser_host}:{effective_port}")
    uvicorn.run(
        "sharedexpenses.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=reload,
    )


@cli.command()
def balance(
    unsettled_only: bool = typer.Option(False, help="Hide debts already settled."),
) -> None:
    """Print total spend, net positions and who owes whom."""

    state = create_ledger().get_balance()
    typer.echo(f"Total spent: {state.total_spent:.2f}")
    for user, amount in state.net_positions.items():
        typer.echo(f"  {user}: {amount:+.2f}")
    debts = state.unsettled_debts if unsettled_only else state.debts
    if not debts:
        typer.echo("All settled up.")
    for debt in debts:
        marker = " (settled)" if debt.is_settled else ""
        typer.echo(f"{debt.from_user} owes {debt.to_user} {debt.amount:.2f}{marker}")


@cli.command("add-expense")
def add_expense(
    description: str = typer.Argument(..., help="What the money was spent on."),
    amount: float = typer.Argument(..., help="Total amount paid."),
    paid_by: str = typer.Option(..., "--paid-by", help="Participant who paid."),
    participants: List[str] = typer.Option(
        ..., "--participant", "-p", help="Participant sharing the cost (repeatable)."
    ),
    receipt: str = typer.Option(..., help="Reference to the receipt image."),
) -> None:
    """Record a new shared expense."""

    ledger = create_ledger()
    try:
        expense = ledger.add_expense(description, amount, paid_by, participants, receipt)
    except ValidationError as error:
        typer.echo(f"Rejected: {error}", err=True)
        raise typer.Exit(code=1) from error
    typer.echo(f"Recorded {expense.id}: {expense.description} {expense.amount:.2f}")


@cli.command()
def settle(
    debtor: str = typer.Argument(..., help="Participant who paid the debt."),
    creditor: str = typer.Argument(..., help="Participant who received the payment."),
    amount: float = typer.Argument(..., help="Exact amount of the debt."),
) -> None:
    """Mark a debt as settled."""

    ledger = create_ledger()
    try:
        record = ledger.settle_debt(Debt(from_user=debtor, to_user=creditor, amount=amount))
    except ValidationError as error:
        typer.echo(f"Rejected: {error}", err=True)
        raise typer.Exit(code=1) from error
    typer.echo(f"Settled: {record.from_user} -> {record.to_user} {record.amount:.2f}")


@cli.command()
def report() -> None:
    """Print totals per category."""

    settings = get_settings()
    summary = build_report(create_ledger(settings).get_expenses(), period_days=settings.report_period_days)
    typer.echo(f"Total spent: {summary.total_spent:.2f}")
    typer.echo(f"Average per day ({settings.report_period_days} days): {summary.average_per_period:.2f}")
    for category, amount in summary.amount_by_category.items():
        typer.echo(f"  {category}: {amount:.2f}")


if __name__ == "__main__":
    cli()
