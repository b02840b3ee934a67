"""Transaction management commands (add, edit, delete, show, list)."""

import sqlite3
import tomllib
from dataclasses import replace
from datetime import date

import typer

from ftracker.commands.context import (
    CliState,
    console,
    exit_with_error,
    format_money,
    open_ledger,
    transactions_table,
)
from ftracker.dates import month_range, parse_month
from ftracker.domain.aggregation import summary
from ftracker.domain.models import TransactionDraft
from ftracker.domain.query import FilterCriteria, filter_transactions, sort_transactions
from ftracker.errors import FTrackerError


def add_command(
    state: CliState,
    amount: str,
    txn_type: str,
    category: str,
    txn_date: str | None = None,
    description: str | None = None,
) -> None:
    """Add a transaction.

    Args:
        state: Global CLI options.
        amount: Amount as typed (e.g. "12.50").
        txn_type: "income" or "expense".
        category: Category name.
        txn_date: Transaction date; defaults to today.
        description: Optional description.
    """
    draft = TransactionDraft(
        amount=amount,
        type=txn_type,
        category=category,
        date=txn_date or date.today().isoformat(),
        description=description,
    )

    try:
        service, user_id = open_ledger(state)
        txn = service.create(user_id, draft)
    except (FTrackerError, sqlite3.Error, tomllib.TOMLDecodeError, OSError) as e:
        exit_with_error(e)

    console.print("[green]✓[/green] Transaction added:")
    console.print(f"  ID: {txn.id}")
    console.print(f"  Date: {txn.date.isoformat()}")
    console.print(f"  Category: {txn.category} ({txn.type.value})")
    console.print(f"  Amount: {format_money(txn.amount, txn.type)}")
    if txn.description:
        console.print(f"  Description: {txn.description}")


def edit_command(
    state: CliState,
    transaction_id: str,
    amount: str | None = None,
    txn_type: str | None = None,
    category: str | None = None,
    txn_date: str | None = None,
    description: str | None = None,
) -> None:
    """Edit a transaction; fields not given keep their current value."""
    try:
        service, user_id = open_ledger(state)
        current = service.get(user_id, transaction_id)

        draft = TransactionDraft.from_transaction(current)
        changes = {
            "amount": amount,
            "type": txn_type,
            "category": category,
            "date": txn_date,
            "description": description,
        }
        draft = replace(draft, **{name: value for name, value in changes.items() if value is not None})

        txn = service.update(user_id, transaction_id, draft)
    except (FTrackerError, sqlite3.Error, tomllib.TOMLDecodeError, OSError) as e:
        exit_with_error(e)

    console.print(f"[green]✓[/green] Transaction {txn.id} updated:")
    console.print(f"  Date: {txn.date.isoformat()}")
    console.print(f"  Category: {txn.category} ({txn.type.value})")
    console.print(f"  Amount: {format_money(txn.amount, txn.type)}")


def delete_command(state: CliState, transaction_id: str, yes: bool = False) -> None:
    """Delete a transaction after confirmation."""
    try:
        service, user_id = open_ledger(state)
        txn = service.get(user_id, transaction_id)

        if not yes:
            console.print(
                f"{txn.date.isoformat()}  {txn.category}  {format_money(txn.amount, txn.type)}  {txn.description or ''}"
            )
            if not typer.confirm("Are you sure you want to delete this transaction?", default=False):
                console.print("[dim]Nothing deleted[/dim]")
                return

        service.delete(user_id, transaction_id)
    except (FTrackerError, sqlite3.Error, tomllib.TOMLDecodeError, OSError) as e:
        exit_with_error(e)

    console.print(f"[green]✓[/green] Transaction {transaction_id} deleted")


def show_command(state: CliState, transaction_id: str) -> None:
    """Show a single transaction."""
    try:
        service, user_id = open_ledger(state)
        txn = service.get(user_id, transaction_id)
    except (FTrackerError, sqlite3.Error, tomllib.TOMLDecodeError, OSError) as e:
        exit_with_error(e)

    console.print(f"[bold]Transaction {txn.id}[/bold]")
    console.print(f"  Date: {txn.date.isoformat()}")
    console.print(f"  Type: {txn.type.value}")
    console.print(f"  Category: {txn.category}")
    console.print(f"  Amount: {format_money(txn.amount, txn.type)}")
    console.print(f"  Description: {txn.description or '-'}")
    console.print(f"  Created: {txn.created_at.isoformat()}")


def list_command(
    state: CliState,
    txn_type: str | None = None,
    category: str | None = None,
    search: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
    month: str | None = None,
    sort_by: str = "date",
    ascending: bool = False,
    limit: int | None = None,
) -> None:
    """List transactions with filters, sorting and totals of what is shown."""
    try:
        if month:
            first_day, last_day, _ = month_range(parse_month(month))
            start_date = start_date or first_day.isoformat()
            end_date = end_date or last_day.isoformat()

        criteria = FilterCriteria(
            type=txn_type,
            category=category,
            search=search,
            start_date=start_date,
            end_date=end_date,
        )

        service, user_id = open_ledger(state)
        transactions = service.list_transactions(user_id)
        filtered = filter_transactions(transactions, criteria)
        ordered = sort_transactions(filtered, sort_by, "asc" if ascending else "desc")
    except (FTrackerError, sqlite3.Error, tomllib.TOMLDecodeError, OSError) as e:
        exit_with_error(e)
    except ValueError as e:
        console.print(f"[red]Invalid option: {e}[/red]", style="bold")
        raise typer.Exit(1) from e

    if not ordered:
        console.print("[yellow]No transactions found[/yellow]")
        return

    shown = ordered[:limit] if limit else ordered
    title = f"Transactions (showing {len(shown)} of {len(ordered)})"
    console.print(transactions_table(title, shown))

    totals = summary(ordered, date.today())
    console.print(f"Total Income: {format_money(totals.total_income)}")
    console.print(f"Total Expenses: {format_money(totals.total_expenses)}")
    net_style = "green" if totals.balance >= 0 else "red"
    console.print(f"Net: [{net_style}]{format_money(totals.balance)}[/{net_style}]")
