"""Shared state and helpers for CLI commands."""

import sqlite3
import sys
import tomllib
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import NoReturn

from rich.console import Console
from rich.table import Table

from ftracker.config import Settings, get_config_path, load_settings
from ftracker.domain.models import Transaction, TransactionType
from ftracker.errors import FTrackerError, NotFoundError, StorageCorruptionError, ValidationError
from ftracker.ledger import LedgerService
from ftracker.store.kv import SqliteKeyValueStore
from ftracker.store.schema import get_db_path
from ftracker.store.transactions import TransactionStore

console = Console()


@dataclass(frozen=True)
class CliState:
    """Global options given before the command name."""

    user: str | None = None
    db_path: Path | None = None
    config_path: Path | None = None

    def resolved_config_path(self) -> Path:
        return self.config_path or get_config_path()

    def resolved_db_path(self) -> Path:
        return self.db_path or get_db_path()

    def settings(self) -> Settings:
        return load_settings(self.resolved_config_path())

    def user_id(self, settings: Settings) -> str:
        return self.user or settings.default_user


def open_ledger(state: CliState) -> tuple[LedgerService, str]:
    """Build the ledger service and resolve the acting user.

    Returns:
        Tuple of (service, user_id).
    """
    settings = state.settings()
    store = TransactionStore(SqliteKeyValueStore(state.resolved_db_path()), strict=settings.strict_storage)
    service = LedgerService(
        store,
        categories=settings.categories,
        strict_categories=settings.strict_categories,
    )
    return service, state.user_id(settings)


def exit_with_error(error: Exception) -> NoReturn:
    """Print an error the way commands report failures and exit with status 1."""
    if isinstance(error, ValidationError):
        console.print("[red]Invalid transaction:[/red]", style="bold")
        for field_name, message in error.errors.items():
            console.print(f"  {field_name}: {message}")
    elif isinstance(error, NotFoundError):
        console.print(f"[yellow]{error}[/yellow]")
    elif isinstance(error, StorageCorruptionError):
        console.print(f"[red]{error}[/red]", style="bold")
        console.print("[dim]Restore a backup or remove the damaged entry before writing again[/dim]")
    elif isinstance(error, sqlite3.Error):
        console.print(f"[red]Database error: {error}[/red]", style="bold")
    elif isinstance(error, tomllib.TOMLDecodeError):
        console.print(f"[red]Config error: {error}[/red]", style="bold")
    elif isinstance(error, FTrackerError):
        console.print(f"[red]Error: {error}[/red]", style="bold")
    else:
        console.print(f"[red]Filesystem error: {error}[/red]", style="bold")
    sys.exit(1)


def format_money(amount: Decimal, txn_type: TransactionType | None = None) -> str:
    """Format an amount for display, signed and coloured by type.

    Args:
        amount: Amount magnitude.
        txn_type: Income shows "+" in green, expense "-" in red; None shows
            the plain amount.

    Returns:
        Rich markup string (e.g., "[red]-$12.50[/red]").
    """
    if txn_type == TransactionType.INCOME:
        return f"[green]+${amount:,.2f}[/green]"
    if txn_type == TransactionType.EXPENSE:
        return f"[red]-${amount:,.2f}[/red]"
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def transactions_table(title: str, transactions: list[Transaction]) -> Table:
    """Build a table of transactions."""
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Category", style="magenta")
    table.add_column("Type")
    table.add_column("Amount", justify="right")

    for txn in transactions:
        table.add_row(
            txn.id,
            txn.date.isoformat(),
            txn.description or "[dim]-[/dim]",
            txn.category,
            txn.type.value,
            format_money(txn.amount, txn.type),
        )
    return table
