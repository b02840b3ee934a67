"""CLI entry point for ftracker."""

from pathlib import Path

import typer

from ftracker.commands.admin import init_command
from ftracker.commands.context import CliState
from ftracker.commands.report import categories_command, summary_command
from ftracker.commands.transactions import (
    add_command,
    delete_command,
    edit_command,
    list_command,
    show_command,
)
from ftracker.log import configure_logging

app = typer.Typer(
    name="ftracker",
    help="FTracker - track your income and expenses",
    add_completion=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    user: str = typer.Option(None, "--user", "-u", help="Ledger owner (default: default_user from config)"),
    db: Path = typer.Option(None, "--db", envvar="FTRACKER_DB", help="Database file"),
    config: Path = typer.Option(None, "--config", envvar="FTRACKER_CONFIG", help="Config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """FTracker - track your income and expenses."""
    configure_logging(verbose)
    ctx.obj = CliState(user=user, db_path=db, config_path=config)


@app.command(name="init")
def init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize ftracker database and configuration."""
    init_command(ctx.obj, force)


@app.command()
def add(
    ctx: typer.Context,
    amount: str,
    txn_type: str = typer.Option(..., "--type", "-t", help="'income' or 'expense'"),
    category: str = typer.Option(..., "--category", "-c", help="Category name"),
    txn_date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: today)"),
    description: str = typer.Option(None, "--description", "-m", help="Optional description"),
) -> None:
    """Add a transaction to your ledger."""
    add_command(ctx.obj, amount, txn_type, category, txn_date, description)


@app.command()
def edit(
    ctx: typer.Context,
    transaction_id: str,
    amount: str = typer.Option(None, "--amount", "-a", help="New amount"),
    txn_type: str = typer.Option(None, "--type", "-t", help="'income' or 'expense'"),
    category: str = typer.Option(None, "--category", "-c", help="New category"),
    txn_date: str = typer.Option(None, "--date", "-d", help="New date"),
    description: str = typer.Option(None, "--description", "-m", help="New description"),
) -> None:
    """Edit a transaction; options not given stay unchanged."""
    edit_command(ctx.obj, transaction_id, amount, txn_type, category, txn_date, description)


@app.command()
def delete(
    ctx: typer.Context,
    transaction_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
) -> None:
    """Delete a transaction permanently."""
    delete_command(ctx.obj, transaction_id, yes)


@app.command()
def show(ctx: typer.Context, transaction_id: str) -> None:
    """Show a single transaction."""
    show_command(ctx.obj, transaction_id)


@app.command(name="list")
def list_transactions(
    ctx: typer.Context,
    txn_type: str = typer.Option(None, "--type", "-t", help="Only 'income' or 'expense'"),
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
    search: str = typer.Option(None, "--search", "-s", help="Text in description, category or amount"),
    start_date: str = typer.Option(None, "--from", help="Earliest date (inclusive)"),
    end_date: str = typer.Option(None, "--to", help="Latest date (inclusive)"),
    month: str = typer.Option(None, "--month", help="Specific month (YYYY-MM)"),
    sort_by: str = typer.Option("date", "--sort", help="Sort by 'date', 'amount', 'category' or another field"),
    ascending: bool = typer.Option(False, "--asc", help="Oldest / smallest first"),
    limit: int = typer.Option(None, "--limit", "-n", help="Maximum transactions to show"),
) -> None:
    """List your transactions."""
    list_command(ctx.obj, txn_type, category, search, start_date, end_date, month, sort_by, ascending, limit)


@app.command()
def summary(
    ctx: typer.Context,
    month: str = typer.Option(None, "--month", help="Month for averages (YYYY-MM, default: current)"),
) -> None:
    """Show your dashboard: totals, averages and breakdowns."""
    summary_command(ctx.obj, month)


@app.command()
def categories(
    ctx: typer.Context,
    txn_type: str = typer.Option(None, "--type", "-t", help="Show the allowed set for 'income' or 'expense'"),
) -> None:
    """List categories."""
    categories_command(ctx.obj, txn_type)


if __name__ == "__main__":
    app()
