"""Summary and category commands for viewing ledger figures."""

import sqlite3
import tomllib
from datetime import date

import typer
from rich.table import Table

from ftracker.commands.context import (
    CliState,
    console,
    exit_with_error,
    format_money,
    open_ledger,
    transactions_table,
)
from ftracker.dates import month_label, month_range, parse_month
from ftracker.domain.aggregation import MonthlyTotal, category_breakdown, monthly_breakdown, summary
from ftracker.domain.categories import categories_for
from ftracker.domain.models import Month, Transaction, TransactionType
from ftracker.domain.query import distinct_categories, recent_transactions
from ftracker.domain.validation import parse_type
from ftracker.errors import FTrackerError


def resolve_reference_date(month: str | None) -> date:
    """Reference date for averages: first day of month, or today.

    Raises:
        ValueError: If month is not YYYY-MM.
    """
    if month:
        first_day, _, _ = month_range(parse_month(month))
        return first_day
    return date.today()


def render_category_breakdown(transactions: list[Transaction]) -> None:
    """Render per-category totals, split by type, largest first."""
    for txn_type, title in ((TransactionType.EXPENSE, "Expenses"), (TransactionType.INCOME, "Income")):
        breakdown = category_breakdown(transactions, txn_type)
        if not breakdown:
            continue

        console.print(f"\n[bold]{title} by category:[/bold]")
        for category, amount in sorted(breakdown.items(), key=lambda x: x[1], reverse=True):
            console.print(f"  {category:20} {format_money(amount, txn_type):>12}")


def render_monthly_breakdown(months: list[MonthlyTotal]) -> None:
    """Render the monthly overview table."""
    table = Table(title="Monthly Overview")
    table.add_column("Month", style="cyan")
    table.add_column("Income", justify="right")
    table.add_column("Expenses", justify="right")
    table.add_column("Net", justify="right")

    for row in months:
        table.add_row(
            row.label,
            format_money(row.income_total, TransactionType.INCOME),
            format_money(row.expense_total, TransactionType.EXPENSE),
            format_money(row.net),
        )
    console.print(table)


def summary_command(state: CliState, month: str | None = None) -> None:
    """Show totals, monthly averages, breakdowns and recent transactions."""
    try:
        reference = resolve_reference_date(month)
    except ValueError as e:
        console.print(f"[red]Invalid month: {e}[/red]", style="bold")
        raise typer.Exit(1) from e

    try:
        service, user_id = open_ledger(state)
        transactions = service.list_transactions(user_id)
    except (FTrackerError, sqlite3.Error, tomllib.TOMLDecodeError, OSError) as e:
        exit_with_error(e)

    if not transactions:
        console.print("[yellow]No transactions yet[/yellow]")
        console.print("[dim]Use 'ftracker add' to record your first transaction[/dim]")
        return

    totals = summary(transactions, reference)
    period = month_label(Month(reference.strftime("%Y-%m")))

    console.print(f"\n[bold]Summary for {user_id}[/bold]")
    console.print(f"  Total Income:   {format_money(totals.total_income, TransactionType.INCOME)}")
    console.print(f"  Total Expenses: {format_money(totals.total_expenses, TransactionType.EXPENSE)}")
    balance_style = "green" if totals.balance >= 0 else "red"
    console.print(f"  Balance:        [{balance_style}]{format_money(totals.balance)}[/{balance_style}]")
    console.print(f"  [dim]Avg income ({period}): {format_money(totals.avg_income)}[/dim]")
    console.print(f"  [dim]Avg expense ({period}): {format_money(totals.avg_expenses)}[/dim]")

    render_category_breakdown(transactions)

    console.print()
    render_monthly_breakdown(monthly_breakdown(transactions))

    console.print(transactions_table("Recent Transactions", recent_transactions(transactions)))


def categories_command(state: CliState, txn_type: str | None = None) -> None:
    """List categories used in the ledger, or the allowed set for a type."""
    if txn_type:
        try:
            parsed = parse_type(txn_type)
            settings = state.settings()
        except ValueError as e:
            console.print(f"[red]{e}[/red]", style="bold")
            raise typer.Exit(1) from e

        console.print(f"[bold]{parsed.value.capitalize()} categories:[/bold]")
        for category in categories_for(parsed, settings.categories):
            console.print(f"  {category}")
        return

    try:
        service, user_id = open_ledger(state)
        categories = distinct_categories(service.list_transactions(user_id))
    except (FTrackerError, sqlite3.Error, tomllib.TOMLDecodeError, OSError) as e:
        exit_with_error(e)

    if not categories:
        console.print("[yellow]No categories in use[/yellow]")
        return

    console.print("[bold]Categories in use:[/bold]")
    for category in categories:
        console.print(f"  {category}")
