"""Pure functions for ledger aggregations.

This module contains the functional core for dashboard figures:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
- Easy to test

All amounts are Decimal magnitudes; direction comes from the transaction type.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from ftracker.dates import month_key, month_label
from ftracker.domain.models import CategoryName, Month, Transaction, TransactionType

ZERO = Decimal(0)


@dataclass(frozen=True)
class Summary:
    """Immutable totals and current-month averages."""

    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    avg_income: Decimal
    avg_expenses: Decimal


@dataclass(frozen=True)
class MonthlyTotal:
    """Immutable income and expense totals for one month."""

    period: Month
    income_total: Decimal
    expense_total: Decimal

    @property
    def net(self) -> Decimal:
        return self.income_total - self.expense_total

    @property
    def label(self) -> str:
        return month_label(self.period)


def _mean(amounts: list[Decimal]) -> Decimal:
    if not amounts:
        return ZERO
    return sum(amounts, ZERO) / len(amounts)


def summary(transactions: Iterable[Transaction], now: date | datetime) -> Summary:
    """Calculate totals, balance and current-month averages.

    Args:
        transactions: Transactions to aggregate.
        now: Reference clock value; averages only consider transactions
            dated in the same calendar month and year.

    Returns:
        Summary with totals and averages (0 when a month has no entries).
    """
    current = month_key(now.date() if isinstance(now, datetime) else now)

    total_income = ZERO
    total_expenses = ZERO
    month_income: list[Decimal] = []
    month_expenses: list[Decimal] = []

    for txn in transactions:
        in_month = month_key(txn.date) == current
        if txn.type == TransactionType.INCOME:
            total_income += txn.amount
            if in_month:
                month_income.append(txn.amount)
        else:
            total_expenses += txn.amount
            if in_month:
                month_expenses.append(txn.amount)

    return Summary(
        total_income=total_income,
        total_expenses=total_expenses,
        balance=total_income - total_expenses,
        avg_income=_mean(month_income),
        avg_expenses=_mean(month_expenses),
    )


def category_breakdown(
    transactions: Iterable[Transaction],
    txn_type: TransactionType | None = None,
) -> dict[CategoryName, Decimal]:
    """Sum amounts per category.

    Income and expense amounts are added together under a shared label
    unless txn_type restricts the breakdown to one type.

    Args:
        transactions: Transactions to aggregate.
        txn_type: Optional type to restrict to.

    Returns:
        Dictionary of category to total, in first-seen order.
    """
    totals: dict[CategoryName, Decimal] = {}
    for txn in transactions:
        if txn_type is not None and txn.type != txn_type:
            continue
        totals[txn.category] = totals.get(txn.category, ZERO) + txn.amount
    return totals


def monthly_breakdown(transactions: Iterable[Transaction]) -> list[MonthlyTotal]:
    """Group income and expense totals by month.

    Args:
        transactions: Transactions to aggregate.

    Returns:
        One MonthlyTotal per month with activity, oldest first.
    """
    buckets: dict[Month, dict[TransactionType, Decimal]] = {}
    for txn in transactions:
        bucket = buckets.setdefault(
            month_key(txn.date),
            {TransactionType.INCOME: ZERO, TransactionType.EXPENSE: ZERO},
        )
        bucket[txn.type] += txn.amount

    return [
        MonthlyTotal(
            period=period,
            income_total=bucket[TransactionType.INCOME],
            expense_total=bucket[TransactionType.EXPENSE],
        )
        for period, bucket in sorted(buckets.items())
    ]
