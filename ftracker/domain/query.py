"""Pure functions for filtering and sorting transaction lists.

This module contains the functional core for list and search views:
- No I/O operations (no database, no console, no files)
- No side effects
- Inputs are never mutated; every function returns a new list
"""

from collections.abc import Iterable
from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from ftracker.dates import parse_date
from ftracker.domain.models import CategoryName, Transaction, TransactionType
from ftracker.domain.validation import parse_type


class SortDirection(str, Enum):
    """Sort order for transaction lists."""

    ASC = "asc"
    DESC = "desc"


# JSON field names accepted alongside the attribute names
FIELD_ALIASES = {
    "createdAt": "created_at",
    "userId": "user_id",
}

SORTABLE_FIELDS = frozenset(f.name for f in fields(Transaction))


@dataclass(frozen=True)
class FilterCriteria:
    """Optional, conjunctive filter settings. Empty strings mean "any"."""

    type: TransactionType | str | None = None
    category: str | None = None
    search: str | None = None
    start_date: date | str | None = None
    end_date: date | str | None = None


def format_amount(amount: Decimal) -> str:
    """Plain text form of an amount ("50", "12.5"), as used by search."""
    return format(amount.normalize(), "f")


def _optional_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    return parse_date(value)


def matches_search(transaction: Transaction, term: str) -> bool:
    """Check if term occurs in description, category or amount (case-insensitive).

    The amount matches in its plain form ("50", "12.5") and with two
    decimals ("50.00", "12.50").

    Args:
        transaction: Transaction to test.
        term: Search text.

    Returns:
        True if any of the three fields contains term.
    """
    needle = term.lower()
    if transaction.description and needle in transaction.description.lower():
        return True
    if needle in transaction.category.lower():
        return True
    amount = transaction.amount
    return needle in format_amount(amount) or needle in f"{amount:.2f}"


def filter_transactions(
    transactions: Iterable[Transaction],
    criteria: FilterCriteria,
) -> list[Transaction]:
    """Filter transactions by the supplied criteria.

    Args:
        transactions: Transactions to filter.
        criteria: Filter settings; unset fields are ignored.

    Returns:
        Transactions matching every supplied criterion, in input order.

    Raises:
        ValueError: If a type or date criterion cannot be parsed.
    """
    txn_type = parse_type(criteria.type) if criteria.type else None
    start = _optional_date(criteria.start_date)
    end = _optional_date(criteria.end_date)

    result = []
    for txn in transactions:
        if txn_type is not None and txn.type != txn_type:
            continue
        if criteria.category and txn.category != criteria.category:
            continue
        if criteria.search and not matches_search(txn, criteria.search):
            continue
        if start is not None and txn.date < start:
            continue
        if end is not None and txn.date > end:
            continue
        result.append(txn)
    return result


def resolve_sort_field(field: str) -> str:
    """Map a sort field (attribute or JSON name) to a Transaction attribute.

    Raises:
        ValueError: If field is not a transaction attribute.
    """
    name = FIELD_ALIASES.get(field, field)
    if name not in SORTABLE_FIELDS:
        raise ValueError(f"Cannot sort by '{field}'")
    return name


def _sort_key(field: str):
    def key(txn: Transaction) -> tuple[Any, str]:
        if field == "category":
            return txn.category.casefold(), txn.id

        value = getattr(txn, field)
        if isinstance(value, Enum):
            value = value.value
        # None sorts before any value
        return (0, "") if value is None else (1, value), txn.id

    return key


def sort_transactions(
    transactions: Iterable[Transaction],
    field: str = "date",
    direction: SortDirection | str = SortDirection.DESC,
) -> list[Transaction]:
    """Sort transactions by one field, breaking ties by id.

    Dates sort chronologically, amounts numerically and categories
    case-insensitively. Any other attribute compares on its raw value.
    Descending order is the exact reverse of ascending order.

    Args:
        transactions: Transactions to sort.
        field: Attribute name ("date", "amount", "category", ...).
        direction: "asc" or "desc".

    Returns:
        New sorted list.

    Raises:
        ValueError: If field or direction is unknown.
    """
    name = resolve_sort_field(field)
    order = SortDirection(direction)
    return sorted(transactions, key=_sort_key(name), reverse=order == SortDirection.DESC)


def distinct_categories(transactions: Iterable[Transaction]) -> list[CategoryName]:
    """Unique categories in the list, sorted."""
    return sorted({txn.category for txn in transactions})


def recent_transactions(transactions: Iterable[Transaction], limit: int = 5) -> list[Transaction]:
    """Newest transactions by date, at most limit of them."""
    return sort_transactions(transactions, "date", SortDirection.DESC)[:limit]
