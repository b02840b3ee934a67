"""Allowed category sets per transaction type."""

from collections.abc import Iterable, Mapping

from ftracker.domain.models import CategoryName, TransactionType

INCOME_CATEGORIES: tuple[CategoryName, ...] = tuple(
    CategoryName(name) for name in ("Salary", "Freelance", "Investment", "Business", "Gift", "Misc")
)

EXPENSE_CATEGORIES: tuple[CategoryName, ...] = tuple(
    CategoryName(name)
    for name in (
        "Food",
        "Transport",
        "Bills",
        "Rent",
        "Entertainment",
        "Shopping",
        "Healthcare",
        "Education",
        "Misc",
    )
)

DEFAULT_CATEGORIES: dict[TransactionType, tuple[CategoryName, ...]] = {
    TransactionType.INCOME: INCOME_CATEGORIES,
    TransactionType.EXPENSE: EXPENSE_CATEGORIES,
}


def build_category_sets(
    income: Iterable[str] | None = None,
    expense: Iterable[str] | None = None,
) -> dict[TransactionType, tuple[CategoryName, ...]]:
    """Build category sets, falling back to the defaults for missing types.

    Args:
        income: Income category names, or None for the defaults.
        expense: Expense category names, or None for the defaults.

    Returns:
        Dictionary of transaction type to category names.
    """
    return {
        TransactionType.INCOME: (
            tuple(CategoryName(name) for name in income) if income is not None else INCOME_CATEGORIES
        ),
        TransactionType.EXPENSE: (
            tuple(CategoryName(name) for name in expense) if expense is not None else EXPENSE_CATEGORIES
        ),
    }


def categories_for(
    txn_type: TransactionType,
    category_sets: Mapping[TransactionType, Iterable[CategoryName]] | None = None,
) -> list[CategoryName]:
    """Get the allowed categories for a transaction type."""
    sets = category_sets if category_sets is not None else DEFAULT_CATEGORIES
    return list(sets.get(txn_type, ()))


def is_allowed_category(
    category: str,
    txn_type: TransactionType,
    category_sets: Mapping[TransactionType, Iterable[CategoryName]] | None = None,
) -> bool:
    """Check if category belongs to the set for txn_type (exact match)."""
    return category in categories_for(txn_type, category_sets)
