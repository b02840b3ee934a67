"""Domain type definitions for ftracker.

These NewTypes provide semantic clarity and help with type checking:
- UserId: Owner of a ledger
- TransactionId: Opaque identifier of a transaction within a user's ledger
- CategoryName: Label a transaction is filed under
- Month: Month in YYYY-MM format

Amounts are decimal.Decimal magnitudes; the sign is carried by TransactionType.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, NewType

UserId = NewType("UserId", str)

TransactionId = NewType("TransactionId", str)

CategoryName = NewType("CategoryName", str)

# Month is always in YYYY-MM format (e.g., "2025-01")
Month = NewType("Month", str)


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    """Immutable transaction record."""

    id: TransactionId
    user_id: UserId
    amount: Decimal
    type: TransactionType
    category: CategoryName
    date: date
    created_at: datetime
    description: str | None = None


@dataclass(frozen=True)
class TransactionDraft:
    """Unvalidated mutable fields supplied to create or update.

    Values may be raw user input (strings) or already typed values.
    """

    amount: Any
    type: Any
    category: Any
    date: Any
    description: Any = None

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "TransactionDraft":
        """Build a draft carrying a transaction's current mutable fields."""
        return cls(
            amount=transaction.amount,
            type=transaction.type,
            category=transaction.category,
            date=transaction.date,
            description=transaction.description,
        )


@dataclass(frozen=True)
class ValidDraft:
    """Validated, typed mutable fields ready to be applied to a record."""

    amount: Decimal
    type: TransactionType
    category: CategoryName
    date: date
    description: str | None = None
