"""Domain models and types for ftracker.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from ftracker.domain.models import (
    CategoryName,
    Month,
    Transaction,
    TransactionDraft,
    TransactionId,
    TransactionType,
    UserId,
    ValidDraft,
)

__all__ = [
    "CategoryName",
    "Month",
    "Transaction",
    "TransactionDraft",
    "TransactionId",
    "TransactionType",
    "UserId",
    "ValidDraft",
]
