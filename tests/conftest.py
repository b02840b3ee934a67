"""Shared fixtures for ftracker tests."""

from collections.abc import Callable
from datetime import date, datetime, timezone
from decimal import Decimal
from itertools import count

import pytest

from ftracker.domain.models import CategoryName, Transaction, TransactionId, TransactionType, UserId


@pytest.fixture
def make_txn() -> Callable[..., Transaction]:
    """Factory for transactions with sensible defaults and sequential ids."""
    ids = count(1)

    def factory(
        amount: str = "10",
        txn_type: TransactionType = TransactionType.EXPENSE,
        category: str = "Food",
        day: date = date(2024, 1, 15),
        description: str | None = None,
        txn_id: str | None = None,
        user_id: str = "u1",
    ) -> Transaction:
        return Transaction(
            id=TransactionId(txn_id or f"t{next(ids):03d}"),
            user_id=UserId(user_id),
            amount=Decimal(amount),
            type=txn_type,
            category=CategoryName(category),
            date=day,
            created_at=datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),
            description=description,
        )

    return factory
