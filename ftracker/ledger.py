"""Ledger service: the single mutation path for a user's transactions.

Every operation validates first, then performs a full read-modify-write of
the user's ledger through TransactionStore. There is no versioning, so two
processes writing the same ledger race and the last save wins.
"""

import uuid
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import datetime, timezone

import structlog

from ftracker.domain.categories import DEFAULT_CATEGORIES
from ftracker.domain.models import (
    CategoryName,
    Transaction,
    TransactionDraft,
    TransactionId,
    TransactionType,
    UserId,
    ValidDraft,
)
from ftracker.domain.validation import validate_draft
from ftracker.errors import FTrackerError, NotFoundError
from ftracker.store.transactions import TransactionStore

log = structlog.get_logger(__name__)

# Attempts at drawing an id not already used in the ledger
MAX_ID_ATTEMPTS = 10


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_transaction_id() -> str:
    return uuid.uuid4().hex


class LedgerService:
    """Validated CRUD over per-user ledgers.

    Args:
        store: Ledger persistence.
        clock: Returns the current time, used for createdAt.
        id_factory: Returns fresh transaction ids.
        categories: Allowed categories per type.
        strict_categories: If True, a category must belong to the set for
            the draft's type; otherwise any non-empty label is accepted.
    """

    def __init__(
        self,
        store: TransactionStore,
        *,
        clock: Callable[[], datetime] | None = None,
        id_factory: Callable[[], str] | None = None,
        categories: Mapping[TransactionType, Iterable[CategoryName]] | None = None,
        strict_categories: bool = True,
    ):
        self.store = store
        self.clock = clock or utc_now
        self.id_factory = id_factory or new_transaction_id
        self.categories = categories if categories is not None else DEFAULT_CATEGORIES
        self.strict_categories = strict_categories

    def _validate(self, draft: TransactionDraft) -> ValidDraft:
        return validate_draft(draft, self.categories if self.strict_categories else None)

    def _load_for_write(self, user_id: str) -> list[Transaction]:
        # Refuse to overwrite a payload that could not be read
        return self.store.load(user_id, strict=True)

    def _fresh_id(self, existing: set[str]) -> TransactionId:
        for _ in range(MAX_ID_ATTEMPTS):
            candidate = self.id_factory()
            if candidate not in existing:
                return TransactionId(candidate)
        raise FTrackerError("Could not generate a unique transaction id")

    def list_transactions(self, user_id: str) -> list[Transaction]:
        """Get a user's full ledger in stored order."""
        return self.store.load(user_id)

    def get(self, user_id: str, transaction_id: str) -> Transaction:
        """Get one transaction.

        Raises:
            NotFoundError: If the id is not in the user's ledger.
        """
        for txn in self.store.load(user_id):
            if txn.id == transaction_id:
                return txn
        raise NotFoundError(user_id, transaction_id)

    def create(self, user_id: str, draft: TransactionDraft) -> Transaction:
        """Validate a draft and append it to the user's ledger.

        Args:
            user_id: Ledger owner.
            draft: Fields of the new transaction.

        Returns:
            The stored transaction with its new id and createdAt.

        Raises:
            ValidationError: If the draft is invalid. Nothing is written.
            StorageCorruptionError: If the stored ledger is unreadable.
        """
        valid = self._validate(draft)
        transactions = self._load_for_write(user_id)

        # Stored timestamps keep milliseconds only
        now = self.clock()
        created_at = now.replace(microsecond=now.microsecond // 1000 * 1000)

        txn = Transaction(
            id=self._fresh_id({t.id for t in transactions}),
            user_id=UserId(user_id),
            amount=valid.amount,
            type=valid.type,
            category=valid.category,
            date=valid.date,
            created_at=created_at,
            description=valid.description,
        )
        transactions.append(txn)
        self.store.save_all(user_id, transactions)

        log.info("transaction_created", user_id=user_id, transaction_id=txn.id, type=txn.type.value)
        return txn

    def update(self, user_id: str, transaction_id: str, draft: TransactionDraft) -> Transaction:
        """Replace the mutable fields of an existing transaction.

        id, user_id and created_at are kept as they are.

        Raises:
            ValidationError: If the draft is invalid. Nothing is written.
            NotFoundError: If the id is not in the user's ledger.
            StorageCorruptionError: If the stored ledger is unreadable.
        """
        valid = self._validate(draft)
        transactions = self._load_for_write(user_id)

        for i, existing in enumerate(transactions):
            if existing.id == transaction_id:
                updated = replace(
                    existing,
                    amount=valid.amount,
                    type=valid.type,
                    category=valid.category,
                    date=valid.date,
                    description=valid.description,
                )
                transactions[i] = updated
                break
        else:
            raise NotFoundError(user_id, transaction_id)

        self.store.save_all(user_id, transactions)

        log.info("transaction_updated", user_id=user_id, transaction_id=transaction_id)
        return updated

    def delete(self, user_id: str, transaction_id: str) -> None:
        """Remove a transaction permanently.

        Raises:
            NotFoundError: If the id is not in the user's ledger.
            StorageCorruptionError: If the stored ledger is unreadable.
        """
        transactions = self._load_for_write(user_id)
        remaining = [txn for txn in transactions if txn.id != transaction_id]
        if len(remaining) == len(transactions):
            raise NotFoundError(user_id, transaction_id)

        self.store.save_all(user_id, remaining)

        log.info("transaction_deleted", user_id=user_id, transaction_id=transaction_id)
