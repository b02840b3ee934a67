"""Per-user ledger persistence on top of a key-value store.

A user's whole ledger is one JSON array stored under ``transactions:<userId>``.
Loads and saves always move the complete list; there is no per-record write.
"""

import json
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

import structlog

from ftracker.dates import parse_date
from ftracker.domain.models import CategoryName, Transaction, TransactionId, UserId
from ftracker.domain.query import format_amount
from ftracker.domain.validation import normalize_description, parse_amount, parse_type
from ftracker.errors import StorageCorruptionError
from ftracker.store.kv import KeyValueStore

log = structlog.get_logger(__name__)

KEY_PREFIX = "transactions:"


def storage_key(user_id: str) -> str:
    """Key a user's ledger is stored under."""
    return f"{KEY_PREFIX}{user_id}"


def format_timestamp(value: datetime) -> str:
    """Format a timestamp as ISO-8601 UTC with millisecond precision."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def transaction_to_record(txn: Transaction) -> dict[str, Any]:
    """Convert a transaction to its JSON record."""
    return {
        "id": txn.id,
        "amount": format_amount(txn.amount),
        "type": txn.type.value,
        "category": txn.category,
        "date": txn.date.isoformat(),
        "description": txn.description or "",
        "userId": txn.user_id,
        "createdAt": format_timestamp(txn.created_at),
    }


def transaction_from_record(record: Any, user_id: str) -> Transaction:
    """Convert a JSON record back into a transaction.

    Args:
        record: Decoded JSON object.
        user_id: Owner of the ledger the record was read from. A record
            naming a different userId is malformed.

    Returns:
        The parsed transaction.

    Raises:
        ValueError: If the record is malformed.
    """
    if not isinstance(record, dict):
        raise ValueError("record is not an object")

    try:
        raw_id = record["id"]
        category = record["category"]
        if raw_id in (None, "") or not isinstance(category, str) or not category.strip():
            raise ValueError("record has an empty id or category")
        owner = record.get("userId")
        if owner not in (None, "") and str(owner) != user_id:
            raise ValueError(f"record belongs to {owner!r}, not {user_id!r}")

        return Transaction(
            id=TransactionId(str(raw_id)),
            user_id=UserId(user_id),
            amount=parse_amount(record["amount"]),
            type=parse_type(record["type"]),
            category=CategoryName(category.strip()),
            date=parse_date(record["date"]),
            created_at=parse_timestamp(str(record["createdAt"])),
            description=normalize_description(record.get("description")),
        )
    except KeyError as e:
        raise ValueError(f"record is missing field {e}") from e


class TransactionStore:
    """Durable mapping of user id to that user's transactions.

    Args:
        kv: Underlying string store.
        strict: If True, unreadable payloads raise StorageCorruptionError;
            otherwise they are logged and read as an empty ledger.
    """

    def __init__(self, kv: KeyValueStore, strict: bool = False):
        self.kv = kv
        self.strict = strict

    def load(self, user_id: str, strict: bool | None = None) -> list[Transaction]:
        """Load a user's full ledger.

        Args:
            user_id: Ledger owner.
            strict: Override the store's corruption handling for this call.

        Returns:
            Transactions in stored order; empty if nothing is stored.

        Raises:
            StorageCorruptionError: If the payload is unreadable in strict mode.
        """
        key = storage_key(user_id)
        payload = self.kv.get(key)
        if payload is None:
            return []

        try:
            records = json.loads(payload)
            if not isinstance(records, list):
                raise ValueError("payload is not a list")
            return [transaction_from_record(record, user_id) for record in records]
        except ValueError as e:
            if self.strict if strict is None else strict:
                raise StorageCorruptionError(key, str(e)) from e
            log.warning("storage_payload_corrupt", key=key, reason=str(e))
            return []

    def save_all(self, user_id: str, transactions: Iterable[Transaction]) -> None:
        """Replace a user's stored ledger with transactions.

        Args:
            user_id: Ledger owner.
            transactions: The complete new ledger.
        """
        records = [transaction_to_record(txn) for txn in transactions]
        self.kv.set(storage_key(user_id), json.dumps(records))
        log.debug("ledger_saved", user_id=user_id, count=len(records))
