"""Pure functions for validating transaction drafts.

This module contains the functional core for record validation:
- No I/O operations (no database, no console, no files)
- No side effects
- Every field is checked, so one ValidationError reports all problems

Validation never applies anything; callers only write what it returns.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from ftracker.dates import parse_date
from ftracker.domain.categories import is_allowed_category
from ftracker.domain.models import CategoryName, TransactionDraft, TransactionType, ValidDraft
from ftracker.errors import ValidationError

# Accepted amounts lie in [1e-8, 1e15) with at most this many significant digits
MAX_AMOUNT_EXPONENT = 14
MIN_AMOUNT_EXPONENT = -8
MAX_AMOUNT_DIGITS = 28


def parse_amount(value: Any) -> Decimal:
    """Parse an amount into a positive, finite Decimal.

    Args:
        value: int, float, Decimal, or numeric string (e.g. "1,250.50").

    Returns:
        The amount as a Decimal.

    Raises:
        ValueError: If value is not a finite number greater than zero, or
            falls outside the range and precision that can be stored.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError("Please enter a valid amount greater than 0")

    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, float)):
        amount = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        try:
            amount = Decimal(text)
        except InvalidOperation as e:
            raise ValueError("Please enter a valid amount greater than 0") from e
    else:
        raise ValueError("Please enter a valid amount greater than 0")

    if not amount.is_finite() or amount <= 0:
        raise ValueError("Please enter a valid amount greater than 0")
    if not MIN_AMOUNT_EXPONENT <= amount.adjusted() <= MAX_AMOUNT_EXPONENT:
        raise ValueError("Amount is out of range")
    if len(amount.as_tuple().digits) > MAX_AMOUNT_DIGITS:
        raise ValueError("Amount has too many digits")
    return amount


def parse_type(value: Any) -> TransactionType:
    """Parse a transaction type ("income" or "expense").

    Raises:
        ValueError: If value is not a known type.
    """
    if isinstance(value, TransactionType):
        return value
    if isinstance(value, str):
        try:
            return TransactionType(value.strip().lower())
        except ValueError:
            pass
    raise ValueError("Type must be 'income' or 'expense'")


def normalize_description(value: Any) -> str | None:
    """Trim a description; blank or missing becomes None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def validate_draft(
    draft: TransactionDraft,
    category_sets: Mapping[TransactionType, Iterable[CategoryName]] | None = None,
) -> ValidDraft:
    """Validate a draft and convert it into typed fields.

    Args:
        draft: Raw mutable fields.
        category_sets: Allowed categories per type. If None, any non-empty
            category is accepted.

    Returns:
        ValidDraft with parsed values.

    Raises:
        ValidationError: Naming every offending field.
    """
    errors: dict[str, str] = {}

    amount = None
    try:
        amount = parse_amount(draft.amount)
    except ValueError as e:
        errors["amount"] = str(e)

    txn_type = None
    try:
        txn_type = parse_type(draft.type)
    except ValueError as e:
        errors["type"] = str(e)

    category = str(draft.category).strip() if draft.category is not None else ""
    if not category:
        errors["category"] = "Please select a category"
    elif category_sets is not None and txn_type is not None:
        if not is_allowed_category(category, txn_type, category_sets):
            errors["category"] = f"'{category}' is not a valid {txn_type.value} category"

    day = None
    try:
        day = parse_date(draft.date)
    except ValueError:
        errors["date"] = "Please select a valid date"

    if errors or amount is None or txn_type is None or day is None:
        raise ValidationError(errors)

    return ValidDraft(
        amount=amount,
        type=txn_type,
        category=CategoryName(category),
        date=day,
        description=normalize_description(draft.description),
    )
