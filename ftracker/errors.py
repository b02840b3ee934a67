"""Exception types raised by the ftracker core."""


class FTrackerError(Exception):
    """Base class for all ftracker errors."""


class ValidationError(FTrackerError):
    """A draft failed validation.

    Attributes:
        errors: Mapping of offending field name to message.
        field: The first offending field.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = dict(errors)
        self.field = next(iter(self.errors), "")
        details = "; ".join(f"{name}: {message}" for name, message in self.errors.items())
        super().__init__(f"Invalid transaction ({details})")


class NotFoundError(FTrackerError):
    """A transaction id does not exist in the user's ledger."""

    def __init__(self, user_id: str, transaction_id: str):
        self.user_id = user_id
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id} not found")


class StorageCorruptionError(FTrackerError):
    """A persisted ledger payload could not be parsed."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Stored data under '{key}' is unreadable: {reason}")
