"""Exceptions raised by the spendlog core and store layers."""

from spendlog.domain.models import RecordId


class SpendlogError(Exception):
    """Base class for all spendlog errors."""


class ValidationError(SpendlogError, ValueError):
    """Raised when user-supplied data does not meet validation requirements."""


class NotFoundError(SpendlogError, LookupError):
    """Raised when a record id is not present in the store."""

    def __init__(self, record_id: RecordId) -> None:
        super().__init__(f"Transaction {record_id} not found")
        self.record_id = record_id


class PersistenceError(SpendlogError, OSError):
    """Raised when the storage backend cannot be read or written."""
