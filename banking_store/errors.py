"""Exception hierarchy for the customer record store."""

from __future__ import annotations

from typing import Any


class RecordStoreError(Exception):
    """Base exception for all record store errors."""


class ConfigurationError(RecordStoreError):
    """Raised when settings or statement templates are invalid."""


class ConnectionUnavailable(RecordStoreError):
    """Raised when no pooled connection could be acquired in time."""


class ConstraintViolation(RecordStoreError):
    """Raised when the backing store rejects a write on a uniqueness or integrity rule."""


class NotFound(RecordStoreError):
    """Raised when a single-record read matched zero rows."""

    def __init__(self, key: Any) -> None:
        super().__init__(f"No customer with account_no={key}")
        self.key = key


class AmbiguousResult(RecordStoreError):
    """Raised when a single-record read matched more than one row."""

    def __init__(self, key: Any, count: int) -> None:
        super().__init__(f"Expected one customer with account_no={key}, got {count}")
        self.key = key
        self.count = count


class DecodeError(RecordStoreError):
    """Raised when a row is missing a column or carries a value the model rejects."""


class ValidationError(RecordStoreError):
    """Raised when a record cannot be encoded into statement parameters."""


__all__ = [
    "RecordStoreError",
    "ConfigurationError",
    "ConnectionUnavailable",
    "ConstraintViolation",
    "NotFound",
    "AmbiguousResult",
    "DecodeError",
    "ValidationError",
]
