"""Error kinds surfaced by the journal core."""

from __future__ import annotations

from typing import Optional


class JournalError(Exception):
    """Base exception for journal operations."""

    pass


class ValidationError(JournalError, ValueError):
    """Raised when input is rejected at the write boundary."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class StorageError(JournalError):
    """Raised when the underlying database fails."""

    pass


class DataQualityError(JournalError):
    """Raised for malformed persisted values; analytics skip these rows."""

    pass
