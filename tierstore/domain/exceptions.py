"""Exceptions raised by tierstore.

Only format errors reach callers by default. Read faults are always turned
into absence by the stores; write faults only surface as StorageWriteError
when a repository is built with ``strict_writes=True``.
"""

from typing import Optional

from tierstore.domain.models.common import WriteResult


class TierStoreError(Exception):
    """Base class for all tierstore errors."""


class InvalidFormatError(TierStoreError, ValueError):
    """Raised when a duration string does not match the duration grammar."""

    def __init__(self, value: str, reason: Optional[str] = None):
        self.value = value
        self.reason = reason
        message = f"Invalid time string format: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class SerializationError(TierStoreError):
    """Raised by a Serializer when bytes cannot be turned back into a value (or vice versa)."""


class StorageWriteError(TierStoreError):
    """Raised by strict repositories when a write did not reach its storage tier."""

    def __init__(self, result: WriteResult):
        self.result = result
        super().__init__(f"Failed to store key '{result.key}': {result.detail}")
