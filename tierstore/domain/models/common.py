"""Defines common Value Objects used by every storage backend.

Reads and writes are modelled as small result objects so that a storage
fault can be told apart from a plain miss internally, even though the public
read API only ever reports "value" or "absent".
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, NewType, Optional, TypeVar

T = TypeVar("T")

# === Core Value Objects ===

StorageKey = NewType("StorageKey", str)      # Key; '.' doubles as a namespace separator
ExpirationSeconds = NewType("ExpirationSeconds", int)


class LookupStatus(Enum):
    """Outcome of a single read against one storage tier."""
    FOUND = "found"
    NOT_FOUND = "not_found"
    FAULT = "fault"


@dataclass(frozen=True)
class Lookup(Generic[T]):
    """Result of reading a key: Found(value), NotFound, or Fault(detail)."""
    status: LookupStatus
    value: Optional[T] = None
    detail: Optional[str] = None

    @classmethod
    def found(cls, value: T) -> "Lookup[T]":
        return cls(LookupStatus.FOUND, value=value)

    @classmethod
    def not_found(cls) -> "Lookup[T]":
        return cls(LookupStatus.NOT_FOUND)

    @classmethod
    def fault(cls, detail: str) -> "Lookup[T]":
        return cls(LookupStatus.FAULT, detail=detail)

    @property
    def is_found(self) -> bool:
        return self.status is LookupStatus.FOUND

    @property
    def is_fault(self) -> bool:
        return self.status is LookupStatus.FAULT

    def value_or_none(self) -> Optional[T]:
        """Collapses the result to the public read contract."""
        return self.value if self.is_found else None


@dataclass(frozen=True)
class WriteResult:
    """Outcome of writing a key to one storage tier."""
    key: str
    ok: bool
    detail: Optional[str] = None

    @classmethod
    def success(cls, key: str) -> "WriteResult":
        return cls(key=key, ok=True)

    @classmethod
    def failure(cls, key: str, detail: str) -> "WriteResult":
        return cls(key=key, ok=False, detail=detail)
