"""In-memory repository: a process-local dict with no eviction and no expiry."""

import logging
from typing import Dict, TypeVar

from tierstore.domain.interfaces.repository import DataRepository
from tierstore.domain.models.common import Lookup, WriteResult

T = TypeVar("T")

logger = logging.getLogger(__name__)

_MISSING = object()


class InMemoryDataRepository(DataRepository[T]):
    """Keeps values in a plain dictionary for the lifetime of the process."""

    def __init__(self):
        self._data: Dict[str, T] = {}

    def lookup(self, key: str) -> Lookup[T]:
        value = self._data.get(key, _MISSING)
        if value is _MISSING:
            return Lookup.not_found()
        return Lookup.found(value)

    def write(self, key: str, value: T) -> WriteResult:
        self._data[key] = value
        return WriteResult.success(key)

    def is_stored(self, key: str) -> bool:
        return key in self._data

    def clear_storage(self) -> None:
        self._data.clear()

    def discard(self, key: str) -> None:
        """Forgets a single key if present."""
        self._data.pop(key, None)

    def __len__(self) -> int:
        return len(self._data)
