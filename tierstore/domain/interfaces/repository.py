"""Interfaces for key/value data repositories.

Defines the contract every storage backend implements (get, store, exists,
clear) and the wider contract for backends that can expire entries on their
own. Implementations only provide the primitive ``lookup`` / ``write`` pair;
the public read and write methods are derived from them here so that every
backend shares the same fail-soft policy.
"""

import abc
import asyncio
import logging
from typing import Generic, Optional, TypeVar

from tierstore.domain.exceptions import StorageWriteError
from tierstore.domain.models.common import Lookup, WriteResult
from tierstore.utils.duration import DurationLike, duration_to_seconds

T = TypeVar("T")

logger = logging.getLogger(__name__)


class DataRepository(abc.ABC, Generic[T]):
    """Abstract Base Class for storing and retrieving values by key.

    Reads never raise: a missing key and a storage fault both read as
    ``None``. Writes are best-effort and return the value passed in, unless
    the repository was created with ``strict_writes=True``, in which case a
    failed write raises StorageWriteError.
    """

    strict_writes: bool = False

    @abc.abstractmethod
    def lookup(self, key: str) -> Lookup[T]:
        """Reads a key and reports whether it was found, missing or faulted.

        Implementations log faults where they happen and never raise.
        """
        pass

    @abc.abstractmethod
    def write(self, key: str, value: T) -> WriteResult:
        """Writes a value and reports whether the write reached storage.

        Implementations log failures where they happen and never raise.
        """
        pass

    @abc.abstractmethod
    def is_stored(self, key: str) -> bool:
        """Checks if a value is present for the key."""
        pass

    @abc.abstractmethod
    def clear_storage(self) -> None:
        """Removes all stored data."""
        pass

    def get_data(self, key: str) -> Optional[T]:
        """Retrieves the value for a key, or None if it is absent or unreadable."""
        return self.lookup(key).value_or_none()

    def store_data(self, key: str, value: T) -> T:
        """Stores a value under a key and returns the value."""
        self._check_write(self.write(key, value))
        return value

    def _check_write(self, result: WriteResult) -> None:
        if not result.ok and self.strict_writes:
            raise StorageWriteError(result)

    # --- Async variants ---
    # Each runs the blocking call on a worker thread; no ordering is implied
    # between two async calls on the same key.

    async def get_data_async(self, key: str) -> Optional[T]:
        return await asyncio.to_thread(self.get_data, key)

    async def store_data_async(self, key: str, value: T) -> T:
        return await asyncio.to_thread(self.store_data, key, value)

    async def is_stored_async(self, key: str) -> bool:
        return await asyncio.to_thread(self.is_stored, key)

    async def clear_storage_async(self) -> None:
        await asyncio.to_thread(self.clear_storage)


class ExpiringRepository(DataRepository[T]):
    """A DataRepository whose backend can expire entries natively."""

    @abc.abstractmethod
    def write_with_expiration(self, key: str, value: T, expiration_seconds: int) -> WriteResult:
        """Writes a value that the backend forgets after ``expiration_seconds``."""
        pass

    def store_data_with_expiration(self, key: str, value: T, expiration: DurationLike) -> T:
        """Stores a value with an expiration and returns the value.

        Args:
            key: The key to store the value under.
            value: The value to store.
            expiration: Whole seconds, a timedelta, or a duration string such
                as "1d12h30m" (see tierstore.utils.duration).

        Raises:
            InvalidFormatError: If ``expiration`` is a malformed duration string.
        """
        seconds = duration_to_seconds(expiration)
        self._check_write(self.write_with_expiration(key, value, seconds))
        return value

    async def store_data_with_expiration_async(self, key: str, value: T, expiration: DurationLike) -> T:
        return await asyncio.to_thread(self.store_data_with_expiration, key, value, expiration)
