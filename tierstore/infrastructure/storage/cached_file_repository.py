"""Cache-aside repository: in-memory tier (L1) in front of a file tier (L2).

Reads try L1 first and fall back to L2, promoting an L2 hit into L1.
Writes go to L1 and then L2. There is no cross-tier transaction and no
stampede protection: concurrent misses on one key may each read L2 and
backfill L1 with the same value.
"""

import logging
from pathlib import Path
from typing import Optional, TypeVar, Union

from tierstore.domain.interfaces.repository import DataRepository
from tierstore.domain.interfaces.serializer import Serializer
from tierstore.domain.models.common import Lookup, WriteResult
from tierstore.infrastructure.storage.file_repository import FileDataRepository
from tierstore.infrastructure.storage.memory_repository import InMemoryDataRepository

T = TypeVar("T")

logger = logging.getLogger(__name__)


class CachedFileDataRepository(DataRepository[T]):
    """Combines InMemoryDataRepository and FileDataRepository."""

    def __init__(
        self,
        base_directory: Union[str, Path],
        serializer: Optional[Serializer] = None,
        strict_writes: bool = False,
    ):
        self.memory: InMemoryDataRepository[T] = InMemoryDataRepository()
        self.file: FileDataRepository[T] = FileDataRepository(base_directory, serializer=serializer)
        self.strict_writes = strict_writes
        logger.info(f"CachedFileDataRepository initialized. L1(memory), L2(dir={self.file.base_directory})")

    def lookup(self, key: str) -> Lookup[T]:
        cached = self.memory.lookup(key)
        if cached.is_found:
            logger.debug(f"L1 cache hit for key: {key}")
            return cached

        stored = self.file.lookup(key)
        if stored.is_found:
            logger.debug(f"L2 hit for key: {key}, promoting to L1")
            self.memory.write(key, stored.value)
        return stored

    def write(self, key: str, value: T) -> WriteResult:
        self.memory.write(key, value)
        return self.file.write(key, value)

    def is_stored(self, key: str) -> bool:
        return self.memory.is_stored(key) or self.file.is_stored(key)

    def clear_storage(self) -> None:
        self.memory.clear_storage()
        self.file.clear_storage()
