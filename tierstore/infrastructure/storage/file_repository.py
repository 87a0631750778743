"""File-backed repository: one file per key under a base directory.

Keys double as a hierarchical namespace: every '.' in a key becomes a path
separator, so ``foo.bar`` is stored in ``<base>/foo/bar.dat``. File contents
are exactly the serializer's output.

Uses `pathlib` for synchronous I/O and `aiofiles` for the async read/write
variants.
"""

import logging
import os
from pathlib import Path
from typing import Optional, TypeVar, Union

import aiofiles

from tierstore.domain.exceptions import SerializationError
from tierstore.domain.interfaces.repository import DataRepository
from tierstore.domain.interfaces.serializer import Serializer
from tierstore.domain.models.common import Lookup, WriteResult
from tierstore.infrastructure.serialization.pickle_serializer import PickleSerializer

T = TypeVar("T")

logger = logging.getLogger(__name__)

FILE_SUFFIX = ".dat"


class FileDataRepository(DataRepository[T]):
    """Stores each value in its own file."""

    def __init__(
        self,
        base_directory: Union[str, Path],
        serializer: Optional[Serializer] = None,
        strict_writes: bool = False,
    ):
        """Initializes the repository, creating the base directory if needed.

        Args:
            base_directory: Directory the key files live under.
            serializer: Value codec; defaults to PickleSerializer.
            strict_writes: Raise StorageWriteError from store_data on failure.
        """
        self.base_directory = Path(base_directory)
        self.serializer = serializer or PickleSerializer()
        self.strict_writes = strict_writes
        self.base_directory.mkdir(parents=True, exist_ok=True)
        logger.debug(f"FileDataRepository initialized at {self.base_directory}")

    def key_file_path(self, key: str) -> Path:
        """Returns the file a key is stored in, e.g. 'foo.bar' -> <base>/foo/bar.dat."""
        return self.base_directory / (key.replace(".", os.sep) + FILE_SUFFIX)

    def lookup(self, key: str) -> Lookup[T]:
        path = self.key_file_path(key)
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            return Lookup.not_found()
        except OSError as e:
            logger.warning(f"Failed to read file {path} for key '{key}': {e}")
            return Lookup.fault(str(e))
        return self._decode(key, path, data)

    def write(self, key: str, value: T) -> WriteResult:
        path = self.key_file_path(key)
        try:
            data = self.serializer.serialize(value)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except (SerializationError, OSError) as e:
            logger.error(f"Failed to write file {path} for key '{key}': {e}")
            return WriteResult.failure(key, str(e))
        return WriteResult.success(key)

    def is_stored(self, key: str) -> bool:
        return self.key_file_path(key).exists()

    def clear_storage(self) -> None:
        """Removes every file directly inside the base directory (non-recursive).

        Empty sub-directories are removed as well; non-empty ones are kept.
        """
        try:
            entries = list(self.base_directory.iterdir())
        except OSError as e:
            logger.error(f"Failed to list storage directory {self.base_directory}: {e}")
            return

        for entry in entries:
            try:
                if entry.is_dir():
                    if not any(entry.iterdir()):
                        entry.rmdir()
                else:
                    entry.unlink()
            except OSError as e:
                logger.error(f"Failed to remove {entry} while clearing storage: {e}")
        logger.info(f"Cleared storage directory {self.base_directory}")

    # --- Async variants using aiofiles ---

    async def get_data_async(self, key: str) -> Optional[T]:
        path = self.key_file_path(key)
        try:
            async with aiofiles.open(path, mode="rb") as f:
                data = await f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            logger.warning(f"Failed to read file {path} for key '{key}': {e}")
            return None
        return self._decode(key, path, data).value_or_none()

    async def store_data_async(self, key: str, value: T) -> T:
        path = self.key_file_path(key)
        try:
            data = self.serializer.serialize(value)
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, mode="wb") as f:
                await f.write(data)
        except (SerializationError, OSError) as e:
            logger.error(f"Failed to write file {path} for key '{key}': {e}")
            self._check_write(WriteResult.failure(key, str(e)))
        return value

    def _decode(self, key: str, path: Path, data: bytes) -> Lookup[T]:
        try:
            return Lookup.found(self.serializer.deserialize(data))
        except SerializationError as e:
            logger.warning(f"Corrupt data in {path} for key '{key}': {e}")
            return Lookup.fault(str(e))
