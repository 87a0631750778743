"""tierstore: a uniform key/value repository API over memory, files and Redis,
with cache-aside composites that keep an in-memory tier in front of the
slower backends.
"""

from tierstore.domain.exceptions import (
    InvalidFormatError,
    SerializationError,
    StorageWriteError,
    TierStoreError,
)
from tierstore.domain.interfaces.repository import DataRepository, ExpiringRepository
from tierstore.domain.interfaces.serializer import Serializer
from tierstore.domain.models.common import Lookup, LookupStatus, WriteResult
from tierstore.infrastructure.serialization.pickle_serializer import PickleSerializer
from tierstore.infrastructure.storage import (
    CachedFileDataRepository,
    CachedRedisDataRepository,
    FileDataRepository,
    InMemoryDataRepository,
    RedisDataRepository,
)
from tierstore.utils.duration import duration_to_seconds, parse_duration

__version__ = "0.1.0"

__all__ = [
    "CachedFileDataRepository",
    "CachedRedisDataRepository",
    "DataRepository",
    "ExpiringRepository",
    "FileDataRepository",
    "InMemoryDataRepository",
    "InvalidFormatError",
    "Lookup",
    "LookupStatus",
    "PickleSerializer",
    "RedisDataRepository",
    "SerializationError",
    "Serializer",
    "StorageWriteError",
    "TierStoreError",
    "WriteResult",
    "duration_to_seconds",
    "parse_duration",
]
