"""Storage backends and the cache-aside repositories built from them."""

from tierstore.infrastructure.storage.cached_file_repository import CachedFileDataRepository
from tierstore.infrastructure.storage.cached_redis_repository import CachedRedisDataRepository
from tierstore.infrastructure.storage.file_repository import FileDataRepository
from tierstore.infrastructure.storage.memory_repository import InMemoryDataRepository
from tierstore.infrastructure.storage.redis_repository import RedisDataRepository

__all__ = [
    "CachedFileDataRepository",
    "CachedRedisDataRepository",
    "FileDataRepository",
    "InMemoryDataRepository",
    "RedisDataRepository",
]
