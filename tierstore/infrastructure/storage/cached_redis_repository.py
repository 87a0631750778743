"""Cache-aside repository: in-memory tier (L1) in front of Redis (L2).

Visibility is tied to Redis: a read first asks Redis whether the key exists
and reports absence if it does not, even when L1 still holds a value. An
entry that Redis has expired or evicted is therefore never served from L1.

Entries written with an expiration live only in Redis. Any L1 copy of the
key is dropped so the next read backfills the fresh value, and L1 never
outlives the Redis TTL because every read passes the existence check first.
"""

import logging
from typing import Optional, TypeVar

import redis

from tierstore.domain.interfaces.repository import ExpiringRepository
from tierstore.domain.interfaces.serializer import Serializer
from tierstore.domain.models.common import Lookup, WriteResult
from tierstore.infrastructure.storage.memory_repository import InMemoryDataRepository
from tierstore.infrastructure.storage.redis_repository import RedisDataRepository

T = TypeVar("T")

logger = logging.getLogger(__name__)


class CachedRedisDataRepository(ExpiringRepository[T]):
    """Combines InMemoryDataRepository and RedisDataRepository."""

    def __init__(
        self,
        redis_connection: str,
        serializer: Optional[Serializer] = None,
        strict_writes: bool = False,
        client: Optional[redis.Redis] = None,
    ):
        self.memory: InMemoryDataRepository[T] = InMemoryDataRepository()
        self.remote: RedisDataRepository[T] = RedisDataRepository(
            redis_connection, serializer=serializer, client=client
        )
        self.strict_writes = strict_writes
        logger.info(f"CachedRedisDataRepository initialized. L1(memory), L2(redis={redis_connection})")

    def lookup(self, key: str) -> Lookup[T]:
        if not self.remote.is_stored(key):
            return Lookup.not_found()

        cached = self.memory.lookup(key)
        if cached.is_found:
            logger.debug(f"L1 cache hit for key: {key}")
            return cached

        stored = self.remote.lookup(key)
        if stored.is_found:
            logger.debug(f"Redis hit for key: {key}, promoting to L1")
            self.memory.write(key, stored.value)
        return stored

    def write(self, key: str, value: T) -> WriteResult:
        self.memory.write(key, value)
        return self.remote.write(key, value)

    def write_with_expiration(self, key: str, value: T, expiration_seconds: int) -> WriteResult:
        self.memory.discard(key)
        return self.remote.write_with_expiration(key, value, expiration_seconds)

    def is_stored(self, key: str) -> bool:
        return self.memory.is_stored(key) or self.remote.is_stored(key)

    def clear_storage(self) -> None:
        self.memory.clear_storage()
        self.remote.clear_storage()

    def close(self) -> None:
        self.remote.close()

    def __enter__(self) -> "CachedRedisDataRepository[T]":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
