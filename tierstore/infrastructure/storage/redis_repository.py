"""Redis-backed repository with native per-key expiration.

Handles:
- GET / SET / EXISTS / FLUSHDB for the basic repository contract
- SETEX for entries that Redis should forget on its own

Keys are sent as UTF-8 bytes, values as the serializer's raw bytes. Every
Redis error is logged here and downgraded: reads become absence, writes
become a failed WriteResult.
"""

import logging
from typing import Optional, TypeVar

import redis

from tierstore.domain.exceptions import SerializationError
from tierstore.domain.interfaces.repository import ExpiringRepository
from tierstore.domain.interfaces.serializer import Serializer
from tierstore.domain.models.common import Lookup, WriteResult
from tierstore.infrastructure.serialization.pickle_serializer import PickleSerializer

T = TypeVar("T")

logger = logging.getLogger(__name__)

DEFAULT_REDIS_PORT = 6379


def create_redis_client(connection: str) -> redis.Redis:
    """Builds a client from a connection string.

    Accepts a URL (``redis://``, ``rediss://``, ``unix://``) or a bare
    ``host[:port]``. No socket timeouts are set: a hung server hangs the caller.
    """
    if "://" in connection:
        return redis.Redis.from_url(connection)
    host, _, port = connection.partition(":")
    return redis.Redis(host=host or "localhost", port=int(port) if port else DEFAULT_REDIS_PORT)


class RedisDataRepository(ExpiringRepository[T]):
    """Stores values in a Redis database through one exclusively owned client."""

    def __init__(
        self,
        connection: str,
        serializer: Optional[Serializer] = None,
        strict_writes: bool = False,
        client: Optional[redis.Redis] = None,
    ):
        """Initializes the repository.

        Args:
            connection: Redis URL or ``host[:port]``.
            serializer: Value codec; defaults to PickleSerializer.
            strict_writes: Raise StorageWriteError from store_data on failure.
            client: Pre-built client to use instead of connecting to ``connection``.
        """
        self.connection = connection
        self.serializer = serializer or PickleSerializer()
        self.strict_writes = strict_writes
        self._client = client if client is not None else create_redis_client(connection)
        logger.debug(f"RedisDataRepository initialized for {connection}")

    @property
    def client(self) -> redis.Redis:
        return self._client

    def lookup(self, key: str) -> Lookup[T]:
        try:
            data = self._client.get(key.encode("utf-8"))
        except redis.RedisError as e:
            logger.warning(f"Redis GET failed for key '{key}': {e}")
            return Lookup.fault(str(e))
        if data is None:
            return Lookup.not_found()
        try:
            return Lookup.found(self.serializer.deserialize(data))
        except SerializationError as e:
            logger.warning(f"Corrupt Redis value for key '{key}': {e}")
            return Lookup.fault(str(e))

    def write(self, key: str, value: T) -> WriteResult:
        try:
            self._client.set(key.encode("utf-8"), self.serializer.serialize(value))
        except (SerializationError, redis.RedisError) as e:
            logger.error(f"Redis SET failed for key '{key}': {e}")
            return WriteResult.failure(key, str(e))
        return WriteResult.success(key)

    def write_with_expiration(self, key: str, value: T, expiration_seconds: int) -> WriteResult:
        if expiration_seconds < 1:
            detail = f"expiration must be at least one second, got {expiration_seconds}"
            logger.error(f"Redis SETEX rejected for key '{key}': {detail}")
            return WriteResult.failure(key, detail)
        try:
            self._client.setex(key.encode("utf-8"), expiration_seconds, self.serializer.serialize(value))
        except (SerializationError, redis.RedisError) as e:
            logger.error(f"Redis SETEX failed for key '{key}': {e}")
            return WriteResult.failure(key, str(e))
        return WriteResult.success(key)

    def is_stored(self, key: str) -> bool:
        try:
            return bool(self._client.exists(key.encode("utf-8")))
        except redis.RedisError as e:
            logger.warning(f"Redis EXISTS failed for key '{key}': {e}")
            return False

    def clear_storage(self) -> None:
        """Flushes the whole connected database; not scoped by key prefix."""
        try:
            self._client.flushdb()
            logger.info(f"Flushed Redis database at {self.connection}")
        except redis.RedisError as e:
            logger.error(f"Redis FLUSHDB failed: {e}")

    def close(self) -> None:
        """Closes the underlying client connection pool."""
        self._client.close()

    def __enter__(self) -> "RedisDataRepository[T]":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
