import random
from pathlib import Path
from typing import Dict, List

import pytest
import redis
from typer.testing import CliRunner

from tierstore.infrastructure.config.settings import clear_test_config
from tierstore.infrastructure.serialization.pickle_serializer import PickleSerializer


@pytest.fixture(scope="session")
def runner():
    """Provides a Typer CliRunner instance."""
    return CliRunner()


@pytest.fixture
def redis_data() -> Dict[bytes, bytes]:
    """Backing dict of the mocked Redis server, keyed by raw bytes."""
    return {}


@pytest.fixture
def redis_ttls() -> Dict[bytes, int]:
    """TTLs recorded by SETEX on the mocked Redis server."""
    return {}


@pytest.fixture
def mock_redis_client(mocker, redis_data, redis_ttls):
    """A MagicMock(spec=redis.Redis) whose GET/SET/SETEX/EXISTS/FLUSHDB act on a dict.

    Tests simulate expiry or eviction by deleting from ``redis_data`` directly.
    """
    client = mocker.MagicMock(spec=redis.Redis)

    def _set(key, value):
        redis_data[key] = value
        redis_ttls.pop(key, None)
        return True

    def _setex(key, seconds, value):
        redis_data[key] = value
        redis_ttls[key] = seconds
        return True

    def _flushdb():
        redis_data.clear()
        redis_ttls.clear()
        return True

    client.get.side_effect = lambda key: redis_data.get(key)
    client.set.side_effect = _set
    client.setex.side_effect = _setex
    client.exists.side_effect = lambda *keys: sum(1 for k in keys if k in redis_data)
    client.flushdb.side_effect = _flushdb
    return client


@pytest.fixture
def broken_redis_client(mocker):
    """A client whose every command raises ConnectionError."""
    client = mocker.MagicMock(spec=redis.Redis)
    error = redis.ConnectionError("Connection refused")
    for name in ("get", "set", "setex", "exists", "flushdb"):
        getattr(client, name).side_effect = error
    return client


@pytest.fixture
def storage_dir(tmp_path: Path) -> Path:
    """Base directory for file-backed repositories (not created up front)."""
    return tmp_path / "storage"


@pytest.fixture(autouse=True)
def reset_test_config():
    """Ensure config overrides set by one test never leak into the next."""
    yield
    clear_test_config()


@pytest.fixture(scope="session")
def corrupted_pickles() -> List[bytes]:
    """Damaged copies of a real pickle: a few bytes overwritten, then cut at a random offset."""
    rng = random.Random(20240611)
    payload = PickleSerializer().serialize({"user": {"id": 7, "tags": ["a", "b"], "score": 2.5}})
    samples = []
    for _ in range(500):
        data = bytearray(payload)
        for _ in range(rng.randint(1, 4)):
            data[rng.randrange(len(data))] = rng.randrange(256)
        samples.append(bytes(data[:rng.randint(1, len(data))]))
    return samples
