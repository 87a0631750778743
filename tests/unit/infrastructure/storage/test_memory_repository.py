import asyncio

import pytest

from tierstore.domain.interfaces.repository import DataRepository
from tierstore.domain.models.common import LookupStatus
from tierstore.infrastructure.storage.memory_repository import InMemoryDataRepository


@pytest.fixture
def string_repository():
    return InMemoryDataRepository()


@pytest.fixture
def integer_repository():
    return InMemoryDataRepository()


def test_get_data_returns_stored_string(string_repository: InMemoryDataRepository):
    string_repository.store_data("testKey", "testValue")
    assert string_repository.get_data("testKey") == "testValue"


def test_get_data_returns_stored_integer(integer_repository: InMemoryDataRepository):
    integer_repository.store_data("testKey", 42)
    assert integer_repository.get_data("testKey") == 42


def test_store_data_returns_value_and_marks_key_stored(string_repository: InMemoryDataRepository):
    assert string_repository.store_data("testKey", "testValue") == "testValue"
    assert string_repository.is_stored("testKey")


def test_unknown_key_is_absent(string_repository: InMemoryDataRepository):
    assert string_repository.get_data("missing") is None
    assert not string_repository.is_stored("missing")
    assert string_repository.lookup("missing").status is LookupStatus.NOT_FOUND


def test_stored_none_is_found_not_missing(string_repository: InMemoryDataRepository):
    string_repository.store_data("nothing", None)
    assert string_repository.lookup("nothing").is_found
    assert string_repository.is_stored("nothing")


def test_clear_storage_is_idempotent(string_repository: InMemoryDataRepository):
    string_repository.store_data("a", "1")
    string_repository.store_data("b", "2")

    string_repository.clear_storage()
    string_repository.clear_storage()

    assert len(string_repository) == 0
    assert not string_repository.is_stored("a")
    assert not string_repository.is_stored("b")


def test_discard_forgets_one_key(string_repository: InMemoryDataRepository):
    string_repository.store_data("a", "1")
    string_repository.store_data("b", "2")

    string_repository.discard("a")
    string_repository.discard("never-stored")

    assert not string_repository.is_stored("a")
    assert string_repository.get_data("b") == "2"


def test_async_variants(string_repository: InMemoryDataRepository):
    async def scenario():
        stored = await string_repository.store_data_async("k", "v")
        found = await string_repository.get_data_async("k")
        present = await string_repository.is_stored_async("k")
        await string_repository.clear_storage_async()
        return stored, found, present, await string_repository.is_stored_async("k")

    assert asyncio.run(scenario()) == ("v", "v", True, False)


def test_parameterized_repository():
    repository = InMemoryDataRepository[int]()
    repository.store_data("n", 1)
    assert isinstance(repository, DataRepository)
    assert repository.get_data("n") == 1
