import asyncio

import pytest
from unittest.mock import MagicMock

from tierstore.core.command_handler import EXIT_FAILURE, EXIT_OK, CommandHandler
from tierstore.domain.interfaces.user_interface import UserInterface
from tierstore.domain.models.common import WriteResult
from tierstore.infrastructure.storage.cached_file_repository import CachedFileDataRepository
from tierstore.infrastructure.storage.cached_redis_repository import CachedRedisDataRepository


@pytest.fixture
def mock_ui():
    return MagicMock(spec=UserInterface)


@pytest.fixture
def file_repository(storage_dir):
    return CachedFileDataRepository(storage_dir)


@pytest.fixture
def redis_repository(mock_redis_client):
    return CachedRedisDataRepository("localhost", client=mock_redis_client)


def test_get_displays_value(file_repository, mock_ui: MagicMock):
    file_repository.store_data("greeting", "hello")
    handler = CommandHandler(repository=file_repository, ui=mock_ui)

    assert asyncio.run(handler.handle_get("greeting")) == EXIT_OK
    mock_ui.display_output.assert_called_once_with("hello", title="greeting")


def test_get_missing_key_reports_absence(file_repository, mock_ui: MagicMock):
    handler = CommandHandler(repository=file_repository, ui=mock_ui)

    assert asyncio.run(handler.handle_get("missing")) == EXIT_OK
    mock_ui.display_output.assert_not_called()
    mock_ui.display_info.assert_called_once_with("No value stored for key 'missing'.")


def test_put_stores_value(file_repository, mock_ui: MagicMock):
    handler = CommandHandler(repository=file_repository, ui=mock_ui)

    assert asyncio.run(handler.handle_put("k", "v")) == EXIT_OK
    assert file_repository.get_data("k") == "v"
    mock_ui.display_info.assert_called_once_with("Stored key 'k'.")


def test_put_with_ttl_on_redis(redis_repository, redis_ttls, mock_ui: MagicMock):
    handler = CommandHandler(repository=redis_repository, ui=mock_ui)

    assert asyncio.run(handler.handle_put("session", "abc", ttl="1h30m")) == EXIT_OK
    assert redis_ttls[b"session"] == 5400
    mock_ui.display_info.assert_called_once_with("Stored key 'session' for 5400 seconds.")


def test_put_with_ttl_on_file_backend_is_rejected(file_repository, mock_ui: MagicMock):
    handler = CommandHandler(repository=file_repository, ui=mock_ui)

    assert asyncio.run(handler.handle_put("k", "v", ttl="1h")) == EXIT_FAILURE
    assert not file_repository.is_stored("k")
    mock_ui.display_error.assert_called_once()


def test_put_with_invalid_ttl_reports_error(redis_repository, mock_redis_client, mock_ui: MagicMock):
    handler = CommandHandler(repository=redis_repository, ui=mock_ui)

    assert asyncio.run(handler.handle_put("k", "v", ttl="30mdd")) == EXIT_FAILURE
    mock_redis_client.setex.assert_not_called()
    assert "Invalid time string format" in mock_ui.display_error.call_args.args[0]


def test_put_strict_write_failure_reports_error(mock_ui: MagicMock, mocker):
    repository = CachedRedisDataRepository("localhost", client=mocker.MagicMock(), strict_writes=True)
    mocker.patch.object(repository.remote, "write", return_value=WriteResult.failure("k", "disk full"))
    handler = CommandHandler(repository=repository, ui=mock_ui)

    assert asyncio.run(handler.handle_put("k", "v")) == EXIT_FAILURE
    assert "disk full" in mock_ui.display_error.call_args.args[0]


def test_exists_exit_codes(file_repository, mock_ui: MagicMock):
    file_repository.store_data("present", 1)
    handler = CommandHandler(repository=file_repository, ui=mock_ui)

    assert asyncio.run(handler.handle_exists("present")) == EXIT_OK
    assert asyncio.run(handler.handle_exists("absent")) == EXIT_FAILURE


def test_clear_asks_for_confirmation(file_repository, mock_ui: MagicMock):
    file_repository.store_data("k", "v")
    mock_ui.ask_yes_no_question.return_value = False
    handler = CommandHandler(repository=file_repository, ui=mock_ui)

    assert asyncio.run(handler.handle_clear()) == EXIT_FAILURE
    assert file_repository.is_stored("k")
    mock_ui.display_warning.assert_called_once_with("Clear cancelled.")


def test_clear_confirmed(file_repository, mock_ui: MagicMock):
    file_repository.store_data("k", "v")
    handler = CommandHandler(repository=file_repository, ui=mock_ui)

    assert asyncio.run(handler.handle_clear(confirmed=True)) == EXIT_OK
    assert not file_repository.is_stored("k")
    mock_ui.ask_yes_no_question.assert_not_called()


def test_parse_duration(mock_ui: MagicMock):
    handler = CommandHandler(repository=None, ui=mock_ui)

    assert handler.handle_parse_duration("1d12h30m") == EXIT_OK
    mock_ui.display_output.assert_called_once_with("131400", title="1d12h30m in seconds")


def test_parse_duration_invalid(mock_ui: MagicMock):
    handler = CommandHandler(repository=None, ui=mock_ui)

    assert handler.handle_parse_duration("30mdd") == EXIT_FAILURE
    mock_ui.display_error.assert_called_once()


def test_parse_duration_oversized_component(mock_ui: MagicMock):
    handler = CommandHandler(repository=None, ui=mock_ui)

    assert handler.handle_parse_duration("9" * 5000 + "s") == EXIT_FAILURE
    mock_ui.display_error.assert_called_once()
