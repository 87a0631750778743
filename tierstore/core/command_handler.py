"""Command Handler: Orchestrates CLI command execution.

Receives commands from the main entry point (main.py) and runs them against
the configured repository, reporting results through the UserInterface.
Each handler returns the process exit code for its command.
"""

import logging
from typing import Any, Optional

from tierstore.domain.exceptions import InvalidFormatError, StorageWriteError
from tierstore.domain.interfaces.repository import DataRepository, ExpiringRepository
from tierstore.domain.interfaces.user_interface import UserInterface
from tierstore.utils.duration import duration_to_seconds, parse_duration

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


class CommandHandler:
    """Handles incoming commands and delegates to the repository."""

    def __init__(self, repository: Optional[DataRepository[Any]], ui: UserInterface):
        self.repository = repository
        self.ui = ui

    async def handle_get(self, key: str) -> int:
        """Handles the 'get' command."""
        logger.info(f"Handling 'get' command for key: {key}")
        value = await self.repository.get_data_async(key)
        if value is None:
            self.ui.display_info(f"No value stored for key '{key}'.")
            return EXIT_OK
        self.ui.display_output(str(value), title=key)
        return EXIT_OK

    async def handle_put(self, key: str, value: str, ttl: Optional[str] = None) -> int:
        """Handles the 'put' command, optionally with an expiration."""
        logger.info(f"Handling 'put' command for key: {key} (ttl={ttl})")
        try:
            if ttl is None:
                await self.repository.store_data_async(key, value)
                self.ui.display_info(f"Stored key '{key}'.")
                return EXIT_OK

            if not isinstance(self.repository, ExpiringRepository):
                self.ui.display_error("Expiration is only supported by the redis backend.")
                return EXIT_FAILURE
            seconds = duration_to_seconds(ttl)
            await self.repository.store_data_with_expiration_async(key, value, seconds)
            self.ui.display_info(f"Stored key '{key}' for {seconds} seconds.")
            return EXIT_OK
        except InvalidFormatError as e:
            self.ui.display_error(str(e))
            return EXIT_FAILURE
        except StorageWriteError as e:
            logger.error(f"Put command failed: {e}")
            self.ui.display_error(str(e))
            return EXIT_FAILURE

    async def handle_exists(self, key: str) -> int:
        """Handles the 'exists' command; exit code 0 if present, 1 if absent."""
        if await self.repository.is_stored_async(key):
            self.ui.display_info(f"Key '{key}' is stored.")
            return EXIT_OK
        self.ui.display_info(f"Key '{key}' is not stored.")
        return EXIT_FAILURE

    async def handle_clear(self, confirmed: bool = False) -> int:
        """Handles the 'clear' command, asking for confirmation unless already confirmed."""
        if not confirmed and not self.ui.ask_yes_no_question("Remove all stored data?"):
            self.ui.display_warning("Clear cancelled.")
            return EXIT_FAILURE
        await self.repository.clear_storage_async()
        self.ui.display_info("Storage cleared.")
        return EXIT_OK

    def handle_parse_duration(self, expression: str) -> int:
        """Handles the 'parse-duration' command."""
        try:
            duration = parse_duration(expression)
        except InvalidFormatError as e:
            self.ui.display_error(str(e))
            return EXIT_FAILURE
        self.ui.display_output(str(duration_to_seconds(duration)), title=f"{expression or '(empty)'} in seconds")
        return EXIT_OK
