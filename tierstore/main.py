"""Main entry point for the tierstore command line.

Sets up the Typer CLI application, wires the configured repository and the
console display together (Composition Root), defines CLI commands, and
delegates execution to the CommandHandler.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, Coroutine, Dict, Optional

import typer
from typing_extensions import Annotated

from tierstore.core.command_handler import CommandHandler
from tierstore.domain.interfaces.repository import DataRepository
from tierstore.infrastructure.cli.display import ConsoleDisplay
from tierstore.infrastructure.config.settings import (
    BACKEND_FILE,
    BACKEND_REDIS,
    BACKENDS,
    DEFAULT_LOG_FORMAT,
    get_backend,
    get_base_dir,
    get_config,
    get_redis_url,
    get_strict_writes,
    load_configuration,
)
from tierstore.infrastructure.monitoring.logger_setup import setup_logging
from tierstore.infrastructure.storage.cached_file_repository import CachedFileDataRepository
from tierstore.infrastructure.storage.cached_redis_repository import CachedRedisDataRepository

logger = logging.getLogger(__name__)


def build_repository(
    backend: str,
    base_dir: Path,
    redis_url: str,
    strict_writes: bool = False,
) -> DataRepository[Any]:
    """Creates the cache-aside repository for the selected backend."""
    if backend == BACKEND_REDIS:
        return CachedRedisDataRepository(redis_url, strict_writes=strict_writes)
    if backend == BACKEND_FILE:
        return CachedFileDataRepository(base_dir, strict_writes=strict_writes)
    raise typer.BadParameter(f"Unknown backend '{backend}'. Choose one of: {', '.join(BACKENDS)}.")


def create_dependencies(
    backend: Optional[str] = None,
    base_dir: Optional[Path] = None,
    redis_url: Optional[str] = None,
    verbose: bool = False,
) -> Dict[str, Any]:
    """Loads configuration, sets up logging and wires up the command handler.

    Explicit arguments win over configured values.
    """
    load_configuration()
    log_level = "DEBUG" if verbose else get_config('logging.level', 'WARNING')
    setup_logging(
        log_level=log_level,
        log_file=get_config('logging.file'),
        log_format=get_config('logging.format', DEFAULT_LOG_FORMAT),
    )

    dependencies: Dict[str, Any] = {}
    dependencies['ui'] = ConsoleDisplay()
    dependencies['repository'] = build_repository(
        backend=(backend or get_backend()).lower(),
        base_dir=base_dir or get_base_dir(),
        redis_url=redis_url or get_redis_url(),
        strict_writes=get_strict_writes(),
    )
    dependencies['command_handler'] = CommandHandler(
        repository=dependencies['repository'],
        ui=dependencies['ui'],
    )
    logger.debug(f"Dependencies initialized with {type(dependencies['repository']).__name__}")
    return dependencies


# --- Typer App Definition ---
app = typer.Typer(
    name="tierstore",
    help="tierstore: cache-aside key/value storage over files or Redis.",
    add_completion=False,
)


def run_async(coro: Coroutine[Any, Any, int]) -> None:
    """Runs an async handler from a sync Typer command and exits with its code."""
    exit_code = asyncio.run(coro)
    raise typer.Exit(code=exit_code)


def _handler(ctx: typer.Context) -> CommandHandler:
    """Builds the dependencies on first use so that parse-duration needs no storage."""
    state: Dict[str, Any] = ctx.obj
    if 'command_handler' not in state:
        state.update(create_dependencies(**state['options']))
        repository = state['repository']
        if hasattr(repository, 'close'):
            ctx.call_on_close(repository.close)
    return state['command_handler']


@app.callback()
def main_callback(
    ctx: typer.Context,
    backend: Annotated[
        Optional[str],
        typer.Option("--backend", "-b", help="Storage backend: 'file' or 'redis'. Uses config if not set.")
    ] = None,
    directory: Annotated[
        Optional[Path],
        typer.Option("--dir", "-d", file_okay=False, help="Base directory for the file backend.")
    ] = None,
    redis_url: Annotated[
        Optional[str],
        typer.Option("--redis-url", help="Redis connection string (URL or host[:port]).")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """Cache-aside key/value storage."""
    ctx.obj = {
        'options': {
            'backend': backend,
            'base_dir': directory,
            'redis_url': redis_url,
            'verbose': verbose,
        }
    }


@app.command()
def get(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to read, e.g. 'users.42'.")],
):
    """Print the value stored under KEY."""
    run_async(_handler(ctx).handle_get(key))


@app.command()
def put(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to write.")],
    value: Annotated[str, typer.Argument(help="Value to store (as text).")],
    ttl: Annotated[
        Optional[str],
        typer.Option("--ttl", "-t", help="Expiration such as '1d12h30m' (redis backend only).")
    ] = None,
):
    """Store VALUE under KEY in both tiers."""
    run_async(_handler(ctx).handle_put(key, value, ttl))


@app.command()
def exists(
    ctx: typer.Context,
    key: Annotated[str, typer.Argument(help="Key to check.")],
):
    """Exit with 0 if KEY is stored, 1 otherwise."""
    run_async(_handler(ctx).handle_exists(key))


@app.command()
def clear(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation.")] = False,
):
    """Remove all stored data from both tiers."""
    run_async(_handler(ctx).handle_clear(confirmed=yes))


@app.command(name="parse-duration")
def parse_duration_command(
    expression: Annotated[str, typer.Argument(help="Duration such as '1d12h30m' or '2y'.")],
):
    """Print the number of seconds in a duration expression."""
    handler = CommandHandler(repository=None, ui=ConsoleDisplay())
    raise typer.Exit(code=handler.handle_parse_duration(expression))


def cli_entry_point():
    """Function called by the console script entry point in pyproject.toml."""
    app()


if __name__ == "__main__":
    cli_entry_point()
