"""Provides functions for loading and accessing configuration settings.

Supports loading from .env files, environment variables, and a dedicated
YAML configuration file (e.g., ~/.tierstore/config.yaml). Configuration is
only read when repositories are built; nothing is reconfigured at runtime.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# --- Configuration Constants ---
DEFAULT_CONFIG_DIR = Path.home() / ".tierstore"
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "config.yaml"
DEFAULT_BASE_DIR = DEFAULT_CONFIG_DIR / "data"
DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
ENV_FILE_NAME = ".env"
ENV_PREFIX = "TIERSTORE_"

BACKEND_FILE = "file"
BACKEND_REDIS = "redis"
BACKENDS = (BACKEND_FILE, BACKEND_REDIS)

# --- Global Configuration Store ---
_config: Dict[str, Any] = {}
_test_config: Dict[str, Any] = {}
_loaded = False


def _flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    """Flattens nested YAML mappings into dotted keys ('storage.base_dir')."""
    flat: Dict[str, Any] = {}
    for key, value in data.items():
        dotted = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, prefix=f"{dotted}."))
        else:
            flat[dotted] = value
    return flat


def load_configuration(config_file: Path = DEFAULT_CONFIG_FILE, env_file: Optional[Path] = None, reload: bool = False) -> None:
    """Loads configuration from environment, .env file, and YAML file.

    Priority order (highest to lowest):
    1. Environment Variables (TIERSTORE_<KEY>)
    2. .env file
    3. YAML configuration file
    4. Default values passed to get_config

    Args:
        config_file: Path to the YAML configuration file.
        env_file: Path to the .env file (searches upwards from cwd if None).
        reload: Discard previously loaded values and load again.
    """
    global _config, _loaded
    if _loaded and not reload:
        logger.debug("Configuration already loaded.")
        return

    _config = {}

    # 1. YAML file (lowest priority)
    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                yaml_config = yaml.safe_load(f)
            if isinstance(yaml_config, dict):
                _config.update(_flatten(yaml_config))
                logger.info(f"Loaded configuration from YAML: {config_file}")
            elif yaml_config is not None:
                logger.warning(f"YAML config file {config_file} did not contain a mapping.")
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load or parse YAML config {config_file}: {e}")
    else:
        logger.debug(f"YAML config file not found: {config_file}")

    # 2. .env file; override=False keeps real environment variables on top
    dotenv_path = env_file or find_dotenv_path()
    if dotenv_path:
        if load_dotenv(dotenv_path=dotenv_path, override=False):
            logger.info(f"Loaded environment variables from: {dotenv_path}")
    else:
        logger.debug("No .env file found at or above the current directory.")

    _loaded = True


def env_var_name(key: str) -> str:
    """Maps a dotted config key to its environment variable ('storage.base_dir' -> TIERSTORE_STORAGE_BASE_DIR)."""
    return ENV_PREFIX + key.upper().replace('.', '_')


def _coerce(value: str) -> Any:
    lowered = value.strip().lower()
    if lowered == 'true':
        return True
    if lowered == 'false':
        return False
    try:
        return float(value) if '.' in value else int(value)
    except ValueError:
        return value


def get_config(key: str, default: Any = None) -> Any:
    """Get a configuration value by dotted key.

    Priority:
    1. Test configuration
    2. Environment variable
    3. Loaded YAML config
    4. Default value
    """
    if key in _test_config:
        return _test_config[key]

    env_key = env_var_name(key)
    if env_key in os.environ:
        return _coerce(os.environ[env_key])

    if key in _config:
        return _config[key]

    return default


def find_dotenv_path() -> Optional[Path]:
    """Searches for the .env file upwards from the current directory."""
    cwd = Path.cwd()
    for path in [cwd] + list(cwd.parents):
        env_path = path / ENV_FILE_NAME
        if env_path.is_file():
            return env_path
    return None


# --- Convenience Functions ---

def get_backend() -> str:
    """Gets the configured storage backend ('file' or 'redis')."""
    backend = str(get_config('storage.backend', BACKEND_FILE)).lower()
    if backend not in BACKENDS:
        logger.warning(f"Unknown storage backend '{backend}', falling back to '{BACKEND_FILE}'.")
        return BACKEND_FILE
    return backend


def get_base_dir() -> Path:
    """Gets the base directory for the file-backed repository."""
    return Path(str(get_config('storage.base_dir', DEFAULT_BASE_DIR))).expanduser()


def get_redis_url() -> str:
    """Gets the connection string for the Redis-backed repository."""
    return str(get_config('storage.redis_url', DEFAULT_REDIS_URL))


def get_strict_writes() -> bool:
    """Whether store_data should raise instead of swallowing write failures."""
    flag = get_config('storage.strict_writes', False)
    if isinstance(flag, str):
        return flag.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(flag)


def set_config_for_testing(config_dict: Dict[str, Any]) -> None:
    """Set configuration values that override everything else (tests only)."""
    _test_config.update(config_dict)
    logger.debug(f"Set testing configuration: {config_dict}")


def clear_test_config() -> None:
    """Clear all testing configuration values."""
    _test_config.clear()
    logger.debug("Cleared testing configuration")
