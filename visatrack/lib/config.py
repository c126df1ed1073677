"""
visatrack/lib/config.py - Configuration Management

Loads configuration from .visatrack/config.toml, found by walking up from the
current working directory.

Usage:
    from visatrack.lib.config import get_config_value, get_data_dir

    data_dir = get_data_dir()
    level = get_config_value("logging", "level", "VISATRACK_LOG_LEVEL", "WARNING")

Lookup order for every value: environment variable > config.toml > default.
A missing config file is not an error; defaults apply.

Example config.toml:

    [paths]
    data = "data/trackers"

    [logging]
    level = "INFO"
    file = "logs/visatrack.log"
"""
import os
import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

CONFIG_DIR_NAME = ".visatrack"
DEFAULT_DATA_DIR = "data/trackers"


@lru_cache(maxsize=1)
def _find_project_root() -> Path:
    """
    Find project root by looking for a .visatrack/ directory.

    Searches upward from current working directory.

    Raises:
        FileNotFoundError: If .visatrack/ is not found in any parent directory
    """
    current = Path.cwd().resolve()

    for candidate in (current, *current.parents):
        if (candidate / CONFIG_DIR_NAME).is_dir():
            return candidate

    raise FileNotFoundError(
        f"Could not find {CONFIG_DIR_NAME}/ directory in {current} or its parents."
    )


@lru_cache(maxsize=1)
def get_config() -> Dict[str, Any]:
    """
    Load configuration from .visatrack/config.toml.

    Raises:
        FileNotFoundError: If config.toml not found
        tomllib.TOMLDecodeError: If config.toml is invalid
    """
    root = _find_project_root()
    config_path = root / CONFIG_DIR_NAME / "config.toml"

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def get_config_value(section: str, key: str, env_var: Optional[str] = None, default: Any = None) -> Any:
    """
    Get configuration value with fallback chain: ENV > config.toml > default.

    Example:
        >>> get_config_value("paths", "data", "VISATRACK_DATA_DIR", "data/trackers")
        'data/trackers'
    """
    if env_var:
        env_value = os.getenv(env_var)
        if env_value is not None:
            return env_value

    try:
        config = get_config()
        if section in config and key in config[section]:
            return config[section][key]
    except (FileNotFoundError, KeyError):
        pass

    return default


def get_data_dir() -> Path:
    """
    Directory holding tracker snapshots.

    Relative paths from config.toml are resolved against the project root,
    relative paths from the environment against the working directory.
    """
    env_value = os.getenv("VISATRACK_DATA_DIR")
    if env_value:
        return Path(env_value).expanduser().resolve()

    value = get_config_value("paths", "data", default=DEFAULT_DATA_DIR)
    try:
        root = _find_project_root()
    except FileNotFoundError:
        root = Path.cwd()
    return (root / Path(value).expanduser()).resolve()


def get_log_level() -> str:
    return str(get_config_value("logging", "level", "VISATRACK_LOG_LEVEL", "WARNING")).upper()


def get_log_file() -> Optional[Path]:
    value = get_config_value("logging", "file", "VISATRACK_LOG_FILE", None)
    return Path(value).expanduser() if value else None
