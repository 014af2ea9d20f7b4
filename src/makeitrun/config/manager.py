"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management interface,
implementing a singleton pattern to ensure configuration is loaded only once.
"""

import logging
import os
from pathlib import Path
from typing import Optional, Tuple

from ..models.config import AppConfig
from .loader import load_main_config
from .validators import validate_app_config

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MAKEITRUN_CONFIG"

# Used only when neither set_config_path() nor the environment names a file.
DEFAULT_CONFIG_FILE_PATH = Path("~/.config/makeitrun/config.toml")

# --- Global Singleton for Configuration ---

_CONFIG: Optional[AppConfig] = None

# Explicitly chosen configuration file. An explicit file must exist.
_CONFIG_FILE_PATH: Optional[Path] = None


def set_config_path(config_path: Optional[Path]) -> None:
    """
    Set a custom configuration file path.

    Args:
        config_path: Path to a config.toml file, or None to return to the
            environment variable / default location lookup

    Note:
        Clears the cached configuration so the next get_config() reloads.
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = config_path
    _CONFIG = None
    logger.debug(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """
    Clear the cached configuration, forcing a reload on next access.
    """
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def resolve_config_path() -> Tuple[Path, bool]:
    """
    Work out which configuration file to read.

    Returns:
        Tuple of (path, required). ``required`` is False only for the
        default location, which may legitimately be absent.
    """
    if _CONFIG_FILE_PATH is not None:
        return _CONFIG_FILE_PATH.expanduser(), True

    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser(), True

    return DEFAULT_CONFIG_FILE_PATH.expanduser(), False


def _load_config(config_path: Path, required: bool) -> AppConfig:
    """
    Load the application configuration from a TOML file.

    Args:
        config_path: Path to the config.toml file
        required: Whether a missing file is an error

    Returns:
        Fully validated AppConfig instance

    Raises:
        FileNotFoundError: If a required configuration file is missing
        OSError: If the file cannot be opened
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    if not required and not config_path.exists():
        logger.debug(f"No configuration file at {config_path}, using built-in defaults")
        return AppConfig()

    config_data = load_main_config(config_path)
    app_config = validate_app_config(config_data)
    logger.debug(f"Successfully loaded configuration from {config_path}")
    return app_config


def get_config() -> AppConfig:
    """
    Get the global application configuration, loading it if necessary.

    The first call resolves the configuration path, loads and validates the
    file. Subsequent calls return the cached instance.

    Returns:
        The singleton AppConfig instance

    Raises:
        FileNotFoundError: If an explicitly named configuration file is missing
        OSError: If the file cannot be opened
        ValidationError: If configuration validation fails
        tomllib.TOMLDecodeError: If the TOML file is malformed
    """
    global _CONFIG
    if _CONFIG is None:
        config_path, required = resolve_config_path()
        _CONFIG = _load_config(config_path, required)
    return _CONFIG


def is_config_loaded() -> bool:
    """
    Check if configuration has been loaded and cached.
    """
    return _CONFIG is not None


def get_config_info() -> dict:
    """
    Get information about the current configuration state.

    Returns:
        Dictionary with configuration metadata
    """
    config_path, required = resolve_config_path()
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(config_path),
        "config_required": required,
    }
