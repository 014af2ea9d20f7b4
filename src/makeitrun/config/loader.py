"""
Configuration file loading utilities.

This module handles the low-level loading and parsing of the TOML
configuration file. Errors propagate unlogged; the caller reports them once.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)


def load_toml_file(file_path: Path, description: str = "configuration file") -> Dict[str, Any]:
    """
    Load and parse a TOML file.

    Args:
        file_path: Path to the TOML file to load
        description: Human-readable description for error messages

    Returns:
        Parsed TOML data as a dictionary

    Raises:
        FileNotFoundError: If the file doesn't exist
        OSError: If the path cannot be opened (a directory, no permission)
        tomllib.TOMLDecodeError: If the file is malformed
    """
    logger.debug(f"Loading {description} from: {file_path}")

    if not file_path.exists():
        raise FileNotFoundError(f"{description} not found: {file_path}")

    with open(file_path, "rb") as f:
        return tomllib.load(f)


def load_main_config(config_path: Path) -> Dict[str, Any]:
    """
    Load the main configuration file (config.toml).

    Args:
        config_path: Path to the config.toml file

    Returns:
        Parsed configuration data
    """
    return load_toml_file(config_path, "main configuration file")
