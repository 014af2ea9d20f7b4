"""
Configuration management for the makeitrun package.

This module provides a clean interface for loading, validating, and accessing
configuration data from an optional TOML file with singleton pattern management.
"""

# Main configuration interface
from .manager import (
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    resolve_config_path,
    set_config_path,
)

# For advanced usage - direct access to the loader and validator
from .loader import load_main_config, load_toml_file
from .validators import validate_app_config

__all__ = [
    # Main interface
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    "resolve_config_path",
    # Advanced interface
    "load_toml_file",
    "load_main_config",
    "validate_app_config",
]
