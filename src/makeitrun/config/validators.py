"""
Configuration validation utilities.

Turns the raw TOML mapping into a validated, immutable AppConfig. Every
section and key is optional; missing values fall back to the dataclass
defaults.
"""

import logging
from typing import Any, Dict

from ..models.config import (
    AppConfig,
    DefaultsConfig,
    LoggingConfig,
    SafetyConfig,
    SpawnConfig,
)
from ..validation import (
    ValidationError,
    validate_boolean,
    validate_count,
    validate_enum_choice,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

KNOWN_SECTIONS = {"defaults", "safety", "spawn", "logging"}


def _section(config_data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config_data.get(name, {})
    if not isinstance(section, dict):
        raise ValidationError(
            f"[{name}] must be a table",
            field_name=name,
            value=section
        )
    return section


def validate_app_config(config_data: Dict[str, Any]) -> AppConfig:
    """
    Validate and create an AppConfig from raw configuration data.

    Args:
        config_data: Raw configuration mapping parsed from TOML

    Returns:
        Validated AppConfig instance

    Raises:
        ValidationError: If any value is of the wrong type or out of range
    """
    for name in config_data:
        if name not in KNOWN_SECTIONS:
            logger.warning(f"Ignoring unknown configuration section [{name}]")

    defaults_settings = _section(config_data, "defaults")
    safety_settings = _section(config_data, "safety")
    spawn_settings = _section(config_data, "spawn")
    logging_settings = _section(config_data, "logging")

    max_count = validate_count(
        safety_settings.get("max_count", SafetyConfig.max_count),
        field_name="safety.max_count",
    )
    if max_count < 1:
        raise ValidationError(
            "safety.max_count must be >= 1",
            field_name="safety.max_count",
            value=max_count
        )

    defaults = DefaultsConfig(
        count=validate_count(
            defaults_settings.get("count", DefaultsConfig.count),
            field_name="defaults.count",
        ),
        kill=validate_boolean(
            defaults_settings.get("kill", DefaultsConfig.kill),
            field_name="defaults.kill",
        ),
    )

    spawn = SpawnConfig(
        shell=validate_boolean(
            spawn_settings.get("shell", SpawnConfig.shell),
            field_name="spawn.shell",
        ),
    )

    log_config = LoggingConfig(
        level=validate_enum_choice(
            logging_settings.get("level", LoggingConfig.level),
            choices=LOG_LEVELS,
            field_name="logging.level",
            case_sensitive=False,
        ),
    )

    return AppConfig(
        defaults=defaults,
        safety=SafetyConfig(max_count=max_count),
        spawn=spawn,
        logging=log_config,
    )
