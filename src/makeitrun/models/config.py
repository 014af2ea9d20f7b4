"""
Configuration data models.

This module contains the immutable values built once per invocation: the
settings loaded from ``config.toml`` and the reconciliation target assembled
from those settings and the command-line flags.
"""

from dataclasses import dataclass, field

from ..validation import validate_command_line, validate_count


@dataclass(frozen=True)
class DefaultsConfig:
    """
    Defaults for flags not given on the command line, from ``[defaults]``.
    """

    # Desired number of running instances when --count is not given.
    count: int = 1
    # Whether excess instances are terminated when --kill is not given.
    kill: bool = False


@dataclass(frozen=True)
class SafetyConfig:
    """
    Guard rails, from ``[safety]``.
    """

    # Counts above this are accepted but logged as a warning.
    max_count: int = 32


@dataclass(frozen=True)
class SpawnConfig:
    """
    How new instances are launched, from ``[spawn]``.
    """

    # Hand the command line to /bin/sh instead of executing it directly.
    shell: bool = False


@dataclass(frozen=True)
class LoggingConfig:
    """
    Diagnostic logging settings, from ``[logging]``.
    """

    level: str = "WARNING"


@dataclass(frozen=True)
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)
    safety: SafetyConfig = field(default_factory=SafetyConfig)
    spawn: SpawnConfig = field(default_factory=SpawnConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


@dataclass(frozen=True)
class Target:
    """
    What a single run should converge on.

    ``command_line`` is used verbatim both to recognise running instances
    (exact string equality) and to launch new ones. It must not be blank:
    kernel threads and zombies report an empty command line.

    Raises:
        ValidationError: If ``desired_count`` is not a non-negative integer
            or ``command_line`` is blank.
    """

    command_line: str
    desired_count: int = 1
    allow_kill: bool = False
    pretend: bool = False
    verbose: bool = False

    def __post_init__(self):
        validate_command_line([self.command_line], field_name="command_line")
        object.__setattr__(
            self, "desired_count", validate_count(self.desired_count, field_name="desired_count")
        )

        # Pretend mode always narrates.
        if self.pretend and not self.verbose:
            object.__setattr__(self, "verbose", True)
