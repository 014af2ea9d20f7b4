"""
Data models for the makeitrun package.

Configuration Models:
- Settings loaded from the optional TOML configuration file
- The reconciliation target built from flags and settings

Runtime Models:
- Process-table snapshot entries

Result Models:
- The outcome of a reconciliation pass

All models are dataclasses; everything except the result is frozen.
"""

# Configuration models
from .config import (
    AppConfig,
    DefaultsConfig,
    LoggingConfig,
    SafetyConfig,
    SpawnConfig,
    Target,
)

# Runtime models
from .runtime import ProcessRecord

# Result models
from .results import ReconciliationResult

__all__ = [
    # Configuration
    "AppConfig",
    "DefaultsConfig",
    "LoggingConfig",
    "SafetyConfig",
    "SpawnConfig",
    "Target",
    # Runtime
    "ProcessRecord",
    # Results
    "ReconciliationResult",
]
