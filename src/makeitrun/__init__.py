"""
Make It Run: periodically check and re-spawn a command, as needed.

Run from cron (or any other scheduler), it makes sure a fixed command line
has the desired number of running instances owned by the current user,
launching more when short and optionally terminating the excess.

The package is organized into specialized modules:
- models: Target, process snapshot and result data structures
- validation: Input validation and error handling
- config: Optional TOML configuration loading
- system: Process-table access, signalling and launching
- reconciler: The single reconciliation pass
- cli: Command-line interface

Usage:
    From command line:
        make-it-run [options] [--] command

    Programmatically:
        from makeitrun import Reconciler, Target
        result = Reconciler().run(Target("/usr/bin/myjob --client", desired_count=2))
"""

__version__ = "1.0"

# Main interfaces
from .reconciler import Reconciler, reconcile
from .config import get_config, clear_config_cache, set_config_path
from .cli import main_cli

# Model classes for external use
from .models import (
    AppConfig,
    ProcessRecord,
    ReconciliationResult,
    Target,
)

# System utilities
from .system import (
    ProcessProvider,
    PsutilProcessProvider,
    StaticProcessProvider,
    get_current_user_id,
    spawn_detached,
    terminate_process,
)

# Validation utilities
from .validation import ValidationError

__all__ = [
    # Main interfaces
    "Reconciler",
    "reconcile",
    "get_config",
    "clear_config_cache",
    "set_config_path",
    "main_cli",
    # Models
    "AppConfig",
    "ProcessRecord",
    "ReconciliationResult",
    "Target",
    # System utilities
    "ProcessProvider",
    "PsutilProcessProvider",
    "StaticProcessProvider",
    "get_current_user_id",
    "spawn_detached",
    "terminate_process",
    # Validation
    "ValidationError",
]
