"""
System interaction utilities.

This module wraps the operating-system pieces a reconciliation pass needs:

- Reading the process table (through psutil) into ProcessRecord snapshots
- Looking up the user the tool runs as
- Requesting termination of a process
- Launching a detached copy of a command
"""

# Process table
from .processes import (
    ProcessProvider,
    PsutilProcessProvider,
    StaticProcessProvider,
    get_current_user_id,
    join_cmdline,
)

# Signals and launching
from .commands import build_spawn_args, spawn_detached, terminate_process

__all__ = [
    # Processes
    "ProcessProvider",
    "PsutilProcessProvider",
    "StaticProcessProvider",
    "get_current_user_id",
    "join_cmdline",
    # Commands
    "build_spawn_args",
    "spawn_detached",
    "terminate_process",
]
