"""
Runtime data models.

Snapshot entries read from the process table during a single run.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ProcessRecord:
    """
    One live process as seen when the process table was read.

    Attributes:
        pid: Process ID.
        owning_user_id: Real user id the process runs as.
        command_line: Full argv joined by single spaces; empty for kernel
            threads and zombies.
    """

    pid: int
    owning_user_id: int
    command_line: str
