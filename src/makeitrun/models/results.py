"""
Result data models.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass
class ReconciliationResult:
    """
    Outcome of one reconciliation pass.

    In pretend mode the counts describe what would have been done.
    """

    # Matching instances left after trimming the excess.
    matched_count: int = 0
    # Pids selected for termination, in process-table order.
    killed_pids: List[int] = field(default_factory=list)
    # New instances launched (or that would be launched).
    spawned_count: int = 0
    # Launches that failed at the OS level.
    failed_spawns: int = 0

    @property
    def final_count(self) -> int:
        return self.matched_count + self.spawned_count
