"""
Process-table enumeration.

This module defines the provider interface the reconciler reads processes
through, and the psutil-backed implementation used at runtime.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Sequence

import psutil

from ..models.runtime import ProcessRecord

logger = logging.getLogger(__name__)


def join_cmdline(cmdline: Optional[Sequence[str]]) -> str:
    """Join an argv list the way the process table presents it.

    Args:
        cmdline: Argument vector as returned by ``psutil.Process.cmdline()``,
            or None when it could not be read.

    Returns:
        The arguments joined by single spaces; empty string for None or [].
    """
    if not cmdline:
        return ""
    return " ".join(cmdline)


def get_current_user_id() -> int:
    """Return the effective user id of this process."""
    return os.geteuid()


class ProcessProvider(ABC):
    """
    Abstract source of process-table snapshots.

    Implementations return every live process they can see; filtering by
    user and command line is the reconciler's job.
    """

    @abstractmethod
    def list_processes(self) -> List[ProcessRecord]:
        """Return a fresh snapshot of the process table, in table order."""
        pass


class PsutilProcessProvider(ProcessProvider):
    """
    Reads the process table through ``psutil.process_iter``.

    Processes that exit or deny access while the table is being walked are
    skipped silently; a process whose owner cannot be read is never one of
    ours and is skipped as well.
    """

    # Attributes pre-fetched by psutil.process_iter in a single pass.
    ITER_ATTRS = ["pid", "uids", "cmdline"]

    def list_processes(self) -> List[ProcessRecord]:
        records: List[ProcessRecord] = []
        for proc in psutil.process_iter(attrs=self.ITER_ATTRS, ad_value=None):
            # process_iter has already fetched everything; info never raises.
            info = proc.info
            uids = info.get("uids")
            if uids is None:
                logger.debug(f"Skipping pid {info.get('pid')}: owner not readable")
                continue
            records.append(
                ProcessRecord(
                    pid=info["pid"],
                    owning_user_id=uids.real,
                    command_line=join_cmdline(info.get("cmdline")),
                )
            )
        logger.debug(f"Read {len(records)} entries from the process table")
        return records


class StaticProcessProvider(ProcessProvider):
    """Serves a fixed snapshot, e.g. one captured earlier or built in tests."""

    def __init__(self, processes: Iterable[ProcessRecord]):
        self._processes = list(processes)

    def list_processes(self) -> List[ProcessRecord]:
        return list(self._processes)
