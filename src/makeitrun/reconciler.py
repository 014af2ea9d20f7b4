"""
Instance-count reconciliation.

One pass over a process-table snapshot: count the caller's processes whose
command line is exactly the target's, ask the excess to terminate (when
allowed) and launch new instances until the desired count is reached.

Matching is exact string equality on the joined command line. Arguments
that differ only in spacing, quoting or order do not match; wrap such
commands in a small script so the process table shows a stable line.

Matches are visited in the order the process table yields them, so which of
several identical instances survives a trim depends on that order: the first
``desired_count`` seen are kept.
"""

import functools
import logging
from typing import Callable, Iterable, Optional, TextIO

from .models.config import Target
from .models.results import ReconciliationResult
from .models.runtime import ProcessRecord
from .system.commands import spawn_detached, terminate_process
from .system.processes import (
    ProcessProvider,
    PsutilProcessProvider,
    get_current_user_id,
)
from .validation import ErrorSeverity, handle_error

logger = logging.getLogger(__name__)

Terminator = Callable[[int], bool]
Spawner = Callable[[str], int]


class Reconciler:
    """
    Brings the number of running instances of a command to a target count.

    The process source and both side effects are injectable so the
    algorithm can run against synthetic process lists.

    Attributes:
        provider: Source of process-table snapshots.
        terminate: Called with a pid to request termination.
        spawn: Called with the command line to launch a detached instance.
        stream: Where verbose narration is printed; None means stdout.
    """

    def __init__(
        self,
        provider: Optional[ProcessProvider] = None,
        terminate: Optional[Terminator] = None,
        spawn: Optional[Spawner] = None,
        shell: bool = False,
        stream: Optional[TextIO] = None,
    ):
        self.provider = provider or PsutilProcessProvider()
        self.terminate = terminate or terminate_process
        self.spawn = spawn or functools.partial(spawn_detached, shell=shell)
        self.stream = stream

    def run(self, target: Target, current_user_id: Optional[int] = None) -> ReconciliationResult:
        """Read the process table and reconcile it against ``target``."""
        if current_user_id is None:
            current_user_id = get_current_user_id()
        processes = self.provider.list_processes()
        return self.reconcile(target, processes, current_user_id)

    def reconcile(
        self,
        target: Target,
        processes: Iterable[ProcessRecord],
        current_user_id: int,
    ) -> ReconciliationResult:
        """
        Converge on ``target.desired_count`` running instances.

        Args:
            target: What to look for and how many of it should run.
            processes: Process-table snapshot, in table order.
            current_user_id: Only processes owned by this uid are considered.

        Returns:
            ReconciliationResult with the decisions taken. In pretend mode the
            decisions are identical but no process is signalled or launched.
        """
        result = ReconciliationResult()
        command_line = target.command_line

        self._say(target, f"Command:\n  {command_line}")

        count = 0
        for process in processes:
            if process.owning_user_id != current_user_id:
                continue
            if process.command_line != command_line:
                continue

            count += 1
            if target.allow_kill and count > target.desired_count:
                self._kill(target, process)
                result.killed_pids.append(process.pid)
                count -= 1

        result.matched_count = count
        logger.debug(
            f"{count} matching instance(s) of '{command_line}' left, "
            f"{len(result.killed_pids)} selected for termination"
        )

        self._say(target, f"Found {count} running instances.")
        if count >= target.desired_count:
            self._say(target, "No need to run anything.")

        while count < target.desired_count:
            self._say(target, f"{'Would run' if target.pretend else 'Running'}:\n  {command_line}")
            if not target.pretend and not self._launch(command_line):
                result.failed_spawns += 1
            result.spawned_count += 1
            count += 1

        if target.pretend and result.spawned_count:
            self._say(target, f"Would spawn {result.spawned_count} instance(s).")
        self._say(target, "Done :)")

        return result

    def _kill(self, target: Target, process: ProcessRecord) -> None:
        verb = "Would kill" if target.pretend else "Killing"
        self._say(target, f"{verb}: (pid:{process.pid})\n  {process.command_line}")
        if target.pretend:
            return

        logger.info(f"Terminating excess instance {process.pid}")
        # A process that already exited is fine; the count assumes it is gone.
        self.terminate(process.pid)

    def _launch(self, command_line: str) -> bool:
        """Start one instance; report failure instead of raising."""
        try:
            pid = self.spawn(command_line)
        except (OSError, ValueError) as e:
            handle_error(
                error=e,
                context=f"launching '{command_line}'",
                severity=ErrorSeverity.WARNING,
                reraise=False,
                logger=logger,
            )
            return False
        logger.info(f"Started new instance with PID {pid}")
        return True

    def _say(self, target: Target, message: str) -> None:
        if target.verbose:
            print(message, file=self.stream)


def reconcile(
    target: Target,
    processes: Iterable[ProcessRecord],
    current_user_id: int,
    terminate: Optional[Terminator] = None,
    spawn: Optional[Spawner] = None,
) -> ReconciliationResult:
    """Reconcile a given snapshot without constructing a Reconciler by hand."""
    reconciler = Reconciler(terminate=terminate, spawn=spawn)
    return reconciler.reconcile(target, processes, current_user_id)
