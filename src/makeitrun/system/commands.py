"""
Process signalling and launching primitives.

This module provides the two side effects a reconciliation pass can have:
asking a process to terminate, and starting a detached copy of a command.
"""

import logging
import shlex
import subprocess
from typing import List, Union

import psutil

from ..validation import ErrorSeverity, handle_process_error

logger = logging.getLogger(__name__)


def terminate_process(pid: int) -> bool:
    """Send SIGTERM to a process.

    Delivery is a request; nothing waits for the process to exit.

    Args:
        pid: Process ID to signal.

    Returns:
        True if the signal was sent, False if the process no longer exists
        or we are not allowed to signal it.
    """
    try:
        psutil.Process(pid).terminate()
    except psutil.NoSuchProcess:
        logger.debug(f"Process {pid} exited before it could be signalled")
        return False
    except psutil.AccessDenied as e:
        handle_process_error(
            error=e,
            pid=pid,
            severity=ErrorSeverity.WARNING,
            reraise=False,
            logger=logger,
        )
        return False

    logger.debug(f"Sent SIGTERM to process {pid}")
    return True


def build_spawn_args(command_line: str, shell: bool = False) -> Union[str, List[str]]:
    """Prepare Popen arguments for a command line.

    Args:
        command_line: The command and its arguments as a single string.
        shell: Whether the string is handed to /bin/sh unchanged.

    Returns:
        The string itself for shell execution, otherwise the argv produced by
        shell-like splitting.

    Raises:
        ValueError: If the command line has unbalanced quotes.

    Examples:
        >>> build_spawn_args("/usr/bin/perl job.pl --client")
        ['/usr/bin/perl', 'job.pl', '--client']
        >>> build_spawn_args("job.sh > out.log", shell=True)
        'job.sh > out.log'
    """
    if shell:
        return command_line
    return shlex.split(command_line)


def spawn_detached(command_line: str, shell: bool = False) -> int:
    """Launch a command and forget about it.

    The child gets its own session so it survives this process and is not
    touched by signals aimed at our process group. Its standard streams are
    all attached to the null device. The Popen handle is dropped on return;
    the child is never waited on.

    Args:
        command_line: The command and its arguments as a single string.
        shell: Run through /bin/sh instead of executing directly.

    Returns:
        PID of the launched child.

    Raises:
        OSError: If the executable cannot be found or executed.
        ValueError: If the command line cannot be split into arguments.
    """
    args = build_spawn_args(command_line, shell=shell)
    process = subprocess.Popen(
        args,
        shell=shell,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        close_fds=True,
        start_new_session=True,
    )
    logger.debug(f"Launched '{command_line}' with PID {process.pid}")
    # Never waited on; mark finished so the dropped handle stays silent.
    process.returncode = 0
    return process.pid
