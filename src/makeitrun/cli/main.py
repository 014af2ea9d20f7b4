"""
Command-line interface for Make It Run.

This module parses the command line, loads the optional configuration file,
builds the reconciliation target once and runs a single reconciliation pass.
It is meant to be started periodically, for example from cron:

    */15 * * * * make-it-run --count 2 --kill -- /usr/bin/perl /home/me/job.pl --client
"""

import argparse
import logging
import sys
import tomllib
from pathlib import Path
from typing import List, Optional, Tuple

from .. import __version__
from ..config import get_config, set_config_path
from ..models.config import Target
from ..reconciler import Reconciler
from ..validation import (
    handle_cli_error,
    ValidationError,
    validate_command_line,
    validate_count,
)

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "makeitrun"

DESCRIPTION = "Make It Run - check if given command is running, and if not - run it."

EPILOG = """\
notes:
  The command is matched by its exact command line, as the process table shows
  it. Wrap commands with many options or glob characters in a small script, and
  start interpreted scripts through their interpreter (/usr/bin/perl foo.pl
  rather than foo.pl). Only processes of the user running this tool are counted.
"""


def _setup_logging() -> None:
    """Configure diagnostic logging on stderr, quiet by default."""
    logging.basicConfig(
        level=logging.WARNING,
        format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def _count_argument(value: str) -> int:
    try:
        return validate_count(value, field_name="--count")
    except ValidationError as e:
        raise argparse.ArgumentTypeError(str(e))


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the make-it-run command."""
    parser = argparse.ArgumentParser(
        prog="make-it-run",
        description=DESCRIPTION,
        epilog=EPILOG,
        usage="%(prog)s [options] [--] command",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V",
        "--version",
        action="version",
        version=f"Make It Run Version {__version__}",
        help="Display program version.",
    )
    parser.add_argument(
        "-p",
        "--pretend",
        action="store_true",
        help="Do not do anything, just say what would be done. Enables verbosity.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Say what is happening.",
    )
    parser.add_argument(
        "-c",
        "--count",
        type=_count_argument,
        default=None,
        metavar="N",
        help="Maintain N instances of the command. Default: 1 (or [defaults] count).",
    )
    parser.add_argument(
        "-k",
        "--kill",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Terminate excess instances with SIGTERM. Default: no (or [defaults] kill); --no-kill overrides the config.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        metavar="PATH",
        help="Read settings from this TOML file.",
    )
    parser.add_argument(
        "command",
        nargs="*",
        help=argparse.SUPPRESS,
    )
    return parser


def split_command_args(argv: List[str]) -> Tuple[List[str], List[str]]:
    """Split arguments at the first ``--``.

    Everything after the separator belongs to the supervised command and is
    never interpreted as an option.

    Returns:
        Tuple of (option_args, command_args). command_args is empty when
        there is no separator.
    """
    if "--" in argv:
        index = argv.index("--")
        return argv[:index], argv[index + 1:]
    return list(argv), []


def main_cli(argv: Optional[List[str]] = None) -> int:
    """
    Main command-line interface for Make It Run.

    Runs one reconciliation pass for the command given on the command line.

    Args:
        argv: Arguments without the program name; defaults to sys.argv[1:].

    Returns:
        Exit code: 0 whenever the reconciliation pass ran, including when
        some launches failed (those are logged as warnings).

    Raises:
        SystemExit: For --help and --version (code 0), usage errors (code 2)
            and configuration errors (code 1).
    """
    if argv is None:
        argv = sys.argv[1:]

    _setup_logging()
    parser = build_parser()

    if not argv:
        parser.print_help()
        return 0

    option_args, command_args = split_command_args(argv)
    args = parser.parse_intermixed_args(option_args)

    if args.config is not None:
        set_config_path(args.config)

    try:
        app_config = get_config()
    except (OSError, ValidationError, tomllib.TOMLDecodeError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            logger=logger,
        )

    logging.getLogger(PACKAGE_LOGGER).setLevel(app_config.logging.level)

    try:
        command_line = validate_command_line(args.command + command_args)
    except ValidationError as e:
        parser.error(str(e))

    count = args.count if args.count is not None else app_config.defaults.count
    allow_kill = args.kill if args.kill is not None else app_config.defaults.kill
    if count > app_config.safety.max_count:
        logger.warning(
            f"Maintaining {count} instances (safety.max_count is {app_config.safety.max_count}). "
            f"High counts can flood the machine if the command exits quickly."
        )

    target = Target(
        command_line=command_line,
        desired_count=count,
        allow_kill=allow_kill,
        pretend=args.pretend,
        verbose=args.verbose,
    )

    reconciler = Reconciler(shell=app_config.spawn.shell)
    result = reconciler.run(target)

    if result.failed_spawns:
        logger.warning(
            f"{result.failed_spawns} of {result.spawned_count} launch(es) of "
            f"'{command_line}' failed; running instances: {result.final_count - result.failed_spawns}"
        )

    return 0


if __name__ == "__main__":
    sys.exit(main_cli())
