"""
Command-line interface for sysprobe.

Two subcommands are provided:

    sysprobe exec "<command>" [--cwd DIR] [--env KEY=VALUE ...]
    sysprobe info <pid> [--json]
"""

import argparse
import json
import logging
import sys
import tomllib
from pathlib import Path
from typing import List, Optional

from ..config import get_config, set_config_path
from ..inspector import get_process_info, reset_querier
from ..models.command import CommandOptions
from ..models.process import ProcessInfo
from ..system.commands import exec_command
from ..validation import (
    ProcessQueryError,
    ValidationError,
    handle_cli_error,
    handle_subprocess_error,
    validate_env_assignments,
    validate_path_exists,
    validate_pid,
)

LOG_FORMAT = "%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def setup_logging(level: str) -> None:
    """Configure root logging for CLI runs. Logs go to stderr so stdout stays clean."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sysprobe",
        description="Run shell commands with encoding recovery and inspect processes by PID.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a sysprobe config.toml (overrides $SYSPROBE_CONFIG).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    subparsers = parser.add_subparsers(dest="subcommand", required=True)

    exec_parser = subparsers.add_parser("exec", help="Run a command through the host shell.")
    exec_parser.add_argument("command", help="Complete shell command string.")
    exec_parser.add_argument("--cwd", type=Path, help="Working directory for the command.")
    exec_parser.add_argument(
        "--env",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Extra environment variable for the command (repeatable).",
    )

    info_parser = subparsers.add_parser("info", help="Show information about a process.")
    info_parser.add_argument("pid", help="Process ID to inspect.")
    info_parser.add_argument("--json", action="store_true", help="Print the record as JSON.")

    return parser


def format_process_info(info: ProcessInfo) -> str:
    """Render a ProcessInfo as aligned ``key: value`` lines."""
    lines = [
        f"PID:         {info.pid}",
        f"CPU:         {info.cpu}",
        f"Memory:      {info.memory}",
        f"State:       {info.state}",
        f"User:        {info.user}",
        f"Command:     {info.cmd}",
        f"Parent PID:  {info.parent_pid or ''}",
        f"Start time:  {info.start_time}",
        f"Threads:     {len(info.threads)}",
    ]
    lines.extend(f"  {thread}" for thread in info.threads)
    if info.io_stats:
        lines.append("I/O stats:")
        lines.extend(f"  {line}" for line in info.io_stats.splitlines())
    if info.network_connections:
        lines.append("Network connections:")
        lines.extend(f"  {line}" for line in info.network_connections.splitlines())
    return "\n".join(lines)


def run_exec(args: argparse.Namespace) -> int:
    """Handle ``sysprobe exec``. Returns the process exit code."""
    try:
        env = validate_env_assignments(args.env, field_name="--env")
        cwd = validate_path_exists(args.cwd, field_name="--cwd") if args.cwd else None
    except ValidationError as e:
        handle_cli_error(error=e, context="argument validation", exit_code=2, logger=logger)

    result = exec_command(args.command, CommandOptions(cwd=cwd, env=env))
    if result.success:
        sys.stdout.write(result.stdout)
        return 0

    if result.stderr:
        sys.stderr.write(result.stderr)
    handle_subprocess_error(result.error, args.command, reraise=False, logger=logger)
    return result.returncode if result.returncode > 0 else 1


def run_info(args: argparse.Namespace) -> int:
    """Handle ``sysprobe info``. Returns the process exit code."""
    try:
        pid = validate_pid(args.pid, field_name="pid argument")
        info = get_process_info(pid)
    except (ValidationError, ProcessQueryError) as e:
        handle_cli_error(error=e, context="process lookup", exit_code=1, logger=logger)

    if args.json:
        print(json.dumps(info.to_dict(), indent=2))
    else:
        print(format_process_info(info))
    return 0


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main entry point for the ``sysprobe`` console script.

    Raises:
        SystemExit: Always, with the subcommand's exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.config is not None:
        set_config_path(args.config)
        reset_querier()

    try:
        config = get_config()
    except (FileNotFoundError, ValidationError, tomllib.TOMLDecodeError) as e:
        setup_logging("INFO")
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            include_traceback=False,
            logger=logger,
        )

    setup_logging("DEBUG" if args.verbose else config.log_level)

    if args.subcommand == "exec":
        sys.exit(run_exec(args))
    sys.exit(run_info(args))


if __name__ == "__main__":
    main_cli()
