"""
Shell command execution.

This module runs a complete command string through the host shell
(``/bin/bash -c`` on POSIX, ``powershell.exe`` on Windows), captures stdout
and stderr as raw bytes, and decodes them with ``sysprobe.encoding``.
"""

import logging
import shutil
import subprocess
from typing import List, Optional

from ..config import get_config
from ..encoding import decode_output
from ..models.command import CommandOptions, CommandResult
from ..validation import CommandExitError, CommandLaunchError
from .platform import WINDOWS, resolve_platform

logger = logging.getLogger(__name__)


def shell_argv(command: str, platform_tag: Optional[str] = None) -> List[str]:
    """Build the interpreter argv used to run ``command``.

    Args:
        command: Complete shell command string, e.g. ``"ls -a"``.
        platform_tag: ``"posix"``, ``"windows"`` or ``"auto"``. Defaults to
            the configured platform.

    Returns:
        ``[posix_shell, "-c", command]`` or ``[windows_shell, command]``.

    Examples:
        >>> shell_argv("echo hi", "posix")
        ['/bin/bash', '-c', 'echo hi']
        >>> shell_argv("dir", "windows")
        ['powershell.exe', 'dir']
    """
    config = get_config()
    platform = resolve_platform(platform_tag or config.platform)
    if platform == WINDOWS:
        return [config.windows_shell, command]
    return [config.posix_shell, "-c", command]


def exec_command(command: str, options: Optional[CommandOptions] = None) -> CommandResult:
    """Execute a shell command and return its decoded output.

    Blocks until the shell exits. There is no timeout; callers needing one
    must impose it themselves.

    Args:
        command: Complete shell command string.
        options: Optional working directory, environment and descriptor
            settings for the child process.

    Returns:
        A ``CommandResult``:

        - success: ``stdout`` decoded, ``stderr`` empty, ``error`` None;
        - non-zero exit: ``stdout`` empty, ``stderr`` decoded best-effort,
          ``error`` is a ``CommandExitError``;
        - launch failure: both streams empty, ``returncode`` -1, ``error``
          is a ``CommandLaunchError``.

    Note:
        The stderr of a successful command is never decoded and is always
        returned empty.
    """
    options = options or CommandOptions()
    argv = shell_argv(command)

    run_kwargs = {
        "stdout": subprocess.PIPE,
        "stderr": subprocess.PIPE,
        "cwd": options.cwd,
        "env": options.build_env(),
        "check": False,
    }
    if options.pass_fds and resolve_platform(get_config().platform) != WINDOWS:
        run_kwargs["pass_fds"] = tuple(options.pass_fds)

    logger.debug(f"Executing command: {argv} in '{options.cwd or '.'}'")
    try:
        process = subprocess.run(argv, **run_kwargs)
    except (OSError, ValueError) as e:
        # ValueError: arguments the OS cannot accept, such as an embedded NUL.
        logger.debug(f"Could not launch '{argv[0]}': {type(e).__name__}: {e}")
        error = CommandLaunchError(
            f"Failed to launch shell '{argv[0]}': {e}",
            command=command,
        )
        return CommandResult(stdout="", stderr="", returncode=-1, error=error)

    logger.debug(f"Command exited with status {process.returncode}")

    if process.returncode != 0:
        stderr = decode_output(process.stderr)
        error = CommandExitError(
            f"Command exited with status {process.returncode}: {command}",
            command=command,
            returncode=process.returncode,
            stderr=stderr,
        )
        return CommandResult(stdout="", stderr=stderr, returncode=process.returncode, error=error)

    return CommandResult(stdout=decode_output(process.stdout), stderr="", returncode=0)


def check_command_installed(name: str) -> bool:
    """Check if an executable is available on the system PATH."""
    return shutil.which(name) is not None
