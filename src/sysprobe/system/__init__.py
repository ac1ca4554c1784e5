"""
System interaction utilities.

This module provides shell command execution with encoding recovery and the
host platform helpers used to choose between POSIX and Windows tooling.
"""

# Command execution
from .commands import check_command_installed, exec_command, shell_argv

# Platform detection
from .platform import (
    POSIX,
    WINDOWS,
    current_platform,
    is_linux,
    is_mac,
    is_windows,
    resolve_platform,
)

__all__ = [
    # Commands
    "check_command_installed",
    "exec_command",
    "shell_argv",
    # Platform
    "POSIX",
    "WINDOWS",
    "current_platform",
    "is_linux",
    "is_mac",
    "is_windows",
    "resolve_platform",
]
