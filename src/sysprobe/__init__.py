"""
SysProbe: cross-platform process introspection and shell command execution.

The package is organized into specialized modules:
- encoding: UTF-8 / GBK detection and decoding of subprocess output
- system: Shell command execution and platform detection
- inspector: Per-PID process queries (ps on POSIX, tasklist on Windows)
- models: Data structures (ProcessInfo, CommandResult, ...)
- validation: Exceptions, error handling helpers and validators
- config: Optional TOML configuration
- cli: The ``sysprobe`` command-line interface

Usage:
    From command line:
        sysprobe exec "ls -a"
        sysprobe info 1234 --json

    Programmatically:
        from sysprobe import exec_command, get_process_info
        result = exec_command("echo hello")
        info = get_process_info(1234)
"""

from .config import clear_config_cache, get_config, set_config_path
from .encoding import byte_to_string, decode_output, is_gbk, is_utf8
from .inspector import create_querier, get_process_info
from .models import CommandOptions, CommandResult, Lookup, ProbeConfig, ProcessInfo
from .system import exec_command, is_linux, is_mac, is_windows
from .validation import (
    CommandError,
    CommandExitError,
    CommandLaunchError,
    ProcessNotFoundError,
    ProcessOutputFormatError,
    ProcessQueryError,
    SysProbeError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "exec_command",
    "get_process_info",
    "create_querier",
    # Encoding
    "byte_to_string",
    "decode_output",
    "is_gbk",
    "is_utf8",
    # Platform
    "is_linux",
    "is_mac",
    "is_windows",
    # Configuration
    "get_config",
    "set_config_path",
    "clear_config_cache",
    # Models
    "CommandOptions",
    "CommandResult",
    "Lookup",
    "ProbeConfig",
    "ProcessInfo",
    # Errors
    "SysProbeError",
    "ValidationError",
    "CommandError",
    "CommandLaunchError",
    "CommandExitError",
    "ProcessQueryError",
    "ProcessNotFoundError",
    "ProcessOutputFormatError",
]
