"""
Exception hierarchy and error management.

This module defines the exceptions raised by sysprobe and a small set of
helpers that log errors consistently before (optionally) re-raising them.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class SysProbeError(Exception):
    """Base class for all errors raised by sysprobe."""


class ValidationError(SysProbeError):
    """
    Exception raised when validation fails.

    Used for invalid call arguments (e.g. a negative PID) and invalid
    configuration values.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class CommandError(SysProbeError):
    """
    Base class for shell command failures reported by the command runner.

    Attributes:
        command: The command string that was executed.
        returncode: Exit status of the shell, -1 if it never started.
        stderr: Decoded stderr text (empty when it could not be decoded).
    """

    def __init__(self, message: str, command: str, returncode: int = -1, stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class CommandLaunchError(CommandError):
    """The shell interpreter could not be started (missing binary, permissions)."""


class CommandExitError(CommandError):
    """The command ran but exited with a non-zero status."""


class ProcessQueryError(SysProbeError):
    """
    Failure on the primary process lookup path.

    Raised when the listing tool cannot be launched, exits with an error,
    or prints output that cannot be mapped onto the primary record.
    """

    def __init__(self, message: str, pid: Optional[int] = None, tool: Optional[str] = None):
        super().__init__(message)
        self.pid = pid
        self.tool = tool


class ProcessNotFoundError(ProcessQueryError):
    """No process with the requested PID exists."""


class ProcessOutputFormatError(ProcessQueryError):
    """The listing tool printed a row with an unexpected column layout."""


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Handle errors with consistent logging and optional re-raising.

    Args:
        error: The exception that occurred
        context: Context description of where the error occurred
        severity: Severity level for logging
        reraise: Whether to re-raise the exception after logging
        logger: Logger instance to use (defaults to module logger)
    """
    effective_logger = logger or globals()['logger']

    error_msg = f"Error in {context}: {error}"

    # Handle both enum and string severity values
    if isinstance(severity, str):
        severity_str = severity.lower()
    else:
        severity_str = severity.value

    if severity_str == "debug":
        effective_logger.debug(error_msg, exc_info=True)
    elif severity_str == "info":
        effective_logger.info(error_msg)
    elif severity_str == "warning":
        effective_logger.warning(error_msg)
    elif severity_str == "error":
        effective_logger.error(error_msg)
    elif severity_str == "critical":
        effective_logger.critical(error_msg, exc_info=True)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    """Handle subprocess-related errors."""
    handle_error(error, f"subprocess command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """Log a CLI error and exit the interpreter with ``exit_code``."""
    exit_code = kwargs.pop('exit_code', 1)
    include_traceback = kwargs.pop('include_traceback', False)

    severity = kwargs.pop('severity', ErrorSeverity.CRITICAL if include_traceback else ErrorSeverity.ERROR)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
