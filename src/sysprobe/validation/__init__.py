"""
Validation and error handling for the sysprobe package.

This module provides the exception hierarchy, consistent error reporting
helpers, and input validation used across the package.
"""

# Core exception classes and error handling
from .exceptions import (
    CommandError,
    CommandExitError,
    CommandLaunchError,
    ErrorSeverity,
    ProcessNotFoundError,
    ProcessOutputFormatError,
    ProcessQueryError,
    SysProbeError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_subprocess_error,
)

# Validation functions
from .validators import (
    validate_bool,
    validate_enum_choice,
    validate_env_assignments,
    validate_non_empty_string,
    validate_path_exists,
    validate_pid,
    validate_positive_integer,
)

__all__ = [
    # Exceptions
    "SysProbeError",
    "ValidationError",
    "CommandError",
    "CommandLaunchError",
    "CommandExitError",
    "ProcessQueryError",
    "ProcessNotFoundError",
    "ProcessOutputFormatError",
    # Error handling
    "ErrorSeverity",
    "handle_error",
    "handle_config_error",
    "handle_subprocess_error",
    "handle_cli_error",
    # Validators
    "validate_bool",
    "validate_enum_choice",
    "validate_env_assignments",
    "validate_non_empty_string",
    "validate_path_exists",
    "validate_pid",
    "validate_positive_integer",
]
