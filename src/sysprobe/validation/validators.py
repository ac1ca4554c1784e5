"""
Validation functions for call arguments and configuration values.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .exceptions import ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is an integer within bounds.

    Args:
        value: Value to validate
        min_value: Minimum allowed value (inclusive)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If validation fails
    """
    # bool is an int subclass; 1.5 would silently truncate
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value!r}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value!r}",
            field_name=field_name,
            value=value
        )
    if int_value < min_value:
        raise ValidationError(
            f"{field_name} must be >= {min_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    if max_value is not None and int_value > max_value:
        raise ValidationError(
            f"{field_name} must be <= {max_value}, got {int_value}",
            field_name=field_name,
            value=value
        )
    return int_value


def validate_pid(value: Any, field_name: str = "pid") -> int:
    """Validate a process ID. PID 0 is accepted (Windows idle process)."""
    return validate_positive_integer(value, min_value=0, field_name=field_name)


def validate_bool(value: Any, field_name: str = "value") -> bool:
    """
    Validate a boolean flag.

    TOML already yields real booleans, so anything else is a configuration
    mistake rather than something to coerce.
    """
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be true or false, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


def validate_non_empty_string(value: Any, field_name: str = "value") -> str:
    """
    Validate that a value is a non-blank string.

    Returns:
        The string with surrounding whitespace removed

    Raises:
        ValidationError: If the value is not a string or is blank
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(
            f"{field_name} must be a non-empty string, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value.strip()


def validate_path_exists(path: Union[str, Path], field_name: str = "path") -> Path:
    """
    Validate that a path exists.

    Args:
        path: Path to validate
        field_name: Name of the field being validated

    Returns:
        Validated path

    Raises:
        ValidationError: If path doesn't exist
    """
    path_obj = Path(path)
    if not path_obj.exists():
        raise ValidationError(
            f"{field_name} does not exist: {path_obj}",
            field_name=field_name,
            value=str(path)
        )
    return path_obj


def validate_enum_choice(
    value: Any,
    choices: List[str],
    field_name: str = "value",
    case_sensitive: bool = True
) -> str:
    """
    Validate that a value is one of the allowed choices.

    Args:
        value: Value to validate
        choices: List of allowed choices
        field_name: Name of the field being validated
        case_sensitive: Whether the comparison should be case-sensitive

    Returns:
        Validated choice, in the spelling used by ``choices``

    Raises:
        ValidationError: If value is not in choices
    """
    str_value = str(value)

    if case_sensitive:
        if str_value not in choices:
            raise ValidationError(
                f"{field_name} must be one of {choices}, got {value}",
                field_name=field_name,
                value=value
            )
        return str_value

    lower_choices = [choice.lower() for choice in choices]
    lower_value = str_value.lower()
    if lower_value not in lower_choices:
        raise ValidationError(
            f"{field_name} must be one of {choices}, got {value}",
            field_name=field_name,
            value=value
        )
    # Return the original case from valid choices
    return choices[lower_choices.index(lower_value)]


def validate_env_assignments(assignments: List[str], field_name: str = "env") -> Dict[str, str]:
    """
    Parse ``KEY=VALUE`` strings into a mapping.

    Examples:
        >>> validate_env_assignments(["LANG=C", "EMPTY="])
        {'LANG': 'C', 'EMPTY': ''}
    """
    env: Dict[str, str] = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        if not sep or not key.strip():
            raise ValidationError(
                f"{field_name} entries must look like KEY=VALUE, got {item!r}",
                field_name=field_name,
                value=item
            )
        env[key.strip()] = value
    return env
