"""
Input validation functions.

Validators for the handful of values this tool accepts from the command
line and from its configuration file.
"""

from typing import Any, List, Optional, Sequence

from .exceptions import ValidationError


def validate_count(
    value: Any,
    max_value: Optional[int] = None,
    field_name: str = "count"
) -> int:
    """
    Validate a desired instance count.

    Zero is allowed: it means "no instances should run", which only has an
    effect together with killing enabled.

    Args:
        value: Value to validate (int or numeric string)
        max_value: Maximum allowed value (inclusive), None for no limit
        field_name: Name of the field being validated

    Returns:
        Validated integer value

    Raises:
        ValidationError: If the value is not a non-negative integer
    """
    if isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    try:
        int_value = int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"{field_name} must be a valid integer, got {value}",
            field_name=field_name,
            value=value
        )
    if isinstance(value, float) and value != int_value:
        raise ValidationError(
            f"{field_name} must be a whole number, got {value}",
            field_name=field_name,
            value=value
        )
    if int_value < 0:
        raise ValidationError(
            f"{field_name} must be >= 0, got {int_value}",
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


def validate_command_line(parts: Sequence[str], field_name: str = "command") -> str:
    """
    Join command parts into the single string used for matching and launching.

    Parts are joined with single spaces and nothing else is normalized, so
    the result compares exactly against process-table command lines.

    Args:
        parts: The command and its arguments, as given on the command line
        field_name: Name of the field being validated

    Returns:
        The joined command line

    Raises:
        ValidationError: If no command was given
    """
    command_line = " ".join(parts)
    if not command_line.strip():
        raise ValidationError(
            f"{field_name} must not be empty",
            field_name=field_name,
            value=command_line
        )
    return command_line


def validate_boolean(value: Any, field_name: str = "value") -> bool:
    """Validate that a configuration value is a real boolean."""
    if not isinstance(value, bool):
        raise ValidationError(
            f"{field_name} must be a boolean, got {value!r}",
            field_name=field_name,
            value=value
        )
    return value


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
        The matching choice, in the case used by ``choices``

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
    return choices[lower_choices.index(lower_value)]
