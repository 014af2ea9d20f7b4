"""
Validation and error handling for the makeitrun package.

This module provides input validation and error handling with consistent
error reporting across the application.
"""

from .exceptions import (
    ErrorSeverity,
    ValidationError,
    handle_error,
    handle_process_error,
    handle_cli_error,
)

from .validators import (
    validate_boolean,
    validate_command_line,
    validate_count,
    validate_enum_choice,
)

__all__ = [
    # Core functionality
    "ErrorSeverity",
    "ValidationError",
    "handle_error",
    "handle_process_error",
    "handle_cli_error",
    # Validators
    "validate_boolean",
    "validate_command_line",
    "validate_count",
    "validate_enum_choice",
]
