"""
Validation and error handling for the sagemonitor package.

This module provides input validation and error handling with consistent
error reporting across the normalizer, the analysis engines and the
configuration layer.
"""

from .exceptions import (
    EmptySeriesError,
    ErrorSeverity,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_file_error,
)

from .validators import (
    validate_enum_choice,
    validate_positive_float,
    validate_positive_integer,
    validate_required_fields,
)

__all__ = [
    "EmptySeriesError",
    "ErrorSeverity",
    "ValidationError",
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    "handle_file_error",
    "validate_enum_choice",
    "validate_positive_float",
    "validate_positive_integer",
    "validate_required_fields",
]
