"""
Validation and error handling for the samplebench package.

This module provides input validation and the error taxonomy shared by
every stage of the benchmark pipeline.
"""

from .exceptions import (
    ConfigurationError,
    ErrorSeverity,
    MeasurementEnvironmentError,
    ReportWriteError,
    ValidationError,
    handle_cli_error,
    handle_config_error,
    handle_error,
    handle_file_error,
    handle_subprocess_error,
)
from .validators import (
    validate_directory_exists,
    validate_enum_choice,
    validate_executable,
    validate_glob_pattern,
    validate_positive_integer,
)

__all__ = [
    # Errors
    "ConfigurationError",
    "ErrorSeverity",
    "MeasurementEnvironmentError",
    "ReportWriteError",
    "ValidationError",
    # Handlers
    "handle_cli_error",
    "handle_config_error",
    "handle_error",
    "handle_file_error",
    "handle_subprocess_error",
    # Validators
    "validate_directory_exists",
    "validate_enum_choice",
    "validate_executable",
    "validate_glob_pattern",
    "validate_positive_integer",
]
