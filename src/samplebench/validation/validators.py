"""
Input validation functions.

Small, composable validators used by the configuration layer and the CLI.
Each returns the normalized value or raises ValidationError naming the field.
"""

import os
import shutil
from pathlib import Path
from typing import Any, List, Optional, Union

from .exceptions import ConfigurationError, ValidationError


def validate_positive_integer(
    value: Any,
    min_value: int = 1,
    max_value: Optional[int] = None,
    field_name: str = "value"
) -> int:
    """
    Validate that a value is a positive integer.

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
    # bool is an int subclass, but "timeout = true" is never what was meant
    if isinstance(value, bool) or isinstance(value, float) and not value.is_integer():
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
        The matching choice, in the spelling used by ``choices``

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


def validate_directory_exists(path: Union[str, Path], field_name: str = "directory") -> Path:
    """
    Validate that a path exists and is a directory.

    Raises:
        ConfigurationError: If the path is missing or not a directory
    """
    dir_path = Path(path)
    if not dir_path.exists():
        raise ConfigurationError(
            f"{field_name} does not exist: {dir_path}",
            field_name=field_name,
            value=str(dir_path)
        )
    if not dir_path.is_dir():
        raise ConfigurationError(
            f"{field_name} is not a directory: {dir_path}",
            field_name=field_name,
            value=str(dir_path)
        )
    return dir_path


def validate_glob_pattern(pattern: Any, field_name: str = "pattern") -> str:
    """
    Validate a file name glob used for sample discovery.

    The pattern must be a non-empty string and may not contain a path
    separator; sample discovery is deliberately non-recursive.
    """
    if not pattern or not isinstance(pattern, str):
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=pattern
        )
    if "/" in pattern or os.sep in pattern or "**" in pattern:
        raise ValidationError(
            f"{field_name} must match file names only, got {pattern}",
            field_name=field_name,
            value=pattern
        )
    return pattern


def validate_executable(executable: Any, field_name: str = "interpreter") -> str:
    """
    Validate that an executable can be resolved.

    Accepts either an absolute/relative path to an existing file or a bare
    command name found on PATH.

    Returns:
        The executable as given

    Raises:
        ValidationError: If the executable cannot be found
    """
    if not executable or not isinstance(executable, str):
        raise ValidationError(
            f"{field_name} must be a non-empty string",
            field_name=field_name,
            value=executable
        )
    if os.path.isfile(executable) or shutil.which(executable) is not None:
        return executable
    raise ValidationError(
        f"{field_name} not found: {executable}",
        field_name=field_name,
        value=executable
    )
