"""
Exception types and error handling helpers.

This module defines the error taxonomy of the benchmark pipeline and a few
helpers that log errors with a consistent context before re-raising or
exiting:

- ValidationError / ConfigurationError: bad input or setup, fatal before any run
- MeasurementEnvironmentError: a measurement process cannot be spawned
- ReportWriteError: the report cannot be persisted

Per-sample failures (timeouts, non-zero exits) are not exceptions; they are
recorded on the run result and surface in the report.
"""

import logging
import sys
from enum import Enum
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)
_module_logger = logger


class ErrorSeverity(Enum):
    """Severity levels for error handling."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


_LOG_LEVELS = {
    ErrorSeverity.DEBUG.value: logging.DEBUG,
    ErrorSeverity.INFO.value: logging.INFO,
    ErrorSeverity.WARNING.value: logging.WARNING,
    ErrorSeverity.ERROR.value: logging.ERROR,
    ErrorSeverity.CRITICAL.value: logging.CRITICAL,
}


class ValidationError(Exception):
    """
    Exception raised when validation of an input value fails.

    Carries the name of the offending field and the rejected value so that
    callers can produce precise messages.
    """

    def __init__(self, message: str, field_name: Optional[str] = None,
                 value: Any = None, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.field_name = field_name
        self.value = value
        self.severity = severity


class ConfigurationError(ValidationError):
    """
    The benchmark setup is unusable (missing samples directory, no samples,
    invalid configuration values). Raised before any sample is run.
    """


class MeasurementEnvironmentError(OSError):
    """
    A measurement process could not be spawned at all (missing interpreter,
    permission denied). This aborts the whole pipeline run.
    """

    def __init__(self, message: str, command: Optional[str] = None):
        super().__init__(message)
        self.command = command


class ReportWriteError(OSError):
    """The report file could not be created or written."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


def handle_error(
    error: Exception,
    context: str,
    severity: Union[ErrorSeverity, str] = ErrorSeverity.ERROR,
    reraise: bool = True,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Log an error with its context, then optionally re-raise it.

    Args:
        error: The exception to report
        context: Where it happened, e.g. "writing report"
        severity: An ErrorSeverity or its name (case-insensitive)
        reraise: Re-raise ``error`` after logging
        logger: Logger to use instead of this module's
    """
    log = logger or _module_logger
    level_name = severity.lower() if isinstance(severity, str) else severity.value
    level = _LOG_LEVELS.get(level_name, logging.ERROR)

    # Tracebacks at DEBUG and CRITICAL only.
    with_traceback = level in (logging.DEBUG, logging.CRITICAL)
    log.log(level, f"Error in {context}: {error}", exc_info=with_traceback)

    if reraise:
        raise error


def handle_config_error(error: Exception, context: str, **kwargs) -> None:
    """Handle configuration-related errors."""
    handle_error(error, f"config {context}", **kwargs)


def handle_file_error(error: Exception, context: str, **kwargs) -> None:
    """Handle file-related errors."""
    handle_error(error, f"file {context}", **kwargs)


def handle_subprocess_error(error: Exception, command: str, **kwargs) -> None:
    """Handle subprocess-related errors."""
    handle_error(error, f"subprocess command '{command}'", **kwargs)


def handle_cli_error(error: Exception, context: str, **kwargs) -> None:
    """
    Log a fatal CLI error and exit the interpreter.

    Keyword Args:
        exit_code: Process exit status (default 1)
        include_traceback: Log the traceback at CRITICAL level instead of ERROR
    """
    exit_code = kwargs.pop('exit_code', 1)
    include_traceback = kwargs.pop('include_traceback', False)

    default_severity = ErrorSeverity.CRITICAL if include_traceback else ErrorSeverity.ERROR
    severity = kwargs.pop('severity', default_severity)
    handle_error(error, f"CLI {context}", severity=severity, reraise=False, **kwargs)

    sys.exit(exit_code)
