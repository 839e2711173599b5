"""
Configuration validation utilities.

Turns the raw `[benchmark]` and `[report]` tables into validated
configuration models. Every failure is reported as a ConfigurationError
naming the offending key.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..models.config import (
    MEMORY_PROBES,
    PARQUET_COMPRESSIONS,
    REPORT_FORMATS,
    BenchmarkConfig,
    ReportConfig,
)
from ..validation import (
    ConfigurationError,
    ValidationError,
    validate_enum_choice,
    validate_executable,
    validate_glob_pattern,
    validate_positive_integer,
)
from .loader import resolve_config_path

logger = logging.getLogger(__name__)

# One day is far beyond any sensible sample; larger values are typos.
MAX_TIMEOUT_MS = 24 * 60 * 60 * 1000


def _as_configuration_error(error: ValidationError) -> ConfigurationError:
    return ConfigurationError(str(error), field_name=error.field_name, value=error.value)


def validate_sample_list(samples: Any, field_name: str = "benchmark.samples") -> Optional[List[str]]:
    """
    Validate an optional static list of sample file names.

    Returns:
        The list, or None when no static list is configured

    Raises:
        ConfigurationError: If the list is empty, not a list of strings,
            contains duplicates or names with path separators
    """
    if samples is None:
        return None
    if not isinstance(samples, list) or not samples:
        raise ConfigurationError(
            f"{field_name} must be a non-empty list of file names",
            field_name=field_name,
            value=samples,
        )
    seen = set()
    for name in samples:
        if not isinstance(name, str) or not name or Path(name).name != name:
            raise ConfigurationError(
                f"{field_name} entries must be plain file names, got {name!r}",
                field_name=field_name,
                value=samples,
            )
        if name in seen:
            raise ConfigurationError(
                f"{field_name} lists '{name}' more than once",
                field_name=field_name,
                value=samples,
            )
        seen.add(name)
    return list(samples)


def validate_benchmark_config(benchmark_data: Dict[str, Any], config_dir: Path) -> BenchmarkConfig:
    """
    Validate and create a BenchmarkConfig from raw configuration data.

    Args:
        benchmark_data: Raw `[benchmark]` table from TOML
        config_dir: Directory of the configuration file, for relative paths

    Returns:
        Validated BenchmarkConfig instance

    Raises:
        ConfigurationError: If validation fails
    """
    defaults = BenchmarkConfig()
    try:
        timeout_ms = validate_positive_integer(
            benchmark_data.get("timeout_ms", defaults.timeout_ms),
            min_value=1,
            max_value=MAX_TIMEOUT_MS,
            field_name="benchmark.timeout_ms",
        )
        pattern = validate_glob_pattern(
            benchmark_data.get("pattern", defaults.pattern),
            field_name="benchmark.pattern",
        )
        memory_probe = validate_enum_choice(
            benchmark_data.get("memory_probe", defaults.memory_probe),
            choices=list(MEMORY_PROBES),
            field_name="benchmark.memory_probe",
        )
        interpreter = validate_executable(
            benchmark_data.get("interpreter", defaults.interpreter),
            field_name="benchmark.interpreter",
        )
    except ConfigurationError:
        raise
    except ValidationError as e:
        raise _as_configuration_error(e) from e

    samples = validate_sample_list(benchmark_data.get("samples"))
    samples_dir = resolve_config_path(
        benchmark_data.get("samples_dir", defaults.samples_dir), config_dir
    )

    return BenchmarkConfig(
        samples_dir=samples_dir,
        pattern=pattern,
        samples=samples,
        timeout_ms=timeout_ms,
        interpreter=interpreter,
        memory_probe=memory_probe,
    )


def validate_report_config(report_data: Dict[str, Any], config_dir: Path) -> ReportConfig:
    """
    Validate and create a ReportConfig from raw configuration data.

    Raises:
        ConfigurationError: If validation fails
    """
    try:
        validate_enum_choice(
            report_data.get("format", "csv"),
            choices=list(REPORT_FORMATS),
            field_name="report.format",
        )
        validate_enum_choice(
            report_data.get("compression", "snappy"),
            choices=list(PARQUET_COMPRESSIONS),
            field_name="report.compression",
        )
    except ValidationError as e:
        raise _as_configuration_error(e) from e

    report_config = ReportConfig.from_dict(report_data)
    report_config.output_file = resolve_config_path(report_config.output_file, config_dir)
    return report_config
