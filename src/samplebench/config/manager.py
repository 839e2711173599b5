"""
Configuration management and singleton pattern.

This module provides the main configuration loading and management interface,
implementing a singleton pattern to ensure configuration is loaded only once.
"""

import logging
from pathlib import Path
from typing import Optional

from ..models.config import AppConfig
from ..validation import ConfigurationError, ErrorSeverity, handle_config_error
from .loader import load_main_config
from .validators import validate_benchmark_config, validate_report_config

logger = logging.getLogger(__name__)

# --- Global Singleton for Configuration ---

_CONFIG: Optional[AppConfig] = None

# Default location of the main configuration file, relative to the repository
# root. Overridden by the CLI's --config option and by tests.
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent.parent / "conf" / "config.toml"
_CONFIG_FILE_PATH = DEFAULT_CONFIG_PATH


def set_config_path(config_path: Path) -> None:
    """
    Set a custom configuration file path.

    Clears any cached configuration so the next get_config() call loads
    from the new location.
    """
    global _CONFIG_FILE_PATH, _CONFIG
    _CONFIG_FILE_PATH = Path(config_path)
    _CONFIG = None
    logger.info(f"Configuration path set to: {config_path}")


def clear_config_cache() -> None:
    """Clear the cached configuration, forcing a reload on next access."""
    global _CONFIG
    _CONFIG = None
    logger.debug("Configuration cache cleared")


def _load_config(config_path: Path) -> AppConfig:
    """
    Load and validate the application configuration from a TOML file.

    If the default configuration file is absent, the built-in defaults are
    used, with relative paths resolved against the current working directory.
    A file chosen with set_config_path() must exist.

    Raises:
        ConfigurationError: If a chosen file is missing or validation fails
        tomllib.TOMLDecodeError: If the file is malformed
    """
    if not config_path.exists():
        if config_path != DEFAULT_CONFIG_PATH:
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                field_name="config",
                value=str(config_path),
            )
        logger.info(f"No configuration file at {config_path}, using defaults")
        main_config_data = {}
        config_dir = Path.cwd()
    else:
        main_config_data = load_main_config(config_path)
        config_dir = config_path.parent

    try:
        benchmark_config = validate_benchmark_config(
            main_config_data.get("benchmark", {}), config_dir
        )
        report_config = validate_report_config(
            main_config_data.get("report", {}), config_dir
        )
    except Exception as e:
        handle_config_error(
            error=e,
            context="processing configuration",
            severity=ErrorSeverity.ERROR,
            reraise=True,
            logger=logger
        )
        raise

    app_config = AppConfig(benchmark=benchmark_config, report=report_config)
    logger.info(
        f"Loaded configuration: samples_dir={benchmark_config.samples_dir}, "
        f"timeout_ms={benchmark_config.timeout_ms}, probe={benchmark_config.memory_probe}, "
        f"report={report_config.output_file} ({report_config.format})"
    )
    return app_config


def get_config() -> AppConfig:
    """
    Get the global application configuration, loading it if necessary.

    Returns:
        The singleton AppConfig instance
    """
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = _load_config(_CONFIG_FILE_PATH)
    return _CONFIG


def is_config_loaded() -> bool:
    """Check if configuration has been loaded and cached."""
    return _CONFIG is not None


def get_config_info() -> dict:
    """Get information about the current configuration state."""
    return {
        "config_loaded": is_config_loaded(),
        "config_path": str(_CONFIG_FILE_PATH),
        "samples_dir": str(_CONFIG.benchmark.samples_dir) if _CONFIG else None,
    }
