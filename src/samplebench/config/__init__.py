"""
Configuration management for the samplebench package.

This module provides a clean interface for loading, validating, and accessing
configuration data from a TOML file with singleton pattern management.
"""

from .manager import (
    DEFAULT_CONFIG_PATH,
    clear_config_cache,
    get_config,
    get_config_info,
    is_config_loaded,
    set_config_path,
)
from .loader import load_main_config, load_toml_file, resolve_config_path
from .validators import (
    validate_benchmark_config,
    validate_report_config,
    validate_sample_list,
)

__all__ = [
    # Main interface
    "DEFAULT_CONFIG_PATH",
    "get_config",
    "set_config_path",
    "clear_config_cache",
    "is_config_loaded",
    "get_config_info",
    # Advanced interface
    "load_toml_file",
    "load_main_config",
    "resolve_config_path",
    "validate_benchmark_config",
    "validate_report_config",
    "validate_sample_list",
]
