"""
Unit tests for configuration validation functionality.

Tests the validation of the [benchmark] and [report] tables, including
relative path resolution and error reporting.
"""

import sys
from pathlib import Path

import pytest

from samplebench.config.validators import (
    MAX_TIMEOUT_MS,
    validate_benchmark_config,
    validate_report_config,
    validate_sample_list,
)
from samplebench.validation import ConfigurationError


@pytest.mark.unit
class TestBenchmarkConfigValidation:
    """Test cases for [benchmark] validation."""

    def test_defaults_for_empty_table(self, temp_dir):
        config = validate_benchmark_config({}, temp_dir)

        assert config.samples_dir == temp_dir / "samples"
        assert config.pattern == "*.py"
        assert config.samples is None
        assert config.timeout_ms == 30_000
        assert config.interpreter == sys.executable
        assert config.memory_probe == "psutil"

    def test_full_table(self, temp_dir):
        config = validate_benchmark_config(
            {
                "samples_dir": "bench",
                "pattern": "bench_*.py",
                "samples": ["b.py", "a.py"],
                "timeout_ms": 500,
                "memory_probe": "tracemalloc",
            },
            temp_dir,
        )

        assert config.samples_dir == temp_dir / "bench"
        assert config.pattern == "bench_*.py"
        assert config.samples == ["b.py", "a.py"]
        assert config.timeout_ms == 500
        assert config.memory_probe == "tracemalloc"

    def test_absolute_samples_dir_is_kept(self, temp_dir):
        absolute = temp_dir / "elsewhere"
        config = validate_benchmark_config({"samples_dir": str(absolute)}, Path("/unused"))
        assert config.samples_dir == absolute

    @pytest.mark.parametrize("timeout", [0, -5, MAX_TIMEOUT_MS + 1, "soon", True])
    def test_invalid_timeout(self, temp_dir, timeout):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_benchmark_config({"timeout_ms": timeout}, temp_dir)
        assert exc_info.value.field_name == "benchmark.timeout_ms"

    def test_unknown_probe(self, temp_dir):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_benchmark_config({"memory_probe": "valgrind"}, temp_dir)
        assert exc_info.value.field_name == "benchmark.memory_probe"

    def test_missing_interpreter(self, temp_dir):
        with pytest.raises(ConfigurationError, match="interpreter"):
            validate_benchmark_config({"interpreter": "/no/such/python"}, temp_dir)

    def test_recursive_pattern_rejected(self, temp_dir):
        with pytest.raises(ConfigurationError):
            validate_benchmark_config({"pattern": "**/*.py"}, temp_dir)


@pytest.mark.unit
class TestSampleListValidation:
    def test_none_means_directory_scan(self):
        assert validate_sample_list(None) is None

    def test_order_is_preserved(self):
        assert validate_sample_list(["z.py", "a.py"]) == ["z.py", "a.py"]

    @pytest.mark.parametrize(
        "samples",
        [[], "a.py", ["a.py", "a.py"], ["../a.py"], ["dir/a.py"], [""], [1]],
    )
    def test_invalid_lists(self, samples):
        with pytest.raises(ConfigurationError):
            validate_sample_list(samples)


@pytest.mark.unit
class TestReportConfigValidation:
    def test_defaults(self, temp_dir):
        config = validate_report_config({}, temp_dir)

        assert config.output_file == temp_dir / "data" / "performance_metrics.csv"
        assert config.format == "csv"
        assert config.compression == "snappy"

    def test_parquet_settings(self, temp_dir):
        config = validate_report_config(
            {"output_file": "out/report.parquet", "format": "parquet", "compression": "zstd"},
            temp_dir,
        )
        assert config.output_file == temp_dir / "out" / "report.parquet"
        assert config.format == "parquet"
        assert config.compression == "zstd"

    def test_unsupported_format(self, temp_dir):
        with pytest.raises(ConfigurationError) as exc_info:
            validate_report_config({"format": "xlsx"}, temp_dir)
        assert exc_info.value.field_name == "report.format"

    def test_unsupported_compression(self, temp_dir):
        with pytest.raises(ConfigurationError):
            validate_report_config({"compression": "rar"}, temp_dir)
