"""
Unit tests for the input validators.
"""

import sys

import pytest

from samplebench.validation import (
    ConfigurationError,
    ValidationError,
    validate_directory_exists,
    validate_enum_choice,
    validate_executable,
    validate_glob_pattern,
    validate_positive_integer,
)


@pytest.mark.unit
class TestValidatePositiveInteger:
    def test_accepts_integers_and_integral_values(self):
        assert validate_positive_integer(5) == 5
        assert validate_positive_integer("250") == 250
        assert validate_positive_integer(100.0) == 100

    def test_rejects_values_below_minimum(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_positive_integer(0, field_name="timeout_ms")

        assert exc_info.value.field_name == "timeout_ms"
        assert ">= 1" in str(exc_info.value)

    def test_rejects_values_above_maximum(self):
        with pytest.raises(ValidationError, match="<= 10"):
            validate_positive_integer(11, max_value=10)

    @pytest.mark.parametrize("value", [True, 1.5, "abc", None, [1]])
    def test_rejects_non_integers(self, value):
        with pytest.raises(ValidationError, match="must be a valid integer"):
            validate_positive_integer(value)


@pytest.mark.unit
class TestValidateEnumChoice:
    def test_case_sensitive_match(self):
        assert validate_enum_choice("csv", ["csv", "parquet"]) == "csv"
        with pytest.raises(ValidationError):
            validate_enum_choice("CSV", ["csv", "parquet"])

    def test_case_insensitive_returns_canonical_spelling(self):
        assert validate_enum_choice("PARQUET", ["csv", "parquet"], case_sensitive=False) == "parquet"

    def test_error_names_field(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_enum_choice("xml", ["csv"], field_name="report.format")
        assert exc_info.value.field_name == "report.format"
        assert exc_info.value.value == "xml"


@pytest.mark.unit
class TestValidateDirectoryExists:
    def test_existing_directory(self, temp_dir):
        assert validate_directory_exists(temp_dir) == temp_dir

    def test_missing_directory_is_configuration_error(self, temp_dir):
        with pytest.raises(ConfigurationError, match="does not exist"):
            validate_directory_exists(temp_dir / "missing")

    def test_file_is_not_a_directory(self, temp_dir):
        file_path = temp_dir / "file.txt"
        file_path.write_text("x")
        with pytest.raises(ConfigurationError, match="not a directory"):
            validate_directory_exists(file_path)


@pytest.mark.unit
class TestValidateGlobPattern:
    @pytest.mark.parametrize("pattern", ["*.py", "bench_*.py", "[ab]*.py"])
    def test_valid_patterns(self, pattern):
        assert validate_glob_pattern(pattern) == pattern

    @pytest.mark.parametrize("pattern", ["", None, "sub/*.py", "**/*.py", 3])
    def test_invalid_patterns(self, pattern):
        with pytest.raises(ValidationError):
            validate_glob_pattern(pattern)


@pytest.mark.unit
class TestValidateExecutable:
    def test_current_interpreter_is_valid(self):
        assert validate_executable(sys.executable) == sys.executable

    def test_missing_executable(self):
        with pytest.raises(ValidationError, match="not found"):
            validate_executable("/nonexistent/bin/python-samplebench")

    def test_empty_value(self):
        with pytest.raises(ValidationError):
            validate_executable("")
