"""
Pytest configuration and shared fixtures for the samplebench test suite.

This module provides common fixtures, test utilities, and configuration
for all test modules in the samplebench project.
"""

import shutil
import sys
import tempfile
import textwrap
from pathlib import Path
from typing import Dict, Optional
from unittest.mock import Mock, patch

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "e2e: mark test as an end-to-end test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


# Small programs used as benchmark samples. Kept tiny so that tests stay fast.
SAMPLE_SOURCES: Dict[str, str] = {
    "quick_sum.py": """
        total = sum(range(1000))
        print(f"sum: {total}")
    """,
    "string_build.py": """
        parts = [str(i) for i in range(500)]
        print(len("".join(parts)))
    """,
    "exits_nonzero.py": """
        import sys
        print("about to fail")
        sys.exit(3)
    """,
    "raises_error.py": """
        raise RuntimeError("sample blew up")
    """,
    "endless_loop.py": """
        while True:
            pass
    """,
    "no_newline.py": """
        import sys
        sys.stdout.write("partial line")
    """,
    "closes_stdout.py": """
        import sys
        print("hi")
        sys.stdout.close()
    """,
}


def write_sample(directory: Path, name: str, source: Optional[str] = None) -> Path:
    """Write one sample script (from SAMPLE_SOURCES unless source is given)."""
    path = directory / name
    path.write_text(textwrap.dedent(source if source is not None else SAMPLE_SOURCES[name]))
    return path


@pytest.fixture
def samples_dir(temp_dir):
    """A samples directory holding two well-behaved samples."""
    directory = temp_dir / "samples"
    directory.mkdir()
    write_sample(directory, "quick_sum.py")
    write_sample(directory, "string_build.py")
    return directory


@pytest.fixture
def mixed_samples_dir(samples_dir):
    """Well-behaved samples plus ones that fail, crash or never finish."""
    write_sample(samples_dir, "exits_nonzero.py")
    write_sample(samples_dir, "raises_error.py")
    write_sample(samples_dir, "endless_loop.py")
    return samples_dir


@pytest.fixture
def make_sample(temp_dir):
    """Factory writing ad-hoc samples into a dedicated directory."""
    directory = temp_dir / "adhoc_samples"
    directory.mkdir()

    def _make(name: str, source: Optional[str] = None) -> Path:
        return write_sample(directory, name, source)

    return _make


# ============================================================================
# Mock Fixtures
# ============================================================================


@pytest.fixture
def mock_psutil():
    """Mock psutil.Process for testing without reading real memory maps."""
    with patch("psutil.Process") as mock_process_class:
        mock_process = Mock()
        mock_process.pid = 12345
        mock_process.memory_full_info.return_value = Mock(
            rss=8 * 1024 * 1024, vms=16 * 1024 * 1024, uss=6 * 1024 * 1024
        )
        mock_process_class.return_value = mock_process

        yield {
            "Process": mock_process_class,
            "process_instance": mock_process,
        }


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def sample_config_data(samples_dir, temp_dir):
    """Configuration tables pointing at the temporary samples directory."""
    return {
        "benchmark": {
            "samples_dir": str(samples_dir),
            "pattern": "*.py",
            "timeout_ms": 10000,
            "memory_probe": "psutil",
        },
        "report": {
            "output_file": str(temp_dir / "reports" / "metrics.csv"),
            "format": "csv",
            "compression": "snappy",
        },
    }


@pytest.fixture
def config_files(temp_dir, sample_config_data):
    """Create a temporary config.toml for testing."""
    import toml

    (temp_dir / "reports").mkdir(exist_ok=True)
    config_file = temp_dir / "config.toml"
    with open(config_file, "w") as f:
        toml.dump(sample_config_data, f)

    return {
        "config": config_file,
        "report": Path(sample_config_data["report"]["output_file"]),
        "dir": temp_dir,
    }


# ============================================================================
# Test Utilities
# ============================================================================


class TestUtils:
    """Utility functions for testing."""

    @staticmethod
    def create_run_result(sample_id: str = "quick_sum.py", wall_clock_ns: int = 12_345_678, **kwargs):
        from samplebench.models import ExitStatus, RunResult

        kwargs.setdefault("exit_status", ExitStatus.SUCCESS)
        return RunResult(sample_id=sample_id, wall_clock_ns=wall_clock_ns, **kwargs)

    @staticmethod
    def create_record(sample: str = "quick_sum.py", degraded: bool = False, **kwargs):
        from samplebench.models import ExitStatus, MetricsRecord

        heap = (None, None) if degraded else (1024, 4096)
        values = dict(
            sample=sample,
            wall_clock_millis=12,
            heap_used_bytes=heap[0],
            heap_total_bytes=heap[1],
            degraded=degraded,
            exit_status=ExitStatus.SUCCESS,
        )
        values.update(kwargs)
        return MetricsRecord(**values)


@pytest.fixture
def test_utils():
    """Provide test utility functions."""
    return TestUtils


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    yield  # Run the test

    from samplebench.config import DEFAULT_CONFIG_PATH, clear_config_cache, set_config_path

    clear_config_cache()
    # Always reset to original config path
    set_config_path(DEFAULT_CONFIG_PATH)
