"""
Unit tests for the Parquet report writer.
"""

import polars as pl
import pytest

from samplebench.models import Report
from samplebench.storage import ParquetReportWriter, records_to_dataframe
from samplebench.validation import ReportWriteError


@pytest.mark.unit
class TestParquetReportWriter:
    """Test cases for ParquetReportWriter class."""

    def test_initialization(self):
        assert ParquetReportWriter().compression == "snappy"
        assert ParquetReportWriter(compression="gzip").compression == "gzip"

    @pytest.mark.parametrize("compression", ["snappy", "gzip", "zstd"])
    def test_write_and_load(self, test_utils, temp_dir, compression):
        report = Report(
            records=(
                test_utils.create_record(sample="b.py"),
                test_utils.create_record(sample="a.py", degraded=True),
            )
        )
        destination = temp_dir / "metrics.parquet"
        writer = ParquetReportWriter(compression=compression)

        writer.write(report, destination)
        loaded = writer.load(destination)

        assert loaded.equals(records_to_dataframe(report))
        assert loaded["sample"].to_list() == ["b.py", "a.py"]
        assert loaded["heapTotalBytes"].to_list() == [4096, None]
        assert loaded.schema["degraded"] == pl.Boolean

    def test_missing_parent_directory(self, test_utils, temp_dir):
        destination = temp_dir / "missing" / "metrics.parquet"

        with pytest.raises(ReportWriteError):
            ParquetReportWriter().write(Report(records=(test_utils.create_record(),)), destination)

        assert not destination.exists()
