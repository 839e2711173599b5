"""
Factory for creating report writer instances.
"""

import logging
from pathlib import Path
from typing import Literal

from .base import ReportWriter
from .csv_storage import CsvReportWriter
from .parquet_storage import ParquetReportWriter

logger = logging.getLogger(__name__)


def create_report_writer(
    format_type: Literal["csv", "parquet"] = "csv",
    compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy",
) -> ReportWriter:
    """
    Create a report writer for the given format.

    Args:
        format_type: Report format ('csv' or 'parquet')
        compression: Compression algorithm (for Parquet only)

    Raises:
        ValueError: If an unsupported format type is specified
    """
    if format_type == "csv":
        logger.debug("Creating CsvReportWriter")
        return CsvReportWriter()
    elif format_type == "parquet":
        logger.debug(f"Creating ParquetReportWriter with compression: {compression}")
        return ParquetReportWriter(compression=compression)
    else:
        raise ValueError(f"Unsupported report format: {format_type}")


def writer_for_path(path: Path) -> ReportWriter:
    """Pick a report writer from a file's suffix (Parquet for '.parquet', else CSV)."""
    if Path(path).suffix.lower() == ParquetReportWriter.suffix:
        return ParquetReportWriter()
    return CsvReportWriter()
