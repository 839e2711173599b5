"""
Report storage.

Writes the ordered metrics records of a benchmark run to a tabular file with
a fixed column schema:
- CSV (default): the documented, human-readable report format
- Parquet: compressed columnar output with the same schema

All writers share an atomic write-then-rename strategy so that a failed
write never leaves a partial report behind. DataFrame handling uses Polars.
"""

from .base import REPORT_SCHEMA, ReportWriter, records_to_dataframe
from .csv_storage import CsvReportWriter
from .factory import create_report_writer, writer_for_path
from .parquet_storage import ParquetReportWriter

__all__ = [
    "REPORT_SCHEMA",
    "ReportWriter",
    "records_to_dataframe",
    "CsvReportWriter",
    "ParquetReportWriter",
    "create_report_writer",
    "writer_for_path",
]
