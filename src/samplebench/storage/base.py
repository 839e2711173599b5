"""
Abstract base class for report writers.

A report writer serializes the ordered MetricsRecords of one pipeline run to
a tabular file with the fixed report schema. The base class owns the
atomicity guarantee shared by every format:

- the records are converted to a Polars DataFrame with a fixed schema
- the frame is written to a temporary file next to the destination
- the temporary file is renamed over the destination only on success

so a failed write never leaves a partial or corrupt report behind. Failures
are raised as ReportWriteError.
"""

import contextlib
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, Union

import polars as pl

from ..models.results import REPORT_COLUMNS, MetricsRecord
from ..validation import ErrorSeverity, ReportWriteError, handle_file_error

logger = logging.getLogger(__name__)

REPORT_SCHEMA: Dict[str, Any] = {
    "sample": pl.Utf8,
    "wallClockMillis": pl.Int64,
    "heapUsedBytes": pl.Int64,
    "heapTotalBytes": pl.Int64,
    "degraded": pl.Boolean,
    "exitStatus": pl.Utf8,
}


def records_to_dataframe(records: Iterable[MetricsRecord]) -> pl.DataFrame:
    """
    Build a DataFrame with the report schema, one row per record, in order.

    Unavailable heap counters become nulls.
    """
    rows = [record.to_row() for record in records]
    return pl.DataFrame(
        {name: [row[name] for row in rows] for name in REPORT_COLUMNS},
        schema={name: REPORT_SCHEMA[name] for name in REPORT_COLUMNS},
    )


def _default_file_mode() -> int:
    # mkstemp creates 0600 files; give the report the mode open() would.
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


class ReportWriter(ABC):
    """Abstract base class for report writer implementations."""

    #: File name suffix conventionally used by this format.
    suffix: str = ""

    def write(self, records: Iterable[MetricsRecord], destination_path: Union[str, Path]) -> None:
        """
        Write the records to ``destination_path`` atomically.

        The parent directory must already exist; it is not created.

        Args:
            records: Ordered records (a Report or any iterable of records)
            destination_path: File to create or replace

        Raises:
            ReportWriteError: If the destination cannot be created or written
        """
        destination = Path(destination_path)
        df = records_to_dataframe(records)

        tmp_path = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{destination.name}.", suffix=".tmp", dir=destination.parent
            )
            os.close(fd)
            tmp_path = Path(tmp_name)

            self._write_frame(df, tmp_path)
            os.chmod(tmp_path, _default_file_mode())
            os.replace(tmp_path, destination)
            tmp_path = None
        except (OSError, pl.exceptions.PolarsError) as e:
            error = ReportWriteError(
                f"Cannot write report to {destination}: {type(e).__name__}: {e}",
                path=str(destination),
            )
            handle_file_error(
                error=error,
                context="writing report",
                severity=ErrorSeverity.ERROR,
                reraise=False,
                logger=logger,
            )
            raise error from e
        finally:
            if tmp_path is not None:
                with contextlib.suppress(FileNotFoundError):
                    tmp_path.unlink()

        logger.info(f"Wrote report with {len(df)} record(s) to {destination}")

    @abstractmethod
    def _write_frame(self, df: pl.DataFrame, path: Path) -> None:
        """
        Serialize the frame to ``path`` (a temporary file).

        Implementations should raise OSError (or a subclass) on I/O failure.
        """

    @abstractmethod
    def load(self, path: Union[str, Path]) -> pl.DataFrame:
        """Read a report written by this writer back into a DataFrame."""
