"""
CSV report writer, the documented report format.

UTF-8, comma-separated, header row first, one row per sample in registry
order. Unavailable values are empty cells and booleans are written as
``true``/``false``.
"""

import logging
from pathlib import Path
from typing import Union

import polars as pl

from .base import REPORT_SCHEMA, ReportWriter

logger = logging.getLogger(__name__)


class CsvReportWriter(ReportWriter):
    """Writes reports as comma-separated text using Polars."""

    suffix = ".csv"

    def __init__(self, separator: str = ","):
        self.separator = separator

    def _write_frame(self, df: pl.DataFrame, path: Path) -> None:
        df.write_csv(path, include_header=True, separator=self.separator, null_value="")
        logger.debug(f"Wrote {len(df)} CSV rows to {path}")

    def load(self, path: Union[str, Path]) -> pl.DataFrame:
        return pl.read_csv(
            path,
            separator=self.separator,
            schema_overrides=REPORT_SCHEMA,
            null_values=[""],
        )
