"""
Parquet report writer using Polars.

Keeps the same columns and types as the CSV report, in a compressed columnar
file that loads faster for large result sets.
"""

import logging
from pathlib import Path
from typing import Literal, Union

import polars as pl

from .base import ReportWriter

logger = logging.getLogger(__name__)


class ParquetReportWriter(ReportWriter):
    """
    Writes reports in Parquet format.

    Args:
        compression: Compression algorithm to use
    """

    suffix = ".parquet"

    def __init__(self, compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy"):
        self.compression = compression
        logger.debug(f"Initialized ParquetReportWriter with compression: {compression}")

    def _write_frame(self, df: pl.DataFrame, path: Path) -> None:
        df.write_parquet(path, compression=self.compression)
        logger.debug(f"Wrote {len(df)} Parquet rows to {path}")

    def load(self, path: Union[str, Path]) -> pl.DataFrame:
        return pl.read_parquet(path)
