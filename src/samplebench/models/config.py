"""
Configuration data models.

This module contains the configuration structures for sample discovery and
execution and for report output, loaded from `config.toml` and overridable
from the command line.
"""

import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

REPORT_FORMATS = ("csv", "parquet")
PARQUET_COMPRESSIONS = ("snappy", "gzip", "brotli", "lz4", "zstd")
MEMORY_PROBES = ("psutil", "tracemalloc")


@dataclass
class BenchmarkConfig:
    """
    Sample discovery and execution settings, the `[benchmark]` table.
    """

    # Directory scanned for sample programs.
    samples_dir: Path = Path("samples")
    # File name glob used for the directory scan.
    pattern: str = "*.py"
    # Optional static list of sample file names; overrides the scan order.
    samples: Optional[List[str]] = None
    # Per-sample time limit in milliseconds.
    timeout_ms: int = 30_000
    # Interpreter that runs each sample in a fresh process.
    interpreter: str = sys.executable
    # Memory probe used inside the child ("psutil" or "tracemalloc").
    memory_probe: str = "psutil"


@dataclass
class ReportConfig:
    """
    Report output settings, the `[report]` table.

    Attributes:
        output_file: Destination of the report
        format: 'csv' (default, the documented report format) or 'parquet'
        compression: Compression algorithm, only used for Parquet output
    """

    output_file: Path = Path("data/performance_metrics.csv")
    format: Literal["csv", "parquet"] = "csv"
    compression: Literal["snappy", "gzip", "brotli", "lz4", "zstd"] = "snappy"

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> "ReportConfig":
        """
        Create a ReportConfig from a raw `[report]` table.

        Raises:
            ValueError: If an unsupported format or compression is given
        """
        format_type = config_dict.get("format", "csv")
        compression = config_dict.get("compression", "snappy")

        if format_type not in REPORT_FORMATS:
            raise ValueError(f"Unsupported report format: {format_type}")
        if compression not in PARQUET_COMPRESSIONS:
            raise ValueError(f"Unsupported compression algorithm: {compression}")

        return cls(
            output_file=Path(config_dict.get("output_file", cls.output_file)),
            format=format_type,
            compression=compression,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "output_file": str(self.output_file),
            "format": self.format,
            "compression": self.compression,
        }


@dataclass
class AppConfig:
    """
    The root configuration object that aggregates all loaded settings.
    """

    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)
    report: ReportConfig = field(default_factory=ReportConfig)

    def with_overrides(self, benchmark: Dict[str, Any], report: Dict[str, Any]) -> "AppConfig":
        """
        Return a copy with the given non-None values replaced.

        Used by the CLI so that explicit arguments win over file values.
        """
        benchmark_changes = {k: v for k, v in benchmark.items() if v is not None}
        report_changes = {k: v for k, v in report.items() if v is not None}
        return AppConfig(
            benchmark=replace(self.benchmark, **benchmark_changes),
            report=replace(self.report, **report_changes),
        )
