"""
Data models for the benchmark pipeline.

Configuration Models:
- Sample discovery and execution settings
- Report output settings

Result Models:
- Sample descriptors, run results and memory snapshots
- Aggregated metrics records and the final report

All models are dataclasses; result models are frozen.
"""

from .config import (
    MEMORY_PROBES,
    PARQUET_COMPRESSIONS,
    REPORT_FORMATS,
    AppConfig,
    BenchmarkConfig,
    ReportConfig,
)
from .results import (
    REPORT_COLUMNS,
    ExitStatus,
    FailureReason,
    MemorySnapshot,
    MetricsRecord,
    Report,
    RunResult,
    SampleDescriptor,
    ns_to_millis,
)

__all__ = [
    # Configuration
    "AppConfig",
    "BenchmarkConfig",
    "ReportConfig",
    "MEMORY_PROBES",
    "PARQUET_COMPRESSIONS",
    "REPORT_FORMATS",
    # Results
    "REPORT_COLUMNS",
    "ExitStatus",
    "FailureReason",
    "MemorySnapshot",
    "MetricsRecord",
    "Report",
    "RunResult",
    "SampleDescriptor",
    "ns_to_millis",
]
