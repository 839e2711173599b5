"""
SampleBench: a benchmarking harness for small sample programs.

Each sample runs once in its own fresh interpreter. The harness measures the
wall-clock duration of the run, reads the memory counters of the sample's
process from inside that process, and writes one record per sample to a
tabular report.

The package is organized into specialized modules:
- config: Configuration loading and validation
- models: Data structures (descriptors, run results, snapshots, records)
- validation: Error taxonomy and input validation
- samples: Sample discovery
- executor: Child-process execution and timing
- probes: In-process memory probes and the child-side launcher
- metrics: Aggregation of measurements into records
- storage: CSV and Parquet report writers
- orchestration: The pipeline and signal handling
- cli: Command-line interface

Usage:
    From command line:
        samplebench --samples samples --out data/performance_metrics.csv --timeout 5000

    Programmatically:
        from samplebench.config import get_config
        from samplebench.orchestration import build_pipeline, write_report
        report = build_pipeline(get_config()).run()
        write_report(report, "data/performance_metrics.csv")

This module only imports lightweight submodules: it is also loaded inside
every measured sample process.
"""

from .models import (
    ExitStatus,
    FailureReason,
    MemorySnapshot,
    MetricsRecord,
    Report,
    RunResult,
    SampleDescriptor,
)
from .validation import (
    ConfigurationError,
    MeasurementEnvironmentError,
    ReportWriteError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    # Models
    "ExitStatus",
    "FailureReason",
    "MemorySnapshot",
    "MetricsRecord",
    "Report",
    "RunResult",
    "SampleDescriptor",
    # Errors
    "ConfigurationError",
    "MeasurementEnvironmentError",
    "ReportWriteError",
    "ValidationError",
]
