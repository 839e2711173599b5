"""
Orchestration module for benchmark runs.

Components:
- BenchmarkPipeline: runs all samples sequentially and returns a Report
- build_pipeline: assembles a pipeline from configuration
- write_report / log_report_summary: presentation of a finished Report
- SignalHandler: turns SIGTERM into an interrupt during a run
"""

from .pipeline import BenchmarkPipeline, build_pipeline, log_report_summary, write_report
from .signal_handler import SignalHandler

__all__ = [
    "BenchmarkPipeline",
    "build_pipeline",
    "log_report_summary",
    "write_report",
    "SignalHandler",
]
