"""
The benchmark pipeline.

BenchmarkPipeline drives one benchmark invocation on the calling thread:

1. the SampleRegistry lists the samples (configuration errors abort here,
   before anything runs)
2. each sample runs in its own child process, strictly one after another so
   that runs do not disturb each other's timing and memory
3. the memory counters reported by the child are parsed from its output
4. the aggregator merges timing and counters into one record per sample

and returns a Report. Writing the report and printing a summary are separate
steps (``write_report``, ``log_report_summary``) so presentation can change
without touching measurement.
"""

import logging
from pathlib import Path
from typing import Callable, Optional, Union

from ..executor.process_runner import ProcessRunner, PythonSampleLauncher
from ..metrics.aggregator import combine
from ..models.config import AppConfig
from ..models.results import (
    MemorySnapshot,
    MetricsRecord,
    Report,
    RunResult,
    SampleDescriptor,
)
from ..probes.protocol import parse_probe_output, strip_probe_output
from ..samples.registry import SampleRegistry
from ..storage.base import ReportWriter
from ..storage.factory import writer_for_path
from ..validation import validate_positive_integer

logger = logging.getLogger(__name__)

Aggregator = Callable[[SampleDescriptor, RunResult, MemorySnapshot], MetricsRecord]


class BenchmarkPipeline:
    """
    Runs every registered sample once and collects the results.

    Args:
        registry: Source of the ordered samples
        runner: Executes one sample in a child process
        timeout_ms: Per-sample time limit in milliseconds
        aggregator: Merges a run into a record (default: ``combine``)
    """

    def __init__(
        self,
        registry: SampleRegistry,
        runner: ProcessRunner,
        timeout_ms: int,
        aggregator: Aggregator = combine,
    ):
        self.registry = registry
        self.runner = runner
        self.timeout_ms = validate_positive_integer(timeout_ms, field_name="timeout_ms")
        self.aggregator = aggregator

    def run(self) -> Report:
        """
        Benchmark all samples.

        Returns:
            Report with exactly one record per sample, in registry order

        Raises:
            ConfigurationError: If no samples can be listed
            MeasurementEnvironmentError: If a child process cannot be spawned
        """
        samples = self.registry.list_samples()
        records = []
        for index, sample in enumerate(samples, start=1):
            logger.info(f"[{index}/{len(samples)}] Running {sample.sample_id}")
            records.append(self.measure(sample))
        return Report(records=tuple(records))

    def measure(self, sample: SampleDescriptor) -> MetricsRecord:
        """Run a single sample and turn its measurements into a record."""
        run_result = self.runner.run(sample, self.timeout_ms)
        snapshot = parse_probe_output(run_result.stdout)
        record = self.aggregator(sample, run_result, snapshot)

        sample_output = strip_probe_output(run_result.stdout).strip()
        if sample_output:
            logger.debug(f"{sample.sample_id} stdout:\n{sample_output}")
        if record.degraded:
            logger.warning(f"{sample.sample_id}: memory counters unavailable, record marked degraded")
        logger.info(
            f"{sample.sample_id}: {record.exit_status.value} in {record.wall_clock_millis}ms"
            + (
                f", heap {record.heap_used_bytes}/{record.heap_total_bytes} bytes"
                if not record.degraded
                else ""
            )
        )
        return record


def build_pipeline(app_config: AppConfig) -> BenchmarkPipeline:
    """Assemble a pipeline from the application configuration."""
    benchmark = app_config.benchmark
    registry = SampleRegistry(
        samples_dir=benchmark.samples_dir,
        pattern=benchmark.pattern,
        samples=benchmark.samples,
    )
    launcher = PythonSampleLauncher(
        interpreter=benchmark.interpreter,
        probe_name=benchmark.memory_probe,
    )
    return BenchmarkPipeline(
        registry=registry,
        runner=ProcessRunner(launcher),
        timeout_ms=benchmark.timeout_ms,
    )


def write_report(
    report: Report,
    destination: Union[str, Path],
    writer: Optional[ReportWriter] = None,
) -> Path:
    """
    Persist a report. The writer defaults to one matching the file suffix.

    Raises:
        ReportWriteError: If the report cannot be written
    """
    destination = Path(destination)
    (writer or writer_for_path(destination)).write(report, destination)
    return destination


def log_report_summary(report: Report, log: Optional[logging.Logger] = None) -> None:
    """Log a one-line-per-sample summary of a report."""
    log = log or logger
    log.info(f"--- Benchmark summary ({len(report)} sample(s)) ---")
    for record in report:
        heap = (
            "heap unavailable"
            if record.degraded
            else f"heap {record.heap_used_bytes}/{record.heap_total_bytes} B"
        )
        status = record.exit_status.value
        if record.failure_reason is not None:
            status += f" ({record.failure_reason.value})"
        log.info(f"  {record.sample:<32} {record.wall_clock_millis:>8} ms  {heap:<32} {status}")

    failed = report.failed_records()
    degraded = report.degraded_records()
    if failed:
        log.warning(f"{len(failed)} sample(s) failed: {', '.join(r.sample for r in failed)}")
    if degraded:
        log.warning(
            f"{len(degraded)} sample(s) without memory counters: "
            f"{', '.join(r.sample for r in degraded)}"
        )
