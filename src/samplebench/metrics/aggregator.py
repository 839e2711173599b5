"""
Merging of per-sample measurements into report records.

``combine`` is a pure function: the record it returns is derived only from
its arguments. Timing is converted from nanoseconds to whole milliseconds;
heap counters from a degraded snapshot are marked unavailable (``None``)
instead of being carried over as zeros.
"""

from typing import Iterable, List, Tuple

from ..models.results import (
    MemorySnapshot,
    MetricsRecord,
    RunResult,
    SampleDescriptor,
    ns_to_millis,
)


def combine(
    sample: SampleDescriptor,
    run_result: RunResult,
    memory_snapshot: MemorySnapshot,
) -> MetricsRecord:
    """
    Merge one sample's run result and memory snapshot into a MetricsRecord.

    Raises:
        ValueError: If the run result belongs to a different sample
    """
    if run_result.sample_id != sample.sample_id:
        raise ValueError(
            f"run result for '{run_result.sample_id}' cannot be combined "
            f"with sample '{sample.sample_id}'"
        )

    if memory_snapshot.degraded:
        heap_used, heap_total = None, None
    else:
        heap_used, heap_total = memory_snapshot.heap_used_bytes, memory_snapshot.heap_total_bytes

    return MetricsRecord(
        sample=sample.sample_id,
        wall_clock_millis=ns_to_millis(run_result.wall_clock_ns),
        heap_used_bytes=heap_used,
        heap_total_bytes=heap_total,
        degraded=memory_snapshot.degraded,
        exit_status=run_result.exit_status,
        failure_reason=run_result.failure_reason,
    )


def aggregate(
    measurements: Iterable[Tuple[SampleDescriptor, RunResult, MemorySnapshot]],
) -> List[MetricsRecord]:
    """Combine a sequence of measurements, preserving their order."""
    return [combine(sample, run_result, snapshot) for sample, run_result, snapshot in measurements]
