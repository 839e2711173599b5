"""
Measurement and report data models.

This module defines the values that flow through one benchmark run, leaves
first:

- SampleDescriptor: one sample program, produced by the registry
- RunResult: timing and exit status of one child-process run
- MemorySnapshot: heap counters read inside that child
- MetricsRecord: the reportable, immutable merge of the above
- Report: the ordered records plus the fixed column header

Every value is a frozen dataclass. Nothing here is computed from a random
source; a counter that could not be read is carried as ``None`` (unavailable)
together with ``degraded=True``.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

# Report columns, in the order they are written. The first five form the
# documented report schema; exitStatus makes per-sample failures visible.
REPORT_COLUMNS: Tuple[str, ...] = (
    "sample",
    "wallClockMillis",
    "heapUsedBytes",
    "heapTotalBytes",
    "degraded",
    "exitStatus",
)

NANOS_PER_MILLI = 1_000_000


def ns_to_millis(nanoseconds: int) -> int:
    """Convert a nanosecond duration to whole milliseconds (floor)."""
    if nanoseconds < 0:
        raise ValueError(f"duration must be non-negative, got {nanoseconds}ns")
    return nanoseconds // NANOS_PER_MILLI


class ExitStatus(Enum):
    """Outcome of a single sample run."""
    SUCCESS = "success"
    FAILURE = "failure"


class FailureReason(Enum):
    """Why a sample run failed. Recorded in the report, never raised."""
    TIMEOUT = "timeout"
    NONZERO_EXIT = "nonzero_exit"


@dataclass(frozen=True)
class SampleDescriptor:
    """A sample program to benchmark."""

    # Identifier used in the report, the file name (e.g. "simple_loop.py").
    sample_id: str
    # Absolute path of the sample script.
    path: Path


@dataclass(frozen=True)
class RunResult:
    """
    Timing and exit status of one child-process run.

    ``wall_clock_ns`` is the raw monotonic duration between spawn and exit (or
    forced termination). Owned by whoever requested the run and discarded once
    folded into a MetricsRecord.
    """

    sample_id: str
    wall_clock_ns: int
    exit_status: ExitStatus
    return_code: Optional[int] = None
    failure_reason: Optional[FailureReason] = None
    stdout: str = ""
    stderr: str = ""

    def __post_init__(self):
        if self.wall_clock_ns < 0:
            raise ValueError(f"wall_clock_ns must be non-negative, got {self.wall_clock_ns}")
        if self.exit_status is ExitStatus.FAILURE and self.failure_reason is None:
            raise ValueError("a failed run must carry a failure_reason")

    @property
    def wall_clock_millis(self) -> int:
        return ns_to_millis(self.wall_clock_ns)

    @property
    def timed_out(self) -> bool:
        return self.failure_reason is FailureReason.TIMEOUT


@dataclass(frozen=True)
class MemorySnapshot:
    """
    Heap counters observed inside the measured process.

    Invariant: both counters are non-negative and ``heap_used_bytes`` never
    exceeds ``heap_total_bytes``.
    """

    heap_used_bytes: int
    heap_total_bytes: int
    degraded: bool = False
    # Name of the probe that produced the values (e.g. "psutil").
    source: str = ""

    def __post_init__(self):
        if self.heap_used_bytes < 0 or self.heap_total_bytes < 0:
            raise ValueError(
                f"heap counters must be non-negative, got used={self.heap_used_bytes} "
                f"total={self.heap_total_bytes}"
            )
        if self.heap_used_bytes > self.heap_total_bytes:
            raise ValueError(
                f"heap_used_bytes ({self.heap_used_bytes}) exceeds "
                f"heap_total_bytes ({self.heap_total_bytes})"
            )

    @classmethod
    def unavailable(cls, source: str = "") -> "MemorySnapshot":
        """The zero-valued snapshot returned when counters cannot be read."""
        return cls(heap_used_bytes=0, heap_total_bytes=0, degraded=True, source=source)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "heap_used_bytes": self.heap_used_bytes,
            "heap_total_bytes": self.heap_total_bytes,
            "degraded": self.degraded,
            "source": self.source,
        }


@dataclass(frozen=True)
class MetricsRecord:
    """
    The durable, reportable unit: one per sample.

    Heap fields are ``None`` when the measurement is unavailable, in which case
    ``degraded`` is True.
    """

    sample: str
    wall_clock_millis: int
    heap_used_bytes: Optional[int]
    heap_total_bytes: Optional[int]
    degraded: bool
    exit_status: ExitStatus
    failure_reason: Optional[FailureReason] = None

    def __post_init__(self):
        heap = (self.heap_used_bytes, self.heap_total_bytes)
        if self.degraded:
            if heap != (None, None):
                raise ValueError("a degraded record must mark heap counters unavailable")
        elif None in heap or self.heap_used_bytes > self.heap_total_bytes:
            raise ValueError(
                f"invalid heap counters for {self.sample}: used={self.heap_used_bytes} "
                f"total={self.heap_total_bytes}"
            )

    def to_row(self) -> Dict[str, Any]:
        """Return the record as a report row keyed by column name, in column order."""
        return {
            "sample": self.sample,
            "wallClockMillis": self.wall_clock_millis,
            "heapUsedBytes": self.heap_used_bytes,
            "heapTotalBytes": self.heap_total_bytes,
            "degraded": self.degraded,
            "exitStatus": self.exit_status.value,
        }


@dataclass(frozen=True)
class Report:
    """Ordered records of one pipeline invocation plus the fixed header."""

    records: Tuple[MetricsRecord, ...]
    columns: Tuple[str, ...] = field(default=REPORT_COLUMNS)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[MetricsRecord]:
        return iter(self.records)

    @property
    def samples(self) -> List[str]:
        return [record.sample for record in self.records]

    def failed_records(self) -> List[MetricsRecord]:
        return [r for r in self.records if r.exit_status is ExitStatus.FAILURE]

    def degraded_records(self) -> List[MetricsRecord]:
        return [r for r in self.records if r.degraded]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed_records()
