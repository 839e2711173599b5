"""
Memory probe based on the interpreter's own allocation tracing.

``tracemalloc`` counts the memory blocks allocated by Python code. The probe
starts tracing before the sample runs and reports the current traced size as
the used heap and the peak traced size as the total. The current size never
exceeds the peak.

Tracing slows allocation down noticeably, so wall-clock numbers taken with
this probe are not comparable to runs with the psutil probe.
"""

import tracemalloc

from ..models.results import MemorySnapshot
from .base import AbstractMemoryProbe


class TracemallocMemoryProbe(AbstractMemoryProbe):
    """Reports traced Python heap usage of the current process."""

    name = "tracemalloc"

    def __init__(self, frames: int = 1):
        self.frames = frames

    def prepare(self) -> None:
        if not tracemalloc.is_tracing():
            tracemalloc.start(self.frames)

    def _read_counters(self) -> MemorySnapshot:
        if not tracemalloc.is_tracing():
            raise RuntimeError("tracemalloc is not tracing; prepare() was not called")
        current, peak = tracemalloc.get_traced_memory()
        return MemorySnapshot(
            heap_used_bytes=current,
            heap_total_bytes=max(current, peak),
            source=self.name,
        )
