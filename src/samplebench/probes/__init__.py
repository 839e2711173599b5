"""
Memory probes.

Probes read heap/memory counters from inside the measured child process and
hand them back to the parent through a structured line on the child's
standard output:

- base: the AbstractMemoryProbe interface
- psutil_probe: USS/RSS via psutil (default)
- tracemalloc_probe: traced Python heap, current/peak
- protocol: the probe line format and its parser
- launcher: the child-side entry point that runs a sample and probes it
"""

from .base import AbstractMemoryProbe
from .factory import available_probes, create_memory_probe
from .protocol import PROBE_MARKER, format_probe_line, parse_probe_output, strip_probe_output
from .psutil_probe import PsutilMemoryProbe
from .tracemalloc_probe import TracemallocMemoryProbe

__all__ = [
    "AbstractMemoryProbe",
    "PsutilMemoryProbe",
    "TracemallocMemoryProbe",
    "available_probes",
    "create_memory_probe",
    "PROBE_MARKER",
    "format_probe_line",
    "parse_probe_output",
    "strip_probe_output",
]
