"""
Memory probe implementation using the 'psutil' library.

Reports the USS (Unique Set Size, memory private to the process) as the
used heap and the RSS (Resident Set Size) as the total. USS is a subset of
RSS, so the pair satisfies ``used <= total``.
"""

import logging

import psutil

from ..models.results import MemorySnapshot
from .base import AbstractMemoryProbe

logger = logging.getLogger(__name__)


class PsutilMemoryProbe(AbstractMemoryProbe):
    """
    Reads USS and RSS of the current process via ``memory_full_info()``.

    ``memory_full_info()`` walks the process's memory maps and may be denied on
    some platforms; those failures produce a degraded snapshot.
    """

    name = "psutil"

    def __init__(self, process: "psutil.Process" = None):
        # The process is resolved lazily so that the probe measures the
        # process it runs in, not the one that constructed it.
        self._process = process

    def _read_counters(self) -> MemorySnapshot:
        process = self._process or psutil.Process()
        full_info = process.memory_full_info()

        uss = getattr(full_info, "uss", None)
        rss = getattr(full_info, "rss", None)
        if uss is None or rss is None:
            raise ValueError("platform does not report USS/RSS")

        return MemorySnapshot(
            heap_used_bytes=int(uss),
            heap_total_bytes=int(rss),
            source=self.name,
        )
