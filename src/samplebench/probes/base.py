"""
Defines the abstract interface for memory probes.

A memory probe reads the heap/memory counters of the process it runs in.
Probes are executed inside the measured child process (see
``samplebench.probes.launcher``), never in the coordinating parent, so that
the numbers belong to the sample that was timed.
"""

import logging
from abc import ABC, abstractmethod

from ..models.results import MemorySnapshot

logger = logging.getLogger(__name__)


class AbstractMemoryProbe(ABC):
    """
    Abstract base class for memory probes.

    Subclasses implement ``_read_counters``; ``snapshot`` wraps it so that a
    probe never fails fatally: any error, or a pair of counters that breaks
    the ``used <= total`` invariant, yields the zero-valued degraded snapshot.
    """

    #: Short name used on the command line and in the probe line.
    name: str = ""

    def prepare(self) -> None:
        """
        Called once before the sample starts.

        Probes that must observe the whole run (e.g. allocation tracing) start
        their instrumentation here. The default does nothing.
        """

    @abstractmethod
    def _read_counters(self) -> MemorySnapshot:
        """
        Read the counters of the current process.

        May raise; ``snapshot`` turns failures into a degraded snapshot.
        """

    def snapshot(self) -> MemorySnapshot:
        """
        Return the current memory counters.

        Returns:
            A MemorySnapshot; degraded and zero-valued if the counters could
            not be read.
        """
        try:
            return self._read_counters()
        except Exception as e:
            logger.warning(f"{self.__class__.__name__} could not read memory counters: {e}")
            return MemorySnapshot.unavailable(source=self.name)
