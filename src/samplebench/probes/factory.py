"""
Factory for creating memory probe instances.
"""

import logging
from typing import Dict, List, Type

from .base import AbstractMemoryProbe
from .psutil_probe import PsutilMemoryProbe
from .tracemalloc_probe import TracemallocMemoryProbe

logger = logging.getLogger(__name__)

_PROBES: Dict[str, Type[AbstractMemoryProbe]] = {
    PsutilMemoryProbe.name: PsutilMemoryProbe,
    TracemallocMemoryProbe.name: TracemallocMemoryProbe,
}


def available_probes() -> List[str]:
    """Return the names of all registered memory probes."""
    return list(_PROBES)


def create_memory_probe(name: str = "psutil") -> AbstractMemoryProbe:
    """
    Create a memory probe by name.

    Args:
        name: Probe name ('psutil' or 'tracemalloc')

    Returns:
        AbstractMemoryProbe instance

    Raises:
        ValueError: If the probe name is unknown
    """
    try:
        probe_class = _PROBES[name]
    except KeyError:
        raise ValueError(
            f"Unsupported memory probe: {name}. Available: {available_probes()}"
        ) from None
    logger.debug(f"Creating {probe_class.__name__}")
    return probe_class()
