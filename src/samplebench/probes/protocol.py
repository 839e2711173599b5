"""
The probe line: how a child process reports its memory counters.

The launcher prints exactly one line of the form::

    @@samplebench-probe@@ {"heap_used_bytes": 1, "heap_total_bytes": 2, ...}

as the last output on stdout. The parent extracts the last occurrence of the
marker from the captured output. A missing, malformed or inconsistent payload
means the counters are unavailable, never that values are guessed.
"""

import json
import logging
from typing import Any, Dict

from ..models.results import MemorySnapshot

logger = logging.getLogger(__name__)

PROBE_MARKER = "@@samplebench-probe@@"


def format_probe_line(snapshot: MemorySnapshot) -> str:
    """Serialize a snapshot into a probe line (without trailing newline)."""
    return f"{PROBE_MARKER} {json.dumps(snapshot.to_dict(), sort_keys=True)}"


def _snapshot_from_payload(payload: Dict[str, Any]) -> MemorySnapshot:
    source = str(payload.get("source", ""))
    if payload.get("degraded", False):
        return MemorySnapshot.unavailable(source=source)

    used = payload["heap_used_bytes"]
    total = payload["heap_total_bytes"]
    for value in (used, total):
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"heap counters must be integers, got {value!r}")
    return MemorySnapshot(heap_used_bytes=used, heap_total_bytes=total, source=source)


def parse_probe_output(stdout: str) -> MemorySnapshot:
    """
    Extract the memory snapshot reported by a child process.

    Args:
        stdout: Complete captured standard output of the child

    Returns:
        The reported snapshot, or the degraded zero-valued snapshot if no
        valid probe line is present
    """
    marker_index = stdout.rfind(PROBE_MARKER) if stdout else -1
    if marker_index < 0:
        logger.debug("No probe line in child output")
        return MemorySnapshot.unavailable()

    line = stdout[marker_index + len(PROBE_MARKER):].split("\n", 1)[0].strip()
    try:
        payload = json.loads(line)
        if not isinstance(payload, dict):
            raise ValueError("probe payload is not an object")
        return _snapshot_from_payload(payload)
    except (ValueError, KeyError) as e:
        logger.warning(f"Ignoring malformed probe line {line!r}: {e}")
        return MemorySnapshot.unavailable()


def strip_probe_output(stdout: str) -> str:
    """Remove probe lines, leaving only the sample's own output."""
    if PROBE_MARKER not in stdout:
        return stdout
    kept = []
    for line in stdout.splitlines(keepends=True):
        marker_index = line.find(PROBE_MARKER)
        if marker_index < 0:
            kept.append(line)
        elif marker_index > 0:
            # Sample output without a trailing newline shares the line.
            kept.append(line[:marker_index])
    return "".join(kept)
