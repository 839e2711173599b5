"""
Child-side entry point: run one sample and report its memory counters.

Invoked by the ProcessRunner in a fresh interpreter::

    python -m samplebench.probes.launcher --probe psutil path/to/sample.py [args...]

The sample runs as ``__main__`` exactly as ``python sample.py`` would run it.
Afterwards, whether it returned, called ``sys.exit`` or raised, the selected
probe reads this process's counters and the probe line is written to stdout.
The launcher then exits with the sample's exit code.

Only lightweight modules are imported here; anything loaded in this process
shows up in its memory counters.
"""

import argparse
import os
import runpy
import sys
import traceback
from typing import List, Optional

from .factory import available_probes, create_memory_probe
from .protocol import format_probe_line


def _exit_code_from(exc: SystemExit) -> int:
    """Map a SystemExit to a process exit code the way the interpreter does."""
    code = exc.code
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    print(code, file=sys.stderr)
    return 1


def run_sample(script: str, script_args: List[str]) -> int:
    """Execute a sample script as ``__main__`` and return its exit code."""
    script_path = os.path.abspath(script)
    sys.argv = [script_path] + list(script_args)
    sys.path.insert(0, os.path.dirname(script_path))
    try:
        runpy.run_path(script_path, run_name="__main__")
    except SystemExit as e:
        return _exit_code_from(e)
    except Exception:
        traceback.print_exc()
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="samplebench.probes.launcher",
        description="Run a sample script and report its memory counters on stdout.",
    )
    parser.add_argument(
        "--probe",
        choices=available_probes(),
        default="psutil",
        help="Memory probe to read after the sample finishes.",
    )
    parser.add_argument("script", help="Path of the sample script.")
    parser.add_argument("script_args", nargs=argparse.REMAINDER)
    args = parser.parse_args(argv)

    probe = create_memory_probe(args.probe)
    probe.prepare()
    exit_code = run_sample(args.script, args.script_args)
    snapshot = probe.snapshot()

    # The sample may have replaced or closed sys.stdout.
    line = format_probe_line(snapshot) + "\n"
    stream = sys.__stdout__
    if sys.stdout is not None and sys.stdout is not stream and not sys.stdout.closed:
        sys.stdout.flush()
    if stream is None or stream.closed:
        # fd 1 outlives the text wrapper (closefd=False).
        os.write(1, line.encode("utf-8"))
    else:
        stream.write(line)
        stream.flush()
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
