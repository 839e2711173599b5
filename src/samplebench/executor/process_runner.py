"""
Sample execution in isolated child processes.

This module provides the ProcessRunner, which executes one sample in a fresh
interpreter, measures its wall-clock duration with a monotonic clock and
enforces a per-sample timeout. How a sample is turned into a command line is
delegated to a SampleLauncher, so runtimes other than CPython can be plugged
in.
"""

import logging
import os
import signal
import subprocess
import sys
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from ..models.results import ExitStatus, FailureReason, RunResult, SampleDescriptor
from ..validation import (
    ErrorSeverity,
    MeasurementEnvironmentError,
    handle_subprocess_error,
    validate_positive_integer,
)

logger = logging.getLogger(__name__)

# How long to wait for output pipes to close after the child was killed.
DRAIN_TIMEOUT_SECONDS = 2.0


class SampleLauncher(ABC):
    """Builds the command line that runs one sample in a fresh process."""

    @abstractmethod
    def build_command(self, sample: SampleDescriptor) -> List[str]:
        """Return the argv that executes ``sample`` and reports its memory counters."""

    def environment(self) -> Optional[Dict[str, str]]:
        """Environment for the child, or None to inherit the parent's."""
        return None


class PythonSampleLauncher(SampleLauncher):
    """
    Runs Python samples through ``samplebench.probes.launcher``.

    The child interpreter executes the sample and then prints the probe line
    produced by the selected memory probe.

    Args:
        interpreter: Python executable for the child (default: the current one)
        probe_name: Memory probe to use inside the child
    """

    def __init__(self, interpreter: str = sys.executable, probe_name: str = "psutil"):
        self.interpreter = interpreter
        self.probe_name = probe_name

    def build_command(self, sample: SampleDescriptor) -> List[str]:
        return [
            self.interpreter,
            "-m",
            "samplebench.probes.launcher",
            "--probe",
            self.probe_name,
            str(sample.path),
        ]

    def environment(self) -> Dict[str, str]:
        # Make this package importable in the child even when it is not
        # installed (e.g. running from a source checkout).
        env = os.environ.copy()
        package_root = str(Path(__file__).resolve().parent.parent.parent)
        existing = env.get("PYTHONPATH")
        env["PYTHONPATH"] = package_root if not existing else os.pathsep.join([package_root, existing])
        env.setdefault("PYTHONIOENCODING", "utf-8")
        return env


class ProcessRunner:
    """
    Executes samples one at a time as isolated child processes.

    Each child runs in its own session (process group) so that a timeout or an
    interrupt of the coordinating process can kill the sample together with
    anything it spawned.
    """

    def __init__(self, launcher: Optional[SampleLauncher] = None):
        self.launcher = launcher or PythonSampleLauncher()

    def run(self, sample: SampleDescriptor, timeout_ms: int) -> RunResult:
        """
        Run one sample and measure its wall-clock duration.

        Args:
            sample: The sample to execute
            timeout_ms: Time limit in milliseconds; the child is killed when
                it is exceeded

        Returns:
            RunResult with the elapsed monotonic duration, exit status and the
            captured output. Timeouts and non-zero exits are failures, not
            exceptions.

        Raises:
            MeasurementEnvironmentError: If the child process cannot be spawned
        """
        timeout_ms = validate_positive_integer(timeout_ms, field_name="timeout_ms")
        command = self.launcher.build_command(sample)
        logger.debug(f"Running sample {sample.sample_id}: {' '.join(command)}")

        start_ns = time.monotonic_ns()
        process = self._spawn(command, sample)

        try:
            stdout, stderr = process.communicate(timeout=timeout_ms / 1000)
            end_ns = time.monotonic_ns()
        except subprocess.TimeoutExpired:
            self._terminate(process)
            end_ns = time.monotonic_ns()
            stdout, stderr = self._drain(process)
            elapsed_ns = end_ns - start_ns
            logger.warning(
                f"Sample {sample.sample_id} exceeded {timeout_ms}ms and was killed "
                f"after {elapsed_ns // 1_000_000}ms"
            )
            return RunResult(
                sample_id=sample.sample_id,
                wall_clock_ns=elapsed_ns,
                exit_status=ExitStatus.FAILURE,
                return_code=process.returncode,
                failure_reason=FailureReason.TIMEOUT,
                stdout=stdout,
                stderr=stderr,
            )
        except BaseException:
            # Interrupted while waiting: never leave the child behind.
            logger.warning(f"Interrupted while running {sample.sample_id}; killing child process")
            self._terminate(process)
            raise

        return_code = process.returncode
        if return_code == 0:
            exit_status, failure_reason = ExitStatus.SUCCESS, None
        else:
            exit_status, failure_reason = ExitStatus.FAILURE, FailureReason.NONZERO_EXIT
            logger.warning(
                f"Sample {sample.sample_id} exited with code {return_code}: "
                f"{stderr.strip().splitlines()[-1] if stderr.strip() else 'no stderr output'}"
            )

        return RunResult(
            sample_id=sample.sample_id,
            wall_clock_ns=end_ns - start_ns,
            exit_status=exit_status,
            return_code=return_code,
            failure_reason=failure_reason,
            stdout=stdout,
            stderr=stderr,
        )

    def _spawn(self, command: List[str], sample: SampleDescriptor) -> subprocess.Popen:
        try:
            return subprocess.Popen(
                command,
                cwd=sample.path.parent,
                env=self.launcher.environment(),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                start_new_session=True,
            )
        except OSError as e:
            error = MeasurementEnvironmentError(
                f"Cannot start measurement process for {sample.sample_id}: "
                f"{type(e).__name__}: {e}",
                command=" ".join(command),
            )
            handle_subprocess_error(
                error=error,
                command=command[0],
                severity=ErrorSeverity.CRITICAL,
                reraise=False,
                logger=logger,
            )
            raise error from e

    def _terminate(self, process: subprocess.Popen) -> None:
        """
        Kill the child's whole process group and reap the child.

        The group is killed even when the child itself has already exited:
        grandchildren in its session may still hold the output pipes.
        """
        try:
            if hasattr(os, "killpg"):
                os.killpg(process.pid, signal.SIGKILL)
            elif process.poll() is None:
                process.kill()
        except ProcessLookupError:
            pass
        process.wait()

    def _drain(self, process: subprocess.Popen) -> Tuple[str, str]:
        """Collect what the killed child wrote before it died."""
        try:
            stdout, stderr = process.communicate(timeout=DRAIN_TIMEOUT_SECONDS)
        except subprocess.TimeoutExpired:
            # A grandchild escaped the process group and holds the pipes open.
            logger.warning(f"Output pipes of PID {process.pid} did not close; discarding output")
            for stream in (process.stdout, process.stderr):
                if stream is not None:
                    stream.close()
            return "", ""
        return stdout or "", stderr or ""
