"""
Signal handling for the orchestration module.

SIGINT already raises KeyboardInterrupt in the main thread. SignalHandler
makes SIGTERM behave the same way while a benchmark runs, so both signals
unwind through the ProcessRunner, which kills the in-flight child before the
interrupt propagates.
"""

import logging
import signal
import threading
from typing import Any

logger = logging.getLogger(__name__)


class SignalHandler:
    """
    Context manager that turns SIGTERM into KeyboardInterrupt.

    Handlers can only be installed from the main thread; elsewhere the
    handler is a no-op and the previous behaviour stays in place.
    """

    def __init__(self):
        self._original_sigterm_handler = None
        self._signal_handlers_set = False
        self.signals_received = 0

    def setup_signal_handlers(self) -> None:
        """Install the SIGTERM handler, remembering the previous one."""
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not in main thread; leaving signal handlers untouched")
            return
        try:
            self._original_sigterm_handler = signal.signal(signal.SIGTERM, self._handle_signal)
            self._signal_handlers_set = True
            logger.debug("SIGTERM handler installed")
        except (ValueError, OSError) as e:
            logger.warning(f"Failed to set up signal handlers: {e}")

    def cleanup_signal_handlers(self) -> None:
        """Restore the original SIGTERM handler."""
        if not self._signal_handlers_set:
            return
        try:
            signal.signal(signal.SIGTERM, self._original_sigterm_handler)
            logger.debug("Signal handlers restored")
        except (ValueError, OSError) as e:
            logger.warning(f"Failed to restore signal handlers: {e}")
        finally:
            self._signal_handlers_set = False

    def _handle_signal(self, signum: int, frame: Any) -> None:
        self.signals_received += 1
        if self.signals_received > 1:
            logger.warning("Shutdown already in progress. Please be patient.")
            return
        logger.warning(f"Signal {signal.strsignal(signum)} received. Stopping benchmark run...")
        raise KeyboardInterrupt(f"received signal {signum}")

    def __enter__(self) -> "SignalHandler":
        self.setup_signal_handlers()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.cleanup_signal_handlers()
