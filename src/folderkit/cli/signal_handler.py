"""Signal handling for the folderkit CLI.

SIGINT doubles as the cancellation signal of the running operation: the handler sets an
event that tree walks, mode changes and deletions check between entries, so an
interrupted run stops cleanly and still reports what it did.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Optional

_SIGPIPE = getattr(signal, "SIGPIPE", None)


class SignalHandler:
    """Records SIGINT and SIGPIPE so the CLI can stop cleanly.

    Each handler fires once: after recording the signal it reinstates the original
    handler, so a second Ctrl+C interrupts immediately.

    Attributes:
        sigpipe_received: Event set when a SIGPIPE signal is received.
        sigint_received: Event set when a SIGINT signal is received. Passed to operations as
            their cancellation event.
        original_sigpipe_handler: Original SIGPIPE handler (None where SIGPIPE doesn't exist).
        original_sigint_handler: Original SIGINT handler.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self.original_sigpipe_handler: Any = signal.getsignal(_SIGPIPE) if _SIGPIPE is not None else None
        self.original_sigint_handler: Any = signal.getsignal(signal.SIGINT)

    @property
    def cancel_event(self) -> Event:
        return self.sigint_received

    def handle_sigpipe(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigpipe_received.set()
        if _SIGPIPE is not None:
            signal.signal(_SIGPIPE, self.original_sigpipe_handler)

    def handle_sigint(self, signum: int, frame: Optional[FrameType]) -> None:
        self.sigint_received.set()
        signal.signal(signal.SIGINT, self.original_sigint_handler)

    def interrupted(self) -> bool:
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()


# Create a singleton instance for the application
signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Install the SIGINT handler and, where the platform has it, the SIGPIPE handler."""
    if _SIGPIPE is not None:
        signal.signal(_SIGPIPE, signal_handler.handle_sigpipe)
    signal.signal(signal.SIGINT, signal_handler.handle_sigint)


def cleanup() -> None:
    """Silence stdout at exit after an interruption.

    Redirects stdout to the null device if SIGPIPE or SIGINT was received, so the
    interpreter's final flush cannot fail on a closed pipe.
    """
    if signal_handler.interrupted():
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(cleanup)
