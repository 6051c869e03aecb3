"""Cooperative cancellation token shared between a caller and the executor."""

import threading
from typing import Optional


class CancellationToken:
    """Thread-safe, one-way cancellation flag.

    Cancelling is idempotent: calling :meth:`cancel` more than once has the
    same effect as calling it once.
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; return the flag."""
        return self._event.wait(timeout)

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"
