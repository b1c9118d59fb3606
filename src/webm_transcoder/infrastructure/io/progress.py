"""Periodic transfer progress reporting."""

import threading
from typing import Optional

from ...domain.models import ProgressState
from ...shared.logging import get_logger
from ...shared.types import LogSink


class ProgressReporter:
    """
    Logs a ProgressState at a fixed cadence from a daemon thread.

    Use as a context manager; the thread is stopped and joined on exit,
    whether the transfer finished or raised.
    """

    def __init__(
        self,
        state: ProgressState,
        interval: float = 1.0,
        sink: Optional[LogSink] = None
    ):
        self.state = state
        self.interval = interval
        self._sink = sink or get_logger(__name__).info
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run,
            name="transfer-progress",
            daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def report(self) -> None:
        """Emit one progress line."""
        self._sink(self.state.format())

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            self.report()

    def __enter__(self) -> "ProgressReporter":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
