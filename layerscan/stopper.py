"""Graceful termination of a group of worker threads."""

from __future__ import annotations

import threading


class Stopper:
    """Signals worker threads to stop and waits for them to finish."""

    def __init__(self) -> None:
        self._stop_event = threading.Event()
        self._condition = threading.Condition()
        self._running = 0

    def begin(self) -> None:
        """Record that a worker has started."""
        with self._condition:
            self._running += 1

    def end(self) -> None:
        """Record that a worker has finished."""
        with self._condition:
            if self._running <= 0:
                raise ValueError("stopper: end called without a matching begin")
            self._running -= 1
            if self._running == 0:
                self._condition.notify_all()

    def is_stopped(self) -> bool:
        """Return True once stop has been requested."""
        return self._stop_event.is_set()

    def sleep(self, seconds: float) -> bool:
        """Sleep for ``seconds``; return False if interrupted by a stop request."""
        return not self._stop_event.wait(max(seconds, 0.0))

    def stop(self) -> None:
        """Ask every worker to end and wait until all of them have."""
        if self._stop_event.is_set():
            raise RuntimeError("stopper: already stopped")
        self._stop_event.set()
        with self._condition:
            self._condition.wait_for(lambda: self._running == 0)