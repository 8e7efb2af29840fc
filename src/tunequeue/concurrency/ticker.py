"""Periodic tickers driving playback progress."""

import threading
import time
from typing import Callable, Optional
from tunequeue.core.exceptions import WorkerNotRunningError
from tunequeue.core.interfaces import ITicker
from tunequeue.utils.log import get_logger

logger = get_logger(__name__)


class ThreadTicker(ITicker):
    """
    Repeating timer running on a daemon thread.

    Each start() gets its own stop event, so a cancelled run can never fire
    again even if its thread has not exited yet. cancel() does not join the
    thread: the thread may be blocked dispatching a tick to the worker that
    is calling cancel().
    """

    def __init__(self, interval: float = 1.0):
        """
        Initialize ticker.

        Args:
            interval: Seconds between ticks.
        """
        self.interval = interval
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def start(self, callback: Callable[[], None]) -> None:
        """Start firing callback every interval, cancelling any previous run."""
        with self._lock:
            self._cancel_locked()
            stop_event = threading.Event()
            thread = threading.Thread(
                target=self._run,
                args=(callback, stop_event),
                name="tunequeue-ticker",
                daemon=True,
            )
            self._stop_event = stop_event
            self._thread = thread
            thread.start()
        logger.debug(f"Ticker started (interval={self.interval}s)")

    def cancel(self) -> None:
        """Stop firing."""
        with self._lock:
            if self._cancel_locked():
                logger.debug("Ticker cancelled")

    @property
    def is_active(self) -> bool:
        return self._stop_event is not None and not self._stop_event.is_set()

    def _cancel_locked(self) -> bool:
        if self._stop_event is None:
            return False
        self._stop_event.set()
        self._stop_event = None
        self._thread = None
        return True

    def _run(self, callback: Callable[[], None], stop_event: threading.Event) -> None:
        # Ticks land on a fixed monotonic grid; callback time is not added to the interval
        next_tick = time.monotonic() + self.interval
        while not stop_event.wait(max(0.0, next_tick - time.monotonic())):
            next_tick += self.interval
            try:
                callback()
            except WorkerNotRunningError:
                logger.debug("Worker stopped, ticker exiting")
                break
            except Exception:
                logger.exception("Error in tick callback")


class ManualTicker(ITicker):
    """Ticker that only fires when told to. Used for deterministic tests."""

    def __init__(self):
        self._callback: Optional[Callable[[], None]] = None
        self.starts = 0
        self.cancels = 0

    def start(self, callback: Callable[[], None]) -> None:
        self.cancel()
        self._callback = callback
        self.starts += 1

    def cancel(self) -> None:
        if self._callback is not None:
            self._callback = None
            self.cancels += 1

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    def fire(self, times: int = 1) -> int:
        """
        Fire the registered callback.

        Args:
            times: Number of ticks to fire.

        Returns:
            Number of ticks actually delivered (stops early if cancelled).
        """
        fired = 0
        for _ in range(times):
            if self._callback is None:
                break
            self._callback()
            fired += 1
        return fired
