"""Worker thread that serializes player commands."""

import queue
import threading
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar
from tunequeue.core.exceptions import WorkerNotRunningError
from tunequeue.core.interfaces import ICommandWorker
from tunequeue.utils.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass
class Command:
    """Command to execute in worker thread."""

    id: str
    func: Callable[[], Any]
    result_event: threading.Event
    result: Optional[Any] = None
    error: Optional[Exception] = None


class CommandWorker(ICommandWorker):
    """
    Worker thread that executes player commands one at a time.

    Every mutation of engine state (commands and progress ticks) goes through
    this thread, so no two of them ever interleave. Calls made from the worker
    thread itself, e.g. by a state subscriber, run inline.
    """

    def __init__(self, name: str = "tunequeue-worker"):
        """
        Initialize worker.

        Args:
            name: Thread name.
        """
        self.name = name
        self._queue: queue.Queue[Optional[Command]] = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._ready_event = threading.Event()  # Signals thread is ready
        self._initialized = False

    def start(self) -> None:
        """
        Start the worker thread.

        Blocks until thread is ready to accept commands.
        """
        if self._thread is not None and self._thread.is_alive():
            return

        self._stop_event.clear()
        self._ready_event.clear()
        self._initialized = False

        # Daemon thread so a forgotten shutdown() does not block program exit
        self._thread = threading.Thread(target=self._worker_loop, name=self.name, daemon=True)
        self._thread.start()

        if not self._ready_event.wait(timeout=5.0):
            raise RuntimeError("Worker thread failed to start within timeout")

        self._initialized = True
        logger.info("Command worker thread started")

    def stop(self) -> None:
        """
        Stop the worker thread (blocks until done).

        This method is idempotent and safe to call multiple times.
        """
        if self._thread is None or not self._thread.is_alive():
            self._initialized = False
            return

        logger.info("Stopping command worker thread...")

        # Prevent new commands from being accepted
        self._initialized = False
        self._stop_event.set()

        # Sentinel wakes the thread if it is waiting on the queue
        self._queue.put(None)

        if threading.current_thread() is self._thread:
            # Called from a command; the loop exits after it returns
            return

        self._thread.join(timeout=5.0)
        if self._thread.is_alive():
            logger.error("Worker thread still alive after timeout - may need manual cleanup")
        else:
            logger.info("Command worker thread stopped")
        self._thread = None

    def execute(self, func: Callable[[], T], timeout: Optional[float] = None) -> T:
        """
        Execute a function in the worker thread and return result.

        Args:
            func: Function to execute (no arguments).
            timeout: Maximum time to wait for result (None = infinite).

        Returns:
            Result of function execution.

        Raises:
            WorkerNotRunningError: If worker thread is not running.
            TimeoutError: If timeout is exceeded.
            Exception: Any exception raised by the function.
        """
        if not self._initialized:
            raise WorkerNotRunningError("Worker thread not initialized")

        if threading.current_thread() is self._thread:
            return func()

        cmd = Command(
            id=str(uuid.uuid4()),
            func=func,
            result_event=threading.Event(),
        )

        self._queue.put(cmd)

        if not cmd.result_event.wait(timeout=timeout):
            raise TimeoutError(f"Command execution timeout after {timeout}s")

        if cmd.error is not None:
            raise cmd.error

        return cmd.result

    @property
    def is_running(self) -> bool:
        """True while the worker accepts commands."""
        return self._initialized

    def _worker_loop(self) -> None:
        """Main worker loop."""
        logger.debug("Worker thread started")
        self._ready_event.set()
        try:
            while not self._stop_event.is_set():
                try:
                    cmd = self._queue.get(timeout=0.1)
                except queue.Empty:
                    continue

                if cmd is None:  # Sentinel
                    logger.debug("Received sentinel, exiting worker loop")
                    break

                try:
                    cmd.result = cmd.func()
                except Exception as e:
                    logger.debug(f"Command {cmd.id} raised {type(e).__name__}: {e}")
                    cmd.error = e
                finally:
                    cmd.result_event.set()
                    self._queue.task_done()
        except Exception:
            logger.exception("Fatal error in worker thread")
        finally:
            self._fail_pending()
            logger.debug("Worker thread exiting")

    def _fail_pending(self) -> None:
        """Release callers still waiting on commands that will never run."""
        while True:
            try:
                cmd = self._queue.get_nowait()
            except queue.Empty:
                return
            if cmd is not None:
                cmd.error = WorkerNotRunningError("Worker thread stopped before command ran")
                cmd.result_event.set()
