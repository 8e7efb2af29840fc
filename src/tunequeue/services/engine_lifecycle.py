"""Service for managing player lifecycle."""

from typing import Callable, Optional
from tunequeue.core.exceptions import PlayerNotStartedError
from tunequeue.core.interfaces import ICommandWorker
from tunequeue.concurrency.worker import CommandWorker
from tunequeue.utils.log import get_logger

logger = get_logger(__name__)


class EngineLifecycleService:
    """
    Service for managing player lifecycle.

    Responsibilities:
    - Start and stop the command worker thread
    - Run engine teardown on the worker before it stops
    """

    def __init__(
        self,
        worker: Optional[ICommandWorker] = None,
        on_shutdown: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize lifecycle service.

        Args:
            worker: Optional worker implementation (for testing).
            on_shutdown: Teardown run in the worker thread during shutdown.
        """
        self._worker: ICommandWorker = worker or CommandWorker()
        self._on_shutdown = on_shutdown
        self._started = False

    def start(self) -> None:
        """Start the worker thread. Does nothing if already started."""
        if self._started:
            logger.warning("Player already started")
            return

        self._worker.start()
        self._started = True
        logger.info("Player started")

    def shutdown(self) -> None:
        """
        Run teardown and stop the worker thread.

        This method is idempotent and safe to call multiple times.
        """
        if not self._started:
            logger.debug("Player not started, skipping shutdown")
            return

        logger.info("Shutting down player...")
        self._started = False

        if self._on_shutdown is not None:
            try:
                self._worker.execute(self._on_shutdown, timeout=5.0)
            except Exception as e:
                logger.warning(f"Error during engine teardown: {e}")

        try:
            self._worker.stop()
        except Exception as e:
            logger.warning(f"Error stopping worker thread: {e}")

        logger.info("Player shut down")

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def worker(self) -> ICommandWorker:
        """
        Get worker instance.

        Raises:
            PlayerNotStartedError: If the player is not started.
        """
        if not self._started:
            raise PlayerNotStartedError("Player must be started before issuing commands")
        return self._worker
