"""MusicPlayer - main public API."""

from typing import Callable, Optional, Sequence, Tuple, TypeVar
from tunequeue.concurrency.ticker import ThreadTicker
from tunequeue.concurrency.worker import CommandWorker
from tunequeue.core.exceptions import PlayerError
from tunequeue.core.interfaces import ICommandWorker, IPlaybackSource, ITicker
from tunequeue.core.models import PlayerConfig, PlayerStatus, Song
from tunequeue.core.observable import StateChannel
from tunequeue.core.registry import SourceFactory
from tunequeue.services.engine_lifecycle import EngineLifecycleService
from tunequeue.services.playback import PlaybackEngine
from tunequeue.sources import create_default_factory
from tunequeue.utils.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class MusicPlayer:
    """
    Main music player facade.

    Owns one playback context: a PlaybackEngine, the worker thread that
    serializes its commands, and the ticker driving progress. Create one per
    application and pass it to whatever needs it.
    """

    def __init__(
        self,
        config: Optional[PlayerConfig] = None,
        factory: Optional[SourceFactory] = None,
        ticker: Optional[ITicker] = None,
        worker: Optional[ICommandWorker] = None,
    ):
        """
        Initialize MusicPlayer.

        Args:
            config: Player configuration.
            factory: Source factory (default: LocalSource and RemoteSource).
            ticker: Progress ticker (default: ThreadTicker at config.tick_interval).
            worker: Command worker (default: CommandWorker).
        """
        self._config = config or PlayerConfig()
        self._worker = worker or CommandWorker()
        self._engine = PlaybackEngine(
            factory or create_default_factory(),
            ticker or ThreadTicker(self._config.tick_interval),
            self._config,
            dispatch=self._dispatch_tick,
        )
        self._lifecycle_service = EngineLifecycleService(
            self._worker, on_shutdown=self._engine.close
        )

    def start(self) -> None:
        """Start the player."""
        self._lifecycle_service.start()

    def shutdown(self) -> None:
        """Stop playback and free all resources."""
        self._lifecycle_service.shutdown()

    # Commands

    def load_queue(self, songs: Sequence[Song]) -> None:
        """
        Replace the queue and select its first song.

        Raises:
            PlayerNotStartedError: If the player is not started.
            EmptyQueueError: In strict mode, if songs is empty.
        """
        songs = tuple(songs)
        self._execute(lambda: self._engine.load_queue(songs))

    def play(self) -> None:
        """
        Start or resume playback.

        Raises:
            PlayerNotStartedError: If the player is not started.
        """
        self._execute(self._engine.play)

    def pause(self) -> None:
        """
        Pause playback.

        Raises:
            PlayerNotStartedError: If the player is not started.
        """
        self._execute(self._engine.pause)

    def stop(self) -> None:
        """
        Stop playback and rewind the current song.

        Raises:
            PlayerNotStartedError: If the player is not started.
        """
        self._execute(self._engine.stop)

    def skip(self) -> None:
        """
        Skip to the next song.

        Raises:
            PlayerNotStartedError: If the player is not started.
            EndOfQueueError: In strict mode, at the last song.
        """
        self._execute(self._engine.skip)

    def previous(self) -> None:
        """
        Go back to the previous song.

        Raises:
            PlayerNotStartedError: If the player is not started.
            EndOfQueueError: In strict mode, at the first song.
        """
        self._execute(self._engine.previous)

    # State

    @property
    def song_channel(self) -> StateChannel[Optional[Song]]:
        return self._engine.song_channel

    @property
    def playing_channel(self) -> StateChannel[bool]:
        return self._engine.playing_channel

    @property
    def progress_channel(self) -> StateChannel[float]:
        return self._engine.progress_channel

    @property
    def current_song(self) -> Optional[Song]:
        return self._engine.current_song

    @property
    def is_playing(self) -> bool:
        return self._engine.is_playing

    @property
    def progress(self) -> float:
        return self._engine.progress

    @property
    def status(self) -> PlayerStatus:
        return self._engine.status

    @property
    def queue(self) -> Tuple[Song, ...]:
        return self._engine.queue

    @property
    def current_index(self) -> Optional[int]:
        return self._engine.current_index

    @property
    def source(self) -> Optional[IPlaybackSource]:
        return self._engine.source

    @property
    def last_error(self) -> Optional[PlayerError]:
        return self._engine.last_error

    @property
    def config(self) -> PlayerConfig:
        return self._config

    def _execute(self, func: Callable[[], T]) -> T:
        worker = self._lifecycle_service.worker
        return worker.execute(func, timeout=self._config.command_timeout)

    def _dispatch_tick(self, func: Callable[[], None]) -> None:
        # Raw worker: raises WorkerNotRunningError after shutdown, which ends the ticker
        self._worker.execute(func, timeout=self._config.command_timeout)

    def __enter__(self):
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.shutdown()
