"""Queue-driven playback state machine."""

from typing import Callable, Optional, Sequence, Tuple, TypeVar
from tunequeue.core.exceptions import EmptyQueueError, EndOfQueueError, PlayerError, SourceLoadError
from tunequeue.core.interfaces import IPlaybackSource, ITicker
from tunequeue.core.models import EndOfQueuePolicy, PlayerConfig, PlayerStatus, Song
from tunequeue.core.observable import StateChannel
from tunequeue.core.registry import SourceFactory
from tunequeue.utils.log import get_logger
from tunequeue.utils.validate import clamp_progress

logger = get_logger(__name__)

T = TypeVar("T")


def _call_inline(func: Callable[[], T]) -> T:
    return func()


class PlaybackEngine:
    """
    Playback engine owning the queue, the current source and progress.

    Responsibilities:
    - Move through the queue (load_queue, skip, previous, auto-advance)
    - Bind a fresh source from the factory on every track change
    - Drive progress from the ticker while playing
    - Publish current song, playing flag and progress on state channels

    The engine is not thread-safe. Callers that use it from several threads
    must serialize commands, as MusicPlayer does with its worker thread.
    """

    def __init__(
        self,
        factory: SourceFactory,
        ticker: ITicker,
        config: Optional[PlayerConfig] = None,
        dispatch: Optional[Callable[[Callable[[], None]], None]] = None,
    ):
        """
        Initialize playback engine.

        Args:
            factory: Factory creating a source for each song's kind.
            ticker: Periodic timer driving progress.
            config: Engine configuration.
            dispatch: Runs tick callbacks in the engine's execution context
                (default: call directly on the ticker's thread).
        """
        self._factory = factory
        self._ticker = ticker
        self._config = config or PlayerConfig()
        self._dispatch = dispatch or _call_inline

        self.song_channel: StateChannel[Optional[Song]] = StateChannel("current_song", None)
        self.playing_channel: StateChannel[bool] = StateChannel("is_playing", False)
        self.progress_channel: StateChannel[float] = StateChannel("progress", 0.0)

        self._queue: Tuple[Song, ...] = ()
        self._index: Optional[int] = None
        self._source: Optional[IPlaybackSource] = None
        self._tick_generation = 0
        self._finished = False
        self._last_error: Optional[PlayerError] = None

    # Commands

    def load_queue(self, songs: Sequence[Song]) -> None:
        """
        Replace the queue and select its first song, paused at progress 0.

        Args:
            songs: Songs in playback order.

        Raises:
            EmptyQueueError: In strict mode, if songs is empty. The engine is
                left empty either way.
            SourceLoadError: In strict mode, if the first song cannot be loaded.
        """
        songs = tuple(songs)
        self._cancel_ticker()
        self._release_source()
        self.playing_channel._publish(False)
        self._finished = False
        self._last_error = None

        if not songs:
            self._queue = ()
            self._index = None
            self.song_channel._publish(None)
            self.progress_channel._publish(0.0)
            logger.warning("load_queue() called with no songs; player is empty")
            if self._config.strict:
                raise EmptyQueueError("Cannot load an empty queue")
            return

        self._queue = songs
        self._index = 0
        logger.info(f"Loaded queue of {len(songs)} songs")
        self._load_current()

    def play(self) -> None:
        """
        Start or resume playback of the current song.

        No-op when the queue is empty or playback is already running.
        """
        if self.current_song is None:
            logger.debug("play() ignored: no current song")
            return
        if self.is_playing:
            logger.debug("play() ignored: already playing")
            return
        if self._finished or self._source is None:
            # Finished, stopped or failed to load: bind a fresh source from 0
            self._load_current()
        self._start_playback()

    def pause(self) -> None:
        """Pause playback, keeping progress. No-op unless playing."""
        if not self.is_playing:
            logger.debug("pause() ignored: not playing")
            return
        self._cancel_ticker()
        if self._source is not None:
            self._source.pause()
        self.playing_channel._publish(False)
        logger.info(f"Paused at {self.progress:.1f}s")

    def stop(self) -> None:
        """Stop playback, release the source and rewind the current song."""
        self._cancel_ticker()
        self._release_source()
        self.playing_channel._publish(False)
        self.progress_channel._publish(0.0)
        self._finished = False

    def skip(self) -> None:
        """
        Advance to the next song and play it.

        Raises:
            EndOfQueueError: In strict mode, at the last song.
        """
        self._move(1)

    def previous(self) -> None:
        """
        Go back to the previous song and play it.

        Raises:
            EndOfQueueError: In strict mode, at the first song.
        """
        self._move(-1)

    def close(self) -> None:
        """Cancel the ticker and release the current source."""
        self._cancel_ticker()
        self._release_source()
        self.playing_channel._publish(False)
        logger.debug("Playback engine closed")

    # State

    @property
    def current_song(self) -> Optional[Song]:
        return self.song_channel.value

    @property
    def is_playing(self) -> bool:
        return self.playing_channel.value

    @property
    def progress(self) -> float:
        return self.progress_channel.value

    @property
    def queue(self) -> Tuple[Song, ...]:
        return self._queue

    @property
    def current_index(self) -> Optional[int]:
        return self._index

    @property
    def source(self) -> Optional[IPlaybackSource]:
        """Source bound to the current song, if loaded."""
        return self._source

    @property
    def last_error(self) -> Optional[PlayerError]:
        """Most recent error swallowed by a command (cleared by load_queue)."""
        return self._last_error

    @property
    def status(self) -> PlayerStatus:
        if self.current_song is None:
            return PlayerStatus.EMPTY
        if self.is_playing:
            return PlayerStatus.PLAYING
        if self._finished:
            return PlayerStatus.FINISHED
        return PlayerStatus.PAUSED

    # Internals

    def _move(self, step: int) -> None:
        if self._index is None:
            logger.debug("Track change ignored: queue is empty")
            return
        target = self._index + step
        if not 0 <= target < len(self._queue):
            message = (
                "Already at the last song" if step > 0 else "Already at the first song"
            )
            logger.info(f"{message}; ignoring")
            if self._config.strict:
                raise EndOfQueueError(message)
            return
        self._index = target
        self._finished = False
        try:
            self._load_current()
        except SourceLoadError:
            # Nothing is bound to the new song, so playback cannot continue
            self._cancel_ticker()
            self.playing_channel._publish(False)
            raise
        self._start_playback()

    def _load_current(self) -> None:
        """Bind a fresh source to queue[index] and reset progress."""
        song = self._queue[self._index]
        self._release_source()
        self._finished = False

        source = self._factory.create_source(song.source_kind)
        error: Optional[SourceLoadError] = None
        try:
            source.load(song)
        except SourceLoadError as e:
            logger.error(f"Failed to load {song}: {e}")
            error = e
        else:
            self._source = source

        # Source is bound before publishing so subscribers may call play()
        self.song_channel._publish(song)
        self.progress_channel._publish(0.0)

        if error is not None:
            self._last_error = error
            if self._config.strict:
                raise error

    def _release_source(self) -> None:
        outgoing, self._source = self._source, None
        if outgoing is not None and self._config.stop_outgoing_source:
            outgoing.stop()

    def _start_playback(self) -> None:
        if self._source is None:
            logger.warning(f"Cannot play {self.current_song}: source not loaded")
            self._cancel_ticker()
            self.playing_channel._publish(False)
            return
        self._source.play()
        self.playing_channel._publish(True)
        self._start_ticker()
        logger.info(f"Playing {self.current_song}")

    def _start_ticker(self) -> None:
        self._cancel_ticker()
        generation = self._tick_generation
        self._ticker.start(lambda: self._dispatch(lambda: self._tick(generation)))

    def _cancel_ticker(self) -> None:
        # Ticks already queued for an older generation are dropped in _tick
        self._tick_generation += 1
        self._ticker.cancel()

    def _tick(self, generation: int) -> None:
        if generation != self._tick_generation or not self.is_playing:
            logger.debug("Dropping stale tick")
            return
        song = self.current_song
        progress = self.progress + self._config.tick_step
        if progress < song.duration:
            self.progress_channel._publish(progress)
            return

        self.progress_channel._publish(clamp_progress(progress, song.duration))
        if self._index + 1 < len(self._queue):
            logger.debug(f"{song} finished, advancing")
            self._move(1)
            return

        if self._config.end_of_queue == EndOfQueuePolicy.STALL:
            return
        logger.info("Reached end of queue")
        self._cancel_ticker()
        self._release_source()
        self._finished = True
        self.playing_channel._publish(False)
