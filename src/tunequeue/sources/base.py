"""Shared transport logic for stub playback sources."""

from typing import Optional
from tunequeue.core.interfaces import IPlaybackSource
from tunequeue.core.models import PlaybackState, Song
from tunequeue.utils.log import get_logger

logger = get_logger(__name__)


class StubSource(IPlaybackSource):
    """
    Playback source that tracks transport state without producing audio.

    Subclasses validate songs in _prepare() and may raise SourceLoadError
    from it. play(), pause() and stop() never raise: invalid transitions are
    logged and ignored.
    """

    label = "stub"

    def __init__(self):
        self._song: Optional[Song] = None
        self._state = PlaybackState.STOPPED

    @property
    def song(self) -> Optional[Song]:
        """Loaded song."""
        return self._song

    @property
    def state(self) -> PlaybackState:
        """Current transport state."""
        return self._state

    def load(self, song: Song) -> None:
        """Load a song, replacing anything previously loaded."""
        self._song = None
        self._state = PlaybackState.STOPPED
        self._prepare(song)
        self._song = song
        logger.info(f"Loading {self.label} song: {song.title}")

    def play(self) -> None:
        """Start or resume playback."""
        if self._song is None:
            logger.warning(f"{type(self).__name__}: play() with no song loaded")
            return
        self._state = PlaybackState.PLAYING
        logger.info(f"Playing {self.label} song: {self._song.title}")

    def pause(self) -> None:
        """Pause playback."""
        if self._state != PlaybackState.PLAYING:
            logger.debug(f"{type(self).__name__}: pause() ignored in state {self._state.value}")
            return
        self._state = PlaybackState.PAUSED
        logger.info(f"Paused {self.label} song: {self._song.title}")

    def stop(self) -> None:
        """Stop playback and release the loaded song."""
        if self._song is not None:
            logger.info(f"Stopped {self.label} song: {self._song.title}")
        self._state = PlaybackState.STOPPED
        self._song = None

    def _prepare(self, song: Song) -> None:
        """Validate a song before it is loaded."""
        pass
