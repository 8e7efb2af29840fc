"""Protocol interfaces for playback abstraction."""

from typing import Callable, Optional, Protocol, Sequence, TypeVar
from tunequeue.core.models import PlaybackState, Song
from tunequeue.core.observable import StateChannel

T = TypeVar("T")


class IPlaybackSource(Protocol):
    """
    Interface for a playback backend bound to one song at a time.

    A fresh instance is created for every track change. Only load() may
    raise, and only SourceLoadError.
    """

    def load(self, song: Song) -> None:
        """
        Prepare the backend to play a song, replacing anything loaded before.

        Raises:
            SourceLoadError: If the song cannot be prepared.
        """
        ...

    def play(self) -> None:
        """Begin or resume playback of the loaded song."""
        ...

    def pause(self) -> None:
        """Suspend playback."""
        ...

    def stop(self) -> None:
        """Terminate playback and release backend resources."""
        ...

    @property
    def state(self) -> PlaybackState:
        """Current transport state."""
        ...

    @property
    def song(self) -> Optional[Song]:
        """Loaded song, if any."""
        ...


class ITicker(Protocol):
    """Interface for the periodic timer driving playback progress."""

    def start(self, callback: Callable[[], None]) -> None:
        """Start firing callback periodically, cancelling any previous run."""
        ...

    def cancel(self) -> None:
        """Stop firing. Safe to call when not running."""
        ...

    @property
    def is_active(self) -> bool:
        """True while the ticker is running."""
        ...


class ICommandWorker(Protocol):
    """Interface for the thread that serializes player commands."""

    def start(self) -> None:
        """Start the worker thread."""
        ...

    def stop(self) -> None:
        """Stop the worker thread (blocks until done)."""
        ...

    def execute(self, func: Callable[[], T], timeout: Optional[float] = None) -> T:
        """Execute a function in the worker thread and return its result."""
        ...


class IPlaybackController(Protocol):
    """Command and state surface shared by PlaybackEngine and MusicPlayer."""

    song_channel: StateChannel[Optional[Song]]
    playing_channel: StateChannel[bool]
    progress_channel: StateChannel[float]

    def load_queue(self, songs: Sequence[Song]) -> None:
        ...

    def play(self) -> None:
        ...

    def pause(self) -> None:
        ...

    def skip(self) -> None:
        ...

    def previous(self) -> None:
        ...
