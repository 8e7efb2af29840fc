"""Presentation adapter over a playback controller."""

from typing import Callable, List, Optional
from tunequeue.core.interfaces import IPlaybackController
from tunequeue.core.models import Song
from tunequeue.core.observable import Subscription

NO_SONG_TITLE = "No song"


class PlaybackViewModel:
    """
    Adapts player state channels to display-ready values.

    Works with a MusicPlayer or a bare PlaybackEngine. Values are updated on
    whatever thread publishes them; on_change callbacks run there too.
    """

    def __init__(self, controller: IPlaybackController):
        self._controller = controller
        self.song_title = NO_SONG_TITLE
        self.is_playing = False
        self.progress = 0.0
        self._duration: Optional[float] = None
        self._listeners: List[Callable[["PlaybackViewModel"], None]] = []
        self._subscriptions: List[Subscription] = [
            controller.song_channel.subscribe(self._on_song),
            controller.playing_channel.subscribe(self._on_playing),
            controller.progress_channel.subscribe(self._on_progress),
        ]

    @property
    def progress_fraction(self) -> float:
        """Progress through the current song in [0.0, 1.0], for a slider."""
        if not self._duration:
            return 0.0
        return min(max(self.progress / self._duration, 0.0), 1.0)

    @property
    def play_button_label(self) -> str:
        return "Pause" if self.is_playing else "Play"

    def on_change(self, callback: Callable[["PlaybackViewModel"], None]) -> None:
        """Register a callback invoked with the view model after each update."""
        self._listeners.append(callback)

    def play(self) -> None:
        self._controller.play()

    def pause(self) -> None:
        self._controller.pause()

    def toggle_play(self) -> None:
        if self.is_playing:
            self._controller.pause()
        else:
            self._controller.play()

    def skip(self) -> None:
        self._controller.skip()

    def previous(self) -> None:
        self._controller.previous()

    def close(self) -> None:
        """Stop listening to the controller."""
        for subscription in self._subscriptions:
            subscription.cancel()
        self._subscriptions.clear()
        self._listeners.clear()

    def _on_song(self, song: Optional[Song]) -> None:
        self.song_title = song.title if song is not None else NO_SONG_TITLE
        self._duration = song.duration if song is not None else None
        self._notify()

    def _on_playing(self, playing: bool) -> None:
        self.is_playing = playing
        self._notify()

    def _on_progress(self, progress: float) -> None:
        self.progress = progress
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
