"""Exception classes for tunequeue."""


class PlayerError(Exception):
    """Base exception for playback errors."""
    pass


class PlayerNotStartedError(PlayerError):
    """Raised when player commands are issued before start()."""
    pass


class EmptyQueueError(PlayerError):
    """Raised in strict mode when a queue with no songs is loaded."""
    pass


class EndOfQueueError(PlayerError):
    """Raised in strict mode when skip()/previous() would leave the queue."""
    pass


class SourceKindNotRegisteredError(PlayerError):
    """Raised when the factory has no constructor for a source kind."""
    pass


class WorkerNotRunningError(PlayerError, RuntimeError):
    """Raised when a command is sent to a worker that is not running."""
    pass


class InvalidSongError(PlayerError, ValueError):
    """Raised when a song is constructed with invalid attributes."""
    pass


class SourceLoadError(PlayerError):
    """Raised by a playback source that cannot prepare a song."""

    def __init__(self, message: str, song=None):
        self.message = message
        self.song = song
        if song is not None:
            super().__init__(f"Cannot load '{song.title}': {message}")
        else:
            super().__init__(f"Cannot load song: {message}")


# Short aliases
EmptyQueue = EmptyQueueError
EndOfQueue = EndOfQueueError
PlayerNotStarted = PlayerNotStartedError
