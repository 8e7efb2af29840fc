"""
tunequeue - queue-driven music playback core.

This package provides a playback engine that moves through a queue of songs,
binds a pluggable playback source to each one, advances progress on a
periodic tick, and publishes its state on observable channels.
"""

from tunequeue.api.player import MusicPlayer
from tunequeue.api.view_model import PlaybackViewModel
from tunequeue.core.models import (
    EndOfQueuePolicy,
    PlaybackState,
    PlayerConfig,
    PlayerStatus,
    Song,
    SourceKind,
)
from tunequeue.core.exceptions import (
    PlayerError,
    PlayerNotStarted,
    EmptyQueue,
    EndOfQueue,
    SourceLoadError,
    InvalidSongError,
)
from tunequeue.core.registry import SourceFactory
from tunequeue.services.playback import PlaybackEngine
from tunequeue.sources import LocalSource, RemoteSource, create_default_factory

__version__ = "0.1.0"

__all__ = [
    "MusicPlayer",
    "PlaybackViewModel",
    "PlaybackEngine",
    "SourceFactory",
    "LocalSource",
    "RemoteSource",
    "create_default_factory",
    "Song",
    "SourceKind",
    "PlaybackState",
    "PlayerStatus",
    "EndOfQueuePolicy",
    "PlayerConfig",
    "PlayerError",
    "PlayerNotStarted",
    "EmptyQueue",
    "EndOfQueue",
    "SourceLoadError",
    "InvalidSongError",
]
