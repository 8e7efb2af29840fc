"""Data models and configuration classes."""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional
from tunequeue.core.exceptions import InvalidSongError
from tunequeue.utils.validate import validate_duration, validate_positive


class SourceKind(Enum):
    """Tag selecting which playback source plays a song."""

    LOCAL = "local"
    REMOTE = "remote"


class PlaybackState(Enum):
    """Transport state of a single playback source."""

    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED = "paused"


class PlayerStatus(Enum):
    """State of the playback engine, derived from its fields."""

    EMPTY = "empty"
    PAUSED = "paused"
    PLAYING = "playing"
    FINISHED = "finished"


class EndOfQueuePolicy(Enum):
    """What the engine does when the last song reaches its duration."""

    STOP = "stop"
    """Stop playback and report PlayerStatus.FINISHED."""

    STALL = "stall"
    """Keep playing with progress pinned at the song duration."""


@dataclass(frozen=True)
class Song:
    """Immutable description of a playable track."""

    title: str
    """Track title."""

    artist: str
    """Track artist."""

    duration: float
    """Length in seconds (positive)."""

    source_kind: SourceKind = SourceKind.LOCAL
    """Backend used to play this song."""

    location: Optional[str] = None
    """File path (local) or URI (remote), if known."""

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    """Opaque unique identifier, fixed at construction."""

    def __post_init__(self):
        try:
            duration = validate_duration(self.duration)
        except (TypeError, ValueError) as e:
            raise InvalidSongError(f"Invalid song '{self.title}': {e}") from e
        if not isinstance(self.source_kind, SourceKind):
            raise InvalidSongError(
                f"Invalid song '{self.title}': unknown source kind {self.source_kind!r}"
            )
        object.__setattr__(self, "duration", duration)

    def __str__(self) -> str:
        return f"{self.artist} - {self.title}"


@dataclass
class PlayerConfig:
    """Configuration for the playback engine."""

    tick_interval: float = 1.0
    """Seconds of wall-clock time between progress ticks. Default: 1.0."""

    tick_step: float = 1.0
    """Progress added by each tick, in seconds. Default: 1.0."""

    end_of_queue: EndOfQueuePolicy = EndOfQueuePolicy.STOP
    """Behavior when the last song ends. Default: STOP."""

    stop_outgoing_source: bool = True
    """Call stop() on the previous source when the track changes."""

    strict: bool = False
    """Raise on ignored commands (empty queue, end of queue) instead of logging."""

    command_timeout: Optional[float] = 5.0
    """Seconds a command waits for the worker thread (None = forever)."""

    def __post_init__(self):
        self.tick_interval = validate_positive(self.tick_interval, "tick_interval")
        self.tick_step = validate_positive(self.tick_step, "tick_step")
