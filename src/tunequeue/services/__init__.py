"""Services layer for playback orchestration."""

from tunequeue.services.engine_lifecycle import EngineLifecycleService
from tunequeue.services.playback import PlaybackEngine

__all__ = ["EngineLifecycleService", "PlaybackEngine"]
