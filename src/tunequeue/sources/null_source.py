"""Null source for testing (records calls, no audio output)."""

from typing import List, Optional
from tunequeue.core.exceptions import SourceLoadError
from tunequeue.core.models import Song
from tunequeue.sources.base import StubSource
from tunequeue.utils.log import get_logger

logger = get_logger(__name__)


class NullSource(StubSource):
    """Null source implementation for testing."""

    label = "null"

    def __init__(self, fail_load: bool = False, journal: Optional[List[tuple]] = None):
        """
        Initialize NullSource.

        Args:
            fail_load: Raise SourceLoadError from every load().
            journal: Optional list shared between sources; every call is
                appended to it as (source, method, song_title).
        """
        super().__init__()
        self.fail_load = fail_load
        self.calls: List[str] = []
        self._journal = journal

    def load(self, song: Song) -> None:
        self._record("load", song)
        super().load(song)

    def play(self) -> None:
        self._record("play")
        super().play()

    def pause(self) -> None:
        self._record("pause")
        super().pause()

    def stop(self) -> None:
        self._record("stop")
        super().stop()

    def _prepare(self, song: Song) -> None:
        if self.fail_load:
            raise SourceLoadError("simulated failure", song)

    def _record(self, method: str, song: Optional[Song] = None) -> None:
        self.calls.append(method)
        if self._journal is not None:
            current = song or self._song
            self._journal.append((self, method, current.title if current else None))
        logger.debug(f"NullSource {id(self):#x}: {method}")
