"""Playback source for songs stored on the local filesystem."""

from pathlib import Path
from tunequeue.core.exceptions import SourceLoadError
from tunequeue.core.models import Song
from tunequeue.sources.base import StubSource


class LocalSource(StubSource):
    """Local file source. Checks that the file exists; does not decode it."""

    label = "local"

    def _prepare(self, song: Song) -> None:
        if song.location is None:
            return
        path = Path(song.location).expanduser()
        if not path.exists():
            raise SourceLoadError(f"File not found: {path}", song)
        if not path.is_file():
            raise SourceLoadError(f"Not a file: {path}", song)
