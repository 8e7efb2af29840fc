"""Playback source for songs delivered by a streaming service."""

from urllib.parse import urlparse
from tunequeue.core.exceptions import SourceLoadError
from tunequeue.core.models import Song
from tunequeue.sources.base import StubSource

SUPPORTED_SCHEMES = ("http", "https", "spotify")


class RemoteSource(StubSource):
    """
    Remote streaming source (stub).

    Only the song URI is validated. No network connection is made; a real
    client would do its I/O asynchronously behind the same interface.
    """

    label = "remote"

    def _prepare(self, song: Song) -> None:
        if song.location is None:
            return
        scheme = urlparse(song.location).scheme.lower()
        if scheme not in SUPPORTED_SCHEMES:
            raise SourceLoadError(
                f"Unsupported URI scheme '{scheme or '<none>'}' in {song.location}", song
            )
