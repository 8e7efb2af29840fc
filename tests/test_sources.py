"""Tests for playback sources and the source factory."""

import pytest
from tunequeue.core.exceptions import SourceKindNotRegisteredError, SourceLoadError
from tunequeue.core.models import PlaybackState, Song, SourceKind
from tunequeue.core.registry import SourceFactory
from tunequeue.sources import LocalSource, NullSource, RemoteSource, create_default_factory


def test_local_source_transport():
    """Test load, play, pause and stop on a local source."""
    source = LocalSource()
    song = Song("Track", "Artist", 120)

    source.load(song)
    assert source.song == song
    assert source.state == PlaybackState.STOPPED

    source.play()
    assert source.state == PlaybackState.PLAYING

    source.pause()
    assert source.state == PlaybackState.PAUSED

    source.play()
    assert source.state == PlaybackState.PLAYING

    source.stop()
    assert source.state == PlaybackState.STOPPED
    assert source.song is None


def test_invalid_transitions_do_not_raise():
    """Test play/pause/stop without a loaded song are ignored."""
    source = LocalSource()

    source.play()
    source.pause()
    source.stop()

    assert source.state == PlaybackState.STOPPED


def test_load_replaces_previous_song():
    """Test load() discards the previously loaded song and state."""
    source = RemoteSource()
    source.load(Song("First", "Artist", 10, SourceKind.REMOTE))
    source.play()

    second = Song("Second", "Artist", 10, SourceKind.REMOTE)
    source.load(second)

    assert source.song == second
    assert source.state == PlaybackState.STOPPED


def test_local_source_missing_file(tmp_path):
    """Test LocalSource rejects a path that does not exist."""
    source = LocalSource()
    song = Song("Missing", "Artist", 10, location=str(tmp_path / "missing.mp3"))

    with pytest.raises(SourceLoadError, match="File not found") as exc_info:
        source.load(song)

    assert exc_info.value.song == song
    assert source.song is None


def test_local_source_directory(tmp_path):
    """Test LocalSource rejects a directory."""
    with pytest.raises(SourceLoadError, match="Not a file"):
        LocalSource().load(Song("Dir", "Artist", 10, location=str(tmp_path)))


def test_local_source_existing_file(tmp_path):
    """Test LocalSource accepts an existing file."""
    path = tmp_path / "track.mp3"
    path.write_bytes(b"\x00" * 16)
    source = LocalSource()

    source.load(Song("Track", "Artist", 10, location=str(path)))

    assert source.song is not None


@pytest.mark.parametrize(
    "uri",
    ["https://cdn.example.com/a.mp3", "http://example.com/b", "spotify:track:4uLU6hMCjMI75M1A2tKUQC"],
)
def test_remote_source_accepts_supported_uris(uri):
    """Test RemoteSource accepts http(s) and spotify URIs."""
    source = RemoteSource()
    source.load(Song("Stream", "Artist", 10, SourceKind.REMOTE, uri))
    assert source.song.location == uri


@pytest.mark.parametrize("uri", ["ftp://example.com/a.mp3", "/music/a.mp3"])
def test_remote_source_rejects_unsupported_uris(uri):
    """Test RemoteSource rejects other schemes."""
    with pytest.raises(SourceLoadError, match="Unsupported URI scheme"):
        RemoteSource().load(Song("Stream", "Artist", 10, SourceKind.REMOTE, uri))


def test_null_source_records_calls():
    """Test NullSource records calls and can simulate failures."""
    journal = []
    source = NullSource(journal=journal)
    source.load(Song("Track", "Artist", 10))
    source.play()
    source.stop()

    assert source.calls == ["load", "play", "stop"]
    assert [(method, title) for _, method, title in journal] == [
        ("load", "Track"),
        ("play", "Track"),
        ("stop", "Track"),
    ]

    with pytest.raises(SourceLoadError, match="simulated failure"):
        NullSource(fail_load=True).load(Song("Track", "Artist", 10))


def test_factory_creates_fresh_instances():
    """Test each create_source() call returns a new instance."""
    factory = create_default_factory()

    first = factory.create_source(SourceKind.LOCAL)
    second = factory.create_source(SourceKind.LOCAL)

    assert isinstance(first, LocalSource)
    assert first is not second
    assert isinstance(factory.create_source(SourceKind.REMOTE), RemoteSource)


def test_default_factory_is_exhaustive():
    """Test the default factory covers every source kind."""
    factory = create_default_factory()
    assert factory.missing_kinds() == []
    assert set(factory.kinds()) == set(SourceKind)


def test_factory_unknown_kind():
    """Test an unregistered kind raises."""
    factory = SourceFactory()
    factory.register(SourceKind.LOCAL, LocalSource)

    assert factory.missing_kinds() == [SourceKind.REMOTE]
    with pytest.raises(SourceKindNotRegisteredError):
        factory.create_source(SourceKind.REMOTE)


def test_factory_register_overrides():
    """Test registering a kind again replaces its constructor."""
    factory = create_default_factory()
    factory.register(SourceKind.REMOTE, NullSource)

    assert isinstance(factory.create_source(SourceKind.REMOTE), NullSource)
