"""Playback source implementations and the default factory."""

from tunequeue.core.models import SourceKind
from tunequeue.core.registry import SourceFactory
from tunequeue.sources.base import StubSource
from tunequeue.sources.local import LocalSource
from tunequeue.sources.null_source import NullSource
from tunequeue.sources.remote import RemoteSource


def create_default_factory() -> SourceFactory:
    """
    Create a factory with a source registered for every SourceKind.

    Returns:
        SourceFactory mapping LOCAL to LocalSource and REMOTE to RemoteSource.
    """
    factory = SourceFactory()
    factory.register(SourceKind.LOCAL, LocalSource)
    factory.register(SourceKind.REMOTE, RemoteSource)
    return factory


__all__ = [
    "StubSource",
    "LocalSource",
    "RemoteSource",
    "NullSource",
    "create_default_factory",
]
