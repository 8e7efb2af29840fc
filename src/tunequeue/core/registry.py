"""Source factory mapping source kinds to playback source constructors."""

from typing import Callable, Dict, List
from tunequeue.core.exceptions import SourceKindNotRegisteredError
from tunequeue.core.interfaces import IPlaybackSource
from tunequeue.core.models import SourceKind
from tunequeue.utils.log import get_logger

logger = get_logger(__name__)

SourceConstructor = Callable[[], IPlaybackSource]


class SourceFactory:
    """
    Factory for playback sources.

    Responsibilities:
    - Map each SourceKind to a source constructor
    - Create a brand-new source on every request (no caching)
    - Allow new backends to be plugged in via register()
    """

    def __init__(self):
        """Initialize an empty factory."""
        self._constructors: Dict[SourceKind, SourceConstructor] = {}

    def register(self, kind: SourceKind, constructor: SourceConstructor) -> None:
        """
        Register a constructor for a source kind.

        Args:
            kind: Source kind tag.
            constructor: Zero-argument callable returning a new source.
        """
        if kind in self._constructors:
            logger.warning(
                f"Source kind {kind.value} already registered, "
                f"overwriting with {getattr(constructor, '__name__', constructor)!s}"
            )
        self._constructors[kind] = constructor
        logger.debug(f"Registered source for kind {kind.value}")

    def create_source(self, kind: SourceKind) -> IPlaybackSource:
        """
        Create a new playback source.

        Args:
            kind: Source kind of the song to be played.

        Returns:
            A fresh source instance.

        Raises:
            SourceKindNotRegisteredError: If no constructor is registered.
        """
        constructor = self._constructors.get(kind)
        if constructor is None:
            raise SourceKindNotRegisteredError(f"No source registered for kind: {kind}")
        source = constructor()
        logger.debug(f"Created {type(source).__name__} for kind {kind.value}")
        return source

    def kinds(self) -> List[SourceKind]:
        """
        Get registered source kinds.

        Returns:
            List of kinds with a constructor.
        """
        return list(self._constructors.keys())

    def missing_kinds(self) -> List[SourceKind]:
        """
        Get source kinds with no constructor.

        Returns:
            List of unregistered kinds, in enum order.
        """
        return [kind for kind in SourceKind if kind not in self._constructors]
