"""Observable state channels for publishing player state changes."""

from typing import Callable, Generic, List, TypeVar
from tunequeue.utils.log import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class Subscription:
    """Handle returned by StateChannel.subscribe()."""

    def __init__(self, channel: "StateChannel", callback: Callable):
        self._channel = channel
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Stop receiving values. Safe to call multiple times."""
        if not self._active:
            return
        self._active = False
        self._channel._remove(self._callback)


class StateChannel(Generic[T]):
    """
    A named value that notifies subscribers every time it changes.

    Values are delivered synchronously, in subscription order, on the thread
    that publishes them. Publishing a value equal to the current one is
    ignored.
    """

    def __init__(self, name: str, initial: T):
        self.name = name
        self._value = initial
        self._subscribers: List[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        """Last published value."""
        return self._value

    def subscribe(self, callback: Callable[[T], None], replay: bool = True) -> Subscription:
        """
        Register a callback for value changes.

        Args:
            callback: Called with each new value.
            replay: Also call it immediately with the current value.

        Returns:
            Subscription that can be cancelled.
        """
        self._subscribers.append(callback)
        if replay:
            self._deliver(callback, self._value)
        return Subscription(self, callback)

    def _publish(self, value: T) -> bool:
        """
        Store a new value and notify subscribers if it changed.

        Returns:
            True if subscribers were notified.
        """
        if value == self._value:
            return False
        self._value = value
        logger.debug(f"{self.name} -> {value!r}")
        for callback in list(self._subscribers):
            self._deliver(callback, value)
        return True

    def _deliver(self, callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception:
            # A failing subscriber must not break state publication
            logger.exception(f"Error in {self.name} subscriber")

    def _remove(self, callback: Callable[[T], None]) -> None:
        try:
            self._subscribers.remove(callback)
        except ValueError:
            pass

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    def __repr__(self) -> str:
        return f"StateChannel({self.name}={self._value!r})"
