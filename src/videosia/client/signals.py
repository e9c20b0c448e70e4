"""Observer registry for payload-free application signals."""

import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class Signal:
    """A named channel that notifies subscribed listeners."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener and return a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            self.unsubscribe(listener)

        return unsubscribe

    def unsubscribe(self, listener: Listener) -> None:
        """Remove a listener if it is registered."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self) -> None:
        """Notify every listener in subscription order."""
        logger.debug("Signal emitted: %s", self.name)
        for listener in list(self._listeners):
            listener()

    def __len__(self) -> int:
        return len(self._listeners)
