"""Transient notification slot and submission cooldown."""

import asyncio
import logging

from videosia.client.models import Notification, NotificationKind
from videosia.client.signals import Signal

logger = logging.getLogger(__name__)


class NotificationCenter:
    """Holds at most one visible notification."""

    def __init__(self) -> None:
        self.current: Notification | None = None
        self.changed = Signal("notification_changed")
        self._expiry: asyncio.TimerHandle | None = None

    def show(
        self, kind: NotificationKind, message: str, clear_after: float | None = None
    ) -> Notification:
        """Replace the visible notification, optionally clearing it later."""
        self._cancel_expiry()
        notification = Notification(kind=kind, message=message)
        self.current = notification
        if clear_after is not None:
            loop = asyncio.get_running_loop()
            self._expiry = loop.call_later(clear_after, self._expire, notification)
        self.changed.emit()
        return notification

    def clear(self) -> None:
        """Hide the visible notification."""
        self._cancel_expiry()
        if self.current is None:
            return
        self.current = None
        self.changed.emit()

    def _expire(self, notification: Notification) -> None:
        self._expiry = None
        # A newer notification replaced this one.
        if self.current is not notification:
            return
        self.current = None
        self.changed.emit()

    def _cancel_expiry(self) -> None:
        if self._expiry is not None:
            self._expiry.cancel()
            self._expiry = None


class Cooldown:
    """Countdown that blocks new submissions for a number of ticks."""

    def __init__(self, tick_seconds: float = 1.0) -> None:
        self.tick_seconds = tick_seconds
        self.remaining = 0

    @property
    def active(self) -> bool:
        return self.remaining > 0

    def start(self, ticks: int) -> None:
        """Begin a countdown of the given length."""
        self.remaining = max(ticks, 0)

    def tick(self) -> None:
        """Advance the countdown by one tick."""
        if self.remaining > 0:
            self.remaining -= 1

    async def run(self) -> None:
        """Tick at a fixed period until the countdown reaches zero."""
        while self.active:
            await asyncio.sleep(self.tick_seconds)
            self.tick()
        logger.debug("Cooldown finished")
