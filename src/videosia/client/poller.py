"""Background gallery polling with new-video notifications."""

import asyncio
import logging
from collections.abc import Callable

from videosia.client.api import DashboardApi
from videosia.client.errors import DashboardError
from videosia.client.models import Session
from videosia.client.notifications import NotificationCenter

logger = logging.getLogger(__name__)

NEW_VIDEO_MESSAGE = "Novo vídeo chegou na galeria! 🎉"


class GalleryPoller:
    """Re-fetches the gallery periodically and announces new videos."""

    def __init__(  # noqa: PLR0913
        self,
        api: DashboardApi,
        session_provider: Callable[[], Session | None],
        notifications: NotificationCenter,
        interval_seconds: float = 15,
        notification_seconds: float = 5,
    ) -> None:
        self.api = api
        self.session_provider = session_provider
        self.notifications = notifications
        self.interval_seconds = interval_seconds
        self.notification_seconds = notification_seconds
        self.last_count = 0
        self.generation = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Poll immediately and then at a fixed interval."""
        self.stop()
        self.generation += 1
        self.last_count = 0
        self._task = asyncio.create_task(self._run(self.generation))
        logger.info("Gallery polling started", extra={"generation": self.generation})

    def stop(self) -> None:
        """Cancel polling and discard responses still in flight."""
        self.generation += 1
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def poll_once(self, generation: int | None = None) -> None:
        """Fetch the gallery once and notify when it grew."""
        generation = self.generation if generation is None else generation
        session = self.session_provider()
        if session is None:
            return
        try:
            videos = await self.api.list_gallery(session.token)
        except DashboardError:
            logger.exception("Background gallery poll failed")
            return
        if generation != self.generation:
            logger.debug("Discarding stale gallery poll result")
            return

        count = len(videos)
        if self.last_count > 0 and count > self.last_count:
            self.notifications.show(
                "success", NEW_VIDEO_MESSAGE, clear_after=self.notification_seconds
            )
        self.last_count = count

    async def _run(self, generation: int) -> None:
        while generation == self.generation and self.session_provider() is not None:
            try:
                await self.poll_once(generation)
            except Exception:
                # A single bad tick must not end polling.
                logger.exception("Unexpected gallery poll failure")
            await asyncio.sleep(self.interval_seconds)
