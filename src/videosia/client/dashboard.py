"""Dashboard composition root for the client components."""

import logging
from dataclasses import dataclass

from videosia.client.api import DashboardApi, HttpxDashboardApi
from videosia.client.config import ClientSettings
from videosia.client.gallery import GalleryView
from videosia.client.highlights import HighlightsRequester
from videosia.client.models import Session
from videosia.client.notifications import Cooldown, NotificationCenter
from videosia.client.poller import GalleryPoller
from videosia.client.session import SessionStore
from videosia.client.signals import Signal
from videosia.client.storage import JsonFileStorage, KeyValueStorage
from videosia.client.submitter import RequestSubmitter

logger = logging.getLogger(__name__)


@dataclass
class Dashboard:
    """Wires session, submission, polling and gallery state together."""

    api: DashboardApi
    unauthorized: Signal
    session_store: SessionStore
    notifications: NotificationCenter
    cooldown: Cooldown
    submitter: RequestSubmitter
    poller: GalleryPoller
    gallery: GalleryView
    highlights: HighlightsRequester

    @classmethod
    def create(
        cls,
        settings: ClientSettings | None = None,
        api: DashboardApi | None = None,
        storage: KeyValueStorage | None = None,
        unauthorized: Signal | None = None,
    ) -> "Dashboard":
        """Build a dashboard from settings, optionally with injected collaborators."""
        settings = settings or ClientSettings()
        unauthorized = unauthorized or Signal("unauthorized")
        if api is None:
            api = HttpxDashboardApi.create(settings.backend_url, unauthorized)
        storage = storage or JsonFileStorage(settings.storage_path)

        session_store = SessionStore(
            api, storage, unauthorized, trust_offline=settings.trust_offline
        )

        def current_session() -> Session | None:
            return session_store.session

        notifications = NotificationCenter()
        cooldown = Cooldown(settings.tick_seconds)
        dashboard = cls(
            api=api,
            unauthorized=unauthorized,
            session_store=session_store,
            notifications=notifications,
            cooldown=cooldown,
            submitter=RequestSubmitter(
                api,
                current_session,
                notifications,
                cooldown,
                cooldown_ticks=settings.cooldown_ticks,
                status_reset_seconds=settings.status_reset_seconds,
            ),
            poller=GalleryPoller(
                api,
                current_session,
                notifications,
                interval_seconds=settings.poll_interval_seconds,
                notification_seconds=settings.notification_seconds,
            ),
            gallery=GalleryView(api, current_session, storage),
            highlights=HighlightsRequester(api, current_session),
        )
        session_store.changed.subscribe(dashboard._on_session_changed)
        return dashboard

    async def start(self) -> Session | None:
        """Restore the stored session and begin background polling."""
        session = await self.session_store.restore()
        if session is not None and not self.poller.running:
            self.poller.start()
        return session

    async def close(self) -> None:
        """Stop background work and release the HTTP session."""
        self.poller.stop()
        await self.submitter.close()
        self.session_store.close()
        close = getattr(self.api, "close", None)
        if close is not None:
            await close()

    def _on_session_changed(self) -> None:
        if self.session_store.session is None:
            logger.info("Session ended, stopping gallery polling")
            self.poller.stop()
            return
        self.poller.start()
