"""YouTube highlights request state."""

import logging
from collections.abc import Callable
from enum import StrEnum

from videosia.client.api import DashboardApi
from videosia.client.errors import DashboardError, ServerError
from videosia.client.models import Session

logger = logging.getLogger(__name__)

PROCESS_FAILED_MESSAGE = "Falha ao processar vídeo"
UNKNOWN_ERROR_MESSAGE = "Erro desconhecido"


class HighlightsStatus(StrEnum):
    IDLE = "idle"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class HighlightsRequester:
    """Requests highlight clips for a YouTube link and keeps the result."""

    def __init__(
        self, api: DashboardApi, session_provider: Callable[[], Session | None]
    ) -> None:
        self.api = api
        self.session_provider = session_provider
        self.status = HighlightsStatus.IDLE
        self.highlights: list[str] = []
        self.error = ""

    async def request(self, url: str) -> None:
        """Ask the backend to cut highlight clips from a video."""
        session = self.session_provider()
        if not url or session is None:
            return
        self.status = HighlightsStatus.PROCESSING
        self.error = ""
        self.highlights = []
        try:
            self.highlights = await self.api.youtube_highlights(session.token, url)
        except ServerError as exc:
            logger.warning("Highlights request rejected", extra={"url": url})
            self.error = exc.error or PROCESS_FAILED_MESSAGE
            self.status = HighlightsStatus.ERROR
            return
        except DashboardError as exc:
            logger.warning("Highlights request failed", extra={"url": url})
            self.error = str(exc) or UNKNOWN_ERROR_MESSAGE
            self.status = HighlightsStatus.ERROR
            return
        self.status = HighlightsStatus.COMPLETED
