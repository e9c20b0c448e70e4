"""Gallery view state: listing, filters, posted toggle and downloads."""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Literal

from videosia.client.api import DashboardApi
from videosia.client.errors import DashboardError
from videosia.client.models import GalleryItem, Session
from videosia.client.storage import DOWNLOADED_KEY, KeyValueStorage

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Não foi possível carregar sua galeria no momento."
_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")

GalleryFilter = Literal["all", "pending", "posted"]


@dataclass(frozen=True)
class GalleryMetrics:
    total: int
    pending: int
    posted: int


class GalleryView:
    """In-memory gallery of the signed-in user."""

    def __init__(
        self,
        api: DashboardApi,
        session_provider: Callable[[], Session | None],
        storage: KeyValueStorage,
    ) -> None:
        self.api = api
        self.session_provider = session_provider
        self.storage = storage
        self.videos: list[GalleryItem] = []
        self.loading = False
        self.error: str | None = None
        self.downloaded: set[str] = self._load_downloaded()

    async def load(self) -> None:
        """Replace the listed videos with a fresh fetch."""
        session = self.session_provider()
        if session is None:
            return
        self.loading = True
        self.error = None
        try:
            self.videos = await self.api.list_gallery(session.token)
        except DashboardError:
            logger.exception("Failed to load gallery")
            self.error = LOAD_FAILED_MESSAGE
        finally:
            self.loading = False

    async def toggle_posted(self, video_id: str) -> None:
        """Flip the posted flag locally, then persist it or roll back."""
        current = self._find(video_id)
        session = self.session_provider()
        if current is None or session is None:
            return
        new_value = not current.is_posted
        self._set_posted(video_id, new_value)
        try:
            await self.api.toggle_posted(session.token, video_id, new_value)
        except DashboardError:
            logger.exception(
                "Failed to update posted status", extra={"video_id": video_id}
            )
            self._set_posted(video_id, current.is_posted)

    def filtered(self, gallery_filter: GalleryFilter = "all") -> list[GalleryItem]:
        if gallery_filter == "pending":
            return [video for video in self.videos if not video.is_posted]
        if gallery_filter == "posted":
            return [video for video in self.videos if video.is_posted]
        return list(self.videos)

    def metrics(self) -> GalleryMetrics:
        posted = sum(1 for video in self.videos if video.is_posted)
        return GalleryMetrics(
            total=len(self.videos), pending=len(self.videos) - posted, posted=posted
        )

    def mark_downloaded(self, video_id: str) -> None:
        """Remember that a video was downloaded on this device."""
        self.downloaded.add(video_id)
        self.storage.set(DOWNLOADED_KEY, json.dumps(sorted(self.downloaded)))

    def is_downloaded(self, video_id: str) -> bool:
        return video_id in self.downloaded

    def _find(self, video_id: str) -> GalleryItem | None:
        return next((video for video in self.videos if video.id == video_id), None)

    def _set_posted(self, video_id: str, is_posted: bool) -> None:
        self.videos = [
            replace(video, is_posted=is_posted) if video.id == video_id else video
            for video in self.videos
        ]

    def _load_downloaded(self) -> set[str]:
        raw = self.storage.get(DOWNLOADED_KEY)
        if not raw:
            return set()
        try:
            values = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Ignoring malformed downloaded video list")
            return set()
        return {str(value) for value in values} if isinstance(values, list) else set()


def format_size(value: object) -> str:
    """Format a byte count with 1024-based units."""
    try:
        size = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return "N/A"
    if size < 0:
        return "N/A"
    index = 0
    scaled = float(size)
    while scaled >= 1024 and index < len(_SIZE_UNITS) - 1:
        scaled /= 1024
        index += 1
    return f"{scaled:.2f} {_SIZE_UNITS[index]}"


def format_date(value: str | None) -> str:
    """Format an ISO timestamp as dd/mm/yyyy HH:MM."""
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime("%d/%m/%Y %H:%M")
