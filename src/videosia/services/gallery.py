"""Gallery listing and posting status."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from videosia.domain.gallery import GalleryVideo, StoredFile, TrackingRecord
from videosia.services.errors import ServiceError

logger = logging.getLogger(__name__)

_GENERIC_MIME_TYPE = "application/octet-stream"


class VideoStorage(Protocol):
    """Interface for the storage holding generated videos."""

    def list_user_files(self, user_id: str) -> list[StoredFile]:
        """Return files in the user's folder, newest first."""


class TrackingRepository(Protocol):
    """Persistence interface for gallery posting status."""

    def list_tracking(self, user_id: str) -> list[TrackingRecord]:
        """Return all tracking rows of a user."""

    def get_tracking(self, user_id: str, drive_file_id: str) -> TrackingRecord | None:
        """Return the tracking row for a file, if present."""

    def create_tracking(
        self, user_id: str, drive_file_id: str, is_posted: bool
    ) -> TrackingRecord:
        """Create a tracking row and return it."""

    def update_tracking(self, tracking_id: str, is_posted: bool) -> TrackingRecord:
        """Update a tracking row and return it."""


@dataclass
class GalleryService:
    """Merges stored videos with their posting status."""

    storage: VideoStorage
    tracking_repository: TrackingRepository

    async def list_videos(self, user_id: str) -> list[GalleryVideo]:
        """Return the user's videos with their posted flag."""
        try:
            files = await asyncio.to_thread(self.storage.list_user_files, user_id)
        except Exception as exc:
            logger.exception("Failed to list stored videos", extra={"user_id": user_id})
            raise ServiceError(
                500, "Erro ao carregar galeria", details=str(exc)
            ) from exc

        posted: dict[str, bool] = {}
        try:
            for row in self.tracking_repository.list_tracking(user_id):
                posted[row.drive_file_id] = row.is_posted
        except Exception:
            logger.exception(
                "Failed to load gallery tracking", extra={"user_id": user_id}
            )

        videos = [
            _to_video(file, posted.get(file.id, False))
            for file in files
            if _is_video(file)
        ]
        logger.info(
            "Gallery listed",
            extra={
                "user_id": user_id,
                "files": len(files),
                "videos": len(videos),
                "tracked": len(posted),
            },
        )
        return videos

    def toggle_posted(
        self, user_id: str, drive_file_id: str | None, is_posted: bool
    ) -> TrackingRecord:
        """Store the posted flag for a video."""
        if not drive_file_id:
            raise ServiceError(400, "ID do arquivo é obrigatório")
        try:
            existing = self.tracking_repository.get_tracking(user_id, drive_file_id)
            if existing:
                return self.tracking_repository.update_tracking(existing.id, is_posted)
            return self.tracking_repository.create_tracking(
                user_id, drive_file_id, is_posted
            )
        except Exception as exc:
            logger.exception(
                "Failed to update posted status",
                extra={"user_id": user_id, "drive_file_id": drive_file_id},
            )
            raise ServiceError(
                500, "Erro ao atualizar status", details=str(exc) or repr(exc)
            ) from exc


def _is_video(file: StoredFile) -> bool:
    return (
        "video" in file.mime_type
        or file.name.endswith(".mp4")
        or file.mime_type == _GENERIC_MIME_TYPE
    )


def _to_video(file: StoredFile, is_posted: bool) -> GalleryVideo:
    thumbnail = (
        file.thumbnail_link
        or f"https://drive.google.com/thumbnail?id={file.id}&sz=w600"
    )
    return GalleryVideo(
        id=file.id,
        name=file.name,
        mime_type=file.mime_type,
        thumbnail=thumbnail,
        download_link=file.web_content_link,
        created_at=file.created_time,
        size=file.size,
        is_posted=is_posted,
    )
