"""Domain models for the generated video gallery."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoredFile:
    """A file listed from the artifact storage."""

    id: str
    name: str
    mime_type: str
    thumbnail_link: str | None = None
    web_content_link: str | None = None
    created_time: str | None = None
    size: str | None = None


@dataclass(frozen=True)
class TrackingRecord:
    """Posting status tracked for a stored file."""

    id: str
    user_id: str
    drive_file_id: str
    is_posted: bool


@dataclass(frozen=True)
class GalleryVideo:
    """A gallery entry merged from storage and tracking data."""

    id: str
    name: str
    mime_type: str
    thumbnail: str
    download_link: str | None
    created_at: str | None
    size: str | None
    is_posted: bool

    def to_payload(self) -> dict[str, object]:
        """Serialize using the wire names the dashboard expects."""
        return {
            "id": self.id,
            "name": self.name,
            "mimeType": self.mime_type,
            "thumbnail": self.thumbnail,
            "downloadLink": self.download_link,
            "createdAt": self.created_at,
            "size": self.size,
            "isPosted": self.is_posted,
        }
