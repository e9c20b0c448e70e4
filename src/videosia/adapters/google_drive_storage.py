"""Google Drive storage for generated videos."""

import logging
from dataclasses import dataclass
from typing import Any

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from videosia.domain.gallery import StoredFile
from videosia.services.gallery import VideoStorage

logger = logging.getLogger(__name__)

_TOKEN_URI = "https://oauth2.googleapis.com/token"
_FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
_FILE_FIELDS = (
    "files(id, name, mimeType, webViewLink, webContentLink, "
    "thumbnailLink, createdTime, size)"
)


@dataclass
class GoogleDriveStorage(VideoStorage):
    """Lists videos from a per-user Drive folder named after the user id."""

    credentials: Credentials | None
    service: Any | None = None

    @classmethod
    def create(
        cls,
        client_id: str | None,
        client_secret: str | None,
        refresh_token: str | None,
    ) -> "GoogleDriveStorage":
        """Create a Drive storage authorized with an offline refresh token."""
        if not refresh_token:
            logger.warning("GOOGLE_REFRESH_TOKEN not set; gallery listing will fail")
            return cls(credentials=None)
        credentials = Credentials(
            token=None,
            refresh_token=refresh_token,
            client_id=client_id,
            client_secret=client_secret,
            token_uri=_TOKEN_URI,
        )
        return cls(credentials=credentials)

    def list_user_files(self, user_id: str) -> list[StoredFile]:
        """Return files in the user's folder, newest first."""
        drive = self._drive()
        folder_query = (
            f"mimeType = '{_FOLDER_MIME_TYPE}' and "
            f"name = '{_escape(user_id)}' and trashed = false"
        )
        folders = (
            drive.files()
            .list(q=folder_query, fields="files(id, name, parents)", spaces="drive")
            .execute()
            .get("files", [])
        )
        if not folders:
            logger.info("No Drive folder for user", extra={"user_id": user_id})
            return []

        folder_id = folders[0]["id"]
        files = (
            drive.files()
            .list(
                q=f"'{_escape(folder_id)}' in parents and trashed = false",
                fields=_FILE_FIELDS,
                orderBy="createdTime desc",
            )
            .execute()
            .get("files", [])
        )
        logger.info(
            "Drive folder listed",
            extra={"user_id": user_id, "folder_id": folder_id, "count": len(files)},
        )
        return [_to_stored_file(item) for item in files]

    def _drive(self) -> Any:
        if self.service is not None:
            return self.service
        if self.credentials is None:
            raise RuntimeError("GOOGLE_REFRESH_TOKEN não configurado no servidor.")
        self.service = build(
            "drive", "v3", credentials=self.credentials, cache_discovery=False
        )
        return self.service


def _escape(value: str) -> str:
    return value.replace("\\", "\\\\").replace("'", "\\'")


def _to_stored_file(item: dict[str, Any]) -> StoredFile:
    return StoredFile(
        id=item["id"],
        name=item.get("name", ""),
        mime_type=item.get("mimeType", ""),
        thumbnail_link=item.get("thumbnailLink"),
        web_content_link=item.get("webContentLink"),
        created_time=item.get("createdTime"),
        size=item.get("size"),
    )
