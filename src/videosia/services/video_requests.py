"""Video request bookkeeping."""

import logging
from dataclasses import dataclass
from typing import Protocol

from videosia.domain.requests import STATUS_PENDING, VideoRequestRecord
from videosia.services.errors import ServiceError

logger = logging.getLogger(__name__)


class VideoRequestRepository(Protocol):
    """Persistence interface for video requests."""

    def create_request(
        self, user_id: str, metodo: str, frase: str | None, num_images: int
    ) -> VideoRequestRecord:
        """Create a pending request and return it."""

    def list_requests(
        self, user_id: str | None, status: str | None, limit: int | None = None
    ) -> list[VideoRequestRecord]:
        """Return requests, newest first, optionally filtered."""

    def update_status(self, request_id: str, status: str) -> None:
        """Set the status of a request."""

    def update_status_where(
        self, current_status: str, new_status: str
    ) -> list[VideoRequestRecord]:
        """Move every request in one status to another and return them."""


@dataclass
class VideoRequestService:
    """Creates and lists a user's video requests."""

    repository: VideoRequestRepository

    def create(
        self,
        user_id: str,
        metodo: str | None,
        frase: str | None,
        num_images: int | None,
    ) -> VideoRequestRecord:
        """Record a new pending request for the user."""
        if not metodo or not num_images:
            raise ServiceError(400, "Método e número de imagens são obrigatórios")
        try:
            record = self.repository.create_request(
                user_id=user_id,
                metodo=metodo,
                frase=frase or None,
                num_images=num_images,
            )
        except Exception as exc:
            logger.exception("Failed to save video request", extra={"user_id": user_id})
            raise ServiceError(500, "Erro ao salvar requisição") from exc
        logger.info(
            "Video request created",
            extra={"request_id": record.id, "status": STATUS_PENDING},
        )
        return record

    def list_for_user(
        self, user_id: str, status: str | None = None
    ) -> list[VideoRequestRecord]:
        """Return the user's requests, newest first."""
        try:
            return self.repository.list_requests(user_id, status)
        except Exception as exc:
            logger.exception(
                "Failed to list video requests", extra={"user_id": user_id}
            )
            raise ServiceError(500, "Erro ao buscar requisições") from exc
