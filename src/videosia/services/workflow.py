"""Generation workflow trigger."""

import logging
from dataclasses import dataclass
from typing import Protocol

from videosia.domain.requests import (
    METHOD_MANUAL,
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_PENDING,
)
from videosia.services.errors import ServiceError
from videosia.services.video_requests import VideoRequestRepository

logger = logging.getLogger(__name__)


class WorkflowRejectedError(Exception):
    """Raised when the workflow webhook answers with an error status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Workflow webhook returned {status_code}")
        self.status_code = status_code
        self.body = body


class WorkflowClient(Protocol):
    """Interface for the external generation workflow."""

    async def trigger(self, payload: dict[str, object]) -> dict[str, object]:
        """Start a workflow run and return its JSON answer."""


@dataclass
class WorkflowService:
    """Forwards generation requests to the workflow webhook."""

    client: WorkflowClient | None
    repository: VideoRequestRepository

    async def trigger(  # noqa: PLR0913
        self,
        request_id: str | None,
        user: str | None,
        metodo: str | None,
        frase: str | None,
        images: list[str] | None,
    ) -> dict[str, object]:
        """Send the request to the workflow and record the outcome."""
        if not images:
            raise ServiceError(400, "Imagens são obrigatórias")
        if self.client is None:
            logger.error("Workflow webhook URL is not configured")
            raise ServiceError(500, "Webhook não configurado")

        payload: dict[str, object] = {
            "request_id": request_id,
            "user": user,
            "metodo": metodo,
            "images": images,
        }
        if metodo == METHOD_MANUAL and frase:
            payload["frase"] = frase

        try:
            result = await self.client.trigger(payload)
        except WorkflowRejectedError as exc:
            logger.error(
                "Workflow webhook rejected request",
                extra={"request_id": request_id, "status_code": exc.status_code},
            )
            raise ServiceError(
                exc.status_code, "Falha ao acionar workflow", details=exc.body
            ) from exc
        except Exception as exc:
            logger.exception(
                "Workflow webhook call failed", extra={"request_id": request_id}
            )
            if request_id:
                self.repository.update_status(request_id, STATUS_FAILED)
            raise ServiceError(500, "Erro ao acionar workflow") from exc

        if request_id:
            self.repository.update_status(request_id, _status_from_result(result))
        return result


def _status_from_result(result: dict[str, object]) -> str:
    """Map the workflow answer onto a request status."""
    inner = result.get("result")
    if isinstance(inner, dict) and inner.get("complete") == "true":
        return STATUS_COMPLETED
    return STATUS_PENDING
