"""Admin service for request maintenance."""

import logging
from dataclasses import dataclass

from videosia.domain.requests import STATUS_FAILED, STATUS_PENDING
from videosia.services.video_requests import VideoRequestRepository

logger = logging.getLogger(__name__)


@dataclass
class AdminService:
    """Service for admin dashboards."""

    repository: VideoRequestRepository

    def list_requests(
        self, status: str | None = None, limit: int = 50
    ) -> list[dict[str, object]]:
        """Return recent requests across all users."""
        records = self.repository.list_requests(None, status, limit)
        return [record.to_payload() for record in records]

    def clear_pending(self) -> int:
        """Mark requests stuck in pending as failed and return how many."""
        cleared = self.repository.update_status_where(STATUS_PENDING, STATUS_FAILED)
        logger.info("Cleared stuck pending requests", extra={"count": len(cleared)})
        return len(cleared)
