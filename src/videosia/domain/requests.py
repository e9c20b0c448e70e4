"""Domain models for video generation requests."""

from dataclasses import dataclass

METHOD_AUTOMATIC = "Automatico"
METHOD_MANUAL = "Manual"

STATUS_PENDING = "pending"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class VideoRequestRecord:
    """Represents a persisted video request."""

    id: str
    user_id: str
    metodo: str
    frase: str | None
    num_images: int
    status: str
    created_at: str | None = None

    def to_payload(self) -> dict[str, object]:
        """Serialize the request for API responses."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "metodo": self.metodo,
            "frase": self.frase,
            "num_images": self.num_images,
            "status": self.status,
            "created_at": self.created_at,
        }
