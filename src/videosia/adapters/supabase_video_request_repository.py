"""Supabase-backed video request repository."""

from dataclasses import dataclass

from supabase import Client

from videosia.domain.requests import STATUS_PENDING, VideoRequestRecord
from videosia.services.video_requests import VideoRequestRepository


@dataclass
class SupabaseVideoRequestRepository(VideoRequestRepository):
    """Supabase implementation for video requests."""

    client: Client

    def create_request(
        self, user_id: str, metodo: str, frase: str | None, num_images: int
    ) -> VideoRequestRecord:
        """Create a pending request row and return it."""
        response = (
            self.client.table("video_requests")
            .insert(
                {
                    "user_id": user_id,
                    "metodo": metodo,
                    "frase": frase,
                    "num_images": num_images,
                    "status": STATUS_PENDING,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create video request")
        return _to_record(response.data[0])

    def list_requests(
        self, user_id: str | None, status: str | None, limit: int | None = None
    ) -> list[VideoRequestRecord]:
        """Return requests ordered by creation time, newest first."""
        query = self.client.table("video_requests").select("*")
        if user_id is not None:
            query = query.eq("user_id", user_id)
        if status:
            query = query.eq("status", status)
        query = query.order("created_at", desc=True)
        if limit is not None:
            query = query.limit(limit)
        response = query.execute()
        return [_to_record(row) for row in response.data or []]

    def update_status(self, request_id: str, status: str) -> None:
        """Set the status of a request."""
        self.client.table("video_requests").update({"status": status}).eq(
            "id", request_id
        ).execute()

    def update_status_where(
        self, current_status: str, new_status: str
    ) -> list[VideoRequestRecord]:
        """Move every request in one status to another."""
        response = (
            self.client.table("video_requests")
            .update({"status": new_status})
            .eq("status", current_status)
            .execute()
        )
        return [_to_record(row) for row in response.data or []]


def _to_record(row: dict[str, object]) -> VideoRequestRecord:
    return VideoRequestRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        metodo=str(row["metodo"]),
        frase=row.get("frase"),
        num_images=int(row.get("num_images") or 0),
        status=str(row.get("status") or STATUS_PENDING),
        created_at=row.get("created_at"),
    )
