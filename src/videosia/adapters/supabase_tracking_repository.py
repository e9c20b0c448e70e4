"""Supabase-backed gallery tracking repository."""

from dataclasses import dataclass

from supabase import Client

from videosia.domain.gallery import TrackingRecord
from videosia.services.gallery import TrackingRepository


@dataclass
class SupabaseTrackingRepository(TrackingRepository):
    """Supabase implementation for gallery posting status."""

    client: Client

    def list_tracking(self, user_id: str) -> list[TrackingRecord]:
        """Return all tracking rows of a user."""
        response = (
            self.client.table("gallery_tracking")
            .select("id, user_id, drive_file_id, is_posted")
            .eq("user_id", user_id)
            .execute()
        )
        return [_to_record(row) for row in response.data or []]

    def get_tracking(self, user_id: str, drive_file_id: str) -> TrackingRecord | None:
        """Return the tracking row for a file, if present."""
        response = (
            self.client.table("gallery_tracking")
            .select("id, user_id, drive_file_id, is_posted")
            .eq("user_id", user_id)
            .eq("drive_file_id", drive_file_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_record(response.data[0])

    def create_tracking(
        self, user_id: str, drive_file_id: str, is_posted: bool
    ) -> TrackingRecord:
        """Create a tracking row and return it."""
        response = (
            self.client.table("gallery_tracking")
            .insert(
                {
                    "user_id": user_id,
                    "drive_file_id": drive_file_id,
                    "is_posted": is_posted,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create gallery tracking row")
        return _to_record(response.data[0])

    def update_tracking(self, tracking_id: str, is_posted: bool) -> TrackingRecord:
        """Update a tracking row and return it."""
        response = (
            self.client.table("gallery_tracking")
            .update({"is_posted": is_posted})
            .eq("id", tracking_id)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update gallery tracking row")
        return _to_record(response.data[0])


def _to_record(row: dict[str, object]) -> TrackingRecord:
    return TrackingRecord(
        id=str(row["id"]),
        user_id=str(row["user_id"]),
        drive_file_id=str(row["drive_file_id"]),
        is_posted=bool(row.get("is_posted")),
    )
