"""Supabase-backed user repository."""

from dataclasses import dataclass

from supabase import Client

from videosia.domain.users import UserRecord
from videosia.services.auth import UserRepository

_COLUMNS = "id, usuario, email, role, artistic_name, company_name, artist_id"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def find_by_credentials(self, email: str, password: str) -> UserRecord | None:
        """Return the user matching email and password, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("email", email)
            .eq("password", password)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_record(response.data[0])

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""
        response = (
            self.client.table("users")
            .select(_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _to_record(response.data[0])

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create a new user row and return it."""
        response = self.client.table("users").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _to_record(response.data[0])


def _to_record(row: dict[str, object]) -> UserRecord:
    artist_id = row.get("artist_id")
    return UserRecord(
        id=str(row["id"]),
        usuario=str(row.get("usuario") or ""),
        email=str(row["email"]),
        role=row.get("role"),
        artistic_name=row.get("artistic_name"),
        company_name=row.get("company_name"),
        artist_id=str(artist_id) if artist_id is not None else None,
    )
