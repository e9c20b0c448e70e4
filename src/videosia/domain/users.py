"""Domain models for dashboard accounts."""

from dataclasses import dataclass

DEFAULT_ROLE = "producer"


@dataclass(frozen=True)
class UserRecord:
    """Represents a user stored in the database."""

    id: str
    usuario: str
    email: str
    role: str | None = None
    artistic_name: str | None = None
    company_name: str | None = None
    artist_id: str | None = None

    def to_claims(self) -> dict[str, object]:
        """Return the token claims for this user."""
        return {
            "id": self.id,
            "email": self.email,
            "usuario": self.usuario,
            "role": self.role or DEFAULT_ROLE,
            "artist_id": self.artist_id,
        }
