"""Client-side models for the dashboard."""

from dataclasses import dataclass
from typing import Literal

NotificationKind = Literal["success", "error"]


@dataclass(frozen=True)
class Session:
    """An authenticated user with the bearer token that proves it."""

    user_id: str
    display_name: str
    email: str
    token: str
    role: str | None = None

    def __post_init__(self) -> None:
        if not self.token:
            raise ValueError("A session requires a non-empty bearer token")

    @classmethod
    def from_login(cls, payload: dict[str, object]) -> "Session":
        """Build a session from a login or register response."""
        user = payload.get("user")
        if not isinstance(user, dict):
            raise ValueError("Response is missing the user profile")
        return cls.from_profile(user, str(payload.get("token") or ""))

    @classmethod
    def from_profile(cls, profile: dict[str, object], token: str) -> "Session":
        """Build a session from a stored profile and token."""
        role = profile.get("role")
        return cls(
            user_id=str(profile["id"]),
            display_name=str(profile.get("usuario") or ""),
            email=str(profile.get("email") or ""),
            token=token,
            role=str(role) if role else None,
        )

    def to_profile(self) -> dict[str, object]:
        """Return the profile persisted next to the token."""
        profile: dict[str, object] = {
            "id": self.user_id,
            "usuario": self.display_name,
            "email": self.email,
        }
        if self.role:
            profile["role"] = self.role
        return profile


@dataclass(frozen=True)
class RegistrationData:
    """Registration form fields."""

    name: str
    email: str
    password: str
    role: str
    artistic_name: str | None = None
    musical_genre: str | None = None
    company_name: str | None = None
    managed_artists_count: int | None = None

    def to_payload(self) -> dict[str, object]:
        """Serialize using the backend's field names."""
        return {
            "usuario": self.name,
            "email": self.email,
            "password": self.password,
            "role": self.role,
            "artistic_name": self.artistic_name,
            "musical_genre": self.musical_genre,
            "company_name": self.company_name,
            "managed_artists_count": self.managed_artists_count,
        }


@dataclass(frozen=True)
class VideoRequest:
    """A persisted video generation request."""

    id: str
    method: str
    phrase: str | None
    image_count: int
    status: str

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "VideoRequest":
        """Build a request from the backend representation."""
        return cls(
            id=str(payload["id"]),
            method=str(payload.get("metodo") or ""),
            phrase=payload.get("frase"),
            image_count=int(payload.get("num_images") or 0),
            status=str(payload.get("status") or "pending"),
        )


@dataclass(frozen=True)
class GalleryItem:
    """A generated video listed in the gallery."""

    id: str
    name: str
    thumbnail_url: str | None
    download_url: str | None
    created_at: str | None
    size_bytes: int | None
    mime_type: str | None = None
    is_posted: bool = False

    @classmethod
    def from_payload(cls, payload: dict[str, object]) -> "GalleryItem":
        """Build an item from the backend representation."""
        return cls(
            id=str(payload["id"]),
            name=str(payload.get("name") or ""),
            thumbnail_url=payload.get("thumbnail"),
            download_url=payload.get("downloadLink"),
            created_at=payload.get("createdAt"),
            size_bytes=_parse_size(payload.get("size")),
            mime_type=payload.get("mimeType"),
            is_posted=bool(payload.get("isPosted")),
        )


@dataclass(frozen=True)
class Notification:
    """A transient message shown to the user."""

    kind: NotificationKind
    message: str


def _parse_size(value: object) -> int | None:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
