"""Pydantic models for dashboard API payloads."""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """Login form payload."""

    email: str | None = None
    password: str | None = None


class RegisterRequest(BaseModel):
    """Registration quiz payload."""

    usuario: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None
    artistic_name: str | None = None
    musical_genre: str | None = None
    company_name: str | None = None
    managed_artists_count: int | str | None = None


class VideoRequestCreate(BaseModel):
    """Payload recording a new video request."""

    metodo: str | None = None
    frase: str | None = None
    num_images: int | None = None


class TriggerRequest(BaseModel):
    """Payload forwarded to the generation workflow."""

    request_id: str | int | None = None
    user: str | int | None = None
    metodo: str | None = None
    frase: str | None = None
    images: list[str] | None = None


class TogglePostedRequest(BaseModel):
    """Payload flipping the posted flag of a gallery video."""

    drive_file_id: str | None = None
    is_posted: bool = False


class HighlightsRequest(BaseModel):
    """Payload asking for YouTube highlights."""

    url: str | None = None
