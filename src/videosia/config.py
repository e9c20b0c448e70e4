"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Backend settings loaded from environment variables."""

    supabase_url: str
    supabase_key: str
    jwt_secret: str
    jwt_expires_hours: int = 24
    admin_token: str
    n8n_webhook_url: str | None = None
    google_client_id: str | None = None
    google_client_secret: str | None = None
    google_refresh_token: str | None = None
    highlights_dir: Path = Path("public/highlights")
    downloads_dir: Path = Path("downloads")
    cors_origins: str = "*"
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_cors_origins(raw: str) -> list[str]:
    """Parse a comma separated list of allowed CORS origins."""
    origins = [chunk.strip() for chunk in raw.split(",")]
    return [origin for origin in origins if origin] or ["*"]
