"""Dashboard client configuration."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client settings loaded from VIDEOSIA_* environment variables."""

    backend_url: str = "http://localhost:3000"
    storage_path: Path = Path(".videosia/storage.json")
    cooldown_ticks: int = 40
    tick_seconds: float = 1.0
    poll_interval_seconds: float = 15
    notification_seconds: float = 5
    status_reset_seconds: float = 5
    trust_offline: bool = True

    model_config = SettingsConfigDict(
        env_prefix="VIDEOSIA_",
        env_file=".env",
        extra="ignore",
    )
