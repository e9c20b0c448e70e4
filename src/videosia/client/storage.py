"""Durable key/value storage for client state."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)

USER_KEY = "videosia_user"
TOKEN_KEY = "videosia_token"
DOWNLOADED_KEY = "downloadedVideos"


class KeyValueStorage(Protocol):
    """String key/value store that survives restarts."""

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""

    def set(self, key: str, value: str) -> None:
        """Store a value."""

    def remove(self, key: str) -> None:
        """Delete a value if present."""


@dataclass
class JsonFileStorage(KeyValueStorage):
    """Stores all keys in a single JSON document on disk."""

    path: Path

    def get(self, key: str) -> str | None:
        """Return the stored value, if present."""
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value."""
        values = self._load()
        values[key] = value
        self._save(values)

    def remove(self, key: str) -> None:
        """Delete a value if present."""
        values = self._load()
        if values.pop(key, None) is not None:
            self._save(values)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError:
            logger.warning("Ignoring unreadable client storage at %s", self.path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(key): str(value) for key, value in data.items()}

    def _save(self, values: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(values, ensure_ascii=False), encoding="utf-8")
        tmp_path.replace(self.path)
