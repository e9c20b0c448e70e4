"""HTTP client for the dashboard backend."""

import logging
from dataclasses import dataclass
from collections.abc import Callable
from typing import Protocol, TypeVar

import httpx

from videosia.client.errors import AuthError, NetworkError, ServerError
from videosia.client.models import GalleryItem, VideoRequest
from videosia.client.signals import Signal

logger = logging.getLogger(__name__)

_UNAUTHORIZED_STATUSES = {401, 403}

T = TypeVar("T")


class DashboardApi(Protocol):
    """Interface for the backend endpoints used by the dashboard."""

    async def login(self, email: str, password: str) -> dict[str, object]:
        """Exchange credentials for a token and profile."""

    async def register(self, payload: dict[str, object]) -> dict[str, object]:
        """Create an account and return a token and profile."""

    async def me(self, token: str) -> dict[str, object]:
        """Validate a bearer token."""

    async def create_video_request(
        self, token: str, method: str, phrase: str | None, image_count: int
    ) -> VideoRequest:
        """Persist a pending video request."""

    async def trigger_generation(self, token: str, payload: dict[str, object]) -> None:
        """Start the generation workflow for a request."""

    async def list_gallery(self, token: str) -> list[GalleryItem]:
        """Return the user's generated videos."""

    async def toggle_posted(self, token: str, video_id: str, is_posted: bool) -> None:
        """Store the posted flag of a video."""

    async def youtube_highlights(self, token: str, url: str) -> list[str]:
        """Cut highlight clips from a YouTube video."""


@dataclass
class HttpxDashboardApi(DashboardApi):
    """Dashboard API client implemented with httpx."""

    base_url: str
    http_client: httpx.AsyncClient
    unauthorized: Signal | None = None
    timeout: float = 30

    @classmethod
    def create(
        cls, base_url: str, unauthorized: Signal | None = None
    ) -> "HttpxDashboardApi":
        """Create an API client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            unauthorized=unauthorized,
        )

    async def login(self, email: str, password: str) -> dict[str, object]:
        """Exchange credentials for a token and profile."""
        response = await self._request(
            "POST", "/login", json={"email": email, "password": password}
        )
        return _decode(response, _json_object)

    async def register(self, payload: dict[str, object]) -> dict[str, object]:
        """Create an account and return a token and profile."""
        response = await self._request("POST", "/register", json=payload)
        return _decode(response, _json_object)

    async def me(self, token: str) -> dict[str, object]:
        """Validate a bearer token without raising the unauthorized signal."""
        response = await self._request("GET", "/me", token=token, broadcast=False)
        return _decode(response, _json_object)

    async def create_video_request(
        self, token: str, method: str, phrase: str | None, image_count: int
    ) -> VideoRequest:
        """Persist a pending video request."""
        response = await self._request(
            "POST",
            "/api/video-request",
            token=token,
            json={"metodo": method, "frase": phrase, "num_images": image_count},
        )
        return _decode(
            response, lambda body: VideoRequest.from_payload(body["request"])
        )

    async def trigger_generation(self, token: str, payload: dict[str, object]) -> None:
        """Start the generation workflow for a request."""
        await self._request(
            "POST", "/api/trigger-n8n", token=token, json=payload, long_running=True
        )

    async def list_gallery(self, token: str) -> list[GalleryItem]:
        """Return the user's generated videos."""
        response = await self._request("GET", "/api/gallery", token=token)
        return _decode(
            response,
            lambda body: [
                GalleryItem.from_payload(video) for video in body.get("videos") or []
            ],
        )

    async def toggle_posted(self, token: str, video_id: str, is_posted: bool) -> None:
        """Store the posted flag of a video."""
        await self._request(
            "POST",
            "/api/gallery/toggle-posted",
            token=token,
            json={"drive_file_id": video_id, "is_posted": is_posted},
        )

    async def youtube_highlights(self, token: str, url: str) -> list[str]:
        """Cut highlight clips from a YouTube video."""
        response = await self._request(
            "POST",
            "/api/youtube-highlights",
            token=token,
            json={"url": url},
            long_running=True,
        )
        return _decode(
            response, lambda body: [str(path) for path in body.get("highlights") or []]
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(  # noqa: PLR0913
        self,
        method: str,
        path: str,
        *,
        token: str | None = None,
        json: dict[str, object] | None = None,
        broadcast: bool = True,
        long_running: bool = False,
    ) -> httpx.Response:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            response = await self.http_client.request(
                method,
                f"{self.base_url}{path}",
                json=json,
                headers=headers,
                timeout=None if long_running else self.timeout,
            )
        except httpx.TransportError as exc:
            raise NetworkError(f"{method} {path} failed: {exc}") from exc

        if response.is_success:
            return response

        error, details = _error_fields(response)
        if token and response.status_code in _UNAUTHORIZED_STATUSES:
            logger.warning(
                "Backend rejected bearer token",
                extra={"path": path, "status_code": response.status_code},
            )
            if broadcast and self.unauthorized is not None:
                self.unauthorized.emit()
            raise AuthError(error or "Sessão expirada")
        raise ServerError(response.status_code, error=error, details=details)


def _error_fields(response: httpx.Response) -> tuple[str | None, str | None]:
    """Extract error and details from an error response body."""
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return (text or None), None
    if not isinstance(body, dict):
        return None, None
    error = body.get("error")
    details = body.get("details")
    return (
        str(error) if error else None,
        str(details) if details else None,
    )


def _json_object(body: object) -> dict[str, object]:
    if not isinstance(body, dict):
        raise TypeError(f"expected a JSON object, got {type(body).__name__}")
    return body


def _decode(response: httpx.Response, parse: Callable[[dict], T]) -> T:
    """Parse a successful response body, treating a malformed one as a server error."""
    try:
        return parse(_json_object(response.json()))
    except (ValueError, KeyError, TypeError, AttributeError) as exc:
        logger.warning(
            "Malformed backend response",
            extra={"path": response.request.url.path, "error": repr(exc)},
        )
        raise ServerError(response.status_code) from exc
