"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from pathlib import Path
from uuid import uuid4

import httpx
import pytest

from videosia.client.api import HttpxDashboardApi
from videosia.client.errors import NetworkError
from videosia.client.models import GalleryItem, VideoRequest
from videosia.client.storage import KeyValueStorage
from videosia.config import Settings
from videosia.containers import AppContainer
from videosia.domain.gallery import StoredFile, TrackingRecord
from videosia.domain.requests import STATUS_PENDING, VideoRequestRecord
from videosia.domain.users import UserRecord
from videosia.services.admin import AdminService
from videosia.services.auth import AuthService, UserRepository
from videosia.services.gallery import GalleryService, TrackingRepository, VideoStorage
from videosia.services.highlights import (
    ClipExtractor,
    HighlightsService,
    VideoDownloader,
)
from videosia.services.video_requests import (
    VideoRequestRepository,
    VideoRequestService,
)
from videosia.services.workflow import WorkflowClient, WorkflowService


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, dict[str, object]] = field(default_factory=dict)
    fail_create: bool = False

    def find_by_credentials(self, email: str, password: str) -> UserRecord | None:
        row = self.users.get(email)
        if row is None or row["password"] != password:
            return None
        return _to_user(row)

    def get_by_email(self, email: str) -> UserRecord | None:
        row = self.users.get(email)
        return _to_user(row) if row else None

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        if self.fail_create:
            raise RuntimeError("insert failed")
        row = {"id": str(uuid4()), **payload}
        self.users[str(payload["email"])] = row
        return _to_user(row)


def _to_user(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=str(row["id"]),
        usuario=str(row.get("usuario") or ""),
        email=str(row["email"]),
        role=row.get("role"),
        artistic_name=row.get("artistic_name"),
        company_name=row.get("company_name"),
        artist_id=row.get("artist_id"),
    )


@dataclass
class InMemoryVideoRequestRepository(VideoRequestRepository):
    """In-memory video request repository for tests."""

    requests: list[VideoRequestRecord] = field(default_factory=list)
    status_updates: list[tuple[str, str]] = field(default_factory=list)
    fail_create: bool = False

    def create_request(
        self, user_id: str, metodo: str, frase: str | None, num_images: int
    ) -> VideoRequestRecord:
        if self.fail_create:
            raise RuntimeError("insert failed")
        record = VideoRequestRecord(
            id=str(len(self.requests) + 1),
            user_id=user_id,
            metodo=metodo,
            frase=frase,
            num_images=num_images,
            status=STATUS_PENDING,
            created_at=f"2026-01-01T00:00:{len(self.requests):02d}Z",
        )
        self.requests.append(record)
        return record

    def list_requests(
        self, user_id: str | None, status: str | None, limit: int | None = None
    ) -> list[VideoRequestRecord]:
        rows = [
            record
            for record in self.requests
            if (user_id is None or record.user_id == user_id)
            and (not status or record.status == status)
        ]
        rows.sort(key=lambda record: record.created_at or "", reverse=True)
        return rows[:limit] if limit is not None else rows

    def update_status(self, request_id: str, status: str) -> None:
        self.status_updates.append((request_id, status))
        self.requests = [
            replace(record, status=status) if record.id == request_id else record
            for record in self.requests
        ]

    def update_status_where(
        self, current_status: str, new_status: str
    ) -> list[VideoRequestRecord]:
        moved = [record for record in self.requests if record.status == current_status]
        for record in moved:
            self.update_status(record.id, new_status)
        return moved


@dataclass
class InMemoryTrackingRepository(TrackingRepository):
    """In-memory gallery tracking repository for tests."""

    rows: list[TrackingRecord] = field(default_factory=list)
    fail: bool = False

    def list_tracking(self, user_id: str) -> list[TrackingRecord]:
        if self.fail:
            raise RuntimeError("tracking unavailable")
        return [row for row in self.rows if row.user_id == user_id]

    def get_tracking(self, user_id: str, drive_file_id: str) -> TrackingRecord | None:
        if self.fail:
            raise RuntimeError("tracking unavailable")
        return next(
            (
                row
                for row in self.rows
                if row.user_id == user_id and row.drive_file_id == drive_file_id
            ),
            None,
        )

    def create_tracking(
        self, user_id: str, drive_file_id: str, is_posted: bool
    ) -> TrackingRecord:
        row = TrackingRecord(
            id=str(len(self.rows) + 1),
            user_id=user_id,
            drive_file_id=drive_file_id,
            is_posted=is_posted,
        )
        self.rows.append(row)
        return row

    def update_tracking(self, tracking_id: str, is_posted: bool) -> TrackingRecord:
        self.rows = [
            replace(row, is_posted=is_posted) if row.id == tracking_id else row
            for row in self.rows
        ]
        return next(row for row in self.rows if row.id == tracking_id)


@dataclass
class FakeVideoStorage(VideoStorage):
    """Fake artifact storage keyed by user id."""

    files: dict[str, list[StoredFile]] = field(default_factory=dict)
    error: Exception | None = None

    def list_user_files(self, user_id: str) -> list[StoredFile]:
        if self.error is not None:
            raise self.error
        return self.files.get(user_id, [])


@dataclass
class FakeWorkflowClient(WorkflowClient):
    """Fake workflow client recording payloads."""

    result: dict[str, object] = field(default_factory=dict)
    error: Exception | None = None
    payloads: list[dict[str, object]] = field(default_factory=list)

    async def trigger(self, payload: dict[str, object]) -> dict[str, object]:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.result


@dataclass
class FakeDownloader(VideoDownloader):
    """Fake downloader writing an empty file."""

    urls: list[str] = field(default_factory=list)

    def download(self, url: str, output_dir: Path) -> Path:
        self.urls.append(url)
        path = output_dir / "video.mp4"
        path.write_bytes(b"")
        return path


@dataclass
class FakeClipExtractor(ClipExtractor):
    """Fake extractor recording cut positions."""

    duration: float = 100.0
    cuts: list[tuple[float, float, str]] = field(default_factory=list)

    def probe_duration(self, video_path: Path) -> float:
        return self.duration

    def cut_clip(
        self, video_path: Path, start: float, duration: float, output_path: Path
    ) -> None:
        self.cuts.append((start, duration, output_path.name))


@dataclass
class InMemoryStorage(KeyValueStorage):
    """Dict-backed client storage."""

    values: dict[str, str] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value

    def remove(self, key: str) -> None:
        self.values.pop(key, None)


@dataclass
class FakeDashboardApi:
    """Scriptable dashboard API for client tests."""

    login_payload: dict[str, object] = field(
        default_factory=lambda: {
            "token": "token-1",
            "user": {"id": "user-1", "usuario": "Ana", "email": "ana@example.com"},
        }
    )
    login_error: Exception | None = None
    me_error: Exception | None = None
    create_error: Exception | None = None
    trigger_error: Exception | None = None
    toggle_error: Exception | None = None
    highlights_error: Exception | None = None
    highlights: list[str] = field(default_factory=list)
    gallery_pages: list[list[GalleryItem] | Exception] = field(default_factory=list)
    calls: list[tuple[str, object]] = field(default_factory=list)

    async def login(self, email: str, password: str) -> dict[str, object]:
        self.calls.append(("login", email))
        if self.login_error is not None:
            raise self.login_error
        return self.login_payload

    async def register(self, payload: dict[str, object]) -> dict[str, object]:
        self.calls.append(("register", payload))
        if self.login_error is not None:
            raise self.login_error
        return self.login_payload

    async def me(self, token: str) -> dict[str, object]:
        self.calls.append(("me", token))
        if self.me_error is not None:
            raise self.me_error
        return {"message": "Acesso autorizado"}

    async def create_video_request(
        self, token: str, method: str, phrase: str | None, image_count: int
    ) -> VideoRequest:
        self.calls.append(("create_video_request", (method, phrase, image_count)))
        if self.create_error is not None:
            raise self.create_error
        return VideoRequest(
            id="req-1",
            method=method,
            phrase=phrase,
            image_count=image_count,
            status="pending",
        )

    async def trigger_generation(self, token: str, payload: dict[str, object]) -> None:
        self.calls.append(("trigger_generation", payload))
        if self.trigger_error is not None:
            raise self.trigger_error

    async def list_gallery(self, token: str) -> list[GalleryItem]:
        self.calls.append(("list_gallery", token))
        page = self.gallery_pages.pop(0) if self.gallery_pages else []
        if isinstance(page, Exception):
            raise page
        return page

    async def toggle_posted(self, token: str, video_id: str, is_posted: bool) -> None:
        self.calls.append(("toggle_posted", (video_id, is_posted)))
        if self.toggle_error is not None:
            raise self.toggle_error

    async def youtube_highlights(self, token: str, url: str) -> list[str]:
        self.calls.append(("youtube_highlights", url))
        if self.highlights_error is not None:
            raise self.highlights_error
        return self.highlights

    def called(self, name: str) -> list[object]:
        return [args for call, args in self.calls if call == name]


def gallery_items(count: int) -> list[GalleryItem]:
    return [
        GalleryItem(
            id=f"file-{index}",
            name=f"video-{index}.mp4",
            thumbnail_url=None,
            download_url=None,
            created_at=None,
            size_bytes=None,
        )
        for index in range(count)
    ]


def offline_error() -> NetworkError:
    return NetworkError("connection refused")


def mock_dashboard_api(
    handler: Callable[[httpx.Request], httpx.Response],
) -> HttpxDashboardApi:
    """Return a real dashboard client answered by ``handler``."""
    return HttpxDashboardApi(
        base_url="https://api.test",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_key="header.payload.signature",
        jwt_secret="jwt-secret",
        admin_token="admin-token",
        n8n_webhook_url="https://n8n.example.com/webhook/videos",
        highlights_dir=tmp_path / "highlights",
        downloads_dir=tmp_path / "downloads",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def request_repository() -> InMemoryVideoRequestRepository:
    return InMemoryVideoRequestRepository()


@pytest.fixture
def tracking_repository() -> InMemoryTrackingRepository:
    return InMemoryTrackingRepository()


@pytest.fixture
def video_storage() -> FakeVideoStorage:
    return FakeVideoStorage()


@pytest.fixture
def workflow_client() -> FakeWorkflowClient:
    return FakeWorkflowClient()


@pytest.fixture
def clip_extractor() -> FakeClipExtractor:
    return FakeClipExtractor()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    user_repository: InMemoryUserRepository,
    request_repository: InMemoryVideoRequestRepository,
    tracking_repository: InMemoryTrackingRepository,
    video_storage: FakeVideoStorage,
    workflow_client: FakeWorkflowClient,
    clip_extractor: FakeClipExtractor,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=AuthService(user_repository, secret=settings.jwt_secret),
        video_request_service=VideoRequestService(request_repository),
        workflow_service=WorkflowService(
            client=workflow_client, repository=request_repository
        ),
        gallery_service=GalleryService(
            storage=video_storage, tracking_repository=tracking_repository
        ),
        highlights_service=HighlightsService(
            downloader=FakeDownloader(),
            extractor=clip_extractor,
            downloads_dir=settings.downloads_dir,
            output_dir=settings.highlights_dir,
        ),
        admin_service=AdminService(request_repository),
        close_resources=close_resources,
    )


@pytest.fixture
def dashboard_api() -> FakeDashboardApi:
    return FakeDashboardApi()


@pytest.fixture
def client_storage() -> InMemoryStorage:
    return InMemoryStorage()
