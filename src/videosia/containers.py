"""Dependency container wiring for the backend."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from videosia.adapters.ffmpeg_clip_extractor import FfmpegClipExtractor
from videosia.adapters.google_drive_storage import GoogleDriveStorage
from videosia.adapters.n8n_workflow_client import HttpxWorkflowClient
from videosia.adapters.supabase_tracking_repository import SupabaseTrackingRepository
from videosia.adapters.supabase_user_repository import SupabaseUserRepository
from videosia.adapters.supabase_video_request_repository import (
    SupabaseVideoRequestRepository,
)
from videosia.adapters.ytdlp_downloader import YtDlpDownloader
from videosia.config import Settings
from videosia.services.admin import AdminService
from videosia.services.auth import AuthService
from videosia.services.gallery import GalleryService
from videosia.services.highlights import HighlightsService
from videosia.services.video_requests import VideoRequestService
from videosia.services.workflow import WorkflowService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    video_request_service: VideoRequestService
    workflow_service: WorkflowService
    gallery_service: GalleryService
    highlights_service: HighlightsService
    admin_service: AdminService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    request_repository = SupabaseVideoRequestRepository(supabase_client)
    tracking_repository = SupabaseTrackingRepository(supabase_client)

    workflow_client = (
        HttpxWorkflowClient.create(resolved_settings.n8n_webhook_url)
        if resolved_settings.n8n_webhook_url
        else None
    )
    storage = GoogleDriveStorage.create(
        client_id=resolved_settings.google_client_id,
        client_secret=resolved_settings.google_client_secret,
        refresh_token=resolved_settings.google_refresh_token,
    )

    auth_service = AuthService(
        repository=user_repository,
        secret=resolved_settings.jwt_secret,
        expires_hours=resolved_settings.jwt_expires_hours,
    )
    video_request_service = VideoRequestService(request_repository)
    workflow_service = WorkflowService(
        client=workflow_client, repository=request_repository
    )
    gallery_service = GalleryService(
        storage=storage, tracking_repository=tracking_repository
    )
    highlights_service = HighlightsService(
        downloader=YtDlpDownloader(),
        extractor=FfmpegClipExtractor(),
        downloads_dir=resolved_settings.downloads_dir,
        output_dir=resolved_settings.highlights_dir,
    )
    admin_service = AdminService(request_repository)

    async def close_resources() -> None:
        if workflow_client is not None:
            await workflow_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=auth_service,
        video_request_service=video_request_service,
        workflow_service=workflow_service,
        gallery_service=gallery_service,
        highlights_service=highlights_service,
        admin_service=admin_service,
        close_resources=close_resources,
    )
