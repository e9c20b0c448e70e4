"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from videosia.api.admin import router as admin_router
from videosia.api.auth import CurrentUser, require_user
from videosia.api.models import (
    HighlightsRequest,
    LoginRequest,
    RegisterRequest,
    TogglePostedRequest,
    TriggerRequest,
    VideoRequestCreate,
)
from videosia.app_logging import configure_logging
from videosia.config import parse_cors_origins
from videosia.containers import AppContainer
from videosia.services.errors import ServiceError


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(admin_router)
    app.mount(
        "/highlights",
        StaticFiles(directory=container.settings.highlights_dir, check_dir=False),
        name="highlights",
    )

    @app.exception_handler(ServiceError)
    async def service_error_handler(
        request: Request, exc: ServiceError
    ) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(Exception)
    async def unexpected_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error", extra={"path": request.url.path})
        return JSONResponse(
            status_code=500,
            content={"error": "Erro interno do servidor", "details": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok", "timestamp": datetime.now(tz=UTC).isoformat()}

    @app.post("/login")
    async def login(payload: LoginRequest, request: Request) -> dict[str, object]:
        """Exchange credentials for a bearer token."""
        state_container: AppContainer = request.app.state.container
        result = state_container.auth_service.login(payload.email, payload.password)
        logger.info("User logged in", extra={"user_id": result.user["id"]})
        return result.to_payload()

    @app.post("/register")
    async def register(payload: RegisterRequest, request: Request) -> dict[str, object]:
        """Create an account and return a bearer token."""
        state_container: AppContainer = request.app.state.container
        result = state_container.auth_service.register(
            usuario=payload.usuario,
            email=payload.email,
            password=payload.password,
            role=payload.role,
            artistic_name=payload.artistic_name,
            musical_genre=payload.musical_genre,
            company_name=payload.company_name,
            managed_artists_count=payload.managed_artists_count,
        )
        logger.info("User registered", extra={"user_id": result.user["id"]})
        return result.to_payload()

    @app.get("/me")
    async def me(user: CurrentUser = Depends(require_user)) -> dict[str, object]:
        """Confirm that the bearer token is valid."""
        return {"message": "Acesso autorizado", "user": user.claims}

    @app.post("/api/video-request")
    async def create_video_request(
        payload: VideoRequestCreate,
        request: Request,
        user: CurrentUser = Depends(require_user),
    ) -> dict[str, object]:
        """Record a pending video request."""
        state_container: AppContainer = request.app.state.container
        record = state_container.video_request_service.create(
            user_id=user.id,
            metodo=payload.metodo,
            frase=payload.frase,
            num_images=payload.num_images,
        )
        return {"success": True, "request": record.to_payload()}

    @app.get("/api/video-requests")
    async def list_video_requests(
        request: Request,
        status: str | None = None,
        user: CurrentUser = Depends(require_user),
    ) -> dict[str, object]:
        """List the caller's video requests, newest first."""
        state_container: AppContainer = request.app.state.container
        records = state_container.video_request_service.list_for_user(user.id, status)
        return {"requests": [record.to_payload() for record in records]}

    @app.post("/api/trigger-n8n", dependencies=[Depends(require_user)])
    async def trigger_workflow(
        payload: TriggerRequest, request: Request
    ) -> dict[str, object]:
        """Forward a generation request to the workflow webhook."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.workflow_service.trigger(
            request_id=_optional_str(payload.request_id),
            user=_optional_str(payload.user),
            metodo=payload.metodo,
            frase=payload.frase,
            images=payload.images,
        )
        return {"success": True, "result": result}

    @app.get("/api/gallery")
    async def gallery(
        request: Request, user: CurrentUser = Depends(require_user)
    ) -> dict[str, object]:
        """List the caller's generated videos."""
        state_container: AppContainer = request.app.state.container
        videos = await state_container.gallery_service.list_videos(user.id)
        return {"videos": [video.to_payload() for video in videos]}

    @app.post("/api/gallery/toggle-posted")
    async def toggle_posted(
        payload: TogglePostedRequest,
        request: Request,
        user: CurrentUser = Depends(require_user),
    ) -> dict[str, object]:
        """Store the posted flag of a gallery video."""
        state_container: AppContainer = request.app.state.container
        record = state_container.gallery_service.toggle_posted(
            user.id, payload.drive_file_id, payload.is_posted
        )
        return {
            "success": True,
            "data": {
                "id": record.id,
                "user_id": record.user_id,
                "drive_file_id": record.drive_file_id,
                "is_posted": record.is_posted,
            },
        }

    @app.post("/api/youtube-highlights", dependencies=[Depends(require_user)])
    async def youtube_highlights(
        payload: HighlightsRequest, request: Request
    ) -> dict[str, object]:
        """Cut highlight clips from a YouTube video."""
        state_container: AppContainer = request.app.state.container
        highlights = await state_container.highlights_service.generate(payload.url)
        return {"success": True, "highlights": highlights}

    return app


def _optional_str(value: str | int | None) -> str | None:
    return None if value is None else str(value)
