"""Video request submission with cooldown and fire-and-forget trigger."""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from enum import StrEnum
from typing import Any

from videosia.client.api import DashboardApi
from videosia.client.errors import DashboardError, ServerError
from videosia.client.models import Session
from videosia.client.notifications import Cooldown, NotificationCenter
from videosia.domain.requests import METHOD_AUTOMATIC, METHOD_MANUAL

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Solicitação enviada! O vídeo aparecerá na galeria em breve."
SAVE_FAILED_MESSAGE = "Erro ao salvar requisição"
SEND_FAILED_MESSAGE = "Erro ao enviar solicitação."
ANONYMOUS_USER = "anonymous"


class SubmitStatus(StrEnum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


def strip_data_uri(image: str) -> str:
    """Return the payload half of a data URI."""
    _, comma, payload = image.partition(",")
    return payload if comma else image


class RequestSubmitter:
    """Turns selected images and phrase options into a video request."""

    def __init__(  # noqa: PLR0913
        self,
        api: DashboardApi,
        session_provider: Callable[[], Session | None],
        notifications: NotificationCenter,
        cooldown: Cooldown,
        cooldown_ticks: int = 40,
        status_reset_seconds: float = 5,
    ) -> None:
        self.api = api
        self.session_provider = session_provider
        self.notifications = notifications
        self.cooldown = cooldown
        self.cooldown_ticks = cooldown_ticks
        self.status_reset_seconds = status_reset_seconds
        self.status = SubmitStatus.IDLE
        self.images: list[str] = []
        self.auto_phrase = True
        self.custom_phrase = ""
        self._tasks: set[asyncio.Task[None]] = set()
        self._reset_handle: asyncio.TimerHandle | None = None

    @property
    def controls_disabled(self) -> bool:
        return self.status is SubmitStatus.SUBMITTING or self.cooldown.active

    def add_image(self, image: str) -> None:
        if self.controls_disabled:
            return
        self.images.append(image)

    def remove_image(self, index: int) -> None:
        if self.controls_disabled or not 0 <= index < len(self.images):
            return
        del self.images[index]

    def set_auto_phrase(self, enabled: bool) -> None:
        if self.controls_disabled:
            return
        self.auto_phrase = enabled

    def set_custom_phrase(self, phrase: str) -> None:
        if self.controls_disabled:
            return
        self.custom_phrase = phrase

    async def submit(self) -> None:
        """Persist a request and trigger generation without waiting for it."""
        if self.controls_disabled or not self.images:
            return
        if not self.auto_phrase and not self.custom_phrase.strip():
            return
        session = self.session_provider()
        if session is None:
            return

        self.notifications.clear()
        self.cooldown.start(self.cooldown_ticks)
        self._spawn(self.cooldown.run())
        self._cancel_reset()
        self.status = SubmitStatus.SUBMITTING

        method = METHOD_AUTOMATIC if self.auto_phrase else METHOD_MANUAL
        phrase = None if self.auto_phrase else self.custom_phrase
        images = list(self.images)
        try:
            request = await self.api.create_video_request(
                session.token, method, phrase, len(images)
            )
        except DashboardError as exc:
            message = _failure_message(exc)
            logger.warning("Video request failed", extra={"error": message})
            self.status = SubmitStatus.FAILED
            self.notifications.show("error", message)
            return

        payload: dict[str, object] = {
            "request_id": request.id,
            "user": session.user_id or ANONYMOUS_USER,
            "metodo": method,
            "images": [strip_data_uri(image) for image in images],
        }
        if not self.auto_phrase:
            payload["frase"] = self.custom_phrase
        self._spawn(self._trigger(session.token, payload))

        logger.info("Video request created", extra={"request_id": request.id})
        self.status = SubmitStatus.SUCCEEDED
        self.images = []
        self.custom_phrase = ""
        self.notifications.show("success", SUCCESS_MESSAGE)
        loop = asyncio.get_running_loop()
        self._reset_handle = loop.call_later(self.status_reset_seconds, self._reset)

    async def close(self) -> None:
        """Cancel background work owned by the submitter."""
        self._cancel_reset()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def _trigger(self, token: str, payload: dict[str, object]) -> None:
        try:
            await self.api.trigger_generation(token, payload)
        except DashboardError:
            logger.exception(
                "Generation trigger failed",
                extra={"request_id": payload.get("request_id")},
            )

    def _spawn(self, coro: Coroutine[Any, Any, None]) -> None:
        task = asyncio.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _reset(self) -> None:
        self._reset_handle = None
        if self.status is SubmitStatus.SUCCEEDED:
            self.status = SubmitStatus.IDLE

    def _cancel_reset(self) -> None:
        if self._reset_handle is not None:
            self._reset_handle.cancel()
            self._reset_handle = None


def _failure_message(exc: DashboardError) -> str:
    if isinstance(exc, ServerError):
        return exc.details or exc.error or SAVE_FAILED_MESSAGE
    return SEND_FAILED_MESSAGE
