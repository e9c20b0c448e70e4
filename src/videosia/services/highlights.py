"""YouTube highlight clip extraction."""

import asyncio
import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from videosia.services.errors import ServiceError

logger = logging.getLogger(__name__)

CLIP_POSITIONS = (0.2, 0.5, 0.8)
CLIP_SECONDS = 15.0


class VideoDownloader(Protocol):
    """Interface for fetching a remote video to disk."""

    def download(self, url: str, output_dir: Path) -> Path:
        """Download a video and return its local path."""


class ClipExtractor(Protocol):
    """Interface for probing and cutting video files."""

    def probe_duration(self, video_path: Path) -> float:
        """Return the duration of a video in seconds."""

    def cut_clip(
        self, video_path: Path, start: float, duration: float, output_path: Path
    ) -> None:
        """Write a clip of the video to output_path."""


@dataclass
class HighlightsService:
    """Downloads a video and cuts fixed-position highlight clips."""

    downloader: VideoDownloader
    extractor: ClipExtractor
    downloads_dir: Path
    output_dir: Path
    public_prefix: str = "/highlights"

    async def generate(self, url: str | None) -> list[str]:
        """Return public paths of the highlight clips cut from a video."""
        if not url:
            raise ServiceError(400, "URL do YouTube é obrigatória")
        logger.info("Highlights requested", extra={"url": url})
        try:
            return await asyncio.to_thread(self._generate, url)
        except Exception as exc:
            logger.exception("Failed to generate highlights", extra={"url": url})
            raise ServiceError(
                500, "Erro ao processar vídeo", details=str(exc)
            ) from exc

    def _generate(self, url: str) -> list[str]:
        self.downloads_dir.mkdir(parents=True, exist_ok=True)
        self.output_dir.mkdir(parents=True, exist_ok=True)
        video_path = self.downloader.download(url, self.downloads_dir)
        duration = self.extractor.probe_duration(video_path)
        if not duration:
            raise RuntimeError("Não foi possível obter duração do vídeo")

        stamp = int(time.time() * 1000)
        paths: list[str] = []
        for index, position in enumerate(CLIP_POSITIONS, start=1):
            filename = f"highlight_{stamp}_{index}.mp4"
            self.extractor.cut_clip(
                video_path,
                start=duration * position,
                duration=CLIP_SECONDS,
                output_path=self.output_dir / filename,
            )
            paths.append(f"{self.public_prefix}/{filename}")
        logger.info("Highlights generated", extra={"clips": len(paths)})
        return paths
