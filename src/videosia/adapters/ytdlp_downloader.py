"""yt-dlp backed video downloader."""

import logging
import time
from dataclasses import dataclass
from pathlib import Path

import yt_dlp

from videosia.services.highlights import VideoDownloader

logger = logging.getLogger(__name__)


@dataclass
class YtDlpDownloader(VideoDownloader):
    """Downloads platform videos as mp4 files."""

    def download(self, url: str, output_dir: Path) -> Path:
        """Download a video and return its local path."""
        prefix = f"video_{int(time.time() * 1000)}"
        options = {
            "format": "mp4",
            "outtmpl": str(output_dir / f"{prefix}.%(ext)s"),
            "nocheckcertificate": True,
            "no_warnings": True,
            "quiet": True,
            "prefer_free_formats": True,
            "http_headers": {"Referer": "youtube.com", "User-Agent": "googlebot"},
        }
        logger.info("Downloading video", extra={"url": url})
        with yt_dlp.YoutubeDL(options) as ydl:
            ydl.download([url])

        expected = output_dir / f"{prefix}.mp4"
        if expected.exists():
            return expected
        for candidate in sorted(output_dir.glob(f"{prefix}.*")):
            return candidate
        raise RuntimeError("Arquivo não encontrado após download")
