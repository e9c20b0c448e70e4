"""ffmpeg/ffprobe backed clip extraction."""

import json
import subprocess
from dataclasses import dataclass
from pathlib import Path

from videosia.services.highlights import ClipExtractor


@dataclass
class FfmpegClipExtractor(ClipExtractor):
    """Probes and cuts videos with the ffmpeg command line tools."""

    ffmpeg_bin: str = "ffmpeg"
    ffprobe_bin: str = "ffprobe"
    timeout: float = 600

    def probe_duration(self, video_path: Path) -> float:
        """Return the container duration in seconds."""
        result = subprocess.run(
            [
                self.ffprobe_bin,
                "-v",
                "error",
                "-show_entries",
                "format=duration",
                "-of",
                "json",
                str(video_path),
            ],
            capture_output=True,
            text=True,
            check=True,
            timeout=self.timeout,
        )
        payload = json.loads(result.stdout or "{}")
        return float(payload.get("format", {}).get("duration") or 0.0)

    def cut_clip(
        self, video_path: Path, start: float, duration: float, output_path: Path
    ) -> None:
        """Write a clip of the video to output_path."""
        subprocess.run(
            [
                self.ffmpeg_bin,
                "-y",
                "-ss",
                f"{start:.3f}",
                "-i",
                str(video_path),
                "-t",
                f"{duration:.3f}",
                str(output_path),
            ],
            capture_output=True,
            check=True,
            timeout=self.timeout,
        )
