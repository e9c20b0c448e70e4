"""Tests for Drive, yt-dlp and ffmpeg adapters."""

import json
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from videosia.adapters import ffmpeg_clip_extractor, ytdlp_downloader
from videosia.adapters.ffmpeg_clip_extractor import FfmpegClipExtractor
from videosia.adapters.google_drive_storage import GoogleDriveStorage
from videosia.adapters.ytdlp_downloader import YtDlpDownloader


@dataclass
class FakeListRequest:
    payload: dict[str, object]

    def execute(self) -> dict[str, object]:
        return self.payload


@dataclass
class FakeFiles:
    pages: list[dict[str, object]]
    queries: list[dict[str, object]] = field(default_factory=list)

    def list(self, **kwargs: object) -> FakeListRequest:
        self.queries.append(kwargs)
        return FakeListRequest(self.pages.pop(0))


@dataclass
class FakeDriveService:
    files_resource: FakeFiles

    def files(self) -> FakeFiles:
        return self.files_resource


def test_drive_storage_lists_user_folder() -> None:
    files = FakeFiles(
        pages=[
            {"files": [{"id": "folder-1", "name": "user-1"}]},
            {
                "files": [
                    {
                        "id": "f1",
                        "name": "a.mp4",
                        "mimeType": "video/mp4",
                        "thumbnailLink": "thumb",
                        "webContentLink": "dl",
                        "createdTime": "2026-01-01T10:00:00Z",
                        "size": "10",
                    }
                ]
            },
        ]
    )
    storage = GoogleDriveStorage(credentials=None, service=FakeDriveService(files))

    stored = storage.list_user_files("user-1")

    assert stored[0].id == "f1"
    assert stored[0].web_content_link == "dl"
    assert "name = 'user-1'" in files.queries[0]["q"]
    assert files.queries[1]["q"].startswith("'folder-1' in parents")
    assert files.queries[1]["orderBy"] == "createdTime desc"


def test_drive_storage_without_folder_is_empty() -> None:
    storage = GoogleDriveStorage(
        credentials=None, service=FakeDriveService(FakeFiles(pages=[{"files": []}]))
    )

    assert storage.list_user_files("user-1") == []


def test_drive_storage_requires_refresh_token() -> None:
    storage = GoogleDriveStorage.create(None, None, None)

    with pytest.raises(RuntimeError):
        storage.list_user_files("user-1")


def test_ffmpeg_extractor_builds_commands(monkeypatch: pytest.MonkeyPatch) -> None:
    commands: list[list[str]] = []

    def fake_run(command: list[str], **kwargs: object) -> subprocess.CompletedProcess:
        commands.append(command)
        stdout = json.dumps({"format": {"duration": "42.5"}})
        return subprocess.CompletedProcess(command, 0, stdout=stdout, stderr="")

    monkeypatch.setattr(ffmpeg_clip_extractor.subprocess, "run", fake_run)
    extractor = FfmpegClipExtractor()

    duration = extractor.probe_duration(Path("in.mp4"))
    extractor.cut_clip(Path("in.mp4"), 8.5, 15.0, Path("out.mp4"))

    assert duration == 42.5
    assert commands[0][0] == "ffprobe"
    assert commands[1][:4] == ["ffmpeg", "-y", "-ss", "8.500"]
    assert commands[1][-1] == "out.mp4"


def test_ytdlp_downloader_returns_written_file(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> None:
    class FakeYoutubeDL:
        def __init__(self, options: dict[str, object]) -> None:
            self.options = options

        def __enter__(self) -> "FakeYoutubeDL":
            return self

        def __exit__(self, *_args: object) -> None:
            return None

        def download(self, urls: list[str]) -> None:
            template = str(self.options["outtmpl"])
            Path(template.replace("%(ext)s", "mp4")).write_bytes(b"video")

    monkeypatch.setattr(ytdlp_downloader.yt_dlp, "YoutubeDL", FakeYoutubeDL)

    path = YtDlpDownloader().download("https://youtu.be/abc", tmp_path)

    assert path.exists()
    assert path.suffix == ".mp4"
    assert path.name.startswith("video_")
