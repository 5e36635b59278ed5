"""Shared pytest fixtures for mkvsame tests."""

from pathlib import Path
from typing import Optional, Sequence

import pytest

from mkvsame.config import Config
from mkvsame.core.analyzer import MetadataProvider
from mkvsame.core.errors import DeserializeError
from mkvsame.core.executor import ExecutionOutcome, MutationExecutor
from mkvsame.models.file import MediaFile
from mkvsame.models.track import Track, TrackType


def audio(id: int, language: str, language_ietf: str = "und", name: Optional[str] = None,
          is_default: bool = False) -> Track:
    """Build an audio track."""
    return Track(id, TrackType.AUDIO, language, language_ietf, name, is_default)


def subtitle(id: int, language: str, language_ietf: str = "und", name: Optional[str] = None,
             is_default: bool = False) -> Track:
    """Build a subtitle track."""
    return Track(id, TrackType.SUBTITLES, language, language_ietf, name, is_default)


def video(id: int) -> Track:
    """Build a video track."""
    return Track(id, TrackType.VIDEO, "und", "und")


class FakeProvider(MetadataProvider):
    """Metadata provider serving prepared files by file name."""

    def __init__(self, files: dict[str, list[Track]], broken: Sequence[str] = ()):
        self.files = files
        self.broken = set(broken)
        self.calls: list[Path] = []

    def identify(self, file_path: Path) -> MediaFile:
        self.calls.append(file_path)
        if file_path.name in self.broken:
            raise DeserializeError(file_path, ValueError("bad json"))
        return MediaFile(path=file_path, tracks=list(self.files[file_path.name]))


class FakeExecutor(MutationExecutor):
    """Executor recording invocations instead of running mkvpropedit."""

    def __init__(self, failing: Sequence[str] = ()):
        self.failing = set(failing)
        self.calls: list[list[str]] = []

    def execute(self, arguments: Sequence[str]) -> ExecutionOutcome:
        self.calls.append(list(arguments))
        if Path(arguments[0]).name in self.failing:
            return ExecutionOutcome(success=False, output="Error: file is read-only")
        return ExecutionOutcome(success=True)


@pytest.fixture
def default_config():
    """Create a default configuration for testing."""
    return Config()


@pytest.fixture
def mixed_tracks():
    """Tracks of mixed kinds with consecutive ids."""
    return [
        Track(1, TrackType.AUDIO, "eng", "en", "Track 1"),
        Track(2, TrackType.VIDEO, "fre", "fr", "Track 2"),
        Track(3, TrackType.SUBTITLES, "ger", "de", "Track 3"),
    ]


@pytest.fixture
def episode_tracks():
    """Track layout of a typical anime episode."""
    return [
        video(0),
        audio(1, "jpn", "ja", is_default=True),
        audio(2, "eng", "en", "Dub"),
        subtitle(3, "eng", "en", "Signs & Songs"),
        subtitle(4, "eng", "en", "Full", is_default=True),
        subtitle(5, "ger", "de"),
    ]


@pytest.fixture
def episode_batch(episode_tracks):
    """Three episodes sharing the same track layout."""
    return [
        MediaFile(path=Path(f"/media/show/E0{n}.mkv"), tracks=list(episode_tracks))
        for n in range(1, 4)
    ]
