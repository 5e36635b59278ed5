"""Media file data models."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

from mkvsame.models.track import Track, TrackType


@dataclass
class MediaFile:
    """A Matroska file and its tracks, in mkvmerge order."""

    path: Path
    tracks: list[Track] = field(default_factory=list)

    def tracks_of(self, track_type: TrackType) -> list[Track]:
        """Get the tracks of one kind, preserving source order."""
        return [track for track in self.tracks if track.type == track_type]

    @property
    def audios(self) -> list[Track]:
        return self.tracks_of(TrackType.AUDIO)

    @property
    def videos(self) -> list[Track]:
        return self.tracks_of(TrackType.VIDEO)

    @property
    def subtitles(self) -> list[Track]:
        return self.tracks_of(TrackType.SUBTITLES)

    def __str__(self) -> str:
        """Human-readable representation."""
        return (
            f"{self.path.name} ({len(self.audios)} audio, "
            f"{len(self.subtitles)} subtitle tracks)"
        )


@dataclass
class ProcessResult:
    """Result of processing a single file."""

    status: Literal["success", "skipped", "failed", "dry_run"]
    file_path: Path
    arguments: list[str] = field(default_factory=list)  # mkvpropedit arguments
    reason: Optional[str] = None  # Reason for skip/failure
    error: Optional[str] = None  # Diagnostic output if failed

    def __str__(self) -> str:
        """Human-readable representation."""
        if self.status == "success":
            return f"✓ {self.file_path.name}: default flags updated"
        elif self.status == "skipped":
            return f"⊘ {self.file_path.name}: Skipped ({self.reason})"
        elif self.status == "dry_run":
            return f"⊙ {self.file_path.name}: Would run mkvpropedit {' '.join(self.arguments)}"
        else:
            return f"✗ {self.file_path.name}: Failed ({self.error or self.reason})"
