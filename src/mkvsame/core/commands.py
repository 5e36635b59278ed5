"""Build mkvpropedit default-flag edits for a chosen identity."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence

from mkvsame.models.file import MediaFile
from mkvsame.models.track import Identity, Track


@dataclass(frozen=True)
class TrackEdit:
    """A single ``--edit track:N --set flag-default=X`` instruction."""

    track_number: int  # 1-based, as mkvpropedit expects
    default: bool

    def to_args(self) -> list[str]:
        return [
            "--edit",
            f"track:{self.track_number}",
            "--set",
            f"flag-default={int(self.default)}",
        ]


def synthesize_edits(
    tracks: Sequence[Track], identity: Optional[Identity]
) -> list[TrackEdit]:
    """Create one edit per track, flagging tracks matching the identity.

    A track matches when its language field selected by
    ``identity.match_key`` and its name both equal the identity's.
    Every other track gets its default flag cleared.

    Args:
        tracks: All tracks of one kind in one file, in file order
        identity: Chosen identity, or None when nothing was chosen

    Returns:
        Edits in track order (empty if no identity)
    """
    if identity is None:
        return []

    key = identity.match_key
    target = identity.language_for(key)

    return [
        TrackEdit(
            track_number=track.number,
            default=track.language_for(key) == target and track.name == identity.name,
        )
        for track in tracks
    ]


def serialize_edits(edits: Iterable[TrackEdit]) -> list[str]:
    """Flatten edits into mkvpropedit arguments."""
    args: list[str] = []
    for edit in edits:
        args.extend(edit.to_args())
    return args


def build_command(
    path: Path | str, audio_args: Sequence[str], subtitle_args: Sequence[str]
) -> Optional[list[str]]:
    """Assemble mkvpropedit arguments for one file.

    Args:
        path: File to edit
        audio_args: Serialized audio edits
        subtitle_args: Serialized subtitle edits

    Returns:
        ``[path, *audio_args, *subtitle_args]``, or None if there is
        nothing to edit
    """
    if not audio_args and not subtitle_args:
        return None
    return [str(path), *audio_args, *subtitle_args]


@dataclass
class FilePlan:
    """Edits planned for one file."""

    path: Path
    audio: list[TrackEdit] = field(default_factory=list)
    subtitles: list[TrackEdit] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.audio and not self.subtitles

    @property
    def arguments(self) -> Optional[list[str]]:
        return build_command(
            self.path, serialize_edits(self.audio), serialize_edits(self.subtitles)
        )


def plan_file(
    media_file: MediaFile,
    audio: Optional[Identity],
    subtitle: Optional[Identity],
) -> FilePlan:
    """Plan audio and subtitle edits for a file."""
    return FilePlan(
        path=media_file.path,
        audio=synthesize_edits(media_file.audios, audio),
        subtitles=synthesize_edits(media_file.subtitles, subtitle),
    )
