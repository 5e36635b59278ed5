"""Pydantic models for mkvmerge JSON identification output."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from mkvsame.models.track import UNDETERMINED, Track, TrackType


class MkvmergeTrackProperties(BaseModel):
    """Track properties block of ``mkvmerge -J``."""

    default_track: bool
    track_name: Optional[str] = None
    language: str
    language_ietf: Optional[str] = None


class MkvmergeTrack(BaseModel):
    """One entry of the ``tracks`` array."""

    id: int = Field(..., ge=0)
    type: Literal["audio", "video", "subtitles"]
    properties: MkvmergeTrackProperties

    def to_track(self) -> Track:
        """Convert to the internal track model."""
        return Track(
            id=self.id,
            type=TrackType(self.type),
            language=self.properties.language,
            language_ietf=self.properties.language_ietf or UNDETERMINED,
            name=self.properties.track_name,
            is_default=self.properties.default_track,
        )


class MkvmergeIdentification(BaseModel):
    """Top-level ``mkvmerge -J`` document (only the parts we use)."""

    tracks: List[MkvmergeTrack]
