"""Track data models."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

UNDETERMINED = "und"  # Language sentinel used by mkvmerge for unknown languages


class TrackType(Enum):
    """Track kinds reported by mkvmerge."""

    AUDIO = "audio"
    VIDEO = "video"
    SUBTITLES = "subtitles"


class LanguageKey(Enum):
    """Which language field of a track is used for matching."""

    CODE = "language"  # ISO 639-2 code (e.g., "eng")
    IETF = "language_ietf"  # IETF BCP 47 tag (e.g., "en")


@dataclass(frozen=True)
class Identity:
    """What a track is, independent of which file it lives in.

    Two identities are equal only if language, IETF tag and name all match.
    A missing name only matches another missing name.
    """

    language: str
    language_ietf: str
    name: Optional[str] = None

    @property
    def match_key(self) -> LanguageKey:
        """Language field used to find this identity's tracks in a file.

        The IETF tag is preferred; the short code is used when the tag is
        undetermined.
        """
        if self.language_ietf == UNDETERMINED:
            return LanguageKey.CODE
        return LanguageKey.IETF

    def language_for(self, key: LanguageKey) -> str:
        return getattr(self, key.value)

    @property
    def label(self) -> str:
        """Menu label, e.g. ``eng (Commentary)`` or ``eng``."""
        if self.name is not None:
            return f"{self.language} ({self.name})"
        return self.language

    def __str__(self) -> str:
        return self.label


@dataclass(frozen=True)
class Track:
    """Represents one track of a Matroska file."""

    id: int  # mkvmerge track id (0-based)
    type: TrackType
    language: str = UNDETERMINED  # ISO 639-2 code
    language_ietf: str = UNDETERMINED  # IETF tag
    name: Optional[str] = None  # Track name
    is_default: bool = False  # Whether the default flag is set

    @property
    def number(self) -> int:
        """Track number as addressed by mkvpropedit (1-based)."""
        return self.id + 1

    def language_for(self, key: LanguageKey) -> str:
        return getattr(self, key.value)

    def identity(self) -> Identity:
        return Identity(
            language=self.language,
            language_ietf=self.language_ietf,
            name=self.name,
        )

    def __str__(self) -> str:
        """Human-readable representation."""
        default_marker = " [DEFAULT]" if self.is_default else ""
        name_part = f" ({self.name})" if self.name is not None else ""
        return (
            f"Track {self.id}: {self.type.value} {self.language}/{self.language_ietf}"
            f"{name_part}{default_marker}"
        )
