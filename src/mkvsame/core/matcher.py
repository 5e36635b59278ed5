"""Find the track identities shared by every file of a batch."""

from typing import Iterable, Sequence

from mkvsame.models.file import MediaFile
from mkvsame.models.track import UNDETERMINED, Identity, LanguageKey, Track, TrackType
from mkvsame.utils.logger import get_logger

logger = get_logger(__name__)


def extract_identities(tracks: Iterable[Track], key: LanguageKey) -> list[Identity]:
    """Project tracks to identities, dropping undetermined languages.

    Only the field selected by ``key`` is checked against ``"und"``.
    Order follows the tracks; duplicates are kept.

    Args:
        tracks: Tracks of a single kind from one file
        key: Language representation that must be determined

    Returns:
        List of identities in track order
    """
    return [
        track.identity()
        for track in tracks
        if track.language_for(key) != UNDETERMINED
    ]


def common_identities(
    files: Sequence[MediaFile], track_type: TrackType, key: LanguageKey
) -> list[Identity]:
    """Get the identities present in every file.

    The first file seeds the result; each following file keeps only the
    entries it also contains. Survivors keep the first file's order. Once
    a file contributes nothing the result stays empty.

    Args:
        files: Files of the batch, in processing order
        track_type: Kind of track to compare
        key: Language representation used for filtering

    Returns:
        Identities common to all files
    """
    if not files:
        return []

    common = extract_identities(files[0].tracks_of(track_type), key)
    for media_file in files[1:]:
        if not common:
            break
        present = extract_identities(media_file.tracks_of(track_type), key)
        common = [identity for identity in common if identity in present]

    return common


def merge_identities(
    by_code: Sequence[Identity], by_ietf: Sequence[Identity]
) -> list[Identity]:
    """Ordered union of both common sets.

    Entries found by short code come first in their order, followed by the
    entries only found by IETF tag. Each identity appears once.
    """
    merged: list[Identity] = []
    for identity in [*by_code, *by_ietf]:
        if identity not in merged:
            merged.append(identity)
    return merged


def find_candidates(files: Sequence[MediaFile], track_type: TrackType) -> list[Identity]:
    """Get the selectable identities of one track kind for a batch.

    Args:
        files: Files of the batch
        track_type: Kind of track (audio or subtitles)

    Returns:
        De-duplicated identities, short-code matches first
    """
    by_code = common_identities(files, track_type, LanguageKey.CODE)
    by_ietf = common_identities(files, track_type, LanguageKey.IETF)
    candidates = merge_identities(by_code, by_ietf)

    logger.debug(
        "Common identities computed",
        track_type=track_type.value,
        file_count=len(files),
        by_code=[identity.label for identity in by_code],
        by_ietf=[identity.label for identity in by_ietf],
        candidates=[identity.label for identity in candidates],
    )

    return candidates
