"""Human and JSON renderings of tracks and results."""

import json
from typing import Sequence

from mkvsame.core.errors import SerializeError
from mkvsame.models.file import MediaFile, ProcessResult
from mkvsame.models.track import Track


def describe_track(track: Track) -> str:
    """Render a track as ``[id] D eng (Name) | en``."""
    default_marker = "D " if track.is_default else ""
    name_part = f" ({track.name})" if track.name is not None else ""
    return f"[{track.id}] {default_marker}{track.language}{name_part} | {track.language_ietf}"


def describe_file(media_file: MediaFile) -> list[str]:
    """List the audio and subtitle tracks of a file with their default flags."""
    lines = [" ** Audios **"]
    lines.extend(describe_track(track) for track in media_file.audios)
    lines.append(" ** Subtitles **")
    lines.extend(describe_track(track) for track in media_file.subtitles)
    return lines


def dump_results(results: Sequence[ProcessResult]) -> str:
    """Serialize process results to JSON.

    Raises:
        SerializeError: If a result holds a value JSON cannot encode
    """
    payload = [
        {
            "file": str(result.file_path),
            "status": result.status,
            "arguments": result.arguments,
            "reason": result.reason,
            "error": result.error,
        }
        for result in results
    ]

    try:
        return json.dumps(payload, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise SerializeError(e) from e
