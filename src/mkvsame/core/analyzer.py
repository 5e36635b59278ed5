"""Track metadata extraction using mkvmerge."""

import json
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path

from pydantic import ValidationError

from mkvsame.core.errors import DeserializeError, ToolError
from mkvsame.models.file import MediaFile
from mkvsame.models.mkvmerge import MkvmergeIdentification
from mkvsame.utils.logger import get_logger

logger = get_logger(__name__)


def parse_identification(path: Path, output: str) -> MediaFile:
    """Parse ``mkvmerge -J`` output into a MediaFile.

    Args:
        path: File the output belongs to
        output: Raw JSON text

    Returns:
        MediaFile with tracks in mkvmerge order

    Raises:
        DeserializeError: If the output is not valid identification JSON
    """
    try:
        identification = MkvmergeIdentification.model_validate_json(output)
    except ValidationError as e:
        logger.error(
            "Failed to parse mkvmerge output",
            file=str(path),
            error_count=e.error_count(),
        )
        raise DeserializeError(path, e) from e

    return MediaFile(
        path=path,
        tracks=[track.to_track() for track in identification.tracks],
    )


class MetadataProvider(ABC):
    """Source of track metadata for media files."""

    @abstractmethod
    def identify(self, file_path: Path) -> MediaFile:
        """Read the tracks of a file.

        Args:
            file_path: Path to the media file

        Returns:
            MediaFile describing the file's tracks
        """
        pass


class MkvmergeAnalyzer(MetadataProvider):
    """Identify Matroska tracks with ``mkvmerge -J``."""

    def __init__(self, executable: str = "mkvmerge", timeout_seconds: int = 30):
        """Initialize analyzer.

        Args:
            executable: mkvmerge program name or path
            timeout_seconds: Maximum time for one identification
        """
        self.executable = executable
        self.timeout_seconds = timeout_seconds

    def identify(self, file_path: Path) -> MediaFile:
        """Extract track information from a Matroska file.

        Raises:
            ToolError: If mkvmerge cannot be run or rejects the file
            DeserializeError: If the output cannot be parsed
        """
        logger.debug("Identifying tracks", file=str(file_path))

        cmd = [self.executable, "-J", str(file_path)]

        try:
            result = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self.timeout_seconds
            )
        except FileNotFoundError as e:
            raise ToolError(self.executable, file_path, "executable not found") from e
        except subprocess.TimeoutExpired as e:
            logger.error("mkvmerge timeout", file=str(file_path), timeout=self.timeout_seconds)
            raise ToolError(
                self.executable, file_path, f"timed out after {self.timeout_seconds}s"
            ) from e

        # Exit status 1 only signals warnings
        if result.returncode not in (0, 1):
            detail = self._error_detail(result.stdout) or result.stderr.strip()
            logger.error(
                "mkvmerge failed",
                file=str(file_path),
                returncode=result.returncode,
                detail=detail,
            )
            raise ToolError(self.executable, file_path, detail or f"exit status {result.returncode}")

        media_file = parse_identification(file_path, result.stdout)

        logger.info(
            "Tracks identified",
            file=str(file_path),
            track_count=len(media_file.tracks),
            audio_languages=[t.language for t in media_file.audios],
            subtitle_languages=[t.language for t in media_file.subtitles],
        )

        return media_file

    @staticmethod
    def _error_detail(output: str) -> str:
        """Extract the ``errors`` list mkvmerge reports in its JSON output."""
        try:
            errors = json.loads(output).get("errors", [])
        except (json.JSONDecodeError, AttributeError):
            return ""
        return "; ".join(str(error) for error in errors)
