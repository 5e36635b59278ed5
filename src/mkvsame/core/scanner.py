"""File scanner for discovering Matroska files."""

from pathlib import Path
from typing import Iterable, List, Optional

from mkvsame.utils.logger import get_logger

logger = get_logger(__name__)


class FileScanner:
    """Scan directories for Matroska files."""

    SUPPORTED_EXTENSIONS = {".mkv"}

    def __init__(self, extensions: Optional[Iterable[str]] = None):
        """Initialize scanner.

        Args:
            extensions: File extensions to include (default: .mkv)
        """
        if extensions is None:
            extensions = self.SUPPORTED_EXTENSIONS

        # Normalize extensions (ensure they start with dot and are lowercase)
        self.extensions = {
            ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions
        }

    def scan(self, path: Path, recursive: bool = False) -> List[Path]:
        """Scan a path for media files.

        Args:
            path: Path to scan (file or directory)
            recursive: If True, scan subdirectories recursively

        Returns:
            List of file paths, sorted by path

        Raises:
            FileNotFoundError: If path doesn't exist
            ValueError: If path is not a file or directory
        """
        if not path.exists():
            raise FileNotFoundError(f"Path not found: {path}")

        if path.is_file():
            if path.suffix.lower() in self.extensions:
                logger.debug("Single file matched", file=str(path))
                return [path]
            logger.warning(
                "File extension not supported",
                file=str(path),
                extension=path.suffix,
                supported=sorted(self.extensions),
            )
            return []

        if path.is_dir():
            candidates = path.rglob("*") if recursive else path.glob("*")
            files = sorted(
                candidate
                for candidate in candidates
                if candidate.is_file() and candidate.suffix.lower() in self.extensions
            )

            logger.info(
                "Directory scan complete",
                directory=str(path),
                recursive=recursive,
                total_files=len(files),
            )

            return files

        raise ValueError(f"Path is neither a file nor a directory: {path}")
