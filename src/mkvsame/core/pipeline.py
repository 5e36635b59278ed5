"""Batch processing orchestrator."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional, Sequence

from mkvsame.config import Config
from mkvsame.core.analyzer import MetadataProvider, MkvmergeAnalyzer
from mkvsame.core.commands import plan_file
from mkvsame.core.executor import MkvPropEditExecutor, MutationExecutor
from mkvsame.core.matcher import find_candidates
from mkvsame.models.file import MediaFile, ProcessResult
from mkvsame.models.track import Identity, TrackType
from mkvsame.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class Candidates:
    """Identities shared by every file of a batch, per track kind."""

    audio: list[Identity] = field(default_factory=list)
    subtitles: list[Identity] = field(default_factory=list)


class BatchProcessor:
    """Orchestrates identification, matching and flag editing for a batch."""

    def __init__(
        self,
        config: Config,
        provider: Optional[MetadataProvider] = None,
        executor: Optional[MutationExecutor] = None,
    ):
        """Initialize the processor.

        Args:
            config: Application configuration
            provider: Track metadata source (defaults to mkvmerge)
            executor: Flag editor (defaults to mkvpropedit)
        """
        self.config = config
        self.provider = provider or MkvmergeAnalyzer(
            config.tools.mkvmerge, config.tools.identify_timeout_seconds
        )
        self.executor = executor or MkvPropEditExecutor(
            config.tools.mkvpropedit, config.tools.edit_timeout_seconds
        )

    def load(self, paths: Iterable[Path]) -> list[MediaFile]:
        """Identify every file of the batch.

        Any identification error aborts the whole batch.

        Raises:
            DeserializeError: If a file's metadata cannot be parsed
            ToolError: If mkvmerge cannot process a file
        """
        files = [self.provider.identify(path) for path in paths]
        logger.info("Batch loaded", file_count=len(files))
        return files

    def candidates(self, files: Sequence[MediaFile]) -> Candidates:
        return Candidates(
            audio=find_candidates(files, TrackType.AUDIO),
            subtitles=find_candidates(files, TrackType.SUBTITLES),
        )

    def apply(
        self,
        files: Sequence[MediaFile],
        audio: Optional[Identity],
        subtitle: Optional[Identity],
    ) -> list[ProcessResult]:
        """Set default flags in every file for the chosen identities.

        Files are processed one at a time in order. A file with nothing to
        edit is skipped; a failed edit is recorded and the batch goes on.

        Args:
            files: Loaded batch
            audio: Chosen audio identity, or None
            subtitle: Chosen subtitle identity, or None

        Returns:
            One ProcessResult per file
        """
        logger.info(
            "Applying selection",
            file_count=len(files),
            audio=audio.label if audio else None,
            subtitle=subtitle.label if subtitle else None,
            dry_run=self.config.execution.dry_run,
        )

        return [self.process(media_file, audio, subtitle) for media_file in files]

    def process(
        self,
        media_file: MediaFile,
        audio: Optional[Identity],
        subtitle: Optional[Identity],
    ) -> ProcessResult:
        """Plan and apply the edits for a single file."""
        plan = plan_file(media_file, audio, subtitle)
        arguments = plan.arguments

        if arguments is None:
            logger.info("Nothing to edit", file=str(media_file.path))
            return ProcessResult(
                status="skipped", file_path=media_file.path, reason="no_edits"
            )

        if self.config.execution.dry_run:
            logger.info(
                "DRY RUN: Would run mkvpropedit",
                file=str(media_file.path),
                arguments=arguments,
            )
            return ProcessResult(
                status="dry_run", file_path=media_file.path, arguments=arguments
            )

        outcome = self.executor.execute(arguments)

        if outcome.success:
            logger.info(
                "File processed successfully",
                file=str(media_file.path),
                audio_edits=len(plan.audio),
                subtitle_edits=len(plan.subtitles),
            )
            return ProcessResult(
                status="success", file_path=media_file.path, arguments=arguments
            )

        logger.error("Execution failed", file=str(media_file.path))
        return ProcessResult(
            status="failed",
            file_path=media_file.path,
            arguments=arguments,
            reason="execution_failed",
            error=outcome.output,
        )
