"""Executors applying default-flag edits to media files."""

import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence

from mkvsame.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class ExecutionOutcome:
    """Result of one mutation tool invocation."""

    success: bool
    output: str = ""  # Diagnostic text captured on failure


class MutationExecutor(ABC):
    """Abstract base class for mutation executors."""

    @abstractmethod
    def execute(self, arguments: Sequence[str]) -> ExecutionOutcome:
        """Run the mutation tool.

        Args:
            arguments: Tool arguments, starting with the file path

        Returns:
            ExecutionOutcome describing success or failure
        """
        pass


class MkvPropEditExecutor(MutationExecutor):
    """Executor for MKV files using mkvpropedit (in-place edit)."""

    def __init__(self, executable: str = "mkvpropedit", timeout_seconds: Optional[int] = None):
        """Initialize executor.

        Args:
            executable: mkvpropedit program name or path
            timeout_seconds: Maximum time per file, None to wait indefinitely
        """
        self.executable = executable
        self.timeout_seconds = timeout_seconds

    def execute(self, arguments: Sequence[str]) -> ExecutionOutcome:
        cmd = [self.executable, *arguments]
        file = arguments[0] if arguments else None

        logger.debug("Executing mkvpropedit", file=file, command=cmd)

        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired:
            logger.error("mkvpropedit timeout", file=file, timeout=self.timeout_seconds)
            return ExecutionOutcome(
                success=False, output=f"timed out after {self.timeout_seconds}s"
            )
        except OSError as e:
            logger.error("Could not start mkvpropedit", file=file, error=str(e))
            return ExecutionOutcome(success=False, output=str(e))

        if result.returncode != 0:
            # mkvpropedit reports its errors on stdout
            output = "\n".join(
                part.strip() for part in (result.stdout, result.stderr) if part and part.strip()
            )
            logger.error(
                "mkvpropedit failed",
                file=file,
                returncode=result.returncode,
                output=output,
            )
            return ExecutionOutcome(success=False, output=output)

        logger.info("Successfully updated MKV", file=file)
        return ExecutionOutcome(success=True)
