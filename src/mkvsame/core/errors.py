"""Exception types raised by mkvsame."""

from pathlib import Path
from typing import Optional


class MkvSameError(Exception):
    """Base class for all mkvsame errors."""


class DeserializeError(MkvSameError):
    """Track metadata for a file could not be parsed."""

    def __init__(self, path: Path, cause: Optional[Exception] = None):
        self.path = path
        self.cause = cause
        message = f"Unable to deserialize track metadata of {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class SerializeError(MkvSameError):
    """Results could not be serialized."""

    def __init__(self, cause: Optional[Exception] = None):
        self.cause = cause
        message = "Unable to serialize results"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class ToolError(MkvSameError):
    """An external tool could not be run or reported a fatal error."""

    def __init__(self, tool: str, path: Path, detail: str):
        self.tool = tool
        self.path = path
        self.detail = detail
        super().__init__(f"{tool} failed on {path}: {detail}")
