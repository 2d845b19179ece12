"""Build pipeline exceptions."""

from __future__ import annotations

from typing import Optional


class BuilderError(Exception):
    """Base error for a failed site build."""

    stage = "build"

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.message} ({self.path})"
        return self.message


class FilesystemError(BuilderError):
    """Directory or file write failure."""

    stage = "filesystem"


class FetchError(BuilderError):
    """Network failure or malformed response from the results source."""

    stage = "fetch"


class ArchiveError(BuilderError):
    """Failure while writing the distribution archive."""

    stage = "archive"
