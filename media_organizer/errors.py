"""
Error types for the organizer.

Per-file errors derive from MoveError and are converted into failed outcomes
by the mover. Run-level errors abort before any file is touched.
"""

from pathlib import Path
from typing import Optional


class OrganizerError(Exception):
    """Base error for the project."""


class InputPathError(OrganizerError):
    """Input directory is missing or not a directory."""


class MoveError(OrganizerError):
    """A single file could not be relocated."""

    def __init__(
        self,
        source: Path,
        target: Optional[Path],
        message: str,
    ):
        self.source = source
        self.target = target
        super().__init__(message)


class DirCreateFailed(MoveError):
    pass


class CopyFailed(MoveError):
    pass


class MoveFailed(MoveError):
    pass


class RenameFailed(MoveError):
    """Copy landed but could not be renamed; the source is still present."""
