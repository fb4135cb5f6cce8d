"""
Type definitions for the organizer pipeline.
"""

import threading
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr


class Category(str, Enum):
    """Classification bucket for a media file."""

    PHOTO = "photo"
    VIDEO = "video"
    AUDIO = "audio"


class MoveStatus(str, Enum):
    """Terminal state of a single move."""

    SUCCESS = "success"
    FAILURE = "failure"


class MediaFile(BaseModel):
    """A file discovered under the input directory."""

    source_path: Path
    name: str
    extension: str = ""
    modified: date

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_path(cls, path: Path) -> "MediaFile":
        """
        Build a record from a file on disk.

        The modification date is taken in local time.

        Args:
            path: Path to an existing file

        Returns:
            MediaFile for the path
        """
        # Imported here to avoid a cycle with shared.media_utils
        from ..shared.media_utils import get_extension

        path = Path(path).absolute()
        mtime = path.stat().st_mtime
        return cls(
            source_path=path,
            name=path.name,
            extension=get_extension(path.name),
            modified=datetime.fromtimestamp(mtime).date(),
        )


class MoveOutcome(BaseModel):
    """Result of relocating one file."""

    source_path: Path
    target_path: Optional[Path] = None
    status: MoveStatus
    method: str = "move"
    dry_run: bool = False
    error: Optional[str] = None

    model_config = ConfigDict(frozen=True)

    @property
    def succeeded(self) -> bool:
        return self.status == MoveStatus.SUCCESS


class RunState(BaseModel):
    """Counters for a run, updated as outcomes arrive."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    index: int = 0
    cancelled: bool = False
    dry_run: bool = False
    outcomes: List[MoveOutcome] = Field(default_factory=list)

    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    def record(self, outcome: MoveOutcome) -> int:
        """
        Record a finished move.

        Safe to call from worker threads.

        Args:
            outcome: Outcome of the move

        Returns:
            Number of outcomes recorded so far
        """
        with self._lock:
            self.index += 1
            if outcome.succeeded:
                self.succeeded += 1
            else:
                self.failed += 1
            self.outcomes.append(outcome)
            return self.index

    @property
    def not_dispatched(self) -> int:
        """Files that never reached the mover (only non-zero after cancellation)."""
        return max(self.total - self.succeeded - self.failed, 0)
