"""
File mover for relocating media files.

Handles a single transfer with dry-run support, an optional
timestamp-preserving copy mode and collision-free naming.
"""

import logging
import os
import shutil
import uuid
from pathlib import Path
from typing import Optional

from ..core.types import MoveOutcome, MoveStatus
from ..errors import (
    CopyFailed,
    DirCreateFailed,
    MoveError,
    MoveFailed,
    RenameFailed,
)
from .strategy import NameReservations

logger = logging.getLogger(__name__)


class FileMover:
    """Relocate one file at a time into a destination directory."""

    def __init__(
        self,
        dry_run: bool = False,
        preserve_times: bool = False,
        reservations: Optional[NameReservations] = None,
    ):
        """
        Initialize file mover.

        Args:
            dry_run: If True, report intended actions without touching files
            preserve_times: Copy with timestamps then delete, instead of moving
            reservations: Shared name table; pass the same instance to every
                mover that may target the same directories concurrently
        """
        self.dry_run = dry_run
        self.preserve_times = preserve_times
        self.reservations = reservations or NameReservations()

    @property
    def method(self) -> str:
        return "copy" if self.preserve_times else "move"

    def move_one(self, source: Path, destination_dir: Path) -> MoveOutcome:
        """
        Move a file and report the outcome.

        Per-file errors are logged and returned as a failed outcome; they are
        never raised.

        Args:
            source: File to relocate
            destination_dir: Directory to place it in

        Returns:
            Outcome of the move
        """
        source = Path(source)
        try:
            target = self.transfer(source, destination_dir)
        except RenameFailed as e:
            logger.warning(f"WARNING: {e}")
            return self._failure(source, e.target, e)
        except MoveError as e:
            logger.error(f"ERROR: {e}")
            return self._failure(source, e.target, e)
        except OSError as e:
            logger.error(f"ERROR: unexpected failure moving '{source}': {e}")
            return self._failure(source, None, e)

        return MoveOutcome(
            source_path=source,
            target_path=target,
            status=MoveStatus.SUCCESS,
            method=self.method,
            dry_run=self.dry_run,
        )

    def _failure(
        self, source: Path, target: Optional[Path], error: Exception
    ) -> MoveOutcome:
        return MoveOutcome(
            source_path=source,
            target_path=target,
            status=MoveStatus.FAILURE,
            method=self.method,
            dry_run=self.dry_run,
            error=str(error),
        )

    def transfer(self, source: Path, destination_dir: Path) -> Path:
        """
        Relocate source into destination_dir under a collision-free name.

        Args:
            source: File to relocate
            destination_dir: Directory to place it in

        Returns:
            Final path of the file (the planned path in dry-run mode)

        Raises:
            DirCreateFailed: Destination directory could not be created
            CopyFailed: Copy failed; the source is untouched
            RenameFailed: Copy landed but could not be given its final name
            MoveFailed: Move failed; the source is untouched
        """
        source = Path(source)
        destination_dir = Path(destination_dir)

        if not self.dry_run:
            try:
                destination_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DirCreateFailed(
                    source,
                    None,
                    f"failed to create dir '{destination_dir}': {e}",
                ) from e

        final_name = self.reservations.reserve(destination_dir, source.name)
        target = destination_dir / final_name

        if self.dry_run:
            # Reservation is kept so later files in the plan see this name as taken
            logger.info(
                f"DRY-RUN: Would move '{source}' -> '{target}' (method={self.method})"
            )
            return target

        try:
            if self.preserve_times:
                self._copy_then_delete(source, target)
            else:
                try:
                    shutil.move(str(source), str(target))
                except OSError as e:
                    raise MoveFailed(
                        source,
                        target,
                        f"move failed for '{source}' -> '{target}': {e}",
                    ) from e
        finally:
            self.reservations.release(destination_dir, final_name)

        logger.info(f"Moved: '{source}' -> '{target}'")
        return target

    def _copy_then_delete(self, source: Path, target: Path) -> None:
        """
        Copy source next to target, rename it into place, delete source.

        The copy is staged under a hidden temporary name so an interrupted
        copy never shows up under the final name.
        """
        staging = target.parent / f".{target.name}.{uuid.uuid4().hex[:8]}.partial"

        try:
            shutil.copyfile(source, staging)
            stat = source.stat()
            os.utime(staging, ns=(stat.st_atime_ns, stat.st_mtime_ns))
        except OSError as e:
            staging.unlink(missing_ok=True)
            raise CopyFailed(
                source,
                target,
                f"copy failed for '{source}' -> '{target.parent}': {e}",
            ) from e

        try:
            os.replace(staging, target)
        except OSError as e:
            raise RenameFailed(
                source,
                staging,
                f"failed to rename '{staging}' -> '{target}': {e}",
            ) from e

        try:
            source.unlink()
        except OSError as e:
            logger.warning(f"WARNING: failed to remove source '{source}' after copy: {e}")
