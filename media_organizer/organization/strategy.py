"""
Organization strategy for media files.

Defines the destination directory layout and collision-free naming.
"""

import logging
import os
import threading
from collections import defaultdict
from datetime import date
from pathlib import Path
from typing import Collection, Dict, Set

from pydantic import BaseModel, ConfigDict, Field

from ..core.types import Category
from ..shared.media_utils import split_name

logger = logging.getLogger(__name__)


class OrganizationStrategy(BaseModel):
    """Where each category of file is stored under the output root."""

    photo_folder: str = Field(
        default="Photo/Raw",
        description="Base folder for images and unrecognized files",
    )

    video_folder: str = Field(
        default="Video/Raw",
        description="Base folder for video files",
    )

    audio_folder: str = Field(
        default="Audio/Raw",
        description="Base folder for audio files",
    )

    model_config = ConfigDict(frozen=True)

    def base_folder(self, category: Category) -> str:
        """Return the configured base folder for a category."""
        if category == Category.VIDEO:
            return self.video_folder
        elif category == Category.AUDIO:
            return self.audio_folder
        return self.photo_folder

    def get_target_directory(
        self, base_path: Path, category: Category, day: date
    ) -> Path:
        """
        Get target directory for a file.

        Layout is ``base/YYYY/YYYY-MM/YYYY-MM-DD`` under the category folder.

        Args:
            base_path: Output root
            category: Category of the file
            day: Modification date of the file

        Returns:
            Target directory path (not created)
        """
        return (
            Path(base_path)
            / self.base_folder(category)
            / f"{day.year:04d}"
            / f"{day.year:04d}-{day.month:02d}"
            / f"{day.year:04d}-{day.month:02d}-{day.day:02d}"
        )


def resolve_name(existing: Collection[str], desired: str) -> str:
    """
    Pick a filename that is not already taken.

    ``a.jpg`` becomes ``a(1).jpg``, then ``a(2).jpg`` and so on; names without
    an extension become ``name(1)``.

    Args:
        existing: Names already present in the target directory
        desired: Preferred filename

    Returns:
        desired, or the first free numbered variant
    """
    if desired not in existing:
        return desired

    base, ext = split_name(desired)
    counter = 1
    while True:
        if ext:
            candidate = f"{base}({counter}).{ext}"
        else:
            candidate = f"{base}({counter})"
        if candidate not in existing:
            return candidate
        counter += 1


class NameReservations:
    """
    Directory-keyed table of names claimed by in-flight moves.

    Two concurrent moves into the same directory would otherwise both see a
    name as free. Resolution and reservation happen under one lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._reserved: Dict[Path, Set[str]] = defaultdict(set)

    def reserve(self, directory: Path, desired: str) -> str:
        """
        Resolve a collision-free name in directory and hold it.

        A directory that does not exist yet has no entries.

        Args:
            directory: Target directory
            desired: Preferred filename

        Returns:
            The reserved filename
        """
        directory = Path(directory)
        with self._lock:
            try:
                on_disk = set(os.listdir(directory))
            except FileNotFoundError:
                on_disk = set()
            held = self._reserved[directory]
            name = resolve_name(on_disk | held, desired)
            held.add(name)
            if name != desired:
                logger.debug(f"Name conflict in {directory}: {desired} -> {name}")
            return name

    def release(self, directory: Path, name: str) -> None:
        """Forget a reservation once the file exists on disk (or was abandoned)."""
        directory = Path(directory)
        with self._lock:
            held = self._reserved.get(directory)
            if held is None:
                return
            held.discard(name)
            if not held:
                del self._reserved[directory]

    def held(self, directory: Path) -> Set[str]:
        """Snapshot of the names currently reserved in directory."""
        with self._lock:
            return set(self._reserved.get(Path(directory), ()))
