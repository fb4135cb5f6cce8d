"""
Post-run housekeeping: pruning emptied input directories and ejecting the
source volume.
"""

import logging
import os
import subprocess
import sys
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def prune_empty_directories(root: Path, dry_run: bool = False) -> List[Path]:
    """
    Remove empty directories under root, deepest first. Root is kept.

    In dry-run mode nothing is removed and only directories that are empty
    right now are reported.

    Args:
        root: Input directory
        dry_run: If True, only report

    Returns:
        Directories removed (or that would be removed)
    """
    root = Path(root)
    logger.info(f"Prune enabled: removing empty directories under '{root}' (excluding root)")

    pruned: List[Path] = []
    for current, _, _ in os.walk(root, topdown=False):
        directory = Path(current)
        if directory == root:
            continue

        if dry_run:
            if not any(directory.iterdir()):
                logger.info(f"DRY-RUN PRUNE: would remove '{directory}'")
                pruned.append(directory)
            continue

        try:
            directory.rmdir()
        except OSError:
            # Not empty
            continue
        logger.info(f"Pruned empty directory: '{directory}'")
        pruned.append(directory)

    return pruned


def unmount_command(volume: Path) -> List[str]:
    """Platform command that unmounts volume."""
    if sys.platform == "darwin":
        return ["diskutil", "unmount", str(volume)]
    return ["umount", str(volume)]


def eject_volume(volume: Path, dry_run: bool = False) -> bool:
    """
    Eject (unmount) the input volume.

    Args:
        volume: Mount point of the volume
        dry_run: If True, only report

    Returns:
        True if the volume was (or would be) ejected
    """
    if dry_run:
        logger.info(f"DRY-RUN {volume} would be ejected.")
        return True

    logger.info(f"{volume} will be ejected.")
    cmd = unmount_command(volume)
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, timeout=60)
    except (FileNotFoundError, subprocess.TimeoutExpired) as e:
        logger.error(f"ERROR: could not eject {volume}: {e}")
        return False

    if result.returncode != 0:
        logger.error(
            f"ERROR: could not eject {volume}: "
            f"{result.stderr.strip() or f'exit status {result.returncode}'}"
        )
        return False

    return True
