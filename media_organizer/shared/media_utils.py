"""
Media file utilities.

Extension based classification, input enumeration and logging setup.
"""

import logging
import os
import time
from pathlib import Path
from typing import FrozenSet, List, Optional, Tuple

from rich.console import Console
from rich.logging import RichHandler

from ..core.types import Category, MediaFile
from ..errors import InputPathError

logger = logging.getLogger(__name__)

# Extensions are stored lower-case without the leading dot
VIDEO_EXTENSIONS: FrozenSet[str] = frozenset(
    {
        "3g2",
        "3gp",
        "amv",
        "ari",
        "asf",
        "avi",
        "cdng",
        "cine",
        "flv",
        "m4p",
        "m4v",
        "mkv",
        "mov",
        "mp4",
        "mpeg",
        "mpg",
        "mpv",
        "mxf",
        "ogv",
        "ogx",
        "qt",
        "r3d",
        "vob",
        "webm",
        "wmv",
        "yuv",
    }
)

AUDIO_EXTENSIONS: FrozenSet[str] = frozenset(
    {
        "aa3",
        "aac",
        "adif",
        "adts",
        "aea",
        "aif",
        "aifc",
        "aiff",
        "at3",
        "at9",
        "atp",
        "au",
        "flac",
        "hma",
        "l16",
        "m4a",
        "m4b",
        "m4r",
        "mogg",
        "mp3",
        "mpc",
        "msv",
        "oga",
        "ogg",
        "oma",
        "omg",
        "opus",
        "pcm",
        "shn",
        "snd",
        "wav",
        "wma",
        "wv",
    }
)

_overlap = VIDEO_EXTENSIONS & AUDIO_EXTENSIONS
if _overlap:
    raise RuntimeError(
        f"Extensions listed as both video and audio: {sorted(_overlap)}"
    )


def split_name(filename: str) -> Tuple[str, str]:
    """
    Split a filename into base and extension at the last dot.

    Dotfiles whose only dot is the leading one have no extension.

    Args:
        filename: Bare filename (no directories)

    Returns:
        (base, ext) with ext lacking the dot, or "" when there is none
    """
    dot = filename.rfind(".")
    if dot <= 0:
        return filename, ""
    return filename[:dot], filename[dot + 1 :]


def get_extension(filename: str) -> str:
    """Return the extension of a filename, verbatim, without the dot."""
    return split_name(filename)[1]


def classify(extension: str) -> Category:
    """
    Determine the category of a file from its extension.

    Args:
        extension: Extension without the dot, any case

    Returns:
        VIDEO or AUDIO when listed, PHOTO for everything else
    """
    ext = extension.lower()
    if ext in VIDEO_EXTENSIONS:
        return Category.VIDEO
    elif ext in AUDIO_EXTENSIONS:
        return Category.AUDIO
    else:
        return Category.PHOTO


def collect_media_files(
    directory: Path, follow_symlinks: bool = False
) -> List[MediaFile]:
    """
    Collect every file under a directory.

    Order follows the filesystem walk and is not stable across platforms.

    Args:
        directory: Directory to scan recursively
        follow_symlinks: If True, follow symbolic links to directories
            and include symlinked files

    Returns:
        List of MediaFile records

    Raises:
        InputPathError: If the directory is missing or not a directory, or an
            entry under it cannot be read
    """
    directory = Path(directory)

    if not directory.exists():
        raise InputPathError(f"Input path does not exist: {directory}")

    if not directory.is_dir():
        raise InputPathError(f"Input path is not a directory: {directory}")

    def _walk_error(error: OSError) -> None:
        raise InputPathError(f"Cannot read {error.filename}: {error.strerror}") from error

    media_files: List[MediaFile] = []
    for root, _, files in os.walk(
        directory, onerror=_walk_error, followlinks=follow_symlinks
    ):
        root_path = Path(root)
        for name in files:
            file_path = root_path / name
            if not follow_symlinks and file_path.is_symlink():
                logger.info(f"Skipping symbolic link: {file_path}")
                continue
            try:
                media_files.append(MediaFile.from_path(file_path))
            except FileNotFoundError:
                # Vanished between listing and stat
                logger.warning(f"Skipping unreadable entry: {file_path}")
            except OSError as e:
                raise InputPathError(f"Cannot read {file_path}: {e}") from e

    logger.debug(f"Found {len(media_files)} files in {directory}")
    return media_files


class _UTCFormatter(logging.Formatter):
    converter = time.gmtime


def setup_logging(
    verbose: bool = False,
    log_file: Optional[Path] = None,
    console: Optional[Console] = None,
) -> None:
    """
    Configure logging for the application.

    Console output goes through rich; verbose raises it from WARNING to
    INFO. When a log file is given, every record at INFO and above is
    appended to it as ``<UTC timestamp> <message>``.

    Args:
        verbose: If True, echo INFO records to the console
        log_file: Optional file to append log lines to
        console: Console used by the rich handler
    """
    console_handler = RichHandler(
        rich_tracebacks=True, console=console, show_path=False
    )
    console_handler.setLevel(logging.INFO if verbose else logging.WARNING)
    handlers: List[logging.Handler] = [console_handler]

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(
            _UTCFormatter("%(asctime)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%SZ")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=handlers,
        force=True,
    )
