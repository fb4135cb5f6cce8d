"""
Shared utilities for the media organizer.
"""

from .media_utils import (
    # File type detection
    AUDIO_EXTENSIONS,
    VIDEO_EXTENSIONS,
    classify,
    get_extension,
    split_name,
    # Enumeration
    collect_media_files,
    # Logging
    setup_logging,
)

__all__ = [
    # Constants
    "AUDIO_EXTENSIONS",
    "VIDEO_EXTENSIONS",
    # Functions
    "classify",
    "get_extension",
    "split_name",
    "collect_media_files",
    "setup_logging",
]
