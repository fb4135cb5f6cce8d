"""
Pytest configuration and fixtures for media_organizer tests.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Callable

import pytest
from rich.logging import RichHandler

from media_organizer.core.types import MediaFile


@pytest.fixture
def make_file(tmp_path) -> Callable[..., Path]:
    """
    Factory that writes a file with a given modification time.

    Usage: make_file("card/DCIM/100/IMG_1.jpg", datetime(2022, 9, 5, 12, 0))
    """

    def _make(
        relative: str,
        modified: datetime = datetime(2022, 9, 5, 12, 0, 0),
        content: bytes = b"",
    ) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content or relative.encode())
        stamp = modified.timestamp()
        os.utime(path, (stamp, stamp))
        return path

    return _make


@pytest.fixture
def card(make_file, tmp_path) -> Path:
    """A camera card with photos, a video and an audio note over two days."""
    make_file("card/DCIM/FUJI_1000/DSCF_1001.jpg", datetime(2022, 9, 5, 9, 30))
    make_file("card/DCIM/FUJI_1000/DSCF_1002.RAF", datetime(2022, 9, 5, 9, 31))
    make_file("card/DCIM/FUJI_1000/DSCF_1003.MOV", datetime(2022, 9, 5, 10, 0))
    make_file("card/DCIM/FUJI_1001/DSCF_2001.jpg", datetime(2022, 9, 6, 8, 15))
    make_file("card/DCIM/FUJI_1001/NOTE_0001.wav", datetime(2022, 9, 6, 8, 20))
    return tmp_path / "card"


@pytest.fixture
def media_files(card) -> list:
    """MediaFile records for every file on the card."""
    return sorted(
        (MediaFile.from_path(p) for p in card.rglob("*") if p.is_file()),
        key=lambda m: str(m.source_path),
    )


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Remove handlers installed by setup_logging() during a test."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler, (RichHandler, logging.FileHandler)):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
