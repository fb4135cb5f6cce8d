"""Tests for core types."""

from datetime import date, datetime
from pathlib import Path

import pytest
from pydantic import ValidationError

from media_organizer.core.types import MediaFile, MoveOutcome, MoveStatus


class TestMediaFile:
    """Test media file records."""

    def test_from_path(self, make_file):
        path = make_file("card/DSCF_1001.JPG", datetime(2022, 9, 5, 23, 59))

        media = MediaFile.from_path(path)

        assert media.source_path == path
        assert media.name == "DSCF_1001.JPG"
        assert media.extension == "JPG"
        assert media.modified == date(2022, 9, 5)

    def test_from_path_without_extension(self, make_file):
        media = MediaFile.from_path(make_file("card/.hidden"))

        assert media.extension == ""

    def test_relative_path_made_absolute(self, make_file, tmp_path, monkeypatch):
        make_file("card/a.jpg")
        monkeypatch.chdir(tmp_path)

        media = MediaFile.from_path(Path("card/a.jpg"))

        assert media.source_path == tmp_path / "card" / "a.jpg"

    def test_immutable(self):
        media = MediaFile(
            source_path=Path("/a.jpg"), name="a.jpg", extension="jpg", modified=date.today()
        )

        with pytest.raises(ValidationError):
            media.name = "b.jpg"


class TestMoveOutcome:
    """Test move outcomes."""

    def test_succeeded(self):
        ok = MoveOutcome(source_path=Path("/a"), status=MoveStatus.SUCCESS)
        bad = MoveOutcome(source_path=Path("/a"), status=MoveStatus.FAILURE, error="x")

        assert ok.succeeded
        assert not bad.succeeded
