"""
Tests for shared media utilities.
"""

import logging
from datetime import date, datetime
from unittest.mock import patch

import pytest

from media_organizer.core.types import Category, MediaFile
from media_organizer.errors import InputPathError
from media_organizer.shared import (
    AUDIO_EXTENSIONS,
    VIDEO_EXTENSIONS,
    classify,
    collect_media_files,
    get_extension,
    setup_logging,
    split_name,
)


class TestExtensionSets:
    """Test the static extension tables."""

    def test_sets_are_disjoint(self):
        """No extension is both video and audio."""
        assert VIDEO_EXTENSIONS.isdisjoint(AUDIO_EXTENSIONS)

    def test_sets_are_lowercase_without_dot(self):
        for ext in VIDEO_EXTENSIONS | AUDIO_EXTENSIONS:
            assert ext == ext.lower()
            assert not ext.startswith(".")

    def test_set_sizes(self):
        assert len(VIDEO_EXTENSIONS) == 26
        assert len(AUDIO_EXTENSIONS) == 33


class TestSplitName:
    """Test filename splitting."""

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("DSCF_1001.jpg", ("DSCF_1001", "jpg")),
            ("archive.tar.gz", ("archive.tar", "gz")),
            ("report", ("report", "")),
            (".profile", (".profile", "")),
            (".hidden.jpg", (".hidden", "jpg")),
            ("trailing.", ("trailing", "")),
        ],
    )
    def test_split_name(self, filename, expected):
        assert split_name(filename) == expected

    def test_get_extension_keeps_case(self):
        assert get_extension("CLIP.MP4") == "MP4"
        assert get_extension(".DS_Store") == ""


class TestClassify:
    """Test extension classification."""

    def test_video(self):
        assert classify("mov") == Category.VIDEO
        assert classify("r3d") == Category.VIDEO

    def test_audio(self):
        assert classify("wav") == Category.AUDIO
        assert classify("m4r") == Category.AUDIO

    def test_case_insensitive(self):
        assert classify("MP4") == classify("mp4") == Category.VIDEO
        assert classify("Flac") == Category.AUDIO

    @pytest.mark.parametrize("ext", ["jpg", "RAF", "", "xyz", "txt", "."])
    def test_everything_else_is_photo(self, ext):
        assert classify(ext) == Category.PHOTO

    def test_every_listed_extension(self):
        for ext in VIDEO_EXTENSIONS:
            assert classify(ext.upper()) == Category.VIDEO
        for ext in AUDIO_EXTENSIONS:
            assert classify(ext.upper()) == Category.AUDIO


class TestCollectMediaFiles:
    """Test input enumeration."""

    def test_collects_files_recursively(self, card):
        files = collect_media_files(card / "DCIM")

        names = sorted(f.name for f in files)
        assert names == [
            "DSCF_1001.jpg",
            "DSCF_1002.RAF",
            "DSCF_1003.MOV",
            "DSCF_2001.jpg",
            "NOTE_0001.wav",
        ]

    def test_records_modification_date(self, card):
        files = {f.name: f for f in collect_media_files(card)}

        assert files["DSCF_1001.jpg"].modified == date(2022, 9, 5)
        assert files["NOTE_0001.wav"].modified == date(2022, 9, 6)
        assert files["DSCF_1003.MOV"].extension == "MOV"
        assert files["DSCF_1001.jpg"].source_path.is_absolute()

    def test_excludes_directories(self, tmp_path):
        (tmp_path / "empty" / "nested").mkdir(parents=True)
        assert collect_media_files(tmp_path) == []

    def test_missing_directory(self, tmp_path):
        with pytest.raises(InputPathError, match="does not exist"):
            collect_media_files(tmp_path / "missing")

    def test_not_a_directory(self, make_file):
        path = make_file("file.jpg", datetime(2022, 1, 1))
        with pytest.raises(InputPathError, match="not a directory"):
            collect_media_files(path)

    def test_skips_symlinked_files(self, make_file, tmp_path):
        real = make_file("elsewhere/DSCF_0001.jpg")
        (tmp_path / "DCIM").mkdir()
        (tmp_path / "DCIM" / "link.jpg").symlink_to(real)
        (tmp_path / "DCIM" / "broken.jpg").symlink_to(tmp_path / "gone.jpg")

        assert collect_media_files(tmp_path / "DCIM") == []

    def test_follow_symlinks_includes_linked_files(self, make_file, tmp_path):
        real = make_file("elsewhere/DSCF_0001.jpg")
        (tmp_path / "DCIM").mkdir()
        (tmp_path / "DCIM" / "link.jpg").symlink_to(real)

        files = collect_media_files(tmp_path / "DCIM", follow_symlinks=True)

        assert [f.name for f in files] == ["link.jpg"]

    def test_unreadable_entry_raises_input_error(self, card):
        with patch.object(
            MediaFile,
            "from_path",
            side_effect=PermissionError(13, "Permission denied"),
        ):
            with pytest.raises(InputPathError, match="Cannot read"):
                collect_media_files(card)


class TestSetupLogging:
    """Test logging configuration."""

    def test_log_file_lines(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        setup_logging(verbose=False, log_file=log_file)

        logging.getLogger("media_organizer.test").info("hello world")
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = log_file.read_text().strip()
        timestamp, message = line.split(" ", 1)
        assert message == "hello world"
        assert timestamp.endswith("Z")
        datetime.strptime(timestamp, "%Y-%m-%dT%H:%M:%SZ")

    def test_console_level(self):
        setup_logging(verbose=True)
        assert logging.getLogger().handlers[0].level == logging.INFO

        setup_logging(verbose=False)
        assert logging.getLogger().handlers[0].level == logging.WARNING
