"""Tests for race-tolerant directory listing."""

from __future__ import annotations

import errno
import logging
import os
from pathlib import Path
from unittest import mock

import pytest

from pathux.dir_entries import FileType, UsableDirEntry, usable_dir_entries
from pathux.errors import DirectoryListingError


@pytest.fixture
def populated(tmp_path: Path) -> Path:
    """Directory with a file, a subdirectory and a symlink."""
    (tmp_path / "file.txt").write_text("hello")
    (tmp_path / "sub").mkdir()
    (tmp_path / "link").symlink_to(tmp_path / "file.txt")
    return tmp_path


def _by_name(entries: list[UsableDirEntry]) -> dict[str, UsableDirEntry]:
    return {e.name: e for e in entries}


class _FakeEntry:
    """Stand-in for os.DirEntry whose stat() fails."""

    def __init__(self, path: Path, error: OSError) -> None:
        self.name = path.name
        self.path = str(path)
        self._error = error

    def stat(self, follow_symlinks: bool = True) -> os.stat_result:
        raise self._error


class _FakeScandir:
    def __init__(self, entries: list) -> None:
        self._entries = entries

    def __enter__(self):
        return iter(self._entries)

    def __exit__(self, *exc) -> None:
        return None


class TestUsableDirEntries:
    """Tests for usable_dir_entries."""

    def test_lists_all_entries(self, populated: Path) -> None:
        entries = _by_name(usable_dir_entries(populated))
        assert set(entries) == {"file.txt", "sub", "link"}

    def test_file_types(self, populated: Path) -> None:
        entries = _by_name(usable_dir_entries(populated))
        assert entries["file.txt"].is_file()
        assert entries["sub"].is_dir()
        assert entries["link"].is_symlink()
        assert not entries["link"].is_file()
        assert entries["sub"].file_type is FileType.DIRECTORY

    def test_paths(self, populated: Path) -> None:
        entries = _by_name(usable_dir_entries(populated))
        assert entries["file.txt"].path == str(populated / "file.txt")

    def test_metadata(self, populated: Path) -> None:
        entries = _by_name(usable_dir_entries(populated))
        assert entries["file.txt"].metadata().st_size == 5

    def test_metadata_after_removal(self, populated: Path) -> None:
        entries = _by_name(usable_dir_entries(populated))
        (populated / "file.txt").unlink()
        with pytest.raises(FileNotFoundError):
            entries["file.txt"].metadata()

    def test_get_entries(self, populated: Path) -> None:
        assert len(UsableDirEntry.get_entries(populated)) == 3

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert usable_dir_entries(tmp_path) == []

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            usable_dir_entries(tmp_path / "missing")

    def test_vanished_entry_skipped(self, tmp_path: Path) -> None:
        """An entry removed between listing and stat is silently dropped."""
        gone = _FakeEntry(tmp_path / "gone", FileNotFoundError(errno.ENOENT, "gone"))
        with mock.patch("pathux.dir_entries.os.scandir", return_value=_FakeScandir([gone])):
            assert usable_dir_entries(tmp_path) == []

    def test_permission_denied_reported(self, tmp_path: Path, caplog) -> None:
        """A permission error on one entry is logged, not fatal."""
        (tmp_path / "ok").write_text("")
        real = list(os.scandir(tmp_path))
        denied = _FakeEntry(tmp_path / "secret", PermissionError(errno.EACCES, "denied"))
        with mock.patch("pathux.dir_entries.os.scandir", return_value=_FakeScandir([denied] + real)):
            with caplog.at_level(logging.WARNING, logger="pathux"):
                entries = usable_dir_entries(tmp_path)
        assert [e.name for e in entries] == ["ok"]
        assert "Permission denied" in caplog.text
        assert "secret" in caplog.text

    def test_unexpected_error_is_fatal(self, tmp_path: Path) -> None:
        broken = _FakeEntry(tmp_path / "broken", OSError(errno.EIO, "I/O error"))
        with mock.patch("pathux.dir_entries.os.scandir", return_value=_FakeScandir([broken])):
            with pytest.raises(DirectoryListingError) as excinfo:
                usable_dir_entries(tmp_path)
        assert excinfo.value.path == str(tmp_path / "broken")
        assert isinstance(excinfo.value, OSError)
