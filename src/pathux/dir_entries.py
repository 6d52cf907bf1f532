"""Directory listing that tolerates entries changing underneath it."""

from __future__ import annotations

import os
import stat
from dataclasses import dataclass
from enum import Enum

from .components import PathText, path_text
from .errors import DirectoryListingError
from .logging_config import get_logger

logger = get_logger("dir_entries")


class FileType(Enum):
    """Cheap classification of a directory entry (symlinks are not followed)."""

    DIRECTORY = "directory"
    FILE = "file"
    SYMLINK = "symlink"
    OTHER = "other"

    @classmethod
    def from_mode(cls, mode: int) -> FileType:
        if stat.S_ISLNK(mode):
            return cls.SYMLINK
        if stat.S_ISDIR(mode):
            return cls.DIRECTORY
        if stat.S_ISREG(mode):
            return cls.FILE
        return cls.OTHER


@dataclass(frozen=True)
class UsableDirEntry:
    """A directory entry whose type was readable when it was listed."""

    name: str
    path: str
    file_type: FileType

    @classmethod
    def get_entries(cls, dir_path: PathText) -> list[UsableDirEntry]:
        return usable_dir_entries(dir_path)

    def is_dir(self) -> bool:
        return self.file_type is FileType.DIRECTORY

    def is_file(self) -> bool:
        return self.file_type is FileType.FILE

    def is_symlink(self) -> bool:
        return self.file_type is FileType.SYMLINK

    def metadata(self) -> os.stat_result:
        """Fetch fresh metadata for the entry (without following symlinks).

        Raises:
            OSError: If the entry can no longer be read
        """
        return os.lstat(self.path)


def usable_dir_entries(dir_path: PathText) -> list[UsableDirEntry]:
    """List the entries of a directory.

    Entries that disappear before their type can be read are skipped, and
    entries that cannot be read for lack of permission are logged and
    skipped. Any other error on a single entry fails the whole listing.

    Args:
        dir_path: Directory to list

    Returns:
        Snapshot of the readable entries, in the order the OS returned them

    Raises:
        OSError: If the directory itself cannot be opened
        DirectoryListingError: On any other error reading an entry
    """
    entries: list[UsableDirEntry] = []
    with os.scandir(dir_path) as it:
        for dir_entry in it:
            try:
                mode = dir_entry.stat(follow_symlinks=False).st_mode
            except FileNotFoundError:
                # Removed since the directory was read
                logger.trace(f"Entry vanished while listing: {dir_entry.path!r}")  # type: ignore[attr-defined]
                continue
            except PermissionError:
                logger.warning(f"Permission denied accessing dir entry: {dir_entry.path!r}")
                continue
            except OSError as e:
                raise DirectoryListingError(path_text(dir_entry.path), e) from e

            entries.append(UsableDirEntry(
                name=path_text(dir_entry.name),
                path=path_text(dir_entry.path),
                file_type=FileType.from_mode(mode),
            ))

    logger.debug(f"Listed {len(entries)} entries in {path_text(dir_path)!r}")
    return entries
