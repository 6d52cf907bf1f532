"""Error types raised by pathux."""

from __future__ import annotations


class PathuxError(Exception):
    """Base class for all pathux errors."""


class EnvironmentUnavailable(PathuxError):
    """The current or home directory could not be determined."""

    def __init__(self, fact: str, reason: str) -> None:
        self.fact = fact
        self.reason = reason
        super().__init__(f"Cannot determine {fact}: {reason}")


class PrefixMismatch(PathuxError):
    """A path is not rooted under the directory it was made relative to."""

    def __init__(self, path: str, base: str) -> None:
        self.path = path
        self.base = base
        super().__init__(f"Path {path!r} is not under {base!r}")


class DirectoryListingError(PathuxError, OSError):
    """An unexpected filesystem error while listing a directory.

    Missing entries and permission problems on single entries are not
    reported this way; see ``pathux.dir_entries``.
    """

    def __init__(self, path: str, error: OSError) -> None:
        self.path = path
        self.error = error
        super().__init__(f"Error reading directory entry {path!r}: {error}")
