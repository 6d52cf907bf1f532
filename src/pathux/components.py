"""Lexical path component classification for path text.

A path text is split into an ordered sequence of ``PathComponent`` values:

- ``Prefix``: a Windows volume designator (``C:``, ``\\\\server\\share`` ...)
- ``RootDir``: the root separator
- ``HomeDir``: a literal ``~`` when it is the very first segment
- ``CurDir`` / ``ParentDir``: ``.`` and ``..``
- ``Normal``: any other segment

Classification is purely lexical. Nothing is looked up on disk and nothing
is resolved: ``..`` is kept as-is and ``~`` is only marked, not expanded
(see ``pathux.resolver`` for that).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Union

PathText = Union[str, bytes, os.PathLike]

HOME_DIR_TEXT = "~"


class Flavour(Enum):
    """Path syntax rules to apply."""

    POSIX = "posix"
    WINDOWS = "windows"

    @classmethod
    def native(cls) -> Flavour:
        """Return the flavour of the running platform."""
        return cls.WINDOWS if os.name == "nt" else cls.POSIX

    @property
    def separator(self) -> str:
        """Main separator used when rendering."""
        return "\\" if self is Flavour.WINDOWS else "/"

    @property
    def separators(self) -> str:
        """All characters accepted as separators when parsing."""
        return "\\/" if self is Flavour.WINDOWS else "/"


class PrefixKind(Enum):
    """Kinds of Windows volume prefix."""

    VERBATIM = "verbatim"  # \\?\name
    VERBATIM_UNC = "verbatim_unc"  # \\?\UNC\server\share
    VERBATIM_DISK = "verbatim_disk"  # \\?\C:
    DEVICE_NS = "device_ns"  # \\.\device
    UNC = "unc"  # \\server\share
    DISK = "disk"  # C:


@dataclass(frozen=True)
class PathPrefix:
    """A Windows volume prefix with enough data to render it again."""

    kind: PrefixKind
    name: str = ""  # verbatim name, device name or UNC server
    share: str = ""
    drive: str = ""

    @property
    def is_verbatim(self) -> bool:
        return self.kind in (PrefixKind.VERBATIM, PrefixKind.VERBATIM_UNC, PrefixKind.VERBATIM_DISK)

    @property
    def has_implicit_root(self) -> bool:
        """Every prefix except a plain drive letter is followed by a root."""
        return self.kind is not PrefixKind.DISK

    def render(self) -> str:
        if self.kind is PrefixKind.VERBATIM:
            return f"\\\\?\\{self.name}"
        if self.kind is PrefixKind.VERBATIM_UNC:
            return f"\\\\?\\UNC\\{self.name}\\{self.share}"
        if self.kind is PrefixKind.VERBATIM_DISK:
            return f"\\\\?\\{self.drive}:"
        if self.kind is PrefixKind.DEVICE_NS:
            return f"\\\\.\\{self.name}"
        if self.kind is PrefixKind.UNC:
            return f"\\\\{self.name}\\{self.share}"
        return f"{self.drive}:"


class ComponentKind(Enum):
    """Type tag of a ``PathComponent``."""

    PREFIX = "prefix"
    ROOT_DIR = "root_dir"
    HOME_DIR = "home_dir"
    CUR_DIR = "cur_dir"
    PARENT_DIR = "parent_dir"
    NORMAL = "normal"


@dataclass(frozen=True)
class PathComponent:
    """One lexical segment of a path text.

    ``text`` is only set for ``NORMAL`` components and ``prefix`` only for
    ``PREFIX`` components. Use the module constants and the ``normal`` and
    ``volume`` constructors rather than building these by hand.
    """

    kind: ComponentKind
    text: str | None = None
    prefix: PathPrefix | None = None

    @classmethod
    def normal(cls, text: str) -> PathComponent:
        return cls(ComponentKind.NORMAL, text=text)

    @classmethod
    def volume(cls, prefix: PathPrefix) -> PathComponent:
        return cls(ComponentKind.PREFIX, prefix=prefix)

    @property
    def is_normal(self) -> bool:
        return self.kind is ComponentKind.NORMAL

    def as_text(self, flavour: Flavour | None = None) -> str:
        """Return the text this component renders as on its own."""
        if self.kind is ComponentKind.PREFIX:
            if self.prefix is None:
                raise ValueError("prefix component has no PathPrefix")
            return self.prefix.render()
        if self.kind is ComponentKind.ROOT_DIR:
            return (flavour or Flavour.native()).separator
        if self.kind is ComponentKind.HOME_DIR:
            return HOME_DIR_TEXT
        if self.kind is ComponentKind.CUR_DIR:
            return "."
        if self.kind is ComponentKind.PARENT_DIR:
            return ".."
        return self.text or ""

    def __str__(self) -> str:
        return self.as_text()


ROOT_DIR = PathComponent(ComponentKind.ROOT_DIR)
HOME_DIR = PathComponent(ComponentKind.HOME_DIR)
CUR_DIR = PathComponent(ComponentKind.CUR_DIR)
PARENT_DIR = PathComponent(ComponentKind.PARENT_DIR)


def path_text(path: PathText) -> str:
    """Convert any path-like value to text, replacing undecodable bytes.

    Bytes are decoded as the filesystem would (``os.fsdecode``); anything
    that still cannot be represented as UTF-8 becomes U+FFFD.
    """
    text = os.fsdecode(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return "".join("\ufffd" if "\ud800" <= ch <= "\udfff" else ch for ch in text)
    return text


def _parse_prefix(text: str) -> tuple[PathPrefix | None, str]:
    """Split a Windows volume prefix off the front of ``text``.

    Returns:
        The prefix (or None) and the remaining text
    """
    if text.startswith("\\\\?\\"):
        rest = text[4:]
        if rest[:4].upper() == "UNC\\":
            server, _, rest = rest[4:].partition("\\")
            share, sep, rest = rest.partition("\\")
            return PathPrefix(PrefixKind.VERBATIM_UNC, name=server, share=share), sep + rest
        if len(rest) >= 2 and rest[0].isascii() and rest[0].isalpha() and rest[1] == ":" and rest[2:3] in ("", "\\"):
            return PathPrefix(PrefixKind.VERBATIM_DISK, drive=rest[0].upper()), rest[2:]
        name, sep, rest = rest.partition("\\")
        return PathPrefix(PrefixKind.VERBATIM, name=name), sep + rest

    if len(text) >= 2 and text[0] in "\\/" and text[1] in "\\/":
        rest = text[2:]
        if rest[:2] in (".\\", "./"):
            name, sep, rest = _partition_any(rest[2:], "\\/")
            return PathPrefix(PrefixKind.DEVICE_NS, name=name), sep + rest
        server, sep, rest = _partition_any(rest, "\\/")
        if server:
            share, sep, rest = _partition_any(rest, "\\/")
            return PathPrefix(PrefixKind.UNC, name=server, share=share), sep + rest
        return None, text

    if len(text) >= 2 and text[0].isascii() and text[0].isalpha() and text[1] == ":":
        return PathPrefix(PrefixKind.DISK, drive=text[0].upper()), text[2:]

    return None, text


def _partition_any(text: str, separators: str) -> tuple[str, str, str]:
    for index, ch in enumerate(text):
        if ch in separators:
            return text[:index], ch, text[index + 1 :]
    return text, "", ""


def _raw_components(text: str, flavour: Flavour) -> Iterator[PathComponent]:
    prefix = None
    if flavour is Flavour.WINDOWS:
        prefix, text = _parse_prefix(text)
    separators = "\\" if prefix is not None and prefix.is_verbatim else flavour.separators

    has_root = bool(text) and text[0] in separators
    if prefix is not None:
        yield PathComponent.volume(prefix)
        has_root = has_root or prefix.has_implicit_root
    if has_root:
        yield ROOT_DIR

    segments = [text]
    for sep in separators:
        segments = [part for segment in segments for part in segment.split(sep)]

    first = True
    for segment in segments:
        if not segment:
            continue
        if segment == ".":
            # Only a leading "." of a relative path is significant
            if first and not has_root and prefix is None:
                yield CUR_DIR
        elif segment == "..":
            yield PARENT_DIR
        else:
            yield PathComponent.normal(segment)
        first = False


def classify(path: PathText, flavour: Flavour | None = None) -> Iterator[PathComponent]:
    """Classify a path text into its components.

    Runs of separators collapse, a trailing separator is ignored, and a
    leading ``~`` segment becomes ``HOME_DIR``. A ``~`` anywhere else stays
    a normal segment. Never fails; calling again with the same input yields
    the same sequence.

    Args:
        path: Path text (bytes and path-like objects are accepted)
        flavour: Path syntax to apply (defaults to the running platform's)

    Returns:
        Iterator over the path's components

    Examples:
        >>> list(classify("~/SRC"))  # [HOME_DIR, PathComponent.normal("SRC")]
    """
    text = path_text(path)
    flavour = flavour or Flavour.native()
    for index, component in enumerate(_raw_components(text, flavour)):
        if index == 0 and component.is_normal and component.text == HOME_DIR_TEXT:
            yield HOME_DIR
        else:
            yield component


def components(path: PathText, flavour: Flavour | None = None) -> list[PathComponent]:
    """Return the classified components of ``path`` as a list."""
    return list(classify(path, flavour))


def render(parts: Iterable[PathComponent], flavour: Flavour | None = None) -> str:
    """Rebuild path text from components, in order, using the main separator.

    A ``HOME_DIR`` renders as ``~``; it only reads back as ``HOME_DIR``
    while it stays the first component.
    """
    flavour = flavour or Flavour.native()
    text = ""
    after_segment = False
    for component in parts:
        if component.kind is ComponentKind.PREFIX:
            text += component.as_text(flavour)
            after_segment = False
        elif component.kind is ComponentKind.ROOT_DIR:
            if not text.endswith(flavour.separator):
                text += flavour.separator
            after_segment = False
        else:
            if after_segment:
                text += flavour.separator
            text += component.as_text(flavour)
            after_segment = True
    return text
