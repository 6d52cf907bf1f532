"""Plain string helpers for path text.

The split helpers work on the raw text with the platform's main separator
and do no component classification, so ``"~/"`` and ``"./"`` are kept
verbatim.
"""

from __future__ import annotations

from .components import HOME_DIR_TEXT, ComponentKind, Flavour, PathText, classify, path_text
from .resolver import PathResolver


def split_path_text(text: str, flavour: Flavour | None = None) -> tuple[str, str]:
    """Split text at its last separator.

    The separator stays with the directory part; text without a separator
    has an empty directory part.

    Examples:
        >>> split_path_text("/something/somethingelse")  # ("/something/", "somethingelse")
        >>> split_path_text("~")  # ("", "~")
    """
    separator = (flavour or Flavour.native()).separator
    index = text.rfind(separator)
    if index < 0:
        return "", text
    return text[: index + 1], text[index + 1 :]


def dir_path_text(text: str, flavour: Flavour | None = None) -> str:
    return split_path_text(text, flavour)[0]


def file_name_text(text: str, flavour: Flavour | None = None) -> str:
    return split_path_text(text, flavour)[1]


def first_subpath(path: PathText, flavour: Flavour | None = None) -> str | None:
    """Return the first named segment of ``path`` after any root.

    A leading ``~`` counts as a segment, so ``"~/SRC"`` gives ``"~"``.

    Returns:
        The segment, or None if the path has none or climbs with ``..``
        before reaching one
    """
    for component in classify(path, flavour):
        if component.kind is ComponentKind.HOME_DIR:
            return HOME_DIR_TEXT
        if component.is_normal:
            return component.text
        if component.kind is ComponentKind.PARENT_DIR:
            return None
    return None


def path_push(base: str, path: PathText, flavour: Flavour | None = None) -> str:
    """Push ``path`` onto ``base`` textually.

    An absolute ``path`` replaces ``base``. Otherwise one separator is
    added between them without normalizing either side; use
    ``PathResolver.join`` for a normalized result.
    """
    flavour = flavour or Flavour.native()
    text = path_text(path)
    if PathResolver(flavour=flavour).is_absolute(text):
        return text
    return f"{base}{flavour.separator}{text}"
