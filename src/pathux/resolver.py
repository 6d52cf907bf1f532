"""Absolute, relative and home-relative resolution of path text.

Paths come in three mutually exclusive forms:

- absolute: rooted (``/home/peter/SRC``)
- relative to home: first component is ``~`` (``~/SRC``)
- relative: everything else, resolved against the current directory
  (``SRC``, ``./SRC``, ``../SRC`` and the empty text)

``PathResolver`` converts between them using two environment providers
(current directory and home directory) that are only called when a
conversion actually needs them.
"""

from __future__ import annotations

from typing import Sequence

from .components import (
    CUR_DIR,
    HOME_DIR,
    ROOT_DIR,
    ComponentKind,
    Flavour,
    PathComponent,
    PathText,
    classify,
    components,
    path_text,
    render,
)
from .environment import CWD, HOME, Provider, current_working_directory, home_directory
from .errors import EnvironmentUnavailable, PrefixMismatch
from .logging_config import get_logger

logger = get_logger("resolver")

_TILDE = PathComponent.normal("~")


class PathResolver:
    """Converts path text between absolute, relative and home-relative forms.

    Args:
        cwd: Provider of the current working directory
        home_dir: Provider of the home directory
        flavour: Path syntax to apply (defaults to the running platform's)
    """

    def __init__(
        self,
        cwd: Provider = current_working_directory,
        home_dir: Provider = home_directory,
        flavour: Flavour | None = None,
    ) -> None:
        self.cwd = cwd
        self.home_dir = home_dir
        self.flavour = flavour or Flavour.native()

    def components(self, path: PathText) -> list[PathComponent]:
        return components(path, self.flavour)

    def _first(self, path: PathText) -> PathComponent | None:
        return next(classify(path, self.flavour), None)

    def _render(self, parts: Sequence[PathComponent]) -> str:
        return render(parts, self.flavour)

    # Predicates

    def is_absolute(self, path: PathText) -> bool:
        """Return True if ``path`` is rooted.

        A path starting with ``~`` is never absolute, even though it names a
        fixed location once the home directory is known.
        """
        parts = self.components(path)
        if not parts or parts[0].kind is ComponentKind.HOME_DIR:
            return False
        if self.flavour is Flavour.WINDOWS:
            # A drive letter alone ("C:foo") is still relative to that drive's cwd
            return parts[0].kind is ComponentKind.PREFIX and ComponentKind.ROOT_DIR in (p.kind for p in parts[:2])
        return parts[0].kind is ComponentKind.ROOT_DIR

    def is_relative_to_home(self, path: PathText) -> bool:
        """Return True if the first component of ``path`` is ``~``."""
        first = self._first(path)
        return first is not None and first.kind is ComponentKind.HOME_DIR

    def is_relative(self, path: PathText) -> bool:
        """Return True if ``path`` resolves against the current directory.

        Home-relative paths are neither absolute nor relative.
        """
        return not self.is_absolute(path) and not self.is_relative_to_home(path)

    # Environment

    def _base(self, provider: Provider, fact: str) -> list[PathComponent]:
        """Fetch an environment fact and check that it is usable as a base."""
        text = provider()
        if not self.is_absolute(text):
            raise EnvironmentUnavailable(fact, f"{text!r} is not an absolute path")
        return self.components(text)

    def current_dir(self) -> str:
        """Return the current directory as reported by the cwd provider."""
        return self._render(self._base(self.cwd, CWD))

    def home(self) -> str:
        """Return the home directory as reported by the home provider."""
        return self._render(self._base(self.home_dir, HOME))

    # Conversions

    def absolute(self, path: PathText) -> str:
        """Return the absolute form of ``path``.

        Absolute paths are returned unchanged. ``~`` is replaced by the home
        directory; anything else is appended to the current directory after
        dropping a leading ``.``.

        Raises:
            EnvironmentUnavailable: If the needed directory cannot be determined
        """
        text = path_text(path)
        if self.is_absolute(text):
            return text

        parts = self.components(text)
        if parts and parts[0].kind is ComponentKind.HOME_DIR:
            base = self._base(self.home_dir, HOME)
            rest = parts[1:]
        else:
            base = self._base(self.cwd, CWD)
            rest = parts
            while rest and rest[0] == CUR_DIR:
                rest = rest[1:]
            if rest and rest[0].kind is ComponentKind.PREFIX:
                # Drive-relative ("C:foo"): relative to cwd on the same drive,
                # otherwise to the root of that drive
                if rest[0] == base[0]:
                    rest = rest[1:]
                else:
                    rest = [rest[0], ROOT_DIR] + rest[1:]

        resolved = self._render(_push(base, rest))
        logger.trace(f"absolute({text!r}) -> {resolved!r}")  # type: ignore[attr-defined]
        return resolved

    def _strip_base(self, path: PathText, provider: Provider, fact: str) -> list[PathComponent]:
        resolved = self.absolute(path)
        parts = self.components(resolved)
        base = self._base(provider, fact)
        if parts[: len(base)] != base:
            raise PrefixMismatch(resolved, self._render(base))
        return parts[len(base):]

    def simple_relative(self, path: PathText) -> str:
        """Return ``path`` relative to the current directory.

        The current directory itself gives the empty text.

        Raises:
            PrefixMismatch: If ``path`` is not inside the current directory
            EnvironmentUnavailable: If a needed directory cannot be determined
        """
        rest = self._strip_base(path, self.cwd, CWD)
        if rest and rest[0] == _TILDE:
            # Keep a literal "~" directory from reading back as the home marker
            rest = [CUR_DIR] + rest
        return self._render(rest)

    def relative_to_home(self, path: PathText) -> str:
        """Return ``path`` relative to the home directory, starting with ``~``.

        Raises:
            PrefixMismatch: If ``path`` is not inside the home directory
            EnvironmentUnavailable: If a needed directory cannot be determined
        """
        rest = self._strip_base(path, self.home_dir, HOME)
        return self._render([HOME_DIR] + rest)

    def relative_path(self, path: PathText) -> str | None:
        """Strip the current directory from an absolute ``path``.

        Anything that is not absolute (including ``~/...``) is returned
        unchanged without consulting the environment.

        Returns:
            The relative text, or None if an absolute ``path`` is outside
            the current directory
        """
        text = path_text(path)
        if not self.is_absolute(text):
            return text
        try:
            return self.simple_relative(text)
        except PrefixMismatch as e:
            logger.debug(str(e))
            return None

    def relative_path_or_mine(self, path: PathText) -> str:
        relative = self.relative_path(path)
        return path_text(path) if relative is None else relative

    def expand_home_dir(self, path: PathText) -> str | None:
        """Expand a leading ``~``.

        Purely lexical: a file or directory literally named ``~`` in the
        current directory does not stop the expansion.

        Returns:
            ``path`` unchanged if absolute, the expansion if it starts with
            ``~``, otherwise None
        """
        if self.is_absolute(path):
            return path_text(path)
        if self.is_relative_to_home(path):
            return self.absolute(path)
        return None

    def expand_home_dir_or_mine(self, path: PathText) -> str:
        expanded = self.expand_home_dir(path)
        return path_text(path) if expanded is None else expanded

    # Structural operations

    def join(self, base: PathText, child: PathText) -> str:
        """Append ``child`` to ``base`` with a single separator between them.

        An absolute ``child`` replaces ``base`` entirely, as does a child
        with its own volume prefix. A rooted child without a prefix keeps
        only the volume of ``base``. A ``~`` at the start of ``child`` is an
        ordinary directory name once appended.
        """
        if self.is_absolute(child):
            logger.debug(f"join: absolute {path_text(child)!r} replaces {path_text(base)!r}")
            return path_text(child)
        tail = [_TILDE if part == HOME_DIR else part for part in self.components(child)]
        return self._render(_push(self.components(base), tail))

    def file_name(self, path: PathText) -> str | None:
        """Return the final segment of ``path``, if it is a normal name.

        Examples:
            >>> PathResolver().file_name("/home/peter")  # "peter"
            >>> PathResolver().file_name("/")  # None
        """
        parts = self.components(path)
        if parts and parts[-1].is_normal:
            return parts[-1].text
        return None

    def parent(self, path: PathText) -> str | None:
        """Return ``path`` without its final component.

        A single relative segment has the empty text as parent. The root,
        a bare volume prefix and the empty text have no parent.
        """
        parts = self.components(path)
        if not parts or all(p.kind in (ComponentKind.PREFIX, ComponentKind.ROOT_DIR) for p in parts):
            return None
        return self._render(parts[:-1])


def _push(base: Sequence[PathComponent], tail: Sequence[PathComponent]) -> list[PathComponent]:
    """Append ``tail`` to ``base`` the way a path push does.

    A tail with its own volume prefix replaces ``base``; a rooted tail
    keeps only the volume prefix of ``base``.
    """
    if tail and tail[0].kind is ComponentKind.PREFIX:
        return list(tail)
    if tail and tail[0].kind is ComponentKind.ROOT_DIR:
        return [part for part in base[:1] if part.kind is ComponentKind.PREFIX] + list(tail)
    return list(base) + list(tail)


_default = PathResolver()


def default_resolver() -> PathResolver:
    """Return the resolver bound to the real process environment."""
    return _default


def is_absolute(path: PathText) -> bool:
    return _default.is_absolute(path)


def is_relative(path: PathText) -> bool:
    return _default.is_relative(path)


def is_relative_to_home(path: PathText) -> bool:
    return _default.is_relative_to_home(path)


def absolute(path: PathText) -> str:
    return _default.absolute(path)


def simple_relative(path: PathText) -> str:
    return _default.simple_relative(path)


def relative_to_home(path: PathText) -> str:
    return _default.relative_to_home(path)


def join(base: PathText, child: PathText) -> str:
    return _default.join(base, child)


def file_name(path: PathText) -> str | None:
    return _default.file_name(path)


def parent(path: PathText) -> str | None:
    return _default.parent(path)
