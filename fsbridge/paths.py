"""Guest path virtualization and search-path domain resolution.

Guest programs address files with forward-slash paths that are either
absolute (anchored at the guest root) or relative to the working directory.
VirtualPath normalizes those strings into immutable segment tuples. Parent
directory segments are applied during parsing and clamped at the root, so a
resolved path can never name anything above the guest root, which the
storage backends map onto the host sandbox root.

Nothing in this module touches storage.

Examples:
    >>> VirtualPath.parse("/a/./b/../c")
    VirtualPath('/a/c')
    >>> VirtualPath.parse("../../etc", base=VirtualPath.parse("/User"))
    VirtualPath('/etc')
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from fsbridge.core.errors import ConfigurationError, UnsupportedFeatureError
from fsbridge.core.models import (
    DOCUMENT_DIRECTORY_ALIAS,
    SearchPathDirectory,
    SearchPathDomainMask,
)

SEPARATOR = "/"


@dataclass(frozen=True)
class VirtualPath:
    """Immutable normalized guest path.

    Attributes:
        segments: Path components, never containing "", "." or ".."
        absolute: Whether the path is anchored at the guest root
    """

    segments: tuple[str, ...] = ()
    absolute: bool = True

    @classmethod
    def root(cls) -> VirtualPath:
        return cls((), True)

    @classmethod
    def parse(cls, path: str, base: VirtualPath | None = None) -> VirtualPath:
        """Parse a guest path string, resolving it against base if relative.

        Args:
            path: Guest path using forward slashes
            base: Absolute directory that relative paths are resolved against.
                  If None, relative paths stay relative.

        Returns:
            VirtualPath with "." removed and ".." applied. A ".." that would
            climb above the root of an absolute path is dropped.
        """
        absolute = path.startswith(SEPARATOR)
        if absolute or base is None:
            start: tuple[str, ...] = ()
        else:
            start = base.segments
            absolute = base.absolute
        return cls(_normalize(start, path.split(SEPARATOR), absolute), absolute)

    def join(self, *parts: str) -> VirtualPath:
        """Append relative components, normalizing as parse() does."""
        pieces: list[str] = []
        for part in parts:
            pieces.extend(part.split(SEPARATOR))
        return VirtualPath(_normalize(self.segments, pieces, self.absolute), self.absolute)

    @property
    def parent(self) -> VirtualPath:
        return VirtualPath(self.segments[:-1], self.absolute)

    @property
    def is_root(self) -> bool:
        return self.absolute and not self.segments

    def is_relative_to(self, other: VirtualPath) -> bool:
        n = len(other.segments)
        return (
            self.absolute == other.absolute
            and self.segments[:n] == other.segments
        )

    def relative_to(self, other: VirtualPath) -> str:
        """Return this path as a relative string below other."""
        if not self.is_relative_to(other):
            raise ValueError(f"{self} is not below {other}")
        return SEPARATOR.join(self.segments[len(other.segments):])

    def __str__(self) -> str:
        body = SEPARATOR.join(self.segments)
        return SEPARATOR + body if self.absolute else (body or ".")

    def __repr__(self) -> str:
        return f"VirtualPath({str(self)!r})"


def _normalize(start: Iterable[str], parts: Iterable[str], absolute: bool) -> tuple[str, ...]:
    stack = list(start)
    for part in parts:
        if part in ("", "."):
            continue
        if part == "..":
            if stack and stack[-1] != "..":
                stack.pop()
            elif not absolute:
                stack.append(part)
            continue
        stack.append(part)
    return tuple(stack)


# ── Search-path domains ────────────────────────────────────────────

def resolve_user_path(home: VirtualPath) -> VirtualPath:
    return home.join("Documents")


def resolve_temporary_path(home: VirtualPath) -> VirtualPath:
    return home.join("tmp")


def resolve_application_support_path(home: VirtualPath) -> VirtualPath:
    return home.join("Library", "Application Support")


# Ordered: the first rule containing the requested directory wins.
_DOMAIN_RULES = (
    (
        frozenset({SearchPathDirectory.APPLICATION}),
        lambda home, applications: applications,
    ),
    (
        frozenset({SearchPathDirectory.DOCUMENT, DOCUMENT_DIRECTORY_ALIAS}),
        lambda home, applications: resolve_user_path(home),
    ),
    (
        frozenset({SearchPathDirectory.APPLICATION_SUPPORT}),
        lambda home, applications: resolve_application_support_path(home),
    ),
)


def resolve_domain(
    directory: int,
    domain_mask: int,
    expand_tilde: bool,
    home: VirtualPath,
    applications_dir: VirtualPath,
) -> VirtualPath:
    """Resolve a search-path directory to its sandbox location.

    Args:
        directory: SearchPathDirectory value (or the legacy Documents alias)
        domain_mask: SearchPathDomainMask value; only USER is supported
        expand_tilde: Must be True; un-expanded "~" paths are not produced
        home: Application home directory
        applications_dir: Guest directory holding application bundles

    Returns:
        Absolute VirtualPath for the directory

    Raises:
        ConfigurationError: If domain_mask is not USER or expand_tilde is False
        UnsupportedFeatureError: If directory is not in the domain table
    """
    if domain_mask != SearchPathDomainMask.USER:
        raise ConfigurationError(
            f"Search-path domain mask {domain_mask:#x} is not supported; only the user domain is"
        )
    if not expand_tilde:
        raise ConfigurationError("Search paths are only available with tilde expansion")

    for directories, resolve in _DOMAIN_RULES:
        if directory in directories:
            return resolve(home, applications_dir)

    raise UnsupportedFeatureError(f"Search-path directory {directory} is not supported")
