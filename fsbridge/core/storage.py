"""Pluggable storage backend abstraction for the guest filesystem.

Provides adapter pattern for guest storage, enabling multiple backend
implementations (disk, memory) behind one contract. Adapters receive
absolute, already-normalized VirtualPath values and report failures with the
standard OSError family; translating those failures into guest results is
the facade's job.
"""

from __future__ import annotations

import errno
import shutil
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from fsbridge.core.errors import PathEscapeError
from fsbridge.paths import VirtualPath


class StorageAdapter(ABC):
    """Abstract base class for guest storage backends.

    Defines the raw primitives the facade builds on: existence checks, whole
    file reads and writes, shallow and recursive listing, directory creation
    and removal. Listings are returned fully materialized and sorted by name.

    Attributes:
        root: Backend-specific location of the guest root
    """

    def __init__(self, root: Any) -> None:
        """Initialize storage adapter with the location of the guest root.

        Args:
            root: For DiskStorageAdapter: host Path
                  For MemoryStorageAdapter: label used in reprs
        """
        self.root = root

    @abstractmethod
    def exists(self, path: VirtualPath) -> bool:
        """Return True if a file or directory exists at path."""
        pass

    @abstractmethod
    def is_file(self, path: VirtualPath) -> bool:
        """Return True if a regular file exists at path."""
        pass

    @abstractmethod
    def is_dir(self, path: VirtualPath) -> bool:
        """Return True if a directory exists at path."""
        pass

    @abstractmethod
    def read_file(self, path: VirtualPath) -> bytes:
        """Read the whole file at path.

        Raises:
            FileNotFoundError: If nothing exists at path
            IsADirectoryError: If path is a directory
        """
        pass

    @abstractmethod
    def write_file(self, path: VirtualPath, data: bytes) -> None:
        """Create or truncate the file at path and write data.

        The parent directory must already exist.

        Raises:
            FileNotFoundError: If the parent directory is missing
            IsADirectoryError: If path is a directory
        """
        pass

    @abstractmethod
    def file_size(self, path: VirtualPath) -> int:
        """Return the size in bytes of the file at path.

        Raises:
            FileNotFoundError: If nothing exists at path
            IsADirectoryError: If path is a directory
        """
        pass

    @abstractmethod
    def list_dir(self, path: VirtualPath) -> list[str]:
        """Return the sorted names of the immediate children of path.

        Raises:
            FileNotFoundError: If nothing exists at path
            NotADirectoryError: If path is a file
        """
        pass

    @abstractmethod
    def create_dir(self, path: VirtualPath) -> None:
        """Create path and any missing parents. Existing directories are kept.

        Raises:
            FileExistsError: If path or one of its parents is a file
        """
        pass

    @abstractmethod
    def remove(self, path: VirtualPath) -> None:
        """Remove the file or directory tree at path.

        Raises:
            FileNotFoundError: If nothing exists at path
            PermissionError: If path is the guest root
        """
        pass

    def list_dir_recursive(self, path: VirtualPath) -> list[str]:
        """Return every descendant of path as a relative path string.

        Entries are in pre-order: each directory is listed before its own
        contents, siblings sorted by name. Adapters can override with a more
        efficient walk.

        Raises:
            FileNotFoundError: If nothing exists at path
            NotADirectoryError: If path is a file
        """
        entries: list[str] = []
        self._walk(path, path, entries)
        return entries

    def _walk(self, base: VirtualPath, directory: VirtualPath, entries: list[str]) -> None:
        for name in self.list_dir(directory):
            child = directory.join(name)
            entries.append(child.relative_to(base))
            if self._descends_into(child):
                self._walk(base, child, entries)

    def _descends_into(self, path: VirtualPath) -> bool:
        """Return True if the recursive walk should enter path."""
        return self.is_dir(path)


class DiskStorageAdapter(StorageAdapter):
    """Disk-based storage adapter rooted at a host directory.

    The guest root maps onto root. Every path is resolved on the host and
    checked for containment before use, so links inside the host directory
    cannot be used to reach the rest of the host filesystem.

    Attributes:
        root: Path object pointing to the host directory backing "/"
    """

    def __init__(self, root: Path | str = Path("workspace")) -> None:
        """Initialize disk storage adapter.

        Args:
            root: Host directory backing the guest root (created if needed)
        """
        if isinstance(root, str):
            root = Path(root)
        root.mkdir(parents=True, exist_ok=True)
        root = root.resolve()
        super().__init__(root)
        self.root: Path = root

    def _host_path(self, path: VirtualPath) -> Path:
        """Map a guest path to its host location and verify containment.

        Raises:
            ValueError: If path is relative
            OSError: If the host rejects the path (e.g. an embedded NUL byte)
            PathEscapeError: If the resolved host path leaves the root
        """
        if not path.absolute:
            raise ValueError(f"Storage paths must be absolute, got '{path}'")

        try:
            full_path = self.root.joinpath(*path.segments).resolve()
        except ValueError as e:
            raise OSError(errno.EINVAL, f"Invalid path '{path}': {e}") from e
        if not full_path.is_relative_to(self.root):
            raise PathEscapeError(f"Path '{path}' escapes the sandbox root")
        return full_path

    def exists(self, path: VirtualPath) -> bool:
        return self._host_path(path).exists()

    def is_file(self, path: VirtualPath) -> bool:
        return self._host_path(path).is_file()

    def is_dir(self, path: VirtualPath) -> bool:
        return self._host_path(path).is_dir()

    def read_file(self, path: VirtualPath) -> bytes:
        return self._host_path(path).read_bytes()

    def write_file(self, path: VirtualPath, data: bytes) -> None:
        self._host_path(path).write_bytes(data)

    def file_size(self, path: VirtualPath) -> int:
        full_path = self._host_path(path)
        if full_path.is_dir():
            raise IsADirectoryError(f"'{path}' is a directory")
        return full_path.stat().st_size

    def list_dir(self, path: VirtualPath) -> list[str]:
        full_path = self._host_path(path)
        return sorted(item.name for item in full_path.iterdir())

    def create_dir(self, path: VirtualPath) -> None:
        self._host_path(path).mkdir(parents=True, exist_ok=True)

    def _descends_into(self, path: VirtualPath) -> bool:
        # Links are listed but never followed.
        if self.root.joinpath(*path.segments).is_symlink():
            return False
        return self.is_dir(path)

    def remove(self, path: VirtualPath) -> None:
        if path.is_root:
            raise PermissionError("The sandbox root cannot be removed")

        full_path = self._host_path(path)
        if full_path.is_dir():
            shutil.rmtree(full_path)
        else:
            full_path.unlink()


class _Node:
    __slots__ = ("data",)

    def __init__(self, data: bytes | None = None) -> None:
        # None marks a directory
        self.data = data

    @property
    def is_dir(self) -> bool:
        return self.data is None


class MemoryStorageAdapter(StorageAdapter):
    """In-memory storage adapter for tests and ephemeral sessions.

    Nodes are kept in a flat dict keyed by segment tuples; the root node
    always exists.

    Usage:
        storage = MemoryStorageAdapter()
        storage.seed({"/User/Applications/app/Documents/a.txt": b"hi"})
    """

    def __init__(self, root: str = "memory") -> None:
        super().__init__(root)
        self._nodes: dict[tuple[str, ...], _Node] = {(): _Node()}

    def seed(self, files: dict[str, bytes | str]) -> None:
        """Pre-populate the tree. Keys are absolute guest paths."""
        for raw_path, content in files.items():
            path = VirtualPath.parse(raw_path)
            self.create_dir(path.parent)
            if isinstance(content, str):
                content = content.encode("utf-8")
            self.write_file(path, content)

    def _get(self, path: VirtualPath) -> _Node:
        node = self._nodes.get(path.segments)
        if node is None:
            raise FileNotFoundError(f"No such file or directory: '{path}'")
        return node

    def exists(self, path: VirtualPath) -> bool:
        return path.segments in self._nodes

    def is_file(self, path: VirtualPath) -> bool:
        node = self._nodes.get(path.segments)
        return node is not None and not node.is_dir

    def is_dir(self, path: VirtualPath) -> bool:
        node = self._nodes.get(path.segments)
        return node is not None and node.is_dir

    def read_file(self, path: VirtualPath) -> bytes:
        node = self._get(path)
        if node.data is None:
            raise IsADirectoryError(f"'{path}' is a directory")
        return node.data

    def write_file(self, path: VirtualPath, data: bytes) -> None:
        node = self._nodes.get(path.segments)
        if node is not None and node.is_dir:
            raise IsADirectoryError(f"'{path}' is a directory")
        if not self.is_dir(path.parent):
            raise FileNotFoundError(f"Parent directory of '{path}' does not exist")
        self._nodes[path.segments] = _Node(bytes(data))

    def file_size(self, path: VirtualPath) -> int:
        return len(self.read_file(path))

    def list_dir(self, path: VirtualPath) -> list[str]:
        node = self._get(path)
        if not node.is_dir:
            raise NotADirectoryError(f"'{path}' is not a directory")
        depth = len(path.segments)
        return sorted(
            key[depth]
            for key in self._nodes
            if len(key) == depth + 1 and key[:depth] == path.segments
        )

    def create_dir(self, path: VirtualPath) -> None:
        for depth in range(1, len(path.segments) + 1):
            key = path.segments[:depth]
            node = self._nodes.get(key)
            if node is None:
                self._nodes[key] = _Node()
            elif not node.is_dir:
                raise FileExistsError(f"'/{'/'.join(key)}' is a file")

    def remove(self, path: VirtualPath) -> None:
        if path.is_root:
            raise PermissionError("The sandbox root cannot be removed")
        self._get(path)
        depth = len(path.segments)
        for key in [k for k in self._nodes if k[:depth] == path.segments]:
            del self._nodes[key]
