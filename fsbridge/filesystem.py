"""Guest filesystem service: storage adapter plus home and working directory.

GuestFilesystem is the single place where guest path strings become
absolute VirtualPath values. Relative paths are resolved against the current
working directory; parent segments are clamped at the guest root.
"""

from __future__ import annotations

from fsbridge.core.storage import StorageAdapter
from fsbridge.paths import VirtualPath


class GuestFilesystem:
    """Virtual filesystem service consumed by the file manager facade.

    Attributes:
        storage: StorageAdapter holding the actual data
        applications_dir: Guest directory holding application homes
    """

    def __init__(
        self,
        storage: StorageAdapter,
        home: VirtualPath,
        applications_dir: VirtualPath,
        working_directory: VirtualPath | None = None,
    ) -> None:
        if not home.absolute or not applications_dir.absolute:
            raise ValueError("Home and applications directories must be absolute")
        self.storage = storage
        self.applications_dir = applications_dir
        self._home = home
        self._cwd = working_directory if working_directory is not None else home

    def home_directory(self) -> VirtualPath:
        return self._home

    def working_directory(self) -> VirtualPath:
        return self._cwd

    def resolve(self, path: str) -> VirtualPath:
        """Turn a guest path string into an absolute VirtualPath."""
        return VirtualPath.parse(path, base=self._cwd)

    def change_working_directory(self, path: str) -> None:
        """Make path the working directory.

        Raises:
            NotADirectoryError: If path does not name an existing directory
        """
        target = self.resolve(path)
        if not self.storage.is_dir(target):
            raise NotADirectoryError(f"'{target}' is not a directory")
        self._cwd = target

    def ensure_standard_directories(self) -> None:
        """Create the home directory layout guest programs expect to exist."""
        for relative in ("Documents", "Library/Application Support", "Library/Caches", "tmp"):
            self.storage.create_dir(self._home.join(relative))
