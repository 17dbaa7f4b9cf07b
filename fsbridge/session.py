"""Per-application bridge session and its lazily created default manager.

A BridgeSession is built once when an emulated application starts and is
passed to whatever dispatches guest calls. It owns the guest filesystem, the
autorelease pool, the logger and the default FileManager, so nothing in the
bridge lives in module-level state.
"""

from __future__ import annotations

from fsbridge.core.logging import BridgeLogger
from fsbridge.core.models import BridgeConfig
from fsbridge.file_manager import (
    FileManager,
    home_directory,
    search_path_for_directories_in_domains,
    temporary_directory,
)
from fsbridge.filesystem import GuestFilesystem
from fsbridge.guest import AutoreleasePool


class BridgeSession:
    """State shared by every guest file call of one application.

    Attributes:
        config: BridgeConfig the session was built from
        fs: GuestFilesystem over the session's storage adapter
        pool: AutoreleasePool receiving returned proxies
        logger: BridgeLogger for structured events
    """

    def __init__(
        self,
        config: BridgeConfig,
        fs: GuestFilesystem,
        pool: AutoreleasePool | None = None,
        logger: BridgeLogger | None = None,
    ) -> None:
        self.config = config
        self.fs = fs
        self.pool = pool if pool is not None else AutoreleasePool()
        self.logger = logger if logger is not None else BridgeLogger()
        self._default_manager: FileManager | None = None

    def default_manager(self) -> FileManager:
        """Return the session's FileManager, creating it on first use."""
        if self._default_manager is not None:
            return self._default_manager

        candidate = FileManager(self.fs, self.pool, self.logger)
        # First writer wins; a later candidate is simply dropped.
        if self._default_manager is None:
            self._default_manager = candidate
            self.logger.log_manager_created(self.config.app_id)
        return self._default_manager

    def home_directory(self) -> str:
        return home_directory(self.fs, self.pool)

    def temporary_directory(self) -> str:
        return temporary_directory(self.fs, self.pool)

    def search_path_for_directories_in_domains(
        self, directory: int, domain_mask: int, expand_tilde: bool
    ) -> list[str]:
        return search_path_for_directories_in_domains(
            self.fs, self.pool, directory, domain_mask, expand_tilde
        )
