"""Factory function for creating bridge sessions.

Provides create_session() which builds the storage adapter selected by the
configuration, lays out the application's home directory and returns a
BridgeSession ready to service guest calls.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from fsbridge.core.logging import BridgeLogger, configure_structlog
from fsbridge.core.models import BridgeConfig, StorageBackend
from fsbridge.core.storage import DiskStorageAdapter, MemoryStorageAdapter
from fsbridge.paths import VirtualPath

if TYPE_CHECKING:
    from fsbridge.core.storage import StorageAdapter
    from fsbridge.session import BridgeSession


def create_session(
    config: BridgeConfig | None = None,
    storage_adapter: StorageAdapter | None = None,
    logger: BridgeLogger | None = None,
    configure_logging: bool = False,
) -> BridgeSession:
    """Create a bridge session for one emulated application.

    Args:
        config: Optional BridgeConfig. If None, uses defaults.
        storage_adapter: Optional StorageAdapter. If None, builds the backend
                         named by config.storage_backend.
        logger: Optional BridgeLogger. If None, creates default logger.
        configure_logging: If True, apply config.log_level and config.log_json
                           to structlog before creating the logger.

    Returns:
        BridgeSession whose home directory layout exists in storage

    Examples:
        >>> session = create_session(BridgeConfig(storage_backend="memory", app_id="demo"))
        >>> session.home_directory()
        '/User/Applications/demo'

        >>> adapter = DiskStorageAdapter(Path("/var/lib/bridge/root"))
        >>> session = create_session(storage_adapter=adapter)
    """
    from fsbridge.filesystem import GuestFilesystem
    from fsbridge.session import BridgeSession

    if config is None:
        config = BridgeConfig()

    if configure_logging:
        configure_structlog(
            level=logging.getLevelName(config.log_level), use_json=config.log_json
        )

    if logger is None:
        logger = BridgeLogger()

    if storage_adapter is None:
        if config.storage_backend == StorageBackend.MEMORY:
            storage_adapter = MemoryStorageAdapter()
        else:
            storage_adapter = DiskStorageAdapter(Path(config.host_root))

    applications_dir = VirtualPath.parse(config.applications_dir)
    home = applications_dir.join(config.app_id)
    working_directory = (
        VirtualPath.parse(config.working_directory)
        if config.working_directory is not None
        else None
    )

    fs = GuestFilesystem(storage_adapter, home, applications_dir, working_directory)
    fs.ensure_standard_directories()
    if working_directory is not None:
        storage_adapter.create_dir(working_directory)

    logger.log_session_created(
        app_id=config.app_id,
        home_directory=str(home),
        backend=type(storage_adapter).__name__,
    )

    return BridgeSession(config, fs, logger=logger)
