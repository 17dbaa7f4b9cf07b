"""Guest file management bridge.

Virtualizes guest file and directory calls onto a sandboxed storage backend:
search-path resolution, a file manager facade with guest-compatible
success/failure semantics, and snapshot directory enumeration.

Usage:
    >>> from fsbridge import BridgeConfig, create_session
    >>> session = create_session(BridgeConfig(storage_backend="memory"))
    >>> manager = session.default_manager()
    >>> docs = session.search_path_for_directories_in_domains(9, 1, True)[0]
    >>> manager.create_file_at_path(docs + "/notes.txt", b"hello")
    True
"""

from __future__ import annotations

from fsbridge.config import DEFAULT_CONFIG, load_config
from fsbridge.core import (
    BridgeConfig,
    BridgeLogger,
    ConfigurationError,
    ConfigValidationError,
    DiskStorageAdapter,
    FileBridgeError,
    MemoryStorageAdapter,
    Outcome,
    PathEscapeError,
    SearchPathDirectory,
    SearchPathDomainMask,
    StorageAdapter,
    StorageBackend,
    UnsupportedFeatureError,
    configure_structlog,
)
from fsbridge.core.factory import create_session
from fsbridge.enumerator import DirectoryEnumerator, EnumeratorState
from fsbridge.file_manager import FileManager
from fsbridge.filesystem import GuestFilesystem
from fsbridge.guest import NULL, AutoreleasePool, OutPointer
from fsbridge.paths import VirtualPath, resolve_domain
from fsbridge.session import BridgeSession

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CONFIG",
    "NULL",
    "AutoreleasePool",
    "BridgeConfig",
    "BridgeLogger",
    "BridgeSession",
    "ConfigValidationError",
    "ConfigurationError",
    "DirectoryEnumerator",
    "DiskStorageAdapter",
    "EnumeratorState",
    "FileBridgeError",
    "FileManager",
    "GuestFilesystem",
    "MemoryStorageAdapter",
    "Outcome",
    "OutPointer",
    "PathEscapeError",
    "SearchPathDirectory",
    "SearchPathDomainMask",
    "StorageAdapter",
    "StorageBackend",
    "UnsupportedFeatureError",
    "VirtualPath",
    "configure_structlog",
    "create_session",
    "load_config",
    "resolve_domain",
]
