"""Core bridge abstractions and models.

This module provides the foundational types for the guest file bridge,
including Pydantic models for configuration and outcomes, error types,
structured logging, and the pluggable storage adapters.
"""

from __future__ import annotations

from .errors import (
    ConfigurationError,
    ConfigValidationError,
    FileBridgeError,
    PathEscapeError,
    UnsupportedFeatureError,
)
from .models import (
    BridgeConfig,
    Outcome,
    SearchPathDirectory,
    SearchPathDomainMask,
    StorageBackend,
)
from .logging import BridgeLogger, configure_structlog
from .storage import DiskStorageAdapter, MemoryStorageAdapter, StorageAdapter

__all__ = [
    "BridgeConfig",
    "BridgeLogger",
    "ConfigValidationError",
    "ConfigurationError",
    "DiskStorageAdapter",
    "FileBridgeError",
    "MemoryStorageAdapter",
    "Outcome",
    "PathEscapeError",
    "SearchPathDirectory",
    "SearchPathDomainMask",
    "StorageAdapter",
    "StorageBackend",
    "UnsupportedFeatureError",
    "configure_structlog",
]
