"""Pydantic models for bridge configuration and operation outcomes.

Provides the validated session configuration, the search-path enumerations
used by the resolver, and the Outcome value produced by facade helpers
before it is translated for the guest.
"""

from __future__ import annotations

import uuid
from enum import Enum, IntEnum
from typing import Any

from pydantic import BaseModel, Field, ValidationError, field_validator

from fsbridge.core.errors import ConfigValidationError


class SearchPathDirectory(IntEnum):
    """Search-path directory identifiers understood by the resolver."""

    APPLICATION = 1
    DOCUMENT = 9
    APPLICATION_SUPPORT = 14


# Legacy alias that resolves to the Documents directory
DOCUMENT_DIRECTORY_ALIAS = 5


class SearchPathDomainMask(IntEnum):
    """Search-path domain masks. Only USER is supported."""

    USER = 1
    LOCAL = 2
    NETWORK = 4
    SYSTEM = 8
    ALL = 0x0FFFF


class StorageBackend(str, Enum):
    """Supported storage backend types.

    DISK: Host directory confined by resolved-path containment checks
    MEMORY: In-process tree (for testing and ephemeral sessions)
    """
    DISK = "disk"
    MEMORY = "memory"


class Outcome(BaseModel):
    """Result of a storage call before translation to guest types.

    Attributes:
        success: Whether the storage call succeeded
        size_or_count: Byte count or entry count where the operation has one
        cause: Short description of the host failure, free of host paths
    """

    success: bool = Field(description="Whether the storage call succeeded")

    size_or_count: int | None = Field(
        default=None,
        ge=0,
        description="Byte count or entry count, if the operation produces one"
    )

    cause: str | None = Field(
        default=None,
        description="Opaque host failure cause"
    )

    model_config = {"frozen": True}

    @classmethod
    def ok(cls, size_or_count: int | None = None) -> Outcome:
        return cls(success=True, size_or_count=size_or_count)

    @classmethod
    def failed(cls, exc: BaseException) -> Outcome:
        return cls(success=False, cause=type(exc).__name__)


class BridgeConfig(BaseModel):
    """Type-safe configuration for one emulated application session.

    Attributes:
        host_root: Host directory backing the guest root (disk backend only)
        app_id: Application identifier; the home directory is applications_dir/app_id
        applications_dir: Guest directory that holds application homes
        working_directory: Initial guest working directory (None = home)
        storage_backend: Which StorageAdapter implementation to build
        log_level: Minimum log level name for configure_structlog
        log_json: Render logs as JSON instead of console output
    """

    host_root: str = Field(
        default="workspace",
        description="Host directory backing the guest root"
    )

    app_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Application identifier used as the home directory name"
    )

    applications_dir: str = Field(
        default="/User/Applications",
        description="Guest directory holding application homes"
    )

    working_directory: str | None = Field(
        default=None,
        description="Initial guest working directory (None = home directory)"
    )

    storage_backend: StorageBackend = Field(
        default=StorageBackend.DISK,
        description="Storage backend implementation"
    )

    log_level: str = Field(
        default="INFO",
        description="Minimum log level"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON log rendering"
    )

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid bridge configuration: {e}") from e

    @field_validator("app_id")
    @classmethod
    def validate_app_id(cls, v: str) -> str:
        """Ensure the app id is a single path segment."""
        if not v or "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError("app_id must be a single non-empty path segment")
        return v

    @field_validator("applications_dir", "working_directory")
    @classmethod
    def validate_guest_absolute(cls, v: str | None) -> str | None:
        """Ensure guest directories are absolute."""
        if v is not None and not v.startswith("/"):
            raise ValueError("Guest directories must be absolute paths")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level
