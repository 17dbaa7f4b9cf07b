"""Configuration loading for bridge sessions.

Provides default session settings and TOML-based configuration loading for
the guest home layout, storage backend and logging.
"""

from __future__ import annotations

import os
import tomllib
from typing import Any

from pydantic import ValidationError

from fsbridge.core.errors import ConfigValidationError
from fsbridge.core.models import BridgeConfig

DEFAULT_CONFIG: dict[str, Any] = {
    # Host directory backing the guest root (disk backend)
    "host_root": "workspace",

    # Guest directory holding application homes
    "applications_dir": "/User/Applications",

    "storage_backend": "disk",

    "log_level": "INFO",
    "log_json": False,
}


def load_config(path: str = "config/bridge.toml") -> BridgeConfig:
    """Load and merge user configuration with defaults.

    Performs a shallow merge of user-provided TOML settings with
    DEFAULT_CONFIG. Keys absent from both (app_id, working_directory) fall
    back to the BridgeConfig field defaults.

    Args:
        path: Path to the TOML file. If file doesn't exist, returns
              BridgeConfig with defaults.

    Returns:
        BridgeConfig: Validated configuration.

    Raises:
        ConfigValidationError: If configuration contains invalid values
        tomllib.TOMLDecodeError: If TOML file is malformed
        OSError: If file exists but cannot be read
    """
    data: dict[str, Any] = {}
    if os.path.exists(path):
        with open(path, "rb") as f:
            data = tomllib.load(f)

    # Support a [bridge] table as well as top-level keys
    if isinstance(data.get("bridge"), dict):
        data = data["bridge"]

    config = DEFAULT_CONFIG | data

    try:
        return BridgeConfig(**config)
    except ConfigValidationError:
        raise
    except ValidationError as e:
        raise ConfigValidationError(f"Configuration validation failed: {e}") from e
