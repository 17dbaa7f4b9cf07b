"""Shared pytest fixtures for all tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from fsbridge import BridgeConfig, BridgeSession, FileManager, create_session

APP_ID = "test-app"


@pytest.fixture
def memory_session() -> BridgeSession:
    """Session backed by an in-memory storage adapter."""
    return create_session(BridgeConfig(storage_backend="memory", app_id=APP_ID))


@pytest.fixture
def disk_session(tmp_path: Path) -> BridgeSession:
    """Session backed by a temporary host directory."""
    config = BridgeConfig(host_root=str(tmp_path / "root"), app_id=APP_ID)
    return create_session(config)


@pytest.fixture(params=["memory", "disk"])
def session(request: pytest.FixtureRequest, tmp_path: Path) -> BridgeSession:
    """Session for each storage backend."""
    config = BridgeConfig(
        storage_backend=request.param,
        host_root=str(tmp_path / "root"),
        app_id=APP_ID,
    )
    return create_session(config)


@pytest.fixture
def manager(session: BridgeSession) -> FileManager:
    """Default file manager of the parametrized session."""
    return session.default_manager()
