"""Tests for session creation, the default manager and search paths."""

from __future__ import annotations

from pathlib import Path

import pytest

from fsbridge import (
    AutoreleasePool,
    BridgeConfig,
    BridgeSession,
    ConfigurationError,
    DiskStorageAdapter,
    FileManager,
    MemoryStorageAdapter,
    SearchPathDirectory,
    SearchPathDomainMask,
    UnsupportedFeatureError,
    VirtualPath,
    create_session,
)

HOME = "/User/Applications/test-app"


class TestCreateSession:
    """Test create_session() defaults and backend selection."""

    def test_memory_backend(self, memory_session: BridgeSession) -> None:
        assert isinstance(memory_session.fs.storage, MemoryStorageAdapter)

    def test_disk_backend(self, disk_session: BridgeSession, tmp_path: Path) -> None:
        assert isinstance(disk_session.fs.storage, DiskStorageAdapter)
        assert (tmp_path / "root" / "User" / "Applications" / "test-app" / "Documents").is_dir()

    def test_standard_directories_exist(self, session: BridgeSession) -> None:
        storage = session.fs.storage
        home = VirtualPath.parse(HOME)
        for relative in ("Documents", "Library/Application Support", "Library/Caches", "tmp"):
            assert storage.is_dir(home.join(relative))

    def test_explicit_storage_adapter_wins(self) -> None:
        storage = MemoryStorageAdapter()
        session = create_session(BridgeConfig(app_id="x"), storage_adapter=storage)
        assert session.fs.storage is storage

    def test_working_directory_from_config(self) -> None:
        config = BridgeConfig(storage_backend="memory", app_id="x", working_directory="/work")
        session = create_session(config)
        assert session.default_manager().current_directory_path() == "/work"
        assert session.fs.storage.is_dir(VirtualPath.parse("/work"))

    def test_generated_app_id(self) -> None:
        session = create_session(BridgeConfig(storage_backend="memory"))
        assert session.home_directory() == f"/User/Applications/{session.config.app_id}"

    def test_configure_logging_flag(self) -> None:
        config = BridgeConfig(storage_backend="memory", log_level="debug", log_json=True)
        session = create_session(config, configure_logging=True)
        assert isinstance(session, BridgeSession)


class TestDefaultManager:
    """Test lazy creation and identity of the default manager."""

    def test_same_instance_every_call(self, session: BridgeSession) -> None:
        first = session.default_manager()
        second = session.default_manager()
        assert first is second
        assert isinstance(first, FileManager)

    def test_shares_session_collaborators(self, session: BridgeSession) -> None:
        manager = session.default_manager()
        assert manager.fs is session.fs
        assert manager.pool is session.pool
        assert manager.logger is session.logger

    def test_sessions_do_not_share_managers(self) -> None:
        a = create_session(BridgeConfig(storage_backend="memory", app_id="a"))
        b = create_session(BridgeConfig(storage_backend="memory", app_id="b"))
        assert a.default_manager() is not b.default_manager()


class TestSearchPaths:
    """Test the guest search-path functions exposed by the session."""

    def test_home_directory(self, memory_session: BridgeSession) -> None:
        assert memory_session.home_directory() == HOME

    def test_temporary_directory(self, memory_session: BridgeSession) -> None:
        assert memory_session.temporary_directory() == f"{HOME}/tmp"

    def test_documents(self, memory_session: BridgeSession) -> None:
        result = memory_session.search_path_for_directories_in_domains(
            SearchPathDirectory.DOCUMENT, SearchPathDomainMask.USER, True
        )
        assert result == [f"{HOME}/Documents"]
        assert result in memory_session.pool

    def test_application_support(self, memory_session: BridgeSession) -> None:
        result = memory_session.search_path_for_directories_in_domains(14, 1, True)
        assert result == [f"{HOME}/Library/Application Support"]

    def test_applications(self, memory_session: BridgeSession) -> None:
        assert memory_session.search_path_for_directories_in_domains(1, 1, True) == [
            "/User/Applications"
        ]

    def test_non_user_domain(self, memory_session: BridgeSession) -> None:
        with pytest.raises(ConfigurationError):
            memory_session.search_path_for_directories_in_domains(9, SearchPathDomainMask.ALL, True)

    def test_unknown_directory(self, memory_session: BridgeSession) -> None:
        with pytest.raises(UnsupportedFeatureError):
            memory_session.search_path_for_directories_in_domains(13, 1, True)

    def test_documents_resolves_to_existing_directory(self, session: BridgeSession) -> None:
        docs = session.search_path_for_directories_in_domains(9, 1, True)[0]
        assert session.default_manager().file_exists_at_path(docs) is True


class TestAutoreleasePool:
    """Test the proxy ownership pool."""

    def test_autorelease_returns_object(self) -> None:
        pool = AutoreleasePool()
        obj = ["x"]
        assert pool.autorelease(obj) is obj
        assert obj in pool
        assert len(pool) == 1

    def test_drain(self, memory_session: BridgeSession) -> None:
        manager = memory_session.default_manager()
        manager.current_directory_path()
        manager.directory_contents_at_path(HOME)
        pending = len(memory_session.pool)
        assert pending >= 2
        assert memory_session.pool.drain() == pending
        assert len(memory_session.pool) == 0

    def test_membership_is_by_identity(self) -> None:
        pool = AutoreleasePool()
        pool.autorelease(["x"])
        assert ["x"] not in pool
