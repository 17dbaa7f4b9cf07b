"""Tests for configuration models and load_config() TOML loading."""

from __future__ import annotations

import uuid
from pathlib import Path

import pytest

from fsbridge import (
    DEFAULT_CONFIG,
    BridgeConfig,
    ConfigValidationError,
    Outcome,
    StorageBackend,
    load_config,
)


class TestBridgeConfig:
    """Test BridgeConfig defaults and validation."""

    def test_default_values(self) -> None:
        config = BridgeConfig()

        assert config.host_root == "workspace"
        assert config.applications_dir == "/User/Applications"
        assert config.working_directory is None
        assert config.storage_backend is StorageBackend.DISK
        assert config.log_level == "INFO"
        assert config.log_json is False

    def test_generated_app_id_is_uuid(self) -> None:
        config = BridgeConfig()
        assert str(uuid.UUID(config.app_id)) == config.app_id

    def test_app_ids_differ(self) -> None:
        assert BridgeConfig().app_id != BridgeConfig().app_id

    def test_backend_from_string(self) -> None:
        assert BridgeConfig(storage_backend="memory").storage_backend is StorageBackend.MEMORY

    @pytest.mark.parametrize("app_id", ["", "a/b", "..", "."])
    def test_invalid_app_id(self, app_id: str) -> None:
        with pytest.raises(ConfigValidationError):
            BridgeConfig(app_id=app_id)

    def test_relative_applications_dir_rejected(self) -> None:
        with pytest.raises(ConfigValidationError):
            BridgeConfig(applications_dir="User/Applications")

    def test_relative_working_directory_rejected(self) -> None:
        with pytest.raises(ConfigValidationError):
            BridgeConfig(working_directory="Documents")

    def test_unknown_backend_rejected(self) -> None:
        with pytest.raises(ConfigValidationError):
            BridgeConfig(storage_backend="s3")

    def test_log_level_normalized(self) -> None:
        assert BridgeConfig(log_level="warning").log_level == "WARNING"

    def test_unknown_log_level_rejected(self) -> None:
        with pytest.raises(ConfigValidationError):
            BridgeConfig(log_level="chatty")


class TestOutcome:
    """Test the Outcome value model."""

    def test_ok(self) -> None:
        outcome = Outcome.ok(12)
        assert outcome.success
        assert outcome.size_or_count == 12
        assert outcome.cause is None

    def test_failed_records_exception_type_only(self) -> None:
        outcome = Outcome.failed(FileNotFoundError("/host/secret/path"))
        assert not outcome.success
        assert outcome.cause == "FileNotFoundError"
        assert "/host" not in outcome.model_dump_json()

    def test_negative_size_rejected(self) -> None:
        with pytest.raises(ValueError):
            Outcome(success=True, size_or_count=-1)

    def test_frozen(self) -> None:
        outcome = Outcome.ok()
        with pytest.raises(ValueError):
            outcome.success = False  # type: ignore[misc]


class TestLoadConfig:
    """Test load_config() merging of TOML files with defaults."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        config = load_config(str(tmp_path / "absent.toml"))
        assert config.host_root == DEFAULT_CONFIG["host_root"]
        assert config.storage_backend is StorageBackend.DISK

    def test_top_level_keys(self, tmp_path: Path) -> None:
        path = tmp_path / "bridge.toml"
        path.write_text(
            'app_id = "com.example.game"\n'
            'storage_backend = "memory"\n'
            'log_json = true\n'
        )
        config = load_config(str(path))
        assert config.app_id == "com.example.game"
        assert config.storage_backend is StorageBackend.MEMORY
        assert config.log_json is True
        assert config.applications_dir == "/User/Applications"

    def test_bridge_table(self, tmp_path: Path) -> None:
        path = tmp_path / "bridge.toml"
        path.write_text('[bridge]\nhost_root = "/srv/guest"\napp_id = "demo"\n')
        config = load_config(str(path))
        assert config.host_root == "/srv/guest"
        assert config.app_id == "demo"

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "bridge.toml"
        path.write_text('applications_dir = "relative"\n')
        with pytest.raises(ConfigValidationError):
            load_config(str(path))

    def test_malformed_toml(self, tmp_path: Path) -> None:
        import tomllib

        path = tmp_path / "bridge.toml"
        path.write_text("app_id = \n")
        with pytest.raises(tomllib.TOMLDecodeError):
            load_config(str(path))
