"""Tests for filesystem configuration."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from flyfs import config as config_module
from flyfs.config import FilesystemConfig, coerce_config, load_config
from flyfs.types import Dialect


class TestFilesystemConfig:
    """Tests for the configuration model."""

    def test_defaults(self) -> None:
        """Test an empty configuration."""
        settings = FilesystemConfig()

        assert settings.dialect is None
        assert settings.cwd is None
        assert settings.list_all_entries is False
        assert settings.roots == []

    def test_camel_case_aliases(self) -> None:
        """Test camelCase keys are accepted alongside field names."""
        settings = FilesystemConfig.model_validate(
            {"rootToken": "/", "parentToken": "^", "currentToken": "@", "listAllEntries": True}
        )

        assert settings.root_token == "/"
        assert settings.parent_token == "^"
        assert settings.current_token == "@"
        assert settings.list_all_entries is True

    def test_build_host_dialect(self) -> None:
        """Test the host dialect is the default."""
        assert FilesystemConfig().build_dialect() == Dialect.host()

    def test_build_windows_dialect(self) -> None:
        """Test the Windows preset keeps volumes and the alternate separator."""
        dialect = FilesystemConfig(dialect="windows").build_dialect()

        assert dialect.separator == "\\"
        assert dialect.alt_separator == "/"
        assert dialect.volumes is True

    def test_token_overrides(self) -> None:
        """Test explicit tokens override the preset."""
        dialect = FilesystemConfig(dialect="posix", separator=":", root_token=":").build_dialect()

        assert dialect.separator == ":"
        assert dialect.root_token == ":"
        assert dialect.parent_token == ".."

    def test_unknown_dialect(self) -> None:
        """Test an unknown dialect name is rejected."""
        with pytest.raises(ValueError, match="Unknown dialect: amiga"):
            FilesystemConfig(dialect="amiga").build_dialect()

    def test_invalid_tokens(self) -> None:
        """Test identical parent and current tokens are rejected."""
        with pytest.raises(ValueError, match="must differ"):
            FilesystemConfig(dialect="posix", parent_token="=", current_token="=").build_dialect()


class TestConfigFiles:
    """Tests for loading configuration from files."""

    def test_from_yaml(self, tmp_path: Path) -> None:
        """Test loading YAML."""
        path = tmp_path / "config.yaml"
        path.write_text("dialect: posix\ncwd: /data\nroots:\n  - /srv/a\n  - /srv/b\n")

        settings = FilesystemConfig.from_file(path)

        assert settings.dialect == "posix"
        assert settings.cwd == "/data"
        assert settings.roots == ["/srv/a", "/srv/b"]

    def test_from_json(self, tmp_path: Path) -> None:
        """Test loading JSON."""
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"dialect": "windows", "listAllEntries": True}))

        settings = FilesystemConfig.from_file(path)

        assert settings.dialect == "windows"
        assert settings.list_all_entries is True

    def test_empty_yaml(self, tmp_path: Path) -> None:
        """Test an empty file gives the defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert FilesystemConfig.from_file(path) == FilesystemConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError, match="Configuration file not found"):
            FilesystemConfig.from_file(tmp_path / "missing.yaml")

    def test_not_a_mapping(self, tmp_path: Path) -> None:
        """Test a non-mapping document is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- one\n- two\n")

        with pytest.raises(ValueError, match="must be a mapping"):
            FilesystemConfig.from_file(path)

    def test_load_default_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the default file is read when present."""
        default_file = tmp_path / "config.yaml"
        default_file.write_text("cwd: /from/default\n")
        monkeypatch.setattr(config_module, "DEFAULT_CONFIG_FILE", default_file)

        assert load_config().cwd == "/from/default"

    def test_load_without_default_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test an empty configuration when no default file exists."""
        monkeypatch.setattr(config_module, "DEFAULT_CONFIG_FILE", tmp_path / "absent.yaml")

        assert load_config() == FilesystemConfig()

    def test_load_explicit_file(self, tmp_path: Path) -> None:
        """Test an explicit file takes precedence."""
        path = tmp_path / "explicit.yaml"
        path.write_text("dialect: windows\n")

        assert load_config(path).dialect == "windows"


class TestCoerceConfig:
    """Tests for accepting different configuration forms."""

    def test_none(self) -> None:
        """Test None gives the defaults."""
        assert coerce_config(None) == FilesystemConfig()

    def test_model_passthrough(self) -> None:
        """Test a model is returned as is."""
        settings = FilesystemConfig(cwd="/x")

        assert coerce_config(settings) is settings

    def test_mapping(self) -> None:
        """Test a mapping is validated."""
        assert coerce_config({"cwd": "/y"}).cwd == "/y"
