"""Filesystem configuration."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from flyfs.types import Dialect

# Default configuration location
CONFIG_DIR = Path.home() / ".flyfs"
DEFAULT_CONFIG_FILE = CONFIG_DIR / "config.yaml"


class FilesystemConfig(BaseModel):
    """Named fields used to construct a Filesystem.

    Dialect tokens left unset fall back to the host conventions.
    """

    model_config = ConfigDict(populate_by_name=True)

    separator: str | None = None
    root_token: str | None = Field(default=None, alias="rootToken")
    parent_token: str | None = Field(default=None, alias="parentToken")
    current_token: str | None = Field(default=None, alias="currentToken")
    dialect: str | None = None  # "posix", "windows" or "host"
    cwd: str | None = None
    list_all_entries: bool = Field(default=False, alias="listAllEntries")
    roots: list[str] = Field(default_factory=list)

    @classmethod
    def from_file(cls, path: Path) -> FilesystemConfig:
        """Load configuration from a YAML or JSON file.

        Args:
            path: Path to a .yaml, .yml or .json file.

        Returns:
            Parsed FilesystemConfig.

        Raises:
            FileNotFoundError: If file doesn't exist.
            ValueError: If the content is not a mapping or fails validation.
        """
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        text = path.read_text()
        if path.suffix == ".json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping: {path}")
        return cls.model_validate(data)

    def build_dialect(self) -> Dialect:
        """Build the Dialect described by this configuration."""
        presets = {"posix": Dialect.posix, "windows": Dialect.windows, "host": Dialect.host}
        name = self.dialect or "host"
        if name not in presets:
            raise ValueError(f"Unknown dialect: {name}. Supported: {list(presets.keys())}")
        base = presets[name]()
        return Dialect(
            separator=self.separator or base.separator,
            root_token=self.root_token or base.root_token,
            parent_token=self.parent_token or base.parent_token,
            current_token=self.current_token or base.current_token,
            alt_separator=base.alt_separator,
            volumes=base.volumes,
        )


def load_config(path: Path | None = None) -> FilesystemConfig:
    """Load configuration from path, or the default file if it exists.

    Args:
        path: Explicit configuration file. Must exist if given.

    Returns:
        FilesystemConfig, empty if no file is configured.
    """
    if path is not None:
        return FilesystemConfig.from_file(path)
    if DEFAULT_CONFIG_FILE.exists():
        return FilesystemConfig.from_file(DEFAULT_CONFIG_FILE)
    return FilesystemConfig()


def coerce_config(config: FilesystemConfig | dict[str, Any] | None) -> FilesystemConfig:
    """Accept a config model, a mapping of named fields or None."""
    if config is None:
        return FilesystemConfig()
    if isinstance(config, FilesystemConfig):
        return config
    return FilesystemConfig.model_validate(config)
