"""Tests for shared value types."""

from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest

from flyfs.types import Dialect, EntryKind, StatResult, classify_stat


class TestDialect:
    """Tests for path dialects."""

    def test_posix(self) -> None:
        """Test POSIX conventions."""
        dialect = Dialect.posix()

        assert (dialect.separator, dialect.root_token) == ("/", "/")
        assert (dialect.parent_token, dialect.current_token) == ("..", ".")
        assert dialect.volumes is False

    def test_host_matches_os(self) -> None:
        """Test the host dialect follows the os module."""
        dialect = Dialect.host()

        assert dialect.separator == os.sep
        assert dialect.parent_token == os.pardir
        assert dialect.current_token == os.curdir

    def test_frozen(self) -> None:
        """Test dialects are immutable."""
        dialect = Dialect.posix()

        with pytest.raises(AttributeError):
            dialect.separator = "\\"  # type: ignore[misc]

    @pytest.mark.parametrize(
        "fields",
        [
            {"separator": "", "root_token": "/", "parent_token": "..", "current_token": "."},
            {"separator": "/", "root_token": "", "parent_token": "..", "current_token": "."},
            {"separator": "/", "root_token": "/", "parent_token": "", "current_token": "."},
            {"separator": "/", "root_token": "/", "parent_token": ".", "current_token": "."},
        ],
    )
    def test_invalid(self, fields: dict[str, str]) -> None:
        """Test invalid token combinations are rejected."""
        with pytest.raises(ValueError):
            Dialect(**fields)


class TestClassifyStat:
    """Tests for entry classification."""

    def test_kinds(self) -> None:
        """Test mode bits map to entry kinds."""
        assert classify_stat(stat.S_IFREG | 0o644) is EntryKind.FILE
        assert classify_stat(stat.S_IFDIR | 0o755) is EntryKind.DIRECTORY
        assert classify_stat(stat.S_IFIFO) is EntryKind.OTHER
        assert classify_stat(None) is EntryKind.OTHER


class TestStatResult:
    """Tests for stat results."""

    def test_from_os(self, tmp_path: Path) -> None:
        """Test building from os.stat with access flags."""
        target = tmp_path / "file.txt"
        target.write_text("hello")
        target.chmod(0o600)

        info = StatResult.from_os(os.stat(target), str(target))

        assert info.size == 5
        assert info.kind is EntryKind.FILE
        assert info.permissions == 0o600
        assert info.readable is True
        assert info.owned is True

    def test_as_tuple(self, tmp_path: Path) -> None:
        """Test the tuple form has the stat fields followed by the flags."""
        info = StatResult.from_os(os.stat(tmp_path), str(tmp_path))

        values = info.as_tuple()

        assert len(values) == 17
        assert values[2] == info.mode
        assert values[7] == info.size
        assert values[13:] == (info.readable, info.writable, info.executable, info.owned)
        assert info.kind is EntryKind.DIRECTORY
