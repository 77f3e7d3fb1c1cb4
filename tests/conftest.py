"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from flyfs.context import reset_default
from flyfs.filesystem import Filesystem
from flyfs.types import Dialect


@pytest.fixture(autouse=True)
def fresh_default() -> Iterator[None]:
    """Make every test start and end without a default filesystem."""
    reset_default()
    yield
    reset_default()


@pytest.fixture
def posix() -> Dialect:
    """POSIX path conventions."""
    return Dialect.posix()


@pytest.fixture
def windows() -> Dialect:
    """MS Windows path conventions."""
    return Dialect.windows()


@pytest.fixture
def posix_fs() -> Filesystem:
    """POSIX filesystem with a fixed working directory, for pure path work."""
    return Filesystem(dialect=Dialect.posix(), cwd="/home/x")


@pytest.fixture
def tmp_fs(tmp_path: Path) -> Filesystem:
    """Host filesystem whose working directory is the test's temp directory."""
    return Filesystem(cwd=str(tmp_path))


# ============================================================================
# Directory Tree Fixtures
# ============================================================================


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create a small directory tree.

    tree/
        .hidden
        a.txt
        sub/
            b.txt
            deep/
                c.py
    """
    tree = tmp_path / "tree"
    (tree / "sub" / "deep").mkdir(parents=True)
    (tree / ".hidden").write_text("secret")
    (tree / "a.txt").write_text("alpha")
    (tree / "sub" / "b.txt").write_text("bravo")
    (tree / "sub" / "deep" / "c.py").write_text("print('charlie')\n")
    return tree
