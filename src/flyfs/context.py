"""Process-wide default filesystem.

Entities constructed without an explicit filesystem, and class-style calls
such as `Filesystem.default()`, share one default instance. It is created on
first use and lives until the process exits or `reset_default()` is called.

Tests and embedding applications can substitute their own instance with
`set_default()` or, scoped to a block, `using()`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from flyfs.config import FilesystemConfig, load_config
from flyfs.filesystem import Filesystem

logger = logging.getLogger(__name__)

_default: Filesystem | None = None
_lock = threading.Lock()


def get_default() -> Filesystem:
    """Return the default filesystem, creating it on first use."""
    global _default
    if _default is None:
        with _lock:
            if _default is None:
                _default = Filesystem.create_default()
                logger.debug("Created default filesystem %r", _default)
    return _default


def set_default(filesystem: Filesystem) -> Filesystem | None:
    """Replace the default filesystem.

    Returns:
        The previous default, or None if none had been created.
    """
    global _default
    with _lock:
        previous, _default = _default, filesystem
    return previous


def reset_default() -> None:
    """Forget the default filesystem so the next use creates a fresh one."""
    global _default
    with _lock:
        _default = None


@contextmanager
def using(filesystem: Filesystem) -> Iterator[Filesystem]:
    """Make filesystem the default for the duration of a with block."""
    global _default
    previous = set_default(filesystem)
    try:
        yield filesystem
    finally:
        with _lock:
            _default = previous


def create_filesystem(
    config: FilesystemConfig | dict[str, Any] | None = None,
    config_file: Path | None = None,
) -> Filesystem:
    """Factory for configured filesystems.

    Creates a Filesystem from explicit configuration, or from the
    configuration file (the default file if present) when none is given.
    Use this in production code. For tests, construct Filesystem directly.

    Args:
        config: Configuration model or mapping of named fields.
        config_file: Configuration file to read when config is None.

    Returns:
        Configured Filesystem, virtual if the configuration lists roots.
    """
    if config is None:
        config = load_config(config_file)
    return Filesystem.create(config)
