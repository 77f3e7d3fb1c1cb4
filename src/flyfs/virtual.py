"""Virtual filesystems.

A virtual filesystem presents one or more real directories as if they were
the root. Paths are manipulated exactly as on a real filesystem; only the
definitive location used for I/O differs.

Example usage::

    from flyfs.virtual import virtual_filesystem

    vfs = virtual_filesystem(["/home/abw/web/site", "/usr/share/site"])
    vfs.read_file("/index.html")    # first root holding /index.html
    vfs.write_file("/new.html", "") # always written under the first root
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from typing import TYPE_CHECKING

from flyfs.filesystem import Filesystem
from flyfs.types import Dialect

if TYPE_CHECKING:
    from flyfs.algebra import PathSpec

logger = logging.getLogger(__name__)

__all__ = ["VirtualResolver", "virtual_filesystem"]


class VirtualResolver:
    """Resolver mapping virtual absolute paths under real root directories.

    Writes always go under the first root. Reads go under the first root in
    which the path exists, falling back to the first root so that a missing
    path still maps somewhere definite.

    Satisfies the PathResolver protocol structurally.
    """

    def __init__(self, roots: Sequence[str]) -> None:
        if isinstance(roots, str):
            roots = [roots]
        if not roots:
            raise ValueError("A virtual filesystem needs at least one root")
        self.roots = list(roots)

    def __repr__(self) -> str:
        return f"VirtualResolver({self.roots!r})"

    def definitive_write(self, filesystem: Filesystem, path: PathSpec) -> str:
        """Map path under the first root."""
        return filesystem.merge_paths(self.roots[0], filesystem.absolute(path))

    def definitive_read(self, filesystem: Filesystem, path: PathSpec) -> str:
        """Map path under the first root that holds it."""
        virtual = filesystem.absolute(path)
        for root in self.roots:
            location = filesystem.merge_paths(root, virtual)
            if os.path.exists(filesystem.native(location)):
                return location
        logger.debug("%s not found under any root, using %s", virtual, self.roots[0])
        return filesystem.merge_paths(self.roots[0], virtual)


def virtual_filesystem(
    roots: str | Sequence[str],
    cwd: str | None = None,
    dialect: Dialect | None = None,
    list_all_entries: bool = False,
) -> Filesystem:
    """Create a filesystem rooted at one or more real directories.

    Args:
        roots: Real directories, highest priority first. Relative roots are
            resolved against the OS working directory.
        cwd: Virtual working directory. Defaults to the virtual root.
        dialect: Path conventions. Defaults to the host OS.
        list_all_entries: Include current/parent entries in listings.
    """
    if isinstance(roots, str):
        roots = [roots]
    dialect = dialect or Dialect.host()
    return Filesystem(
        dialect=dialect,
        cwd=cwd or dialect.root_token,
        list_all_entries=list_all_entries,
        resolver=VirtualResolver([os.path.abspath(root) for root in roots]),
    )
