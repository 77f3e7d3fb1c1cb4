"""Protocol definitions for the definitive-path seam.

A `Filesystem` never hands a path to the OS directly. It first asks its
resolver for the *definitive* location of that path, separately for reads
and writes. The base resolver maps every path to its absolute form; a
virtual resolver can prepend a root or pick between overlaid roots without
the rest of the filesystem knowing.

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from flyfs.algebra import PathSpec
    from flyfs.filesystem import Filesystem


@runtime_checkable
class PathResolver(Protocol):
    """Protocol mapping conceptual paths to the locations used for I/O.

    Implementations must be total functions of the absolute path and the
    filesystem state: every path maps to some definitive location.
    """

    def definitive_read(self, filesystem: Filesystem, path: PathSpec) -> str:
        """Map a path to the location read from.

        Args:
            filesystem: The filesystem performing the operation.
            path: Absolute or relative path (string or components).

        Returns:
            Definitive path for reading.
        """
        ...

    def definitive_write(self, filesystem: Filesystem, path: PathSpec) -> str:
        """Map a path to the location written to.

        Args:
            filesystem: The filesystem performing the operation.
            path: Absolute or relative path (string or components).

        Returns:
            Definitive path for writing.
        """
        ...


class AbsoluteResolver:
    """Resolver for a real filesystem: definitive paths are absolute paths.

    Satisfies the PathResolver protocol structurally.
    """

    def definitive_read(self, filesystem: Filesystem, path: PathSpec) -> str:
        """Return the absolute path."""
        return filesystem.absolute(path)

    def definitive_write(self, filesystem: Filesystem, path: PathSpec) -> str:
        """Return the absolute path."""
        return filesystem.absolute(path)


__all__ = ["AbsoluteResolver", "PathResolver"]
