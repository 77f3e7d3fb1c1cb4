"""Generic path entity."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from flyfs.entities.directory import Directory
    from flyfs.filesystem import Filesystem
    from flyfs.types import StatResult
    from flyfs.visitor import Visitor


class Path:
    """A location that may or may not exist.

    Holds only a canonical path string and a reference to the owning
    Filesystem. Every inspection is forwarded to the filesystem at call
    time, so nothing about the entry on disk is ever cached.
    """

    __slots__ = ("_path", "_filesystem")

    def __init__(self, *parts: Any, filesystem: Filesystem | None = None) -> None:
        if filesystem is None:
            if len(parts) == 1 and isinstance(parts[0], Path):
                filesystem = parts[0].filesystem
            else:
                from flyfs.context import get_default

                filesystem = get_default()
        self._filesystem = filesystem
        self._path = self._build(filesystem, parts)

    def _build(self, filesystem: Filesystem, parts: tuple[Any, ...]) -> str:
        if not parts:
            raise ValueError(f"{type(self).__name__} requires a path")
        if len(parts) == 1:
            spec = parts[0]
            if isinstance(spec, Sequence) and not isinstance(spec, str):
                return filesystem.join_directory(list(spec))
            return filesystem.join_directory(str(spec))
        return filesystem.join_directory(list(parts))

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def path(self) -> str:
        """Canonical path string."""
        return self._path

    @property
    def filesystem(self) -> Filesystem:
        """Owning filesystem."""
        return self._filesystem

    def __str__(self) -> str:
        return self._path

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._path == other._path and self._filesystem is other._filesystem

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._path))

    # ------------------------------------------------------------------
    # Path parts
    # ------------------------------------------------------------------

    @property
    def volume(self) -> str:
        return self._filesystem.split_path(self._path)[0]

    @property
    def dirname(self) -> str:
        """Path of the containing directory, as written."""
        volume, directory, _ = self._filesystem.split_path(self._path)
        if not directory:
            return volume
        return self._filesystem.join_path(volume, directory, "")

    @property
    def name(self) -> str:
        """Final component of the path."""
        return self._filesystem.split_path(self._path)[2]

    @property
    def extension(self) -> str:
        """Text after the last dot in the name, or "" if there is none.

        A leading dot (as in ".profile") does not start an extension.
        """
        name = self.name
        index = name.rfind(".")
        if index <= 0:
            return ""
        return name[index + 1 :]

    @property
    def basename(self) -> str:
        """Name without its extension."""
        extension = self.extension
        if not extension:
            return self.name
        return self.name[: -len(extension) - 1]

    def components(self) -> list[str]:
        return self._filesystem.split_directory(self._path)

    def parent(self, skip: int = 0) -> Directory:
        """Directory containing this path.

        Args:
            skip: Number of additional levels to climb.
        """
        from flyfs.entities.directory import Directory

        fs = self._filesystem
        climb = [fs.absolute(self._path)] + [fs.parent_token] * (skip + 1)
        return Directory(fs.collapse_directory(climb), filesystem=fs)

    # ------------------------------------------------------------------
    # Path algebra
    # ------------------------------------------------------------------

    def absolute(self) -> str:
        return self._filesystem.absolute(self._path)

    def relative(self, base: Any = None) -> str:
        return self._filesystem.relative(self._path, None if base is None else str(base))

    def definitive(self) -> str:
        """Location used for I/O on this path."""
        return self._filesystem.definitive(self._path)

    def collapse(self) -> str:
        return self._filesystem.collapse_directory(self._path)

    def is_absolute(self) -> bool:
        return self._filesystem.is_absolute(self._path)

    def is_relative(self) -> bool:
        return self._filesystem.is_relative(self._path)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def exists(self) -> bool:
        return self._filesystem.path_exists(self._path)

    def is_file(self) -> bool:
        return self._filesystem.file_exists(self._path)

    def is_directory(self) -> bool:
        return self._filesystem.directory_exists(self._path)

    is_dir = is_directory

    def stat(self) -> StatResult:
        """Fresh metadata for this path.

        Raises:
            StatFailed: If the path does not exist.
        """
        return self._filesystem.stat_path(self._path)

    def size(self) -> int:
        return self.stat().size

    def modified(self) -> float:
        return self.stat().modified

    def accessed(self) -> float:
        return self.stat().accessed

    def changed(self) -> float:
        return self.stat().changed

    def mode(self) -> int:
        return self.stat().mode

    def permissions(self) -> int:
        return self.stat().permissions

    def readable(self) -> bool:
        return self.stat().readable

    def writable(self) -> bool:
        return self.stat().writable

    def executable(self) -> bool:
        return self.stat().executable

    def owned(self) -> bool:
        return self.stat().owned

    def accept(self, visitor: Visitor) -> Visitor:
        """Dispatch a visitor to this entity."""
        return visitor.visit(self)
