"""Directory entity."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from flyfs.entities.base import Path
from flyfs.entities.file import File

if TYPE_CHECKING:
    from flyfs.filesystem import Filesystem
    from flyfs.visitor import Visitor, VisitorConfig


class Directory(Path):
    """A path known (or expected) to be a directory.

    With no path, a Directory refers to the current working directory of its
    filesystem at the time it is constructed.
    """

    __slots__ = ()

    def _build(self, filesystem: Filesystem, parts: tuple[Any, ...]) -> str:
        if not parts:
            return filesystem.cwd()
        return super()._build(filesystem, parts)

    def create(self) -> bool:
        """Create the directory and any missing parents."""
        return self.filesystem.create_directory(self.path)

    mkdir = create

    def delete(self) -> bool:
        """Delete the directory and everything in it."""
        return self.filesystem.delete_directory(self.path)

    rmdir = delete

    def open(self) -> Any:
        """Open the directory. Use as a context manager or close it."""
        return self.filesystem.open_directory(self.path)

    def read(self, include_dotted: bool = False) -> list[str]:
        return self.filesystem.read_directory(self.path, include_dotted)

    def child(self, name: str) -> Path:
        return self.filesystem.directory_child(self.path, name)

    def children(self, include_dotted: bool = False) -> list[Path]:
        return self.filesystem.directory_children(self.path, include_dotted)

    def files(self) -> list[File]:
        return [c for c in self.children() if isinstance(c, File)]

    def dirs(self) -> list[Directory]:
        return [c for c in self.children() if isinstance(c, Directory)]

    def file(self, *parts: Any) -> File:
        """File entity for a path below this directory."""
        return File(self.filesystem.join_directory([self.path, *parts]), filesystem=self.filesystem)

    def directory(self, *parts: Any) -> Directory:
        """Directory entity for a path below this directory."""
        return Directory(self.filesystem.join_directory([self.path, *parts]), filesystem=self.filesystem)

    dir = directory

    def visit(self, config: Visitor | VisitorConfig | dict[str, Any] | None = None, **options: Any) -> Visitor:
        """Prepare a visitor starting here. Nothing is walked until iterated or collected."""
        return self.filesystem.visitor(config, **options).visit(self)

    def collect(self, config: Visitor | VisitorConfig | dict[str, Any] | None = None, **options: Any) -> list[Path]:
        return self.visit(config, **options).collect()
