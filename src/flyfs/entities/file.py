"""File entity."""

from __future__ import annotations

from typing import IO, Any

from flyfs.entities.base import Path


class File(Path):
    """A path known (or expected) to be a regular file.

    Example usage::

        notes = fs.file("notes", "today.txt")
        notes.write("Buy milk\\n")
        notes.append("Call home\\n")
        for line in notes.read(lines=True):
            print(line.rstrip())
    """

    __slots__ = ()

    def create(self) -> bool:
        """Create the file empty unless it exists. True if it was created."""
        return self.filesystem.create_file(self.path)

    def touch(self) -> bool:
        return self.filesystem.touch_file(self.path)

    def delete(self) -> bool:
        return self.filesystem.delete_file(self.path)

    def open(self, mode: str = "r", encoding: str | None = None) -> IO[Any]:
        """Open the file. The caller must close the returned handle."""
        return self.filesystem.open_file(self.path, mode, encoding)

    def open_read(self, binary: bool = False) -> IO[Any]:
        return self.open("rb" if binary else "r")

    def open_write(self, binary: bool = False) -> IO[Any]:
        return self.open("wb" if binary else "w")

    def read(self, lines: bool = False, binary: bool = False) -> Any:
        return self.filesystem.read_file(self.path, lines=lines, binary=binary)

    def write(self, *content: Any, binary: bool = False) -> Any:
        """Replace the file content. Without content, return an open handle."""
        return self.filesystem.write_file(self.path, *content, binary=binary)

    def append(self, *content: Any, binary: bool = False) -> Any:
        return self.filesystem.append_file(self.path, *content, binary=binary)
