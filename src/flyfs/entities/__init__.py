"""Flyweight path, file and directory entities."""

from flyfs.entities.base import Path
from flyfs.entities.directory import Directory
from flyfs.entities.file import File
from flyfs.types import EntryKind

# Entity class for each kind of directory entry
ENTITY_TYPES: dict[EntryKind, type[Path]] = {
    EntryKind.FILE: File,
    EntryKind.DIRECTORY: Directory,
    EntryKind.OTHER: Path,
}


def entity_for(kind: EntryKind) -> type[Path]:
    """Return the entity class used for an entry of the given kind."""
    return ENTITY_TYPES[kind]


__all__ = ["Directory", "ENTITY_TYPES", "File", "Path", "entity_for"]
