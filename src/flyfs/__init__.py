"""Path resolution and virtual filesystems built on flyweight entities."""

__version__ = "0.1.0"

from flyfs.context import get_default, reset_default, set_default, using
from flyfs.entities import Directory, File, Path
from flyfs.errors import FilesystemError
from flyfs.filesystem import Filesystem
from flyfs.protocols import PathResolver
from flyfs.types import Dialect, EntryKind, StatResult
from flyfs.virtual import VirtualResolver, virtual_filesystem
from flyfs.visitor import Visitor, VisitorConfig


def cwd() -> str:
    """Current working directory of the default filesystem."""
    return get_default().cwd()


def Cwd() -> Directory:
    """Directory entity for the current working directory of the default filesystem."""
    return Directory(filesystem=get_default())


__all__ = [
    "__version__",
    "Cwd",
    "Dialect",
    "Directory",
    "EntryKind",
    "File",
    "Filesystem",
    "FilesystemError",
    "Path",
    "PathResolver",
    "StatResult",
    "VirtualResolver",
    "Visitor",
    "VisitorConfig",
    "cwd",
    "get_default",
    "reset_default",
    "set_default",
    "using",
    "virtual_filesystem",
]
