"""The filesystem context.

A `Filesystem` holds the path dialect, an optional fixed working directory
and listing flags, and performs every path manipulation and I/O operation on
behalf of the lightweight Path, File and Directory entities bound to it.

Before any path reaches the OS it is mapped to its *definitive* location by
the filesystem's resolver. For a real filesystem that is simply the absolute
path; a virtual filesystem remaps it under one or more root directories.

Example usage::

    from flyfs import Filesystem

    fs = Filesystem(cwd="/home/abw")
    fs.absolute("wam/bam")                  # /home/abw/wam/bam
    fs.write_file("notes.txt", "Hello\\n")
    print(fs.file("notes.txt").size())
"""

from __future__ import annotations

import logging
import os
import shutil
from typing import IO, Any

from flyfs import algebra
from flyfs.algebra import PathSpec
from flyfs.config import FilesystemConfig, coerce_config
from flyfs.entities import Directory, File, Path, entity_for
from flyfs.errors import fail
from flyfs.protocols import AbsoluteResolver, PathResolver
from flyfs.types import Dialect, EntryKind, StatResult, classify_stat
from flyfs.visitor import Visitor, VisitorConfig

logger = logging.getLogger(__name__)

__all__ = ["Filesystem"]


def _is_binary(content: tuple[Any, ...]) -> bool:
    return bool(content) and all(isinstance(c, (bytes, bytearray)) for c in content)


class Filesystem:
    """Filesystem context shared by path, file and directory entities.

    Mutating `dialect`, `cwd_override` or `list_all_entries` affects every
    entity bound to this filesystem from that point on. There is no internal
    locking: synchronize externally or use a private Filesystem per thread.
    """

    def __init__(
        self,
        dialect: Dialect | None = None,
        cwd: str | None = None,
        list_all_entries: bool = False,
        resolver: PathResolver | None = None,
    ) -> None:
        """Initialize the filesystem.

        Args:
            dialect: Path syntax conventions. Defaults to the host OS.
            cwd: Fixed working directory. If None, the OS working directory
                is queried on every call to `cwd()`.
            list_all_entries: Include current/parent entries in listings.
            resolver: Definitive path resolver. Defaults to AbsoluteResolver.

        Note:
            Prefer using factory methods `create()` or `create_default()` for construction.
        """
        self.dialect = dialect or Dialect.host()
        self.cwd_override = cwd
        self.list_all_entries = list_all_entries
        self.resolver: PathResolver = resolver or AbsoluteResolver()

    @classmethod
    def create(cls, config: FilesystemConfig | dict[str, Any] | None = None) -> Filesystem:
        """Create a filesystem from named configuration fields.

        A configuration listing `roots` produces a virtual filesystem.

        Args:
            config: FilesystemConfig, mapping of fields, or None for defaults.

        Returns:
            Configured Filesystem instance.
        """
        settings = coerce_config(config)
        dialect = settings.build_dialect()
        if settings.roots:
            from flyfs.virtual import virtual_filesystem

            return virtual_filesystem(
                settings.roots,
                cwd=settings.cwd,
                dialect=dialect,
                list_all_entries=settings.list_all_entries,
            )
        return cls(
            dialect=dialect,
            cwd=settings.cwd,
            list_all_entries=settings.list_all_entries,
        )

    @classmethod
    def create_default(cls) -> Filesystem:
        """Create a filesystem using host conventions and the OS working directory."""
        return cls()

    @classmethod
    def default(cls) -> Filesystem:
        """Return the process-wide default filesystem."""
        from flyfs.context import get_default

        return get_default()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(cwd={self.cwd_override!r}, "
            f"separator={self.dialect.separator!r}, resolver={type(self.resolver).__name__})"
        )

    # ------------------------------------------------------------------
    # Dialect tokens
    # ------------------------------------------------------------------

    @property
    def separator(self) -> str:
        """Directory separator, e.g. "/"."""
        return self.dialect.separator

    @property
    def root_token(self) -> str:
        """Root directory token, e.g. "/"."""
        return self.dialect.root_token

    @property
    def parent_token(self) -> str:
        """Parent directory token, e.g. ".."."""
        return self.dialect.parent_token

    @property
    def current_token(self) -> str:
        """Current directory token, e.g. "."."""
        return self.dialect.current_token

    # ------------------------------------------------------------------
    # Entity constructors
    # ------------------------------------------------------------------

    def cwd(self) -> str:
        """Current working directory as a canonical path string.

        The OS working directory is not cached since it changes with chdir().
        """
        return algebra.canonical(self.dialect, self.cwd_override or os.getcwd())

    def root(self) -> Directory:
        """Directory entity for the root directory."""
        return self.directory(self.root_token)

    def path(self, *spec: Any) -> Path:
        """Create a generic Path entity bound to this filesystem."""
        return Path(*spec, filesystem=self)

    def file(self, *spec: Any) -> File:
        """Create a File entity bound to this filesystem."""
        return File(*spec, filesystem=self)

    def directory(self, *spec: Any) -> Directory:
        """Create a Directory entity bound to this filesystem.

        With no arguments, the directory is the current working directory.
        """
        return Directory(*spec, filesystem=self)

    dir = directory

    # ------------------------------------------------------------------
    # Path manipulation
    # ------------------------------------------------------------------

    def canonical(self, path: PathSpec) -> str:
        """Canonical form of a path string."""
        return algebra.join_directory(self.dialect, path)

    def merge_paths(self, base: PathSpec, extra: PathSpec) -> str:
        """Append extra to base, even if extra looks absolute."""
        return algebra.merge_paths(self.dialect, base, extra)

    def split_path(self, path: PathSpec) -> tuple[str, str, str]:
        """Split a path into (volume, directory, filename)."""
        return algebra.split_path(self.dialect, path)

    def join_path(self, volume: str | None, directory: str | None, filename: str | None) -> str:
        """Combine volume, directory and filename into one path."""
        return algebra.join_path(self.dialect, volume, directory, filename)

    def split_directory(self, path: PathSpec) -> list[str]:
        """Split a path into directory components."""
        return algebra.split_directory(self.dialect, path)

    def join_directory(self, path: PathSpec) -> str:
        """Join directory components (or canonicalize a path string)."""
        return algebra.join_directory(self.dialect, path)

    def collapse_directory(self, path: PathSpec) -> str:
        """Resolve "." and ".." syntactically, without touching the disk."""
        return algebra.collapse_directory(self.dialect, path)

    def slash_directory(self, path: PathSpec) -> str:
        """Absolute path with a trailing separator."""
        return algebra.slash_directory(self.dialect, self.absolute(path))

    split_dir = split_directory
    join_dir = join_directory
    collapse_dir = collapse_directory

    def is_absolute(self, path: PathSpec) -> bool:
        """True if the path starts at the root."""
        return algebra.is_absolute(self.dialect, path)

    def is_relative(self, path: PathSpec) -> bool:
        """True if the path does not start at the root."""
        return algebra.is_relative(self.dialect, path)

    def absolute(self, path: PathSpec, base: PathSpec | None = None) -> str:
        """Convert a relative path to an absolute one.

        Args:
            path: Path to convert. Returned unchanged if already absolute.
            base: Base directory. Defaults to the current working directory.
        """
        joined = algebra.join_directory(self.dialect, path)
        if algebra.is_absolute(self.dialect, joined):
            return joined
        return algebra.absolute(self.dialect, joined, self.cwd() if base is None else base)

    def relative(self, path: PathSpec, base: PathSpec | None = None) -> str:
        """Express a path relative to base (default: current working directory).

        A relative path is first made absolute against the working directory.
        """
        anchor = self.absolute(self.cwd() if base is None else base)
        return algebra.relative(self.dialect, self.absolute(path), anchor)

    # ------------------------------------------------------------------
    # Definitive paths
    # ------------------------------------------------------------------

    def definitive_read(self, path: PathSpec) -> str:
        """Location a read of path is performed on."""
        return self.resolver.definitive_read(self, path)

    def definitive_write(self, path: PathSpec) -> str:
        """Location a write of path is performed on."""
        return self.resolver.definitive_write(self, path)

    def definitive(self, path: PathSpec) -> str:
        """Definitive location of path (the write location)."""
        return self.definitive_write(path)

    def native(self, path: str) -> str:
        """Rewrite a definitive path using the host separator."""
        if self.dialect.separator != os.sep:
            return path.replace(self.dialect.separator, os.sep)
        return path

    def _read_location(self, path: PathSpec) -> str:
        return self.native(self.definitive_read(path))

    def _write_location(self, path: PathSpec) -> str:
        return self.native(self.definitive_write(path))

    # ------------------------------------------------------------------
    # Path tests
    # ------------------------------------------------------------------

    def path_exists(self, path: PathSpec) -> bool:
        """True if the path exists."""
        return os.path.exists(self._read_location(path))

    def file_exists(self, path: PathSpec) -> bool:
        """True if the path exists and is a regular file."""
        return os.path.isfile(self._read_location(path))

    def directory_exists(self, path: PathSpec) -> bool:
        """True if the path exists and is a directory."""
        return os.path.isdir(self._read_location(path))

    dir_exists = directory_exists

    def classify(self, path: PathSpec) -> EntryKind:
        """Classify the entry at path as a file, directory or anything else.

        Entries the OS can't stat (missing, dangling links) are OTHER.
        """
        try:
            mode = os.stat(self._read_location(path)).st_mode
        except OSError:
            mode = None
        return classify_stat(mode)

    def stat_path(self, path: PathSpec) -> StatResult:
        """Stat a path.

        Returns:
            StatResult with the raw OS fields plus readable, writable,
            executable and owned flags for the current process.

        Raises:
            StatFailed: If the OS knows nothing about the path.
        """
        location = self._read_location(path)
        try:
            st = os.stat(location)
        except OSError as err:
            fail("bad_stat", self.join_directory(path), cause=err)
        return StatResult.from_os(st, location)

    # ------------------------------------------------------------------
    # File manipulation
    # ------------------------------------------------------------------

    def create_file(self, path: PathSpec) -> bool:
        """Create an empty file unless it already exists.

        Returns:
            True if the file was created, False if it already existed.
        """
        if os.path.exists(self._write_location(path)):
            return False
        self.write_file(path, "")
        return True

    def touch_file(self, path: PathSpec) -> bool:
        """Create a file if absent, otherwise update its modification time."""
        location = self._write_location(path)
        if not os.path.exists(location):
            return self.write_file(path, "")
        try:
            os.utime(location, None)
        except OSError as err:
            fail("write_failed", "file", location, err.strerror, cause=err)
        return True

    touch = touch_file

    def delete_file(self, path: PathSpec) -> bool:
        """Delete a file.

        Raises:
            DeleteFailed: If the OS refuses, including when there is no such file.
        """
        location = self._write_location(path)
        logger.debug("Deleting file %s", location)
        try:
            os.unlink(location)
        except OSError as err:
            fail("delete_failed", "file", location, err.strerror, cause=err)
        return True

    def open_file(self, path: PathSpec, mode: str = "r", encoding: str | None = None) -> IO[Any]:
        """Open a file and return the live handle.

        Read-only modes go through `definitive_read()`, anything that can
        write through `definitive_write()`. The caller owns the handle.

        Raises:
            OpenFailed: If the OS refuses to open the file.
        """
        read_only = set(mode) <= {"r", "b", "t"}
        location = self._read_location(path) if read_only else self._write_location(path)
        if "b" not in mode and encoding is None:
            encoding = "utf-8"
        logger.debug("Opening file %s (%s)", location, mode)
        try:
            return open(location, mode, encoding=encoding)
        except OSError as err:
            fail("open_failed", "file", location, err.strerror, cause=err)

    def read_file(self, path: PathSpec, lines: bool = False, binary: bool = False) -> Any:
        """Read a whole file.

        Args:
            path: File to read.
            lines: Return a list of lines instead of a single string.
            binary: Read bytes instead of text.
        """
        with self.open_file(path, "rb" if binary else "r") as handle:
            try:
                return handle.readlines() if lines else handle.read()
            except OSError as err:
                fail("read_failed", "file", handle.name, err.strerror, cause=err)

    def write_file(self, path: PathSpec, *content: Any, binary: bool = False) -> Any:
        """Write content to a file, replacing what was there.

        With no content, the file is opened and the live handle returned.
        Otherwise every argument is written, the file closed and True returned.
        """
        return self._output(path, "w", content, binary)

    def append_file(self, path: PathSpec, *content: Any, binary: bool = False) -> Any:
        """Append content to a file. Without content, return the open handle."""
        return self._output(path, "a", content, binary)

    def _output(self, path: PathSpec, mode: str, content: tuple[Any, ...], binary: bool) -> Any:
        if binary or _is_binary(content):
            mode += "b"
        handle = self.open_file(path, mode)
        if not content:
            return handle
        with handle:
            try:
                for chunk in content:
                    handle.write(chunk)
            except OSError as err:
                fail("write_failed", "file", handle.name, err.strerror, cause=err)
        return True

    # ------------------------------------------------------------------
    # Directory manipulation
    # ------------------------------------------------------------------

    def create_directory(self, path: PathSpec, mode: int = 0o777) -> bool:
        """Create a directory and any missing parents (mkdir -p).

        Raises:
            CreateFailed: If the directory can't be created.
        """
        location = self._write_location(path)
        logger.debug("Creating directory %s", location)
        try:
            os.makedirs(location, mode=mode, exist_ok=True)
        except OSError as err:
            fail("create_failed", "directory", location, err.strerror, cause=err)
        return True

    def delete_directory(self, path: PathSpec) -> bool:
        """Delete a directory and everything below it.

        Raises:
            NotFound: If there is nothing at the path.
            DeleteFailed: If the OS refuses (e.g. the path is a file).
        """
        location = self._write_location(path)
        if not os.path.lexists(location):
            fail("not_found", "directory", location)
        logger.debug("Deleting directory %s", location)
        try:
            shutil.rmtree(location)
        except OSError as err:
            fail("delete_failed", "directory", location, err.strerror, cause=err)
        return True

    def open_directory(self, path: PathSpec) -> Any:
        """Open a directory for reading and return the live scandir handle.

        Raises:
            OpenFailed: If the directory can't be opened.
        """
        location = self._read_location(path)
        logger.debug("Opening directory %s", location)
        try:
            return os.scandir(location)
        except OSError as err:
            fail("open_failed", "directory", location, err.strerror, cause=err)

    def read_directory(self, path: PathSpec, include_dotted: bool = False) -> list[str]:
        """List the entry names in a directory, sorted.

        The current and parent entries are only included when requested or
        when `list_all_entries` is set.
        """
        with self.open_directory(path) as entries:
            names = sorted(entry.name for entry in entries)
        if include_dotted or self.list_all_entries:
            names = [self.current_token, self.parent_token, *names]
        return names

    def directory_child(self, path: PathSpec, name: str) -> Path:
        """Entity for a single entry in a directory.

        Files become File entities, directories Directory entities and
        anything else a generic Path.
        """
        child = self.join_directory([self.join_directory(path), name])
        return entity_for(self.classify(child))(child, filesystem=self)

    def directory_children(self, path: PathSpec, include_dotted: bool = False) -> list[Path]:
        """Entities for every entry in a directory."""
        return [self.directory_child(path, name) for name in self.read_directory(path, include_dotted)]

    create_dir = create_directory
    mkdir = create_directory
    delete_dir = delete_directory
    rmdir = delete_directory
    open_dir = open_directory
    read_dir = read_directory
    dir_child = directory_child
    dir_children = directory_children

    # ------------------------------------------------------------------
    # Visitors
    # ------------------------------------------------------------------

    def visitor(
        self, config: Visitor | VisitorConfig | dict[str, Any] | None = None, **options: Any
    ) -> Visitor:
        """Build a Visitor. An existing Visitor is returned unchanged.

        Raises:
            ValueError: If options are given along with an existing Visitor.
        """
        if isinstance(config, Visitor):
            if options:
                raise ValueError(f"Options can't be applied to an existing visitor: {sorted(options)}")
            return config
        return Visitor.create(config, **options)

    def visit(self, config: Visitor | VisitorConfig | dict[str, Any] | None = None, **options: Any) -> Visitor:
        """Prepare a visit of the root directory."""
        return self.root().visit(config, **options)

    def collect(self, config: Visitor | VisitorConfig | dict[str, Any] | None = None, **options: Any) -> list[Path]:
        """Visit the root directory and collect the results."""
        return self.visit(config, **options).collect()

    def accept(self, visitor: Visitor) -> Visitor:
        """Dispatch a visitor to the root directory."""
        return self.root().accept(visitor)
