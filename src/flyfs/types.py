"""Shared value types for flyfs."""

from __future__ import annotations

import os
import stat as stat_module
from dataclasses import dataclass
from enum import Enum

__all__ = ["Dialect", "EntryKind", "StatResult", "classify_stat"]


@dataclass(frozen=True)
class Dialect:
    """Path syntax conventions for a target operating system.

    Attributes:
        separator: Directory separator (e.g. "/").
        root_token: Token representing the root directory.
        parent_token: Token representing the parent directory (e.g. "..").
        current_token: Token representing the current directory (e.g. ".").
        alt_separator: Alternate separator accepted on input, if any.
        volumes: True if drive-letter volumes (e.g. "C:") are recognized.
    """

    separator: str
    root_token: str
    parent_token: str
    current_token: str
    alt_separator: str | None = None
    volumes: bool = False

    def __post_init__(self) -> None:
        """Validate invariants."""
        if not self.separator:
            raise ValueError("separator cannot be empty")
        if not self.root_token:
            raise ValueError("root_token cannot be empty")
        if not self.parent_token or not self.current_token:
            raise ValueError("parent_token and current_token cannot be empty")
        if self.parent_token == self.current_token:
            raise ValueError("parent_token and current_token must differ")

    @classmethod
    def posix(cls) -> Dialect:
        """Unix-like conventions."""
        return cls(separator="/", root_token="/", parent_token="..", current_token=".")

    @classmethod
    def windows(cls) -> Dialect:
        """MS Windows conventions."""
        return cls(
            separator="\\",
            root_token="\\",
            parent_token="..",
            current_token=".",
            alt_separator="/",
            volumes=True,
        )

    @classmethod
    def host(cls) -> Dialect:
        """Conventions of the operating system we are running on."""
        return cls(
            separator=os.sep,
            root_token=os.sep,
            parent_token=os.pardir,
            current_token=os.curdir,
            alt_separator=os.altsep,
            volumes=os.name == "nt",
        )


class EntryKind(Enum):
    """Classification of a filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"
    OTHER = "other"


def classify_stat(mode: int | None) -> EntryKind:
    """Classify a raw stat mode, or None for an entry the OS can't stat."""
    if mode is None:
        return EntryKind.OTHER
    if stat_module.S_ISDIR(mode):
        return EntryKind.DIRECTORY
    if stat_module.S_ISREG(mode):
        return EntryKind.FILE
    return EntryKind.OTHER


@dataclass(frozen=True)
class StatResult:
    """Metadata for a filesystem entry.

    The first thirteen fields mirror the classic stat() record. The last four
    are flags computed for the current process.
    """

    device: int
    inode: int
    mode: int
    links: int
    uid: int
    gid: int
    rdev: int
    size: int
    accessed: float
    modified: float
    changed: float
    block_size: int
    blocks: int
    readable: bool
    writable: bool
    executable: bool
    owned: bool

    @classmethod
    def from_os(cls, st: os.stat_result, path: str) -> StatResult:
        """Build from an os.stat_result plus access checks on path."""
        if hasattr(os, "geteuid"):
            owned = st.st_uid == os.geteuid()
        else:
            owned = True
        return cls(
            device=st.st_dev,
            inode=st.st_ino,
            mode=st.st_mode,
            links=st.st_nlink,
            uid=st.st_uid,
            gid=st.st_gid,
            rdev=getattr(st, "st_rdev", 0),
            size=st.st_size,
            accessed=st.st_atime,
            modified=st.st_mtime,
            changed=st.st_ctime,
            block_size=getattr(st, "st_blksize", 0),
            blocks=getattr(st, "st_blocks", 0),
            readable=os.access(path, os.R_OK),
            writable=os.access(path, os.W_OK),
            executable=os.access(path, os.X_OK),
            owned=owned,
        )

    @property
    def kind(self) -> EntryKind:
        """Entry classification derived from the mode bits."""
        return classify_stat(self.mode)

    @property
    def permissions(self) -> int:
        """Permission bits (mode without the file type)."""
        return stat_module.S_IMODE(self.mode)

    def as_tuple(self) -> tuple:
        """All seventeen fields in stat() order followed by the flags."""
        return (
            self.device,
            self.inode,
            self.mode,
            self.links,
            self.uid,
            self.gid,
            self.rdev,
            self.size,
            self.accessed,
            self.modified,
            self.changed,
            self.block_size,
            self.blocks,
            self.readable,
            self.writable,
            self.executable,
            self.owned,
        )
