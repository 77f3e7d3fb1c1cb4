"""Directory tree traversal.

A `Visitor` walks a directory depth-first, pre-order, classifying each entry
and collecting the ones its configuration selects. Nothing is cached: every
iteration lists the directories again.

Example usage::

    visitor = fs.directory("src").visit(dirs=False, include=["*.py"])
    for file in visitor:
        print(file.path)
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from fnmatch import fnmatchcase
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from flyfs.entities import Directory, Path

logger = logging.getLogger(__name__)

__all__ = ["Visitor", "VisitorConfig"]


class VisitorConfig(BaseModel):
    """Traversal options.

    `include`/`exclude` decide which entries are collected. `in_dirs` and
    `not_in_dirs` decide which directories are descended into. Patterns are
    shell-style globs matched against entry names.
    """

    model_config = ConfigDict(populate_by_name=True)

    files: bool = True
    dirs: bool = True
    depth: int | None = None
    include: list[str] = Field(default_factory=list)
    exclude: list[str] = Field(default_factory=list)
    in_dirs: list[str] = Field(default_factory=list, alias="inDirs")
    not_in_dirs: list[str] = Field(default_factory=list, alias="notInDirs")
    include_dotted: bool = Field(default=False, alias="includeDotted")
    lazy: bool = True

    @field_validator("include", "exclude", "in_dirs", "not_in_dirs", mode="before")
    @classmethod
    def _listify(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [value]
        return value

    @field_validator("depth")
    @classmethod
    def _check_depth(cls, value: int | None) -> int | None:
        if value is not None and value < 0:
            raise ValueError("depth cannot be negative")
        return value


def _matches(name: str, patterns: list[str]) -> bool:
    return any(fnmatchcase(name, pattern) for pattern in patterns)


class Visitor:
    """Configured walker over a directory tree."""

    def __init__(self, config: VisitorConfig | None = None) -> None:
        self.config = config or VisitorConfig()
        self.start: Path | None = None

    @classmethod
    def create(cls, config: VisitorConfig | dict[str, Any] | None = None, **options: Any) -> Visitor:
        """Create a visitor from a config model, a mapping and/or keyword options.

        Keyword options override fields of the config.
        """
        if isinstance(config, VisitorConfig):
            data = config.model_dump()
        else:
            data = dict(config or {})
        data.update(options)
        return cls(VisitorConfig.model_validate(data))

    def __repr__(self) -> str:
        return f"Visitor(start={self.start!r}, config={self.config!r})"

    def visit(self, entity: Path) -> Visitor:
        """Bind the starting entity. The walk happens on iteration."""
        self.start = entity
        return self

    def __iter__(self) -> Iterator[Path]:
        if self.start is None:
            raise ValueError("Visitor has no starting point; call visit() first")
        if isinstance(self.start, Directory):
            logger.debug("Visiting %s", self.start.path)
            yield from self._walk(self.start, 1)
        elif self._collects(self.start):
            yield self.start

    def collect(self) -> list[Path]:
        """Walk the tree now and return everything selected."""
        return list(self)

    def results(self) -> Iterator[Path] | list[Path]:
        """Lazy iterator or eager list, depending on the `lazy` option."""
        if self.config.lazy:
            return iter(self)
        return self.collect()

    def _walk(self, directory: Directory, level: int) -> Iterator[Path]:
        config = self.config
        if config.depth is not None and level > config.depth:
            return
        fs = directory.filesystem
        for name in directory.read():
            if name in (fs.current_token, fs.parent_token):
                continue
            if name.startswith(".") and not config.include_dotted:
                continue
            child = directory.child(name)
            if self._collects(child):
                yield child
            if isinstance(child, Directory) and self._enters(child):
                yield from self._walk(child, level + 1)

    def _collects(self, entity: Path) -> bool:
        config = self.config
        wanted = config.dirs if isinstance(entity, Directory) else config.files
        if not wanted:
            return False
        if config.include and not _matches(entity.name, config.include):
            return False
        return not _matches(entity.name, config.exclude)

    def _enters(self, directory: Directory) -> bool:
        config = self.config
        if config.in_dirs and not _matches(directory.name, config.in_dirs):
            return False
        return not _matches(directory.name, config.not_in_dirs)
