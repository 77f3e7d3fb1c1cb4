"""Pure path algebra.

Every function takes a `Dialect` first and operates on strings only. Nothing
here touches the filesystem, and nothing raises on malformed input: paths are
canonicalized on a best-effort basis. The one exception is `merge_paths()`,
which refuses to combine two paths declaring different volumes.

Examples (POSIX dialect):
    >>> d = Dialect.posix()
    >>> join_directory(d, ["foo", "bar", "baz"])
    'foo/bar/baz'
    >>> collapse_directory(d, "/foo/bar/../baz")
    '/foo/baz'
"""

from __future__ import annotations

import os
import re
from collections.abc import Sequence
from typing import Any, Union

from flyfs.errors import fail
from flyfs.types import Dialect

PathSpec = Union[str, os.PathLike, Sequence[Any]]

__all__ = [
    "PathSpec",
    "absolute",
    "canonical",
    "collapse_directory",
    "is_absolute",
    "is_relative",
    "join_directory",
    "join_path",
    "merge_paths",
    "relative",
    "slash_directory",
    "split_directory",
    "split_path",
    "split_volume",
]

_VOLUME = re.compile(r"^[A-Za-z]:")


def _text(value: Any) -> str:
    """Coerce a path-ish value (str, PathLike or entity) to a string."""
    if isinstance(value, str):
        return value
    if isinstance(value, os.PathLike):
        return os.fspath(value)
    return str(value)


def _normalize_separators(dialect: Dialect, path: str) -> str:
    if dialect.alt_separator and dialect.alt_separator != dialect.separator:
        return path.replace(dialect.alt_separator, dialect.separator)
    return path


def split_volume(dialect: Dialect, path: str) -> tuple[str, str]:
    """Separate a leading volume (e.g. "C:") from the rest of the path.

    Returns:
        Tuple of (volume, rest). Volume is "" if the dialect has no volumes
        or the path declares none.
    """
    if dialect.volumes:
        match = _VOLUME.match(path)
        if match:
            return match.group(0), path[match.end() :]
    return "", path


def _is_rooted(dialect: Dialect, rest: str) -> bool:
    return rest.startswith(dialect.separator) or rest.startswith(dialect.root_token)


def canonical(dialect: Dialect, path: str) -> str:
    """Clean up a path string without changing its meaning.

    Repeated separators are collapsed, current-directory components dropped,
    parent components directly under the root dropped and any trailing
    separator removed. Parent components elsewhere are left alone; use
    `collapse_directory()` to resolve them.
    """
    path = _normalize_separators(dialect, _text(path))
    volume, rest = split_volume(dialect, path)
    sep = dialect.separator
    rooted = _is_rooted(dialect, rest)
    if rooted and rest.startswith(dialect.root_token) and dialect.root_token != sep:
        rest = sep + rest[len(dialect.root_token) :]
    parts = [p for p in rest.split(sep) if p and p != dialect.current_token]
    if rooted:
        while parts and parts[0] == dialect.parent_token:
            parts.pop(0)
        return volume + sep + sep.join(parts)
    if not parts:
        return volume + dialect.current_token if rest else volume
    return volume + sep.join(parts)


def join_directory(dialect: Dialect, spec: PathSpec) -> str:
    """Join directory components into a single canonical path.

    Accepts either a path string (returned canonicalized, so this is
    idempotent) or a sequence of components. In a sequence, a leading empty
    component stands for the root directory.
    """
    if isinstance(spec, (str, os.PathLike)) or not isinstance(spec, Sequence):
        return canonical(dialect, _text(spec))
    parts = [_text(p) for p in spec]
    if not parts:
        return ""
    return canonical(dialect, dialect.separator.join([*parts, ""]))


def split_directory(dialect: Dialect, spec: PathSpec) -> list[str]:
    """Split a path into its directory components.

    A leading "" marks an absolute path and any volume is attached to the
    first component, so `join_directory()` reverses the split.
    """
    path = join_directory(dialect, spec)
    volume, rest = split_volume(dialect, path)
    if not rest:
        return [volume] if volume else []
    sep = dialect.separator
    if rest == sep:
        components = [""]
    else:
        components = rest.split(sep)
    components[0] = volume + components[0]
    return components


def split_path(dialect: Dialect, spec: PathSpec) -> tuple[str, str, str]:
    """Split a path into (volume, directory, filename).

    Missing parts are returned as empty strings. The directory part keeps
    its trailing separator.
    """
    path = join_directory(dialect, spec)
    volume, rest = split_volume(dialect, path)
    index = rest.rfind(dialect.separator)
    if index < 0:
        return volume, "", rest
    return volume, rest[: index + 1], rest[index + 1 :]


def join_path(dialect: Dialect, volume: str | None, directory: str | None, filename: str | None) -> str:
    """Combine volume, directory and filename into one canonical path."""
    volume = volume or ""
    directory = _normalize_separators(dialect, directory or "")
    filename = filename or ""
    if directory and filename and not directory.endswith(dialect.separator):
        directory += dialect.separator
    return canonical(dialect, volume + directory + filename)


def collapse_directory(dialect: Dialect, spec: PathSpec) -> str:
    """Resolve current and parent directory tokens syntactically.

    The current token is dropped. The parent token removes the previously
    retained component if there is one and is dropped otherwise; the root
    and volume are never removed. A relative path that collapses to
    nothing becomes the current token. No directories are checked for existence
    and symbolic links are not resolved, so the result must not be relied
    on for security-sensitive containment checks.
    """
    path = join_directory(dialect, spec)
    volume, rest = split_volume(dialect, path)
    rooted = _is_rooted(dialect, rest)
    retained: list[str] = []
    for node in rest.split(dialect.separator):
        if not node or node == dialect.current_token:
            continue
        if node == dialect.parent_token:
            if retained:
                retained.pop()
        else:
            retained.append(node)
    if rooted:
        retained.insert(0, "")
    elif not retained:
        return volume + dialect.current_token if rest else volume
    retained[0] = volume + retained[0]
    return join_directory(dialect, retained)


def slash_directory(dialect: Dialect, spec: PathSpec) -> str:
    """Return the path with a single trailing separator."""
    path = join_directory(dialect, spec)
    if path.endswith(dialect.separator):
        return path
    return path + dialect.separator


def merge_paths(dialect: Dialect, base: PathSpec, extra: PathSpec) -> str:
    """Append extra to base as directory components.

    No attempt is made to check whether extra is absolute: "/one" merged
    with "/two" gives "/one/two". This is what lets a virtual root be joined
    with an absolute virtual path.

    Raises:
        VolumeMismatch: If base and extra declare different volumes.
    """
    base_volume, base_dir, base_file = split_path(dialect, base)
    extra_volume, extra_dir, extra_file = split_path(dialect, extra)
    if base_volume and extra_volume and base_volume != extra_volume:
        fail("bad_volume", base_volume, extra_volume)
    volume = base_volume or extra_volume
    directory = join_directory(dialect, [p for p in (base_dir, base_file, extra_dir) if p])
    return join_path(dialect, volume, directory, extra_file)


def is_absolute(dialect: Dialect, spec: PathSpec) -> bool:
    """True if the path starts at the root directory."""
    _, rest = split_volume(dialect, join_directory(dialect, spec))
    return _is_rooted(dialect, rest)


def is_relative(dialect: Dialect, spec: PathSpec) -> bool:
    """True if the path does not start at the root directory."""
    return not is_absolute(dialect, spec)


def absolute(dialect: Dialect, spec: PathSpec, base: PathSpec) -> str:
    """Return path unchanged if absolute, otherwise joined onto base."""
    path = join_directory(dialect, spec)
    if is_absolute(dialect, path):
        return path
    return join_directory(dialect, [join_directory(dialect, base), path])


def relative(dialect: Dialect, spec: PathSpec, base: PathSpec) -> str:
    """Express path relative to base.

    Both are made absolute (relative ones against base itself) and collapsed
    before comparison. Paths on different volumes can't be related and the
    absolute path is returned instead.
    """
    anchor = collapse_directory(dialect, join_directory(dialect, base))
    target = collapse_directory(dialect, absolute(dialect, spec, anchor))
    target_volume, target_rest = split_volume(dialect, target)
    anchor_volume, anchor_rest = split_volume(dialect, anchor)
    if target_volume.upper() != anchor_volume.upper():
        return target

    sep = dialect.separator
    target_parts = [p for p in target_rest.split(sep) if p]
    anchor_parts = [p for p in anchor_rest.split(sep) if p]
    common = 0
    for ours, theirs in zip(target_parts, anchor_parts):
        if ours != theirs:
            break
        common += 1

    parts = [dialect.parent_token] * (len(anchor_parts) - common) + target_parts[common:]
    if not parts:
        return dialect.current_token
    return join_directory(dialect, parts)
