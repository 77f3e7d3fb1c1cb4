"""Typed errors raised by flyfs.

Every failure is signalled through `fail()`, which formats a named message
template and raises the matching exception class.
"""

from __future__ import annotations

from typing import NoReturn

__all__ = [
    "CreateFailed",
    "DeleteFailed",
    "FilesystemError",
    "MESSAGES",
    "NotFound",
    "OpenFailed",
    "OperationFailed",
    "ReadFailed",
    "StatFailed",
    "VolumeMismatch",
    "WriteFailed",
    "fail",
]

MESSAGES: dict[str, str] = {
    "open_failed": "Failed to open %s %s: %s",
    "delete_failed": "Failed to delete %s %s: %s",
    "create_failed": "Failed to create %s %s: %s",
    "read_failed": "Failed to read %s %s: %s",
    "write_failed": "Failed to write %s %s: %s",
    "bad_volume": "Volume mismatch: %s vs %s",
    "bad_stat": "Nothing known about %s",
    "not_found": "No such %s: %s",
}


class FilesystemError(Exception):
    """Base class for all flyfs errors."""

    kind: str = ""

    def __init__(self, *args: object) -> None:
        template = MESSAGES.get(self.kind)
        message = template % args if template else " ".join(str(a) for a in args)
        super().__init__(message)
        self.params = args

    @property
    def message(self) -> str:
        """Formatted error message."""
        return str(self)


class VolumeMismatch(FilesystemError):
    """Two paths declare different volumes."""

    kind = "bad_volume"

    def __init__(self, first: str, second: str) -> None:
        super().__init__(first, second)
        self.first = first
        self.second = second


class StatFailed(FilesystemError):
    """The OS knows nothing about the target."""

    kind = "bad_stat"

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path


class NotFound(FilesystemError):
    """No such file or directory."""

    kind = "not_found"

    def __init__(self, target: str, path: str) -> None:
        super().__init__(target, path)
        self.target = target
        self.path = path


class OperationFailed(FilesystemError):
    """An OS call failed.

    Attributes:
        target: What was operated on ("file" or "directory").
        path: Definitive path passed to the OS.
        reason: The OS error message.
        errno: The OS error number, when known.
    """

    def __init__(self, target: str, path: str, reason: str, errno: int | None = None) -> None:
        super().__init__(target, path, reason)
        self.target = target
        self.path = path
        self.reason = reason
        self.errno = errno


class OpenFailed(OperationFailed):
    """Opening a file or directory failed."""

    kind = "open_failed"


class DeleteFailed(OperationFailed):
    """Deleting a file or directory failed."""

    kind = "delete_failed"


class CreateFailed(OperationFailed):
    """Creating a file or directory failed."""

    kind = "create_failed"


class ReadFailed(OperationFailed):
    """Reading from an open file failed."""

    kind = "read_failed"


class WriteFailed(OperationFailed):
    """Writing to an open file failed."""

    kind = "write_failed"


ERRORS: dict[str, type[FilesystemError]] = {
    cls.kind: cls
    for cls in (
        OpenFailed,
        DeleteFailed,
        CreateFailed,
        ReadFailed,
        WriteFailed,
        VolumeMismatch,
        StatFailed,
        NotFound,
    )
}


def fail(kind: str, *args: object, cause: BaseException | None = None) -> NoReturn:
    """Raise the error registered for kind.

    Args:
        kind: Message key (see MESSAGES).
        *args: Values interpolated into the message template.
        cause: Optional underlying exception. An OSError also supplies errno.

    Raises:
        FilesystemError: Always, as the subclass registered for kind.
        KeyError: If kind is unknown.
    """
    error_class = ERRORS[kind]
    if issubclass(error_class, OperationFailed):
        errno = cause.errno if isinstance(cause, OSError) else None
        error = error_class(*args, errno=errno)
    else:
        error = error_class(*args)
    if cause is not None:
        raise error from cause
    raise error
