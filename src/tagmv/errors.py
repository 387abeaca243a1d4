"""Exception hierarchy and OS error classification for tagmv."""

import errno
from pathlib import Path

from .models import IOErrorKind

# Windows reports cross-volume renames as ERROR_NOT_SAME_DEVICE
_WINERROR_NOT_SAME_DEVICE = 17


class TagmvError(Exception):
    """Base exception for all tagmv errors."""


class ConfigError(TagmvError):
    """Invalid configuration or unusable sort directory."""


class MoveError(TagmvError):
    """Moving a single planned file failed. The source is left in place."""

    def __init__(
        self,
        message: str,
        source: Path,
        dest: Path,
        kind: IOErrorKind = IOErrorKind.OTHER,
    ) -> None:
        super().__init__(message)
        self.source = source
        self.dest = dest
        self.kind = kind


class DestinationExistsError(MoveError):
    """Destination appeared between planning and execution."""

    def __init__(self, source: Path, dest: Path) -> None:
        super().__init__(
            f"Destination already exists (appeared after planning): {dest}",
            source,
            dest,
        )


class CopyVerificationError(MoveError):
    """Cross-device copy wrote a different number of bytes than the source holds."""

    def __init__(self, source: Path, dest: Path, expected: int, copied: int) -> None:
        super().__init__(
            f"Copy verification failed for {source}: "
            f"expected {expected} bytes, copied {copied}",
            source,
            dest,
            kind=IOErrorKind.CROSS_DEVICE,
        )
        self.expected = expected
        self.copied = copied


class ConflictExhaustedError(MoveError):
    """No free destination name was found within the retry ceiling."""

    def __init__(self, source: Path, dest: Path) -> None:
        super().__init__(
            f"No free destination name found for {source} (last tried: {dest})",
            source,
            dest,
        )


def classify_os_error(exc: OSError) -> IOErrorKind:
    """Map an OSError to an IOErrorKind.

    Only CROSS_DEVICE triggers the copy fallback; every other kind is
    fatal for the entry being moved.
    """
    if exc.errno == errno.EXDEV:
        return IOErrorKind.CROSS_DEVICE
    if getattr(exc, "winerror", None) == _WINERROR_NOT_SAME_DEVICE:
        return IOErrorKind.CROSS_DEVICE
    if exc.errno in (errno.EACCES, errno.EPERM):
        return IOErrorKind.PERMISSION
    if exc.errno == errno.ENOENT:
        return IOErrorKind.NOT_FOUND
    return IOErrorKind.OTHER
