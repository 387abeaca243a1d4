"""Execute a single resolved PlannedMove.

Same-device moves link the file to its new name and then drop the old
one, so an existing destination is never replaced. Cross-device moves
fall back to copy -> fsync -> verify size -> delete source, so a source
file is never removed before a complete copy exists at the destination.
"""

from __future__ import annotations

import errno
import os
import shutil
from pathlib import Path

from loguru import logger

from ..errors import (
    ConflictExhaustedError,
    CopyVerificationError,
    DestinationExistsError,
    MoveError,
    classify_os_error,
)
from ..models import IOErrorKind, PlannedMove

log = logger.bind(stage="move")

_CHUNK_SIZE = 1024 * 1024

# link() errors after which a plain rename is still worth trying
_LINK_UNSUPPORTED = frozenset(
    {errno.EPERM, errno.EMLINK, errno.ENOTSUP, errno.EOPNOTSUPP, errno.ENOSYS}
)


def execute_move(planned: PlannedMove) -> None:
    """Move planned.source to planned.dest, creating parent directories.

    Raises MoveError (or a subclass) on failure; the source file is left
    in place in every failure case.
    """
    source, dest = planned.source, planned.dest

    if planned.is_noop:
        log.debug(f"Already in place: {dest}")
        return

    if planned.conflict_exhausted:
        raise ConflictExhaustedError(source, dest)

    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise MoveError(
            f"Failed to create directory {dest.parent}: {e}",
            source,
            dest,
            kind=classify_os_error(e),
        ) from e

    # Re-check at move time: another process may have created it since planning
    if os.path.lexists(dest):
        raise DestinationExistsError(source, dest)

    try:
        _rename_no_replace(source, dest)
    except FileExistsError as e:
        raise DestinationExistsError(source, dest) from e
    except OSError as e:
        kind = classify_os_error(e)
        if kind != IOErrorKind.CROSS_DEVICE:
            raise MoveError(
                f"Failed to move {source} -> {dest}: {e}", source, dest, kind=kind
            ) from e
        log.debug(f"Cross-device move, falling back to copy: {source}")
        _copy_verify_delete(source, dest)
        return

    log.info(f"Move {source} -> {dest}")


def _rename_no_replace(source: Path, dest: Path) -> None:
    """Rename source to dest, raising FileExistsError if dest exists.

    os.rename silently replaces dest on POSIX, so hard-link first and then
    unlink the source. Filesystems without hard links (FAT, exFAT, some
    network mounts) fall back to os.rename; the lexists re-check in
    execute_move is then the only guard. Symlinks are renamed as links.
    """
    if source.is_symlink():
        os.rename(source, dest)
        return
    try:
        os.link(source, dest)
    except FileExistsError:
        raise
    except OSError as e:
        if e.errno not in _LINK_UNSUPPORTED:
            raise
        log.debug(f"Hard link unsupported ({e.strerror}), using rename: {dest}")
        os.rename(source, dest)
        return

    try:
        source.unlink()
    except OSError:
        # Roll back so only the original name remains
        dest.unlink()
        raise


def _copy_verify_delete(source: Path, dest: Path) -> None:
    """Copy source to dest, verify the byte count, then remove source."""
    try:
        expected = source.stat().st_size
    except OSError as e:
        raise MoveError(
            f"Failed to read source metadata {source}: {e}",
            source,
            dest,
            kind=classify_os_error(e),
        ) from e

    try:
        copied = _copy_bytes(source, dest)
    except FileExistsError as e:
        # Exclusive create lost a race with another writer; not our file
        raise DestinationExistsError(source, dest) from e
    except OSError as e:
        raise MoveError(
            f"Failed to copy {source} -> {dest}: {e}",
            source,
            dest,
            kind=classify_os_error(e),
        ) from e

    if copied != expected:
        _remove_partial(dest)
        raise CopyVerificationError(source, dest, expected, copied)

    try:
        source.unlink()
    except OSError as e:
        raise MoveError(
            f"Copied to {dest} but failed to remove source {source}: {e}",
            source,
            dest,
            kind=classify_os_error(e),
        ) from e

    log.info(f"Move (copy) {source} -> {dest} ({copied:,} bytes)")


def _copy_bytes(source: Path, dest: Path) -> int:
    """Copy file contents into a newly created dest and return bytes written.

    Opens dest with exclusive create so an existing file is never
    overwritten. Data is fsynced before returning. If anything fails after
    dest was created, the partial file is removed before re-raising; a
    dest this function did not create is never touched.
    """
    copied = 0
    with open(source, "rb") as src:
        dst = open(dest, "xb")
        try:
            with dst:
                while chunk := src.read(_CHUNK_SIZE):
                    dst.write(chunk)
                    copied += len(chunk)
                dst.flush()
                os.fsync(dst.fileno())
        except OSError:
            _remove_partial(dest)
            raise
    try:
        shutil.copystat(source, dest)
    except OSError as e:
        # Timestamps/mode are best effort (e.g. filesystems without chmod)
        log.debug(f"copystat failed for {dest}: {e}")
    return copied


def _remove_partial(dest: Path) -> None:
    """Delete an incomplete copy this module created."""
    try:
        dest.unlink(missing_ok=True)
        log.debug(f"Removed incomplete copy: {dest}")
    except OSError as e:
        log.warning(f"Failed to remove incomplete copy {dest}: {e}")
