"""Make every destination in a planned batch unique."""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger

from ..models import MAX_CONFLICT_ATTEMPTS, PlannedMove

log = logger.bind(stage="conflicts")


def _disambiguated(dest: Path, n: int) -> Path:
    """'song.mp3' -> 'song (n).mp3'; 'song' -> 'song (n)'."""
    return dest.with_name(f"{dest.stem} ({n}){dest.suffix}")


def resolve_conflicts(
    moves: list[PlannedMove],
    max_attempts: int = MAX_CONFLICT_ATTEMPTS,
) -> list[PlannedMove]:
    """Rename colliding destinations in place, in batch order.

    A destination collides if it already exists on disk or was claimed by
    an earlier entry in the batch. Collisions get a ' (n)' suffix before
    the extension, n counting up from 1. Entries already in place
    (source == dest) are left alone.

    If max_attempts suffixes are all taken, the last candidate is kept and
    the entry is flagged conflict_exhausted; execute_move refuses such
    entries. Returns the same list.
    """
    claimed: set[Path] = set()

    for m in moves:
        if m.is_noop:
            continue

        original = m.dest
        candidate = original
        n = 0
        while os.path.lexists(candidate) or candidate in claimed:
            n += 1
            if n > max_attempts:
                m.conflict_exhausted = True
                log.warning(
                    f"Gave up after {max_attempts} attempts: {original} -> {candidate}"
                )
                break
            candidate = _disambiguated(original, n)

        if candidate != original:
            log.debug(f"Conflict: {original.name} -> {candidate.name}")
            m.dest = candidate
            m.file_name = candidate.name

        claimed.add(candidate)

    return moves
