"""Compute destination paths for audio files.

Tagged files go to ``base/Artist - Album/NN - Title.ext``; files without
usable tags go to ``base/_Unsorted/<original name>``. Planning never
fails and never touches the disk -- collisions are handled later by
resolve_conflicts and execute_move.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from ..models import UNSORTED_FOLDER, PlannedMove, TrackMetadata
from ..sanitize import sanitize

log = logger.bind(stage="plan")


def _extension(source: Path) -> str:
    """Extension without the leading dot, or "" if there is none.

    Path.suffix is empty for names like ".m4a"; fall back to splitting
    the name on its last dot. A trailing dot ("song.") yields "".
    """
    if source.suffix:
        return source.suffix[1:]
    _, dot, ext = source.name.rpartition(".")
    return ext if dot else ""


def compute_destination(
    base_dir: Path, source: Path, meta: TrackMetadata
) -> PlannedMove:
    """Plan the move of a tagged file into its Artist - Album folder."""
    folder_name = f"{sanitize(meta.artist)} - {sanitize(meta.album)}"

    # Untitled tracks keep their stem as-is: it is already a legal name
    title = sanitize(meta.title) if meta.title is not None else source.stem
    ext = _extension(source)
    stem = f"{meta.track_number:02d} - {title}" if meta.track_number is not None else title
    file_name = f"{stem}.{ext}" if ext else stem

    dest = base_dir / folder_name / file_name
    log.debug(f"compute_destination: {source} -> {dest}")
    return PlannedMove(
        source=source,
        dest=dest,
        folder_name=folder_name,
        file_name=file_name,
    )


def compute_unsorted_destination(base_dir: Path, source: Path) -> PlannedMove:
    """Plan the move of an untagged file into _Unsorted, keeping its name."""
    file_name = source.name
    dest = base_dir / UNSORTED_FOLDER / file_name
    log.debug(f"compute_unsorted_destination: {source} -> {dest}")
    return PlannedMove(
        source=source,
        dest=dest,
        folder_name=UNSORTED_FOLDER,
        file_name=file_name,
    )
