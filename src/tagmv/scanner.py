"""Find audio files to sort."""

import os
from pathlib import Path

from loguru import logger

from .errors import ConfigError
from .models import AUDIO_EXTENSIONS, UNSORTED_FOLDER

log = logger.bind(stage="scanner")


def _is_hidden(name: str) -> bool:
    return name.startswith(".")


def _is_audio(name: str, extensions: frozenset[str]) -> bool:
    return Path(name).suffix.lower() in extensions


def scan_files(
    directory: Path,
    recursive: bool = False,
    extensions: frozenset[str] = AUDIO_EXTENSIONS,
) -> list[Path]:
    """List non-hidden audio files under directory, sorted by path.

    In recursive mode, hidden directories and _Unsorted folders below the
    root are not descended into, so previously unsorted files are not
    picked up again on every run.
    """
    log.debug(f"scan_files(directory={directory}, recursive={recursive})")
    files: list[Path] = []

    if recursive:
        def _on_walk_error(err: OSError) -> None:
            if Path(err.filename or "") == directory:
                raise ConfigError(f"Failed to read directory: {directory}") from err
            log.warning(f"Skipping unreadable directory: {err.filename}")

        for dirpath, dirnames, filenames in os.walk(directory, onerror=_on_walk_error):
            dirnames[:] = [
                d for d in dirnames if not _is_hidden(d) and d != UNSORTED_FOLDER
            ]
            for name in filenames:
                path = Path(dirpath) / name
                if not _is_hidden(name) and _is_audio(name, extensions) and path.is_file():
                    files.append(path)
    else:
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            raise ConfigError(f"Failed to read directory: {directory}") from e
        for path in entries:
            if path.is_file() and not _is_hidden(path.name) and _is_audio(path.name, extensions):
                files.append(path)

    files.sort()
    log.debug(f"Found {len(files)} audio files in {directory}")
    return files
