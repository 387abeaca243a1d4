"""FFprobe subprocess wrappers for reading embedded audio tags."""

import json
import re
import subprocess
from pathlib import Path

from loguru import logger

from .models import TrackMetadata

log = logger.bind(stage="ffprobe")

_TRACK_RE = re.compile(r"^\s*(\d+)\s*(?:/\s*\d*\s*)?$")


def _run_ffprobe(
    args: list[str], ffprobe_bin: str = "ffprobe", timeout: int = 30
) -> subprocess.CompletedProcess:
    """Run ffprobe with common flags."""
    return subprocess.run(
        [ffprobe_bin, "-v", "error"] + args,
        capture_output=True,
        text=True,
        timeout=timeout,
    )


def get_tags(file: Path, ffprobe_bin: str = "ffprobe", timeout: int = 30) -> dict:
    """Get format-level metadata tags from an audio file.

    Returns dict with lowercase keys. Common keys: artist, album_artist,
    title, album, track, genre, date. Returns {} if ffprobe is missing,
    times out, fails, or prints something unparseable.
    """
    try:
        result = _run_ffprobe(
            ["-show_entries", "format_tags", "-of", "json", str(file)],
            ffprobe_bin=ffprobe_bin,
            timeout=timeout,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        log.warning(f"ffprobe failed for {file.name}: {e}")
        return {}
    if result.returncode != 0:
        log.debug(f"ffprobe exited {result.returncode} for {file.name}")
        return {}
    try:
        data = json.loads(result.stdout)
        raw = data.get("format", {}).get("tags", {})
        # Normalize keys to lowercase
        return {k.lower(): v for k, v in raw.items()}
    except (json.JSONDecodeError, AttributeError):
        return {}


def parse_track_number(raw: str | None) -> int | None:
    """Parse a track tag: "3", "03", and "3/12" all give 3."""
    if not raw:
        return None
    match = _TRACK_RE.match(raw)
    if not match:
        return None
    return int(match.group(1))


def read_tags(
    file: Path, ffprobe_bin: str = "ffprobe", timeout: int = 30
) -> TrackMetadata | None:
    """Read artist/album/title/track from a file.

    Returns None when artist or album is missing or blank -- such files
    belong in _Unsorted.
    """
    tags = get_tags(file, ffprobe_bin=ffprobe_bin, timeout=timeout)

    artist = (tags.get("artist") or tags.get("album_artist") or "").strip()
    album = (tags.get("album") or "").strip()
    if not artist or not album:
        log.debug(f"No usable artist/album tags: {file.name}")
        return None

    title = (tags.get("title") or "").strip() or None
    return TrackMetadata(
        artist=artist,
        album=album,
        title=title,
        track_number=parse_track_number(tags.get("track")),
    )
