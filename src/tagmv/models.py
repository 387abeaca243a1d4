"""Core enums, constants, and data types for tagmv.

Types:
    TrackMetadata -- Tag record produced by the tag reader (read-only).
    PlannedMove   -- One intended relocation: source, dest, folder/file name.
    BatchResult   -- Aggregate counts from executing a resolved batch.
    IOErrorKind   -- Classification of underlying OS failures.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

UNSORTED_FOLDER = "_Unsorted"

AUDIO_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".mp3",
        ".m4a",
        ".flac",
        ".ogg",
        ".wma",
        ".aac",
        ".wav",
    }
)

# Windows/FAT32 device names that cannot be used as file or folder names
RESERVED_NAMES: frozenset[str] = frozenset(
    {"CON", "PRN", "AUX", "NUL"}
    | {f"COM{i}" for i in range(1, 10)}
    | {f"LPT{i}" for i in range(1, 10)}
)

MAX_CONFLICT_ATTEMPTS = 10_000


class IOErrorKind(StrEnum):
    CROSS_DEVICE = "cross_device"
    PERMISSION = "permission"
    NOT_FOUND = "not_found"
    OTHER = "other"


@dataclass(frozen=True)
class TrackMetadata:
    """Artist/album are always non-empty; title and track are optional."""

    artist: str
    album: str
    title: str | None = None
    track_number: int | None = None


@dataclass
class PlannedMove:
    """A single file relocation.

    ``dest`` is always ``base_dir / folder_name / file_name``. Only the
    conflict resolver rewrites ``dest`` and ``file_name``.
    """

    source: Path
    dest: Path
    folder_name: str
    file_name: str
    conflict_exhausted: bool = False

    @property
    def is_noop(self) -> bool:
        return self.source == self.dest


@dataclass
class BatchResult:
    """Result summary from executing a batch of planned moves."""

    moved: int = 0
    failed: int = 0
    skipped: int = 0
    total: int = 0
    errors: list[Exception] = field(default_factory=list)
