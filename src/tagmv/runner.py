"""Sort runner -- scan, plan, resolve, preview, and execute a batch."""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable
from pathlib import Path

import click
from loguru import logger

from .config import SortConfig
from .errors import ConfigError, MoveError
from .ffprobe import read_tags
from .models import UNSORTED_FOLDER, BatchResult, PlannedMove, TrackMetadata
from .ops.conflicts import resolve_conflicts
from .ops.move import execute_move
from .ops.plan import compute_destination, compute_unsorted_destination
from .scanner import scan_files

log = logger.bind(stage="runner")

TagReader = Callable[[Path], TrackMetadata | None]


class SortRunner:
    """Sorts one directory of audio files into Artist - Album folders."""

    def __init__(self, config: SortConfig, reader: TagReader | None = None) -> None:
        self.config = config
        self.reader = reader or functools.partial(
            read_tags,
            ffprobe_bin=config.ffprobe_bin,
            timeout=config.ffprobe_timeout,
        )

    def plan(self, files: Iterable[Path], base_dir: Path) -> list[PlannedMove]:
        """Plan one move per file and make all destinations unique.

        files should already be in a deterministic order (scan_files sorts
        them) so suffix numbering is reproducible between runs.
        """
        moves: list[PlannedMove] = []
        for file in files:
            meta = self.reader(file)
            if meta is None:
                moves.append(compute_unsorted_destination(base_dir, file))
            else:
                moves.append(compute_destination(base_dir, file, meta))
        return resolve_conflicts(moves, max_attempts=self.config.max_conflict_attempts)

    def preview(self, moves: list[PlannedMove]) -> None:
        """Print planned moves grouped by destination folder, then a summary."""
        folders: dict[str, list[PlannedMove]] = {}
        for m in moves:
            folders.setdefault(m.folder_name, []).append(m)

        move_count = unsorted_count = skipped_count = 0

        for folder in sorted(folders):
            if folder == UNSORTED_FOLDER:
                click.echo("  " + click.style(folder, fg="red", bold=True))
            else:
                click.echo("  " + click.style(f"{folder}/", fg="yellow", bold=True))

            for m in folders[folder]:
                if m.is_noop:
                    skipped_count += 1
                    click.echo(
                        "    "
                        + click.style(m.file_name, dim=True)
                        + "  "
                        + click.style("(already in place)", dim=True)
                    )
                    continue

                line = (
                    "    "
                    + click.style(m.file_name, fg="green")
                    + "  "
                    + click.style(f"<- {m.source.name}", dim=True)
                )
                if m.conflict_exhausted:
                    line += "  " + click.style("(no free name, will be skipped)", fg="red")
                click.echo(line)

                if folder == UNSORTED_FOLDER:
                    unsorted_count += 1
                else:
                    move_count += 1

            click.echo("")

        folder_count = sum(1 for f in folders if f != UNSORTED_FOLDER)
        total = move_count + unsorted_count + skipped_count
        summary = f"Summary: {total} files -> {folder_count} folders, {unsorted_count} unsorted"
        if skipped_count:
            summary += f", {skipped_count} already in place"
        click.echo(summary)

    def execute(self, moves: list[PlannedMove]) -> BatchResult:
        """Run execute_move for every entry in batch order.

        A failed entry is reported and counted; it never stops the batch.
        """
        result = BatchResult(total=len(moves))

        for m in moves:
            if m.is_noop:
                result.skipped += 1
                continue
            try:
                execute_move(m)
            except MoveError as e:
                result.failed += 1
                result.errors.append(e)
                log.debug(f"Move failed ({e.kind}): {e}")
                click.echo(
                    f"  {click.style('ERROR', fg='red', bold=True)} "
                    f"{m.source} -> {m.dest}: {e}",
                    err=True,
                )
                continue
            result.moved += 1

        summary = f"Moved {result.moved} files successfully"
        if result.failed:
            summary += f", {result.failed} errors"
        click.echo(summary)

        if result.failed:
            log.warning(f"Batch had {result.failed} failures out of {result.total}")
        return result

    def run(self, directory: Path) -> BatchResult:
        """Scan directory, preview the plan, and move files if configured to."""
        if not directory.is_dir():
            raise ConfigError(f"Not a directory: {directory}")

        click.echo(f"Scanning: {click.style(str(directory), dim=True)}")
        files = scan_files(directory, recursive=self.config.recursive)
        click.echo(f"Found {click.style(str(len(files)), bold=True)} audio files\n")

        if not files:
            return BatchResult()

        moves = self.plan(files, directory)
        self.preview(moves)

        if not self.config.execute:
            log.debug("Dry run, nothing moved")
            return BatchResult(
                total=len(moves), skipped=sum(1 for m in moves if m.is_noop)
            )

        click.echo("")
        return self.execute(moves)
