"""CLI entry point for tagmv."""

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import click
from loguru import logger

from .config import SortConfig
from .errors import ConfigError
from .runner import SortRunner

log = logger.bind(stage="cli")


def _version() -> str:
    try:
        return version("tagmv")
    except PackageNotFoundError:
        return "0.0.0"


@click.command()
@click.argument(
    "path",
    required=False,
    type=click.Path(exists=True, file_okay=False, resolve_path=True, path_type=Path),
)
@click.option(
    "--execute", is_flag=True, help="Actually move files (default is dry-run preview)."
)
@click.option("-r", "--recursive", is_flag=True, help="Scan subdirectories.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.option(
    "-c",
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to .env file.",
)
@click.version_option(version=_version(), prog_name="tagmv")
def main(
    path: Path | None,
    execute: bool,
    recursive: bool,
    verbose: bool,
    config_file: Path | None,
) -> None:
    """Organize music files into 'Artist - Album' folders by their audio tags."""
    directory = path if path is not None else Path.cwd().resolve()

    # Only CLI flags that were actually given override env/.env values
    config_kwargs: dict[str, bool] = {}
    if execute:
        config_kwargs["execute"] = True
    if recursive:
        config_kwargs["recursive"] = True
    if verbose:
        config_kwargs["verbose"] = True

    env_file = config_file if config_file is not None else Path(".env")
    config = SortConfig(_env_file=env_file, **config_kwargs)  # type: ignore[arg-type]
    config.setup_logging()

    mode = "EXECUTING" if config.execute else "DRY RUN (use --execute to move files)"
    click.echo(f"tagmv v{_version()} -- {click.style(mode, bold=True)}\n")
    log.debug(f"Starting: directory={directory} execute={config.execute} recursive={config.recursive}")

    runner = SortRunner(config=config)
    try:
        result = runner.run(directory)
    except ConfigError as e:
        raise click.ClickException(str(e)) from e

    if result.failed:
        raise SystemExit(1)
