"""tagmv configuration via pydantic-settings (.env + TAGMV_* env vars)."""

import sys
from pathlib import Path

from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import MAX_CONFLICT_ATTEMPTS


class SortConfig(BaseSettings):
    """All tagmv configuration with layered resolution:
    .env file < TAGMV_* environment variables < constructor kwargs.
    """

    model_config = SettingsConfigDict(
        env_prefix="TAGMV_",
        env_file=".env",
        extra="ignore",
    )

    # -- Behavior --
    execute: bool = False  # False = dry-run preview only
    recursive: bool = False
    verbose: bool = False  # True = DEBUG on stderr regardless of log_level

    # -- Conflict resolution --
    max_conflict_attempts: int = MAX_CONFLICT_ATTEMPTS

    # -- Tag reading --
    ffprobe_bin: str = "ffprobe"
    ffprobe_timeout: int = 30

    # -- Logging --
    log_level: str = "INFO"
    log_dir: Path | None = None

    def setup_logging(self) -> None:
        """Configure loguru for tagmv."""
        logger.remove()  # Remove default stderr handler

        log_format = (
            "{time:YYYY-MM-DDTHH:mm:ssZ} | {level:<8} | "
            "{extra[stage]:<10} | {message}"
        )

        def _default_extra(record):
            record["extra"].setdefault("stage", "")
            return True

        logger.add(
            sys.stderr,
            format=log_format,
            level="DEBUG" if self.verbose else self.log_level.upper(),
            filter=_default_extra,
        )

        if self.log_dir is None:
            return

        self.log_dir.mkdir(parents=True, exist_ok=True)
        logger.add(
            str(self.log_dir / "tagmv.log"),
            format=log_format,
            level="DEBUG",
            rotation="10 MB",
            retention="30 days",
            filter=_default_extra,
        )
