"""Launcher configuration — env-driven via pydantic-settings.

Reads from a .env file and DISTROLAUNCHER_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

from distrolauncher import __version__


class LauncherConfig(BaseSettings):
    """Launcher configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        set DISTROLAUNCHER_LOG_LEVEL=DEBUG
        set DISTROLAUNCHER_TEMP_DIR=D:\\scratch
        set DISTROLAUNCHER_DOWNLOAD_TIMEOUT=600

    Or via .env file::

        DISTROLAUNCHER_COPY_CHUNK_SIZE=4194304
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="DISTROLAUNCHER_",
        env_file_encoding="utf-8",
    )

    log_level: str = "WARNING"

    # Scratch location for downloads and the placeholder archive.
    # None means the process temp directory.
    temp_dir: Path | None = None

    # Streaming buffer sizes (bytes)
    download_chunk_size: int = 64 * 1024
    hash_chunk_size: int = 64 * 1024
    copy_chunk_size: int = 1024 * 1024

    # Network. No timeout unless set explicitly.
    download_timeout: float | None = None
    user_agent: str = f"distrolauncher/{__version__}"

    # Used by the CLI when --name is not given
    default_distribution_name: str = ""


# Module-level singleton — import as `from distrolauncher.config import config`
config = LauncherConfig()
