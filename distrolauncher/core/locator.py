"""Default install artifact discovery next to the running executable."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

# Probe order: archives first, then disk images.
DEFAULT_ROOTFS_FILES: tuple[str, ...] = (
    "install.tar",
    "install.tar.gz",
    "install.tgz",
    "install.tar.zst",
    "install.tar.xz",
    "rootfs.tar",
    "rootfs.tar.gz",
    "rootfs.tgz",
    "rootfs.tar.zst",
    "rootfs.tar.xz",
    "install.ext4.vhdx",
    "install.ext4.vhdx.gz",
)

FALLBACK_ROOTFS_FILE = "rootfs.tar.gz"


def executable_dir() -> Path:
    """Directory containing the running executable (or launcher script)."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(sys.argv[0]).resolve().parent


def default_distribution_name() -> str:
    """Name of the launcher executable without its extension.

    A launcher copied to ``Alpine.exe`` installs a distribution named
    ``Alpine``.
    """
    if getattr(sys, "frozen", False):
        return Path(sys.executable).stem
    return Path(sys.argv[0]).stem


def locate_default_artifact(search_dir: Path | None = None) -> str:
    """Return the first default artifact found in ``search_dir``.

    Falls back to the bare name ``rootfs.tar.gz`` without checking that it
    exists; opening it later fails naturally if it is absent.
    """
    directory = search_dir if search_dir is not None else executable_dir()
    for filename in DEFAULT_ROOTFS_FILES:
        candidate = directory / filename
        if candidate.exists():
            logger.debug("Found default artifact %s", candidate)
            return str(candidate)
    return FALLBACK_ROOTFS_FILE
