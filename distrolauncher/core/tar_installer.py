"""Archive-based install: hand the tar stream straight to the runtime."""

from __future__ import annotations

import logging
from pathlib import Path

from distrolauncher.core.errors import InstallError, RegistrationError
from distrolauncher.runtime.base import DistributionRuntime

logger = logging.getLogger(__name__)


def install_tar(runtime: DistributionRuntime, name: str, path: Path | str) -> None:
    """Register ``name`` from the archive at ``path``, passed unmodified.

    Archive parsing (plain, gzip, zstd, xz) is the runtime's job.
    """
    logger.info("Installing %s from archive %s", name, path)
    try:
        runtime.register_distribution(name, path)
    except InstallError:
        raise
    except OSError as exc:
        raise RegistrationError(f"Could not register {name!r}: {exc}") from exc
