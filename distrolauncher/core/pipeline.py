"""Install pipeline — acquire, verify, classify, install.

Runs sequentially on the caller's thread. Each stage raises its own
``InstallError`` subclass immediately; nothing is retried. A downloaded
artifact is deleted when the pipeline returns or raises.
"""

from __future__ import annotations

import logging

import httpx
from rich.console import Console

from distrolauncher.config import LauncherConfig, config
from distrolauncher.core.acquirer import acquire_artifact
from distrolauncher.core.classifier import classify_artifact
from distrolauncher.core.disk_image_installer import DiskImageInstaller
from distrolauncher.core.reporting import ProgressReporter
from distrolauncher.core.tar_installer import install_tar
from distrolauncher.core.verifier import verify_artifact
from distrolauncher.models.install import InstallRequest, InstallResult, InstallStrategy
from distrolauncher.runtime.base import DistributionRuntime

logger = logging.getLogger(__name__)


def install(
    request: InstallRequest,
    runtime: DistributionRuntime,
    *,
    settings: LauncherConfig | None = None,
    client: httpx.Client | None = None,
    console: Console | None = None,
) -> InstallResult:
    """Install ``request.source_location`` as ``request.distribution_name``.

    Parameters
    ----------
    request:
        What to install and under which name.
    runtime:
        The virtualization runtime to register with.
    settings:
        Launcher configuration; the module-level ``config`` if omitted.
    client:
        HTTP client for remote sources (mainly for tests).
    console:
        Where progress is printed when ``request.show_progress`` is set.
    """
    settings = settings or config
    reporter = ProgressReporter(console, enabled=request.show_progress)
    name = request.distribution_name

    reporter.info(f"Using: {request.source_location}")
    logger.info("Installing %s from %s", name, request.source_location)

    with acquire_artifact(
        request.source_location, settings=settings, client=client, reporter=reporter
    ) as artifact:
        artifact = verify_artifact(
            artifact,
            request.expected_digest,
            reporter=reporter,
            chunk_size=settings.hash_chunk_size,
        )

        reporter.info("Installing...")
        classification = classify_artifact(artifact.local_path)
        base_path: str | None = None

        if classification.strategy == InstallStrategy.DISK_IMAGE:
            installer = DiskImageInstaller(
                runtime,
                temp_dir=settings.temp_dir,
                chunk_size=settings.copy_chunk_size,
            )
            profile = installer.install(
                name,
                artifact.local_path,
                gzip_compressed=classification.gzip_compressed,
            )
            base_path = profile.base_path
        else:
            install_tar(runtime, name, artifact.local_path)

    logger.info("Installed %s (%s)", name, classification.strategy.value)
    return InstallResult(
        distribution_name=name,
        strategy=classification.strategy,
        artifact_digest=artifact.actual_digest,
        base_path=base_path,
    )
