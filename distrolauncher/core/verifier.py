"""Integrity verification of acquired artifacts."""

from __future__ import annotations

import logging

from distrolauncher.core.errors import AcquisitionError, IntegrityMismatchError
from distrolauncher.core.hasher import DEFAULT_CHUNK_SIZE, digests_match, sha256_file
from distrolauncher.core.reporting import NULL_REPORTER, ProgressReporter
from distrolauncher.models.install import ResolvedArtifact

logger = logging.getLogger(__name__)


def verify_artifact(
    artifact: ResolvedArtifact,
    expected_digest: str | None,
    *,
    reporter: ProgressReporter = NULL_REPORTER,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> ResolvedArtifact:
    """Reconcile ``expected_digest`` against the artifact's actual digest.

    A downloaded artifact already carries its digest. A local artifact is
    hashed only when an expected digest was supplied; otherwise the full
    read is skipped. Returns the artifact with ``actual_digest`` filled in
    when it is known.

    Raises
    ------
    IntegrityMismatchError
        If both digests are known and differ.
    """
    actual = artifact.actual_digest
    if actual is None and expected_digest:
        reporter.info("Calculating checksum...")
        try:
            actual = sha256_file(artifact.local_path, chunk_size)
        except OSError as exc:
            raise AcquisitionError(
                f"Could not read {artifact.local_path}: {exc}"
            ) from exc
        artifact = artifact.model_copy(update={"actual_digest": actual})

    if actual:
        reporter.digest(actual)

    if expected_digest and actual and not digests_match(expected_digest, actual):
        logger.error(
            "Checksum mismatch for %s: expected %s, got %s",
            artifact.local_path, expected_digest, actual,
        )
        raise IntegrityMismatchError(expected_digest, actual)

    return artifact
