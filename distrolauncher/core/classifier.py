"""Suffix-based artifact classification.

Only disk-image suffixes are recognized here. Every other artifact (plain,
gzip, zstd or xz tar, or anything unrecognized) is passed through to the
runtime's registration primitive, which does its own archive parsing.
"""

from __future__ import annotations

from pathlib import Path

from distrolauncher.models.install import ArtifactClassification, InstallStrategy

DISK_IMAGE_FILENAME = "ext4.vhdx"

# Longest suffix first so ".ext4.vhdx.gz" wins over ".ext4.vhdx"
DISK_IMAGE_SUFFIXES: tuple[tuple[str, ArtifactClassification], ...] = (
    (
        ".ext4.vhdx.gz",
        ArtifactClassification(strategy=InstallStrategy.DISK_IMAGE, gzip_compressed=True),
    ),
    (
        ".ext4.vhdx",
        ArtifactClassification(strategy=InstallStrategy.DISK_IMAGE),
    ),
)

TAR_CLASSIFICATION = ArtifactClassification(strategy=InstallStrategy.TAR)


def classify_artifact(path: Path | str) -> ArtifactClassification:
    """Classify an artifact by its file name (case-insensitive)."""
    name = Path(path).name.lower()
    for suffix, classification in DISK_IMAGE_SUFFIXES:
        if name.endswith(suffix):
            return classification
    return TAR_CLASSIFICATION


def is_gzip_compressed(path: Path | str) -> bool:
    """Return True if the file name ends in ``.gz`` (case-insensitive)."""
    return Path(path).name.lower().endswith(".gz")
