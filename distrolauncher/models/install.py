"""Install request and artifact models."""

from __future__ import annotations

import os
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class InstallStrategy(str, Enum):
    """How an artifact is handed to the runtime."""

    TAR = "tar"
    DISK_IMAGE = "disk_image"


class InstallRequest(BaseModel):
    """A single install invocation. Immutable for the duration of the install."""

    model_config = ConfigDict(frozen=True)

    distribution_name: str
    source_location: str
    expected_digest: str | None = None  # hex SHA-256
    show_progress: bool = False

    @field_validator("distribution_name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("distribution_name must not be empty")
        return value

    @field_validator("expected_digest")
    @classmethod
    def _normalize_digest(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip().lower()
        return value or None


class ResolvedArtifact(BaseModel):
    """A local, readable install artifact.

    ``local_path`` is kept exactly as the caller spelled it so the runtime
    receives the original string. ``downloaded`` is True when it is a
    temporary file owned by the acquisition context; it is deleted when that
    context exits.
    """

    model_config = ConfigDict(frozen=True)

    local_path: str
    actual_digest: str | None = None
    downloaded: bool = False

    @field_validator("local_path", mode="before")
    @classmethod
    def _accept_path_like(cls, value: Any) -> Any:
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        return value


class ArtifactClassification(BaseModel):
    """Result of suffix-based artifact classification."""

    model_config = ConfigDict(frozen=True)

    strategy: InstallStrategy
    gzip_compressed: bool = False

    @property
    def is_disk_image(self) -> bool:
        return self.strategy == InstallStrategy.DISK_IMAGE


class InstallResult(BaseModel):
    """Summary of a successful install."""

    model_config = ConfigDict(frozen=True)

    distribution_name: str
    strategy: InstallStrategy
    artifact_digest: str | None = None
    base_path: str | None = None  # only known for disk-image installs
