"""Virtualization runtime boundary.

The launcher never models the runtime's registration namespace itself. It
talks to it through the four-operation ``DistributionRuntime`` Protocol;
the Windows adapter lives in ``distrolauncher.runtime.wsl`` and tests use
an in-memory implementation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from distrolauncher.models.profile import InstanceProfile


@runtime_checkable
class DistributionRuntime(Protocol):
    """Capability set consumed by the installers.

    Implementations raise ``RegistrationError``, ``UnregistrationError``,
    ``ProfileLookupError`` and ``ProfileWriteError`` respectively.
    """

    def register_distribution(self, name: str, root_artifact_path: Path | str) -> None:
        """Create instance ``name`` from a tar archive (possibly zero-byte)."""
        ...

    def unregister_distribution(self, name: str) -> None:
        """Remove the registration of ``name``; its storage directory may remain."""
        ...

    def get_profile(self, name: str) -> InstanceProfile:
        """Return the persisted profile of instance ``name``."""
        ...

    def write_profile(self, profile: InstanceProfile) -> None:
        """Persist ``profile`` over the existing record of the same instance."""
        ...
