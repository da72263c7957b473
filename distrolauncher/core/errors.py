"""Install error taxonomy.

Every failure in the install pipeline is an ``InstallError`` subclass whose
``stage`` names the part of the pipeline that failed, so callers can report
acquisition vs. verification vs. registration vs. materialization vs.
configuration failures without inspecting messages.
"""

from __future__ import annotations

from typing import Any


class InstallError(RuntimeError):
    """Base class for all install pipeline failures."""

    stage = "install"

    def __init__(self, message: str, *, state: Any = None) -> None:
        super().__init__(message)
        # Disk-image installer state at the time of failure, if any
        self.state = state


class AcquisitionError(InstallError):
    """Raised when the install artifact cannot be downloaded or opened."""

    stage = "acquisition"


class IntegrityMismatchError(InstallError):
    """Raised when the artifact's SHA-256 does not match the expected digest."""

    stage = "verification"

    def __init__(self, expected: str, actual: str) -> None:
        super().__init__(
            f"Checksum mismatch: expected {expected}, got {actual}"
        )
        self.expected = expected
        self.actual = actual


class RegistrationError(InstallError):
    """Raised when the runtime refuses to register a distribution."""

    stage = "registration"


class ProfileLookupError(InstallError):
    """Raised when a registered instance's profile or base path cannot be read."""

    stage = "profile lookup"


class UnregistrationError(InstallError):
    """Raised when the runtime refuses to unregister a distribution."""

    stage = "unregistration"


class ImageWriteError(InstallError):
    """Raised when the disk image cannot be read or written."""

    stage = "materialization"


class DecompressionError(ImageWriteError):
    """Raised when a gzip-compressed disk image is corrupt midstream."""


class ProfileWriteError(InstallError):
    """Raised when the runtime rejects the patched profile."""

    stage = "configuration"


class RuntimeUnavailableError(InstallError):
    """Raised when the virtualization runtime cannot be reached on this host."""

    stage = "runtime"
