"""Disk-image install: placeholder, relocate, patch.

The runtime can only create instances from tar archives, so a raw
``ext4.vhdx`` image is installed in five steps::

    START
      -> PLACEHOLDER_REGISTERED  register ``name`` from an empty tar
      -> PROFILE_READ            read back the allocated base path
      -> PLACEHOLDER_REMOVED     unregister, keeping the storage directory
      -> IMAGE_WRITTEN           copy (or gunzip) the image to base/ext4.vhdx
      -> CONFIG_PATCHED          set ENABLE_WSL2 in the profile and write it

Any error moves the installer to FAILED. There is no rollback across step
boundaries: a failure after PLACEHOLDER_REMOVED leaves the storage
directory (and possibly a partial image) behind with no registration, and
a failure while writing the profile leaves it unpatched. The only cleanup
performed is unregistering the placeholder when its profile cannot be
read, and that is best-effort.
"""

from __future__ import annotations

import gzip
import logging
import os
import shutil
import tempfile
import zlib
from pathlib import Path

from distrolauncher.core.classifier import DISK_IMAGE_FILENAME, is_gzip_compressed
from distrolauncher.core.errors import (
    DecompressionError,
    ImageWriteError,
    InstallError,
    ProfileLookupError,
    ProfileWriteError,
    RegistrationError,
    UnregistrationError,
)
from distrolauncher.models.profile import DistributionFlags, InstanceProfile
from distrolauncher.models.states import (
    VALID_TRANSITIONS,
    DiskImageState,
    StateTransition,
)
from distrolauncher.runtime.base import DistributionRuntime

logger = logging.getLogger(__name__)

DEFAULT_COPY_CHUNK_SIZE = 1024 * 1024


class InvalidTransitionError(RuntimeError):
    """Raised when a requested state transition is not valid."""


class DiskImageInstaller:
    """Installs one raw disk image as a VM-backed instance.

    Instances are single-use: ``state`` and ``history`` describe the one
    install attempt made through ``install``.

    Parameters
    ----------
    runtime:
        The virtualization runtime to register against.
    temp_dir:
        Where the zero-byte placeholder archive is created. Defaults to the
        process temp directory.
    chunk_size:
        Buffer size for the image copy.
    """

    def __init__(
        self,
        runtime: DistributionRuntime,
        *,
        temp_dir: Path | None = None,
        chunk_size: int = DEFAULT_COPY_CHUNK_SIZE,
    ) -> None:
        self._runtime = runtime
        self._temp_dir = temp_dir
        self._chunk_size = chunk_size
        self.state = DiskImageState.START
        self.history: list[StateTransition] = []

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------

    def _advance(self, target: DiskImageState, reason: str | None = None) -> None:
        allowed = VALID_TRANSITIONS.get(self.state, set())
        if target not in allowed:
            raise InvalidTransitionError(
                f"Cannot transition from {self.state.value} to {target.value}. "
                f"Allowed: {sorted(s.value for s in allowed)}"
            )
        self.history.append(
            StateTransition(from_state=self.state, to_state=target, reason=reason)
        )
        logger.debug("Disk-image install: %s -> %s", self.state.value, target.value)
        self.state = target

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def install(
        self,
        name: str,
        path: Path | str,
        *,
        gzip_compressed: bool | None = None,
    ) -> InstanceProfile:
        """Install the image at ``path`` as instance ``name``.

        ``gzip_compressed`` defaults to whether the file name ends in
        ``.gz``. Returns the profile as written back to the runtime.
        """
        if self.state != DiskImageState.START:
            raise InvalidTransitionError(
                f"Installer already used (state: {self.state.value})"
            )
        path = Path(path)
        if gzip_compressed is None:
            gzip_compressed = is_gzip_compressed(path)

        try:
            self._register_placeholder(name)
            profile = self._read_profile(name)
            self._remove_placeholder(name)
            self._materialize(path, Path(profile.base_path), gzip_compressed)
            return self._patch_profile(profile)
        except InstallError as exc:
            exc.state = self.state
            self._advance(DiskImageState.FAILED, reason=str(exc))
            raise

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _create_placeholder(self) -> Path:
        try:
            fd, placeholder = tempfile.mkstemp(
                prefix="em-vhdx-", suffix=".tar", dir=self._temp_dir
            )
            os.close(fd)
        except OSError as exc:
            raise RegistrationError(
                f"Could not create placeholder archive: {exc}"
            ) from exc
        return Path(placeholder)

    def _register_placeholder(self, name: str) -> None:
        placeholder = self._create_placeholder()
        try:
            logger.info("Registering placeholder instance %s", name)
            self._runtime.register_distribution(name, placeholder)
        except OSError as exc:
            raise RegistrationError(f"Could not register {name!r}: {exc}") from exc
        finally:
            try:
                placeholder.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Could not remove placeholder %s: %s", placeholder, exc)
        self._advance(DiskImageState.PLACEHOLDER_REGISTERED)

    def _read_profile(self, name: str) -> InstanceProfile:
        try:
            profile = self._runtime.get_profile(name)
        except (ProfileLookupError, OSError) as exc:
            self._discard_placeholder(name)
            if isinstance(exc, ProfileLookupError):
                raise
            raise ProfileLookupError(f"Could not read profile of {name!r}: {exc}") from exc

        if not profile.base_path:
            self._discard_placeholder(name)
            raise ProfileLookupError(f"Profile of {name!r} has no base path")

        logger.info("Instance %s allocated at %s", name, profile.base_path)
        self._advance(DiskImageState.PROFILE_READ)
        return profile

    def _discard_placeholder(self, name: str) -> None:
        """Best-effort unregistration after a failed profile read."""
        try:
            self._runtime.unregister_distribution(name)
        except (InstallError, OSError) as exc:
            logger.warning("Placeholder %s left registered: %s", name, exc)

    def _remove_placeholder(self, name: str) -> None:
        try:
            self._runtime.unregister_distribution(name)
        except OSError as exc:
            raise UnregistrationError(f"Could not unregister {name!r}: {exc}") from exc
        self._advance(DiskImageState.PLACEHOLDER_REMOVED)

    def _materialize(self, source: Path, base_path: Path, gzip_compressed: bool) -> None:
        dest = base_path / DISK_IMAGE_FILENAME
        logger.info(
            "Writing %s to %s%s", source, dest, " (gunzip)" if gzip_compressed else ""
        )
        try:
            with open(source, "rb") as src, open(dest, "wb") as out:
                if gzip_compressed:
                    with gzip.GzipFile(fileobj=src, mode="rb") as reader:
                        shutil.copyfileobj(reader, out, self._chunk_size)
                else:
                    shutil.copyfileobj(src, out, self._chunk_size)
        except (gzip.BadGzipFile, EOFError, zlib.error) as exc:
            # Partial destination file is left in place
            raise DecompressionError(f"Could not decompress {source}: {exc}") from exc
        except OSError as exc:
            raise ImageWriteError(f"Could not write {dest}: {exc}") from exc
        self._advance(DiskImageState.IMAGE_WRITTEN)

    def _patch_profile(self, profile: InstanceProfile) -> InstanceProfile:
        patched = profile.with_flags(DistributionFlags.ENABLE_WSL2)
        try:
            self._runtime.write_profile(patched)
        except OSError as exc:
            raise ProfileWriteError(
                f"Could not write profile of {profile.distribution_name!r}: {exc}"
            ) from exc
        self._advance(DiskImageState.CONFIG_PATCHED)
        return patched


def install_disk_image(
    runtime: DistributionRuntime,
    name: str,
    path: Path | str,
    *,
    gzip_compressed: bool | None = None,
    temp_dir: Path | None = None,
    chunk_size: int = DEFAULT_COPY_CHUNK_SIZE,
) -> InstanceProfile:
    """Install a disk image with a fresh ``DiskImageInstaller``."""
    installer = DiskImageInstaller(runtime, temp_dir=temp_dir, chunk_size=chunk_size)
    return installer.install(name, path, gzip_compressed=gzip_compressed)
