"""Shared test fixtures for distrolauncher."""

from __future__ import annotations

import gzip
import hashlib
import uuid
from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from distrolauncher.config import LauncherConfig
from distrolauncher.core.errors import (
    ProfileLookupError,
    RegistrationError,
    UnregistrationError,
)
from distrolauncher.models.profile import DistributionFlags, InstanceProfile


class FakeRuntime:
    """In-memory ``DistributionRuntime``.

    ``registered`` is the set of names registered through the API;
    ``profiles`` is the persisted profile store. Unregistering removes both
    but leaves the storage directory on disk. Writing a profile only
    touches the profile store.

    Set ``fail_on[<operation>]`` to an exception to make that operation
    raise it.
    """

    def __init__(self, storage_root: Path) -> None:
        self.storage_root = storage_root
        self.registered: set[str] = set()
        self.profiles: dict[str, InstanceProfile] = {}
        self.registered_archives: dict[str, tuple[Path, int]] = {}
        # argument exactly as passed to register_distribution
        self.register_args: dict[str, Path | str] = {}
        self.written_profiles: list[InstanceProfile] = []
        self.calls: list[tuple[str, str]] = []
        self.fail_on: dict[str, Exception] = {}
        self.blank_base_path = False

    def _maybe_fail(self, operation: str) -> None:
        exc = self.fail_on.get(operation)
        if exc is not None:
            raise exc

    def register_distribution(self, name: str, root_artifact_path: Path | str) -> None:
        self.calls.append(("register", name))
        self.register_args[name] = root_artifact_path
        self._maybe_fail("register")
        if name in self.registered:
            raise RegistrationError(f"{name!r} is already registered")
        archive = Path(root_artifact_path)
        if not archive.is_file():
            raise RegistrationError(f"Archive not found: {archive}")
        self.registered_archives[name] = (archive, archive.stat().st_size)

        base = self.storage_root / name
        base.mkdir(parents=True, exist_ok=True)
        self.registered.add(name)
        self.profiles[name] = InstanceProfile(
            registry_key=f"{{{uuid.uuid4()}}}",
            distribution_name=name,
            base_path="" if self.blank_base_path else str(base),
            flags=int(DistributionFlags.DEFAULT),
        )

    def unregister_distribution(self, name: str) -> None:
        self.calls.append(("unregister", name))
        self._maybe_fail("unregister")
        if name not in self.registered:
            raise UnregistrationError(f"{name!r} is not registered")
        self.registered.discard(name)
        self.profiles.pop(name, None)

    def get_profile(self, name: str) -> InstanceProfile:
        self.calls.append(("get_profile", name))
        self._maybe_fail("get_profile")
        try:
            return self.profiles[name]
        except KeyError:
            raise ProfileLookupError(f"No profile for {name!r}") from None

    def write_profile(self, profile: InstanceProfile) -> None:
        self.calls.append(("write_profile", profile.distribution_name))
        self._maybe_fail("write_profile")
        self.written_profiles.append(profile)
        self.profiles[profile.distribution_name] = profile


@pytest.fixture
def runtime(tmp_path: Path) -> FakeRuntime:
    """Provide a FakeRuntime storing instances under a temp directory."""
    return FakeRuntime(tmp_path / "instances")


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    """Temp directory for downloads and placeholder archives."""
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def settings(scratch_dir: Path) -> LauncherConfig:
    """LauncherConfig isolated from the environment and .env files."""
    return LauncherConfig(
        _env_file=None,
        temp_dir=scratch_dir,
        download_chunk_size=1024,
        copy_chunk_size=4096,
        hash_chunk_size=1024,
    )


@pytest.fixture
def image_bytes() -> bytes:
    """Deterministic stand-in for an ext4 disk image."""
    return bytes(range(256)) * 64 + b"ext4-superblock" * 100


@pytest.fixture
def make_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Factory fixture: write ``data`` to ``tmp_path/artifacts/<name>``."""

    def _factory(name: str, data: bytes) -> Path:
        directory = tmp_path / "artifacts"
        directory.mkdir(exist_ok=True)
        path = directory / name
        path.write_bytes(data)
        return path

    return _factory


@pytest.fixture
def gz_image(make_file: Callable[[str, bytes], Path], image_bytes: bytes) -> Path:
    """A gzip-compressed disk image artifact."""
    return make_file("image.ext4.vhdx.gz", gzip.compress(image_bytes))


@pytest.fixture
def sha256_of() -> Callable[[Path], str]:
    return lambda path: hashlib.sha256(path.read_bytes()).hexdigest()


@pytest.fixture
def make_http_client() -> Callable[..., httpx.Client]:
    """Factory fixture: an httpx.Client served by a MockTransport handler."""

    def _factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(handler))

    return _factory
