"""Tests for the archive installer."""

from __future__ import annotations

import pytest

from distrolauncher.core.errors import RegistrationError
from distrolauncher.core.tar_installer import install_tar


class TestInstallTar:
    def test_registers_with_exact_path(self, runtime, make_file):
        path = make_file("rootfs.tar.zst", b"zstd-archive")
        install_tar(runtime, "Alpine", path)
        assert runtime.calls == [("register", "Alpine")]
        archive, size = runtime.registered_archives["Alpine"]
        assert archive == path
        assert size == len(b"zstd-archive")
        assert "Alpine" in runtime.registered

    def test_name_collision_surfaces_registration_error(self, runtime, make_file):
        path = make_file("rootfs.tar", b"tar")
        install_tar(runtime, "Alpine", path)
        with pytest.raises(RegistrationError, match="already registered"):
            install_tar(runtime, "Alpine", path)

    def test_runtime_error_unchanged(self, runtime, make_file):
        original = RegistrationError("HRESULT 0x80070005")
        runtime.fail_on["register"] = original
        with pytest.raises(RegistrationError) as excinfo:
            install_tar(runtime, "Alpine", make_file("rootfs.tar", b"tar"))
        assert excinfo.value is original

    def test_os_error_wrapped(self, runtime, make_file):
        runtime.fail_on["register"] = PermissionError("access denied")
        with pytest.raises(RegistrationError, match="access denied"):
            install_tar(runtime, "Alpine", make_file("rootfs.tar", b"tar"))

    def test_string_path_not_normalized(self, runtime, make_file, tmp_path, monkeypatch):
        make_file("rootfs.tar", b"tar")
        monkeypatch.chdir(tmp_path)
        install_tar(runtime, "Alpine", "./artifacts//rootfs.tar")
        assert runtime.register_args["Alpine"] == "./artifacts//rootfs.tar"
