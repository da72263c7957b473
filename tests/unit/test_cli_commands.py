"""Unit tests for the CLI — Typer command registration and install behavior."""

from __future__ import annotations

import hashlib

import pytest
from typer.testing import CliRunner

from distrolauncher import __version__
from distrolauncher.cli.app import app
from distrolauncher.core.errors import RuntimeUnavailableError

runner = CliRunner()


@pytest.fixture
def patched_runtime(runtime, monkeypatch):
    """Route the install command to the in-memory runtime."""
    monkeypatch.setattr(
        "distrolauncher.cli.commands.install_cmd.get_runtime", lambda: runtime
    )
    return runtime


# ---------------------------------------------------------------------------
# Test: CLI help and registration
# ---------------------------------------------------------------------------


class TestCliApp:
    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "install" in result.output
        assert "version" in result.output

    def test_install_command_exists(self):
        result = runner.invoke(app, ["install", "--help"])
        assert result.exit_code == 0
        assert "--sha256" in result.output

    def test_version_command(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"version {__version__}" in result.output


# ---------------------------------------------------------------------------
# Test: install command
# ---------------------------------------------------------------------------


class TestInstallCommand:
    def test_tar_install(self, patched_runtime, make_file):
        path = make_file("rootfs.tar.gz", b"archive")
        result = runner.invoke(app, ["install", str(path), "--name", "Alpine"])
        assert result.exit_code == 0, result.output
        assert "Alpine" in patched_runtime.registered
        assert "Installing..." in result.output

    def test_checksum_mismatch_exits_nonzero(self, patched_runtime, make_file):
        path = make_file("rootfs.tar", b"archive")
        result = runner.invoke(
            app, ["install", str(path), "-n", "Alpine", "--sha256", "00" * 32]
        )
        assert result.exit_code == 1
        assert "Verification failed" in result.output
        assert patched_runtime.calls == []

    def test_matching_checksum(self, patched_runtime, make_file):
        data = b"archive"
        path = make_file("rootfs.tar", data)
        digest = hashlib.sha256(data).hexdigest()
        result = runner.invoke(
            app, ["install", str(path), "-n", "Alpine", "--sha256", digest.upper()]
        )
        assert result.exit_code == 0, result.output
        assert digest in result.output

    def test_missing_artifact(self, patched_runtime, tmp_path):
        result = runner.invoke(
            app, ["install", str(tmp_path / "nope.tar"), "-n", "Alpine", "--no-progress"]
        )
        assert result.exit_code == 1
        assert "Acquisition failed" in result.output

    def test_name_collision(self, patched_runtime, make_file):
        path = make_file("rootfs.tar", b"archive")
        runner.invoke(app, ["install", str(path), "-n", "Alpine"])
        result = runner.invoke(app, ["install", str(path), "-n", "Alpine"])
        assert result.exit_code == 1
        assert "Registration failed" in result.output

    def test_no_progress_is_quiet(self, patched_runtime, make_file):
        path = make_file("rootfs.tar", b"archive")
        result = runner.invoke(app, ["install", str(path), "-n", "Alpine", "--no-progress"])
        assert result.exit_code == 0
        assert result.output.strip() == ""

    def test_runtime_unavailable(self, monkeypatch, make_file):
        def unavailable():
            raise RuntimeUnavailableError("WSL is only available on Windows")

        monkeypatch.setattr(
            "distrolauncher.cli.commands.install_cmd.get_runtime", unavailable
        )
        path = make_file("rootfs.tar", b"archive")
        result = runner.invoke(app, ["install", str(path), "-n", "Alpine"])
        assert result.exit_code == 1
        assert "Runtime failed" in result.output

    def test_default_source_from_locator(self, patched_runtime, make_file, monkeypatch):
        path = make_file("install.tar", b"archive")
        monkeypatch.setattr(
            "distrolauncher.cli.commands.install_cmd.locate_default_artifact",
            lambda: str(path),
        )
        result = runner.invoke(app, ["install", "-n", "Alpine"])
        assert result.exit_code == 0, result.output
        assert patched_runtime.registered_archives["Alpine"][0] == path

    def test_blank_name_is_usage_error(self, patched_runtime, make_file):
        path = make_file("rootfs.tar", b"archive")
        result = runner.invoke(app, ["install", str(path), "-n", " "])
        assert result.exit_code == 2
        assert isinstance(result.exception, SystemExit)
        assert "must not be empty" in result.output
        assert patched_runtime.calls == []
