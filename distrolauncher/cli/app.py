"""Main Typer application — imports and registers all CLI commands.

Entry point: ``distrolauncher`` (configured via pyproject.toml scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.logging import RichHandler

from distrolauncher.cli.commands.install_cmd import install_cmd
from distrolauncher.cli.commands.version_cmd import version_cmd
from distrolauncher.config import config

app = typer.Typer(
    name="distrolauncher",
    help="Install Linux root filesystem images as WSL distributions.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="install", help="Install a distribution from a rootfs archive or disk image.")(install_cmd)
app.command(name="version", help="Show version information.")(version_cmd)


def configure_logging(level: str | None = None) -> None:
    """Route log records through Rich at ``level`` (``config.log_level`` by default)."""
    logging.basicConfig(
        level=(level or config.log_level).upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def main() -> None:
    """CLI entry point."""
    configure_logging()
    app()


if __name__ == "__main__":
    main()
