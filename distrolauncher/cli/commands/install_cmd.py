"""``distrolauncher install [SOURCE]`` — install a root filesystem image.

SOURCE is a local file or an http(s) URL. Without SOURCE the default
artifact names are searched for next to the launcher executable.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from distrolauncher.config import config
from distrolauncher.core.errors import InstallError
from distrolauncher.core.locator import default_distribution_name, locate_default_artifact
from distrolauncher.core.pipeline import install
from distrolauncher.models.install import InstallRequest
from distrolauncher.runtime import get_runtime

console = Console()


def install_cmd(
    source: str = typer.Argument(
        None,
        help="Root filesystem archive, ext4.vhdx(.gz) image, or http(s) URL.",
        show_default=False,
    ),
    name: str = typer.Option(
        None,
        "--name",
        "-n",
        help="Distribution name. Defaults to the launcher's own name.",
    ),
    sha256: str = typer.Option(
        None,
        "--sha256",
        help="Expected SHA-256 of the artifact (hex).",
    ),
    progress: bool = typer.Option(
        True,
        "--progress/--no-progress",
        help="Show progress output.",
    ),
) -> None:
    """Install a root filesystem as a new distribution instance."""
    distribution_name = name or config.default_distribution_name or default_distribution_name()
    if not distribution_name.strip():
        raise typer.BadParameter("must not be empty", param_hint="'--name'")
    source_location = source or locate_default_artifact()

    try:
        request = InstallRequest(
            distribution_name=distribution_name,
            source_location=source_location,
            expected_digest=sha256,
            show_progress=progress,
        )
        result = install(request, get_runtime(), settings=config, console=console)
    except InstallError as exc:
        console.print(f"[bold red]{exc.stage.capitalize()} failed:[/bold red] {exc}")
        raise typer.Exit(code=1)

    if not progress:
        return

    lines = [
        "[bold green]Installation complete![/bold green]",
        "",
        f"[bold]Distribution:[/bold]  {result.distribution_name}",
        f"[bold]Strategy:[/bold]      {result.strategy.value}",
    ]
    if result.artifact_digest:
        lines.append(f"[bold]SHA-256:[/bold]       {result.artifact_digest}")
    if result.base_path:
        lines.append(f"[bold]Base path:[/bold]     {result.base_path}")

    console.print()
    console.print(
        Panel(
            "\n".join(lines),
            title="[bold]distrolauncher[/bold]",
            border_style="green",
            padding=(1, 2),
        )
    )
