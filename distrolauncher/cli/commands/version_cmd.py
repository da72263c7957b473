"""``distrolauncher version`` — print version information."""

from __future__ import annotations

import platform

from rich.console import Console

from distrolauncher import __url__, __version__

console = Console()


def version_cmd() -> None:
    """Print the launcher name, version and machine architecture."""
    console.print(
        f"distrolauncher, version {__version__}  ({platform.machine()})",
        highlight=False,
    )
    console.print(__url__, highlight=False)
