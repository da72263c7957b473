"""User-facing progress output for the install pipeline.

All terminal output goes through a Rich ``Console``. When progress is
disabled every method is a no-op, so pipeline code can report
unconditionally.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    TimeRemainingColumn,
    TransferSpeedColumn,
)


class ProgressReporter:
    """Prints install progress lines and renders the download bar.

    Parameters
    ----------
    console:
        Console to print to. A default console if omitted.
    enabled:
        When False nothing is printed.
    """

    def __init__(self, console: Console | None = None, enabled: bool = True) -> None:
        self.console = console or Console()
        self.enabled = enabled

    def info(self, message: str) -> None:
        if self.enabled:
            self.console.print(message, highlight=False)

    def digest(self, hex_digest: str) -> None:
        self.info(f"Checksum(SHA256): {hex_digest}")

    @contextmanager
    def download_progress(
        self, total: int | None, description: str = "Downloading"
    ) -> Iterator[Callable[[int], None]]:
        """Yield an ``advance(n_bytes)`` callback backed by a progress bar.

        ``total`` is the expected size in bytes, or None when the server did
        not send a Content-Length.
        """
        if not self.enabled:
            yield lambda _n: None
            return

        progress = Progress(
            "[progress.description]{task.description}",
            BarColumn(bar_width=35),
            DownloadColumn(),
            TransferSpeedColumn(),
            TimeRemainingColumn(),
            console=self.console,
            transient=False,
        )
        with progress:
            task_id = progress.add_task(description, total=total)
            yield lambda n: progress.advance(task_id, n)


# Silent reporter for library callers that do not want output
NULL_REPORTER = ProgressReporter(enabled=False)
