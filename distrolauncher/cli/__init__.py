"""distrolauncher CLI — Typer-based command-line interface.

Provides the ``distrolauncher`` command with ``install`` and ``version``
subcommands. All output uses Rich for formatted terminal display.
"""
